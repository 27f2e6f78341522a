"""
Schemas - Source Models

Pydantic models for retrieved sources and validation input.
"""

from pydantic import BaseModel
from typing import List, Optional


class Source(BaseModel):
    """Retrieved document the response was supposedly built from."""
    content: str
    title: Optional[str] = None
    url: Optional[str] = None
    id: Optional[str] = None
    embedding: Optional[List[float]] = None

    model_config = {"frozen": True}

    @property
    def label(self) -> str:
        return self.title or self.id or "untitled"


class ValidationInput(BaseModel):
    """One validation request."""
    query: str
    response: str
    sources: List[Source] = []
