"""
Schemas - Query Classification

Result of the greeting/small-talk short-circuit classifier.
"""

from pydantic import BaseModel, Field
from typing import Literal


QueryType = Literal["greeting", "typo", "small_talk", "question", "command", "clarification"]


class QueryClassificationResult(BaseModel):
    """Classifier verdict for a single query."""
    type: QueryType
    confidence: float = Field(ge=0.0, le=1.0)
    skip_validation: bool
