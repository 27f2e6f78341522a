"""
Tools Module - MCP Tool Implementations
"""

from ai_validator.tools import validate_answer

__all__ = [
    "validate_answer",
]
