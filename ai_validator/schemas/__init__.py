"""
Schemas Module - Pydantic Models

Data models for sources, classification and validation results.
"""

from ai_validator.schemas.source import Source, ValidationInput
from ai_validator.schemas.classification import QueryClassificationResult, QueryType
from ai_validator.schemas.results import (
    AccuracyResult,
    ContextResult,
    HallucinationResult,
    ConfidenceBreakdown,
    ConfidenceResult,
    ValidationResult,
    NEUTRAL_ACCURACY,
    NEUTRAL_CONTEXT,
    NEUTRAL_HALLUCINATION,
    EMPTY_CONTEXT,
    UNPARSED_CONTEXT,
    FAILED_ACCURACY,
    FAILED_CONTEXT,
    FAILED_HALLUCINATION,
)

__all__ = [
    "Source",
    "ValidationInput",
    "QueryClassificationResult",
    "QueryType",
    "AccuracyResult",
    "ContextResult",
    "HallucinationResult",
    "ConfidenceBreakdown",
    "ConfidenceResult",
    "ValidationResult",
    "NEUTRAL_ACCURACY",
    "NEUTRAL_CONTEXT",
    "NEUTRAL_HALLUCINATION",
    "EMPTY_CONTEXT",
    "UNPARSED_CONTEXT",
    "FAILED_ACCURACY",
    "FAILED_CONTEXT",
    "FAILED_HALLUCINATION",
]
