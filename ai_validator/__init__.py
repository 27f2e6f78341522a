"""
AI Validator

Scores AI-generated answers against the sources they were built from.
"""

from ai_validator.services import (
    AIValidator,
    AccuracyChecker,
    ConfidenceScorer,
    ContextValidator,
    HallucinationDetector,
    LLMJudge,
    QueryClassifier,
)
from ai_validator.schemas import (
    AccuracyResult,
    ConfidenceResult,
    ContextResult,
    HallucinationResult,
    QueryClassificationResult,
    Source,
    ValidationInput,
    ValidationResult,
)

__version__ = "0.1.0"

__all__ = [
    "AIValidator",
    "AccuracyChecker",
    "ConfidenceScorer",
    "ContextValidator",
    "HallucinationDetector",
    "LLMJudge",
    "QueryClassifier",
    "AccuracyResult",
    "ConfidenceResult",
    "ContextResult",
    "HallucinationResult",
    "QueryClassificationResult",
    "Source",
    "ValidationInput",
    "ValidationResult",
]
