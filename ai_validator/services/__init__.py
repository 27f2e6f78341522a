"""
Services Module - Validation Logic Layer

Provides query classification, the accuracy/context/hallucination checks,
confidence fusion and the AIValidator entry point.
"""

from ai_validator.services.query_classifier import QueryClassifier
from ai_validator.services.accuracy_checker import AccuracyChecker
from ai_validator.services.hallucination_detector import HallucinationDetector
from ai_validator.services.llm_judge import LLMJudge
from ai_validator.services.context_validator import ContextValidator
from ai_validator.services.confidence_scorer import ConfidenceScorer, EnabledChecks
from ai_validator.services.validator import AIValidator, ValidatorCapabilities

__all__ = [
    "QueryClassifier",
    "AccuracyChecker",
    "HallucinationDetector",
    "LLMJudge",
    "ContextValidator",
    "ConfidenceScorer",
    "EnabledChecks",
    "AIValidator",
    "ValidatorCapabilities",
]
