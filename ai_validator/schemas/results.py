"""
Schemas - Validation Results

Pydantic models for per-check results, fused confidence and the final
validation record, plus the neutral defaults substituted for disabled checks.
"""

from pydantic import BaseModel, Field
from typing import List, Literal, Optional


class AccuracyResult(BaseModel):
    """Claim verification against sources."""
    verified: bool
    verification_rate: float = Field(ge=0.0, le=1.0)
    reason: Optional[str] = None

    model_config = {"frozen": True}


class ContextResult(BaseModel):
    """How well the response is grounded in, and uses, the sources."""
    source_relevance: float = Field(ge=0.0, le=1.0)
    source_usage_rate: float = Field(ge=0.0, le=1.0)
    valid: bool

    model_config = {"frozen": True}


class HallucinationResult(BaseModel):
    """Invented-content detection."""
    detected: bool
    risk: float = Field(ge=0.0, le=1.0)
    hallucinated_parts: Optional[List[str]] = None

    model_config = {"frozen": True}


class ConfidenceBreakdown(BaseModel):
    """Per-signal scores, each rounded to 2 decimals."""
    accuracy_score: float = Field(ge=0.0, le=1.0)
    context_score: float = Field(ge=0.0, le=1.0)
    hallucination_score: float = Field(ge=0.0, le=1.0)
    source_quality: float = Field(ge=0.0, le=1.0)


class ConfidenceResult(BaseModel):
    """Fused confidence score."""
    confidence_score: float = Field(ge=0.0, le=1.0)
    level: Literal["high", "medium", "low"]
    breakdown: ConfidenceBreakdown


class ValidationResult(BaseModel):
    """Final verdict returned to callers."""
    confidence: float = Field(ge=0.0, le=1.0)
    valid: bool
    accuracy: AccuracyResult
    context: ContextResult
    hallucination: HallucinationResult
    warnings: List[str] = []
    query_type: Optional[str] = None
    skip_validation: Optional[bool] = None


# Substituted for checks that are switched off
NEUTRAL_ACCURACY = AccuracyResult(verified=True, verification_rate=1.0)
NEUTRAL_CONTEXT = ContextResult(source_relevance=1.0, source_usage_rate=1.0, valid=True)
NEUTRAL_HALLUCINATION = HallucinationResult(detected=False, risk=0.0)

# Zero sources: nothing to be relevant to
EMPTY_CONTEXT = ContextResult(source_relevance=0.0, source_usage_rate=0.0, valid=False)

# Returned by the semantic grader when its verdict cannot be parsed
UNPARSED_CONTEXT = ContextResult(source_relevance=0.5, source_usage_rate=0.5, valid=False)

# Fail-closed values used when validation itself errors
FAILED_ACCURACY = AccuracyResult(verified=False, verification_rate=0.0, reason="validation_error")
FAILED_CONTEXT = ContextResult(source_relevance=0.0, source_usage_rate=0.0, valid=False)
FAILED_HALLUCINATION = HallucinationResult(detected=True, risk=1.0)
