"""
Services - Confidence Scorer

Fuses accuracy, context relevance, non-hallucination and source quality
into a single 0.0-1.0 confidence score with weights that follow which
LLM-backed checks are enabled.
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ai_validator.schemas import (
    AccuracyResult,
    ContextResult,
    HallucinationResult,
    ConfidenceBreakdown,
    ConfidenceResult,
    Source,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfidenceWeights:
    """Weight per signal. Each regime sums to 1.0."""
    accuracy: float
    context: float
    hallucination: float
    source_quality: float


@dataclass(frozen=True)
class EnabledChecks:
    """Which LLM-backed checks actually ran for this request."""
    accuracy: bool = True
    hallucination: bool = True


# (accuracy enabled, hallucination enabled) -> weights
WEIGHT_REGIMES: Dict[Tuple[bool, bool], ConfidenceWeights] = {
    (False, False): ConfidenceWeights(accuracy=0.0, context=0.60, hallucination=0.0, source_quality=0.40),
    (False, True): ConfidenceWeights(accuracy=0.0, context=0.35, hallucination=0.45, source_quality=0.20),
    (True, False): ConfidenceWeights(accuracy=0.50, context=0.30, hallucination=0.0, source_quality=0.20),
    (True, True): ConfidenceWeights(accuracy=0.35, context=0.25, hallucination=0.30, source_quality=0.10),
}


def round2(value: float) -> float:
    """Round half up to 2 decimals."""
    return math.floor(value * 100 + 0.5) / 100


def weights_for(enabled: EnabledChecks) -> ConfidenceWeights:
    return WEIGHT_REGIMES[(enabled.accuracy, enabled.hallucination)]


class ConfidenceScorer:
    """Combines independent 0-1 signals into one confidence score."""

    HIGH_THRESHOLD = 0.8
    MEDIUM_THRESHOLD = 0.5

    def calculate_confidence(
        self,
        accuracy: AccuracyResult,
        context: ContextResult,
        hallucination: HallucinationResult,
        sources: List[Source],
        enabled: Optional[EnabledChecks] = None,
    ) -> ConfidenceResult:
        """
        Calculate weighted confidence.

        A disabled check gets weight 0, so its score never enters the sum.

        Args:
            accuracy: Accuracy check result (or neutral default)
            context: Context relevance result
            hallucination: Hallucination result (or neutral default)
            sources: Sources the response was graded against
            enabled: Which LLM-backed checks ran (default: both)

        Returns:
            ConfidenceResult with score, level and rounded breakdown
        """
        weights = weights_for(enabled or EnabledChecks())

        accuracy_score = accuracy.verification_rate
        context_score = context.source_relevance
        hallucination_score = 1 - hallucination.risk
        source_quality_score = self.calculate_source_quality(sources)

        signals = [
            ("Accuracy", accuracy_score, weights.accuracy),
            ("Context", context_score, weights.context),
            ("Grounding", hallucination_score, weights.hallucination),
            ("Source Quality", source_quality_score, weights.source_quality),
        ]
        confidence = sum(score * weight for _, score, weight in signals if weight > 0)
        confidence = min(1.0, max(0.0, confidence))

        logger.info(
            "Confidence %.1f%% (%s)",
            confidence * 100,
            ", ".join(f"{name}: {score * 100:.0f}%" for name, score, weight in signals if weight > 0),
        )

        score = round2(confidence)
        return ConfidenceResult(
            confidence_score=score,
            level=self.level_for(score),
            breakdown=ConfidenceBreakdown(
                accuracy_score=round2(accuracy_score),
                context_score=round2(context_score),
                hallucination_score=round2(hallucination_score),
                source_quality=round2(source_quality_score),
            ),
        )

    def level_for(self, score: float) -> str:
        if score >= self.HIGH_THRESHOLD:
            return "high"
        elif score >= self.MEDIUM_THRESHOLD:
            return "medium"
        return "low"

    def calculate_source_quality(self, sources: List[Source]) -> float:
        """
        Heuristic source quality, independent of any LLM call.

        Base 0.5, +0.2 for content over 100 chars, +0.2 more over 500 chars,
        +0.1 for a non-empty title, capped at 1.0 and averaged.
        """
        if not sources:
            return 0.0

        total = 0.0
        for source in sources:
            quality = 0.5
            if len(source.content) > 100:
                quality += 0.2
            if len(source.content) > 500:
                quality += 0.2
            if source.title:
                quality += 0.1
            total += min(quality, 1.0)

        return total / len(sources)
