"""
Services - AI Validator

Entry point of the validation pipeline:
Classify → (short-circuit | fan-out checks) → fuse confidence → warnings → threshold
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import List, Optional

from ai_validator.config import get_settings
from ai_validator.exceptions import AIValidatorError, ValidationError
from ai_validator.schemas import (
    AccuracyResult,
    ContextResult,
    HallucinationResult,
    Source,
    ValidationInput,
    ValidationResult,
    NEUTRAL_ACCURACY,
    NEUTRAL_CONTEXT,
    NEUTRAL_HALLUCINATION,
    FAILED_ACCURACY,
    FAILED_CONTEXT,
    FAILED_HALLUCINATION,
)
from ai_validator.services.accuracy_checker import AccuracyChecker
from ai_validator.services.confidence_scorer import ConfidenceScorer, EnabledChecks
from ai_validator.services.context_validator import ContextValidator
from ai_validator.services.hallucination_detector import HallucinationDetector
from ai_validator.services.query_classifier import QueryClassifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidatorCapabilities:
    """Checks resolved once at construction; consulted on every request."""
    query_classification: bool
    context_validation: bool
    llm_judge: bool
    accuracy: bool
    hallucination: bool
    developer_mode: bool
    provider: str
    model: str
    confidence_threshold: float

    @property
    def enabled_checks(self) -> EnabledChecks:
        return EnabledChecks(accuracy=self.accuracy, hallucination=self.hallucination)


def resolve_capabilities(settings) -> ValidatorCapabilities:
    """
    Turn settings into capabilities, forcing off features whose
    credential is missing. Never raises for missing credentials.
    """
    validation = settings.validation
    llm = settings.llm
    provider_key = llm.api_key_for(llm.provider)

    use_llm_judge = validation.use_llm_judge
    if use_llm_judge and not llm.has_any_api_key:
        logger.warning("LLM Judge enabled but no API key provided. Falling back to rule-based validation.")
        use_llm_judge = False

    accuracy = validation.enable_accuracy_check
    if accuracy and not provider_key:
        logger.warning("Accuracy check enabled but no %s API key provided. Disabling accuracy check.", llm.provider)
        accuracy = False

    hallucination = validation.enable_hallucination_detection
    if hallucination and not provider_key:
        logger.warning(
            "Hallucination detection enabled but no %s API key provided. Disabling hallucination detection.",
            llm.provider,
        )
        hallucination = False

    return ValidatorCapabilities(
        query_classification=validation.enable_query_classification,
        context_validation=validation.enable_context_validation,
        llm_judge=use_llm_judge,
        accuracy=accuracy,
        hallucination=hallucination,
        developer_mode=validation.developer_mode,
        provider=llm.provider,
        model=llm.model_for(llm.provider),
        confidence_threshold=validation.confidence_threshold,
    )


class AIValidator:
    """
    Grades an AI-generated answer against the sources used to produce it.

    validate() never raises. A failure in the accuracy or hallucination
    check aborts the whole request into a fail-closed result (confidence 0),
    while the context check absorbs LLM judge failures internally and falls
    back to word matching.
    """

    def __init__(
        self,
        settings=None,
        query_classifier: Optional[QueryClassifier] = None,
        accuracy_checker: Optional[AccuracyChecker] = None,
        hallucination_detector: Optional[HallucinationDetector] = None,
        context_validator: Optional[ContextValidator] = None,
        confidence_scorer: Optional[ConfidenceScorer] = None,
    ):
        self.settings = settings or get_settings()
        self.capabilities = resolve_capabilities(self.settings)

        self.query_classifier = query_classifier or QueryClassifier()
        self.accuracy_checker = accuracy_checker or AccuracyChecker(self.settings)
        self.hallucination_detector = hallucination_detector or HallucinationDetector(self.settings)
        self.confidence_scorer = confidence_scorer or ConfidenceScorer()
        self.context_validator = context_validator or ContextValidator(
            self.settings,
            use_llm_judge=self.capabilities.llm_judge,
        )

    async def validate(self, validation_input: ValidationInput) -> ValidationResult:
        """
        Validate a response against its sources.

        Args:
            validation_input: Query, response and sources

        Returns:
            ValidationResult; fail-closed on any internal error
        """
        try:
            return await self._validate(validation_input)
        except Exception as e:
            return self._fail_closed(e)

    async def _validate(self, validation_input: ValidationInput) -> ValidationResult:
        caps = self.capabilities
        query_type = None

        if caps.query_classification:
            classification = self.query_classifier.classify(validation_input.query)
            query_type = classification.type
            if classification.skip_validation:
                logger.debug("Skipping validation for %s query", classification.type)
                return ValidationResult(
                    confidence=1.0,
                    valid=True,
                    accuracy=NEUTRAL_ACCURACY,
                    context=NEUTRAL_CONTEXT,
                    hallucination=NEUTRAL_HALLUCINATION,
                    warnings=[],
                    query_type=classification.type,
                    skip_validation=True,
                )

        accuracy, context, hallucination = await self._run_checks(validation_input)

        confidence = self.confidence_scorer.calculate_confidence(
            accuracy,
            context,
            hallucination,
            validation_input.sources,
            caps.enabled_checks,
        )

        return ValidationResult(
            confidence=confidence.confidence_score,
            valid=confidence.confidence_score >= caps.confidence_threshold,
            accuracy=accuracy,
            context=context,
            hallucination=hallucination,
            warnings=self.generate_warnings(accuracy, context, hallucination, validation_input.sources),
            query_type=query_type,
            skip_validation=False if query_type else None,
        )

    async def _run_checks(self, validation_input: ValidationInput):
        """
        Run the three checks concurrently. The first exception aborts the
        join; the remaining checks are cancelled and drained before it
        propagates.
        """
        tasks = [
            asyncio.ensure_future(self._check_accuracy(validation_input)),
            asyncio.ensure_future(self._check_context(validation_input)),
            asyncio.ensure_future(self._check_hallucination(validation_input)),
        ]
        try:
            return await asyncio.gather(*tasks)
        except Exception:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def _check_accuracy(self, validation_input: ValidationInput) -> AccuracyResult:
        if not self.capabilities.accuracy:
            return NEUTRAL_ACCURACY
        return await self.accuracy_checker.check(
            validation_input.response,
            validation_input.sources,
            self.capabilities.provider,
            self.capabilities.model,
        )

    async def _check_context(self, validation_input: ValidationInput) -> ContextResult:
        if not self.capabilities.context_validation:
            return NEUTRAL_CONTEXT
        return await self.context_validator.validate_context(
            validation_input.query,
            validation_input.response,
            validation_input.sources,
        )

    async def _check_hallucination(self, validation_input: ValidationInput) -> HallucinationResult:
        if not self.capabilities.hallucination:
            return NEUTRAL_HALLUCINATION
        return await self.hallucination_detector.detect(
            validation_input.response,
            validation_input.sources,
            self.capabilities.provider,
            self.capabilities.model,
        )

    def generate_warnings(
        self,
        accuracy: AccuracyResult,
        context: ContextResult,
        hallucination: HallucinationResult,
        sources: List[Source],
    ) -> List[str]:
        warnings = []

        if not sources:
            warnings.append("No sources provided - high hallucination risk")
        if accuracy.verification_rate < 0.5:
            warnings.append("Low accuracy verification rate")
        if context.source_relevance < 0.3:
            warnings.append("Low context relevance")
        if hallucination.risk > 0.5:
            warnings.append("High hallucination risk detected")
        if hallucination.detected:
            warnings.append("Hallucination detected in response")

        return warnings

    def _fail_closed(self, error: Exception) -> ValidationResult:
        message = str(error) or "unknown error"
        if not isinstance(error, AIValidatorError):
            error = ValidationError(message, details={"type": type(error).__name__})
        logger.error("Validation failed: %s", error.to_dict(), exc_info=True)

        return ValidationResult(
            confidence=0.0,
            valid=False,
            accuracy=FAILED_ACCURACY,
            context=FAILED_CONTEXT,
            hallucination=FAILED_HALLUCINATION,
            warnings=[f"Validation failed: {message}"],
        )
