"""
Unit Tests for AIValidator
"""

import asyncio
import logging

import pytest
from unittest.mock import AsyncMock, MagicMock

from ai_validator.exceptions import ProviderError
from ai_validator.schemas import (
    AccuracyResult,
    ContextResult,
    HallucinationResult,
    Source,
    ValidationInput,
)
from ai_validator.services import AIValidator, QueryClassifier
from ai_validator.services.validator import resolve_capabilities


BILLING_SOURCE = Source(
    content="The billing service computes monthly invoices from usage records stored in postgres. " * 8,
    title="billing.md",
)


def mock_check(method: str, **kwargs):
    check = MagicMock()
    setattr(check, method, AsyncMock(**kwargs))
    return check


class TestCapabilities:
    """Tests for construction-time toggle resolution."""

    def test_defaults(self, make_settings):
        """Classification and context on, LLM checks off."""
        caps = resolve_capabilities(make_settings())

        assert caps.query_classification is True
        assert caps.context_validation is True
        assert caps.llm_judge is False
        assert caps.accuracy is False
        assert caps.hallucination is False
        assert caps.confidence_threshold == 0.7
        assert caps.model == "gpt-4o-mini"

    def test_toggles_forced_off_without_keys(self, make_settings, caplog):
        """Missing credentials disable features with a warning, never raise."""
        settings = make_settings(
            use_llm_judge=True,
            enable_accuracy_check=True,
            enable_hallucination_detection=True,
        )

        with caplog.at_level(logging.WARNING):
            validator = AIValidator(settings)

        caps = validator.capabilities
        assert (caps.llm_judge, caps.accuracy, caps.hallucination) == (False, False, False)
        assert "Disabling accuracy check" in caplog.text
        assert "Disabling hallucination detection" in caplog.text
        assert "LLM Judge enabled but no API key" in caplog.text

    def test_llm_checks_need_configured_provider_key(self, make_settings):
        """Accuracy and hallucination need the configured provider's key."""
        caps = resolve_capabilities(make_settings(
            provider="claude",
            openai_api_key="sk-o",
            use_llm_judge=True,
            enable_accuracy_check=True,
            enable_hallucination_detection=True,
        ))

        assert caps.llm_judge is True
        assert caps.accuracy is False
        assert caps.hallucination is False

    def test_llm_checks_enabled_with_key(self, make_settings):
        """Keys for the configured provider keep the checks on."""
        caps = resolve_capabilities(make_settings(
            provider="claude",
            claude_api_key="sk-c",
            enable_accuracy_check=True,
            enable_hallucination_detection=True,
        ))

        assert caps.accuracy is True
        assert caps.hallucination is True
        assert caps.model == "claude-3-haiku-20240307"
        assert caps.enabled_checks.accuracy is True


class TestShortCircuit:
    """Tests for query classification short-circuit."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("query", ["hello", "Hi there!", "thanks", "k"])
    async def test_skips_validation(self, make_settings, query):
        """Greetings, small talk and typos always pass."""
        validator = AIValidator(make_settings())

        result = await validator.validate(ValidationInput(query=query, response="anything", sources=[]))

        assert result.confidence == 1.0
        assert result.valid is True
        assert result.warnings == []
        assert result.skip_validation is True
        assert result.query_type in ("greeting", "small_talk", "typo")
        assert result.hallucination.risk == 0
        assert result.context.source_relevance == 1.0

    @pytest.mark.asyncio
    async def test_checks_not_invoked_on_skip(self, make_settings):
        """Nothing downstream runs for a skipped query."""
        context = mock_check("validate_context")
        validator = AIValidator(make_settings(), context_validator=context)

        await validator.validate(ValidationInput(query="hey", response="r", sources=[BILLING_SOURCE]))

        context.validate_context.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_greeting_prefixed_question_is_scored(self, make_settings):
        """A question that opens with a greeting still goes through the checks."""
        validator = AIValidator(make_settings())

        result = await validator.validate(ValidationInput(
            query="Hi, what is refunds?",
            response="Refunds are issued within 365 days to any crypto wallet.",
            sources=[Source(content="Refunds are only issued within 14 days to the original card.", title="refunds.md")],
        ))

        assert result.skip_validation is False
        assert result.query_type == "question"
        assert result.context.source_relevance == pytest.approx(4 / 6)
        assert result.confidence < 1.0

    @pytest.mark.asyncio
    async def test_classification_disabled(self, make_settings):
        """With classification off a greeting goes through scoring."""
        validator = AIValidator(make_settings(enable_query_classification=False))

        result = await validator.validate(ValidationInput(query="hello", response="hi", sources=[]))

        assert result.skip_validation is None
        assert result.query_type is None
        assert result.valid is False


class TestEndToEnd:
    """End-to-end scenarios."""

    @pytest.mark.asyncio
    async def test_no_sources_all_llm_checks_off(self, make_settings):
        """Zero sources: context 0 and source quality 0 give confidence 0."""
        validator = AIValidator(make_settings())

        result = await validator.validate(ValidationInput(
            query="What does the billing service do?",
            response="It computes invoices.",
            sources=[],
        ))

        assert result.confidence == 0.0
        assert result.valid is False
        assert result.context.source_relevance == 0
        assert result.context.valid is False
        assert "No sources provided - high hallucination risk" in result.warnings
        assert "Low context relevance" in result.warnings
        assert result.query_type == "question"
        assert result.skip_validation is False

    @pytest.mark.asyncio
    async def test_single_good_source_lexical(self, make_settings):
        """Relevance 0.9 and quality 1.0 give 0.94 with default threshold."""
        validator = AIValidator(make_settings())

        result = await validator.validate(ValidationInput(
            query="How does the billing service compute invoices?",
            response="billing service computes monthly invoices from usage records stored elsewhere",
            sources=[BILLING_SOURCE],
        ))

        assert result.context.source_relevance == pytest.approx(0.9)
        assert result.confidence == pytest.approx(0.94)
        assert result.valid is True
        assert result.warnings == []

        breakdown = validator.confidence_scorer.calculate_confidence(
            result.accuracy, result.context, result.hallucination, [BILLING_SOURCE],
            validator.capabilities.enabled_checks,
        )
        assert breakdown.level == "high"
        assert breakdown.breakdown.source_quality == 1.0

    @pytest.mark.asyncio
    async def test_all_checks_enabled_low_scores(self, make_settings):
        """All four signals weak: low confidence with three warnings."""
        accuracy = mock_check("check", return_value=AccuracyResult(verified=False, verification_rate=0.2))
        hallucination = mock_check(
            "detect",
            return_value=HallucinationResult(detected=True, risk=0.8, hallucinated_parts=["made up"]),
        )
        context = mock_check(
            "validate_context",
            return_value=ContextResult(source_relevance=0.2, source_usage_rate=0.1, valid=False),
        )
        validator = AIValidator(
            make_settings(
                openai_api_key="sk-o",
                use_llm_judge=True,
                enable_accuracy_check=True,
                enable_hallucination_detection=True,
            ),
            accuracy_checker=accuracy,
            hallucination_detector=hallucination,
            context_validator=context,
        )
        sources = [Source(content="short")]

        result = await validator.validate(ValidationInput(query="Why?", response="r", sources=sources))

        # 0.2*0.35 + 0.2*0.25 + 0.2*0.30 + 0.5*0.10
        assert result.confidence == pytest.approx(0.23)
        assert result.valid is False
        assert "Low accuracy verification rate" in result.warnings
        assert "Low context relevance" in result.warnings
        assert "High hallucination risk detected" in result.warnings
        assert "Hallucination detected in response" in result.warnings
        assert result.hallucination.hallucinated_parts == ["made up"]

        accuracy.check.assert_awaited_once_with("r", sources, "openai", "gpt-4o-mini")
        hallucination.detect.assert_awaited_once_with("r", sources, "openai", "gpt-4o-mini")

        level = validator.confidence_scorer.calculate_confidence(
            result.accuracy, result.context, result.hallucination, sources,
            validator.capabilities.enabled_checks,
        ).level
        assert level == "low"


class TestFanOut:
    """Tests for check dispatch and neutral defaults."""

    @pytest.mark.asyncio
    async def test_disabled_checks_not_invoked(self, make_settings):
        """Disabled checks return neutral defaults without being called."""
        accuracy = mock_check("check")
        hallucination = mock_check("detect")
        context = mock_check("validate_context")
        validator = AIValidator(
            make_settings(enable_context_validation=False),
            accuracy_checker=accuracy,
            hallucination_detector=hallucination,
            context_validator=context,
        )

        result = await validator.validate(ValidationInput(
            query="What is billing?", response="r", sources=[BILLING_SOURCE]
        ))

        accuracy.check.assert_not_awaited()
        hallucination.detect.assert_not_awaited()
        context.validate_context.assert_not_awaited()
        assert result.accuracy.verification_rate == 1.0
        assert result.accuracy.verified is True
        assert result.context.source_relevance == 1.0
        assert result.hallucination.detected is False
        # 1.0 * 0.6 + 1.0 * 0.4
        assert result.confidence == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_threshold_applied(self, make_settings):
        """valid compares the rounded score with the threshold."""
        validator = AIValidator(make_settings(confidence_threshold=0.95))

        result = await validator.validate(ValidationInput(
            query="How does the billing service compute invoices?",
            response="billing service computes monthly invoices from usage records stored elsewhere",
            sources=[BILLING_SOURCE],
        ))

        assert result.confidence == pytest.approx(0.94)
        assert result.valid is False

    @pytest.mark.asyncio
    async def test_validator_reusable(self, make_settings):
        """Calls do not share state."""
        validator = AIValidator(make_settings())
        first = await validator.validate(ValidationInput(query="What?", response="x", sources=[]))
        second = await validator.validate(ValidationInput(
            query="How does the billing service compute invoices?",
            response="billing service computes monthly invoices from usage records stored elsewhere",
            sources=[BILLING_SOURCE],
        ))

        assert first.valid is False
        assert second.valid is True


class TestFailClosed:
    """Tests for the fail-closed path."""

    @pytest.mark.asyncio
    async def test_accuracy_failure_fails_closed(self, make_settings):
        """A raising collaborator aborts to confidence 0."""
        accuracy = mock_check("check", side_effect=ProviderError("upstream 503"))
        validator = AIValidator(
            make_settings(openai_api_key="sk-o", enable_accuracy_check=True),
            accuracy_checker=accuracy,
        )

        result = await validator.validate(ValidationInput(
            query="What is billing?", response="r", sources=[BILLING_SOURCE]
        ))

        assert result.confidence == 0
        assert result.valid is False
        assert result.accuracy.verified is False
        assert result.accuracy.verification_rate == 0
        assert result.accuracy.reason == "validation_error"
        assert result.context.source_relevance == 0
        assert result.context.valid is False
        assert result.hallucination.detected is True
        assert result.hallucination.risk == 1.0
        assert result.warnings == ["Validation failed: upstream 503"]

    @pytest.mark.asyncio
    async def test_hallucination_failure_fails_closed(self, make_settings):
        """Any enabled check raising aborts the whole call."""
        hallucination = mock_check("detect", side_effect=RuntimeError("boom"))
        validator = AIValidator(
            make_settings(openai_api_key="sk-o", enable_hallucination_detection=True),
            hallucination_detector=hallucination,
        )

        result = await validator.validate(ValidationInput(
            query="What is billing?", response="r", sources=[BILLING_SOURCE]
        ))

        assert result.valid is False
        assert result.warnings == ["Validation failed: boom"]

    @pytest.mark.asyncio
    async def test_sibling_checks_cancelled(self, make_settings):
        """A failing check cancels the checks still in flight."""
        finished = asyncio.Event()
        cancelled = []

        async def slow_detect(*args):
            try:
                await asyncio.sleep(10)
            except asyncio.CancelledError:
                cancelled.append(True)
                raise
            finished.set()

        accuracy = mock_check("check", side_effect=ProviderError("upstream 503"))
        hallucination = mock_check("detect", side_effect=slow_detect)
        validator = AIValidator(
            make_settings(
                openai_api_key="sk-o",
                enable_accuracy_check=True,
                enable_hallucination_detection=True,
            ),
            accuracy_checker=accuracy,
            hallucination_detector=hallucination,
        )

        result = await validator.validate(ValidationInput(
            query="What is billing?", response="r", sources=[BILLING_SOURCE]
        ))

        assert result.warnings == ["Validation failed: upstream 503"]
        assert cancelled == [True]
        assert not finished.is_set()

    @pytest.mark.asyncio
    async def test_error_without_message(self, make_settings):
        """Empty exception messages still produce a warning."""
        classifier = MagicMock(spec=QueryClassifier)
        classifier.classify.side_effect = ValueError()
        validator = AIValidator(make_settings(), query_classifier=classifier)

        result = await validator.validate(ValidationInput(query="q", response="r", sources=[]))

        assert result.confidence == 0
        assert result.warnings == ["Validation failed: unknown error"]

    @pytest.mark.asyncio
    async def test_failure_is_logged(self, make_settings, caplog):
        """Fail-closed conversion is logged as an error."""
        context = mock_check("validate_context", side_effect=KeyError("missing"))
        validator = AIValidator(make_settings(), context_validator=context)

        with caplog.at_level(logging.ERROR):
            await validator.validate(ValidationInput(query="What?", response="r", sources=[]))

        assert "Validation failed" in caplog.text
        assert "VALIDATION_ERROR" in caplog.text
