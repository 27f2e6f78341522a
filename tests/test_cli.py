"""
Unit Tests for the command line harness and MCP tool
"""

import json
from typing import Any, Dict, List, Optional, get_type_hints

import pytest
from unittest.mock import AsyncMock, patch

from ai_validator import cli
from ai_validator.schemas import (
    HallucinationResult,
    ValidationResult,
    NEUTRAL_ACCURACY,
    NEUTRAL_CONTEXT,
    FAILED_ACCURACY,
    FAILED_CONTEXT,
)
from ai_validator.tools import validate_answer


def passing_result(**overrides) -> ValidationResult:
    fields = dict(
        confidence=0.94,
        valid=True,
        accuracy=NEUTRAL_ACCURACY,
        context=NEUTRAL_CONTEXT,
        hallucination=HallucinationResult(detected=False, risk=0.0),
        warnings=[],
        query_type="question",
        skip_validation=False,
    )
    fields.update(overrides)
    return ValidationResult(**fields)


class TestArguments:
    """Tests for argument parsing and settings overrides."""

    def test_overrides(self, make_settings):
        """Flags override environment settings."""
        args = cli.build_parser().parse_args([
            "--query", "q", "--response", "r",
            "--provider", "claude", "--threshold", "0.9",
            "--no-classification", "--llm-judge", "--accuracy",
            "--hallucination", "--developer-mode",
        ])

        settings = cli.apply_overrides(make_settings(), args)

        assert settings.llm.provider == "claude"
        assert settings.validation.confidence_threshold == 0.9
        assert settings.validation.enable_query_classification is False
        assert settings.validation.enable_context_validation is True
        assert settings.validation.use_llm_judge is True
        assert settings.validation.enable_accuracy_check is True
        assert settings.validation.enable_hallucination_detection is True
        assert settings.validation.developer_mode is True

    def test_no_overrides(self, make_settings):
        """Without flags the settings are unchanged."""
        original = make_settings()
        args = cli.build_parser().parse_args(["--query", "q", "--response", "r"])

        settings = cli.apply_overrides(original, args)

        assert settings.validation == original.validation
        assert settings.llm.provider == "openai"

    def test_query_required(self):
        """Missing required arguments is a usage error."""
        with pytest.raises(SystemExit) as exc:
            cli.build_parser().parse_args(["--response", "r"])
        assert exc.value.code == 2


class TestFormatResult:
    """Tests for human-readable output."""

    def test_passing_result(self):
        text = cli.format_result(passing_result())

        assert "Confidence Score: 94.0%" in text
        assert "Valid: Yes" in text
        assert "Query Type: question" in text
        assert "can be shown to users" in text
        assert "Warnings:" not in text

    def test_failing_result(self):
        text = cli.format_result(passing_result(
            confidence=0.0,
            valid=False,
            accuracy=FAILED_ACCURACY,
            context=FAILED_CONTEXT,
            hallucination=HallucinationResult(detected=True, risk=1.0, hallucinated_parts=["invented API"]),
            warnings=["Validation failed: boom"],
            query_type=None,
        ))

        assert "Valid: No" in text
        assert "Accuracy: Not verified (0.0%)" in text
        assert "Hallucination Risk: 100.0% Detected" in text
        assert "  - Validation failed: boom" in text
        assert "  - invented API" in text
        assert "should be reviewed" in text

    def test_skipped_result(self):
        text = cli.format_result(passing_result(confidence=1.0, query_type="greeting", skip_validation=True))

        assert "Skip Validation: Yes" in text


class TestMain:
    """Tests for the CLI entry point."""

    def test_main_json_output(self, make_settings, capsys):
        """--json prints the raw result; exit code follows validity."""
        with patch.object(cli, "get_settings", return_value=make_settings()), \
                patch.object(cli, "configure_logging"):
            code = cli.main([
                "--query", "How does the billing service compute invoices?",
                "--response", "billing service computes monthly invoices",
                "--source", "The billing service computes monthly invoices from usage records.",
                "--json",
            ])

        output = json.loads(capsys.readouterr().out)
        assert code == 0
        assert output["valid"] is True
        assert output["context"]["source_relevance"] == 1.0

    def test_main_without_sources_fails(self, make_settings, capsys):
        """No sources scores zero and exits 1."""
        with patch.object(cli, "get_settings", return_value=make_settings()), \
                patch.object(cli, "configure_logging"):
            code = cli.main(["--query", "What is billing?", "--response", "It bills.", "--source", "  "])

        assert code == 1
        assert "No sources provided" in capsys.readouterr().out


class TestValidateAnswerTool:
    """Tests for the MCP tool."""

    @pytest.mark.asyncio
    async def test_returns_dict(self):
        """Tool converts source dicts and dumps the result."""
        validator = AsyncMock()
        validator.validate = AsyncMock(return_value=passing_result())

        with patch.object(validate_answer, "get_validator", return_value=validator):
            result = await validate_answer.validate_answer(
                query="q",
                response="r",
                sources=[{"content": "text", "title": "Doc"}],
            )

        assert result["confidence"] == 0.94
        assert result["valid"] is True
        sent = validator.validate.call_args.args[0]
        assert sent.sources[0].title == "Doc"

    @pytest.mark.asyncio
    async def test_accepts_source_embeddings(self):
        """Sources may carry float embeddings alongside their text."""
        validator = AsyncMock()
        validator.validate = AsyncMock(return_value=passing_result())

        with patch.object(validate_answer, "get_validator", return_value=validator):
            await validate_answer.validate_answer(
                query="q",
                response="r",
                sources=[{"content": "text", "id": "doc-1", "embedding": [0.12, -0.5]}],
            )

        sent = validator.validate.call_args.args[0]
        assert sent.sources[0].embedding == [0.12, -0.5]

    def test_sources_schema_allows_any_values(self):
        """Tool signature does not restrict source values to strings."""
        hints = get_type_hints(validate_answer.validate_answer)

        assert hints["sources"] == Optional[List[Dict[str, Any]]]
