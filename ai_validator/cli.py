"""
AI Validator - Command Line Harness

Validate one response from the command line:

    ai-validator --query "How is auth done?" --response "..." --source "..."
"""

import argparse
import asyncio
import json
import sys
from typing import List, Optional

from ai_validator.config import Settings, get_settings
from ai_validator.logging_config import configure_logging
from ai_validator.schemas import Source, ValidationInput, ValidationResult
from ai_validator.services import AIValidator


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ai-validator",
        description="Score an AI response against its source documents",
    )
    parser.add_argument("--query", required=True, help="User query")
    parser.add_argument("--response", required=True, help="AI-generated response")
    parser.add_argument(
        "--source",
        action="append",
        default=[],
        help="Source content (repeatable; omit for no sources)",
    )
    parser.add_argument("--source-title", default="User Input", help="Title for every --source")
    parser.add_argument("--provider", choices=["openai", "claude"], default=None)
    parser.add_argument("--threshold", type=float, default=None, help="Confidence threshold 0.0-1.0")
    parser.add_argument("--no-classification", action="store_true", help="Disable query classification")
    parser.add_argument("--no-context", action="store_true", help="Disable context validation")
    parser.add_argument("--llm-judge", action="store_true", help="Use LLM-as-judge for context validation")
    parser.add_argument("--accuracy", action="store_true", help="Enable accuracy checking")
    parser.add_argument("--hallucination", action="store_true", help="Enable hallucination detection")
    parser.add_argument("--developer-mode", action="store_true", help="Strict code-grounding rubric")
    parser.add_argument("--json", action="store_true", help="Print the raw result as JSON")
    return parser


def apply_overrides(settings: Settings, args: argparse.Namespace) -> Settings:
    """Command line flags on top of environment settings."""
    llm_update = {}
    if args.provider:
        llm_update["provider"] = args.provider

    validation_update = {}
    if args.threshold is not None:
        validation_update["confidence_threshold"] = args.threshold
    if args.no_classification:
        validation_update["enable_query_classification"] = False
    if args.no_context:
        validation_update["enable_context_validation"] = False
    if args.llm_judge:
        validation_update["use_llm_judge"] = True
    if args.accuracy:
        validation_update["enable_accuracy_check"] = True
    if args.hallucination:
        validation_update["enable_hallucination_detection"] = True
    if args.developer_mode:
        validation_update["developer_mode"] = True

    return settings.model_copy(update={
        "llm": settings.llm.model_copy(update=llm_update),
        "validation": settings.validation.model_copy(update=validation_update),
    })


def format_result(result: ValidationResult) -> str:
    """Human-readable summary."""
    lines = [
        "Validation Results:",
        "=" * 30,
        f"Confidence Score: {result.confidence * 100:.1f}%",
        f"Valid: {'Yes' if result.valid else 'No'}",
    ]
    if result.query_type:
        lines.append(f"Query Type: {result.query_type}")
    if result.skip_validation:
        lines.append("Skip Validation: Yes (greeting/typo detected)")

    accuracy = result.accuracy
    hallucination = result.hallucination
    lines += [
        "",
        "Detailed Breakdown:",
        "-" * 30,
        f"Accuracy: {'Verified' if accuracy.verified else 'Not verified'} ({accuracy.verification_rate * 100:.1f}%)",
        f"Context Relevance: {result.context.source_relevance * 100:.1f}%",
        f"Hallucination Risk: {hallucination.risk * 100:.1f}% {'Detected' if hallucination.detected else 'None'}",
    ]

    if result.warnings:
        lines += ["", "Warnings:"] + [f"  - {w}" for w in result.warnings]
    if hallucination.hallucinated_parts:
        lines += ["", "Hallucinated Parts:"] + [f"  - {p}" for p in hallucination.hallucinated_parts]

    lines += ["", "Recommendation:"]
    if result.valid:
        lines.append("This response is reliable and can be shown to users.")
    else:
        lines.append("This response has low confidence and should be reviewed or not shown to users.")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    settings = apply_overrides(get_settings(), args)
    configure_logging(settings.log)

    sources = [
        Source(content=content.strip(), title=args.source_title)
        for content in args.source
        if content.strip()
    ]
    validator = AIValidator(settings)
    result = asyncio.run(validator.validate(
        ValidationInput(query=args.query, response=args.response, sources=sources)
    ))

    if args.json:
        print(json.dumps(result.model_dump(exclude_none=True), indent=2))
    else:
        print(format_result(result))
    return 0 if result.valid else 1


if __name__ == "__main__":
    sys.exit(main())
