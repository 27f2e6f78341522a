"""
AI Validator - Exceptions

Error taxonomy shared by the provider layer and the validation services.
"""

from typing import Any, Dict, Optional


class AIValidatorError(Exception):
    """Base exception for all validator errors."""

    def __init__(
        self,
        message: str = "An error occurred in the AI validator",
        code: str = "AI_VALIDATOR_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to a standardized dictionary format."""
        return {"error": {"code": self.code, "message": self.message, "details": self.details}}


class ConfigurationError(AIValidatorError):
    """A feature was requested without the credential it needs."""

    def __init__(self, message: str = "Invalid configuration", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="CONFIGURATION_ERROR", details=details)


class ProviderError(AIValidatorError):
    """Network, auth or rate-limit failure while calling an LLM provider."""

    def __init__(
        self,
        message: str = "LLM provider call failed",
        provider: Optional[str] = None,
        status_code: Optional[int] = None,
    ):
        details: Dict[str, Any] = {}
        if provider:
            details["provider"] = provider
        if status_code is not None:
            details["status_code"] = status_code
        self.provider = provider
        self.status_code = status_code
        super().__init__(message=message, code="PROVIDER_ERROR", details=details)


class ParseError(AIValidatorError):
    """LLM output could not be parsed into a structured verdict."""

    def __init__(self, message: str = "Could not parse LLM output", raw: Optional[str] = None):
        details = {"raw": raw[:500]} if raw else None
        super().__init__(message=message, code="PARSE_ERROR", details=details)


class ValidationError(AIValidatorError):
    """Uncaught failure inside the validation pipeline."""

    def __init__(self, message: str = "Validation failed", details: Optional[Dict[str, Any]] = None):
        super().__init__(message=message, code="VALIDATION_ERROR", details=details)
