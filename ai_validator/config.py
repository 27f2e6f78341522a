"""
AI Validator - Configuration

Pydantic Settings for all configuration via environment variables.
"""

from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional, Literal


class LLMSettings(BaseSettings):
    """LLM provider configuration."""
    provider: Literal["openai", "claude"] = Field("openai", alias="LLM_PROVIDER")
    openai_api_key: Optional[str] = Field(None, alias="OPENAI_API_KEY")
    claude_api_key: Optional[str] = Field(None, alias="CLAUDE_API_KEY")
    openai_model: str = Field("gpt-4o-mini", alias="OPENAI_MODEL")
    claude_model: str = Field("claude-3-haiku-20240307", alias="CLAUDE_MODEL")
    openai_base_url: str = Field(
        "https://api.openai.com/v1", alias="OPENAI_BASE_URL"
    )
    claude_base_url: str = Field(
        "https://api.anthropic.com/v1", alias="CLAUDE_BASE_URL"
    )
    timeout_ms: int = Field(30000, alias="LLM_TIMEOUT_MS")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}

    def api_key_for(self, provider: str) -> Optional[str]:
        """Credential configured for a provider name, if any."""
        if provider == "openai":
            return self.openai_api_key or None
        if provider == "claude":
            return self.claude_api_key or None
        return None

    def model_for(self, provider: str) -> str:
        if provider == "claude":
            return self.claude_model
        return self.openai_model

    @property
    def has_any_api_key(self) -> bool:
        return bool(self.openai_api_key or self.claude_api_key)


class ValidationSettings(BaseSettings):
    """Validation pipeline toggles and threshold."""
    confidence_threshold: float = Field(
        0.7, ge=0.0, le=1.0, alias="CONFIDENCE_THRESHOLD"
    )
    enable_query_classification: bool = Field(
        True, alias="ENABLE_QUERY_CLASSIFICATION"
    )
    enable_context_validation: bool = Field(
        True, alias="ENABLE_CONTEXT_VALIDATION"
    )
    use_llm_judge: bool = Field(False, alias="USE_LLM_JUDGE")
    enable_accuracy_check: bool = Field(False, alias="ENABLE_ACCURACY_CHECK")
    enable_hallucination_detection: bool = Field(
        False, alias="ENABLE_HALLUCINATION_DETECTION"
    )
    developer_mode: bool = Field(False, alias="DEVELOPER_MODE")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class MCPSettings(BaseSettings):
    """MCP server configuration."""
    transport: Literal["sse", "stdio"] = Field("stdio", alias="MCP_TRANSPORT")
    port: int = Field(8080, alias="MCP_PORT")
    host: str = Field("0.0.0.0", alias="MCP_HOST")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class LogSettings(BaseSettings):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        "INFO", alias="LOG_LEVEL"
    )
    format: Literal["json", "text"] = Field("text", alias="LOG_FORMAT")

    model_config = {"env_prefix": "", "extra": "ignore", "populate_by_name": True}


class Settings(BaseSettings):
    """Main settings aggregating all configuration."""
    llm: LLMSettings = Field(default_factory=LLMSettings)
    validation: ValidationSettings = Field(default_factory=ValidationSettings)
    mcp: MCPSettings = Field(default_factory=MCPSettings)
    log: LogSettings = Field(default_factory=LogSettings)

    model_config = {"env_prefix": "", "extra": "ignore"}


def get_settings() -> Settings:
    """Load settings from environment variables."""
    from dotenv import load_dotenv
    load_dotenv()
    return Settings()
