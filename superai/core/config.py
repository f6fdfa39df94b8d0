"""
Settings for the SuperAI brain.

Every value is read from the environment (or a ``.env`` file in the working
directory) under a ``SUPERAI_*`` name; the completion key keeps the provider's
own ``GEMINI_API_KEY`` name. Consumers usually read one of the grouped views
(``settings.completion``, ``settings.capabilities``, ``settings.orchestrator``).
"""

from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# =====================================================================
# Grouped Configuration Models
# =====================================================================


class CompletionConfig(BaseModel):
    """Language-model completion backend configuration."""

    model: str = Field(
        default="google-gla:gemini-2.5-pro",
        alias="SUPERAI_COMPLETION_MODEL",
        description="pydantic-ai model identifier used by every agent",
    )
    api_key: Optional[str] = Field(
        default=None, alias="GEMINI_API_KEY", description="Gemini API key for authentication"
    )

    model_config = {"populate_by_name": True}


class CapabilityConfig(BaseModel):
    """Side-effect settings for built-in capability handlers."""

    workspace_root: Optional[str] = Field(
        default=None,
        alias="SUPERAI_WORKSPACE_ROOT",
        description="Directory file and terminal capabilities are confined to (unrestricted when unset)",
    )
    terminal_timeout_seconds: float = Field(
        default=30.0, alias="SUPERAI_TERMINAL_TIMEOUT_SECONDS", description="Timeout for terminal_run"
    )
    http_timeout_seconds: float = Field(
        default=15.0, alias="SUPERAI_HTTP_TIMEOUT_SECONDS", description="Timeout for api_fetch"
    )

    model_config = {"populate_by_name": True}


class OrchestratorConfig(BaseModel):
    """Plan-dispatch-evaluate loop settings."""

    step_timeout_seconds: Optional[float] = Field(
        default=None,
        alias="SUPERAI_STEP_TIMEOUT_SECONDS",
        description="Deadline for a single agent step (no deadline when unset)",
    )
    recursion_limit: int = Field(
        default=1000,
        alias="SUPERAI_GRAPH_RECURSION_LIMIT",
        description="Minimum graph transition budget per task; raised to fit longer plans",
    )

    model_config = {"populate_by_name": True}


# =====================================================================
# Main Settings Class
# =====================================================================


class Settings(BaseSettings):
    """
    Application settings model.

    All properties are automatically bound from environment variables and .env file.
    Pydantic's BaseSettings handles dotenv loading automatically via model_config.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=True,
        populate_by_name=True,
    )

    # =====================================================================
    # Logging Configuration
    # =====================================================================
    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
        alias="SUPERAI_LOG_LEVEL",
    )
    log_format: str = Field(
        default="detailed",
        description="Log line format (simple, detailed, json)",
        alias="SUPERAI_LOG_FORMAT",
    )
    log_file_dir: str = Field(default="logs", description="Directory for the log file", alias="SUPERAI_LOG_FILE_DIR")
    enable_file_logging: bool = Field(
        default=False, description="Also write logs to a file", alias="SUPERAI_ENABLE_FILE_LOGGING"
    )

    # =====================================================================
    # Completion Backend
    # =====================================================================
    completion_model: str = Field(default="google-gla:gemini-2.5-pro", alias="SUPERAI_COMPLETION_MODEL")
    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")

    # =====================================================================
    # Capabilities
    # =====================================================================
    workspace_root: Optional[str] = Field(default=None, alias="SUPERAI_WORKSPACE_ROOT")
    terminal_timeout_seconds: float = Field(default=30.0, alias="SUPERAI_TERMINAL_TIMEOUT_SECONDS")
    http_timeout_seconds: float = Field(default=15.0, alias="SUPERAI_HTTP_TIMEOUT_SECONDS")

    # =====================================================================
    # Orchestrator
    # =====================================================================
    step_timeout_seconds: Optional[float] = Field(default=None, alias="SUPERAI_STEP_TIMEOUT_SECONDS")
    recursion_limit: int = Field(default=1000, alias="SUPERAI_GRAPH_RECURSION_LIMIT")

    # =====================================================================
    # Computed Properties (Grouped Configurations)
    # =====================================================================

    @property
    def completion(self) -> CompletionConfig:
        """Get completion backend configuration."""
        return CompletionConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def capabilities(self) -> CapabilityConfig:
        """Get capability handler configuration."""
        return CapabilityConfig.model_validate(self.model_dump(by_alias=True))

    @property
    def orchestrator(self) -> OrchestratorConfig:
        """Get orchestrator configuration."""
        return OrchestratorConfig.model_validate(self.model_dump(by_alias=True))


settings = Settings()
