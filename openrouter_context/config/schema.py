"""Configuration schema using Pydantic."""

from typing import Literal

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ProviderConfig(BaseModel):
    """LLM provider configuration."""
    api_key: str = ""
    api_base: str | None = None
    default_model: str = "openai/gpt-4o-mini"
    timeout_seconds: float = 45.0
    app_title: str = ""  # Sent as X-Title to OpenRouter
    http_referer: str = ""  # Sent as HTTP-Referer to OpenRouter


class ContextConfig(BaseModel):
    """Context management configuration."""
    strategy: Literal["truncation", "sliding_window", "summary"] = "truncation"
    max_context_tokens: int = Field(default=8000, gt=0)
    window_size: int = Field(default=10, ge=0)  # sliding_window only
    keep_first: bool = True  # sliding_window only
    recent_count: int = Field(default=4, ge=0)  # summary only
    summarization_model: str | None = None  # None = provider default
    use_processor: bool = False  # LLM-backed compress()
    strict: bool = False  # Raise when still over budget


class Config(BaseSettings):
    """Root configuration for openrouter-context."""
    model_config = SettingsConfigDict(
        env_prefix="OPENROUTER_CONTEXT_",
        env_nested_delimiter="__",
    )

    provider: ProviderConfig = Field(default_factory=ProviderConfig)
    context: ContextConfig = Field(default_factory=ContextConfig)

    def get_api_base(self) -> str | None:
        """Get API base URL, defaulting to OpenRouter for OpenRouter keys."""
        if self.provider.api_base:
            return self.provider.api_base
        if self.provider.api_key.startswith("sk-or-"):
            return "https://openrouter.ai/api/v1"
        return None
