"""LLM provider abstraction module."""

from openrouter_context.providers.base import Choice, LLMProvider, LLMResponse
from openrouter_context.providers.litellm_provider import LiteLLMProvider

__all__ = ["Choice", "LLMProvider", "LLMResponse", "LiteLLMProvider"]
