"""Base LLM provider interface."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any

from openrouter_context.context.types import Message


@dataclass
class Choice:
    """One candidate reply."""

    message: Message
    finish_reason: str = "stop"


@dataclass
class LLMResponse:
    """Response from a chat completion call."""

    choices: list[Choice] = field(default_factory=list)
    model: str = ""
    usage: dict[str, int] = field(default_factory=dict)

    @property
    def content(self) -> str | None:
        """Content of the first choice, if any."""
        if not self.choices:
            return None
        return self.choices[0].message.content


class LLMProvider(ABC):
    """
    Abstract base class for LLM providers.

    Implementations raise ExternalCallError on failure instead of
    returning an error response.
    """

    def __init__(self, api_key: str | None = None, api_base: str | None = None):
        self.api_key = api_key
        self.api_base = api_base

    @abstractmethod
    async def chat(
        self,
        messages: list[Message],
        model: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.7,
        **options: Any,
    ) -> LLMResponse:
        """
        Send a chat completion request.

        Args:
            messages: Conversation to send.
            model: Model identifier, or None for the provider default.
            max_tokens: Maximum tokens in response.
            temperature: Sampling temperature.
            **options: Extra request options passed through to the backend.

        Returns:
            LLMResponse with one or more choices.
        """

    @abstractmethod
    def get_default_model(self) -> str:
        """Get the default model for this provider."""
