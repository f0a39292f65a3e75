"""Context processors backed by an LLM call."""

from abc import ABC, abstractmethod

from loguru import logger

from openrouter_context.context.types import (
    EXTRACT_KEY_INFO_SYSTEM_PROMPT,
    ROLE_ASSISTANT,
    ROLE_SYSTEM,
    ROLE_USER,
    SUMMARIZE_SYSTEM_PROMPT,
    SUMMARY_PREFIX,
    Message,
)
from openrouter_context.errors import ExternalCallError
from openrouter_context.providers.base import LLMProvider

_ROLE_LABELS = {
    ROLE_USER: "User",
    ROLE_ASSISTANT: "Assistant",
    ROLE_SYSTEM: "System",
}


def format_transcript(messages: list[Message]) -> str:
    """Render messages as a plain-text transcript for the summarizer."""
    parts = []
    for msg in messages:
        label = _ROLE_LABELS.get(msg.role, msg.role)
        parts.append(f"{label}: {msg.content}\n\n")
    return "".join(parts)


class ContextProcessor(ABC):
    """Semantically-aware reduction using an external generation call."""

    @abstractmethod
    async def compress(self, messages: list[Message]) -> list[Message]:
        """Compress context using advanced techniques."""

    @abstractmethod
    async def summarize(self, messages: list[Message]) -> Message:
        """Summarize previous context into one message."""

    @abstractmethod
    async def extract_key_info(self, messages: list[Message]) -> list[str]:
        """Extract key points from context."""


class SummarizingProcessor(ContextProcessor):
    """
    Processor that asks a chat model to summarize or extract.

    The provider handle may be shared across conversations; it must be
    safe for concurrent use.
    """

    def __init__(
        self,
        provider: LLMProvider,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float = 0.3,
    ):
        """
        Initialize the processor.

        Args:
            provider: LLM provider used for every call.
            model: Summarization model, or None for the provider default.
            max_tokens: Output limit for each call.
            temperature: Sampling temperature for each call.
        """
        self.provider = provider
        self.model = model or provider.get_default_model()
        self.max_tokens = max_tokens
        self.temperature = temperature

    async def _generate(self, system_prompt: str, content: str, purpose: str) -> str:
        response = await self.provider.chat(
            messages=[Message.system(system_prompt), Message.user(content)],
            model=self.model,
            max_tokens=self.max_tokens,
            temperature=self.temperature,
        )
        if not response.choices:
            raise ExternalCallError(f"No {purpose} generated")

        text = response.content
        if not text or not text.strip():
            raise ExternalCallError(f"Empty {purpose} returned by {self.model}")
        return text

    async def summarize(self, messages: list[Message]) -> Message:
        logger.debug(f"Summarizing {len(messages)} messages with {self.model}")
        text = await self._generate(
            SUMMARIZE_SYSTEM_PROMPT, format_transcript(messages), "summary"
        )
        return Message.system(f"{SUMMARY_PREFIX}{text}")

    async def compress(self, messages: list[Message]) -> list[Message]:
        """
        Replace the conversation with a summary and the last exchange.

        Returns the leading system message (if any), the summary, then
        the last two messages of the input.
        """
        summary = await self.summarize(messages)

        result: list[Message] = []
        rest = messages
        if messages and messages[0].is_system:
            result.append(messages[0])
            rest = messages[1:]

        result.append(summary)
        result.extend(rest[-2:])

        logger.info(
            f"Processor compressed {len(messages)} messages to {len(result)}"
        )
        return result

    async def extract_key_info(self, messages: list[Message]) -> list[str]:
        combined = "\n\n".join(msg.content for msg in messages)
        text = await self._generate(
            EXTRACT_KEY_INFO_SYSTEM_PROMPT, combined, "key information"
        )
        return [line.strip() for line in text.splitlines() if line.strip()]
