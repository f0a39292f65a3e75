"""Reduction strategies for fitting conversations into a token budget."""

from abc import ABC, abstractmethod

from loguru import logger

from openrouter_context.context.estimator import TokenEstimator
from openrouter_context.context.types import (
    MERGE_SEPARATOR,
    TRUNCATION_MARKER,
    UNBOUNDED_BUDGET,
    Message,
    Summarizer,
)
from openrouter_context.errors import ConfigurationError


class ReductionStrategy(ABC):
    """
    Base class for context reduction strategies.

    Strategies never reorder messages and never mutate their input;
    every call returns a new list.
    """

    def __init__(self, estimator: TokenEstimator | None = None):
        self.estimator = estimator or TokenEstimator()

    def estimate(self, messages: list[Message]) -> int:
        """Estimate token count for a set of messages."""
        return self.estimator.estimate(messages)

    @abstractmethod
    async def fit_to_context(
        self, messages: list[Message], max_tokens: int
    ) -> list[Message]:
        """Reduce messages so they fit within max_tokens where possible."""

    @abstractmethod
    async def compress(self, messages: list[Message]) -> list[Message]:
        """Budget-agnostic normalization pass."""


class TruncationStrategy(ReductionStrategy):
    """
    Drop older non-system messages until the conversation fits.

    System messages are kept untouched and moved to the front. The
    second-oldest non-system message is removed first so the oldest
    one and the latest exchange survive longest. When two or fewer
    non-system messages remain, the earliest is cut in half once (only
    if that makes it smaller) and trimming stops, even if the result is
    still over budget.
    """

    async def fit_to_context(
        self, messages: list[Message], max_tokens: int
    ) -> list[Message]:
        system_messages = [m for m in messages if m.is_system]
        other_messages = [m for m in messages if not m.is_system]

        system_tokens = self.estimate(system_messages)

        while (
            other_messages
            and system_tokens + self.estimate(other_messages) > max_tokens
        ):
            if len(other_messages) > 2:
                removed = other_messages.pop(1)
                logger.debug(f"Truncation: dropped {removed.role} message")
                continue

            first = other_messages[0]
            half = first.content[len(first.content) // 2:]
            candidate = Message(
                role=first.role,
                content=f"{TRUNCATION_MARKER}{half}",
                name=first.name,
            )
            # Short content would grow once the marker is added.
            if self.estimate([candidate]) < self.estimate([first]):
                other_messages[0] = candidate
                logger.debug(f"Truncation: halved earliest {first.role} message")
            break

        return system_messages + other_messages

    async def compress(self, messages: list[Message]) -> list[Message]:
        """Merge runs of consecutive messages that share a role."""
        compressed: list[Message] = []

        for msg in messages:
            if compressed and compressed[-1].role == msg.role:
                previous = compressed[-1]
                compressed[-1] = Message(
                    role=previous.role,
                    content=f"{previous.content}{MERGE_SEPARATOR}{msg.content}",
                    name=previous.name,
                )
            else:
                compressed.append(msg)

        return compressed


class SlidingWindowStrategy(ReductionStrategy):
    """Keep the most recent messages, optionally pinning the first one."""

    def __init__(
        self,
        window_size: int,
        keep_first: bool = True,
        estimator: TokenEstimator | None = None,
    ):
        super().__init__(estimator)
        if window_size < 0:
            raise ConfigurationError(
                f"window_size must be non-negative, got {window_size}"
            )
        self.window_size = window_size
        self.keep_first = keep_first

    async def fit_to_context(
        self, messages: list[Message], max_tokens: int
    ) -> list[Message]:
        # Window size is the only control; the budget is ignored.
        if len(messages) <= self.window_size:
            return list(messages)

        result: list[Message] = []
        if self.keep_first and messages:
            result.append(messages[0])

        tail = max(self.window_size - (1 if self.keep_first else 0), 0)
        if tail:
            result.extend(messages[len(messages) - tail:])

        return result

    async def compress(self, messages: list[Message]) -> list[Message]:
        return await self.fit_to_context(messages, UNBOUNDED_BUDGET)


class SummaryStrategy(ReductionStrategy):
    """
    Replace the middle of the conversation with a generated summary.

    Output is the anchor (first) message, one summary message for
    everything between it and the last ``recent_count`` messages, then
    those recent messages unchanged. Summarizer failures propagate.
    """

    def __init__(
        self,
        summarizer: Summarizer,
        recent_count: int = 4,
        estimator: TokenEstimator | None = None,
    ):
        super().__init__(estimator)
        if summarizer is None:
            raise ConfigurationError("SummaryStrategy requires a summarizer")
        if recent_count < 0:
            raise ConfigurationError(
                f"recent_count must be non-negative, got {recent_count}"
            )
        self.summarizer = summarizer
        self.recent_count = recent_count

    async def fit_to_context(
        self, messages: list[Message], max_tokens: int
    ) -> list[Message]:
        if len(messages) <= self.recent_count + 1:
            return list(messages)

        split = len(messages) - self.recent_count
        history = messages[1:split]
        recent = messages[split:]

        result = [messages[0]]
        if history:
            logger.debug(f"Summarizing {len(history)} messages")
            summary = await self.summarizer(list(history))
            if not isinstance(summary, Message):
                raise ConfigurationError(
                    f"Summarizer must return a Message, got {type(summary).__name__}"
                )
            result.append(summary)
        result.extend(recent)

        return result

    async def compress(self, messages: list[Message]) -> list[Message]:
        return await self.fit_to_context(messages, UNBOUNDED_BUDGET)
