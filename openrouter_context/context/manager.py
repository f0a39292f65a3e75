"""Context manager for fitting conversations into a model's window."""

from loguru import logger

from openrouter_context.context.processor import ContextProcessor
from openrouter_context.context.strategy import ReductionStrategy
from openrouter_context.context.types import (
    ConversationResult,
    Message,
    ReductionOutcome,
    RespondFn,
)
from openrouter_context.errors import ConfigurationError, ContextExhaustedError


class ContextManager:
    """
    Keeps a conversation within a token budget.

    Holds an immutable budget, a reduction strategy and an optional
    processor. No per-call state is kept, so one instance can serve
    concurrent conversations.
    """

    def __init__(
        self,
        budget: int,
        strategy: ReductionStrategy,
        processor: ContextProcessor | None = None,
        strict: bool = False,
    ):
        """
        Initialize the context manager.

        Args:
            budget: Maximum estimated tokens for a fitted conversation.
            strategy: Strategy used when the budget is exceeded.
            processor: Optional LLM-backed processor used by compress().
            strict: Raise ContextExhaustedError instead of returning an
                over-budget result.
        """
        if budget <= 0:
            raise ConfigurationError(f"budget must be positive, got {budget}")
        self._budget = budget
        self._strategy = strategy
        self._processor = processor
        self._strict = strict

    @property
    def budget(self) -> int:
        return self._budget

    @property
    def strategy(self) -> ReductionStrategy:
        return self._strategy

    @property
    def processor(self) -> ContextProcessor | None:
        return self._processor

    def estimate(self, messages: list[Message]) -> int:
        """Estimate tokens using the active strategy's estimator."""
        return self._strategy.estimate(messages)

    async def fit(self, messages: list[Message]) -> ReductionOutcome:
        """
        Fit messages to the budget and report what happened.

        Returns:
            ReductionOutcome with the fitted messages and their estimate.

        Raises:
            ContextExhaustedError: In strict mode, when the best-effort
                result is still over budget.
        """
        total_tokens = self.estimate(messages)

        if total_tokens <= self._budget:
            logger.debug(
                f"Context within budget: {total_tokens}/{self._budget} tokens"
            )
            return ReductionOutcome(
                messages=list(messages),
                was_reduced=False,
                estimated_tokens=total_tokens,
                budget=self._budget,
            )

        fitted = await self._strategy.fit_to_context(list(messages), self._budget)
        fitted_tokens = self.estimate(fitted)
        outcome = ReductionOutcome(
            messages=fitted,
            was_reduced=fitted != list(messages),
            estimated_tokens=fitted_tokens,
            budget=self._budget,
        )

        logger.info(
            f"Reduced context with {type(self._strategy).__name__}: "
            f"{len(messages)} -> {len(fitted)} messages, "
            f"{total_tokens} -> {fitted_tokens} tokens"
        )

        if outcome.exceeds_budget:
            if self._strict:
                raise ContextExhaustedError(outcome)
            logger.warning(
                f"Context still over budget after reduction: "
                f"{fitted_tokens}/{self._budget} tokens"
            )

        return outcome

    async def process(self, messages: list[Message]) -> list[Message]:
        """Return messages unchanged if within budget, else fitted."""
        outcome = await self.fit(messages)
        return outcome.messages

    async def compress(self, messages: list[Message]) -> list[Message]:
        """Compress with the processor if configured, else the strategy."""
        if self._processor is not None:
            return await self._processor.compress(list(messages))
        return await self._strategy.compress(list(messages))

    async def manage_conversation(
        self,
        messages: list[Message],
        respond: RespondFn,
    ) -> ConversationResult:
        """
        Fit the conversation, then hand it to the responder.

        Args:
            messages: Conversation history.
            respond: Async callable producing reply messages for the
                fitted history. Its failures propagate unchanged.

        Returns:
            ConversationResult with the reply, whether fitting changed the
            message count, and the reply's estimated tokens.
        """
        original_len = len(messages)
        fitted = await self.process(messages)

        reply = await respond(fitted)

        return ConversationResult(
            messages=list(reply),
            was_reduced=len(fitted) != original_len,
            estimated_tokens=self.estimate(reply),
        )
