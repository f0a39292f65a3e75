"""Constructors for commonly used context manager setups."""

from loguru import logger

from openrouter_context.config.schema import Config
from openrouter_context.context.manager import ContextManager
from openrouter_context.context.processor import SummarizingProcessor
from openrouter_context.context.strategy import (
    SlidingWindowStrategy,
    SummaryStrategy,
    TruncationStrategy,
)
from openrouter_context.context.types import Message, RespondFn, Summarizer
from openrouter_context.errors import ConfigurationError, ExternalCallError
from openrouter_context.providers.base import LLMProvider


def with_truncation(budget: int) -> ContextManager:
    """Create a manager with the truncation strategy."""
    return ContextManager(budget, TruncationStrategy())


def with_sliding_window(
    budget: int, window_size: int, keep_first: bool = True
) -> ContextManager:
    """Create a manager with the sliding window strategy."""
    return ContextManager(budget, SlidingWindowStrategy(window_size, keep_first))


def with_summary(
    budget: int, summarizer: Summarizer, recent_count: int = 4
) -> ContextManager:
    """Create a manager with a summary strategy using a custom summarizer."""
    return ContextManager(budget, SummaryStrategy(summarizer, recent_count))


def with_advanced_summarization(
    budget: int,
    provider: LLMProvider,
    model: str | None = None,
    recent_count: int = 4,
) -> ContextManager:
    """
    Create a manager that summarizes with an LLM.

    The summary strategy's summarizer and the manager's processor share
    one SummarizingProcessor.
    """
    processor = SummarizingProcessor(provider, model)
    strategy = SummaryStrategy(processor.summarize, recent_count)
    return ContextManager(budget, strategy, processor=processor)


def make_responder(
    provider: LLMProvider, model: str | None = None, **options
) -> RespondFn:
    """
    Adapt a provider into a respond function for manage_conversation.

    The reply is the first choice's message.
    """

    async def respond(messages: list[Message]) -> list[Message]:
        response = await provider.chat(messages, model=model, **options)
        if not response.choices:
            raise ExternalCallError("No choices returned")
        return [response.choices[0].message]

    return respond


def build_context_manager(
    config: Config, provider: LLMProvider | None = None
) -> ContextManager:
    """
    Build a context manager from configuration.

    Args:
        config: Root configuration.
        provider: Provider for the summary strategy and processor.

    Raises:
        ConfigurationError: The summary strategy or processor is
            selected without a provider.
    """
    ctx = config.context
    needs_provider = ctx.strategy == "summary" or ctx.use_processor
    if needs_provider and provider is None:
        raise ConfigurationError(
            f"strategy '{ctx.strategy}' with use_processor={ctx.use_processor} "
            "requires an LLM provider"
        )

    processor = None
    if needs_provider:
        processor = SummarizingProcessor(provider, ctx.summarization_model)

    if ctx.strategy == "truncation":
        strategy = TruncationStrategy()
    elif ctx.strategy == "sliding_window":
        strategy = SlidingWindowStrategy(ctx.window_size, ctx.keep_first)
    elif ctx.strategy == "summary":
        strategy = SummaryStrategy(processor.summarize, ctx.recent_count)
    else:
        raise ConfigurationError(f"Unknown context strategy: {ctx.strategy}")

    logger.debug(
        f"Context manager: strategy={ctx.strategy}, "
        f"budget={ctx.max_context_tokens}, processor={ctx.use_processor}"
    )

    return ContextManager(
        ctx.max_context_tokens,
        strategy,
        processor=processor if ctx.use_processor else None,
        strict=ctx.strict,
    )
