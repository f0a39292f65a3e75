"""Context management system."""

from openrouter_context.context.estimator import (
    TiktokenEstimator,
    TokenEstimator,
    estimate_message_tokens,
    estimate_messages_tokens,
    estimate_tokens,
)
from openrouter_context.context.factory import (
    build_context_manager,
    make_responder,
    with_advanced_summarization,
    with_sliding_window,
    with_summary,
    with_truncation,
)
from openrouter_context.context.manager import ContextManager
from openrouter_context.context.processor import (
    ContextProcessor,
    SummarizingProcessor,
    format_transcript,
)
from openrouter_context.context.strategy import (
    ReductionStrategy,
    SlidingWindowStrategy,
    SummaryStrategy,
    TruncationStrategy,
)
from openrouter_context.context.types import (
    ConversationResult,
    Message,
    ReductionOutcome,
)

__all__ = [
    # Estimator
    "estimate_tokens",
    "estimate_message_tokens",
    "estimate_messages_tokens",
    "TokenEstimator",
    "TiktokenEstimator",
    # Strategies
    "ReductionStrategy",
    "TruncationStrategy",
    "SlidingWindowStrategy",
    "SummaryStrategy",
    # Processor
    "ContextProcessor",
    "SummarizingProcessor",
    "format_transcript",
    # Manager
    "ContextManager",
    "build_context_manager",
    "make_responder",
    "with_truncation",
    "with_sliding_window",
    "with_summary",
    "with_advanced_summarization",
    # Types
    "Message",
    "ReductionOutcome",
    "ConversationResult",
]
