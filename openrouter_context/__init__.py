"""
openrouter-context - conversation context management for OpenRouter models.
"""

__version__ = "0.1.0"

from openrouter_context.context import (
    ContextManager,
    ConversationResult,
    Message,
    ReductionOutcome,
    SlidingWindowStrategy,
    SummarizingProcessor,
    SummaryStrategy,
    TruncationStrategy,
)
from openrouter_context.errors import (
    ConfigurationError,
    ContextError,
    ContextExhaustedError,
    ExternalCallError,
    RateLimitError,
)

__all__ = [
    "__version__",
    "ContextManager",
    "ConversationResult",
    "Message",
    "ReductionOutcome",
    "SlidingWindowStrategy",
    "SummarizingProcessor",
    "SummaryStrategy",
    "TruncationStrategy",
    "ConfigurationError",
    "ContextError",
    "ContextExhaustedError",
    "ExternalCallError",
    "RateLimitError",
]
