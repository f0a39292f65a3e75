"""Error types for context management and provider calls."""

from typing import Any


class ContextError(Exception):
    """Base class for all openrouter-context errors."""


class ConfigurationError(ContextError):
    """An invalid or missing setting."""


class ExternalCallError(ContextError):
    """
    A failed call to the generation backend.

    Covers transport failures, non-success statuses and replies that
    could not be used (no choices, empty content).
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        body: str | None = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class RateLimitError(ExternalCallError):
    """The backend rejected the call with a 429."""


class ContextExhaustedError(ContextError):
    """Messages could not be reduced under the budget."""

    def __init__(self, outcome: Any):
        super().__init__(
            f"Context still over budget after reduction: "
            f"~{outcome.estimated_tokens} tokens > {outcome.budget}"
        )
        self.outcome = outcome
