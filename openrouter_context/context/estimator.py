"""Token estimation for messages."""

import tiktoken

from openrouter_context.context.types import (
    CHARS_PER_TOKEN,
    MESSAGE_OVERHEAD_TOKENS,
    Message,
)

# Cache the encoder
_encoder: tiktoken.Encoding | None = None


def _get_encoder() -> tiktoken.Encoding:
    """Get or create the tiktoken encoder."""
    global _encoder
    if _encoder is None:
        _encoder = tiktoken.get_encoding("cl100k_base")
    return _encoder


def estimate_tokens(text: str) -> int:
    """
    Estimate the number of tokens in a text string.

    Roughly four characters per token, rounded up.

    Args:
        text: The text to estimate tokens for.

    Returns:
        Estimated token count.
    """
    if not text:
        return 0
    return -(-len(text) // CHARS_PER_TOKEN)


def estimate_message_tokens(message: Message) -> int:
    """
    Estimate tokens for a single message.

    Args:
        message: Message to estimate.

    Returns:
        Content estimate plus the per-message role overhead.
    """
    return estimate_tokens(message.content) + MESSAGE_OVERHEAD_TOKENS


def estimate_messages_tokens(messages: list[Message]) -> int:
    """
    Estimate total tokens for a list of messages.

    Args:
        messages: List of messages.

    Returns:
        Total estimated token count.
    """
    return sum(estimate_message_tokens(msg) for msg in messages)


class TokenEstimator:
    """Length-based token estimator shared by every strategy."""

    def estimate(self, messages: list[Message]) -> int:
        return estimate_messages_tokens(messages)

    def __call__(self, messages: list[Message]) -> int:
        return self.estimate(messages)


class TiktokenEstimator(TokenEstimator):
    """
    Estimator that counts content with the cl100k_base encoding.

    Closer to real counts for OpenAI/Anthropic-family models, but still
    an estimate: the routed model may use a different tokenizer.
    """

    def estimate(self, messages: list[Message]) -> int:
        encoder = _get_encoder()
        return sum(
            len(encoder.encode(msg.content, disallowed_special=()))
            + MESSAGE_OVERHEAD_TOKENS
            for msg in messages
        )
