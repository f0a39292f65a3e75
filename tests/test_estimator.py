"""Tests for token estimation."""

from openrouter_context.context.estimator import (
    TiktokenEstimator,
    TokenEstimator,
    estimate_message_tokens,
    estimate_messages_tokens,
    estimate_tokens,
)
from openrouter_context.context.types import Message


class TestEstimateTokens:
    def test_empty(self):
        assert estimate_tokens("") == 0

    def test_rounds_up(self):
        assert estimate_tokens("a") == 1
        assert estimate_tokens("abcd") == 1
        assert estimate_tokens("abcde") == 2

    def test_long_text(self):
        assert estimate_tokens("x" * 400) == 100


class TestEstimateMessageTokens:
    def test_includes_role_overhead(self):
        assert estimate_message_tokens(Message.user("")) == 5
        assert estimate_message_tokens(Message.user("Hi")) == 6

    def test_system_prompt(self):
        # "You are helpful." is 16 chars
        assert estimate_message_tokens(Message.system("You are helpful.")) == 9

    def test_sum(self):
        messages = [Message.user("Hi"), Message.assistant("Hello!")]
        assert estimate_messages_tokens(messages) == 13

    def test_empty_list(self):
        assert estimate_messages_tokens([]) == 0


class TestTokenEstimator:
    def test_matches_function(self):
        messages = [Message.user("Hello there"), Message.assistant("General Kenobi")]
        estimator = TokenEstimator()
        assert estimator.estimate(messages) == estimate_messages_tokens(messages)
        assert estimator(messages) == estimator.estimate(messages)

    def test_monotonic(self):
        estimator = TokenEstimator()
        messages: list[Message] = []
        previous = estimator.estimate(messages)
        for i in range(10):
            messages.append(Message.user("m" * i))
            current = estimator.estimate(messages)
            assert current > previous
            previous = current


class TestTiktokenEstimator:
    def test_counts_tokens_plus_overhead(self):
        estimator = TiktokenEstimator()
        assert estimator.estimate([Message.user("")]) == 5
        assert estimator.estimate([Message.user("hello")]) == 6

    def test_special_tokens_do_not_raise(self):
        estimator = TiktokenEstimator()
        assert estimator.estimate([Message.user("<|endoftext|>")]) > 5
