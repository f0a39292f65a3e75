"""LiteLLM provider routed through OpenRouter."""

import os
from typing import Any

import litellm
from litellm import acompletion
from loguru import logger

from openrouter_context.context.types import Message
from openrouter_context.errors import ExternalCallError, RateLimitError
from openrouter_context.providers.base import Choice, LLMProvider, LLMResponse

OPENROUTER_API_BASE = "https://openrouter.ai/api/v1"


class LiteLLMProvider(LLMProvider):
    """
    LLM provider using LiteLLM.

    OpenRouter is detected by key prefix or api_base; model names are
    then prefixed with ``openrouter/`` so LiteLLM routes them there.
    """

    def __init__(
        self,
        api_key: str | None = None,
        api_base: str | None = None,
        default_model: str = "openai/gpt-4o-mini",
        timeout_seconds: float | None = None,
        app_title: str = "",
        http_referer: str = "",
    ):
        super().__init__(api_key, api_base)
        self.default_model = default_model
        self.request_timeout_seconds = timeout_seconds or float(
            os.getenv("OPENROUTER_CONTEXT_TIMEOUT_SECONDS", "45")
        )
        self.app_title = app_title
        self.http_referer = http_referer

        self.is_openrouter = bool(
            (api_key and api_key.startswith("sk-or-"))
            or (api_base and "openrouter" in api_base)
        )

        # Disable LiteLLM logging noise
        litellm.suppress_debug_info = True

    def _resolve_model(self, model: str | None) -> str:
        model = model or self.default_model
        if self.is_openrouter and not model.startswith("openrouter/"):
            model = f"openrouter/{model}"
        return model

    def _redact(self, text: str) -> str:
        if self.api_key and len(self.api_key) > 8:
            return text.replace(self.api_key, "***")
        return text

    async def chat(
        self,
        messages: list[Message],
        model: str | None = None,
        max_tokens: int = 4096,
        temperature: float = 0.7,
        **options: Any,
    ) -> LLMResponse:
        """
        Send a chat completion request via LiteLLM.

        Raises:
            RateLimitError: The backend answered 429.
            ExternalCallError: Any other transport, status or parse failure.
        """
        kwargs: dict[str, Any] = {
            "model": self._resolve_model(model),
            "messages": [m.to_dict() for m in messages],
            "max_tokens": max_tokens,
            "temperature": temperature,
            "timeout": self.request_timeout_seconds,
            **options,
        }

        headers = {}
        if self.app_title:
            headers["X-Title"] = self.app_title
        if self.http_referer:
            headers["HTTP-Referer"] = self.http_referer
        if headers:
            kwargs["extra_headers"] = headers

        if self.api_base:
            kwargs["api_base"] = self.api_base
        elif self.is_openrouter:
            kwargs["api_base"] = OPENROUTER_API_BASE
        if self.api_key:
            kwargs["api_key"] = self.api_key

        try:
            response = await acompletion(**kwargs)
        except Exception as e:
            error_msg = self._redact(str(e))
            status = getattr(e, "status_code", None)
            logger.error(f"LLM call error: {error_msg}")
            if status == 429:
                raise RateLimitError(error_msg, status_code=status) from e
            raise ExternalCallError(
                f"LLM call failed: {error_msg}",
                status_code=status,
                body=self._redact(str(getattr(e, "message", "") or "")) or None,
            ) from e

        return self._parse_response(response)

    def _parse_response(self, response: Any) -> LLMResponse:
        """Parse LiteLLM response into our standard format."""
        try:
            choices = [
                Choice(
                    message=Message(
                        role=choice.message.role or "assistant",
                        content=choice.message.content or "",
                    ),
                    finish_reason=choice.finish_reason or "stop",
                )
                for choice in response.choices
            ]
        except AttributeError as e:
            raise ExternalCallError(f"Malformed completion response: {e}") from e

        usage = {}
        if getattr(response, "usage", None):
            usage = {
                "prompt_tokens": response.usage.prompt_tokens,
                "completion_tokens": response.usage.completion_tokens,
                "total_tokens": response.usage.total_tokens,
            }

        return LLMResponse(
            choices=choices,
            model=getattr(response, "model", "") or "",
            usage=usage,
        )

    def get_default_model(self) -> str:
        """Get the default model."""
        return self.default_model
