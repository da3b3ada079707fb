"""Claude API wrapper for document-grounded requests."""

from __future__ import annotations

import base64
import logging
from dataclasses import dataclass

import anthropic
from tenacity import (
    RetryCallState,
    before_sleep_log,
    retry,
    retry_if_exception_type,
    wait_exponential,
)

logger = logging.getLogger(__name__)

DEFAULT_MODEL = "claude-haiku-4-5-20251001"

# Failures worth another attempt when retries are enabled in config
RETRYABLE_ERRORS = (
    anthropic.APIConnectionError,
    anthropic.RateLimitError,
    anthropic.InternalServerError,
)


def _stop_after_max_attempts(retry_state: RetryCallState) -> bool:
    """Stop once the client's own ``max_attempts`` is used up."""
    return retry_state.attempt_number >= retry_state.args[0].max_attempts


@dataclass
class LLMResponse:
    """Response from the LLM including usage metadata."""

    text: str
    input_tokens: int
    output_tokens: int


class LLMClient:
    """Async Claude API client.

    ``max_attempts`` of 1 (the default) issues exactly one request per call.
    Larger values retry transient transport failures with exponential backoff.
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float | None = None,
        max_attempts: int = 1,
    ):
        kwargs: dict = {}
        if api_key is not None:
            kwargs["api_key"] = api_key
        if timeout is not None:
            kwargs["timeout"] = timeout
        self.client = anthropic.AsyncAnthropic(**kwargs)
        self.max_attempts = max_attempts
        self._token_log: list[tuple[str, int, int]] = []  # (model, input_tokens, output_tokens)

    @retry(
        stop=_stop_after_max_attempts,
        wait=wait_exponential(min=1, max=10),
        retry=retry_if_exception_type(RETRYABLE_ERRORS),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    async def _call_api(self, **kwargs) -> anthropic.types.Message:
        """Make the actual API call, retrying transport failures if configured."""
        return await self.client.messages.create(**kwargs)

    async def generate_from_document(
        self,
        document: bytes,
        prompt: str,
        *,
        media_type: str = "application/pdf",
        system: str = "",
        model: str = DEFAULT_MODEL,
        temperature: float = 0.0,
        max_tokens: int = 8192,
    ) -> LLMResponse:
        """Send a document plus an instruction to Claude and return the text answer.

        Args:
            document: Raw document bytes (a PDF by default).
            prompt: Instruction placed after the document in the user turn.
            media_type: MIME type of ``document``.
            system: Optional system prompt.
            model: Claude model id.
            temperature: Sampling temperature.
            max_tokens: Upper bound on generated tokens.

        Returns:
            LLMResponse whose ``text`` joins every text block of the answer
            (empty when the model produced none).
        """
        b64_data = base64.b64encode(document).decode("utf-8")
        kwargs: dict = {
            "model": model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{
                "role": "user",
                "content": [
                    {
                        "type": "document",
                        "source": {
                            "type": "base64",
                            "media_type": media_type,
                            "data": b64_data,
                        },
                    },
                    {"type": "text", "text": prompt},
                ],
            }],
        }
        if system:
            kwargs["system"] = system

        logger.debug("LLM call: model=%s, document=%d bytes", model, len(document))
        try:
            message = await self._call_api(**kwargs)
        except Exception:
            logger.error("LLM call failed", exc_info=True)
            raise

        input_tokens = message.usage.input_tokens
        output_tokens = message.usage.output_tokens
        logger.debug("LLM response: %d input, %d output tokens", input_tokens, output_tokens)
        self._token_log.append((model, input_tokens, output_tokens))
        text = "".join(
            block.text for block in message.content if isinstance(getattr(block, "text", None), str)
        )
        return LLMResponse(
            text=text,
            input_tokens=input_tokens,
            output_tokens=output_tokens,
        )

    def get_token_summary(self) -> dict:
        """Return accumulated token usage and reset the log."""
        summary = {
            "input": sum(t[1] for t in self._token_log),
            "output": sum(t[2] for t in self._token_log),
            "calls": list(self._token_log),
        }
        self._token_log.clear()
        return summary
