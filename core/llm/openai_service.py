"""
OpenAI Service - LLM implementation using the OpenAI SDK.

Talks to any OpenAI-compatible chat completions endpoint and returns raw
response text; JSON parsing is left to the callers.
"""
from typing import Dict, Any, List, Optional
import logging
import re

import openai
from openai import OpenAI
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)
from tenacity import RetryCallState
from core.llm.interfaces import LLMProvider

logger = logging.getLogger(__name__)

GEMINI_OPENAI_BASE_URL = "https://generativelanguage.googleapis.com/v1beta/openai/"

# Model fallback happens one level up, so keep per-model retries short.
DEFAULT_RETRY_ATTEMPTS = 3


# ---------------------------------------------------------------------------
# Retry helpers
# ---------------------------------------------------------------------------

def _is_retryable(exc: BaseException) -> bool:
    """Return True for transient errors that are worth retrying."""
    return isinstance(exc, (
        openai.RateLimitError,
        openai.APITimeoutError,
        openai.APIConnectionError,
        openai.InternalServerError,
    ))


def _log_retry(retry_state: RetryCallState) -> None:
    """Log a warning before each retry sleep, including Retry-After info."""
    exc = retry_state.outcome.exception()
    wait = retry_state.next_action.sleep if retry_state.next_action else 0
    if isinstance(exc, openai.RateLimitError):
        logger.warning(
            "Rate limit hit (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )
    else:
        logger.warning(
            "Transient API error (attempt %s). Waiting %.1fs before retry. Details: %s",
            retry_state.attempt_number, wait, exc,
        )


def _parse_reset_duration(value: str) -> float:
    """Parse an OpenAI reset-timer header value like '1s', '500ms', '1m30s' into seconds."""
    total = 0.0
    for amount, unit in re.findall(r"([\d.]+)(ms|s|m|h)", value):
        a = float(amount)
        if unit == "ms":
            total += a / 1000
        elif unit == "s":
            total += a
        elif unit == "m":
            total += a * 60
        else:  # h
            total += a * 3600
    return total


def _wait_from_rate_limit_headers(exc: openai.RateLimitError) -> float:
    """Extract the longest declared wait from rate-limit response headers.

    Reads (in priority order, taking the maximum):
      - ``retry-after``                standard HTTP, plain seconds
      - ``x-ratelimit-reset-requests`` OpenAI request-quota reset duration
      - ``x-ratelimit-reset-tokens``   OpenAI token-quota reset duration

    Returns 0.0 if no usable header is present.
    """
    try:
        headers = exc.response.headers
        candidates: list[float] = []

        retry_after = headers.get("retry-after", "")
        if retry_after:
            try:
                candidates.append(float(retry_after))
            except ValueError:
                pass

        for header in ("x-ratelimit-reset-requests", "x-ratelimit-reset-tokens"):
            parsed = _parse_reset_duration(headers.get(header, ""))
            if parsed > 0:
                candidates.append(parsed)

        return max(candidates) if candidates else 0.0
    except Exception:
        return 0.0


def _wait_respecting_retry_after(retry_state: RetryCallState) -> float:
    """Return how long tenacity should sleep before the next attempt.

    For ``RateLimitError``: honours server-declared timers via response headers.
    For all other retryable errors: falls back to capped exponential backoff.
    """
    exc = retry_state.outcome.exception()
    if isinstance(exc, openai.RateLimitError):
        wait = _wait_from_rate_limit_headers(exc)
        if wait > 0:
            wait = min(wait, 120)  # safety cap at 2 min
            logger.info("Rate limit headers indicate %.1fs wait.", wait)
            return wait

    # Fallback: exponential backoff 2 → 4 → 8 … capped at 60s
    exp = wait_exponential(multiplier=1, min=2, max=60)
    return exp(retry_state)


def _llm_retry(attempts: int = DEFAULT_RETRY_ATTEMPTS, **kwargs):
    """Return a tenacity @retry decorator for LLM API calls."""
    return retry(
        retry=retry_if_exception(_is_retryable),
        wait=_wait_respecting_retry_after,
        stop=stop_after_attempt(attempts),
        before_sleep=_log_retry,
        reraise=True,
        **kwargs,
    )


class OpenAIService(LLMProvider):
    """
    Generative model client for any OpenAI-compatible endpoint.

    Defaults to Gemini's OpenAI-compatible API. One instance is built by
    AppContext and shared by the scorer strategies and the skill extractor.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        model_config: Optional[Dict[str, Any]] = None,
        timeout_seconds: Optional[float] = None,
        retry_attempts: int = DEFAULT_RETRY_ATTEMPTS,
    ):
        client_kwargs: Dict[str, Any] = {}
        if api_key:
            client_kwargs['api_key'] = api_key
        client_kwargs['base_url'] = base_url or GEMINI_OPENAI_BASE_URL
        if timeout_seconds:
            client_kwargs['timeout'] = timeout_seconds
        # Retries are handled by tenacity below
        client_kwargs['max_retries'] = 0

        self.client = OpenAI(**client_kwargs)
        self._create_completion = _llm_retry(retry_attempts)(self._create)

        self.model_config = model_config or {}
        self.default_model = self.model_config.get('default_model', 'gemini-2.0-flash')
        self.default_temperature = self.model_config.get('temperature', 0.2)
        self.default_max_output_tokens = self.model_config.get('max_output_tokens', 2048)

    def _create(self, **kwargs):
        return self.client.chat.completions.create(**kwargs)

    def generate_text(
        self,
        prompt: str,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        max_output_tokens: Optional[int] = None,
        system_prompt: Optional[str] = None,
    ) -> str:
        """Run one chat completion and return the message text.

        Args:
            prompt: User prompt
            model: Model id (defaults to the configured default model)
            temperature: Sampling temperature
            max_output_tokens: Response token cap
            system_prompt: Optional system instruction

        Returns:
            Raw response text (may be wrapped in markdown)
        """
        model = model or self.default_model
        messages: List[Dict[str, str]] = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": prompt})

        logger.debug("Sending %d chars to %s", len(prompt), model)
        response = self._create_completion(
            model=model,
            messages=messages,
            temperature=self.default_temperature if temperature is None else temperature,
            max_tokens=max_output_tokens or self.default_max_output_tokens,
        )

        try:
            content = response.choices[0].message.content
        except (IndexError, AttributeError) as e:
            logger.error(f"Malformed completion response from {model}: {e}")
            raise

        if content is None:
            raise ValueError(f"Empty completion from {model}")

        logger.info(f"Response received from {model} (length: {len(content)})")
        return content
