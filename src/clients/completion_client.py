"""Chat completion client for recipe generation.

Single-attempt, deadline-bounded calls to an OpenAI-compatible
/chat/completions endpoint over aiohttp. The bearer credential is read from
the environment on every call and checked before any network activity.
"""

import asyncio
import time
from typing import Any, Optional

import aiohttp

from src.utils.config import config
from src.utils.errors import MissingApiKeyError, UpstreamError, UpstreamTimeoutError
from src.utils.logger import logger


def extract_error_message(body: Any) -> Optional[str]:
    """Pull error.message out of a provider error body, if there is one."""
    if isinstance(body, dict):
        error = body.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(error, str):
            return error
    return None


def extract_message_content(body: Any) -> Optional[str]:
    """Return choices[0].message.content, or None if the path is absent or not a string."""
    try:
        content = body["choices"][0]["message"]["content"]
    except (KeyError, IndexError, TypeError):
        return None
    return content if isinstance(content, str) else None


class CompletionClient:
    """Adapter around the upstream chat completion API.

    One instance can be shared across requests: it holds only settings, and a
    fresh aiohttp session is opened per call and closed on completion,
    failure or cancellation.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        model: Optional[str] = None,
        temperature: Optional[float] = None,
        timeout_seconds: Optional[float] = None,
    ) -> None:
        """Initialize the client, defaulting every setting from config.

        Args:
            base_url: API root, e.g. "https://api.openai.com/v1".
            model: Model identifier sent with each request.
            temperature: Sampling temperature.
            timeout_seconds: Default deadline for complete().
        """
        self.base_url = (base_url or config.OPENAI_BASE_URL).rstrip("/")
        self.model = model or config.OPENAI_MODEL
        self.temperature = config.TEMPERATURE if temperature is None else temperature
        self.timeout_seconds = config.UPSTREAM_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/chat/completions"

    def build_payload(self, prompt: str) -> dict[str, Any]:
        """Build the completion request body for one prompt."""
        return {
            "model": self.model,
            "messages": [{"role": "user", "content": prompt}],
            "temperature": self.temperature,
            "response_format": {"type": "json_object"},
        }

    async def complete(self, prompt: str, timeout_seconds: Optional[float] = None) -> Optional[str]:
        """Send one completion request and return the message content.

        Args:
            prompt: User message content.
            timeout_seconds: Hard deadline for the whole call. Defaults to the
                client's configured deadline.

        Returns:
            choices[0].message.content, or None if the response had no such string.

        Raises:
            MissingApiKeyError: If OPENAI_API_KEY is not set (no request is sent).
            UpstreamTimeoutError: If the deadline expired; the request is cancelled.
            UpstreamError: On transport failure, a non-2xx status, or a non-JSON body.
        """
        api_key = config.get_openai_api_key()
        if not api_key:
            logger.error("OPENAI_API_KEY is not set, refusing to call the completion API")
            raise MissingApiKeyError()

        deadline = self.timeout_seconds if timeout_seconds is None else timeout_seconds
        headers = {
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        }
        payload = self.build_payload(prompt)

        logger.info(f"Calling completion API (model={self.model}, deadline={deadline:.1f}s)")
        started = time.perf_counter()
        try:
            # wait_for cancels _post on expiry, which unwinds its async-with blocks
            body = await asyncio.wait_for(self._post(payload, headers), timeout=deadline)
        except asyncio.TimeoutError as e:
            logger.warning(f"Completion API timed out after {deadline:.1f}s, request cancelled")
            raise UpstreamTimeoutError() from e
        except aiohttp.ClientError as e:
            logger.error(f"Completion API transport error: {e}")
            raise UpstreamError() from e

        elapsed_ms = int((time.perf_counter() - started) * 1000)
        logger.info(f"Completion API responded in {elapsed_ms}ms")
        return extract_message_content(body)

    async def _post(self, payload: dict[str, Any], headers: dict[str, str]) -> dict[str, Any]:
        async with aiohttp.ClientSession() as session:
            async with session.post(self.endpoint, json=payload, headers=headers) as response:
                try:
                    body = await response.json(content_type=None)
                except ValueError:
                    body = None

                if response.status >= 400:
                    message = extract_error_message(body)
                    logger.error(f"Completion API returned HTTP {response.status}: {message}")
                    raise UpstreamError(message)

                if not isinstance(body, dict):
                    logger.error("Completion API returned a non-JSON body")
                    raise UpstreamError("Upstream returned an unreadable response")

                return body
