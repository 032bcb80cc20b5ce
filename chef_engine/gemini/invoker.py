"""HTTP invocation of Gemini generateContent endpoints with rate-limit backoff (async).

RetryingInvoker.invoke() POSTs a JSON payload and returns the parsed JSON body.

**Retry Strategy:**
- HTTP 429: retry up to max_retries times, waiting 2^attempt * base + uniform(0, jitter) ms
  (1s, 2s, 4s nominal with defaults, so at most ~7s plus jitter in total)
- Any other non-2xx: fail immediately with HttpError
- 429 after the budget is spent: RateLimitExhausted carrying the last 429 body
- Transport failure (connection refused, DNS, timeout): NetworkError, never retried

The sleep function and jitter source are injectable so tests can run the
backoff without real timers.
"""

import asyncio
import random
import re
from typing import Awaitable, Callable, Optional

import aiohttp

from chef_engine.gemini.errors import HttpError, NetworkError, RateLimitExhausted
from chef_engine.utils.config import config
from chef_engine.utils.logger import logger

RATE_LIMITED = 429

Sleep = Callable[[float], Awaitable[None]]
Jitter = Callable[[float, float], float]


def redact_key(url: str) -> str:
    """Hide the `key` query parameter so credentials never reach the logs."""
    return re.sub(r"([?&]key=)[^&]*", r"\1***", url)


class RetryingInvoker:
    """POST JSON to a generation endpoint, backing off on HTTP 429."""

    def __init__(
        self,
        max_retries: Optional[int] = None,
        base_delay_ms: Optional[int] = None,
        max_jitter_ms: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
        sleep: Sleep = asyncio.sleep,
        jitter: Jitter = random.uniform,
    ) -> None:
        """Initialize the invoker. Unset values fall back to configuration.

        Args:
            max_retries: Retries allowed after the first attempt (only 429 is retried).
            base_delay_ms: Backoff base; retry n waits 2^n * base_delay_ms.
            max_jitter_ms: Upper bound of the uniform jitter added to each wait.
            timeout_seconds: Total timeout per attempt.
            session: Shared aiohttp session. When None, one is opened per invoke().
            sleep: Awaitable delay function taking seconds.
            jitter: Function (low, high) -> float used for jitter.
        """
        self.max_retries = config.MAX_RETRIES if max_retries is None else max_retries
        self.base_delay_ms = config.RETRY_BASE_DELAY_MS if base_delay_ms is None else base_delay_ms
        self.max_jitter_ms = config.RETRY_MAX_JITTER_MS if max_jitter_ms is None else max_jitter_ms
        self.timeout_seconds = config.REQUEST_TIMEOUT_SECONDS if timeout_seconds is None else timeout_seconds
        self.session = session
        self._sleep = sleep
        self._jitter = jitter

    def backoff_delay_ms(self, attempt: int) -> float:
        """Delay before the retry following `attempt` (0-based)."""
        return (2 ** attempt) * self.base_delay_ms + self._jitter(0, self.max_jitter_ms)

    async def invoke(self, endpoint: str, payload: dict) -> dict:
        """Send payload to endpoint, retrying on rate limits.

        Args:
            endpoint: Full generateContent URL (including the key query parameter).
            payload: JSON-serialisable request body.

        Returns:
            Parsed JSON body of the first 2xx response.

        Raises:
            NetworkError: No response was received.
            RateLimitExhausted: Still 429 after max_retries retries.
            HttpError: Any other non-2xx status, or a 2xx body that is not JSON.
        """
        safe_url = redact_key(endpoint)
        attempt = 0

        while True:
            logger.debug(f"POST {safe_url} (attempt {attempt + 1}/{self.max_retries + 1})")
            status, body = await self._send(endpoint, payload)

            if 200 <= status < 300:
                if body is None:
                    raise HttpError(status, {}, "Malformed response body")
                return body

            if status == RATE_LIMITED and attempt < self.max_retries:
                delay_ms = self.backoff_delay_ms(attempt)
                logger.warning(
                    f"Rate limited by {safe_url}, retrying in {delay_ms / 1000:.2f}s "
                    f"(retry {attempt + 1}/{self.max_retries})",
                    extra={"attempt": attempt + 1, "status": status},
                )
                await self._sleep(delay_ms / 1000)
                attempt += 1
                continue

            if status == RATE_LIMITED:
                logger.error(f"Rate limit persisted after {self.max_retries} retries: {safe_url}")
                raise RateLimitExhausted(status, body, attempts=attempt + 1)

            error = HttpError(status, body)
            logger.error(f"Generation API error {status} from {safe_url}: {error.message}")
            raise error

    async def _send(self, endpoint: str, payload: dict) -> tuple[int, Optional[dict]]:
        """Perform one POST. Returns (status, parsed JSON body or None if not JSON)."""
        try:
            if self.session is not None:
                return await self._post(self.session, endpoint, payload)
            async with aiohttp.ClientSession() as session:
                return await self._post(session, endpoint, payload)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Network error calling {redact_key(endpoint)}: {e!r}")
            raise NetworkError(f"Network error while contacting generation service: {e}") from e

    async def _post(
        self, session: aiohttp.ClientSession, endpoint: str, payload: dict
    ) -> tuple[int, Optional[dict]]:
        timeout = aiohttp.ClientTimeout(total=self.timeout_seconds)
        async with session.post(endpoint, json=payload, timeout=timeout) as response:
            try:
                body = await response.json(content_type=None)
            except ValueError:
                body = None
            if not isinstance(body, dict):
                body = None
            return response.status, body
