"""Generative Language API client for drafting reminders and reports"""

import asyncio
import logging
from typing import Any, Dict

import httpx

from aqsati.config import settings
from aqsati.domain.exceptions import MessagingServiceError
from aqsati.domain.messaging import build_reminder_prompt, build_report_prompt
from aqsati.domain.models import ReminderContext, ReportContext
from aqsati.infrastructure.observability.metrics import genai_failure_counter, genai_latency_histogram

logger = logging.getLogger(__name__)


def _extract_text(data: Dict[str, Any]) -> str:
    """Pull the first candidate's text out of a generateContent response"""
    parts = data["candidates"][0]["content"]["parts"]
    text = "".join(part.get("text", "") for part in parts).strip()
    if not text:
        raise ValueError("empty completion")
    return text


class GenAIClient:
    """Client for the hosted generative language model"""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key if api_key is not None else settings.genai_api_key
        self.model = model or settings.genai_model
        self.base_url = base_url or settings.genai_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = settings.genai_max_retries
        self.backoff_base = settings.genai_backoff_base
        self.transport = transport

    async def generate_text(self, prompt: str) -> str:
        """
        Send a prompt and return the model's text reply.

        Retry strategy:
        - Exponential backoff: base, 2*base, 4*base...
        - Retries on 5xx errors and network failures, not on 4xx

        Raises:
            MessagingServiceError: Missing API key, exhausted retries,
                client errors or malformed response
        """
        if not self.api_key:
            raise MessagingServiceError("Generative language API key is not configured")

        url = f"{self.base_url}/models/{self.model}:generateContent"
        payload = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}

        attempt = 0
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            while True:
                attempt += 1
                try:
                    with genai_latency_histogram.time():
                        response = await client.post(url, params={"key": self.api_key}, json=payload)
                    response.raise_for_status()
                    break

                except httpx.HTTPStatusError as e:
                    genai_failure_counter.inc()
                    status = e.response.status_code
                    if status < 500 or attempt >= self.max_retries:
                        raise MessagingServiceError(f"Generative language API error: {status}") from e

                except httpx.RequestError as e:
                    genai_failure_counter.inc()
                    if attempt >= self.max_retries:
                        raise MessagingServiceError(
                            f"Generative language API unavailable after {attempt} attempts"
                        ) from e

                backoff = self.backoff_base * (2 ** (attempt - 1))
                logger.warning("Generative language call failed, retrying", extra={"attempt": attempt, "backoff": backoff})
                await asyncio.sleep(backoff)

        try:
            return _extract_text(response.json())
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise MessagingServiceError(f"Invalid response from generative language API: {e}") from e

    async def generate_reminder_message(self, ctx: ReminderContext, locale: str = "ar") -> str:
        return await self.generate_text(build_reminder_prompt(ctx, locale))

    async def generate_summary_report(self, ctx: ReportContext, locale: str = "ar") -> str:
        return await self.generate_text(build_report_prompt(ctx, locale))
