"""Unit tests for prompt construction and the generative language client"""

import json

import httpx
import pytest
from datetime import datetime
from urllib.parse import unquote

from aqsati.domain.exceptions import MessagingServiceError
from aqsati.domain.messaging import (
    build_reminder_prompt,
    build_report_prompt,
    reminder_context,
    report_context,
    whatsapp_link,
)
from aqsati.domain.models import Client
from aqsati.domain.portfolio import portfolio_totals, summarize_client
from aqsati.infrastructure.clients.genai import GenAIClient


def _completion(text: str) -> dict:
    return {"candidates": [{"content": {"role": "model", "parts": [{"text": text}]}}]}


def _client(handler, **kwargs) -> GenAIClient:
    client = GenAIClient(api_key="test-key", model="test-model", base_url="https://genai.test/v1beta",
                         transport=httpx.MockTransport(handler), **kwargs)
    client.backoff_base = 0
    return client


def test_reminder_prompt(sample_client: Client):
    summary = summarize_client(sample_client, 300.0, datetime(2024, 4, 20))
    ctx = reminder_context(summary)

    prompt = build_reminder_prompt(ctx, "ar")

    assert ctx.remaining == 900.0
    assert ctx.end_date == "2025-01-01"
    assert "Arabic" in prompt
    assert "Ahmed Ali" in prompt
    assert "900" in prompt


def test_report_prompt(sample_client: Client):
    summary = summarize_client(sample_client, 300.0, datetime(2024, 4, 20))
    totals = portfolio_totals([sample_client], [])
    ctx = report_context(totals, [summary], "en")

    prompt = build_report_prompt(ctx, "en")

    assert ctx.clients[0].status == "Late"
    assert "English" in prompt
    assert "Client: Ahmed Ali, Status: Late, Remaining: 900" in prompt
    assert "Total Receivables: 1200" in prompt
    assert "Number of Clients: 1" in prompt


def test_report_prompt_without_clients():
    ctx = report_context(portfolio_totals([], []), [], "en")
    prompt = build_report_prompt(ctx)
    assert "Collected: 0.0%" in prompt
    assert "(no clients)" in prompt


def test_whatsapp_link_cleans_phone():
    url = whatsapp_link("+20 (101) 234-5678", "مرحبًا أحمد، المبلغ المتبقي 900")

    assert url.startswith("https://wa.me/201012345678?text=")
    assert unquote(url.split("text=", 1)[1]) == "مرحبًا أحمد، المبلغ المتبقي 900"
    assert " " not in url


async def test_generate_text_success():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json=_completion("  Hello Ahmed  "))

    text = await _client(handler).generate_text("Say hello")

    assert text == "Hello Ahmed"
    assert seen["url"].startswith("https://genai.test/v1beta/models/test-model:generateContent")
    assert "key=test-key" in seen["url"]
    assert seen["body"]["contents"][0]["parts"][0]["text"] == "Say hello"


async def test_generate_text_retries_server_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        if len(calls) < 3:
            return httpx.Response(503)
        return httpx.Response(200, json=_completion("ok"))

    client = _client(handler)
    client.max_retries = 3

    assert await client.generate_text("ping") == "ok"
    assert len(calls) == 3


async def test_generate_text_gives_up_after_max_retries():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        raise httpx.ConnectError("connection refused", request=request)

    client = _client(handler)
    client.max_retries = 2

    with pytest.raises(MessagingServiceError):
        await client.generate_text("ping")
    assert len(calls) == 2


async def test_generate_text_does_not_retry_client_errors():
    calls = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(400, json={"error": {"message": "bad request"}})

    with pytest.raises(MessagingServiceError, match="400"):
        await _client(handler).generate_text("ping")
    assert len(calls) == 1


async def test_generate_text_malformed_response():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"candidates": []})

    with pytest.raises(MessagingServiceError, match="Invalid response"):
        await _client(handler).generate_text("ping")


async def test_missing_api_key():
    client = GenAIClient(api_key="")
    with pytest.raises(MessagingServiceError, match="not configured"):
        await client.generate_text("ping")
