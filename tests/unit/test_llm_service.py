"""Tests for verno.services.llm_service: OpenAI-compatible client and streaming fallback."""

import json

import httpx
import pytest

from verno.core.errors import ProviderError
from verno.services.llm_service import LLMConfig, OpenAICompatibleClient, _parse_sse_line, stream_text

from tests.conftest import FakeLLM


def _client(handler, **config):
    transport = httpx.MockTransport(handler)
    return OpenAICompatibleClient(
        LLMConfig(base_url="https://llm.test/v1", **config),
        http_client=httpx.AsyncClient(transport=transport),
    )


def _completion(text):
    return {"choices": [{"message": {"role": "assistant", "content": text}}]}


# ── generate_text ────────────────────────────────────────────────────────────


class TestGenerateText:
    @pytest.mark.asyncio
    async def test_returns_message_content(self):
        client = _client(lambda request: httpx.Response(200, json=_completion("hello")))
        assert await client.generate_text("hi") == "hello"

    @pytest.mark.asyncio
    async def test_request_payload(self):
        captured = {}

        def handler(request):
            captured["url"] = str(request.url)
            captured["auth"] = request.headers.get("Authorization")
            captured["body"] = json.loads(request.content)
            return httpx.Response(200, json=_completion("ok"))

        client = _client(handler, api_key="sk-test", model="test-model")
        await client.generate_text("Describe a todo app", {"temperature": 0.1})

        assert captured["url"] == "https://llm.test/v1/chat/completions"
        assert captured["auth"] == "Bearer sk-test"
        body = captured["body"]
        assert body["model"] == "test-model"
        assert body["temperature"] == 0.1
        assert body["stream"] is False
        assert body["messages"][-1] == {"role": "user", "content": "Describe a todo app"}

    @pytest.mark.asyncio
    async def test_no_auth_header_without_key(self):
        seen = {}

        def handler(request):
            seen["auth"] = request.headers.get("Authorization")
            return httpx.Response(200, json=_completion("ok"))

        await _client(handler).generate_text("hi")
        assert seen["auth"] is None

    @pytest.mark.asyncio
    async def test_error_status_raises_provider_error(self):
        client = _client(lambda request: httpx.Response(429, json={"error": {"message": "slow down"}}))

        with pytest.raises(ProviderError) as exc_info:
            await client.generate_text("hi")

        assert exc_info.value.status == 429
        assert "slow down" in exc_info.value.message
        assert exc_info.value.status_code == 502

    @pytest.mark.asyncio
    async def test_malformed_body_raises_provider_error(self):
        client = _client(lambda request: httpx.Response(200, json={"unexpected": True}))
        with pytest.raises(ProviderError, match="Unexpected LLM response format"):
            await client.generate_text("hi")

    @pytest.mark.asyncio
    async def test_transport_error_raises_provider_error(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(ProviderError, match="LLM request failed"):
            await _client(handler).generate_text("hi")


# ── stream_generate ──────────────────────────────────────────────────────────


class TestStreamGenerate:
    @pytest.mark.asyncio
    async def test_tokens_delivered_in_order(self):
        chunks = [
            'data: {"choices": [{"delta": {"role": "assistant"}}]}',
            'data: {"choices": [{"delta": {"content": "Hel"}}]}',
            "",
            'data: {"choices": [{"delta": {"content": "lo"}}]}',
            "data: [DONE]",
            'data: {"choices": [{"delta": {"content": "ignored"}}]}',
        ]
        body = "\n".join(chunks) + "\n"
        client = _client(lambda request: httpx.Response(200, text=body))
        tokens = []

        await client.stream_generate("hi", None, tokens.append)

        assert tokens == ["Hel", "lo"]

    @pytest.mark.asyncio
    async def test_error_status_raises(self):
        client = _client(lambda request: httpx.Response(500, json={"error": {"message": "broken"}}))
        with pytest.raises(ProviderError) as exc_info:
            await client.stream_generate("hi", None, lambda token: None)
        assert exc_info.value.status == 500


class TestParseSseLine:
    def test_ignores_non_data_lines(self):
        assert _parse_sse_line(": keep-alive") is None

    def test_ignores_bad_json(self):
        assert _parse_sse_line("data: {oops") is None


# ── stream_text fallback ─────────────────────────────────────────────────────


class TestStreamText:
    @pytest.mark.asyncio
    async def test_fallback_delivers_single_token(self):
        tokens = []
        await stream_text(FakeLLM(default="whole answer"), "prompt", tokens.append)
        assert tokens == ["whole answer"]

    @pytest.mark.asyncio
    async def test_uses_streaming_when_available(self):
        class StreamingLLM(FakeLLM):
            async def stream_generate(self, prompt, options, on_token):
                for token in ("a", "b"):
                    on_token(token)

        tokens = []
        llm = StreamingLLM()
        await stream_text(llm, "prompt", tokens.append)

        assert tokens == ["a", "b"]
        assert llm.prompts == []

    def test_model_info(self):
        client = _client(lambda request: httpx.Response(200), model="m")
        assert client.get_model_info() == {
            "provider": "openai-compatible",
            "model": "m",
            "endpoint": "https://llm.test/v1",
        }
