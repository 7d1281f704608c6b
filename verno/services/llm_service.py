"""
LLM Service - Text generation collaborator for the agents.

The pipeline treats the model as an opaque capability:

    generate_text(prompt) -> str
    stream_generate(prompt, options, on_token)     (optional)

Callers that want streaming go through ``stream_text``, which falls back to
a single ``generate_text`` call, delivered as one token, when the client
cannot stream.

OpenAICompatibleClient speaks the OpenAI ``/chat/completions`` format, which
OpenAI, Groq, OpenRouter, Together and local servers (Ollama, LM Studio,
vLLM) all accept. No retries: failures surface as ProviderError.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Protocol, runtime_checkable

import httpx

from verno.core.errors import ProviderError


logger = logging.getLogger(__name__)

TokenCallback = Callable[[str], None]

DEFAULT_SYSTEM_PROMPT = "You are a helpful code generation assistant."


@runtime_checkable
class LLMClient(Protocol):
    """Anything that can turn a prompt into text."""

    async def generate_text(self, prompt: str, options: Optional[Dict[str, Any]] = None) -> str:
        ...


async def stream_text(
    llm: LLMClient,
    prompt: str,
    on_token: TokenCallback,
    options: Optional[Dict[str, Any]] = None
) -> None:
    """
    Stream a completion through ``on_token``.

    Uses the client's ``stream_generate`` when it has one; otherwise calls
    ``generate_text`` and delivers the full text as a single notification.
    """
    stream_generate = getattr(llm, "stream_generate", None)
    if callable(stream_generate):
        await stream_generate(prompt, options, on_token)
        return

    text = await llm.generate_text(prompt, options)
    on_token(text)


@dataclass
class LLMConfig:
    """Configuration for an OpenAI-compatible endpoint."""
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4o-mini"
    api_key: Optional[str] = None
    temperature: float = 0.7
    max_tokens: int = 2000
    timeout: float = 120.0
    system_prompt: str = DEFAULT_SYSTEM_PROMPT


class OpenAICompatibleClient:
    """
    LLM client for OpenAI-style chat completion APIs.

    Usage:
        client = OpenAICompatibleClient(LLMConfig(api_key="sk-..."))
        text = await client.generate_text("Describe a todo app")

        await client.stream_generate("Describe a todo app", None, print)
    """

    def __init__(
        self,
        config: Optional[LLMConfig] = None,
        http_client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            config: Endpoint configuration
            http_client: Pre-built client (tests pass one with a mock transport)
        """
        self.config = config or LLMConfig()
        self._client = http_client or httpx.AsyncClient(timeout=self.config.timeout)

    async def generate_text(self, prompt: str, options: Optional[Dict[str, Any]] = None) -> str:
        payload = self._build_payload(prompt, options, stream=False)

        try:
            response = await self._client.post(
                self._endpoint(), json=payload, headers=self._headers()
            )
        except httpx.HTTPError as e:
            raise ProviderError(f"LLM request failed: {e}") from e

        self._raise_for_status(response)

        try:
            data = response.json()
            return data["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise ProviderError(f"Unexpected LLM response format: {e}") from e

    async def stream_generate(
        self,
        prompt: str,
        options: Optional[Dict[str, Any]],
        on_token: TokenCallback
    ) -> None:
        """Stream a completion over server-sent events, one callback per chunk."""
        payload = self._build_payload(prompt, options, stream=True)

        try:
            async with self._client.stream(
                "POST", self._endpoint(), json=payload, headers=self._headers()
            ) as response:
                if response.status_code >= 400:
                    await response.aread()
                    self._raise_for_status(response)

                async for line in response.aiter_lines():
                    token = _parse_sse_line(line)
                    if token is None:
                        continue
                    if token is _STREAM_DONE:
                        break
                    on_token(token)
        except httpx.HTTPError as e:
            raise ProviderError(f"LLM stream failed: {e}") from e

    def get_model_info(self) -> Dict[str, Any]:
        return {
            "provider": "openai-compatible",
            "model": self.config.model,
            "endpoint": self.config.base_url,
        }

    async def close(self) -> None:
        await self._client.aclose()

    def _endpoint(self) -> str:
        return f"{self.config.base_url.rstrip('/')}/chat/completions"

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    def _build_payload(
        self,
        prompt: str,
        options: Optional[Dict[str, Any]],
        stream: bool
    ) -> Dict[str, Any]:
        options = options or {}
        messages: List[Dict[str, str]] = [
            {"role": "system", "content": options.get("system_prompt", self.config.system_prompt)},
            {"role": "user", "content": prompt},
        ]
        return {
            "model": options.get("model", self.config.model),
            "messages": messages,
            "temperature": options.get("temperature", self.config.temperature),
            "max_tokens": options.get("max_tokens", self.config.max_tokens),
            "stream": stream,
        }

    def _raise_for_status(self, response: httpx.Response) -> None:
        if response.status_code < 400:
            return
        try:
            message = response.json().get("error", {}).get("message") or response.reason_phrase
        except (ValueError, AttributeError):
            message = response.reason_phrase
        logger.error(f"LLM API error {response.status_code}: {message}")
        raise ProviderError(f"LLM API error: {message}", status=response.status_code)


_STREAM_DONE = object()


def _parse_sse_line(line: str) -> Any:
    """
    Extract the text delta from one SSE line.

    Returns None for lines without content, ``_STREAM_DONE`` at the end
    marker, otherwise the token text.
    """
    line = line.strip()
    if not line.startswith("data:"):
        return None

    data = line[len("data:"):].strip()
    if data == "[DONE]":
        return _STREAM_DONE

    try:
        chunk = json.loads(data)
        content = chunk["choices"][0]["delta"].get("content")
    except (ValueError, KeyError, IndexError, TypeError, AttributeError):
        return None
    return content or None
