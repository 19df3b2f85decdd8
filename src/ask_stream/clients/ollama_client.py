import json
import logging
from typing import AsyncIterator

import httpx

from ask_stream.clients.base import LLMClient
from ask_stream.utils.config import Config

logger = logging.getLogger(__name__)


class OllamaStreamError(RuntimeError):
    """Ollama reported an error inside the response stream."""


class OllamaClient(LLMClient):
    def __init__(self, model: str, config: Config, transport: httpx.AsyncBaseTransport | None = None):
        super().__init__(model, config)
        self.base_url = config.OLLAMA_URL.rstrip("/")
        self._transport = transport

    def _build_payload(self, query: str) -> dict:
        return {
            "model": self.model,
            "messages": self.build_messages(query),
            "stream": True,
            "options": {
                "temperature": self.config.TEMPERATURE,
                "num_predict": self.config.MAX_TOKENS,
                "top_p": self.config.TOP_P
            }
        }

    async def iter_fragments(self, query: str) -> AsyncIterator[str]:
        """Stream newline-delimited JSON chunks from /api/chat."""
        payload = self._build_payload(query)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Ollama Request Payload: {json.dumps(payload)}")

        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.config.REQUEST_TIMEOUT, transport=self._transport) as client:
            async with client.stream("POST", "/api/chat", json=payload) as response:
                response.raise_for_status()
                async for line in response.aiter_lines():
                    if not line:
                        continue
                    try:
                        chunk = json.loads(line)
                    except json.JSONDecodeError:
                        logger.warning(f"Could not decode JSON line from Ollama: {line}")
                        continue

                    if "error" in chunk:
                        error_msg = chunk["error"]
                        if "GGML_ASSERT" in error_msg:
                            logger.warning("Ollama GGML assertion; this might be a model compatibility issue. Try a different model or quantization.")
                        raise OllamaStreamError(error_msg)

                    content = chunk.get("message", {}).get("content")
                    if content:
                        yield content
                    if chunk.get("done"):
                        break
