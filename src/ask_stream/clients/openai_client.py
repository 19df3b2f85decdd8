import json
import os
import logging
from typing import AsyncIterator, Optional

from openai import AsyncOpenAI

from ..clients.base import LLMClient
from ..exceptions import BackendConfigurationError
from ..utils.config import Config

logger = logging.getLogger(__name__)


class OpenAIClient(LLMClient):
    """Client for OpenAI and OpenAI-compatible chat completion APIs (Gemini included)."""

    def __init__(self, model: str, config: Config, base_url: Optional[str] = None, api_key_env: str = "OPENAI_API_KEY"):
        super().__init__(model, config)
        self.base_url = base_url
        self.api_key_env = api_key_env
        self.api_key = self._get_api_key()
        if not self.api_key:
            raise BackendConfigurationError(f"API key not found for model '{model}'. Set the {api_key_env} environment variable.")
        self.client = AsyncOpenAI(api_key=self.api_key, base_url=base_url, timeout=config.REQUEST_TIMEOUT)

    def _get_api_key(self) -> str | None:
        return os.getenv(self.api_key_env)

    def _model_supports_temperature_top_p(self) -> bool:
        """Some specialized and reasoning models reject temperature and top_p."""
        m = self.model.lower()
        return not (m.startswith("o1") or m.startswith("o3") or m.startswith("o4") or m.endswith("search-preview"))

    def _build_payload(self, query: str) -> dict:
        payload = {
            "model": self.model,
            "messages": self.build_messages(query),
            "stream": True,
            "max_tokens": self.config.MAX_TOKENS,
        }
        if self._model_supports_temperature_top_p():
            payload["temperature"] = self.config.TEMPERATURE
            payload["top_p"] = self.config.TOP_P
        return payload

    async def iter_fragments(self, query: str) -> AsyncIterator[str]:
        payload = self._build_payload(query)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"OpenAI Request Payload ({self.base_url or 'default endpoint'}): {json.dumps(payload)}")

        stream = await self.client.chat.completions.create(**payload)
        async for chunk in stream:
            if not chunk.choices:
                continue
            content = chunk.choices[0].delta.content
            if content:
                yield content
