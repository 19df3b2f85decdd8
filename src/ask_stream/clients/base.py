from abc import ABC, abstractmethod
from typing import AsyncIterator, Callable, List
import logging
import time

from ..utils.config import Config

logger = logging.getLogger(__name__)

FragmentCallback = Callable[[str], None]


class LLMClient(ABC):
    """Abstract base class for streaming LLM backends."""

    def __init__(self, model: str, config: Config):
        self.model = model
        self.config = config

    @abstractmethod
    def iter_fragments(self, query: str) -> AsyncIterator[str]:
        """Stream the model's answer to a query.

        Args:
            query: The user's question.

        Yields:
            Response fragments in delivery order. Any backend failure is raised
            from the iterator.
        """
        pass

    def final_response(self, fragments: List[str]) -> str:
        """Build the final response text from every fragment received."""
        return "".join(fragments)

    async def stream_response(self, query: str, on_fragment: FragmentCallback) -> str:
        """Call on_fragment for each fragment, then return the full response.

        The callback runs synchronously between awaits, so fragments are
        handled one at a time and strictly in order.
        """
        fragments: List[str] = []
        start_time = time.time()
        async for fragment in self.iter_fragments(query):
            if not fragment:
                continue
            fragments.append(fragment)
            on_fragment(fragment)
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"{type(self).__name__} streamed {len(fragments)} fragments from {self.model} in {time.time() - start_time:.2f}s")
        return self.final_response(fragments)

    def build_messages(self, query: str) -> list[dict]:
        messages = []
        if self.config.SYSTEM_MESSAGE:
            messages.append({"role": "system", "content": self.config.SYSTEM_MESSAGE})
        messages.append({"role": "user", "content": query})
        return messages
