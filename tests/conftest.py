import io

import pytest
from rich.console import Console

from ask_stream.clients.base import LLMClient
from ask_stream.utils.config import Config


class FakeClient(LLMClient):
    """Streams a fixed list of fragments, then returns `final` (or their join)."""

    def __init__(self, config, fragments=(), final=None, error=None, fail_after=None):
        super().__init__("fake-model", config)
        self.fragments = list(fragments)
        self.final = final
        self.error = error
        self.fail_after = len(self.fragments) if fail_after is None else fail_after
        self.queries = []

    async def iter_fragments(self, query):
        self.queries.append(query)
        for i, fragment in enumerate(self.fragments):
            if self.error is not None and i == self.fail_after:
                raise self.error
            yield fragment
        if self.error is not None:
            raise self.error

    def final_response(self, fragments):
        if self.final is not None:
            return self.final
        return super().final_response(fragments)


@pytest.fixture
def config(tmp_path, monkeypatch):
    """Real Config with pacing disabled and no models.yaml on disk."""
    for var in ("ASK_STREAM_DEFAULT_MODEL_ALIAS", "ASK_STREAM_PLAIN_OUTPUT", "ASK_STREAM_CONNECT_DELAY", "ASK_STREAM_PREPARE_DELAY"):
        monkeypatch.delenv(var, raising=False)
    return Config(CONNECT_DELAY=0, PREPARE_DELAY=0, MODELS_CONFIG_PATH=str(tmp_path / "models.yaml"))


@pytest.fixture
def console(monkeypatch):
    """Terminal console writing to a buffer, without colors."""
    monkeypatch.setenv("TERM", "xterm-256color")
    monkeypatch.delenv("TTY_COMPATIBLE", raising=False)
    return Console(file=io.StringIO(), force_terminal=True, color_system=None, width=200)


@pytest.fixture
def output(console):
    return lambda: console.file.getvalue()


@pytest.fixture
def make_client(config):
    def _make(fragments=(), **kwargs):
        return FakeClient(config, fragments, **kwargs)
    return _make
