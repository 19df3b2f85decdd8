import asyncio
import logging
import time
from datetime import datetime
from enum import Enum

from rich.console import Console

from .clients import LLMClient
from .exceptions import PreflightError, StreamError
from .models.query import QueryResult
from .ui.renderer import StreamRenderer
from .ui.status_line import StatusLine
from .utils.config import Config
from .utils.console import print_query_header, print_response_summary

logger = logging.getLogger(__name__)

CONNECTING_TEXT = "🤖 Connecting to AI model..."
PREPARING_TEXT = "📝 Preparing to generate response..."
GENERATING_TEXT = "🔄 Generating response..."
COMPLETED_TEXT = "Response completed!"
FAILED_TEXT = "❌ Failed to generate response"
INTERRUPTED_TEXT = "Query interrupted."


class OrchestratorState(Enum):
    IDLE = "idle"
    CONNECTING = "connecting"
    PREPARING = "preparing"
    STREAMING = "streaming"
    COMPLETED = "completed"
    FAILED = "failed"


class QueryOrchestrator:
    """Runs one query at a time against a streaming backend.

    The caller owns the pre-flight status line and passes it to
    process_query; the orchestrator stops it before creating the status
    line used while streaming, so only one is ever active.
    """

    def __init__(self, client: LLMClient, config: Config, console: Console):
        self.client = client
        self.config = config
        self.console = console
        self.state = OrchestratorState.IDLE

    def _transition(self, state: OrchestratorState):
        logger.debug(f"Query state: {self.state.value} -> {state.value}")
        self.state = state

    async def _preflight(self, status_line: StatusLine):
        try:
            self._transition(OrchestratorState.CONNECTING)
            status_line.set_text(CONNECTING_TEXT)
            await asyncio.sleep(self.config.CONNECT_DELAY)

            self._transition(OrchestratorState.PREPARING)
            status_line.set_text(PREPARING_TEXT)
            await asyncio.sleep(self.config.PREPARE_DELAY)
        except (KeyboardInterrupt, asyncio.CancelledError):
            self._transition(OrchestratorState.FAILED)
            if not status_line.closed:
                status_line.fail(INTERRUPTED_TEXT)
            raise
        except Exception as e:
            logger.debug(f"Pre-flight failed: {e}", exc_info=True)
            self._transition(OrchestratorState.FAILED)
            if not status_line.closed:
                status_line.fail(FAILED_TEXT)
            raise PreflightError(e) from e

    async def process_query(self, query: str, status_line: StatusLine) -> QueryResult:
        if not query or not query.strip():
            raise ValueError("Query must be a non-empty string")

        self.state = OrchestratorState.IDLE
        await self._preflight(status_line)

        # Until the streaming line exists, failures are reported on the pre-flight one
        active_line = status_line
        start_time = time.time()
        try:
            status_line.stop()
            print_query_header(self.console, query)

            active_line = StatusLine(self.console, plain=self.config.PLAIN_OUTPUT)
            renderer = StreamRenderer(self.console, active_line)
            self._transition(OrchestratorState.STREAMING)
            renderer.start(GENERATING_TEXT)

            response = await self.client.stream_response(query, renderer.on_fragment)

            active_line.succeed(COMPLETED_TEXT)
        except (KeyboardInterrupt, asyncio.CancelledError):
            self._transition(OrchestratorState.FAILED)
            if not active_line.closed:
                active_line.fail(INTERRUPTED_TEXT)
            raise
        except Exception as e:
            logger.debug(f"Error during query: {e}", exc_info=True)
            self._transition(OrchestratorState.FAILED)
            if not active_line.closed:
                active_line.fail(FAILED_TEXT)
            raise StreamError(e) from e

        self._transition(OrchestratorState.COMPLETED)
        finished_at = datetime.now()
        elapsed = time.time() - start_time
        print_response_summary(self.console, renderer.stats, finished_at, elapsed)

        return QueryResult(
            query=query,
            response=response,
            timestamp=finished_at,
            stats=renderer.stats,
            elapsed=elapsed,
            model=self.client.model,
        )
