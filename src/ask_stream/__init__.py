from .core import QueryOrchestrator, OrchestratorState
from .stats import ChunkAggregator
from .ui import StatusLine, StatusLineState, StreamRenderer
from .models import QueryResult, StreamStats
from .exceptions import AskStreamError, PreflightError, StreamError
