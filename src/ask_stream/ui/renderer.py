import logging

from rich.console import Console

from ask_stream.models.query import StreamStats
from ask_stream.stats import ChunkAggregator
from ask_stream.ui.status_line import StatusLine

logger = logging.getLogger(__name__)


def format_progress(stats: StreamStats) -> str:
    return f"Generated {stats.word_count} words, {stats.char_count} characters..."


class StreamRenderer:
    """Writes streamed fragments above a status line that tracks progress.

    Fragment text is permanent output: it is appended once and never erased.
    Only the status line below it is rewritten.
    """

    def __init__(self, console: Console, status_line: StatusLine, aggregator: ChunkAggregator | None = None):
        self.console = console
        self.status_line = status_line
        self.aggregator = aggregator or ChunkAggregator()
        self.fragment_count = 0

    @property
    def stats(self) -> StreamStats:
        return self.aggregator.stats

    def start(self, text: str) -> None:
        self.status_line.start(text)

    def on_fragment(self, fragment: str) -> None:
        self.status_line.clear()

        # Written raw: rich would strip control characters and expand tabs
        out = self.console.file
        out.write(fragment)
        if not fragment.endswith("\n"):
            out.write("\n")
        out.flush()

        stats = self.aggregator.accumulate(fragment)
        self.fragment_count += 1
        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(f"Fragment {self.fragment_count}: {len(fragment)} chars, totals {stats}")

        self.status_line.set_text(format_progress(stats))
