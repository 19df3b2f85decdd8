from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple


@dataclass(frozen=True)
class StreamStats:
    """Running word/character counts for one streamed response."""
    word_count: int = 0
    char_count: int = 0

    def __str__(self) -> str:
        return f"{self.word_count} words, {self.char_count} characters"


@dataclass(frozen=True)
class QueryResult:
    """Outcome of one successful query run."""
    query: str
    response: str
    timestamp: datetime
    stats: StreamStats = StreamStats()
    elapsed: float = 0.0
    model: Optional[str] = None
    suggestions: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> dict:
        """Convert to dictionary format"""
        data = {
            "query": self.query,
            "response": self.response,
            "timestamp": self.timestamp.isoformat(),
            "word_count": self.stats.word_count,
            "char_count": self.stats.char_count,
            "elapsed": self.elapsed,
            "model": self.model,
        }
        if self.suggestions is not None:
            data["suggestions"] = list(self.suggestions)
        return data
