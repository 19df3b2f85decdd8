from .query import QueryResult, StreamStats

__all__ = ["QueryResult", "StreamStats"]
