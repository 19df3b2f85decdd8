from ask_stream.models.query import StreamStats


class ChunkAggregator:
    """Accumulates word and character counts over streamed fragments.

    Every space character in a fragment is one more word boundary; the first
    non-empty fragment also opens the first word. Words split across fragments
    or separated by other whitespace are therefore only approximated. Fragments
    are never inspected beyond that.
    """

    def __init__(self):
        self._word_count = 0
        self._char_count = 0

    def accumulate(self, fragment: str) -> StreamStats:
        if fragment and self._char_count == 0:
            self._word_count += 1
        self._char_count += len(fragment)
        self._word_count += fragment.count(" ")
        return self.stats

    @property
    def stats(self) -> StreamStats:
        return StreamStats(word_count=self._word_count, char_count=self._char_count)

    def reset(self) -> None:
        self._word_count = 0
        self._char_count = 0
