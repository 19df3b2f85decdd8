"""
Exceptions raised while running a query.

Every error is fatal to the query that raised it; callers decide whether to
retry the whole query.
"""


class AskStreamError(Exception):
    """Base exception for all ask_stream errors."""

    pass


class PreflightError(AskStreamError):
    """Failure while showing the connecting/preparing status messages."""

    def __init__(self, original: BaseException):
        super().__init__(f"Error preparing query: {original}")
        self.original = original


class StreamError(AskStreamError):
    """The backend failed after streaming started.

    The original error's text is kept in the message and the exception itself
    is available as ``original`` (and as ``__cause__`` when raised with ``from``).
    """

    def __init__(self, original: BaseException):
        super().__init__(f"Error processing query: {original}")
        self.original = original


class StatusLineClosedError(AskStreamError):
    """A status line was updated after it succeeded or failed."""

    pass


class BackendConfigurationError(AskStreamError):
    """Unknown model alias, unsupported backend type or missing API key."""

    pass
