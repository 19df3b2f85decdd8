from .status_line import StatusLine, StatusLineState
from .renderer import StreamRenderer

__all__ = ["StatusLine", "StatusLineState", "StreamRenderer"]
