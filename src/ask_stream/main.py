#!/usr/bin/env python
import logging
import sys

from rich.markup import escape

from ask_stream.cli import main as cli_main
from ask_stream.utils.console import console

logger = logging.getLogger(__name__)


def main() -> None:
    """Console-script entry point.

    The CLI exits on its own with 0, 1 or 130; anything that escapes it is a
    bug, reported on one line with exit code 1 (traceback under --debug).
    """
    try:
        cli_main()
    except Exception as e:
        logger.debug("Unhandled error", exc_info=True)
        console.print(f"[bold red]ask-stream crashed:[/bold red] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
