from __future__ import annotations

import logging
import sys

from rich.console import Console
from rich.logging import RichHandler


def configure_logging(verbose: int = 0) -> None:
    """
    Install a single Rich handler on stderr.

    Levels: WARNING (no -v), INFO (-v), DEBUG (-vv).
    """
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    level = logging.WARNING if verbose == 0 else (logging.INFO if verbose == 1 else logging.DEBUG)
    handler = RichHandler(
        console=Console(file=sys.stderr),
        show_time=False,
        show_path=False,
        rich_tracebacks=True,
    )
    handler.setLevel(level)
    root.addHandler(handler)
    root.setLevel(level)
