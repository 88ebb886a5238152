"""Logging configuration for apsrepo.

Log records go to standard error through a rich handler, keeping standard
output free for the URLs and the external command output that apsrepo
prints.

Example:
    ```python
    from apsrepo.core.logging import setup_logging

    setup_logging(debug=True, log_file="~/logs/apsrepo.log")

    import logging
    logger = logging.getLogger(__name__)
    logger.info("| svn ls http://server/svn/repo")
    ```
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from rich.console import Console, ConsoleRenderable
from rich.logging import RichHandler
from rich.text import Text
from rich.traceback import Traceback

# Console for log output; long lines are not folded
console = Console(stderr=True, soft_wrap=True)

PACKAGE_LOGGER = "apsrepo"


class LineHandler(RichHandler):
    """Rich handler that prints each record on a single line.

    The ``| svn ...`` command echoes must stay copyable, so messages are not
    laid out in the column table RichHandler normally renders. Records with a
    traceback keep the default rendering.
    """

    def __init__(self, *args, show_path: bool = True, **kwargs) -> None:
        super().__init__(*args, show_path=show_path, **kwargs)
        self.show_path = show_path

    def render(
        self,
        *,
        record: logging.LogRecord,
        traceback: Optional[Traceback],
        message_renderable: ConsoleRenderable,
    ) -> ConsoleRenderable:
        if traceback is not None or not isinstance(message_renderable, Text):
            return super().render(
                record=record, traceback=traceback, message_renderable=message_renderable
            )

        line = Text.assemble(
            (datetime.fromtimestamp(record.created).strftime("[%X]"), "log.time"),
            " ",
            self.get_level_text(record),
            " ",
            message_renderable,
        )
        if self.show_path:
            line.append(f" {record.filename}:{record.lineno}", style="log.path")
        return line


def setup_logging(
    debug: bool = False,
    quiet: bool = False,
    log_file: Optional[str] = None,
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
) -> None:
    """Set up logging configuration.

    Handlers are installed on the ``apsrepo`` package logger rather than the
    root logger, and records still propagate to the root.

    Args:
        debug: Whether to enable debug logging (default: False).
        quiet: Suppress all console log output, including errors.
        log_file: Optional path to log file. If provided, logs will be
                 written to this file in addition to console output.
                 The path is expanded to handle ~ for home directory.
        log_format: Format string for file log messages.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)

    # Remove handlers from a previous invocation
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    # Messages carry user-supplied regular expressions, so markup stays off
    console_handler = LineHandler(
        console=console,
        show_path=debug,
        markup=False,
        rich_tracebacks=True,
        tracebacks_show_locals=debug,
    )
    console_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    if quiet:
        console_handler.setLevel(logging.CRITICAL + 1)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)  # Always log debug to file
        file_handler.setFormatter(logging.Formatter(log_format))
        logger.addHandler(file_handler)

    logger.debug("Logging initialized (debug=%s, quiet=%s)", debug, quiet)
    if log_file:
        logger.debug("Log file: %s", log_file)
