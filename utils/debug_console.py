"""Console helpers for the xbox-auth CLI

With --debug, everything printed on the Rich console is also written as plain
text to the debug log, next to the library's own log records.
"""

import io
import logging
import re
from typing import Optional

from rich.console import Console as RichConsole

ANSI_ESCAPE = re.compile(r'\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])')

DEBUG_LOG_FILE = "xbox_auth_debug.log"


class DebugCapturingConsole(RichConsole):
    """Rich Console that mirrors printed output to a debug logger"""

    def __init__(self, debug_logger: Optional[logging.Logger] = None, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.debug_logger = debug_logger
        self._log_prefix = "[CONSOLE] "

    def print(self, *objects, **kwargs):
        super().print(*objects, **kwargs)

        if self.debug_logger and self.debug_logger.isEnabledFor(logging.DEBUG):
            plain_text = self._render_to_plain_text(*objects, **kwargs)
            if plain_text.strip():
                self.debug_logger.debug(f"{self._log_prefix}{plain_text}")

    def _render_to_plain_text(self, *objects, **kwargs) -> str:
        """Render objects the way print() would, without styling"""
        buffer = io.StringIO()
        plain_console = RichConsole(
            file=buffer,
            force_terminal=False,
            width=self.width,
            legacy_windows=False,
        )
        plain_console.print(*objects, **kwargs)
        return ANSI_ESCAPE.sub('', buffer.getvalue()).rstrip()


def create_console(debug_logger: Optional[logging.Logger] = None, stderr: bool = False) -> RichConsole:
    """
    Create the CLI console.

    Args:
        debug_logger: Logger receiving a plain copy of the output, if any
        stderr: Print to stderr instead of stdout

    Returns:
        DebugCapturingConsole when a debug logger is given, plain Console otherwise
    """
    if debug_logger:
        return DebugCapturingConsole(debug_logger=debug_logger, stderr=stderr)
    return RichConsole(stderr=stderr)


def setup_debug_logger(log_file: str = DEBUG_LOG_FILE) -> logging.Logger:
    """
    Set up a dedicated logger for captured console output.

    Args:
        log_file: Path to debug log file, appended to

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger("xbox_auth.console")
    logger.setLevel(logging.DEBUG)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(message)s'))
    logger.addHandler(file_handler)

    # Console lines would otherwise be printed twice through the root handler
    logger.propagate = False

    return logger
