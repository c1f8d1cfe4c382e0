"""Shared utilities for the xbox-auth CLI and library"""

from .storage import FileTokenStore
from .redaction import mask
from .debug_console import (
    DebugCapturingConsole,
    create_console,
    setup_debug_logger,
)

__all__ = [
    "FileTokenStore",
    "mask",
    "DebugCapturingConsole",
    "create_console",
    "setup_debug_logger",
]
