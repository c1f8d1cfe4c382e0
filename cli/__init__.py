"""Command-line interface for the Xbox Live auth client

Exposes the authenticate, refresh, authorize-url, device-token, status and
logout commands.
"""

from cli.main import build_parser, main

__all__ = [
    "build_parser",
    "main",
]
