"""CLI entry point and argument parsing"""

import argparse
import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

import settings
from cli.commands import (
    handle_authenticate,
    handle_authorize_url,
    handle_device_token,
    handle_logout,
    handle_refresh,
    handle_status,
)
from utils.debug_console import DEBUG_LOG_FILE, create_console, setup_debug_logger

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False) -> Console:
    """
    Configure root logging for the CLI and return the console to print with

    Args:
        debug: Log at DEBUG level and mirror console output to the debug log

    Returns:
        Console instance (debug-capturing when debug is enabled)
    """
    level = logging.DEBUG if debug else getattr(logging, str(settings.LOG_LEVEL).upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    root_logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=debug))

    if not debug:
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)
        return create_console()

    log_file = os.path.abspath(DEBUG_LOG_FILE)
    file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8')
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
    root_logger.addHandler(file_handler)

    console = create_console(debug_logger=setup_debug_logger(log_file))
    logger.info(f"Debug logging enabled - appending to {log_file}")
    return console


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xbox-auth", description="Xbox Live authentication CLI")
    parser.add_argument("--debug", "-d", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help=f"Request timeout in seconds (default: {settings.DEFAULT_TIMEOUT}, "
             f"clamped to {settings.MIN_TIMEOUT}-{settings.MAX_TIMEOUT})"
    )
    parser.add_argument("--reveal", action="store_true", help="Print tokens in clear instead of masked")

    subparsers = parser.add_subparsers(dest="command", required=True)

    auth_parser = subparsers.add_parser("authenticate", help="Exchange email/password for an XSTS token")
    auth_parser.add_argument("--email", default=None, help="Account email (default: ACCOUNT_TEST_EMAIL or prompt)")
    auth_parser.add_argument("--password", default=None, help="Account password (default: ACCOUNT_TEST_PASSWORD or prompt)")
    auth_parser.add_argument("--raw", action="store_true", help="Print every step response")
    auth_parser.add_argument("--relying-party", default=None, help="XSTS relying party")
    auth_parser.add_argument("--sandbox", default=None, help="Sandbox id (default: RETAIL)")
    auth_parser.add_argument("--device-token", default=None, help="Device token, required for child accounts")
    auth_parser.add_argument("--title-token", default=None, help="Title token, requires a device token")
    auth_parser.add_argument(
        "--dummy-device-token",
        action="store_true",
        help="Request a dummy Win32 device token first (experimental)"
    )
    auth_parser.set_defaults(handler=handle_authenticate)

    refresh_parser = subparsers.add_parser("refresh", help="Refresh a Microsoft Live access token")
    refresh_parser.add_argument("token", nargs="?", default=None, help="Refresh token (default: the stored one)")
    refresh_parser.add_argument("--store", default=None, help=f"Token file (default: {settings.TOKEN_FILE})")
    refresh_parser.add_argument("--client-id", default=settings.LIVE_CLIENT_ID)
    refresh_parser.add_argument("--scope", default=settings.LIVE_SCOPE)
    refresh_parser.add_argument("--client-secret", default=None)
    refresh_parser.set_defaults(handler=handle_refresh)

    url_parser = subparsers.add_parser("authorize-url", help="Print the Microsoft Live authorize URL")
    url_parser.add_argument("--client-id", default=settings.LIVE_CLIENT_ID)
    url_parser.add_argument("--scope", default=settings.LIVE_SCOPE)
    url_parser.add_argument("--response-type", default=settings.LIVE_RESPONSE_TYPE, choices=["token", "code"])
    url_parser.add_argument("--redirect-uri", default=settings.LIVE_REDIRECT_URI)
    url_parser.set_defaults(handler=handle_authorize_url)

    device_parser = subparsers.add_parser("device-token", help="Request a dummy Win32 device token (experimental)")
    device_parser.set_defaults(handler=handle_device_token)

    status_parser = subparsers.add_parser("status", help="Show the stored Microsoft Live tokens")
    status_parser.add_argument("--store", default=None, help=f"Token file (default: {settings.TOKEN_FILE})")
    status_parser.set_defaults(handler=handle_status)

    logout_parser = subparsers.add_parser("logout", help="Remove the stored Microsoft Live tokens")
    logout_parser.add_argument("--store", default=None, help=f"Token file (default: {settings.TOKEN_FILE})")
    logout_parser.set_defaults(handler=handle_logout)

    return parser


def main(argv=None) -> int:
    """Entry point for the CLI"""
    parser = build_parser()
    args = parser.parse_args(argv)
    console = setup_logging(args.debug)

    try:
        return args.handler(args, console)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        return 130
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {e}")
        if args.debug:
            import traceback
            traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
