"""Subcommand handlers for the CLI"""

import asyncio
import json
import logging
from typing import Optional

from pydantic import ValidationError
from rich.console import Console
from rich.prompt import Prompt

import settings
from errors import XboxAuthError
from live import get_authorize_url, refresh_access_token
from transport import FetchClient
from utils.redaction import mask
from utils.storage import FileTokenStore
from xbox_auth import AuthenticateOptions, authenticate
from xnet.experimental import create_dummy_win32_device_token
from cli.status_display import show_authenticate_result, show_error, show_live_tokens, show_store_status

logger = logging.getLogger(__name__)


def _resolve_credentials(args) -> tuple[str, str]:
    """Command line first, then ACCOUNT_TEST_* settings, then interactive prompt"""
    email = args.email or settings.ACCOUNT_TEST_EMAIL or Prompt.ask("Email")
    password = args.password or settings.ACCOUNT_TEST_PASSWORD or Prompt.ask("Password", password=True)
    return email, password


async def _authenticate(args, http: FetchClient):
    device_token: Optional[str] = args.device_token
    if args.dummy_device_token and not device_token:
        device_response = await create_dummy_win32_device_token(http=http)
        device_token = device_response["Token"]
        logger.debug(f"Using dummy device token {mask(device_token)}")

    options = AuthenticateOptions(
        xsts_relying_party=args.relying_party,
        sandbox_id=args.sandbox,
        device_token=device_token,
        title_token=args.title_token,
        raw=args.raw,
    )
    email, password = _resolve_credentials(args)
    return await authenticate(email, password, options, http=http)


def handle_authenticate(args, console: Console) -> int:
    """Run the full email/password to XSTS flow"""
    http = FetchClient(timeout=args.timeout)
    try:
        result = asyncio.run(_authenticate(args, http))
    except ValidationError as e:
        console.print(f"[red]ERROR:[/red] Invalid options: {e}")
        return 2
    except XboxAuthError as e:
        show_error(e, console, debug=args.debug)
        return 1

    show_authenticate_result(result, console, reveal=args.reveal)
    return 0


def handle_refresh(args, console: Console) -> int:
    """Refresh a Live access token, persisting the result in the token file"""
    store = FileTokenStore(args.store)
    refresh_token = args.token or store.get_refresh_token()
    if not refresh_token:
        console.print(f"[red]ERROR:[/red] No refresh token given and none stored in {store.token_file}")
        return 1

    http = FetchClient(timeout=args.timeout)
    try:
        response = asyncio.run(
            refresh_access_token(
                refresh_token,
                client_id=args.client_id,
                scope=args.scope,
                client_secret=args.client_secret,
                token_store=store,
                http=http,
            )
        )
    except XboxAuthError as e:
        show_error(e, console, debug=args.debug)
        return 1

    show_live_tokens(response, console, reveal=args.reveal)
    show_store_status(store, console)
    return 0


def handle_authorize_url(args, console: Console) -> int:
    """Print the Live authorize URL for a browser based login"""
    try:
        url = get_authorize_url(
            client_id=args.client_id,
            scope=args.scope,
            response_type=args.response_type,
            redirect_uri=args.redirect_uri,
        )
    except ValueError as e:
        console.print(f"[red]ERROR:[/red] {e}")
        return 2

    # Plain print so the URL can be piped
    print(url)
    return 0


def handle_device_token(args, console: Console) -> int:
    """Request a dummy Win32 device token"""
    console.print("[yellow]Experimental: the dummy device may be rejected by Xbox Network at any time[/yellow]")
    http = FetchClient(timeout=args.timeout)
    try:
        response = asyncio.run(create_dummy_win32_device_token(http=http))
    except XboxAuthError as e:
        show_error(e, console, debug=args.debug)
        return 1

    if args.reveal:
        console.print_json(json.dumps(response))
    else:
        console.print(f"Device token: {mask(response['Token'], 8)}")
        console.print(f"Expires on: {response.get('NotAfter', 'unknown')}")
    return 0


def handle_status(args, console: Console) -> int:
    """Show what the token file holds"""
    store = FileTokenStore(args.store)
    show_store_status(store, console)
    return 0


def handle_logout(args, console: Console) -> int:
    """Forget the stored Live tokens"""
    store = FileTokenStore(args.store)
    if store.load_tokens() is None:
        console.print(f"[yellow]No tokens stored in {store.token_file}[/yellow]")
        return 0

    store.clear_tokens()
    console.print(f"[green]Removed {store.token_file}[/green]")
    return 0
