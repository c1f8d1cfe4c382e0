"""Result and status rendering for the CLI"""

import json
from typing import Any, Dict

from rich.console import Console
from rich.table import Table

from errors import XboxAuthError
from live import LiveAuthResponse
from utils.redaction import mask
from utils.storage import FileTokenStore
from xbox_auth import AuthenticateRawResponse, AuthenticateResponse, AuthenticateResult


def show_authenticate_result(result: AuthenticateResult, console: Console, reveal: bool = False):
    """
    Display the outcome of authenticate()

    Args:
        result: Simplified or raw result
        console: Rich console for output
        reveal: Print tokens in clear instead of masked
    """
    if isinstance(result, AuthenticateRawResponse):
        console.print_json(json.dumps(result.to_dict(), default=str))
        return

    table = Table(title="Xbox Live Authentication")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("XUID", result.xuid or "[yellow]none (device token required)[/yellow]")
    table.add_row("User Hash", result.user_hash)
    table.add_row("XSTS Token", result.xsts_token if reveal else mask(result.xsts_token, 8))
    table.add_row("Expires On", result.expires_on)

    gamertag = _first_claim(result, "gtg")
    if gamertag:
        table.add_row("Gamertag", gamertag)

    console.print(table)
    if reveal:
        console.print(f"\nAuthorization: {result.authorization_header}")


def show_live_tokens(response: LiveAuthResponse, console: Console, reveal: bool = False):
    """Display a Live token endpoint response"""
    table = Table(title="Microsoft Live Tokens")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Access Token", response.access_token if reveal else mask(response.access_token, 8))
    table.add_row("Refresh Token", "Yes" if response.refresh_token else "No")
    table.add_row("Expires In", f"{response.expires_in}s" if response.expires_in is not None else "unknown")
    table.add_row("Scope", response.scope or "")
    if response.user_id:
        table.add_row("User Id", response.user_id)

    console.print(table)


def show_store_status(store: FileTokenStore, console: Console):
    """Display what the token file currently holds"""
    status = store.get_status()

    table = Table(title="Stored Live Tokens")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Has Tokens", "Yes" if status["has_tokens"] else "No")
    table.add_row("Has Refresh Token", "Yes" if status["has_refresh_token"] else "No")
    table.add_row("Is Expired", "Yes" if status["is_expired"] else "No")
    access_token = store.get_access_token()
    if access_token:
        table.add_row("Access Token", mask(access_token, 8))
    if status["expires_at"]:
        table.add_row("Expires At", status["expires_at"])
        table.add_row("Time Until Expiry", status["time_until_expiry"])
    table.add_row("Token File", str(store.token_file))

    console.print(table)


def show_error(error: XboxAuthError, console: Console, debug: bool = False):
    """Display a library error, with its diagnostic payload in debug mode"""
    console.print(f"[red]ERROR ({error.code}):[/red] {error.message}")
    if debug and error.extra:
        console.print_json(json.dumps(error.extra, default=str))


def _first_claim(result: AuthenticateResponse, name: str) -> Any:
    xui = result.display_claims.get("xui") or [{}]
    claims: Dict[str, Any] = xui[0]
    return claims.get(name)
