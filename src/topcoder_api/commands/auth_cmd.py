"""CLI commands for token management."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from topcoder_api.auth import TokenProvider
from topcoder_api.config import get_config
from topcoder_api.exceptions import TopcoderError
from topcoder_api.utils.errors import handle_error
from topcoder_api.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="auth", help="Obtain and inspect access tokens.")


def _mask(token: str) -> str:
    return token if len(token) <= 16 else f"{token[:8]}...{token[-8:]}"


@app.command()
def login(
    show_token: Annotated[bool, typer.Option("--show-token", help="Print the full token")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Run the legacy login exchange and display the token."""
    tokens = TokenProvider(get_config())

    try:
        console.print("Authenticating with Topcoder...", style="yellow")
        token = tokens.get_access_token()
        status = tokens.get_status()
        result = {
            "status": "authenticated",
            "token": token if show_token else _mask(token),
            "issued_at": str(status.issued_at) if status.issued_at else "N/A",
            "expires_at": str(status.expires_at) if status.expires_at else "N/A",
        }
        print_output(result, output, title="Authentication")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        tokens.close()


@app.command()
def machine(
    client_id: Annotated[str | None, typer.Option("--client-id", help="Override AUTH0_CLIENT_ID")] = None,
    client_secret: Annotated[str | None, typer.Option("--client-secret", help="Override AUTH0_CLIENT_SECRET")] = None,
    show_token: Annotated[bool, typer.Option("--show-token", help="Print the full token")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Issue a machine-to-machine token."""
    tokens = TokenProvider(get_config())

    try:
        token = tokens.get_machine_token(client_id, client_secret)
        result = {"status": "issued", "token": token if show_token else _mask(token)}
        print_output(result, output, title="M2M Token")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        tokens.close()


@app.command()
def status(
    login: Annotated[bool, typer.Option("--login", help="Run the legacy login first, then report the cached token")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o", help="Output format")] = OutputFormat.TABLE,
) -> None:
    """Show the legacy token status.

    The token cache lives in memory only, so without ``--login`` a fresh
    process always reports no token.
    """
    tokens = TokenProvider(get_config())

    try:
        if login:
            tokens.get_access_token()
        token_status = tokens.get_status()
        result = {
            "has_token": token_status.has_token,
            "is_valid": token_status.is_valid,
            "issued_at": str(token_status.issued_at) if token_status.issued_at else "N/A",
            "expires_at": str(token_status.expires_at) if token_status.expires_at else "N/A",
        }
        print_output(result, output, title="Token Status")
        if not token_status.has_token:
            console.print("[dim]No token cached in this process; pass --login to authenticate first.[/dim]")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        tokens.close()
