"""CLI commands for member lookups."""

from __future__ import annotations

from typing import Annotated

import typer

from topcoder_api.auth import TokenProvider
from topcoder_api.client import TopcoderClient
from topcoder_api.config import get_config
from topcoder_api.exceptions import TopcoderError
from topcoder_api.services.members import MemberService
from topcoder_api.utils.errors import handle_error
from topcoder_api.utils.output import OutputFormat, print_output

app = typer.Typer(name="members", help="Look up Topcoder members.")


def _build_client() -> tuple[TopcoderClient, MemberService]:
    config = get_config()
    client = TopcoderClient(config, TokenProvider(config))
    return client, MemberService(client)


@app.command("id")
def member_id(
    handle: Annotated[str, typer.Argument(help="Member handle")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
) -> None:
    """Resolve a member handle to its user id."""
    client, service = _build_client()
    try:
        user_id = service.get_topcoder_member_id(handle)
        print_output({"handle": handle, "userId": user_id}, output, title="Member")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
