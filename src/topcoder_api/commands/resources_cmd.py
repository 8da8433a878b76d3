"""CLI commands for challenge resources and registrants."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from topcoder_api.auth import TokenProvider
from topcoder_api.client import TopcoderClient
from topcoder_api.config import get_config
from topcoder_api.exceptions import TopcoderError
from topcoder_api.services.resources import ResourceService
from topcoder_api.utils.errors import handle_error
from topcoder_api.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="resources", help="Manage challenge resources (role assignments).")

ChallengeId = Annotated[str, typer.Argument(help="Challenge ID")]
Handle = Annotated[str, typer.Option("--handle", "-u", help="Member handle")]
RoleId = Annotated[str, typer.Option("--role-id", help="Resource role ID")]


def _build_client() -> tuple[TopcoderClient, ResourceService]:
    config = get_config()
    client = TopcoderClient(config, TokenProvider(config))
    return client, ResourceService(client)


@app.command("list")
def list_resources(
    challenge_id: ChallengeId,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
) -> None:
    """List resources on a challenge."""
    client, service = _build_client()
    try:
        resources = service.get_resources_from_challenge(challenge_id)
        console.print(f"[dim]Found {len(resources)} resources[/dim]")
        columns = ["id", "memberHandle", "memberId", "roleId"]
        print_output(resources, output, columns=None if output == OutputFormat.JSON else columns, title=f"Resources ({challenge_id})")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("add")
def add_resource(
    challenge_id: ChallengeId,
    handle: Handle,
    role_id: RoleId,
) -> None:
    """Assign a role on a challenge to a member."""
    client, service = _build_client()
    try:
        service.add_resource_to_challenge(challenge_id, handle, role_id)
        console.print(f"[green]Added {handle} to challenge {challenge_id}.[/green]")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("remove")
def remove_resource(
    challenge_id: ChallengeId,
    handle: Handle,
    role_id: RoleId,
) -> None:
    """Remove a member's role from a challenge."""
    client, service = _build_client()
    try:
        service.remove_resource_to_challenge(challenge_id, handle, role_id)
        console.print(f"[green]Removed {handle} from challenge {challenge_id}.[/green]")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("has-role")
def has_role(
    challenge_id: ChallengeId,
    role_id: RoleId,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
) -> None:
    """Check whether any resource on the challenge holds a role."""
    client, service = _build_client()
    try:
        result = service.role_already_set(challenge_id, role_id)
        print_output({"challengeId": challenge_id, "roleId": role_id, "set": result}, output)
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("register")
def register(
    challenge_id: ChallengeId,
    handle: Handle,
) -> None:
    """Register a member as a submitter."""
    client, service = _build_client()
    try:
        service.assign_user_as_registrant(handle, challenge_id)
        console.print(f"[green]Registered {handle} on challenge {challenge_id}.[/green]")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("unregister")
def unregister(
    challenge_id: ChallengeId,
    handle: Handle,
    role_id: Annotated[str | None, typer.Option("--role-id", help="Role ID (defaults to submitter)")] = None,
) -> None:
    """Unregister a member from a challenge."""
    client, service = _build_client()
    try:
        role = role_id or client.config.challenge.role_id_submitter
        service.unregister_user_from_challenge(challenge_id, handle, role)
        console.print(f"[green]Unregistered {handle} from challenge {challenge_id}.[/green]")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
