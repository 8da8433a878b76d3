"""CLI commands for challenge lifecycle management."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console

from topcoder_api.auth import TokenProvider
from topcoder_api.client import TopcoderClient
from topcoder_api.config import get_config
from topcoder_api.exceptions import TopcoderError
from topcoder_api.models.challenges import NewChallenge
from topcoder_api.services.challenges import ChallengeService
from topcoder_api.utils.errors import handle_error
from topcoder_api.utils.output import OutputFormat, print_json, print_output

console = Console(stderr=True)
app = typer.Typer(name="challenges", help="Create, update and close challenges.")


def _build_client() -> tuple[TopcoderClient, ChallengeService]:
    config = get_config()
    client = TopcoderClient(config, TokenProvider(config))
    return client, ChallengeService(client)


def _parse_changes(data: str) -> dict[str, Any]:
    try:
        changes = json.loads(data)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"--data is not valid JSON: {e}")
    if not isinstance(changes, dict):
        raise typer.BadParameter("--data must be a JSON object")
    return changes


@app.command("get")
def get_challenge(
    challenge_id: Annotated[str, typer.Argument(help="Challenge ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.JSON,
) -> None:
    """Show challenge details."""
    client, service = _build_client()
    try:
        challenge = service.get_challenge_by_id(challenge_id)
        columns = ["id", "name", "status", "projectId", "typeId"]
        print_output(challenge, output, columns=None if output == OutputFormat.JSON else columns, title="Challenge")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("create")
def create_challenge(
    name: Annotated[str, typer.Option("--name", "-n", help="Challenge name")],
    project_id: Annotated[int, typer.Option("--project-id", "-p", help="Project ID")],
    prize: Annotated[list[float] | None, typer.Option("--prize", help="Prize amount, repeat for several places")] = None,
    requirements: Annotated[str, typer.Option("--requirements", help="Detailed requirements (markdown)")] = "",
    requirements_file: Annotated[Path | None, typer.Option("--requirements-file", exists=True, dir_okay=False, help="Read requirements from a file")] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Show what would be sent without executing")] = False,
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
) -> None:
    """Create a first-to-finish challenge from the configured template."""
    if requirements_file is not None:
        requirements = requirements_file.read_text()
    challenge = NewChallenge(
        name=name,
        detailed_requirements=requirements,
        prizes=[int(p) if p.is_integer() else p for p in prize or []],
        project_id=project_id,
    )

    client, service = _build_client()
    try:
        if dry_run:
            console.print("[yellow]DRY RUN: would send:[/yellow]")
            print_json(service.build_challenge_body(challenge))
            return
        challenge_id = service.create_challenge(challenge)
        print_output({"challengeId": challenge_id, "name": name}, output, title="Challenge Created")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("update")
def update_challenge(
    challenge_id: Annotated[str, typer.Argument(help="Challenge ID")],
    data: Annotated[str, typer.Option("--data", "-d", help='Fields to patch as JSON, e.g. \'{"name": "New"}\'')],
) -> None:
    """Patch arbitrary challenge fields."""
    changes = _parse_changes(data)
    client, service = _build_client()
    try:
        service.update_challenge(challenge_id, changes)
        console.print(f"[green]Challenge {challenge_id} updated.[/green]")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("activate")
def activate_challenge(
    challenge_id: Annotated[str, typer.Argument(help="Challenge ID")],
) -> None:
    """Set a challenge to Active."""
    client, service = _build_client()
    try:
        service.activate_challenge(challenge_id)
        console.print(f"[green]Challenge {challenge_id} activated.[/green]")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("close")
def close_challenge(
    challenge_id: Annotated[str, typer.Argument(help="Challenge ID")],
    winner_id: Annotated[int, typer.Option("--winner-id", help="Winner user ID")],
    winner_handle: Annotated[str, typer.Option("--winner-handle", help="Winner handle")],
) -> None:
    """Complete a challenge and record the winner."""
    client, service = _build_client()
    try:
        service.close_challenge(challenge_id, winner_id, winner_handle)
        console.print(f"[green]Challenge {challenge_id} closed, winner {winner_handle}.[/green]")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("cancel")
def cancel_challenge(
    challenge_id: Annotated[str, typer.Argument(help="Challenge ID")],
) -> None:
    """Cancel a challenge."""
    client, service = _build_client()
    try:
        service.cancel_private_content(challenge_id)
        console.print(f"[green]Challenge {challenge_id} cancelled.[/green]")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
