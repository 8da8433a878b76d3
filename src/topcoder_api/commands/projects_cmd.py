"""CLI commands for projects."""

from __future__ import annotations

from typing import Annotated

import typer
from rich.console import Console

from topcoder_api.auth import TokenProvider
from topcoder_api.client import TopcoderClient
from topcoder_api.config import get_config
from topcoder_api.exceptions import TopcoderError
from topcoder_api.services.projects import ProjectService
from topcoder_api.utils.errors import handle_error
from topcoder_api.utils.output import OutputFormat, print_output

console = Console(stderr=True)
app = typer.Typer(name="projects", help="Create projects and read billing details.")


def _build_client() -> tuple[TopcoderClient, ProjectService]:
    config = get_config()
    client = TopcoderClient(config, TokenProvider(config))
    return client, ProjectService(client)


@app.command("create")
def create_project(
    name: Annotated[str, typer.Option("--name", "-n", help="Project name")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
) -> None:
    """Create a new project."""
    client, service = _build_client()
    try:
        project_id = service.create_project(name)
        print_output({"projectId": project_id, "name": name}, output, title="Project Created")
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()


@app.command("billing")
def billing_account(
    project_id: Annotated[int, typer.Argument(help="Project ID")],
    output: Annotated[OutputFormat, typer.Option("--output", "-o")] = OutputFormat.TABLE,
) -> None:
    """Show the billing account id of a project."""
    client, service = _build_client()
    try:
        billing_account_id = service.get_project_billing_account_id(project_id)
        if billing_account_id is None:
            console.print(f"[dim]There is no billing account id associated with project {project_id}[/dim]")
        print_output(
            {"projectId": project_id, "billingAccountId": billing_account_id},
            output,
            title="Billing Account",
        )
    except TopcoderError as e:
        handle_error(e)
        raise typer.Exit(1)
    finally:
        client.close()
