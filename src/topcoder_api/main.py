"""Topcoder API CLI — entry point.

Manage Topcoder projects, challenges and challenge resources from the
command line.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Annotated

import typer

from topcoder_api.client import trace_logger
from topcoder_api.commands.auth_cmd import app as auth_app
from topcoder_api.commands.projects_cmd import app as projects_app
from topcoder_api.commands.challenges_cmd import app as challenges_app
from topcoder_api.commands.resources_cmd import app as resources_app
from topcoder_api.commands.members_cmd import app as members_app

app = typer.Typer(
    name="topcoder",
    help="CLI tool for managing Topcoder projects, challenges and resources.",
    no_args_is_help=True,
)

# Register command groups
app.add_typer(auth_app, name="auth")
app.add_typer(projects_app, name="projects")
app.add_typer(challenges_app, name="challenges")
app.add_typer(resources_app, name="resources")
app.add_typer(members_app, name="members")


def configure_trace_file(path: Path) -> logging.Handler:
    """Write request traces to ``path`` in addition to normal logging.

    Re-configuring the same path reuses the existing handler.
    """
    filename = os.path.abspath(path)
    for existing in trace_logger.handlers:
        if isinstance(existing, logging.FileHandler) and existing.baseFilename == filename:
            return existing

    handler = logging.FileHandler(path)
    handler.setFormatter(logging.Formatter("%(asctime)s %(message)s"))
    trace_logger.addHandler(handler)
    trace_logger.setLevel(logging.INFO)
    return handler


@app.callback()
def main(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable verbose logging")] = False,
    trace_file: Annotated[Path | None, typer.Option("--trace-file", help="Append request traces to this file")] = None,
) -> None:
    """Topcoder CLI: manage projects, challenges and registrants."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")
    if trace_file is not None:
        configure_trace_file(trace_file)


if __name__ == "__main__":
    app()
