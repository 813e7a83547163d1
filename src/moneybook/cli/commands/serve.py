"""Run the HTTP API."""

import logging
import os

import click
import uvicorn

from moneybook.api.app import create_app


@click.command("serve")
@click.option("--host", default="127.0.0.1", show_default=True, help="Interface to bind")
@click.option("--port", default=8000, show_default=True, type=int, help="Port to bind")
@click.option("--reload", is_flag=True, help="Restart the server when code changes")
@click.pass_context
def serve(ctx, host: str, port: int, reload: bool):
    """Serve the bookkeeping API with uvicorn."""
    settings = ctx.obj["settings"]
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    click.echo(f"Starting moneybook API on {host}:{port}")

    if reload:
        # The reloader imports the app itself, so settings travel through the environment
        if settings.database_path:
            os.environ["MONEYBOOK_DATABASE_PATH"] = settings.database_path
        uvicorn.run(
            "moneybook.api.app:create_app",
            factory=True,
            host=host,
            port=port,
            reload=True,
            log_level=settings.log_level.lower(),
        )
        return

    uvicorn.run(create_app(settings), host=host, port=port, log_level=settings.log_level.lower())


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
