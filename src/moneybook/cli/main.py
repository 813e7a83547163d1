"""Main CLI entry point."""

import click

from moneybook.config import Settings
from moneybook.database.factories import create_database

# Import and register all commands at module level
from moneybook.cli.commands import init_categories, init_db, serve, user

# Commands that manage their own database lifecycle
_SELF_MANAGED = {"serve"}


@click.group()
@click.option(
    "--db-path",
    type=click.Path(dir_okay=False),
    help="Path to database file (overrides MONEYBOOK_DATABASE_PATH environment variable)",
    envvar="MONEYBOOK_DATABASE_PATH",
)
@click.pass_context
def cli(ctx, db_path: str | None):
    """moneybook - personal-finance bookkeeping API.

    Administrative commands for the database and users, and the API server.
    """
    ctx.ensure_object(dict)

    settings = Settings(database_path=db_path) if db_path else Settings()
    ctx.obj["settings"] = settings

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None and ctx.invoked_subcommand not in _SELF_MANAGED:
        db = create_database(settings)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db
        ctx.call_on_close(db.disconnect)


# Register all commands
init_db.register_commands(cli)
init_categories.register_commands(cli)
user.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
