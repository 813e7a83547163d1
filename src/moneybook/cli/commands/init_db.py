"""Initialize the database schema."""

import click


@click.command("init-db")
@click.pass_context
def init_db(ctx):
    """Create the database tables if they do not exist yet."""
    # The group already connected and created the schema
    db = ctx.obj["db"]
    click.echo(f"Database ready: {db.database_url}")


def register_commands(cli):
    """Register init-db command with main CLI."""
    cli.add_command(init_db)
