"""User management commands."""

import click

from moneybook.cli.error_handling import handle_domain_error
from moneybook.domain.errors import DomainError
from moneybook.domain.user import UserService


@click.group()
def user_group():
    """Manage API users."""
    pass


@user_group.command("create")
@click.argument("login")
@click.option("--password", prompt=True, hide_input=True, confirmation_prompt=True)
@click.pass_context
def create_user(ctx, login: str, password: str):
    """Register a new user.

    Examples:
        moneybook user create alice
        moneybook user create alice --password "correct horse battery"
    """
    service = UserService(ctx.obj["db"])
    try:
        user = service.register(login, password)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return
    click.echo(f"Created user '{user.login}' (ID: {user.id})")


@user_group.command("token")
@click.argument("login")
@click.option("--password", prompt=True, hide_input=True)
@click.pass_context
def issue_token(ctx, login: str, password: str):
    """Issue a fresh bearer token for a user.

    The previous token of the user stops working.
    """
    settings = ctx.obj["settings"]
    service = UserService(ctx.obj["db"], token_ttl_minutes=settings.token_ttl_minutes)
    try:
        issued = service.login(login, password)
    except DomainError as e:
        handle_domain_error(ctx, e)
        return

    click.echo(issued.token)
    if issued.expires_at is not None:
        click.echo(f"Expires at {issued.expires_at.isoformat()} UTC", err=True)


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
