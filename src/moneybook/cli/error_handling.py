"""CLI error handling helpers."""

import click

from moneybook.domain.errors import DomainError, StorageError

EXIT_REJECTED = 1
EXIT_STORAGE = 2


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Print a domain error to stderr and exit.

    Rejected input (missing fields, conflicts, bad credentials) exits with 1;
    a failing store exits with 2.
    """
    click.echo(f"Error: {error}", err=True)
    ctx.exit(EXIT_STORAGE if isinstance(error, StorageError) else EXIT_REJECTED)
