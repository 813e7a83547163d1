"""Initialize default categories."""

import click

from moneybook.domain.category import CategoryService, SubCategoryService
from moneybook.domain.duplicates import DuplicateChecker
from moneybook.domain.errors import ConflictError


# Initial category tree: category name -> sub-category names
INITIAL_CATEGORIES = {
    "Income": ["Salary", "Investment", "Refunds", "Other Income"],
    "Housing": ["Rent", "Mortgage", "Home Insurance", "Maintenance"],
    "Food & Dining": ["Groceries", "Restaurants", "Coffee & Snacks"],
    "Transportation": ["Gas", "Public Transit", "Parking", "Car Maintenance"],
    "Shopping": ["Clothing", "Electronics", "Home & Garden"],
    "Bills & Utilities": ["Electricity", "Water", "Internet", "Phone"],
    "Entertainment": ["Movies", "Music", "Sports"],
    "Health & Fitness": ["Gym", "Pharmacy", "Doctor"],
    "Travel": ["Flights", "Hotels"],
    "Banking": ["Fees", "Taxes", "Savings", "Internal Transfer"],
    "Other": ["Miscellaneous"],
}


@click.command("init-categories")
@click.option("--force", is_flag=True, help="Add missing defaults even if categories exist")
@click.pass_context
def init_categories(ctx, force: bool):
    """Initialize database with default categories and sub-categories."""
    db = ctx.obj["db"]
    settings = ctx.obj["settings"]
    duplicates = DuplicateChecker(
        db,
        account_scope=settings.account_scope,
        sub_category_scope=settings.sub_category_scope,
    )
    categories = CategoryService(db, duplicates=duplicates)
    sub_categories = SubCategoryService(db, duplicates=duplicates)

    existing = {category.name: category.id for category in categories.list_categories()}
    if existing and not force:
        click.echo("Categories already exist. Use --force to add the missing defaults.")
        return

    click.echo("Creating initial category tree...")

    created = 0
    skipped = 0
    for category_name, sub_names in INITIAL_CATEGORIES.items():
        category_id = existing.get(category_name)
        if category_id is None:
            category_id = categories.create_category(category_name).id
            created += 1

        for sub_name in sub_names:
            try:
                sub_categories.create_sub_category(sub_name, category_id)
                created += 1
            except ConflictError as e:
                click.echo(f"Warning: Skipped sub-category '{sub_name}': {e}", err=True)
                skipped += 1

    if skipped == 0:
        click.echo(f"Successfully created {created} categories and sub-categories.")
    else:
        click.echo(f"Created {created} categories and sub-categories, skipped {skipped}.")


def register_commands(cli):
    """Register init-categories command with main CLI."""
    cli.add_command(init_categories)
