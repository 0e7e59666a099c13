"""Category management commands."""

import click
from tabkeeper.cli.error_handling import handle_domain_error
from tabkeeper.domain.catalog import CategoryService


@click.group()
def category_group():
    """Manage product categories."""
    pass


@category_group.command("list")
@click.pass_context
def list_categories(ctx):
    """List all categories."""
    service = CategoryService(ctx.obj["db"])

    categories = service.list_categories()
    if not categories:
        click.echo("No categories found.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        click.echo(f"{cat.name} (ID: {cat.id})")


@category_group.command("create")
@click.argument("name")
@click.pass_context
def create_category(ctx, name: str):
    """Create a new category."""
    service = CategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(name=name)
        click.echo(f"Created category '{name}' (ID: {category_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("rename")
@click.argument("category_id", type=int)
@click.argument("new_name")
@click.pass_context
def rename_category(ctx, category_id: int, new_name: str):
    """Rename a category."""
    service = CategoryService(ctx.obj["db"])

    try:
        service.rename_category(category_id, new_name)
        click.echo(f"Renamed category {category_id} to '{new_name}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@category_group.command("delete")
@click.argument("category_id", type=int)
@click.pass_context
def delete_category(ctx, category_id: int):
    """Delete a category that has no products."""
    service = CategoryService(ctx.obj["db"])

    try:
        service.delete_category(category_id)
        click.echo(f"Deleted category {category_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
