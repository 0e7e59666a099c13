"""User management commands."""

import click
from tabkeeper.cli.error_handling import handle_domain_error
from tabkeeper.domain.user import UserService


@click.group()
def user_group():
    """Manage staff users."""
    pass


@user_group.command("create")
@click.argument("username")
@click.option("--name", help="Display name (defaults to the username)")
@click.pass_context
def create_user(ctx, username: str, name: str | None):
    """Create a new user.

    Examples:
        tabkeeper user create mia --name "Mia Flores"
        tabkeeper user create noah
    """
    service = UserService(ctx.obj["db"])

    try:
        user_id = service.create_user(username=username, name=name if name is not None else username)
        click.echo(f"Created user '{username.lower().strip()}' (ID: {user_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@user_group.command("list")
@click.pass_context
def list_users(ctx):
    """List all users."""
    service = UserService(ctx.obj["db"])

    users = service.list_users()
    if not users:
        click.echo("No users found.")
        return

    click.echo("\nUsers:")
    click.echo("-" * 60)
    for u in users:
        click.echo(f"ID: {u.id:3d} | {u.username:15s} | {u.name}")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(user_group, name="user")
