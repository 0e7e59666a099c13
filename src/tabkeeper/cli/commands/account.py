"""Account (table) commands."""

import click
from tabkeeper.cli.error_handling import handle_domain_error
from tabkeeper.cli.options import format_timestamp, parse_timestamp_or_exit, resolve_user_or_exit
from tabkeeper.domain.account import AccountService
from tabkeeper.domain.note import NoteService
from tabkeeper.domain.user import UserService


@click.group()
def account_group():
    """Manage accounts (tables)."""
    pass


@account_group.command("open")
@click.option("--user", "user", required=True, help="Owner username or ID")
@click.option("--name", help="Display name (e.g., 'Table 4')")
@click.pass_context
def open_account(ctx, user: str, name: str | None):
    """Open a new account.

    Examples:
        tabkeeper account open --user mia --name "Table 4"
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    user_id = resolve_user_or_exit(ctx, UserService(db), user)

    try:
        account_id = service.open_account(user_id=user_id, name=name)
        label = f"'{name}' " if name else ""
        click.echo(f"Opened account {label}(ID: {account_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("list")
@click.option("--user", "user", help="Only accounts of this user (username or ID)")
@click.option("--open", "open_only", is_flag=True, help="Only accounts that are still open")
@click.pass_context
def list_accounts(ctx, user: str | None, open_only: bool):
    """List accounts."""
    db = ctx.obj["db"]
    service = AccountService(db)
    user_id = resolve_user_or_exit(ctx, UserService(db), user) if user is not None else None

    accounts = service.list_accounts(user_id=user_id, open_only=open_only)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 60)
    for acc in accounts:
        state = "open" if acc.is_open else "closed"
        click.echo(
            f"ID: {acc.id:3d} | {(acc.name or '-'):15s} | {state:6s} | "
            f"In: {format_timestamp(acc.checkin)} | Out: {format_timestamp(acc.checkout)}"
        )


@account_group.command("show")
@click.argument("account_id", type=int)
@click.pass_context
def show_account(ctx, account_id: int):
    """Show an account with its notes and running total."""
    db = ctx.obj["db"]
    service = AccountService(db)
    note_service = NoteService(db)

    account = service.get_account(account_id)
    if account is None:
        click.echo(f"Error: Account {account_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"Account {account.id}: {account.name or '-'} ({'open' if account.is_open else 'closed'})")
    notes = note_service.list_notes(account_id=account_id)
    for n in notes:
        click.echo(f"  Note #{n.number_note} (ID: {n.id}) | {n.status} | {note_service.note_total(n.id)}")
    click.echo(f"Total: {service.account_total(account_id)}")


@account_group.command("close")
@click.argument("account_id", type=int)
@click.option("--at", "at", help="Checkout time in UTC (default: now; e.g., '2024-01-15 21:30', '-10m')")
@click.pass_context
def close_account(ctx, account_id: int, at: str | None):
    """Close an account and every open note on it.

    Closing consumes the stock of every item on the open notes.
    """
    service = AccountService(ctx.obj["db"])
    checkout = parse_timestamp_or_exit(ctx, at)

    try:
        closed = service.close_account(account_id, checkout=checkout)
        click.echo(f"Closed account {account_id} ({closed} note{'s' if closed != 1 else ''} closed)")
    except ValueError as e:
        handle_domain_error(ctx, e)


@account_group.command("delete")
@click.argument("account_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account_id: int, yes: bool):
    """Delete an account with all of its notes.

    Items on deleted notes are not returned to stock.
    """
    service = AccountService(ctx.obj["db"])

    account = service.get_account(account_id)
    if account is None:
        click.echo(f"Error: Account {account_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete account {account_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
        click.echo(f"Deleted account {account_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
