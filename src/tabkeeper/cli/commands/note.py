"""Note (ticket) commands."""

import click
from tabkeeper.cli.error_handling import handle_domain_error
from tabkeeper.cli.options import format_timestamp, parse_timestamp_or_exit, resolve_user_or_exit
from tabkeeper.domain.note import NoteService
from tabkeeper.domain.user import UserService


@click.group()
def note_group():
    """Manage notes (order tickets)."""
    pass


@note_group.command("create")
@click.argument("account_id", type=int)
@click.option("--user", "user", required=True, help="Username or ID of the user taking the order")
@click.option("--status", help="Initial status (default: open)")
@click.pass_context
def create_note(ctx, account_id: int, user: str, status: str | None):
    """Open a new note on an account.

    Examples:
        tabkeeper note create 1 --user mia
    """
    db = ctx.obj["db"]
    service = NoteService(db)
    user_id = resolve_user_or_exit(ctx, UserService(db), user)

    try:
        note_id = service.create_note(account_id=account_id, user_id=user_id, status=status)
        note = service.get_note(note_id)
        click.echo(f"Created note #{note.number_note} on account {account_id} (ID: {note_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@note_group.command("list")
@click.option("--account", "account_id", type=int, help="Only notes of this account")
@click.option("--open", "open_only", is_flag=True, help="Only notes that are still open")
@click.pass_context
def list_notes(ctx, account_id: int | None, open_only: bool):
    """List notes."""
    service = NoteService(ctx.obj["db"])

    notes = service.list_notes(account_id=account_id, open_only=open_only)
    if not notes:
        click.echo("No notes found.")
        return

    click.echo("\nNotes:")
    click.echo("-" * 60)
    for n in notes:
        click.echo(
            f"ID: {n.id:3d} | Account: {n.account_id:3d} | #{n.number_note:<3d} | {n.status:10s} | "
            f"In: {format_timestamp(n.checkin)} | Out: {format_timestamp(n.checkout)}"
        )


@note_group.command("show")
@click.argument("note_id", type=int)
@click.pass_context
def show_note(ctx, note_id: int):
    """Show a note with its line items."""
    db = ctx.obj["db"]
    service = NoteService(db)

    note = service.get_note(note_id)
    if note is None:
        click.echo(f"Error: Note {note_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"Note #{note.number_note} (ID: {note.id}) on account {note.account_id} | {note.status}")
    for line in db.list_line_items(note_id):
        click.echo(f"  Product {line.product_id:3d} x {line.amount:<3d} = {line.total}")
    click.echo(f"Total: {service.note_total(note_id)}")


@note_group.command("status")
@click.argument("note_id", type=int)
@click.argument("status")
@click.pass_context
def set_status(ctx, note_id: int, status: str):
    """Change the status of an open note (e.g., pending-payment)."""
    service = NoteService(ctx.obj["db"])

    try:
        service.update_status(note_id, status)
        click.echo(f"Note {note_id} status set to '{status}'")
    except ValueError as e:
        handle_domain_error(ctx, e)


@note_group.command("close")
@click.argument("note_id", type=int)
@click.option("--at", "at", help="Checkout time in UTC (default: now)")
@click.pass_context
def close_note(ctx, note_id: int, at: str | None):
    """Close a single note."""
    service = NoteService(ctx.obj["db"])
    checkout = parse_timestamp_or_exit(ctx, at)

    try:
        service.close_note(note_id, checkout=checkout)
        click.echo(f"Closed note {note_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@note_group.command("delete")
@click.argument("note_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_note(ctx, note_id: int, yes: bool):
    """Delete a note and its items. Items are not returned to stock."""
    service = NoteService(ctx.obj["db"])

    if not yes and not click.confirm(f"Are you sure you want to delete note {note_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_note(note_id)
        click.echo(f"Deleted note {note_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register note commands with main CLI."""
    cli.add_command(note_group, name="note")
