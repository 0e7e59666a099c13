"""Line item commands.

These are the stock-moving commands; each one is retried from scratch when
the database reports a transaction conflict.
"""

import click
from tabkeeper.cli.error_handling import handle_domain_error
from tabkeeper.cli.options import resolve_user_or_exit
from tabkeeper.domain.ledger import StockLedgerService
from tabkeeper.domain.note import NoteService
from tabkeeper.domain.user import UserService
from tabkeeper.utils.retry import run_with_retry


def _check_note(ctx, note_id: int, user: str | None) -> None:
    """Require an open note, owned by --user when that option is given."""
    db = ctx.obj["db"]
    service = NoteService(db)
    try:
        if user is not None:
            user_id = resolve_user_or_exit(ctx, UserService(db), user)
            service.get_note_for_user(note_id, user_id)
        service.require_open_note(note_id)
    except ValueError as e:
        handle_domain_error(ctx, e)


@click.group()
def item_group():
    """Add, change and remove items on a note."""
    pass


@item_group.command("add")
@click.argument("note_id", type=int)
@click.argument("product_id", type=int)
@click.option("--amount", type=click.IntRange(min=1), default=1, show_default=True, help="Quantity")
@click.option("--user", "user", help="Only act if the note belongs to this user")
@click.pass_context
def add_item(ctx, note_id: int, product_id: int, amount: int, user: str | None):
    """Add a product to a note, reserving stock.

    Examples:
        tabkeeper item add 1 5 --amount 4
    """
    _check_note(ctx, note_id, user)
    ledger = StockLedgerService(ctx.obj["db"])

    try:
        line = run_with_retry(lambda: ledger.add_line_item(note_id, product_id, amount))
        click.echo(
            f"Added {line.amount} x '{line.product.name}' to note {note_id} "
            f"(total {line.total}, stock left {line.product.stock})"
        )
    except ValueError as e:
        handle_domain_error(ctx, e)


@item_group.command("update")
@click.argument("note_id", type=int)
@click.argument("product_id", type=int)
@click.argument("amount", type=click.IntRange(min=1))
@click.option("--user", "user", help="Only act if the note belongs to this user")
@click.pass_context
def update_item(ctx, note_id: int, product_id: int, amount: int, user: str | None):
    """Set the quantity of a product on a note."""
    _check_note(ctx, note_id, user)
    ledger = StockLedgerService(ctx.obj["db"])

    try:
        line = run_with_retry(lambda: ledger.update_line_item(note_id, product_id, amount))
        click.echo(
            f"Note {note_id} now has {line.amount} x '{line.product.name}' "
            f"(total {line.total}, stock left {line.product.stock})"
        )
    except ValueError as e:
        handle_domain_error(ctx, e)


@item_group.command("remove")
@click.argument("note_id", type=int)
@click.argument("product_id", type=int)
@click.option("--user", "user", help="Only act if the note belongs to this user")
@click.pass_context
def remove_item(ctx, note_id: int, product_id: int, user: str | None):
    """Remove a product from a note, returning its stock."""
    _check_note(ctx, note_id, user)
    ledger = StockLedgerService(ctx.obj["db"])

    try:
        restored = run_with_retry(lambda: ledger.remove_line_item(note_id, product_id))
    except ValueError as e:
        handle_domain_error(ctx, e)
        return

    if restored:
        click.echo(f"Removed product {product_id} from note {note_id} ({restored} returned to stock)")
    else:
        click.echo(f"Product {product_id} is not on note {note_id}")


def register_commands(cli):
    """Register line item commands with main CLI."""
    cli.add_command(item_group, name="item")
