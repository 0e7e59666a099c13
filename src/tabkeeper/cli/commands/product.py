"""Product catalog commands."""

import click
from tabkeeper.cli.error_handling import handle_domain_error
from tabkeeper.cli.options import parse_price_or_exit
from tabkeeper.domain.catalog import CategoryService, ProductService


def _resolve_category_id(ctx, category: str | None) -> int | None:
    """Resolve a category name or ID, exiting on failure."""
    if category is None:
        return None
    service = CategoryService(ctx.obj["db"])
    if category.isdigit():
        found = service.get_category(int(category))
    else:
        found = service.get_category_by_name(category)
    if found is None:
        click.echo(f"Error: Category '{category}' not found", err=True)
        ctx.exit(1)
    return found.id


@click.group()
def product_group():
    """Manage the product catalog."""
    pass


@product_group.command("create")
@click.argument("name")
@click.option("--price", required=True, help="Unit price (e.g., 12.50 or $12.50)")
@click.option("--stock", type=int, default=0, show_default=True, help="Initial stock")
@click.option("--category", help="Category name or ID")
@click.pass_context
def create_product(ctx, name: str, price: str, stock: int, category: str | None):
    """Create a new product.

    Examples:
        tabkeeper product create "Lemonade" --price 2.00 --stock 40 --category Drinks
    """
    service = ProductService(ctx.obj["db"])
    unit_price = parse_price_or_exit(ctx, price)
    category_id = _resolve_category_id(ctx, category)

    try:
        product_id = service.create_product(
            name=name, price=unit_price, stock=stock, category_id=category_id
        )
        click.echo(f"Created product '{name}' (ID: {product_id})")
    except ValueError as e:
        handle_domain_error(ctx, e)


@product_group.command("list")
@click.option("--category", help="Only products in this category (name or ID)")
@click.pass_context
def list_products(ctx, category: str | None):
    """List products with price and stock."""
    service = ProductService(ctx.obj["db"])
    category_id = _resolve_category_id(ctx, category)

    products = service.list_products(category_id=category_id)
    if not products:
        click.echo("No products found.")
        return

    click.echo("\nProducts:")
    click.echo("-" * 60)
    for p in products:
        click.echo(f"ID: {p.id:3d} | {p.name:20s} | {p.price:>8} | Stock: {p.stock}")


@product_group.command("show")
@click.argument("product_id", type=int)
@click.pass_context
def show_product(ctx, product_id: int):
    """Show one product."""
    service = ProductService(ctx.obj["db"])

    product = service.get_product(product_id)
    if product is None:
        click.echo(f"Error: Product {product_id} not found", err=True)
        ctx.exit(1)

    click.echo(f"Product {product.id}: {product.name}")
    click.echo(f"  Price: {product.price}")
    click.echo(f"  Stock: {product.stock}")
    click.echo(f"  Category: {product.category_id if product.category_id is not None else '-'}")


@product_group.command("update")
@click.argument("product_id", type=int)
@click.option("--name", help="New name")
@click.option("--price", help="New unit price")
@click.option("--category", help="New category name or ID")
@click.pass_context
def update_product(ctx, product_id: int, name: str | None, price: str | None, category: str | None):
    """Update catalog fields of a product.

    Changing the price does not reprice items already on tickets.
    """
    service = ProductService(ctx.obj["db"])
    unit_price = parse_price_or_exit(ctx, price)
    category_id = _resolve_category_id(ctx, category)

    try:
        service.update_product(product_id, name=name, price=unit_price, category_id=category_id)
        click.echo(f"Updated product {product_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@product_group.command("set-stock")
@click.argument("product_id", type=int)
@click.argument("stock", type=int)
@click.pass_context
def set_stock(ctx, product_id: int, stock: int):
    """Overwrite the stock of a product (restock or inventory count)."""
    service = ProductService(ctx.obj["db"])

    try:
        service.set_stock(product_id, stock)
        click.echo(f"Stock of product {product_id} set to {stock}")
    except ValueError as e:
        handle_domain_error(ctx, e)


@product_group.command("delete")
@click.argument("product_id", type=int)
@click.pass_context
def delete_product(ctx, product_id: int):
    """Delete a product that is not on any ticket."""
    service = ProductService(ctx.obj["db"])

    try:
        service.delete_product(product_id)
        click.echo(f"Deleted product {product_id}")
    except ValueError as e:
        handle_domain_error(ctx, e)


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
