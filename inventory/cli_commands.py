"""
Flask CLI commands for the catalog.

Commands:
- flask catalog-summary: Print products and low stock KPIs
- flask reset-catalog: Restore the seed quantities
"""

import click
from inventory.services.catalog_store import get_catalog


def init_cli_commands(app):
    """Register CLI commands with Flask app."""

    @app.cli.command('catalog-summary')
    @click.option('--low-only', is_flag=True, help='Only list products at or below their reorder level')
    def catalog_summary(low_only):
        """Show the catalog with on-hand quantities."""
        products = get_catalog().list()
        low = [p for p in products if p.is_low_stock]

        click.echo(click.style(f'Total SKUs: {len(products)}   Low stock: {len(low)}', bold=True))
        for p in (low if low_only else products):
            line = f'  {p.sku}  {p.name}  on hand: {p.quantity_on_hand} {p.unit}'
            if p.is_low_stock:
                click.echo(click.style(f'{line}  (reorder at {p.reorder_level})', fg='red'))
            else:
                click.echo(line)

    @app.cli.command('reset-catalog')
    def reset_catalog():
        """Restore every product to its seed quantity."""
        store = get_catalog()
        store.reset()
        click.echo(click.style(f'Catalog reset ({len(store)} products).', fg='green'))
