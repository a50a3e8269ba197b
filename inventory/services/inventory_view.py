"""
Inventory screen state.

Holds the screen's cached copy of the catalog, the search text, and the
receive/issue modal. The cache is filled once from ``CatalogStore.list()``
and afterwards only changes when the store hands back an updated record.
"""

import logging
import math
import time
from typing import Any, Dict, List, Optional

from inventory.exceptions import ProductNotFoundError, ValidationError
from inventory.models import Product

logger = logging.getLogger(__name__)

MODE_RECEIVE = 'receive'
MODE_ISSUE = 'issue'
MODAL_MODES = (MODE_RECEIVE, MODE_ISSUE)

OVER_ISSUE_WARNING = 'Warning: issuing more than available; quantity will be floored to 0.'
FAILURE_MESSAGE = 'Operation failed - check the logs for details.'


def parse_quantity(raw: Any) -> int:
    """Coerce a quantity input to a non-negative integer (bad input -> 0)."""
    try:
        value = float(str(raw).strip() or 0)
    except (TypeError, ValueError):
        return 0
    if math.isnan(value) or math.isinf(value):
        return 0
    return max(0, int(value))


class InventoryView:
    """State and behavior of the inventory screen."""

    def __init__(self, store, close_delay_ms: int = 900):
        self.store = store
        self.close_delay_ms = close_delay_ms

        self.products: Dict[str, Product] = {}
        self.loaded = False
        self.loading = False
        self.active = False
        self.query = ''

        self.selected: Optional[Product] = None
        self.mode = MODE_RECEIVE
        self.qty_input = 1
        self.message: Optional[str] = None
        self.warning: Optional[str] = None
        self.closing = False

    # Catalog cache

    def activate(self) -> None:
        """Load the catalog the first time the screen is shown."""
        self.active = True
        if self.loaded:
            return

        self.loading = True
        products = self.store.list()
        if not self.active:
            # Screen went away while the list call was in flight.
            return

        self.products = {p.id: p for p in products}
        self.loading = False
        self.loaded = True

    def remount(self) -> None:
        """Drop the cached list and load the catalog again."""
        self.loaded = False
        self.activate()

    def deactivate(self) -> None:
        self.active = False

    def _merge(self, updated: Product) -> None:
        if updated.id in self.products:
            self.products[updated.id] = updated.copy()

    # Search

    def set_query(self, text: Optional[str]) -> None:
        self.query = text or ''

    def filtered(self) -> List[Product]:
        """Products whose sku, name or category contain the query (any case)."""
        products = list(self.products.values())
        if not self.query:
            return products

        q = self.query.lower()
        return [
            p for p in products
            if q in p.sku.lower()
            or q in p.name.lower()
            or q in (p.category or '').lower()
        ]

    @property
    def total_skus(self) -> int:
        return len(self.products)

    @property
    def low_stock_count(self) -> int:
        return sum(1 for p in self.products.values() if p.is_low_stock)

    @property
    def shown_count(self) -> int:
        return len(self.filtered())

    # Modal

    @property
    def modal_open(self) -> bool:
        return self.selected is not None

    def open_modal(self, product_id: str, mode: str) -> Product:
        """Select a cached product for a receive or issue adjustment."""
        if mode not in MODAL_MODES:
            raise ValidationError(f"Unknown adjustment mode: {mode}")

        product = self.products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)

        self.selected = product.copy()
        self.mode = mode
        self.qty_input = 1
        self.message = None
        self.warning = None
        self.closing = False
        return self.selected

    def set_quantity(self, raw: Any) -> int:
        self.qty_input = parse_quantity(raw)
        return self.qty_input

    def confirm(self) -> Optional[Product]:
        """
        Apply the modal's adjustment through the store.

        The modal is left in the ``closing`` state whatever the outcome;
        ``settle()`` (or the screen's timer) closes it afterwards.

        Returns:
            The updated record, or None if nothing was applied.
        """
        if self.selected is None:
            return None

        product = self.selected
        qty = self.qty_input
        self.message = None
        self.warning = None
        updated = None

        try:
            if self.mode == MODE_RECEIVE:
                updated = self.store.receive(product.id, qty)
                verb = 'Received'
            else:
                if qty > product.quantity_on_hand:
                    self.warning = OVER_ISSUE_WARNING
                updated = self.store.issue(product.id, qty)
                verb = 'Issued'

            if updated is not None:
                self._merge(updated)
                self.message = f"{verb} {qty} {product.unit}(s) for {product.name}"
            else:
                logger.warning(f"{self.mode} on {product.id} returned no record; cache left unchanged")
                self.message = f"{product.sku} is no longer in the catalog; nothing was updated."
        except Exception:
            logger.exception(f"Stock {self.mode} failed for product {product.id}")
            self.message = FAILURE_MESSAGE

        self.closing = True
        return updated

    def close_modal(self) -> None:
        self.selected = None
        self.message = None
        self.warning = None
        self.closing = False

    cancel = close_modal

    def settle(self) -> None:
        """Wait out the close delay after a confirm, then close the modal."""
        if not self.closing:
            return
        if self.close_delay_ms > 0:
            time.sleep(self.close_delay_ms / 1000.0)
        self.close_modal()

    # Session persistence

    def to_state(self) -> Dict[str, Any]:
        return {
            'loaded': self.loaded,
            'products': [p.to_dict() for p in self.products.values()],
            'query': self.query,
            'selected': self.selected.to_dict() if self.selected else None,
            'mode': self.mode,
            'qty_input': self.qty_input,
            'message': self.message,
            'warning': self.warning,
            'closing': self.closing,
        }

    @classmethod
    def from_state(cls, store, state: Optional[Dict[str, Any]],
                   close_delay_ms: int = 900) -> 'InventoryView':
        view = cls(store, close_delay_ms=close_delay_ms)
        if not state:
            return view

        products = [Product.from_dict(d) for d in state.get('products', [])]
        view.products = {p.id: p for p in products}
        view.loaded = state.get('loaded', False)
        view.query = state.get('query', '')
        selected = state.get('selected')
        view.selected = Product.from_dict(selected) if selected else None
        view.mode = state.get('mode', MODE_RECEIVE)
        view.qty_input = state.get('qty_input', 1)
        view.message = state.get('message')
        view.warning = state.get('warning')
        view.closing = state.get('closing', False)
        return view
