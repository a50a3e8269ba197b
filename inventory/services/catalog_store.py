"""
In-memory Catalog Store.

Owns the authoritative Product records and applies receive/issue
adjustments. Every call sleeps a fixed latency to stand in for a network
round-trip, and every record handed out is a copy.
"""

import logging
import time
from typing import Callable, Dict, Iterable, List, Optional

from flask import Flask, current_app
from prometheus_client import Counter

from inventory.models import Product

logger = logging.getLogger(__name__)

stock_adjustments_total = Counter(
    'stock_adjustments_total',
    'Stock adjustments requested against the catalog',
    ['operation', 'outcome']
)

DEFAULT_SEED = (
    Product(id='p-1', sku='SKU-1001', name='Printer Paper A4 (500pcs)', unit='pack',
            category='Stationery', quantity_on_hand=120, reserved_quantity=0, reorder_level=20),
    Product(id='p-2', sku='SKU-1002', name='AA Batteries (pack of 4)', unit='pack',
            category='Electronics', quantity_on_hand=45, reserved_quantity=5, reorder_level=30),
    Product(id='p-3', sku='SKU-2001', name='Blue T-Shirt (L)', unit='piece',
            category='Apparel', quantity_on_hand=8, reserved_quantity=1, reorder_level=10),
)


class CatalogStore:
    """
    Process-local product catalog keyed by product id.

    ``receive`` and ``issue`` return ``None`` for an unknown id instead of
    raising; callers decide how to surface that.
    """

    def __init__(self, seed: Optional[Iterable[Product]] = None,
                 list_latency_ms: int = 150, adjust_latency_ms: int = 120):
        self._seed: List[Product] = [p.copy() for p in (DEFAULT_SEED if seed is None else seed)]
        self.list_latency_ms = list_latency_ms
        self.adjust_latency_ms = adjust_latency_ms
        self._products: Dict[str, Product] = {}
        self.reset()

    def __len__(self) -> int:
        return len(self._products)

    def reset(self) -> None:
        """Restore every record to its seed values."""
        self._products = {p.id: p.copy() for p in self._seed}

    def _wait(self, latency_ms: int) -> None:
        if latency_ms > 0:
            time.sleep(latency_ms / 1000.0)

    def list(self) -> List[Product]:
        """Return copies of all records in seed order."""
        self._wait(self.list_latency_ms)
        return [p.copy() for p in self._products.values()]

    def get(self, product_id: str) -> Optional[Product]:
        """Return a copy of one record, or None. No simulated latency."""
        product = self._products.get(product_id)
        return product.copy() if product is not None else None

    def receive(self, product_id: str, qty: int) -> Optional[Product]:
        """Add ``qty`` to on-hand stock. The quantity is not validated."""
        return self._adjust('receive', product_id, qty,
                            lambda on_hand: on_hand + qty)

    def issue(self, product_id: str, qty: int) -> Optional[Product]:
        """Remove ``qty`` from on-hand stock, flooring at zero."""
        return self._adjust('issue', product_id, qty,
                            lambda on_hand: max(0, on_hand - qty))

    def _adjust(self, operation: str, product_id: str, qty: int,
                apply: Callable[[int], int]) -> Optional[Product]:
        self._wait(self.adjust_latency_ms)

        product = self._products.get(product_id)
        if product is None:
            stock_adjustments_total.labels(operation=operation, outcome='not_found').inc()
            logger.warning(f"[CATALOG] {operation} {qty}: no product with id {product_id!r}")
            return None

        before = product.quantity_on_hand
        product.quantity_on_hand = apply(before)
        stock_adjustments_total.labels(operation=operation, outcome='applied').inc()
        logger.info(
            f"[CATALOG] {operation} {qty} {product.unit} on {product.sku}: "
            f"{before} -> {product.quantity_on_hand}"
        )
        return product.copy()


def init_catalog(app: Flask, seed: Optional[Iterable[Product]] = None) -> CatalogStore:
    """Create the app's catalog store from config and register it."""
    store = CatalogStore(
        seed=seed,
        list_latency_ms=app.config.get('CATALOG_LIST_LATENCY_MS', 150),
        adjust_latency_ms=app.config.get('CATALOG_ADJUST_LATENCY_MS', 120),
    )
    app.extensions['catalog'] = store
    logger.info(f"[CATALOG] Seeded {len(store)} products")
    return store


def get_catalog() -> CatalogStore:
    """Get the catalog store of the current app."""
    store = current_app.extensions.get('catalog')
    if store is None:
        raise RuntimeError("Catalog not initialized.")
    return store
