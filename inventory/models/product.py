"""Product model."""
from dataclasses import dataclass, asdict, replace
from typing import Any, Dict, Optional


@dataclass
class Product:
    """Catalog record for a stocked product.

    Only ``quantity_on_hand`` changes at runtime; ``reserved_quantity`` and
    ``reorder_level`` are informational.
    """

    id: str
    sku: str
    name: str
    unit: str
    category: Optional[str] = None
    quantity_on_hand: int = 0
    reserved_quantity: Optional[int] = None
    reorder_level: Optional[int] = None

    def __repr__(self):
        return f"<Product(id={self.id}, sku='{self.sku}', on_hand={self.quantity_on_hand})>"

    @property
    def is_low_stock(self) -> bool:
        """True when on-hand stock is at or below the reorder level."""
        if self.reorder_level is None:
            return False
        return self.quantity_on_hand <= self.reorder_level

    def copy(self) -> 'Product':
        """Return an independent snapshot of this record."""
        return replace(self)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Product':
        return cls(
            id=data['id'],
            sku=data['sku'],
            name=data['name'],
            unit=data.get('unit', ''),
            category=data.get('category'),
            quantity_on_hand=int(data.get('quantity_on_hand', 0)),
            reserved_quantity=data.get('reserved_quantity'),
            reorder_level=data.get('reorder_level'),
        )
