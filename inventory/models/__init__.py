"""Models package - exports the catalog record types."""
from inventory.models.product import Product

__all__ = ['Product']
