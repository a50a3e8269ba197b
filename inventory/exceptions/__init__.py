"""Custom exceptions for the inventory application."""

class InventoryError(Exception):
    """
    Base exception for catalog and screen errors.

    Carries the HTTP status the error handlers answer with and optional
    context (e.g. the product id or the rejected qty) that is merged into
    the JSON error body.
    """
    def __init__(self, message="Inventory operation failed", status_code=500, payload=None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.payload = dict(payload or {})

    def to_dict(self):
        """JSON error body: status and message, then the payload keys."""
        body = {'status': 'error', 'message': self.message}
        body.update((k, v) for k, v in self.payload.items() if k not in body)
        return body

class ValidationError(InventoryError):
    """Raised when request input is malformed (e.g. a non-integer quantity)."""
    def __init__(self, message, payload=None):
        super().__init__(message, 400, payload)

class NotFoundError(InventoryError):
    """Exception raised when a resource is not found."""
    def __init__(self, message="Catalog record not found", payload=None):
        super().__init__(message, 404, payload)

class ProductNotFoundError(NotFoundError):
    """Raised when no catalog record has the requested product id."""
    def __init__(self, product_id):
        super().__init__(f"Product not found: {product_id}", payload={'product_id': product_id})
        self.product_id = product_id
