"""Products JSON API - list, receive and issue against the catalog store."""
from flask import Blueprint, jsonify, request, current_app
from inventory.exceptions import ProductNotFoundError, ValidationError
from inventory.services.catalog_store import get_catalog

api_bp = Blueprint('api', __name__, url_prefix='/api/products')


def _read_qty() -> int:
    """Read and validate the ``qty`` field of a JSON adjustment body."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or 'qty' not in data:
        raise ValidationError('Request body must be JSON with a "qty" field')

    qty = data['qty']
    # bool is an int subclass; reject it explicitly
    if isinstance(qty, bool) or not isinstance(qty, int):
        raise ValidationError('qty must be an integer', payload={'qty': qty})
    if qty < 0:
        raise ValidationError('qty must be zero or greater', payload={'qty': qty})
    return qty


@api_bp.route('', methods=['GET'])
def list_products():
    """GET /api/products - all catalog records."""
    products = get_catalog().list()
    return jsonify({'products': [p.to_dict() for p in products]})


@api_bp.route('/<product_id>/receive', methods=['POST'])
def receive_stock(product_id):
    """POST /api/products/<id>/receive {"qty": n}"""
    qty = _read_qty()
    updated = get_catalog().receive(product_id, qty)
    if updated is None:
        raise ProductNotFoundError(product_id)

    current_app.logger.info(f"API receive {qty} on {product_id}")
    return jsonify({'product': updated.to_dict()})


@api_bp.route('/<product_id>/issue', methods=['POST'])
def issue_stock(product_id):
    """POST /api/products/<id>/issue {"qty": n} - floors at zero."""
    qty = _read_qty()
    store = get_catalog()

    current = store.get(product_id)
    if current is None:
        raise ProductNotFoundError(product_id)

    updated = store.issue(product_id, qty)
    if updated is None:
        raise ProductNotFoundError(product_id)

    response = {'product': updated.to_dict()}
    if qty > current.quantity_on_hand:
        response['warning'] = (
            f"Requested {qty} but only {current.quantity_on_hand} on hand; "
            f"quantity floored to 0"
        )
    current_app.logger.info(f"API issue {qty} on {product_id}")
    return jsonify(response)
