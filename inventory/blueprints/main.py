"""Main blueprint with the root redirect and health check."""
from flask import Blueprint, jsonify, redirect, url_for
from inventory.services.catalog_store import get_catalog

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
def index():
    return redirect(url_for('inventory.index'))


@main_bp.route('/health')
def health():
    """
    Health check endpoint that validates the catalog store.

    Returns:
        200: Healthy (catalog seeded)
        500: Unhealthy (catalog missing or empty)
    """
    try:
        store = get_catalog()
        count = len(store)

        if count > 0:
            return jsonify({
                'status': 'healthy',
                'catalog': {'products': count},
            }), 200
        else:
            return jsonify({
                'status': 'unhealthy',
                'catalog': {'products': 0},
            }), 500

    except Exception as e:
        return jsonify({
            'status': 'unhealthy',
            'catalog': None,
            'error': str(e),
        }), 500
