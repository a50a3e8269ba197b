"""Inventory screen blueprint - product grid, search and the receive/issue modal."""
from flask import Blueprint, render_template, request, redirect, url_for, session, current_app, abort
from inventory.services.catalog_store import get_catalog
from inventory.services.inventory_view import InventoryView, MODAL_MODES
import logging

logger = logging.getLogger(__name__)

inventory_bp = Blueprint('inventory', __name__, url_prefix='/inventory')

VIEW_SESSION_KEY = 'inventory_view'


def _load_view(remount: bool = False) -> InventoryView:
    """
    Rebuild this browser's screen state and make sure the catalog is loaded.

    Partials reuse the session's cached list; a full page load (``remount``)
    fetches the catalog again and keeps only the search and modal state.
    """
    view = InventoryView.from_state(
        get_catalog(),
        session.get(VIEW_SESSION_KEY),
        close_delay_ms=current_app.config.get('MODAL_CLOSE_DELAY_MS', 900),
    )
    if remount:
        view.remount()
    else:
        view.activate()
    return view


def _save_view(view: InventoryView) -> None:
    session[VIEW_SESSION_KEY] = view.to_state()


def _is_htmx() -> bool:
    return request.headers.get('HX-Request') == 'true'


def _render_modal(view: InventoryView, refresh_grid: bool = False):
    return render_template('inventory/_modal.html',
                           view=view,
                           refresh_grid=refresh_grid,
                           close_delay_ms=view.close_delay_ms)


@inventory_bp.route('/')
def index():
    """Full inventory page. A ``q`` parameter sets the search text."""
    view = _load_view(remount=True)
    if 'q' in request.args:
        view.set_query(request.args.get('q', '').strip())
    _save_view(view)

    return render_template('inventory/index.html',
                           view=view,
                           close_delay_ms=view.close_delay_ms)


@inventory_bp.route('/grid')
def grid():
    """Grid partial for live search; filters the cached list only."""
    view = _load_view()
    view.set_query(request.args.get('q', '').strip())
    _save_view(view)
    return render_template('inventory/_grid.html', view=view)


@inventory_bp.route('/<product_id>/modal/<mode>')
def open_modal(product_id, mode):
    """Open the receive/issue modal for a product in the cached list."""
    if mode not in MODAL_MODES:
        abort(404)

    view = _load_view()
    view.open_modal(product_id, mode)
    _save_view(view)

    if not _is_htmx():
        return redirect(url_for('inventory.index'))
    return _render_modal(view)


@inventory_bp.route('/modal/confirm', methods=['POST'])
def confirm():
    """Apply the modal's quantity; the modal then auto-closes."""
    view = _load_view()

    if not view.modal_open:
        logger.info("Confirm received with no product selected")
    else:
        view.set_quantity(request.form.get('qty', ''))
        view.confirm()
    _save_view(view)

    if not _is_htmx():
        return redirect(url_for('inventory.index'))
    return _render_modal(view, refresh_grid=True)


@inventory_bp.route('/modal/close', methods=['POST'])
def close_modal():
    """Close the modal (cancel button or the post-confirm timer)."""
    view = _load_view()
    view.close_modal()
    _save_view(view)

    if not _is_htmx():
        return redirect(url_for('inventory.index'))
    return _render_modal(view)
