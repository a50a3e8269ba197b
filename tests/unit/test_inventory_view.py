"""
Unit tests for the inventory screen state.
"""

import logging
import pytest
from inventory.exceptions import ProductNotFoundError, ValidationError
from inventory.services.inventory_view import (
    InventoryView, MODE_RECEIVE, MODE_ISSUE, OVER_ISSUE_WARNING, FAILURE_MESSAGE, parse_quantity
)


@pytest.fixture
def view(store):
    view = InventoryView(store, close_delay_ms=0)
    view.activate()
    return view


class TestActivation:
    """Tests for the load-once catalog cache."""

    def test_activate_loads_catalog(self, view):
        assert view.loaded is True
        assert view.loading is False
        assert list(view.products) == ['p-1', 'p-2', 'p-3']

    def test_activate_loads_only_once(self, store):
        calls = []
        original = store.list

        def counting_list():
            calls.append(1)
            return original()

        store.list = counting_list
        view = InventoryView(store)
        view.activate()
        view.activate()
        assert len(calls) == 1

    def test_result_discarded_when_deactivated_during_load(self, store):
        """A screen torn down while loading keeps its empty cache."""
        view = InventoryView(store)
        original = store.list

        def list_then_teardown():
            products = original()
            view.deactivate()
            return products

        store.list = list_then_teardown
        view.activate()

        assert view.products == {}
        assert view.loaded is False

    def test_remount_reloads_catalog(self, view, store):
        store.receive('p-1', 5)
        assert view.products['p-1'].quantity_on_hand == 120

        view.remount()

        assert view.loaded is True
        assert view.products['p-1'].quantity_on_hand == 125

    def test_remount_keeps_query_and_modal(self, view):
        view.set_query('paper')
        view.open_modal('p-1', MODE_RECEIVE)
        view.remount()

        assert view.query == 'paper'
        assert view.selected.id == 'p-1'

    def test_cache_is_not_aliased_to_store(self, view, store):
        view.products['p-1'].quantity_on_hand = 0
        assert store.get('p-1').quantity_on_hand == 120


class TestSearch:
    """Tests for the search filter."""

    def test_empty_query_returns_all_in_order(self, view):
        view.set_query('')
        assert [p.id for p in view.filtered()] == ['p-1', 'p-2', 'p-3']

    def test_none_query_returns_all(self, view):
        view.set_query(None)
        assert len(view.filtered()) == 3

    @pytest.mark.parametrize('query,expected', [
        ('sku-10', ['p-1', 'p-2']),
        ('BATTERIES', ['p-2']),
        ('apparel', ['p-3']),
        ('stationery', ['p-1']),
        ('t-shirt', ['p-3']),
        ('nothing-like-this', []),
    ])
    def test_case_insensitive_match_on_sku_name_category(self, view, query, expected):
        view.set_query(query)
        assert [p.id for p in view.filtered()] == expected

    def test_search_does_not_call_store(self, view, store):
        def fail():
            raise AssertionError('search must not reach the store')

        store.list = fail
        view.set_query('paper')
        assert view.shown_count == 1

    def test_product_without_category(self, store, unlimited_product):
        view = InventoryView(store)
        view.products = {unlimited_product.id: unlimited_product}
        view.set_query('gift')
        assert view.filtered() == [unlimited_product]
        view.set_query('stationery')
        assert view.filtered() == []


class TestKpis:
    """Tests for sidebar KPIs."""

    def test_totals(self, view):
        assert view.total_skus == 3
        assert view.low_stock_count == 1

    def test_low_stock_count_follows_adjustments(self, view):
        view.open_modal('p-2', MODE_ISSUE)
        view.set_quantity(20)
        view.confirm()
        assert view.low_stock_count == 2


class TestModal:
    """Tests for opening, confirming and closing the modal."""

    def test_open_modal_snapshots_product(self, view):
        view.qty_input = 7
        selected = view.open_modal('p-1', MODE_RECEIVE)

        assert view.modal_open is True
        assert selected.id == 'p-1'
        assert selected is not view.products['p-1']
        assert view.mode == MODE_RECEIVE
        assert view.qty_input == 1

    def test_open_modal_unknown_product(self, view):
        with pytest.raises(ProductNotFoundError):
            view.open_modal('p-404', MODE_RECEIVE)

    def test_open_modal_unknown_mode(self, view):
        with pytest.raises(ValidationError):
            view.open_modal('p-1', 'transfer')

    def test_confirm_receive(self, view, store):
        view.open_modal('p-1', MODE_RECEIVE)
        view.set_quantity('50')
        updated = view.confirm()

        assert updated.quantity_on_hand == 170
        assert view.products['p-1'].quantity_on_hand == 170
        assert store.get('p-1').quantity_on_hand == 170
        assert view.message == 'Received 50 pack(s) for Printer Paper A4 (500pcs)'
        assert view.warning is None
        assert view.closing is True

    def test_confirm_replaces_only_matching_entry(self, view):
        others = {pid: view.products[pid] for pid in ('p-2', 'p-3')}
        view.open_modal('p-1', MODE_ISSUE)
        view.set_quantity(5)
        view.confirm()

        assert list(view.products) == ['p-1', 'p-2', 'p-3']
        for pid, product in others.items():
            assert view.products[pid] is product

    def test_confirm_issue_over_available_warns_and_floors(self, view, store):
        view.open_modal('p-3', MODE_ISSUE)
        view.set_quantity(11)
        updated = view.confirm()

        assert updated.quantity_on_hand == 0
        assert view.products['p-3'].quantity_on_hand == 0
        assert view.warning == OVER_ISSUE_WARNING
        assert view.message == 'Issued 11 piece(s) for Blue T-Shirt (L)'

    def test_confirm_issue_within_available_has_no_warning(self, view):
        view.open_modal('p-3', MODE_ISSUE)
        view.set_quantity(8)
        view.confirm()
        assert view.warning is None
        assert view.products['p-3'].quantity_on_hand == 0

    def test_confirm_without_selection_is_noop(self, view):
        assert view.confirm() is None
        assert view.message is None
        assert view.closing is False

    def test_confirm_not_found_leaves_cache(self, view, store, caplog):
        view.open_modal('p-2', MODE_RECEIVE)
        store._products.pop('p-2')

        with caplog.at_level(logging.WARNING):
            assert view.confirm() is None

        assert view.products['p-2'].quantity_on_hand == 45
        assert 'no longer in the catalog' in view.message
        assert view.closing is True
        assert 'cache left unchanged' in caplog.text

    def test_confirm_issue_not_found_leaves_cache(self, view, store, caplog):
        view.open_modal('p-3', MODE_ISSUE)
        view.set_quantity(2)
        store._products.pop('p-3')

        with caplog.at_level(logging.WARNING):
            assert view.confirm() is None

        assert view.products['p-3'].quantity_on_hand == 8
        assert 'no longer in the catalog' in view.message
        assert view.warning is None
        assert view.closing is True
        assert 'cache left unchanged' in caplog.text

    def test_confirm_failure_reports_generic_message(self, view, store, caplog):
        def broken(product_id, qty):
            raise RuntimeError('backend down')

        store.receive = broken
        view.open_modal('p-1', MODE_RECEIVE)

        with caplog.at_level(logging.ERROR):
            assert view.confirm() is None

        assert view.message == FAILURE_MESSAGE
        assert view.closing is True
        assert view.products['p-1'].quantity_on_hand == 120
        assert 'backend down' in caplog.text

    def test_settle_closes_after_confirm(self, view):
        view.open_modal('p-1', MODE_RECEIVE)
        view.confirm()
        view.settle()

        assert view.modal_open is False
        assert view.message is None
        assert view.closing is False

    def test_settle_waits_close_delay(self, store, monkeypatch):
        sleeps = []
        monkeypatch.setattr('inventory.services.inventory_view.time.sleep', sleeps.append)
        view = InventoryView(store, close_delay_ms=900)
        view.activate()
        view.open_modal('p-1', MODE_RECEIVE)
        view.confirm()
        view.settle()
        assert sleeps == [0.9]

    def test_settle_without_confirm_keeps_modal_open(self, view):
        view.open_modal('p-1', MODE_RECEIVE)
        view.settle()
        assert view.modal_open is True

    def test_cancel_closes_modal(self, view):
        view.open_modal('p-1', MODE_ISSUE)
        view.cancel()
        assert view.modal_open is False


class TestQuantityInput:
    """Tests for the quantity input clamp."""

    @pytest.mark.parametrize('raw,expected', [
        ('5', 5),
        (5, 5),
        ('-3', 0),
        ('', 0),
        ('abc', 0),
        (None, 0),
        ('2.7', 2),
        ('nan', 0),
        ('inf', 0),
        (' 12 ', 12),
    ])
    def test_parse_quantity(self, raw, expected):
        assert parse_quantity(raw) == expected

    def test_zero_quantity_confirm(self, view, store):
        view.open_modal('p-1', MODE_RECEIVE)
        view.set_quantity('-4')
        view.confirm()
        assert store.get('p-1').quantity_on_hand == 120
        assert view.message == 'Received 0 pack(s) for Printer Paper A4 (500pcs)'


class TestSessionState:
    """Tests for to_state/from_state."""

    def test_round_trip_preserves_screen(self, view, store):
        view.set_query('sku')
        view.open_modal('p-3', MODE_ISSUE)
        view.set_quantity(4)

        restored = InventoryView.from_state(store, view.to_state(), close_delay_ms=0)

        assert restored.loaded is True
        assert list(restored.products) == ['p-1', 'p-2', 'p-3']
        assert restored.products == view.products
        assert restored.query == 'sku'
        assert restored.selected == view.selected
        assert restored.mode == MODE_ISSUE
        assert restored.qty_input == 4

    def test_from_empty_state(self, store):
        view = InventoryView.from_state(store, None)
        assert view.loaded is False
        assert view.products == {}
        assert view.modal_open is False
