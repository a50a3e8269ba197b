import pytest

from inventory import create_app
from inventory.models import Product
from inventory.services.catalog_store import CatalogStore


@pytest.fixture(scope='function')
def app():
    """Create application instance for testing."""
    app = create_app('config.TestConfig')
    return app


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def catalog(app):
    """The app's in-memory catalog store."""
    return app.extensions['catalog']


@pytest.fixture(scope='function')
def store():
    """Standalone store seeded with the demo products, no latency."""
    return CatalogStore(list_latency_ms=0, adjust_latency_ms=0)


@pytest.fixture(scope='function')
def unlimited_product():
    """Product without a reorder level."""
    return Product(
        id='p-9',
        sku='SKU-9000',
        name='Gift Card',
        unit='piece',
        quantity_on_hand=0,
    )


@pytest.fixture(scope='function')
def htmx_headers():
    return {'HX-Request': 'true'}
