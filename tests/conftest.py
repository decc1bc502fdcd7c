"""Pytest configuration and fixtures"""
import os
import pytest
from unittest.mock import Mock, AsyncMock

# Set test environment variables before storefront modules read them
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_ROLE_KEY", "test_key")
os.environ["UPSTASH_REDIS_REST_URL"] = ""
os.environ["UPSTASH_REDIS_REST_TOKEN"] = ""
os.environ.setdefault("STORE_CURRENCY", "USD")

from storefront.cart import CartStore, MemoryStorage
from storefront.services.notifications import ToastCenter


class FakeClock:
    """Manually advanced clock for toast expiry."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def storage():
    """Empty in-memory snapshot storage"""
    return MemoryStorage()


@pytest.fixture
def toasts(clock):
    return ToastCenter(default_duration=3.0, clock=clock)


@pytest.fixture
def store(storage, toasts):
    """Cart store over the in-memory storage, already rehydrated"""
    cart_store = CartStore(storage=storage, notifier=toasts)
    cart_store.load()
    return cart_store


@pytest.fixture
def mock_supabase_client():
    """Mock Supabase client (sync query builder)"""
    client = Mock()

    table_mock = Mock()
    table_mock.select.return_value = table_mock
    table_mock.insert.return_value = table_mock
    table_mock.eq.return_value = table_mock
    table_mock.limit.return_value = table_mock

    client.table.return_value = table_mock
    return client


@pytest.fixture
def mock_async_supabase_client(mock_supabase_client):
    """Mock Supabase AsyncClient: same builder, awaitable execute()"""
    mock_supabase_client.table.return_value.execute = AsyncMock()
    return mock_supabase_client


@pytest.fixture
def sample_product():
    """Sample products row"""
    return {
        "id": "product-123",
        "name": "Desk Lamp",
        "description": "Brass desk lamp",
        "price": 19.99,
        "stock": 5,
        "category": "home",
        "image_url": "lamps/brass.jpg",
        "seller_id": "seller-1",
        "created_at": "2025-01-01T00:00:00Z",
    }
