from __future__ import annotations

from dataclasses import dataclass, field

import pytest

from storefront.cart import MemoryStorage, RedisSnapshotStorage
from storefront.cart import storage as storage_module
from storefront.errors import PersistenceUnavailable


@dataclass
class FakeRedisClient:
    data: dict[str, str] = field(default_factory=dict)
    expiry: dict[str, int] = field(default_factory=dict)
    fail: bool = False

    def _check(self) -> None:
        if self.fail:
            raise ConnectionError("upstash unreachable")

    def get(self, key: str):
        self._check()
        return self.data.get(key)

    def set(self, key: str, value: str, ex: int | None = None):
        self._check()
        self.data[key] = value
        if ex is not None:
            self.expiry[key] = ex
        return True

    def delete(self, key: str) -> int:
        self._check()
        existed = 1 if key in self.data else 0
        self.data.pop(key, None)
        return existed


def test_memory_storage_basic_operations() -> None:
    storage = MemoryStorage()

    assert storage.get("cart") is None
    storage.set("cart", "[]")
    assert storage.get("cart") == "[]"
    assert "cart" in storage
    storage.delete("cart")
    storage.delete("cart")
    assert "cart" not in storage


def test_memory_storage_quota_counts_all_keys() -> None:
    storage = MemoryStorage(max_bytes=20)
    storage.set("a", "x" * 10)

    with pytest.raises(PersistenceUnavailable):
        storage.set("b", "y" * 10)

    # Overwriting an existing key only counts the new value
    storage.set("a", "z" * 15)
    assert storage.get("a") == "z" * 15


def test_redis_storage_round_trip() -> None:
    client = FakeRedisClient()
    storage = RedisSnapshotStorage(client=client, ttl=0)

    storage.set("cart:abc", '{"version":1,"items":[]}')

    assert storage.get("cart:abc") == '{"version":1,"items":[]}'
    assert client.expiry == {}
    storage.delete("cart:abc")
    assert storage.get("cart:abc") is None


def test_redis_storage_applies_ttl() -> None:
    client = FakeRedisClient()
    storage = RedisSnapshotStorage(client=client, ttl=3600)

    storage.set("cart:abc", "[]")

    assert client.expiry["cart:abc"] == 3600


def test_redis_storage_decodes_bytes() -> None:
    client = FakeRedisClient()
    client.data["cart"] = b"[]"

    assert RedisSnapshotStorage(client=client).get("cart") == "[]"


@pytest.mark.parametrize("operation", ["get", "set", "delete"])
def test_redis_errors_become_persistence_unavailable(operation) -> None:
    storage = RedisSnapshotStorage(client=FakeRedisClient(fail=True))
    args = ("cart", "[]") if operation == "set" else ("cart",)

    with pytest.raises(PersistenceUnavailable):
        getattr(storage, operation)(*args)


def test_redis_not_configured(monkeypatch) -> None:
    def not_configured():
        raise ValueError("UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set")

    monkeypatch.setattr(storage_module, "get_redis_sync", not_configured)

    with pytest.raises(PersistenceUnavailable):
        RedisSnapshotStorage().get("cart")


def test_default_storage_without_redis(monkeypatch) -> None:
    monkeypatch.setattr(storage_module, "redis_configured", lambda: False)
    monkeypatch.setattr(storage_module, "_memory_fallback", None)

    first = storage_module.get_default_storage()
    second = storage_module.get_default_storage()

    assert isinstance(first, MemoryStorage)
    assert first is second


def test_default_storage_with_redis(monkeypatch) -> None:
    monkeypatch.setattr(storage_module, "redis_configured", lambda: True)

    assert isinstance(storage_module.get_default_storage(), RedisSnapshotStorage)
