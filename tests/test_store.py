from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from errors import SnapshotError
from hash_ring import HashRing
from store import RingStore


def make_client(stored=None):
    client = MagicMock()
    client.delete = AsyncMock(return_value=1)
    client.hset = AsyncMock(return_value=2)
    client.hgetall = AsyncMock(return_value=stored or {})
    client.aclose = AsyncMock()
    return client


class TestRingStore:
    """Test snapshot persistence through a mocked Redis client."""

    def test_key(self):
        """Keys are namespaced by prefix and ring name."""
        store = RingStore(make_client(), prefix="cache")
        assert store.key("users") == "cache:ring:users"

    @pytest.mark.asyncio
    async def test_save_writes_snapshot_fields(self, ring):
        """save replaces the hash with the ring's snapshot fields."""
        client = make_client()
        store = RingStore(client)

        snap = await store.save("main", ring)

        client.delete.assert_awaited_once_with("hashorbit:ring:main")
        client.hset.assert_awaited_once_with("hashorbit:ring:main", mapping=snap.to_fields())
        assert snap == ring.snapshot()

    @pytest.mark.asyncio
    async def test_save_logs(self, ring):
        """save reports through the given logger."""
        logger = MagicMock()
        store = RingStore(make_client(), logger=logger)
        await store.save("main", ring)
        logger.info.assert_called_once()

    @pytest.mark.asyncio
    async def test_load_restores_ring(self, ring):
        """load rebuilds an equal ring from stored bytes."""
        fields = {k.encode(): v.encode() for k, v in ring.snapshot().to_fields().items()}
        client = make_client(stored=fields)
        store = RingStore(client)

        loaded = await store.load("main")

        client.hgetall.assert_awaited_once_with("hashorbit:ring:main")
        assert loaded == ring
        assert loaded.get("user:1") == ring.get("user:1")

    @pytest.mark.asyncio
    async def test_load_missing(self):
        """load returns None when nothing is stored."""
        store = RingStore(make_client())
        assert await store.load("absent") is None

    @pytest.mark.asyncio
    async def test_load_corrupt(self):
        """Corrupt stored data raises SnapshotError."""
        store = RingStore(make_client(stored={b"nodes": b"not json", b"replicas": b"3"}))
        with pytest.raises(SnapshotError):
            await store.load("main")

    @pytest.mark.asyncio
    async def test_delete(self):
        """delete reports whether a key was removed."""
        client = make_client()
        store = RingStore(client)
        assert await store.delete("main") is True
        client.delete.return_value = 0
        assert await store.delete("main") is False

    @pytest.mark.asyncio
    async def test_close(self):
        """close closes the client."""
        client = make_client()
        await RingStore(client).close()
        client.aclose.assert_awaited_once()

    def test_from_url(self):
        """from_url builds a redis.asyncio client."""
        with patch("store.redis.from_url") as from_url:
            store = RingStore.from_url("redis://example:6379/1", prefix="p")
        from_url.assert_called_once_with("redis://example:6379/1")
        assert store.r is from_url.return_value
        assert store.prefix == "p"

    @pytest.mark.asyncio
    async def test_empty_ring_round_trip(self):
        """An empty ring can be saved and loaded."""
        ring = HashRing(replicas=7)
        client = make_client()
        store = RingStore(client)
        await store.save("empty", ring)

        written = client.hset.await_args.kwargs["mapping"]
        client.hgetall.return_value = written
        loaded = await store.load("empty")

        assert loaded.size == 0
        assert loaded.replicas == 7
