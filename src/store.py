import redis.asyncio as redis

from hash_ring import HashRing
from snapshot import RingSnapshot
from validation import MAX_LENGTH


class RingStore:
    """
    Persists ring snapshots in Redis hashes.

    Only membership and replica count are written; positions are re-hashed
    on load. Keys look like "<prefix>:ring:<name>".
    """

    def __init__(self, client, prefix: str = "hashorbit", logger=None):
        self.r = client
        self.prefix = prefix
        self.logger = logger

    @classmethod
    def from_url(cls, url: str, prefix: str = "hashorbit", logger=None) -> "RingStore":
        return cls(redis.from_url(url), prefix=prefix, logger=logger)

    def key(self, name: str) -> str:
        return f"{self.prefix}:ring:{name}"

    async def save(self, name: str, ring: HashRing) -> RingSnapshot:
        snap = ring.snapshot()
        key = self.key(name)
        # drop stale fields before writing the new snapshot
        await self.r.delete(key)
        await self.r.hset(key, mapping=snap.to_fields())
        if self.logger:
            self.logger.info(
                f"[STORE] Saved {key}: nodes={len(snap.nodes)}, replicas={snap.replicas}"
            )
        return snap

    async def load(self, name: str, max_length: int = MAX_LENGTH):
        """Returns the stored ring, or None when nothing is stored under name."""
        fields = await self.r.hgetall(self.key(name))
        if not fields:
            return None
        return HashRing.restore(RingSnapshot.from_fields(fields, max_length), max_length)

    async def delete(self, name: str) -> bool:
        return bool(await self.r.delete(self.key(name)))

    async def close(self) -> None:
        await self.r.aclose()
