import threading
from typing import Iterable, List, Optional

from hash_ring import HashRing
from logger import Logger

logger = Logger.get_logger("shared_ring")


class SharedRing:
    """
    Copy-on-write holder for a HashRing shared between threads.

    Writers serialize on a lock, mutate a private copy and publish it by
    rebinding `_current`. Readers use whichever ring is published when they
    start and never take the lock. A published ring is never mutated.
    """

    def __init__(self, ring: Optional[HashRing] = None, replicas: int = 150):
        self._lock = threading.Lock()
        self._current = ring.copy() if ring is not None else HashRing(replicas=replicas)

    @property
    def current(self) -> HashRing:
        """The published ring. Treat as read-only."""
        return self._current

    @property
    def nodes(self) -> List[str]:
        return self._current.nodes

    @property
    def size(self) -> int:
        return self._current.size

    def get(self, key) -> Optional[str]:
        return self._current.get(key)

    def get_n(self, key, count: int) -> List[str]:
        return self._current.get_n(key, count)

    def snapshot(self):
        return self._current.snapshot()

    def add(self, *node_ids: str) -> HashRing:
        return self._mutate(HashRing.add, node_ids)

    def remove(self, *node_ids: str) -> HashRing:
        return self._mutate(HashRing.remove, node_ids)

    def replace(self, ring: HashRing) -> HashRing:
        """Publishes a copy of `ring` in place of the current one."""
        with self._lock:
            self._current = ring.copy()
            return self._current

    def _mutate(self, op, node_ids: Iterable[str]) -> HashRing:
        with self._lock:
            nxt = self._current.copy()
            # validation errors leave the published ring untouched
            for node_id in node_ids:
                op(nxt, node_id)
            self._current = nxt
            logger.debug(f"Published {nxt}")
            return nxt

    def __str__(self) -> str:
        return f"SharedRing({self._current})"
