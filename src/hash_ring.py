from collections import Counter
from itertools import chain
from typing import Iterator, List, Optional, Tuple

from sortedcontainers import SortedDict

from hashing import h32, vnode_label
from logger import Logger
from snapshot import RingSnapshot
from validation import MAX_LENGTH, check_key, check_node_id, check_positive

logger = Logger.get_logger("hash_ring")


class HashRing:
    """
    Consistent hashing ring with virtual nodes.

    Every physical node occupies `replicas` positions on a 32-bit hash ring,
    one per h32("<node_id>:<replica_index>"). A key belongs to the owner of
    the first position at or after h32(key); traversal is clockwise and wraps
    from the last position back to the first.

    Position collisions are resolved last-write-wins on add. remove only
    deletes positions still owned by the node being removed.

    Not thread-safe; see SharedRing for concurrent readers.
    """

    def __init__(self, replicas: int = 150, max_length: int = MAX_LENGTH):
        self._replicas = check_positive(replicas, "replicas")
        self._max_length = check_positive(max_length, "max_length")
        # position -> node id, kept in ascending position order
        self._ring = SortedDict()
        # node id -> positions owned, in order of most recent add
        self._owned = Counter()

    @classmethod
    def from_config(cls, cfg) -> "HashRing":
        return cls(replicas=cfg.replicas, max_length=cfg.max_length)

    @property
    def replicas(self) -> int:
        return self._replicas

    @property
    def max_length(self) -> int:
        return self._max_length

    @property
    def size(self) -> int:
        """Number of distinct physical nodes."""
        return len(self._owned)

    @property
    def nodes(self) -> List[str]:
        return list(self._owned)

    @property
    def positions(self) -> int:
        return len(self._ring)

    def vnodes(self) -> Iterator[Tuple[int, str]]:
        """Yields (position, node_id) pairs in ascending position order."""
        return iter(list(self._ring.items()))

    def add(self, node_id: str) -> None:
        """Places the node's virtual nodes on the ring. Re-adding is a no-op."""
        check_node_id(node_id, self._max_length)

        owned = self._owned.pop(node_id, 0)
        written = 0
        for i in range(self._replicas):
            position = h32(vnode_label(node_id, i))
            owner = self._ring.get(position)
            if owner == node_id:
                continue
            if owner is not None:
                logger.debug(
                    f"Position {position} of {node_id!r} collides with {owner!r}; overwriting"
                )
                self._release(owner)
            self._ring[position] = node_id
            written += 1
        self._owned[node_id] = owned + written

        if written:
            logger.debug(f"Added {node_id!r}: {written} positions, ring has {len(self._ring)}")

    def remove(self, node_id: str) -> None:
        """
        Removes the node's virtual nodes. Unknown nodes are ignored.

        A position another node overwrote stays with that node. If that node
        is removed later, the position is gone from the live ring although a
        ring restored from snapshot() gives it back to this node.
        """
        check_node_id(node_id, self._max_length)

        removed = 0
        for i in range(self._replicas):
            position = h32(vnode_label(node_id, i))
            if self._ring.get(position) == node_id:
                del self._ring[position]
                self._release(node_id)
                removed += 1

        if removed:
            logger.debug(f"Removed {node_id!r}: {removed} positions, ring has {len(self._ring)}")

    def _release(self, node_id: str) -> None:
        self._owned[node_id] -= 1
        if self._owned[node_id] <= 0:
            del self._owned[node_id]

    def get(self, key) -> Optional[str]:
        """Returns the node owning the key, or None if the ring is empty."""
        check_key(key, self._max_length)
        if not self._ring:
            return None

        i = self._ring.bisect_left(h32(key))
        if i == len(self._ring):
            i = 0
        return self._ring.peekitem(i)[1]

    def get_n(self, key, count: int) -> List[str]:
        """
        Returns up to `count` distinct nodes for the key, walking clockwise
        from its owner. The first element is always get(key).
        """
        check_key(key, self._max_length)
        if isinstance(count, bool) or not isinstance(count, int):
            raise TypeError(f"count must be an int, got {type(count).__name__}")
        if count <= 0 or not self._ring:
            return []

        count = min(count, len(self._owned))
        result = []
        seen = set()
        for node_id in self._walk(h32(key)):
            if node_id in seen:
                continue
            seen.add(node_id)
            result.append(node_id)
            if len(result) >= count:
                break
        return result

    def clockwise_walk(self, key) -> Iterator[str]:
        """Yields the owner of every position once, clockwise from the key."""
        check_key(key, self._max_length)
        return self._walk(h32(key))

    def _walk(self, hv: int) -> Iterator[str]:
        ahead = self._ring.irange(minimum=hv)
        behind = self._ring.irange(maximum=hv, inclusive=(True, False))
        for position in chain(ahead, behind):
            yield self._ring[position]

    def snapshot(self) -> RingSnapshot:
        return RingSnapshot(nodes=tuple(self._owned), replicas=self._replicas)

    @classmethod
    def restore(cls, snapshot: RingSnapshot, max_length: int = MAX_LENGTH) -> "HashRing":
        """
        Rebuilds a ring by re-adding every node of the snapshot in order.

        Equal to the live ring unless a collided position was lost through
        remove(); the restored ring re-creates such positions.
        """
        ring = cls(replicas=snapshot.replicas, max_length=max_length)
        for node_id in snapshot.nodes:
            ring.add(node_id)
        return ring

    def to_json(self) -> dict:
        return self.snapshot().to_dict()

    @classmethod
    def from_json(cls, data, max_length: int = MAX_LENGTH) -> "HashRing":
        """Accepts the output of to_json(), or the same object as a JSON string."""
        if isinstance(data, (str, bytes, bytearray)):
            snap = RingSnapshot.from_json_str(data, max_length)
        else:
            snap = RingSnapshot.from_dict(data, max_length)
        return cls.restore(snap, max_length)

    def copy(self) -> "HashRing":
        clone = type(self)(replicas=self._replicas, max_length=self._max_length)
        clone._ring = self._ring.copy()
        clone._owned = self._owned.copy()
        return clone

    def __len__(self) -> int:
        return len(self._owned)

    def __contains__(self, node_id) -> bool:
        return node_id in self._owned

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._owned))

    def __eq__(self, other) -> bool:
        if not isinstance(other, HashRing):
            return NotImplemented
        return self._replicas == other._replicas and self._ring == other._ring

    def __str__(self) -> str:
        return (
            f"HashRing(positions={len(self._ring)} nodes={len(self._owned)} "
            f"replicas={self._replicas})"
        )

    __repr__ = __str__
