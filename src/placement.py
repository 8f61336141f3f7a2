from collections import defaultdict

from hashing import RING_SIZE


def key_distribution(ring, keys):
    """
    Counts how many of the given keys each node owns.

    Returns:
        A dict with one entry per ring member, including members with 0 keys.
    """
    distribution = {node_id: 0 for node_id in ring.nodes}
    for key in keys:
        owner = ring.get(key)
        if owner is not None:
            distribution[owner] += 1
    return distribution


def remapped_keys(before, after, keys):
    """
    Lists the keys whose owner differs between two rings.

    Returns:
        Keys in input order.
    """
    return [key for key in keys if before.get(key) != after.get(key)]


def coverage(ring):
    """
    Fraction of the 32-bit hash space owned by each node.

    A position owns the arc between its predecessor (exclusive) and itself,
    wrapping at the end; a single position owns the whole ring.
    """
    positions = list(ring.vnodes())
    if not positions:
        return {}

    owned = defaultdict(int)
    prev = positions[-1][0]
    for position, node_id in positions:
        owned[node_id] += (position - prev) % RING_SIZE or RING_SIZE
        prev = position

    return {node_id: owned.get(node_id, 0) / RING_SIZE for node_id in ring.nodes}
