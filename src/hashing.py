import mmh3

RING_SIZE = 2**32


def h32(value) -> int:
    """Computes an unsigned 32-bit MurmurHash3 (seed 0) of a str or bytes value."""
    if isinstance(value, str):
        value = value.encode("utf-8")
    elif isinstance(value, bytearray):
        value = bytes(value)
    return mmh3.hash(value, 0, signed=False)


def vnode_label(node_id: str, replica_index: int) -> str:
    return f"{node_id}:{replica_index}"
