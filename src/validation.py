from errors import InvalidArgument, Reason

MAX_LENGTH = 1000

NODE_FIELD = "Node identifier"
KEY_FIELD = "Key"


def check_identifier(value, field: str, max_length: int = MAX_LENGTH):
    """
    Fails fast on identifiers and keys that may not touch the ring.

    Length is counted in characters for str and in bytes for bytes.
    """
    if not isinstance(value, (str, bytes, bytearray)):
        raise TypeError(f"{field} must be str or bytes, got {type(value).__name__}")
    if not value:
        raise InvalidArgument(Reason.EMPTY, field, max_length)
    if len(value) > max_length:
        raise InvalidArgument(Reason.TOO_LONG, field, max_length)
    return value


def check_node_id(node_id, max_length: int = MAX_LENGTH):
    # node ids end up in JSON snapshots
    if not isinstance(node_id, str):
        raise TypeError(f"{NODE_FIELD} must be str, got {type(node_id).__name__}")
    return check_identifier(node_id, NODE_FIELD, max_length)


def check_key(key, max_length: int = MAX_LENGTH):
    return check_identifier(key, KEY_FIELD, max_length)


def check_positive(value, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value
