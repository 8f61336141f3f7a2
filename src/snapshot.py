from dataclasses import dataclass, asdict
import json
from typing import Mapping, Tuple

from errors import SnapshotError
from validation import MAX_LENGTH, check_node_id, check_positive


def _text(value) -> str:
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8")
    return value


@dataclass(frozen=True)
class RingSnapshot:
    """
    Minimal state needed to regenerate a ring: the member node ids and the
    replica count. Positions are never stored; restoring re-hashes them.

    Node order is the order in which the ring last added each node, so that
    replaying it reproduces last-write-wins collisions.
    """

    nodes: Tuple[str, ...]
    replicas: int

    def to_dict(self) -> dict:
        data = asdict(self)
        data["nodes"] = list(self.nodes)
        return data

    def to_json_str(self) -> str:
        return json.dumps(self.to_dict(), separators=(",", ":"))

    def to_fields(self) -> dict:
        """Flat str mapping suitable for a Redis hash."""
        return {"nodes": json.dumps(list(self.nodes)), "replicas": str(self.replicas)}

    @classmethod
    def from_dict(cls, data: Mapping, max_length: int = MAX_LENGTH) -> "RingSnapshot":
        if not isinstance(data, Mapping):
            raise SnapshotError(f"snapshot must be a mapping, got {type(data).__name__}")
        try:
            nodes = data["nodes"]
            replicas = data["replicas"]
        except KeyError as e:
            raise SnapshotError(f"snapshot is missing {e.args[0]!r}") from None

        if isinstance(nodes, (str, bytes)) or not isinstance(nodes, (list, tuple)):
            raise SnapshotError("snapshot nodes must be a list of node identifiers")
        try:
            check_positive(replicas, "replicas")
            for node_id in nodes:
                check_node_id(node_id, max_length)
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"invalid snapshot: {e}") from e

        # a repeated id keeps its last position, matching the add it replays
        nodes = tuple(reversed(dict.fromkeys(reversed(nodes))))
        return cls(nodes=nodes, replicas=replicas)

    @classmethod
    def from_json_str(cls, text, max_length: int = MAX_LENGTH) -> "RingSnapshot":
        try:
            data = json.loads(text)
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"snapshot is not valid JSON: {e}") from e
        return cls.from_dict(data, max_length)

    @classmethod
    def from_fields(cls, fields: Mapping, max_length: int = MAX_LENGTH) -> "RingSnapshot":
        fields = {_text(k): _text(v) for k, v in fields.items()}
        try:
            nodes = json.loads(fields["nodes"])
            replicas = int(fields["replicas"])
        except KeyError as e:
            raise SnapshotError(f"snapshot is missing {e.args[0]!r}") from None
        except (TypeError, ValueError) as e:
            raise SnapshotError(f"invalid snapshot fields: {e}") from e
        return cls.from_dict({"nodes": nodes, "replicas": replicas}, max_length)
