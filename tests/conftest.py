import pytest

import hash_ring
from hash_ring import HashRing


@pytest.fixture
def ring():
    """Ring with three servers and the default replica count."""
    r = HashRing(replicas=150)
    r.add("server-1")
    r.add("server-2")
    r.add("server-3")
    return r


@pytest.fixture
def fixed_positions(monkeypatch):
    """
    Replaces the ring's hash with a lookup table so tests can place virtual
    nodes and keys at chosen positions.
    """
    table = {}

    def fake_h32(value):
        if isinstance(value, (bytes, bytearray)):
            value = bytes(value).decode()
        return table[value]

    monkeypatch.setattr(hash_ring, "h32", fake_h32)
    return table
