import hashlib
import json
from typing import Any, List

def sha256(data: bytes) -> bytes:
    """Returns SHA256 hash of bytes."""
    return hashlib.sha256(data).digest()

def sha256_hex(data: bytes) -> str:
    """Returns SHA256 hash of bytes as hex string."""
    return sha256(data).hex()

def canonical_json(data: Any) -> bytes:
    """Sorted keys, no whitespace: identical input gives identical bytes."""
    return json.dumps(data, sort_keys=True, separators=(',', ':')).encode()

def sha256_json(data: Any) -> bytes:
    return sha256(canonical_json(data))

def merkle_root(leaves: List[bytes]) -> bytes:
    """
    Root over already-hashed leaves. An odd node is paired with itself;
    an empty tree hashes the empty string.
    """
    if not leaves:
        return sha256(b"")

    level = list(leaves)
    while len(level) > 1:
        if len(level) % 2:
            level.append(level[-1])
        level = [sha256(level[i] + level[i + 1]) for i in range(0, len(level), 2)]
    return level[0]
