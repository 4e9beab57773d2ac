# MIT License
# Copyright (c) 2025 Hashborn

"""
Snapshot access for the genesis migration.

Reads accounts, chain state and block history from the source node's store.
"""

from .reader import SnapshotReader, decode_record
from .writer import SnapshotWriter
from .types import Snapshot
from .validator_keys import get_validator_keys, resolve_validator_keys

__all__ = [
    "SnapshotReader",
    "SnapshotWriter",
    "Snapshot",
    "decode_record",
    "get_validator_keys",
    "resolve_validator_keys",
]
