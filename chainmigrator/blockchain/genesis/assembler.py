# MIT License
# Copyright (c) 2025 Hashborn

"""
Genesis Assembler

Runs the module transformers over a loaded snapshot and returns the genesis
asset list ordered by module name.
"""

import logging
from typing import Dict, Iterable, List, Optional, Tuple

from pyuca import Collator

from .assets import (
    get_auth_module_entry,
    get_interoperability_module_entry,
    get_legacy_module_entry,
    get_pos_module_entry,
    get_token_module_entry,
)
from ..snapshot.reader import SnapshotReader
from ..snapshot.types import Snapshot
from ..snapshot.validator_keys import resolve_validator_keys
from ...protocol.config.params import NetworkConfig, CURRENT_NETWORK
from ...protocol.types.genesis import GenesisAssetEntry

logger = logging.getLogger(__name__)

# Unicode Collation Algorithm with the default table; independent of the host locale
_collator = Collator()


def sort_assets_by_module(entries: Iterable[GenesisAssetEntry]) -> List[GenesisAssetEntry]:
    """Orders assets by module name using Unicode collation (a < A < b < B)."""
    return sorted(entries, key=lambda entry: _collator.sort_key(entry.module))


def build_genesis_assets(
    snapshot: Snapshot,
    validator_keys: Dict[str, str],
    config: Optional[NetworkConfig] = None,
) -> List[GenesisAssetEntry]:
    """
    Build all five module assets from a loaded snapshot.

    The legacy asset runs first: the token asset takes its reserve amount.
    Any error propagates; no partial list is returned.
    """
    config = config or CURRENT_NETWORK

    legacy = get_legacy_module_entry(snapshot.legacy_accounts)
    entries = [
        legacy.entry,
        get_token_module_entry(snapshot.accounts, legacy.reserve_amount, config),
        get_auth_module_entry(snapshot.accounts, config),
        get_pos_module_entry(snapshot.accounts, validator_keys, snapshot.vote_weights, snapshot.height, config),
        get_interoperability_module_entry(config),
    ]
    return sort_assets_by_module(entries)


class GenesisAssembler:
    """
    Reads a snapshot out of the store and assembles the genesis assets.
    """

    def __init__(self, reader: SnapshotReader, config: Optional[NetworkConfig] = None):
        self.reader = reader
        self.config = config or CURRENT_NETWORK

    def create_assets(self, snapshot_height: int, previous_height: int) -> Tuple[Snapshot, List[GenesisAssetEntry]]:
        """
        Returns:
            (snapshot, assets) where assets are sorted by module name

        Raises:
            InvalidRangeError, DecodeError, MissingHistoricalDataError,
            StorageIOError, SupplyMismatchError
        """
        snapshot = self.reader.load_snapshot(snapshot_height, previous_height)
        validator_keys = resolve_validator_keys(self.reader, snapshot.accounts, snapshot_height, previous_height)

        assets = build_genesis_assets(snapshot, validator_keys, self.config)
        logger.info(f"Assembled genesis assets: {', '.join(a.module for a in assets)}")
        return snapshot, assets
