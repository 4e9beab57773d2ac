# MIT License
# Copyright (c) 2025 Hashborn

"""
Validator-Key Resolver

Finds, for every address, the public key it last used as a block generator
(or as the sender of a transaction, for delegates) between two snapshots.
"""

import logging
from typing import Dict, Iterable, List, Tuple

from .reader import SnapshotReader, check_snapshot_range
from ...protocol.crypto.addresses import address_from_public_key
from ...protocol.types.account import Account
from ...protocol.types.block import BlockHeader, Transaction

logger = logging.getLogger(__name__)


def get_validator_keys(
    blocks: Iterable[Tuple[BlockHeader, List[Transaction]]],
    accounts: Iterable[Account],
) -> Dict[str, str]:
    """
    Map hex address -> hex public key over blocks given in ascending height.

    Later observations overwrite earlier ones.
    """
    delegates = {acc.address for acc in accounts if acc.is_delegate}
    keys: Dict[str, str] = {}

    for header, txs in blocks:
        generator = address_from_public_key(header.generator_public_key_bytes).hex()
        keys[generator] = header.generator_public_key

        for tx in txs:
            sender = address_from_public_key(tx.sender_public_key_bytes).hex()
            if sender in delegates:
                keys[sender] = tx.sender_public_key

    return keys


def resolve_validator_keys(
    reader: SnapshotReader,
    accounts: Iterable[Account],
    snapshot_height: int,
    previous_height: int,
) -> Dict[str, str]:
    """
    Resolve validator keys from blocks in (previous_height, snapshot_height].

    Raises:
        InvalidRangeError: If the heights are out of range or previous_height >= snapshot_height
        StorageIOError: If the block store cannot be read
    """
    check_snapshot_range(snapshot_height, previous_height)

    logger.info(f"Resolving validator keys from blocks {previous_height + 1}..{snapshot_height}")
    keys = get_validator_keys(reader.iter_blocks(previous_height + 1, snapshot_height), accounts)
    logger.info(f"Resolved generator keys for {len(keys)} addresses")
    return keys
