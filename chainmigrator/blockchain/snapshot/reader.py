# MIT License
# Copyright (c) 2025 Hashborn

"""
Snapshot Reader

Decodes accounts, chain state and block history out of the source node's
key-value store. Every read is a generator or a point lookup; nothing is
cached between calls.
"""

import logging
from typing import Iterator, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from .types import Snapshot
from ..storage.db import KVStore
from ..storage import keys as db_keys
from ...protocol.config.params import (
    ADDRESS_LENGTH,
    TRANSACTION_ID_LENGTH,
    CHAIN_STATE_UNREGISTERED_ADDRESSES,
    CHAIN_STATE_DELEGATE_VOTE_WEIGHTS,
)
from ...protocol.types.account import Account
from ...protocol.types.block import BlockHeader, Transaction
from ...protocol.types.chain_state import UnregisteredAccount, UnregisteredAddresses, VoteWeights
from ...protocol.types.common import DecodeError, InvalidRangeError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


def decode_record(model: Type[M], key: bytes, value: bytes) -> M:
    """Decodes a stored record; any schema violation is a DecodeError."""
    try:
        return model.model_validate_json(value)
    except ValidationError as e:
        raise DecodeError(key, str(e)) from e


def check_snapshot_range(snapshot_height: int, previous_height: int):
    """
    Raises:
        InvalidRangeError: If either height has no block key or previous_height >= snapshot_height
    """
    for height in (snapshot_height, previous_height):
        if not 0 <= height <= db_keys.MAX_HEIGHT:
            raise InvalidRangeError(f"Height {height} outside 0..{db_keys.MAX_HEIGHT}")
    if previous_height >= snapshot_height:
        raise InvalidRangeError(
            f"Previous snapshot height {previous_height} must be below snapshot height {snapshot_height}"
        )


class SnapshotReader:
    """
    Reads the snapshot out of a KVStore.

    Accounts and block headers come back in key order, which for both is
    ascending (address bytes, height).
    """

    def __init__(self, store: KVStore):
        self.store = store

    # --- Accounts ---

    def iter_accounts(self) -> Iterator[Account]:
        gte, lte = db_keys.ACCOUNTS_RANGE
        for key, value in self.store.iterate(gte, lte):
            account = decode_record(Account, key, value)
            if len(account.address_bytes) != ADDRESS_LENGTH:
                logger.warning(f"Discarding account with {len(account.address_bytes)}-byte address {account.address}")
                continue
            if db_keys.address_from_key(key) != account.address_bytes:
                raise DecodeError(key, f"stored under another address than its record {account.address}")
            yield account

    # --- Chain state ---

    def get_unregistered_addresses(self) -> List[UnregisteredAccount]:
        key = db_keys.chain_state_key(CHAIN_STATE_UNREGISTERED_ADDRESSES)
        value = self.store.get(key)
        if value is None:
            logger.info("No unregistered addresses recorded in chain state")
            return []
        return decode_record(UnregisteredAddresses, key, value).unregistered_addresses

    def get_vote_weights(self) -> VoteWeights:
        key = db_keys.chain_state_key(CHAIN_STATE_DELEGATE_VOTE_WEIGHTS)
        value = self.store.get(key)
        if value is None:
            logger.warning("No delegate vote weights recorded in chain state")
            return VoteWeights()
        return decode_record(VoteWeights, key, value)

    # --- Blocks ---

    def get_block_header(self, block_id: bytes) -> Optional[BlockHeader]:
        key = db_keys.block_id_key(block_id)
        value = self.store.get(key)
        if value is None:
            return None
        return decode_record(BlockHeader, key, value)

    def get_block_header_at(self, height: int) -> Optional[BlockHeader]:
        block_id = self.store.get(db_keys.height_key(height))
        if block_id is None:
            return None
        return self._header_for(db_keys.height_key(height), block_id)

    def iter_block_headers(self, from_height: int, to_height: int) -> Iterator[BlockHeader]:
        """Yields headers with from_height <= height <= to_height, ascending."""
        if from_height > to_height:
            raise InvalidRangeError(f"Block range {from_height}..{to_height} is empty")

        for key, block_id in self.store.iterate(db_keys.height_key(from_height), db_keys.height_key(to_height)):
            yield self._header_for(key, block_id)

    def _header_for(self, height_key: bytes, block_id: bytes) -> BlockHeader:
        header = self.get_block_header(block_id)
        if header is None:
            raise DecodeError(height_key, f"block {block_id.hex()} is indexed but missing")
        height = db_keys.height_from_key(height_key)
        if header.height != height:
            raise DecodeError(height_key, f"indexed at height {height} but header says {header.height}")
        return header

    def get_transactions(self, block_id: bytes) -> List[Transaction]:
        key = db_keys.block_transactions_key(block_id)
        ids = self.store.get(key)
        if not ids:
            return []
        if len(ids) % TRANSACTION_ID_LENGTH != 0:
            raise DecodeError(key, f"transaction id list of {len(ids)} bytes")

        txs = []
        for i in range(0, len(ids), TRANSACTION_ID_LENGTH):
            tx_key = db_keys.transaction_key(ids[i:i + TRANSACTION_ID_LENGTH])
            value = self.store.get(tx_key)
            if value is None:
                raise DecodeError(tx_key, "transaction is listed in its block but missing")
            txs.append(decode_record(Transaction, tx_key, value))
        return txs

    def iter_blocks(self, from_height: int, to_height: int) -> Iterator[Tuple[BlockHeader, List[Transaction]]]:
        for header in self.iter_block_headers(from_height, to_height):
            yield header, self.get_transactions(bytes.fromhex(header.id))

    # --- Whole snapshot ---

    def load_snapshot(self, snapshot_height: int, previous_height: int) -> Snapshot:
        """
        Load accounts and chain state for a migration run.

        Raises:
            InvalidRangeError: If the heights are out of range or previous_height >= snapshot_height
            DecodeError: If any record is corrupt
        """
        check_snapshot_range(snapshot_height, previous_height)

        logger.info(f"Loading snapshot at height {snapshot_height}...")

        accounts = list(self.iter_accounts())
        legacy_accounts = self.get_unregistered_addresses()
        vote_weights = self.get_vote_weights()
        block = self.get_block_header_at(snapshot_height)
        if block is None:
            logger.warning(f"No block stored at snapshot height {snapshot_height}")

        logger.info(
            f"Snapshot loaded: {len(accounts)} accounts, "
            f"{len(legacy_accounts)} legacy accounts, "
            f"{len(vote_weights.vote_weights)} recorded rounds"
        )

        return Snapshot(
            height=snapshot_height,
            previous_height=previous_height,
            block=block,
            accounts=accounts,
            legacy_accounts=legacy_accounts,
            vote_weights=vote_weights,
        )
