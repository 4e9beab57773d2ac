# MIT License
# Copyright (c) 2025 Hashborn

"""
Snapshot Writer

Encodes records in the layout SnapshotReader expects. Used to build
fixture stores.
"""

from typing import Iterable, List, Optional

from ..storage.db import KVStore
from ..storage import keys as db_keys
from ...protocol.config.params import CHAIN_STATE_UNREGISTERED_ADDRESSES, CHAIN_STATE_DELEGATE_VOTE_WEIGHTS
from ...protocol.types.account import Account
from ...protocol.types.block import BlockHeader, Transaction
from ...protocol.types.chain_state import UnregisteredAccount, UnregisteredAddresses, VoteWeights


class SnapshotWriter:
    def __init__(self, store: KVStore):
        self.store = store

    def put_accounts(self, accounts: Iterable[Account]):
        self.store.put_many(
            (db_keys.account_key(acc.address_bytes), acc.model_dump_json().encode())
            for acc in accounts
        )

    def put_unregistered_addresses(self, legacy_accounts: List[UnregisteredAccount]):
        record = UnregisteredAddresses(unregistered_addresses=legacy_accounts)
        self.store.put(
            db_keys.chain_state_key(CHAIN_STATE_UNREGISTERED_ADDRESSES),
            record.model_dump_json().encode()
        )

    def put_vote_weights(self, vote_weights: VoteWeights):
        self.store.put(
            db_keys.chain_state_key(CHAIN_STATE_DELEGATE_VOTE_WEIGHTS),
            vote_weights.model_dump_json().encode()
        )

    def put_block(self, header: BlockHeader, txs: Optional[List[Transaction]] = None):
        block_id = bytes.fromhex(header.id)
        items = [
            (db_keys.height_key(header.height), block_id),
            (db_keys.block_id_key(block_id), header.model_dump_json().encode()),
        ]
        if txs:
            items.append((
                db_keys.block_transactions_key(block_id),
                b"".join(bytes.fromhex(tx.id) for tx in txs)
            ))
            items.extend(
                (db_keys.transaction_key(bytes.fromhex(tx.id)), tx.model_dump_json().encode())
                for tx in txs
            )
        self.store.put_many(items)
