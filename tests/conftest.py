import os
import shutil
import tempfile

import pytest

from chainmigrator.blockchain.storage.db import KVStore
from chainmigrator.blockchain.snapshot import SnapshotReader, SnapshotWriter
from chainmigrator.protocol.config.params import NETWORKS
from chainmigrator.protocol.crypto.addresses import address_from_public_key
from chainmigrator.protocol.crypto.hash import sha256_hex
from chainmigrator.protocol.crypto.keys import generate_private_key, public_key_from_private
from chainmigrator.protocol.types.account import Account
from chainmigrator.protocol.types.block import BlockHeader, Transaction
from chainmigrator.protocol.types.chain_state import UnregisteredAccount, VoteWeights


@pytest.fixture
def config():
    return NETWORKS["devnet"]


@pytest.fixture
def db_dir():
    path = tempfile.mkdtemp()
    yield path
    shutil.rmtree(path)


@pytest.fixture
def store(db_dir):
    kv = KVStore(os.path.join(db_dir, "blockchain.db"))
    yield kv
    kv.close()


@pytest.fixture
def reader(store):
    return SnapshotReader(store)


@pytest.fixture
def writer(store):
    return SnapshotWriter(store)


@pytest.fixture
def addr():
    """Deterministic 20-byte hex address from an integer."""
    def _addr(n: int) -> str:
        return n.to_bytes(20, "big").hex()
    return _addr


@pytest.fixture
def make_account():
    def _make(address: str, balance: int = 0, nonce: int = 0, username: str = "",
              is_banned: bool = False, sent_votes=(), unlocking=(), keys=None, **delegate):
        return Account.model_validate({
            "address": address,
            "token": {"balance": balance},
            "sequence": {"nonce": nonce},
            "keys": keys or {},
            "dpos": {
                "delegate": {"username": username, "is_banned": is_banned, **delegate},
                "sent_votes": [{"delegate_address": a, "amount": amt} for a, amt in sent_votes],
                "unlocking": [
                    {"delegate_address": a, "amount": amt, "unvote_height": h}
                    for a, amt, h in unlocking
                ],
            },
        })
    return _make


@pytest.fixture
def make_keypair():
    """Returns (public_key_hex, address_hex) of a fresh Ed25519 key."""
    def _make():
        pub = public_key_from_private(generate_private_key())
        return pub.hex(), address_from_public_key(pub).hex()
    return _make


@pytest.fixture
def make_block():
    def _make(height: int, generator_public_key: str, tx_senders=(), timestamp=None):
        block_id = sha256_hex(f"block-{height}-{generator_public_key}".encode())
        header = BlockHeader(
            id=block_id,
            height=height,
            timestamp=timestamp if timestamp is not None else 1_600_000_000 + height * 10,
            generator_public_key=generator_public_key,
        )
        txs = [
            Transaction(
                id=sha256_hex(f"tx-{height}-{i}".encode()),
                module="token",
                command="transfer",
                nonce=i,
                sender_public_key=sender,
            )
            for i, sender in enumerate(tx_senders)
        ]
        return header, txs
    return _make


@pytest.fixture
def seeded(writer, make_account, make_block, make_keypair, addr, config):
    """
    Writes a small snapshot: two delegates, one voter, the legacy reserve
    account and two legacy balances, with top delegates recorded for round 1.

    Snapshot height 309 falls in round 3, so round 1 is r-2.
    """
    snapshot_height, previous_height = 103 * 3, 103 * 3 - 5
    gen_pub, gen_addr = make_keypair()
    accounts = [
        make_account(gen_addr, balance=1000, username="forger"),
        make_account(addr(2), balance=500, username="idle", nonce=4),
        make_account(addr(3), balance=10, sent_votes=[(gen_addr, 90)], unlocking=[(addr(2), 5, 200)]),
        make_account(config.legacy_reserve_address, balance=7),
    ]
    writer.put_accounts(accounts)
    writer.put_unregistered_addresses([
        UnregisteredAccount(address="0000000000000002", balance=30),
        UnregisteredAccount(address="0000000000000001", balance=20),
    ])
    writer.put_vote_weights(VoteWeights.model_validate({
        "vote_weights": [{"round": 1, "delegates": [
            {"address": addr(2), "vote_weight": 10},
            {"address": gen_addr, "vote_weight": 20},
        ]}]
    }))
    for height in range(previous_height, snapshot_height + 1):
        writer.put_block(*make_block(height, gen_pub))

    return {
        "snapshot_height": snapshot_height,
        "previous_height": previous_height,
        "generator": (gen_pub, gen_addr),
        "accounts": accounts,
        # balances, locks and legacy balances of the accounts above
        "total_supply": 1000 + 500 + 10 + 90 + 5 + 7 + 30 + 20,
    }
