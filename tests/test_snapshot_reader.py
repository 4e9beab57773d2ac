import pytest

from chainmigrator.blockchain.storage import keys as db_keys
from chainmigrator.protocol.config.params import CHAIN_STATE_UNREGISTERED_ADDRESSES, CHAIN_STATE_DELEGATE_VOTE_WEIGHTS
from chainmigrator.protocol.types.chain_state import UnregisteredAccount, VoteWeights
from chainmigrator.protocol.types.common import DecodeError, InvalidRangeError


def test_accounts_come_back_in_address_order(reader, writer, make_account, addr):
    writer.put_accounts([make_account(addr(n), balance=n) for n in (300, 2, 70000, 1)])

    accounts = list(reader.iter_accounts())
    assert [a.address for a in accounts] == [addr(1), addr(2), addr(300), addr(70000)]
    assert [a.token.balance for a in accounts] == [1, 2, 300, 70000]


def test_account_with_wrong_address_length_is_discarded(store, reader, make_account, addr):
    good = make_account(addr(5), balance=10)
    short = make_account("ab" * 19, balance=10)
    store.put(db_keys.account_key(good.address_bytes), good.model_dump_json().encode())
    # key inside the account range, record carries a 19-byte address
    store.put(db_keys.account_key(b"\x00" * 20) + b"\x01", short.model_dump_json().encode())

    accounts = list(reader.iter_accounts())
    assert [a.address for a in accounts] == [addr(5)]


def test_account_stored_under_another_address_is_fatal(store, reader, make_account, addr):
    account = make_account(addr(1), balance=10)
    record = account.model_dump_json().encode()
    store.put(db_keys.account_key(bytes.fromhex(addr(1))), record)
    store.put(db_keys.account_key(bytes.fromhex(addr(2))), record)

    with pytest.raises(DecodeError) as exc:
        list(reader.iter_accounts())
    assert exc.value.key == db_keys.account_key(bytes.fromhex(addr(2)))


def test_corrupt_account_is_fatal(store, reader, addr):
    store.put(db_keys.account_key(bytes.fromhex(addr(1))), b'{"address": "zz"}')
    with pytest.raises(DecodeError):
        list(reader.iter_accounts())


def test_unknown_field_is_fatal(store, reader, addr):
    store.put(
        db_keys.account_key(bytes.fromhex(addr(1))),
        ('{"address": "%s", "unexpected": 1}' % addr(1)).encode()
    )
    with pytest.raises(DecodeError) as exc:
        list(reader.iter_accounts())
    assert exc.value.key == db_keys.account_key(bytes.fromhex(addr(1)))


def test_negative_balance_is_fatal(store, reader, addr):
    store.put(
        db_keys.account_key(bytes.fromhex(addr(1))),
        ('{"address": "%s", "token": {"balance": -1}}' % addr(1)).encode()
    )
    with pytest.raises(DecodeError):
        list(reader.iter_accounts())


def test_chain_state_records(reader, writer, addr):
    assert reader.get_unregistered_addresses() == []
    assert reader.get_vote_weights().vote_weights == []

    legacy = [
        UnregisteredAccount(address="00000000000000ff", balance=10**20),
        UnregisteredAccount(address="0000000000000001", balance=5),
    ]
    writer.put_unregistered_addresses(legacy)
    writer.put_vote_weights(VoteWeights.model_validate({
        "vote_weights": [{"round": 7, "delegates": [{"address": addr(1), "vote_weight": 3}]}]
    }))

    assert reader.get_unregistered_addresses() == legacy
    assert reader.get_vote_weights().for_round(7).delegates[0].address == addr(1)
    assert reader.get_vote_weights().for_round(8) is None


def test_corrupt_chain_state_is_fatal(store, reader):
    store.put(db_keys.chain_state_key(CHAIN_STATE_UNREGISTERED_ADDRESSES), b"\x00\x01")
    store.put(db_keys.chain_state_key(CHAIN_STATE_DELEGATE_VOTE_WEIGHTS), b'{"vote_weights": 5}')

    with pytest.raises(DecodeError):
        reader.get_unregistered_addresses()
    with pytest.raises(DecodeError):
        reader.get_vote_weights()


def test_block_headers_and_transactions(reader, writer, make_block, make_keypair):
    gen_pub, _ = make_keypair()
    sender_pub, _ = make_keypair()
    for height in (3, 1, 2):
        header, txs = make_block(height, gen_pub, tx_senders=[sender_pub] * height)
        writer.put_block(header, txs)

    blocks = list(reader.iter_blocks(1, 3))
    assert [h.height for h, _ in blocks] == [1, 2, 3]
    assert [len(txs) for _, txs in blocks] == [1, 2, 3]
    assert all(tx.sender_public_key == sender_pub for _, txs in blocks for tx in txs)

    assert [h.height for h in reader.iter_block_headers(2, 2)] == [2]
    assert reader.get_block_header_at(3).height == 3
    assert reader.get_block_header_at(4) is None


def test_empty_block_range_is_invalid(reader):
    with pytest.raises(InvalidRangeError):
        list(reader.iter_block_headers(5, 4))


def test_header_height_mismatch_is_fatal(store, reader, writer, make_block, make_keypair):
    gen_pub, _ = make_keypair()
    header, _ = make_block(5, gen_pub)
    writer.put_block(header)
    # index the same block under another height
    store.put(db_keys.height_key(6), bytes.fromhex(header.id))

    with pytest.raises(DecodeError):
        list(reader.iter_block_headers(5, 6))


def test_malformed_transaction_id_list_is_fatal(store, reader, make_block, make_keypair, writer):
    gen_pub, _ = make_keypair()
    header, _ = make_block(1, gen_pub)
    writer.put_block(header)
    block_id = bytes.fromhex(header.id)
    store.put(db_keys.block_transactions_key(block_id), b"\x01" * 33)

    with pytest.raises(DecodeError):
        reader.get_transactions(block_id)


def test_missing_transaction_is_fatal(store, reader, make_block, make_keypair, writer):
    gen_pub, _ = make_keypair()
    header, _ = make_block(1, gen_pub)
    writer.put_block(header)
    block_id = bytes.fromhex(header.id)
    store.put(db_keys.block_transactions_key(block_id), b"\x01" * 32)

    with pytest.raises(DecodeError):
        reader.get_transactions(block_id)


def test_load_snapshot(reader, writer, make_account, make_block, make_keypair, addr):
    gen_pub, _ = make_keypair()
    writer.put_accounts([make_account(addr(2)), make_account(addr(1))])
    writer.put_unregistered_addresses([UnregisteredAccount(address="0000000000000009", balance=9)])
    header, _ = make_block(100, gen_pub)
    writer.put_block(header)

    snapshot = reader.load_snapshot(100, 50)
    assert snapshot.height == 100
    assert snapshot.block.id == header.id
    assert [a.address for a in snapshot.accounts] == [addr(1), addr(2)]
    assert snapshot.legacy_accounts[0].balance == 9


@pytest.mark.parametrize("snapshot_height,previous", [(100, 100), (100, 101), (100, -5), (2**32, 5)])
def test_load_snapshot_rejects_bad_range(reader, snapshot_height, previous):
    with pytest.raises(InvalidRangeError):
        reader.load_snapshot(snapshot_height, previous)


@pytest.mark.parametrize("height", [-1, 2**32])
def test_height_without_block_key_is_invalid(reader, height):
    with pytest.raises(InvalidRangeError):
        reader.get_block_header_at(height)
