"""Key layout of the source node's store."""

from ...protocol.config.params import (
    ADDRESS_LENGTH,
    BLOCK_HEIGHT_KEY_LENGTH,
    DB_KEY_ACCOUNTS_ADDRESS,
    DB_KEY_BLOCKS_HEIGHT,
    DB_KEY_BLOCKS_ID,
    DB_KEY_TRANSACTIONS_BLOCK_ID,
    DB_KEY_TRANSACTIONS_ID,
    DB_KEY_CHAIN_STATE,
)
from ...protocol.types.common import InvalidRangeError

MAX_HEIGHT = 2 ** (8 * BLOCK_HEIGHT_KEY_LENGTH) - 1

ACCOUNTS_RANGE = (
    DB_KEY_ACCOUNTS_ADDRESS + b"\x00" * ADDRESS_LENGTH,
    DB_KEY_ACCOUNTS_ADDRESS + b"\xff" * ADDRESS_LENGTH,
)

def account_key(address: bytes) -> bytes:
    return DB_KEY_ACCOUNTS_ADDRESS + address

def address_from_key(key: bytes) -> bytes:
    return key[len(DB_KEY_ACCOUNTS_ADDRESS):]

def height_key(height: int) -> bytes:
    if not 0 <= height <= MAX_HEIGHT:
        raise InvalidRangeError(f"Height {height} outside 0..{MAX_HEIGHT}")
    # Big-endian so byte order matches numeric order
    return DB_KEY_BLOCKS_HEIGHT + height.to_bytes(BLOCK_HEIGHT_KEY_LENGTH, "big")

def height_from_key(key: bytes) -> int:
    return int.from_bytes(key[len(DB_KEY_BLOCKS_HEIGHT):], "big")

def block_id_key(block_id: bytes) -> bytes:
    return DB_KEY_BLOCKS_ID + block_id

def block_transactions_key(block_id: bytes) -> bytes:
    return DB_KEY_TRANSACTIONS_BLOCK_ID + block_id

def transaction_key(tx_id: bytes) -> bytes:
    return DB_KEY_TRANSACTIONS_ID + tx_id

def chain_state_key(name: bytes) -> bytes:
    return DB_KEY_CHAIN_STATE + name
