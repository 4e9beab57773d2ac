# MIT License
# Copyright (c) 2025 Hashborn

from typing import Dict
from ..crypto.hash import sha256

# Module names (genesis asset keys)
MODULE_NAME_AUTH = "auth"
MODULE_NAME_TOKEN = "token"
MODULE_NAME_POS = "pos"
MODULE_NAME_LEGACY = "legacy"
MODULE_NAME_INTEROPERABILITY = "interoperability"

# Consensus constants of the source protocol
ROUND_LENGTH = 103
MAX_INIT_VALIDATORS = 101
POS_INIT_ROUNDS = 60480

# Sizes (bytes)
ADDRESS_LENGTH = 20
LEGACY_ADDRESS_LENGTH = 8
TRANSACTION_ID_LENGTH = 32
BLOCK_HEIGHT_KEY_LENGTH = 4

# Placeholders carried by migrated validators until they re-register
INVALID_BLS_KEY = (b"\x00" * 48).hex()
DUMMY_PROOF_OF_POSSESSION = (b"\x00" * 96).hex()
INVALID_ED25519_KEY = (b"\xff" * 32).hex()
Q96_ZERO = ""          # zero-length encoding of a Q96 zero
MAX_COMMISSION = 10000  # 100.00%

# Key-value store layout of the source node
DB_KEY_ACCOUNTS_ADDRESS = b"accounts:address:"
DB_KEY_BLOCKS_HEIGHT = b"blocks:height:"
DB_KEY_BLOCKS_ID = b"blocks:id:"
DB_KEY_TRANSACTIONS_BLOCK_ID = b"transactions:blockID:"
DB_KEY_TRANSACTIONS_ID = b"transactions:id:"
DB_KEY_CHAIN_STATE = b"chain:"
CHAIN_STATE_UNREGISTERED_ADDRESSES = b"unregisteredAddresses"
CHAIN_STATE_DELEGATE_VOTE_WEIGHTS = b"delegateVoteWeights"

LEGACY_RESERVE_ADDRESS = sha256(b"legacyReserve")[:ADDRESS_LENGTH].hex()


class NetworkConfig:
    def __init__(self,
                 network_id: str,
                 token_id: str,
                 chain_name: str,
                 address_prefix: str = "lsk",
                 legacy_reserve_address: str = LEGACY_RESERVE_ADDRESS,
                 # Round params
                 round_length: int = ROUND_LENGTH,
                 max_init_validators: int = MAX_INIT_VALIDATORS,
                 init_rounds: int = POS_INIT_ROUNDS,
                 # Genesis block timestamp offset from the snapshot block
                 genesis_block_delay_sec: int = 7200,
                 genesis_block_version: int = 0):
        self.network_id = network_id
        self.token_id = token_id
        self.chain_name = chain_name
        self.address_prefix = address_prefix
        self.legacy_reserve_address = legacy_reserve_address
        self.round_length = round_length
        self.max_init_validators = max_init_validators
        self.init_rounds = init_rounds
        self.genesis_block_delay_sec = genesis_block_delay_sec
        self.genesis_block_version = genesis_block_version

    @property
    def chain_id(self) -> str:
        """First 4 bytes of the token ID identify the chain."""
        return self.token_id[:8]


NETWORKS: Dict[str, NetworkConfig] = {
    "mainnet": NetworkConfig(
        network_id="mainnet",
        token_id="0000000000000000",
        chain_name="lisk_mainchain",
    ),
    "testnet": NetworkConfig(
        network_id="testnet",
        token_id="0100000000000000",
        chain_name="lisk_mainchain",
    ),
    "devnet": NetworkConfig(
        network_id="devnet",
        token_id="0400000000000000",
        chain_name="lisk_mainchain",
        genesis_block_delay_sec=0,
    ),
}

# Default to mainnet, the only network migrated in production
CURRENT_NETWORK = NETWORKS["mainnet"]
