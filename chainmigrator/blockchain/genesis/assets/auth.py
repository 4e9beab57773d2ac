from typing import Iterable, List, Optional

from ....protocol.config.params import MODULE_NAME_AUTH, NetworkConfig, CURRENT_NETWORK
from ....protocol.crypto.addresses import hex_address_to_human
from ....protocol.types.account import Account
from ....protocol.types.genesis import (
    AuthAccount,
    AuthStoreEntry,
    GenesisAssetEntry,
    GenesisAuthStore,
    asset_entry,
)


def sort_keys(keys: Iterable[str]) -> List[str]:
    """Sorts hex keys ascending by byte value."""
    return sorted(keys, key=bytes.fromhex)


def get_auth_account(account: Account) -> AuthAccount:
    return AuthAccount(
        number_of_signatures=account.keys.number_of_signatures,
        mandatory_keys=sort_keys(account.keys.mandatory_keys),
        optional_keys=sort_keys(account.keys.optional_keys),
        nonce=str(account.sequence.nonce),
    )


def get_auth_module_entry(accounts: Iterable[Account], config: Optional[NetworkConfig] = None) -> GenesisAssetEntry:
    config = config or CURRENT_NETWORK

    entries = sorted(accounts, key=lambda acc: acc.address_bytes)
    store = GenesisAuthStore(auth_data_substore=[
        AuthStoreEntry(
            store_key=hex_address_to_human(acc.address, config.address_prefix),
            store_value=get_auth_account(acc),
        )
        for acc in entries
    ])
    return asset_entry(MODULE_NAME_AUTH, store)
