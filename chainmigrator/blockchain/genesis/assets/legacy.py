from dataclasses import dataclass
from typing import List

from ....protocol.config.params import MODULE_NAME_LEGACY
from ....protocol.types.chain_state import UnregisteredAccount
from ....protocol.types.genesis import GenesisAssetEntry, GenesisLegacyStore, LegacyStoreEntry, asset_entry


@dataclass
class LegacyModuleResult:
    """The legacy asset plus the balance it holds in reserve for the token module."""
    entry: GenesisAssetEntry
    reserve_amount: int


def get_legacy_module_entry(legacy_accounts: List[UnregisteredAccount]) -> LegacyModuleResult:
    # Chain state already stores these in canonical order; republish as is.
    store = GenesisLegacyStore(accounts=[
        LegacyStoreEntry(address=acc.address, balance=str(acc.balance))
        for acc in legacy_accounts
    ])
    reserve_amount = sum(acc.balance for acc in legacy_accounts)
    return LegacyModuleResult(entry=asset_entry(MODULE_NAME_LEGACY, store), reserve_amount=reserve_amount)
