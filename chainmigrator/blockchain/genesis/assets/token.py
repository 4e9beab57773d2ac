# MIT License
# Copyright (c) 2025 Hashborn

"""
Token module genesis asset.

Every account becomes one user substore entry holding its available balance
and the balances locked by the pos module (sent votes and pending unlocks).
Balances of legacy addresses move into the legacy reserve account, locked
under the legacy module.

Invariant: totalSupply == sum(availableBalance + lockedBalances) over the
user substore. verify_supply() checks it before the asset is emitted.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from ....protocol.config.params import (
    MODULE_NAME_TOKEN,
    MODULE_NAME_POS,
    MODULE_NAME_LEGACY,
    NetworkConfig,
    CURRENT_NETWORK,
)
from ....protocol.crypto.addresses import hex_address_to_human
from ....protocol.types.account import Account
from ....protocol.types.common import SupplyMismatchError
from ....protocol.types.genesis import (
    GenesisAssetEntry,
    GenesisTokenStore,
    LockedBalance,
    SupplySubstoreEntry,
    UserSubstoreEntry,
    asset_entry,
)

logger = logging.getLogger(__name__)


@dataclass
class UserBalance:
    """User substore entry before address encoding; amounts stay integers."""
    address: str                  # hex
    token_id: str                 # hex
    available_balance: int
    locked_balances: List[Tuple[str, int]] = field(default_factory=list)

    def sort_key(self) -> Tuple[bytes, bytes]:
        return bytes.fromhex(self.address), bytes.fromhex(self.token_id)

    def total(self) -> int:
        return self.available_balance + sum(amount for _, amount in self.locked_balances)

    def to_entry(self, prefix: str) -> UserSubstoreEntry:
        return UserSubstoreEntry(
            address=hex_address_to_human(self.address, prefix),
            token_id=self.token_id,
            available_balance=str(self.available_balance),
            locked_balances=[
                LockedBalance(module=module, amount=str(amount))
                for module, amount in sorted(self.locked_balances)
            ],
        )


def get_locked_amount(account: Account) -> int:
    amount = 0
    for vote in account.dpos.sent_votes:
        amount += vote.amount
    for unlock in account.dpos.unlocking:
        amount += unlock.amount
    return amount


def get_locked_balances(account: Account) -> List[Tuple[str, int]]:
    amount = get_locked_amount(account)
    if amount > 0:
        return [(MODULE_NAME_POS, amount)]
    return []


def create_legacy_reserve_account(
    accounts: Iterable[Account],
    legacy_reserve_amount: int,
    config: NetworkConfig,
) -> UserBalance:
    """
    The reserve keeps its own balance and locks the legacy balances
    under the legacy module.
    """
    reserve_account: Optional[Account] = None
    for acc in accounts:
        if acc.address == config.legacy_reserve_address:
            reserve_account = acc
            break

    locked = get_locked_balances(reserve_account) if reserve_account else []
    locked.append((MODULE_NAME_LEGACY, legacy_reserve_amount))

    return UserBalance(
        address=config.legacy_reserve_address,
        token_id=config.token_id,
        available_balance=reserve_account.token.balance if reserve_account else 0,
        locked_balances=sorted(locked),
    )


def create_user_substore(
    accounts: List[Account],
    legacy_reserve_amount: int,
    config: NetworkConfig,
) -> List[UserBalance]:
    users = [
        UserBalance(
            address=acc.address,
            token_id=config.token_id,
            available_balance=acc.token.balance,
            locked_balances=get_locked_balances(acc),
        )
        for acc in accounts
        if acc.address != config.legacy_reserve_address
    ]
    users.append(create_legacy_reserve_account(accounts, legacy_reserve_amount, config))
    users.sort(key=UserBalance.sort_key)
    return users


def get_total_supply(accounts: Iterable[Account], legacy_reserve_amount: int) -> int:
    total = 0
    for acc in accounts:
        total += acc.token.balance
        total += get_locked_amount(acc)
    return total + legacy_reserve_amount


def verify_supply(store: GenesisTokenStore, token_id: str):
    """
    Raises:
        SupplyMismatchError: If the user substore does not add up to the
            declared supply of token_id
    """
    held = 0
    for user in store.user_substore:
        if user.token_id != token_id:
            continue
        held += int(user.available_balance)
        held += sum(int(locked.amount) for locked in user.locked_balances)

    declared = [int(s.total_supply) for s in store.supply_substore if s.token_id == token_id]
    if declared != [held]:
        raise SupplyMismatchError(
            f"Token {token_id}: user balances add up to {held}, supply declares {declared}"
        )


def get_token_module_entry(
    accounts: List[Account],
    legacy_reserve_amount: int,
    config: Optional[NetworkConfig] = None,
) -> GenesisAssetEntry:
    """
    Build the token asset.

    Args:
        accounts: Full account set
        legacy_reserve_amount: Sum of legacy balances, as computed by the legacy asset
        config: Network config (default: CURRENT_NETWORK)

    Raises:
        SupplyMismatchError: If supply conservation does not hold
    """
    config = config or CURRENT_NETWORK

    users = create_user_substore(accounts, legacy_reserve_amount, config)
    total_supply = get_total_supply(accounts, legacy_reserve_amount)

    store = GenesisTokenStore(
        user_substore=[user.to_entry(config.address_prefix) for user in users],
        supply_substore=[SupplySubstoreEntry(token_id=config.token_id, total_supply=str(total_supply))],
    )
    verify_supply(store, config.token_id)

    logger.info(f"Token asset: {len(users)} user entries, total supply {total_supply}")
    return asset_entry(MODULE_NAME_TOKEN, store)
