# MIT License
# Copyright (c) 2025 Hashborn

"""
Proof-of-Stake module genesis asset.

Delegates become validators, voters become stakers, and the initial
validator set is taken from the top delegates recorded for round r-2.
"""

import logging
from typing import Dict, List, Optional

from ....protocol.config.params import (
    MODULE_NAME_POS,
    INVALID_BLS_KEY,
    DUMMY_PROOF_OF_POSSESSION,
    INVALID_ED25519_KEY,
    Q96_ZERO,
    MAX_COMMISSION,
    NetworkConfig,
    CURRENT_NETWORK,
)
from ....protocol.crypto.addresses import hex_address_to_human
from ....protocol.types.account import Account
from ....protocol.types.chain_state import VoteWeights
from ....protocol.types.common import InvalidRangeError, MissingHistoricalDataError
from ....protocol.types.genesis import (
    GenesisAssetEntry,
    GenesisData,
    GenesisPoSStore,
    PendingUnlock,
    SharingCoefficient,
    Stake,
    StakerEntry,
    ValidatorEntry,
    asset_entry,
)

logger = logging.getLogger(__name__)


def _by_address(address: str) -> bytes:
    return bytes.fromhex(address)


def zero_sharing_coefficients(token_id: str) -> List[SharingCoefficient]:
    return [SharingCoefficient(token_id=token_id, coefficient=Q96_ZERO)]


def create_validators_array(
    accounts: List[Account],
    validator_keys: Dict[str, str],
    snapshot_height: int,
    config: NetworkConfig,
) -> List[ValidatorEntry]:
    """
    BLS key and proof of possession are placeholders; validators register
    real ones after the migration.
    """
    delegates = sorted((acc for acc in accounts if acc.is_delegate), key=lambda acc: acc.address_bytes)

    validators = []
    for acc in delegates:
        delegate = acc.dpos.delegate
        validators.append(ValidatorEntry(
            address=hex_address_to_human(acc.address, config.address_prefix),
            name=delegate.username,
            bls_key=INVALID_BLS_KEY,
            proof_of_possession=DUMMY_PROOF_OF_POSSESSION,
            generator_key=validator_keys.get(acc.address, INVALID_ED25519_KEY),
            last_generated_height=delegate.last_forged_height,
            is_banned=delegate.is_banned,
            report_misbehavior_heights=list(delegate.pom_heights),
            consecutive_missed_blocks=delegate.consecutive_missed_blocks,
            last_commission_increase_height=snapshot_height,
            commission=MAX_COMMISSION,
            sharing_coefficients=zero_sharing_coefficients(config.token_id),
        ))

    missing = sum(1 for acc in delegates if acc.address not in validator_keys)
    if missing:
        logger.info(f"{missing} of {len(delegates)} validators have no observed generator key")
    return validators


def get_stakes(account: Account, config: NetworkConfig) -> List[Stake]:
    votes = sorted(account.dpos.sent_votes, key=lambda vote: _by_address(vote.delegate_address))
    return [
        Stake(
            validator_address=hex_address_to_human(vote.delegate_address, config.address_prefix),
            amount=str(vote.amount),
            sharing_coefficients=zero_sharing_coefficients(config.token_id),
        )
        for vote in votes
    ]


def get_pending_unlocks(account: Account, config: NetworkConfig) -> List[PendingUnlock]:
    return [
        PendingUnlock(
            validator_address=hex_address_to_human(unlock.delegate_address, config.address_prefix),
            amount=str(unlock.amount),
            unstake_height=unlock.unvote_height,
        )
        for unlock in account.dpos.unlocking
    ]


def create_stakers_array(accounts: List[Account], config: NetworkConfig) -> List[StakerEntry]:
    stakers = sorted(
        (acc for acc in accounts if acc.dpos.sent_votes or acc.dpos.unlocking),
        key=lambda acc: acc.address_bytes,
    )
    return [
        StakerEntry(
            address=hex_address_to_human(acc.address, config.address_prefix),
            stakes=get_stakes(acc, config),
            pending_unlocks=get_pending_unlocks(acc, config),
        )
        for acc in stakers
    ]


def get_round(height: int, round_length: int) -> int:
    if round_length <= 0:
        raise InvalidRangeError(f"Round length must be positive, got {round_length}")
    return -(-height // round_length)


def create_genesis_data(
    accounts: List[Account],
    vote_weights: VoteWeights,
    snapshot_height: int,
    config: NetworkConfig,
) -> GenesisData:
    """
    Raises:
        MissingHistoricalDataError: If round r-2 has no recorded top delegates
        InvalidRangeError: If the round length is not positive
    """
    r = get_round(snapshot_height, config.round_length)
    vote_weight = vote_weights.for_round(r - 2)
    if vote_weight is None or not vote_weight.delegates:
        raise MissingHistoricalDataError(
            f"Top delegates for round {r - 2} (r-2) unavailable, cannot select initial validators"
        )

    banned = {acc.address for acc in accounts if acc.dpos.delegate.is_banned}
    eligible = sorted(
        (d.address for d in vote_weight.delegates if d.address not in banned),
        key=_by_address,
    )
    init_validators = eligible[:config.max_init_validators]

    logger.info(
        f"Initial validators from round {r - 2}: {len(init_validators)} "
        f"of {len(vote_weight.delegates)} recorded delegates"
    )
    return GenesisData(
        init_rounds=config.init_rounds,
        init_validators=[hex_address_to_human(addr, config.address_prefix) for addr in init_validators],
    )


def get_pos_module_entry(
    accounts: List[Account],
    validator_keys: Dict[str, str],
    vote_weights: VoteWeights,
    snapshot_height: int,
    config: Optional[NetworkConfig] = None,
) -> GenesisAssetEntry:
    config = config or CURRENT_NETWORK

    store = GenesisPoSStore(
        validators=create_validators_array(accounts, validator_keys, snapshot_height, config),
        stakers=create_stakers_array(accounts, config),
        genesis_data=create_genesis_data(accounts, vote_weights, snapshot_height, config),
    )
    logger.info(f"PoS asset: {len(store.validators)} validators, {len(store.stakers)} stakers")
    return asset_entry(MODULE_NAME_POS, store)
