# MIT License
# Copyright (c) 2025 Hashborn

"""
Genesis store models, one per migrated module.

Field names follow the target protocol's camelCase JSON; amounts are
decimal strings so no consumer ever parses them as floats.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class GenesisModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_json_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


@dataclass
class GenesisAssetEntry:
    """One module's contribution to the genesis block."""
    module: str
    data: Dict[str, Any]
    schema: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"module": self.module, "data": self.data, "schema": self.schema}


# --- auth ---

class AuthAccount(GenesisModel):
    number_of_signatures: int
    mandatory_keys: List[str]
    optional_keys: List[str]
    nonce: str


class AuthStoreEntry(GenesisModel):
    store_key: str
    store_value: AuthAccount


class GenesisAuthStore(GenesisModel):
    auth_data_substore: List[AuthStoreEntry]


# --- token ---

class LockedBalance(GenesisModel):
    module: str
    amount: str


class UserSubstoreEntry(GenesisModel):
    address: str
    token_id: str = Field(alias="tokenID")
    available_balance: str
    locked_balances: List[LockedBalance]


class SupplySubstoreEntry(GenesisModel):
    token_id: str = Field(alias="tokenID")
    total_supply: str


class GenesisTokenStore(GenesisModel):
    user_substore: List[UserSubstoreEntry]
    supply_substore: List[SupplySubstoreEntry]
    escrow_substore: List[Dict[str, Any]] = Field(default_factory=list)
    supported_tokens_substore: List[Dict[str, Any]] = Field(default_factory=list)


# --- pos ---

class SharingCoefficient(GenesisModel):
    token_id: str = Field(alias="tokenID")
    coefficient: str


class ValidatorEntry(GenesisModel):
    address: str
    name: str
    bls_key: str
    proof_of_possession: str
    generator_key: str
    last_generated_height: int
    is_banned: bool
    report_misbehavior_heights: List[int]
    consecutive_missed_blocks: int
    last_commission_increase_height: int
    commission: int
    sharing_coefficients: List[SharingCoefficient]


class Stake(GenesisModel):
    validator_address: str
    amount: str
    sharing_coefficients: List[SharingCoefficient]


class PendingUnlock(GenesisModel):
    validator_address: str
    amount: str
    unstake_height: int


class StakerEntry(GenesisModel):
    address: str
    stakes: List[Stake]
    pending_unlocks: List[PendingUnlock]


class GenesisData(GenesisModel):
    init_rounds: int
    init_validators: List[str]


class GenesisPoSStore(GenesisModel):
    validators: List[ValidatorEntry]
    stakers: List[StakerEntry]
    genesis_data: GenesisData


# --- legacy ---

class LegacyStoreEntry(GenesisModel):
    address: str
    balance: str


class GenesisLegacyStore(GenesisModel):
    accounts: List[LegacyStoreEntry]


# --- interoperability ---

class GenesisInteroperabilityStore(GenesisModel):
    own_chain_name: str
    own_chain_nonce: str
    chain_infos: List[Dict[str, Any]] = Field(default_factory=list)
    terminated_state_accounts: List[Dict[str, Any]] = Field(default_factory=list)
    terminated_outbox_accounts: List[Dict[str, Any]] = Field(default_factory=list)


def asset_entry(module: str, store: GenesisModel) -> GenesisAssetEntry:
    """Wraps a store model with its module name and JSON schema."""
    return GenesisAssetEntry(
        module=module,
        data=store.to_json_dict(),
        schema=type(store).model_json_schema(by_alias=True),
    )
