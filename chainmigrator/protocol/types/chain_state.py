from pydantic import Field, field_validator
from typing import List, Optional
from .account import Record, normalize_hex

class UnregisteredAccount(Record):
    """Balance held by a legacy 8-byte address never registered under the new scheme."""
    address: str                # hex, 8 bytes
    balance: int = Field(ge=0)

    @field_validator("address")
    @classmethod
    def check_address(cls, value: str) -> str:
        return normalize_hex(value)

class UnregisteredAddresses(Record):
    unregistered_addresses: List[UnregisteredAccount] = Field(default_factory=list)

class DelegateWeight(Record):
    address: str                # hex, 20 bytes
    vote_weight: int = Field(ge=0)

    @field_validator("address")
    @classmethod
    def check_address(cls, value: str) -> str:
        return normalize_hex(value)

class VoteWeight(Record):
    round: int
    delegates: List[DelegateWeight] = Field(default_factory=list)

class VoteWeights(Record):
    """Top delegate weights recorded per round by the source chain."""
    vote_weights: List[VoteWeight] = Field(default_factory=list)

    def for_round(self, round_number: int) -> Optional[VoteWeight]:
        for vote_weight in self.vote_weights:
            if vote_weight.round == round_number:
                return vote_weight
        return None
