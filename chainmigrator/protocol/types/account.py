from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import List

def normalize_hex(value: str) -> str:
    """Lowercases a hex string and rejects anything that is not whole bytes."""
    try:
        return bytes.fromhex(value).hex()
    except ValueError:
        raise ValueError(f"not a hex byte string: {value!r}")

class Record(BaseModel):
    """Base for stored records. Unknown fields are a schema violation."""
    model_config = ConfigDict(extra="forbid")

class TokenAccount(Record):
    balance: int = Field(default=0, ge=0)

class SequenceAccount(Record):
    nonce: int = Field(default=0, ge=0)

class KeysAccount(Record):
    mandatory_keys: List[str] = Field(default_factory=list)   # hex public keys
    optional_keys: List[str] = Field(default_factory=list)    # hex public keys
    number_of_signatures: int = Field(default=0, ge=0)

    @field_validator("mandatory_keys", "optional_keys")
    @classmethod
    def check_keys(cls, keys: List[str]) -> List[str]:
        return [normalize_hex(k) for k in keys]

class DelegateAccount(Record):
    username: str = ""                       # empty => not a delegate
    pom_heights: List[int] = Field(default_factory=list)
    consecutive_missed_blocks: int = 0
    last_forged_height: int = 0
    is_banned: bool = False
    total_votes_received: int = Field(default=0, ge=0)

class SentVote(Record):
    delegate_address: str
    amount: int = Field(ge=0)

    @field_validator("delegate_address")
    @classmethod
    def check_delegate_address(cls, value: str) -> str:
        return normalize_hex(value)

class UnlockingEntry(Record):
    delegate_address: str
    amount: int = Field(ge=0)
    unvote_height: int = Field(ge=0)

    @field_validator("delegate_address")
    @classmethod
    def check_delegate_address(cls, value: str) -> str:
        return normalize_hex(value)

class DposAccount(Record):
    delegate: DelegateAccount = Field(default_factory=DelegateAccount)
    sent_votes: List[SentVote] = Field(default_factory=list)
    unlocking: List[UnlockingEntry] = Field(default_factory=list)

class Account(Record):
    address: str                             # hex, 20 bytes
    token: TokenAccount = Field(default_factory=TokenAccount)
    sequence: SequenceAccount = Field(default_factory=SequenceAccount)
    keys: KeysAccount = Field(default_factory=KeysAccount)
    dpos: DposAccount = Field(default_factory=DposAccount)

    @field_validator("address")
    @classmethod
    def check_address(cls, value: str) -> str:
        return normalize_hex(value)

    @property
    def address_bytes(self) -> bytes:
        return bytes.fromhex(self.address)

    @property
    def is_delegate(self) -> bool:
        return self.dpos.delegate.username != ""
