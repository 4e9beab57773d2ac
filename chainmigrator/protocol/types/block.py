from pydantic import Field, field_validator
from typing import Dict, Any
from .account import Record, normalize_hex

class BlockHeader(Record):
    id: str                         # hex, 32 bytes
    height: int = Field(ge=0)
    timestamp: int = Field(ge=0)    # unix time
    previous_block_id: str = ""     # hex, empty for the first block
    version: int = 2
    generator_public_key: str       # hex Ed25519 key

    @field_validator("id", "previous_block_id", "generator_public_key")
    @classmethod
    def check_hex(cls, value: str) -> str:
        return normalize_hex(value)

    @property
    def generator_public_key_bytes(self) -> bytes:
        return bytes.fromhex(self.generator_public_key)

class Transaction(Record):
    id: str                         # hex, 32 bytes
    module: str
    command: str
    nonce: int = Field(default=0, ge=0)
    fee: int = Field(default=0, ge=0)
    sender_public_key: str          # hex Ed25519 key
    params: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", "sender_public_key")
    @classmethod
    def check_hex(cls, value: str) -> str:
        return normalize_hex(value)

    @property
    def sender_public_key_bytes(self) -> bytes:
        return bytes.fromhex(self.sender_public_key)
