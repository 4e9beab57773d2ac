import bech32 # type: ignore
from .hash import sha256
from ..config.params import ADDRESS_LENGTH
from typing import Tuple, Optional

def address_from_public_key(pub_bytes: bytes) -> bytes:
    """Returns the 20-byte account address of an Ed25519 public key."""
    return sha256(pub_bytes)[:ADDRESS_LENGTH]

def address_to_human(addr_bytes: bytes, prefix: str = "lsk") -> str:
    """Encodes a 20-byte address to its human-readable Bech32 form."""
    if len(addr_bytes) != ADDRESS_LENGTH:
        raise ValueError(f"Address must be {ADDRESS_LENGTH} bytes, got {len(addr_bytes)}")

    # Convert to 5-bit words
    five_bit_r = bech32.convertbits(addr_bytes, 8, 5)
    if five_bit_r is None:
        raise ValueError("Error converting to bech32 words")

    return bech32.bech32_encode(prefix, five_bit_r)

def hex_address_to_human(addr_hex: str, prefix: str = "lsk") -> str:
    return address_to_human(bytes.fromhex(addr_hex), prefix)

def decode_address(addr: str) -> Tuple[str, bytes]:
    """Decodes Bech32 address to (prefix, address_bytes)."""
    hrp, data = bech32.bech32_decode(addr)
    if hrp is None or data is None:
        raise ValueError("Invalid bech32 address")

    decoded = bech32.convertbits(data, 5, 8, False)
    if decoded is None:
        raise ValueError("Error converting from bech32 words")

    return hrp, bytes(decoded)

def is_valid_address(addr: str, expected_prefix: Optional[str] = None) -> bool:
    try:
        hrp, raw = decode_address(addr)
        if expected_prefix and hrp != expected_prefix:
            return False
        return len(raw) == ADDRESS_LENGTH
    except ValueError:
        return False
