from ecdsa import SigningKey, Ed25519 # type: ignore
import os

def generate_private_key() -> bytes:
    """Generates a random 32-byte Ed25519 seed."""
    return os.urandom(32)

def public_key_from_private(priv_bytes: bytes) -> bytes:
    """Returns the 32-byte Ed25519 public key of a private key seed."""
    sk = SigningKey.from_string(priv_bytes, curve=Ed25519)
    vk = sk.get_verifying_key()
    return vk.to_string()
