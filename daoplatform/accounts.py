"""
Platform Accounts
=================
Identities that sign calls on the platform runtime.

Keys are secp256k1; the address is the last 20 bytes of the SHA3-256
digest of the uncompressed public key, hex encoded with a 0x prefix.
"""

import hashlib
import secrets
from dataclasses import dataclass

from ecdsa import SigningKey, SECP256k1

ZERO_ADDRESS = "0x" + "00" * 20


@dataclass(frozen=True)
class Account:
    """Identity with its key pair."""
    private_key: str  # hex encoded
    public_key: str   # hex encoded (uncompressed, no prefix)
    address: str      # 0x-prefixed, 40 hex chars


def generate_private_key() -> bytes:
    """Generate a cryptographically secure 32-byte private key."""
    return secrets.token_bytes(32)


def private_key_to_public_key(private_key: bytes) -> bytes:
    """Derive the 64-byte uncompressed public key (x || y)."""
    sk = SigningKey.from_string(private_key, curve=SECP256k1)
    return sk.get_verifying_key().to_string()


def public_key_to_address(public_key: bytes) -> str:
    digest = hashlib.sha3_256(public_key).digest()
    return "0x" + digest[-20:].hex()


def derive_contract_address(deployer: str, nonce: int) -> str:
    """
    Address of the contract created by ``deployer`` with ``nonce``.

    Deterministic, so the same deployment sequence always yields the
    same addresses.
    """
    payload = f"{deployer.lower()}:{nonce}".encode()
    return "0x" + hashlib.sha3_256(payload).digest()[-20:].hex()


def create_account() -> Account:
    """Create a fresh account with a random key."""
    private_key = generate_private_key()
    public_key = private_key_to_public_key(private_key)
    return Account(
        private_key=private_key.hex(),
        public_key=public_key.hex(),
        address=public_key_to_address(public_key),
    )


def load_account(private_key_hex: str) -> Account:
    """Rebuild an account from an existing hex private key."""
    private_key = bytes.fromhex(private_key_hex)
    public_key = private_key_to_public_key(private_key)
    return Account(
        private_key=private_key_hex,
        public_key=public_key.hex(),
        address=public_key_to_address(public_key),
    )


def is_zero_address(address: str) -> bool:
    return not address or address.lower() == ZERO_ADDRESS
