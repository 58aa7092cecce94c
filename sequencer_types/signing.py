"""Builder fee signing: deterministic secp256k1 keys and recoverable signatures.

Keys are derived from a 32-byte seed and an index as
``blake3(seed || u64_le(index))``.  A fee signature covers
``keccak256(u64_be(amount) || ns_table || payload_commitment)`` and is produced
by libsecp256k1 (RFC 6979 nonces, low-s), so the same key and message always
yield the same ``(r, s, v)``.
"""
from __future__ import annotations

import logging
import struct
from dataclasses import dataclass

from coincurve import PrivateKey, PublicKey

from sequencer_types.hashing import blake3_hash, keccak256
from sequencer_types.models import BuilderSignature, NamespaceTable

logger = logging.getLogger(__name__)

SEED_LEN = 32


def address_of(public_key: PublicKey) -> bytes:
    """20-byte Ethereum address of a secp256k1 public key."""
    return keccak256(public_key.format(compressed=False)[1:])[-20:]


@dataclass(frozen=True)
class FeeAccount:
    """A builder's fee account: its address and signing key."""

    address: bytes
    key: PrivateKey

    @classmethod
    def generated_from_seed_indexed(cls, seed: bytes, index: int) -> "FeeAccount":
        if len(seed) != SEED_LEN:
            raise ValueError(f"ERROR: seed must be {SEED_LEN} bytes, got {len(seed)}")
        key = PrivateKey(blake3_hash(seed + struct.pack("<Q", index)))
        account = cls(address_of(key.public_key), key)
        logger.debug("derived fee account 0x%s (index %d)", account.address.hex(), index)
        return account


def fee_message_digest(amount: int, ns_table: NamespaceTable, payload_commitment: bytes) -> bytes:
    return keccak256(struct.pack(">Q", amount) + ns_table.raw + payload_commitment)


def sign_fee(
    key: PrivateKey,
    amount: int,
    ns_table: NamespaceTable,
    payload_commitment: bytes,
) -> BuilderSignature:
    """Sign a builder fee over the amount, namespace table and payload commitment."""
    digest = fee_message_digest(amount, ns_table, payload_commitment)
    raw = key.sign_recoverable(digest, hasher=None)
    return BuilderSignature(
        r=int.from_bytes(raw[:32], "big"),
        s=int.from_bytes(raw[32:64], "big"),
        v=27 + raw[64],
    )


def recover_fee_signer(
    signature: BuilderSignature,
    amount: int,
    ns_table: NamespaceTable,
    payload_commitment: bytes,
) -> bytes:
    """Return the address that produced ``signature`` over the fee message."""
    digest = fee_message_digest(amount, ns_table, payload_commitment)
    public_key = PublicKey.from_signature_and_message(signature.to_bytes(), digest, hasher=None)
    return address_of(public_key)
