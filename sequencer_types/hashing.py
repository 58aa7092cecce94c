"""Hash primitives consumed by the commitment, Merkle and signing layers."""
from __future__ import annotations

import hashlib

import blake3
from Crypto.Hash import keccak


def keccak256(data: bytes) -> bytes:
    """Return the 32-byte Keccak-256 digest (pre-NIST padding) of ``data``."""
    k = keccak.new(digest_bits=256)
    k.update(data)
    return k.digest()


def new_keccak256():
    """Return an incremental Keccak-256 hasher (``update`` / ``digest``)."""
    return keccak.new(digest_bits=256)


def sha256(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


def blake3_hash(data: bytes) -> bytes:
    """Return the default 32-byte BLAKE3 digest of ``data``."""
    return blake3.blake3(data).digest()
