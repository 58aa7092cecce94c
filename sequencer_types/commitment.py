"""Commitment engine: domain-separated Keccak-256 commitments over records.

Every committable record feeds a :class:`RawCommitmentBuilder` in a field
order fixed per type.  The builder writes a plain byte stream:

* constant strings are their UTF-8 bytes, with no length or separator
* ``u64`` values are 8 bytes little-endian, ``u256`` values 32 bytes
  little-endian
* variable-size byte strings are length-prefixed with a ``u64``
* named fields are the field name as a constant string followed by the value

The stream opens with the type's domain string, so two record types with
identical field bytes never share a commitment.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Dict, Optional, Protocol, runtime_checkable

from sequencer_types.errors import InvalidCommitmentFormat
from sequencer_types.hashing import new_keccak256
from sequencer_types.tagged_base64 import TaggedBase64

DIGEST_LEN = 32
U64_MAX = 2**64 - 1
U256_MAX = 2**256 - 1

# Display tag -> record name, for every committable record type.
COMMITMENT_TAGS: Dict[str, str] = {
    "NSTABLE": "NamespaceTable",
    "L1BLOCK": "L1BlockInfo",
    "CHAIN_CONFIG": "ChainConfig",
    "FEE_INFO": "FeeInfo",
    "BLOCK": "Header",
    "TX": "Transaction",
}


@dataclass(frozen=True)
class Commitment:
    """A 32-byte digest bound to the tag of the record type it commits to."""

    tag: str
    digest: bytes

    def __post_init__(self) -> None:
        if self.tag not in COMMITMENT_TAGS:
            raise InvalidCommitmentFormat(f"ERROR: unknown commitment tag {self.tag!r}")
        if not isinstance(self.digest, bytes) or len(self.digest) != DIGEST_LEN:
            raise InvalidCommitmentFormat(
                f"ERROR: commitment digest must be {DIGEST_LEN} bytes"
            )

    def __str__(self) -> str:
        return str(TaggedBase64(self.tag, self.digest))

    def __repr__(self) -> str:
        return f"Commitment({self})"

    def __bytes__(self) -> bytes:
        return self.digest

    @classmethod
    def parse(cls, text: str, tag: Optional[str] = None) -> "Commitment":
        """Parse a tagged commitment string.

        ``tag`` pins the expected record type; any other tag, including a
        valid one for a different record, is rejected.

        Raises:
            InvalidCommitmentFormat: unknown or unexpected tag, malformed body,
                or a digest that is not 32 bytes.
        """
        parsed = TaggedBase64.parse(text, expected_tag=tag)
        return cls(parsed.tag, parsed.value)

    def to_u256(self) -> int:
        return commitment_to_u256(self)

    @classmethod
    def from_u256(cls, tag: str, value: int) -> "Commitment":
        return u256_to_commitment(tag, value)


def commitment_to_u256(commitment: Commitment) -> int:
    """Read the digest bytes as a little-endian 256-bit unsigned integer."""
    return int.from_bytes(commitment.digest, "little")


def u256_to_commitment(tag: str, value: int) -> Commitment:
    """Inverse of :func:`commitment_to_u256` for a known record tag."""
    if not 0 <= value <= U256_MAX:
        raise InvalidCommitmentFormat(f"ERROR: {value} is not a 256-bit unsigned integer")
    return Commitment(tag, value.to_bytes(DIGEST_LEN, "little"))


@runtime_checkable
class Committable(Protocol):
    """Anything that can produce its own :class:`Commitment`."""

    def commit(self) -> Commitment: ...


class RawCommitmentBuilder:
    """Incremental, chainable writer of the committed byte stream.

    ``tag`` is the display tag of the finished commitment; ``domain`` is the
    separator string that opens the stream and defaults to the tag.
    """

    def __init__(self, tag: str, domain: Optional[str] = None):
        self._tag = tag
        self._hasher = new_keccak256()
        self.constant_str(domain if domain is not None else tag)

    def constant_str(self, s: str) -> "RawCommitmentBuilder":
        self._hasher.update(s.encode("utf-8"))
        return self

    def fixed_size_bytes(self, data: bytes) -> "RawCommitmentBuilder":
        self._hasher.update(bytes(data))
        return self

    def u64(self, value: int) -> "RawCommitmentBuilder":
        self._hasher.update(struct.pack("<Q", value))
        return self

    def u256(self, value: int) -> "RawCommitmentBuilder":
        if not 0 <= value <= U256_MAX:
            raise ValueError(f"ERROR: {value} does not fit in 256 bits")
        self._hasher.update(value.to_bytes(32, "little"))
        return self

    def var_size_bytes(self, data: bytes) -> "RawCommitmentBuilder":
        return self.u64(len(data)).fixed_size_bytes(data)

    def field(self, name: str, commitment: Commitment) -> "RawCommitmentBuilder":
        return self.constant_str(name).fixed_size_bytes(commitment.digest)

    def optional(self, name: str, commitment: Optional[Commitment]) -> "RawCommitmentBuilder":
        self.constant_str(name)
        if commitment is None:
            return self.u64(0)
        return self.u64(1).fixed_size_bytes(commitment.digest)

    def u64_field(self, name: str, value: int) -> "RawCommitmentBuilder":
        return self.constant_str(name).u64(value)

    def u256_field(self, name: str, value: int) -> "RawCommitmentBuilder":
        return self.constant_str(name).u256(value)

    def fixed_size_field(self, name: str, data: bytes) -> "RawCommitmentBuilder":
        return self.constant_str(name).fixed_size_bytes(data)

    def var_size_field(self, name: str, data: bytes) -> "RawCommitmentBuilder":
        return self.constant_str(name).var_size_bytes(data)

    def finalize(self) -> Commitment:
        return Commitment(self._tag, self._hasher.digest())
