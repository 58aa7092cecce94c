"""Block payload codec: payload bytes, VID payload commitment, builder commitment.

The commitments here are SHA-256 over length-prefixed inputs.  They stand in
for the erasure-coded VID scheme, which is not implemented; what headers
need is a deterministic 32-byte digest per payload.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass

from sequencer_types.hashing import sha256
from sequencer_types.models import NamespaceTable

# u32 little-endian namespace count of zero.
EMPTY_PAYLOAD_NS_TABLE = bytes(4)


@dataclass(frozen=True)
class Payload:
    raw_payload: bytes
    ns_table: bytes

    @classmethod
    def genesis(cls) -> "Payload":
        """The empty payload of a genesis block."""
        return cls(b"", EMPTY_PAYLOAD_NS_TABLE)

    def encode(self) -> bytes:
        return self.raw_payload

    def builder_commitment(self, metadata: NamespaceTable) -> bytes:
        """Digest binding the payload and its table to the header's namespace table."""
        data = struct.pack("<QQQ", len(self.raw_payload), len(self.ns_table), len(metadata.raw))
        return sha256(data + self.raw_payload + self.ns_table + metadata.raw)


def vid_commitment(payload: bytes, num_storage_nodes: int) -> bytes:
    """32-byte payload commitment for ``num_storage_nodes`` storage nodes."""
    if num_storage_nodes < 1:
        raise ValueError("ERROR: num_storage_nodes must be at least 1")
    return sha256(struct.pack("<II", len(payload), num_storage_nodes) + payload)
