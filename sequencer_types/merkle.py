"""Append-only Merkle trees for block and fee state roots.

Commitments are ``digest || u64 height || u64 num_leaves`` (48 bytes,
little-endian integers), so an empty tree of height 32 and an empty tree
of height 20 commit to different bytes even though both digests are zero.

Empty subtrees hash to 32 zero bytes at every level; a node whose children
are both empty is itself empty.  Leaves keep insertion order.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import List

from sequencer_types.hashing import keccak256

BLOCK_MERKLE_TREE_HEIGHT = 32
FEE_MERKLE_TREE_HEIGHT = 20

EMPTY_DIGEST = bytes(32)


@dataclass(frozen=True)
class MerkleCommitment:
    digest: bytes
    height: int
    num_leaves: int

    def to_bytes(self) -> bytes:
        return self.digest + struct.pack("<QQ", self.height, self.num_leaves)

    @classmethod
    def from_bytes(cls, data: bytes) -> "MerkleCommitment":
        if len(data) != 48:
            raise ValueError(f"ERROR: merkle commitment must be 48 bytes, got {len(data)}")
        height, num_leaves = struct.unpack("<QQ", data[32:])
        return cls(data[:32], height, num_leaves)


def _hash_pair(left: bytes, right: bytes) -> bytes:
    if left == EMPTY_DIGEST and right == EMPTY_DIGEST:
        return EMPTY_DIGEST
    return keccak256(left + right)


class MerkleTree:
    """A binary Keccak-256 tree of fixed height.

    Usage:
        tree = MerkleTree(FEE_MERKLE_TREE_HEIGHT)
        tree.push(leaf_bytes)
        tree.commitment().to_bytes()
    """

    def __init__(self, height: int) -> None:
        self.height = height
        self._leaves: List[bytes] = []

    @property
    def num_leaves(self) -> int:
        return len(self._leaves)

    def push(self, leaf: bytes) -> None:
        """Append a leaf.  Raises ValueError once the tree is full."""
        if len(self._leaves) >= 2**self.height:
            raise ValueError(f"ERROR: merkle tree of height {self.height} is full")
        self._leaves.append(keccak256(leaf))

    def root(self) -> bytes:
        level = list(self._leaves) or [EMPTY_DIGEST]
        for _ in range(self.height):
            if len(level) % 2:
                level.append(EMPTY_DIGEST)
            level = [_hash_pair(level[i], level[i + 1]) for i in range(0, len(level), 2)]
        return level[0]

    def commitment(self) -> MerkleCommitment:
        return MerkleCommitment(self.root(), self.height, self.num_leaves)


@dataclass
class ValidatedState:
    """The block and fee trees a header's state roots are taken from."""

    block_merkle_tree: MerkleTree
    fee_merkle_tree: MerkleTree

    @classmethod
    def default(cls) -> "ValidatedState":
        return cls(MerkleTree(BLOCK_MERKLE_TREE_HEIGHT), MerkleTree(FEE_MERKLE_TREE_HEIGHT))
