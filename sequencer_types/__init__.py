"""Canonical sequencer records: encoding, decoding and domain-separated commitments."""

from sequencer_types.commitment import (
    Commitment,
    Committable,
    RawCommitmentBuilder,
    commitment_to_u256,
    u256_to_commitment,
)
from sequencer_types.errors import (
    CommitmentMismatch,
    InvalidCommitmentFormat,
    MalformedRecord,
    NonDeterministicCommitment,
    SerializationMismatch,
)
from sequencer_types.models import (
    BuilderSignature,
    ChainConfig,
    FeeInfo,
    Header,
    L1BlockInfo,
    NamespaceTable,
    ResolvableChainConfig,
    Transaction,
)
from sequencer_types.schemas.records_v1 import decode, encode

__all__ = [
    "Commitment",
    "Committable",
    "RawCommitmentBuilder",
    "commitment_to_u256",
    "u256_to_commitment",
    "CommitmentMismatch",
    "InvalidCommitmentFormat",
    "MalformedRecord",
    "NonDeterministicCommitment",
    "SerializationMismatch",
    "BuilderSignature",
    "ChainConfig",
    "FeeInfo",
    "Header",
    "L1BlockInfo",
    "NamespaceTable",
    "ResolvableChainConfig",
    "Transaction",
    "decode",
    "encode",
]
