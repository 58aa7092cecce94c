"""Canonical sequencer records: the portable data contracts.

All models are frozen: equality and hashing are structural over the field
set, and no record is mutated after construction.  ``extra="ignore"``
drops unknown fields on decode.  Python attribute names may differ from
the wire names (``NamespaceTable.raw`` is ``"bytes"`` on the wire,
``Transaction.namespace_id`` is ``"namespace"``); always encode with
``by_alias=True``.

Every record implements ``commit()``; the field order fed to the
commitment builder is fixed here, per type, and is part of the contract.
"""
from __future__ import annotations

from typing import ClassVar, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from sequencer_types.commitment import U64_MAX, Commitment, RawCommitmentBuilder
from sequencer_types.fields import (
    U64,
    U256Int,
    Address,
    Base64Bytes,
    Bytes32,
    DecimalU256,
    HexU256,
    commitment_ref,
    tagged_bytes,
)

NS_TABLE_BYTE_LEN = 48
MERKLE_COMMITMENT_LEN = 48

PayloadCommitmentBytes = tagged_bytes("HASH", 32)
BuilderCommitmentBytes = tagged_bytes("BUILDER_COMMITMENT", 32)
MerkleCommitmentBytes = tagged_bytes("MERKLE_COMM", MERKLE_COMMITMENT_LEN)
ChainConfigCommitment = commitment_ref("CHAIN_CONFIG")


class NamespaceTable(BaseModel):
    """Opaque fixed-length descriptor of namespace ranges in a payload."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    COMMIT_TAG: ClassVar[str] = "NSTABLE"

    raw: Base64Bytes = Field(alias="bytes")

    @field_validator("raw")
    @classmethod
    def check_length(cls, value: bytes) -> bytes:
        if len(value) != NS_TABLE_BYTE_LEN:
            raise ValueError(f"namespace table must be {NS_TABLE_BYTE_LEN} bytes, got {len(value)}")
        return value

    def commit(self) -> Commitment:
        return RawCommitmentBuilder(self.COMMIT_TAG).var_size_bytes(self.raw).finalize()


class L1BlockInfo(BaseModel):
    """Metadata of an L1 block referenced by a header."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    COMMIT_TAG: ClassVar[str] = "L1BLOCK"

    number: U64
    timestamp: HexU256
    hash: Bytes32

    def commit(self) -> Commitment:
        return (
            RawCommitmentBuilder(self.COMMIT_TAG)
            .u64_field("number", self.number)
            .u256_field("timestamp", self.timestamp)
            .fixed_size_field("hash", self.hash)
            .finalize()
        )


class ChainConfig(BaseModel):
    """Chain-wide parameters.

    ``fee_contract`` absent and ``fee_contract`` set to the zero address are
    distinct values with distinct commitments.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    COMMIT_TAG: ClassVar[str] = "CHAIN_CONFIG"

    chain_id: HexU256
    max_block_size: U64
    base_fee: DecimalU256
    fee_contract: Optional[Address] = None
    fee_recipient: Address

    def commit(self) -> Commitment:
        builder = (
            RawCommitmentBuilder(self.COMMIT_TAG)
            .u256_field("chain_id", self.chain_id)
            .u64_field("max_block_size", self.max_block_size)
            .u256_field("base_fee", self.base_fee)
            .fixed_size_field("fee_recipient", self.fee_recipient)
        )
        if self.fee_contract is None:
            return builder.u64_field("fee_contract", 0).finalize()
        return builder.u64_field("fee_contract", 1).fixed_size_bytes(self.fee_contract).finalize()


class FullChainConfig(BaseModel):
    """Union arm carrying the whole chain config (``{"Left": {...}}``)."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    value: ChainConfig = Field(alias="Left")


class ChainConfigReference(BaseModel):
    """Union arm carrying only the chain config commitment (``{"Right": "CHAIN_CONFIG~..."}``)."""

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    commitment: ChainConfigCommitment = Field(alias="Right")


class ResolvableChainConfig(BaseModel):
    """A chain config known either in full or only by its commitment.

    Both arms commit identically: the full arm commits the value, the
    reference arm returns the stored commitment.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    chain_config: Union[FullChainConfig, ChainConfigReference]

    @classmethod
    def full(cls, config: ChainConfig) -> "ResolvableChainConfig":
        return cls(chain_config=FullChainConfig(value=config))

    @classmethod
    def from_commitment(cls, commitment: Commitment) -> "ResolvableChainConfig":
        return cls(chain_config=ChainConfigReference(commitment=commitment))

    def commit(self) -> Commitment:
        arm = self.chain_config
        if isinstance(arm, FullChainConfig):
            return arm.value.commit()
        return arm.commitment

    def resolve(self) -> Optional[ChainConfig]:
        """Return the full config, or None when only the commitment is known."""
        arm = self.chain_config
        return arm.value if isinstance(arm, FullChainConfig) else None


class FeeInfo(BaseModel):
    """Fee paid by a builder account for a block."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    COMMIT_TAG: ClassVar[str] = "FEE_INFO"

    account: Address
    amount: DecimalU256

    @classmethod
    def new(cls, account: Union[str, bytes], amount: int) -> "FeeInfo":
        return cls(account=account, amount=amount)

    def commit(self) -> Commitment:
        return (
            RawCommitmentBuilder(self.COMMIT_TAG)
            .fixed_size_field("account", self.account)
            .u256_field("amount", self.amount)
            .finalize()
        )


class BuilderSignature(BaseModel):
    """Recoverable secp256k1 signature; ``v`` is 27 or 28."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)

    r: HexU256
    s: HexU256
    v: U64

    @field_validator("v")
    @classmethod
    def check_recovery_id(cls, value: int) -> int:
        if value not in (27, 28):
            raise ValueError(f"v must be 27 or 28, got {value}")
        return value

    def to_bytes(self) -> bytes:
        """65-byte ``r || s || recovery_id`` form."""
        return self.r.to_bytes(32, "big") + self.s.to_bytes(32, "big") + bytes([self.v - 27])


class Header(BaseModel):
    """Block header.  The builder signature is carried but not committed."""

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    COMMIT_TAG: ClassVar[str] = "BLOCK"

    chain_config: ResolvableChainConfig
    height: U64
    timestamp: U64
    l1_head: U64
    l1_finalized: Optional[L1BlockInfo] = None
    payload_commitment: PayloadCommitmentBytes
    builder_commitment: BuilderCommitmentBytes
    ns_table: NamespaceTable
    block_merkle_tree_root: MerkleCommitmentBytes
    fee_merkle_tree_root: MerkleCommitmentBytes
    fee_info: FeeInfo
    builder_signature: Optional[BuilderSignature] = None

    def commit(self) -> Commitment:
        l1_finalized = self.l1_finalized.commit() if self.l1_finalized is not None else None
        return (
            RawCommitmentBuilder(self.COMMIT_TAG)
            .field("chain_config", self.chain_config.commit())
            .u64_field("height", self.height)
            .u64_field("timestamp", self.timestamp)
            .u64_field("l1_head", self.l1_head)
            .optional("l1_finalized", l1_finalized)
            .constant_str("payload_commitment")
            .fixed_size_bytes(self.payload_commitment)
            .constant_str("builder_commitment")
            .fixed_size_bytes(self.builder_commitment)
            .field("ns_table", self.ns_table.commit())
            .var_size_field("block_merkle_tree_root", self.block_merkle_tree_root)
            .var_size_field("fee_merkle_tree_root", self.fee_merkle_tree_root)
            .field("fee_info", self.fee_info.commit())
            .finalize()
        )


class Transaction(BaseModel):
    """A namespaced opaque payload.  Every payload byte feeds the commitment.

    Namespace ids are unsigned integers of up to 256 bits.  Ids that fit in
    64 bits commit as a ``u64`` under ``"namespace"``; wider ids commit as a
    ``u256`` under ``"wide_namespace"``.
    """

    model_config = ConfigDict(extra="ignore", frozen=True, populate_by_name=True)
    COMMIT_TAG: ClassVar[str] = "TX"
    COMMIT_DOMAIN: ClassVar[str] = "Transaction"

    namespace_id: U256Int = Field(alias="namespace")
    payload: Base64Bytes

    def commit(self) -> Commitment:
        builder = RawCommitmentBuilder(self.COMMIT_TAG, domain=self.COMMIT_DOMAIN)
        if self.namespace_id <= U64_MAX:
            builder.u64_field("namespace", self.namespace_id)
        else:
            builder.u256_field("wide_namespace", self.namespace_id)
        return builder.var_size_bytes(self.payload).finalize()
