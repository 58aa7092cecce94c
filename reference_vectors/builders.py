"""Reference instance builders: one fixed, fully populated value per record.

Builders are pure: no randomness, no clock, no environment.  Calling one
twice yields equal values with equal commitments.
"""
from __future__ import annotations

from sequencer_types.merkle import ValidatedState
from sequencer_types.models import (
    ChainConfig,
    FeeInfo,
    Header,
    L1BlockInfo,
    NamespaceTable,
    ResolvableChainConfig,
    Transaction,
)
from sequencer_types.payload import Payload, vid_commitment
from sequencer_types.signing import FeeAccount, sign_fee

# First account of the standard Anvil/Hardhat test mnemonic.
REFERENCE_FEE_ACCOUNT = "0xf39fd6e51aad88f6f4ce6ab8827279cfffb92266"
REFERENCE_L1_HASH = bytes.fromhex("0123456789abcdef" * 4)
REFERENCE_BUILDER_SEED = bytes(32)
REFERENCE_BUILDER_INDEX = 0
REFERENCE_NAMESPACE = 12648430
REFERENCE_TX_PAYLOAD_LEN = 1024


def reference_ns_table() -> NamespaceTable:
    return NamespaceTable(raw=bytes(48))


def reference_l1_block() -> L1BlockInfo:
    return L1BlockInfo(number=123, timestamp=0x456, hash=REFERENCE_L1_HASH)


def reference_chain_config() -> ChainConfig:
    return ChainConfig(
        chain_id=0x8A19,
        max_block_size=10240,
        base_fee=0,
        fee_contract=bytes(20),
        fee_recipient=bytes(20),
    )


def reference_fee_info() -> FeeInfo:
    return FeeInfo.new(REFERENCE_FEE_ACCOUNT, 0)


def reference_header() -> Header:
    """Genesis-like header at height 42 signed by the seed-derived builder.

    The payload commitment covers the empty genesis payload for one storage
    node; the state roots are those of empty block and fee trees.
    """
    builder = FeeAccount.generated_from_seed_indexed(REFERENCE_BUILDER_SEED, REFERENCE_BUILDER_INDEX)
    payload = Payload.genesis()
    ns_table = reference_ns_table()
    payload_commitment = vid_commitment(payload.encode(), 1)
    builder_commitment = payload.builder_commitment(ns_table)
    fee_info = reference_fee_info()
    builder_signature = sign_fee(builder.key, fee_info.amount, ns_table, payload_commitment)
    state = ValidatedState.default()

    return Header(
        chain_config=ResolvableChainConfig.full(reference_chain_config()),
        height=42,
        timestamp=789,
        l1_head=124,
        l1_finalized=reference_l1_block(),
        payload_commitment=payload_commitment,
        builder_commitment=builder_commitment,
        ns_table=ns_table,
        block_merkle_tree_root=state.block_merkle_tree.commitment().to_bytes(),
        fee_merkle_tree_root=state.fee_merkle_tree.commitment().to_bytes(),
        fee_info=fee_info,
        builder_signature=builder_signature,
    )


def reference_transaction() -> Transaction:
    payload = bytes(i % 255 for i in range(REFERENCE_TX_PAYLOAD_LEN))
    return Transaction(namespace_id=REFERENCE_NAMESPACE, payload=payload)
