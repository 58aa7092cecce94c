"""Harness tests: each check's failure carries full diagnostics."""
from __future__ import annotations

import dataclasses
import logging
from concurrent.futures import ThreadPoolExecutor

import pytest
from pydantic import BaseModel, PrivateAttr

from reference_vectors import verify as verify_module
from reference_vectors.builders import reference_ns_table
from reference_vectors.harness import reference_test, verify_vector
from reference_vectors.vectors import (
    PUBLISHED_COMMITMENTS,
    REFERENCE_NS_TABLE_COMMITMENT,
    REFERENCE_VECTORS,
    load_reference,
)
from sequencer_types.commitment import Commitment, RawCommitmentBuilder
from sequencer_types.errors import (
    CommitmentMismatch,
    InvalidCommitmentFormat,
    NonDeterministicCommitment,
    SerializationMismatch,
)
from sequencer_types.schemas.records_v1 import encode

UPSTREAM_NS_TABLE_COMMITMENT = PUBLISHED_COMMITMENTS["ns_table"]


class _Salted(BaseModel):
    """Commits to state that does not survive encode/decode."""

    value: int
    _salt: int = PrivateAttr(default=0)

    def commit(self) -> Commitment:
        return (
            RawCommitmentBuilder("NSTABLE", domain="salted")
            .u64_field("value", self.value)
            .u64_field("salt", self._salt)
            .finalize()
        )


class TestReferenceTest:
    def test_success_returns_commitment(self):
        c = reference_test(
            "ns_table", reference_ns_table(), load_reference("ns_table"), REFERENCE_NS_TABLE_COMMITMENT
        )
        assert str(c) == REFERENCE_NS_TABLE_COMMITMENT

    def test_success_logs_three_forms(self, caplog):
        caplog.set_level(logging.INFO, logger="reference_vectors.harness")
        reference_test(
            "ns_table", reference_ns_table(), load_reference("ns_table"), REFERENCE_NS_TABLE_COMMITMENT
        )
        text = caplog.text
        assert f"ns_table actual commitment: {REFERENCE_NS_TABLE_COMMITMENT}" in text
        assert "ns_table commitment bytes: [" in text
        assert "ns_table commitment U256: " in text

    def test_serialization_mismatch(self):
        fixture = load_reference("l1_block")
        fixture["number"] = 124
        vector = REFERENCE_VECTORS["l1_block"]
        with pytest.raises(SerializationMismatch) as info:
            reference_test("l1_block", vector.build(), fixture, vector.commitment)
        err = info.value
        assert err.expected == fixture
        assert err.actual == encode(vector.build())
        message = str(err)
        assert "Expected:" in message and "Actual:" in message
        assert '"number": 124' in message and '"number": 123' in message
        assert "data/l1_block.json" in message

    def test_non_deterministic_commitment(self):
        salted = _Salted(value=5)
        salted._salt = 1
        with pytest.raises(NonDeterministicCommitment) as info:
            reference_test("salted", salted, {"value": 5}, "NSTABLE~" + "A" * 44)
        err = info.value
        assert err.expected == salted.commit()
        assert err.actual == _Salted(value=5).commit()
        assert "non-determinism" in str(err)

    def test_commitment_mismatch(self):
        with pytest.raises(CommitmentMismatch) as info:
            reference_test(
                "ns_table", reference_ns_table(), load_reference("ns_table"), UPSTREAM_NS_TABLE_COMMITMENT
            )
        err = info.value
        assert str(err.expected) == UPSTREAM_NS_TABLE_COMMITMENT
        assert str(err.actual) == REFERENCE_NS_TABLE_COMMITMENT
        message = str(err)
        assert f"Expected commitment: {UPSTREAM_NS_TABLE_COMMITMENT}" in message
        assert f"Actual commitment: {REFERENCE_NS_TABLE_COMMITMENT}" in message
        assert f"Actual commitment U256: {err.actual.to_u256()}" in message
        assert f"Actual commitment bytes: {list(err.actual.digest)}" in message

    def test_cross_type_commitment_rejected(self):
        vector = REFERENCE_VECTORS["l1_block"]
        with pytest.raises(InvalidCommitmentFormat):
            reference_test(
                "ns_table", reference_ns_table(), load_reference("ns_table"), vector.commitment
            )


class TestVectorTable:
    @pytest.mark.parametrize("name", sorted(REFERENCE_VECTORS))
    def test_verify_vector(self, name: str):
        assert str(verify_vector(REFERENCE_VECTORS[name])) == REFERENCE_VECTORS[name].commitment

    def test_fixture_loads_are_independent(self):
        first = load_reference("header")
        first["height"] = 0
        assert load_reference("header")["height"] == 42

    def test_unknown_vector(self):
        with pytest.raises(KeyError):
            load_reference("block")

    def test_parallel_verification(self):
        with ThreadPoolExecutor(max_workers=6) as pool:
            results = list(pool.map(verify_vector, REFERENCE_VECTORS.values()))
        assert [str(c) for c in results] == [v.commitment for v in REFERENCE_VECTORS.values()]


class TestRunVerify:
    def test_all_pass(self):
        assert verify_module.run_verify() == {name: True for name in REFERENCE_VECTORS}

    def test_failures_are_independent(self, monkeypatch):
        broken = dataclasses.replace(
            REFERENCE_VECTORS["ns_table"], commitment=UPSTREAM_NS_TABLE_COMMITMENT
        )
        monkeypatch.setitem(REFERENCE_VECTORS, "ns_table", broken)
        report = verify_module.run_verify()
        assert report["ns_table"] is False
        assert all(passed for name, passed in report.items() if name != "ns_table")
