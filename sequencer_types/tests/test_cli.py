"""CLI tests: verify / show / commit / validate."""
from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from reference_vectors.vectors import DATA_DIR, REFERENCE_HEADER_COMMITMENT

_REPO_ROOT = Path(__file__).resolve().parents[2]


def _run(*args: str):
    return subprocess.run(
        [sys.executable, "-m", "sequencer_types.cli", *args],
        capture_output=True, text=True, cwd=_REPO_ROOT,
    )


def _write(path: Path, data) -> Path:
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


class TestVerify:
    def test_all_vectors_pass(self):
        result = _run("verify")
        assert result.returncode == 0, result.stdout + result.stderr
        assert "OK: all reference vectors verified" in result.stdout
        for name in ("ns_table", "l1_block", "chain_config", "fee_info", "header", "transaction"):
            assert f"OK: {name}" in result.stdout

    def test_quiet_by_default(self):
        result = _run("verify")
        assert result.returncode == 0
        assert "actual commitment" not in result.stderr

    def test_verbose_keeps_logging_every_vector(self):
        result = _run("-v", "verify")
        assert result.returncode == 0
        for name in ("ns_table", "header", "transaction"):
            assert f"{name} actual commitment: " in result.stderr


class TestShow:
    def test_show_header(self):
        result = _run("show", "header")
        assert result.returncode == 0
        assert f"commitment: {REFERENCE_HEADER_COMMITMENT}" in result.stdout
        assert "commitment U256: " in result.stdout
        json_part = result.stdout.split("\ncommitment: ", 1)[0]
        assert json.loads(json_part) == json.loads((DATA_DIR / "header.json").read_text())

    def test_show_unknown_kind(self):
        result = _run("show", "block")
        assert result.returncode != 0


class TestCommit:
    def test_commit_fixture(self):
        result = _run("commit", "header", "--file", str(DATA_DIR / "header.json"))
        assert result.returncode == 0
        assert result.stdout.splitlines()[0] == f"commitment: {REFERENCE_HEADER_COMMITMENT}"

    def test_commit_malformed(self, tmp_path: Path):
        path = _write(tmp_path / "l1.json", {"number": 1})
        result = _run("commit", "l1_block", "--file", str(path))
        assert result.returncode == 1
        assert result.stdout.startswith("ERROR:")


class TestValidate:
    @pytest.mark.parametrize("kind", ["ns_table", "transaction", "header"])
    def test_valid_fixture(self, kind: str):
        result = _run("validate", kind, "--file", str(DATA_DIR / f"{kind}.json"))
        assert result.returncode == 0
        assert result.stdout.strip() == f"OK: {kind} is valid"

    def test_contract_violation(self, tmp_path: Path):
        path = _write(tmp_path / "fee.json", {"account": "0x00", "amount": "0"})
        result = _run("validate", "fee_info", "--file", str(path))
        assert result.returncode == 1
        assert result.stdout.startswith("ERROR: invalid fee_info")

    def test_decode_failure_after_contract(self, tmp_path: Path):
        # 2**256 passes the digit-count pattern but not the integer range
        path = _write(tmp_path / "fee.json", {
            "account": "0x" + "00" * 20,
            "amount": str(2**256),
        })
        result = _run("validate", "fee_info", "--file", str(path))
        assert result.returncode == 1
        assert result.stdout.startswith("ERROR: malformed FeeInfo")

    def test_no_command(self):
        result = _run()
        assert result.returncode == 1
