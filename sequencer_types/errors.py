"""Error taxonomy for record decoding, commitment parsing and vector checks.

Decode and parse failures are ``ValueError`` subclasses: the input is bad.
Harness failures are ``AssertionError`` subclasses: the live implementation
disagrees with a pinned golden value.  None of them is ever recovered from
inside this package.
"""
from __future__ import annotations

import json
from typing import Any, List, Optional


class MalformedRecord(ValueError):
    """Structured data cannot be decoded into the requested record type."""

    def __init__(self, record: str, errors: List[str]):
        self.record = record
        self.errors = list(errors)
        detail = "; ".join(self.errors) if self.errors else "no detail"
        super().__init__(f"ERROR: malformed {record}: {detail}")


class InvalidCommitmentFormat(ValueError):
    """A tagged commitment string has an unknown tag or a malformed body."""


def _pretty(value: Any) -> str:
    return json.dumps(value, sort_keys=True, indent=2, ensure_ascii=False)


class SerializationMismatch(AssertionError):
    """The live encoding of a reference instance differs from its fixture."""

    def __init__(self, name: str, expected: Any, actual: Any):
        self.name = name
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"Serialized {name} does not match the stored fixture.\n"
            f"Expected:\n{_pretty(expected)}\n"
            f"Actual:\n{_pretty(actual)}\n"
            f"If this change was intentional and this is a breaking change, "
            f"replace data/{name}.json with the actual value above."
        )


def _commitment_lines(label: str, commitment) -> List[str]:
    return [
        f"{label} commitment: {commitment}",
        f"{label} commitment bytes: {list(commitment.digest)}",
        f"{label} commitment U256: {commitment.to_u256()}",
    ]


class NonDeterministicCommitment(AssertionError):
    """A decoded fixture commits differently from the value that produced it."""

    def __init__(self, name: str, expected, actual):
        self.name = name
        self.expected = expected
        self.actual = actual
        lines = [
            f"Decoded {name} commits differently from the constructed value; "
            f"this indicates an inconsistency or non-determinism in the "
            f"commitment scheme.",
        ]
        lines += _commitment_lines("Constructed", expected)
        lines += _commitment_lines("Decoded", actual)
        super().__init__("\n".join(lines))


class CommitmentMismatch(AssertionError):
    """The computed commitment differs from the pinned commitment string."""

    def __init__(self, name: str, expected, actual, hint: Optional[str] = None):
        self.name = name
        self.expected = expected
        self.actual = actual
        lines = [f"Commitment of {name} does not match the pinned value."]
        lines += _commitment_lines("Expected", expected)
        lines += _commitment_lines("Actual", actual)
        lines.append(
            hint
            or "If this change was intentional and this is a breaking change, "
            "replace the pinned commitment with the actual value above."
        )
        super().__init__("\n".join(lines))
