"""Golden vector harness: the three-way check of a reference instance.

For one record type:

1. ``encode(reference)`` must equal the stored fixture (wire format drift).
2. ``decode(fixture).commit()`` must equal ``reference.commit()`` (the decode
   path and the construction path agree on the committed content).
3. The pinned commitment string must parse to ``reference.commit()``.

Each failure raises its own ``AssertionError`` subclass carrying expected and
actual values in full.  Nothing here rewrites fixtures or constants.
"""
from __future__ import annotations

import logging
from typing import Any, Dict

from pydantic import BaseModel

from sequencer_types.commitment import Commitment
from sequencer_types.errors import (
    CommitmentMismatch,
    NonDeterministicCommitment,
    SerializationMismatch,
)
from sequencer_types.logs import setup_logging
from sequencer_types.schemas.records_v1 import decode, encode
from reference_vectors.vectors import ReferenceVector

logger = logging.getLogger(__name__)


def reference_test(
    name: str,
    reference: BaseModel,
    fixture: Dict[str, Any],
    commitment: str,
) -> Commitment:
    """Run all three checks for one record; return the verified commitment.

    Raises:
        SerializationMismatch: live encoding differs from ``fixture``.
        MalformedRecord: ``fixture`` does not decode.
        NonDeterministicCommitment: decoded fixture commits differently.
        InvalidCommitmentFormat: ``commitment`` is not a tagged string for
            this record type.
        CommitmentMismatch: ``commitment`` differs from the computed one.
    """
    setup_logging()

    actual = encode(reference)
    if actual != fixture:
        raise SerializationMismatch(name, expected=fixture, actual=actual)

    computed = reference.commit()
    parsed = decode(type(reference), fixture)
    decoded = parsed.commit()
    if decoded != computed:
        raise NonDeterministicCommitment(name, expected=computed, actual=decoded)

    logger.info("%s actual commitment: %s", name, computed)
    logger.info("%s commitment bytes: %s", name, list(computed.digest))
    logger.info("%s commitment U256: %d", name, computed.to_u256())

    expected = Commitment.parse(commitment, tag=computed.tag)
    if expected != computed:
        raise CommitmentMismatch(name, expected=expected, actual=computed)
    return computed


def verify_vector(vector: ReferenceVector) -> Commitment:
    """Build, load and check one entry of the vector table."""
    return reference_test(vector.name, vector.build(), vector.load_fixture(), vector.commitment)
