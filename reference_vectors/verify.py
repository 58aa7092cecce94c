"""Vector verification run: every reference vector, twice.

Failures are collected per vector; one failing record never hides the
result of another.
"""
from __future__ import annotations

import logging
from typing import Dict, Optional

import jsonschema

from sequencer_types.commitment import Commitment
from sequencer_types.contract_validate import validate_record_model
from reference_vectors.harness import verify_vector
from reference_vectors.vectors import REFERENCE_VECTORS

logger = logging.getLogger(__name__)


def _run_vectors() -> Dict[str, Optional[Commitment]]:
    """Check every vector → {name: verified commitment, or None on failure}.

    Each reference instance's encoding is validated against
    ``records.v1.json`` before the three-way check.
    """
    results: Dict[str, Optional[Commitment]] = {}
    for name, vector in REFERENCE_VECTORS.items():
        try:
            validate_record_model(name, vector.build())
            results[name] = verify_vector(vector)
        except jsonschema.ValidationError as exc:
            logger.error("%s does not match records.v1.json: %s", name, exc.message)
            results[name] = None
        except (AssertionError, ValueError, FileNotFoundError) as exc:
            logger.error("%s failed:\n%s", name, exc)
            results[name] = None
    return results


def run_verify() -> Dict[str, bool]:
    """Run all vectors twice; report per-vector pass/fail.

    A vector passes only if both runs verify it and agree on its commitment.
    """
    run1 = _run_vectors()
    run2 = _run_vectors()
    report: Dict[str, bool] = {}
    for name in REFERENCE_VECTORS:
        first, second = run1[name], run2[name]
        report[name] = first is not None and first == second
        if first is not None and first != second:
            logger.error("%s: commitment differs between runs (%s vs %s)", name, first, second)
    return report
