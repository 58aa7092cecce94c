"""Reference instances, golden fixtures and the vector harness."""

from reference_vectors.harness import reference_test, verify_vector
from reference_vectors.vectors import REFERENCE_VECTORS, ReferenceVector, get_vector, load_reference

__all__ = [
    "reference_test",
    "verify_vector",
    "REFERENCE_VECTORS",
    "ReferenceVector",
    "get_vector",
    "load_reference",
]
