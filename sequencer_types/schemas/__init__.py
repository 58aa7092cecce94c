"""Versioned record codecs."""

from sequencer_types.schemas.records_v1 import (
    RECORD_TYPES,
    canonical_json_bytes,
    decode,
    dump_record,
    encode,
    load_record,
    record_type,
    validate_record,
)

__all__ = [
    "RECORD_TYPES",
    "record_type",
    "encode",
    "decode",
    "load_record",
    "dump_record",
    "canonical_json_bytes",
    "validate_record",
]
