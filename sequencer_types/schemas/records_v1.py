"""Record codec v1: encode, decode, load, dump, validate.

``encode`` is the canonical structured form of a record (a JSON-ready dict);
``dump_record`` / ``canonical_json_bytes`` render it with ``sort_keys=True,
indent=2`` so equal records always produce identical bytes.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, List, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from sequencer_types.errors import MalformedRecord
from sequencer_types.models import (
    ChainConfig,
    FeeInfo,
    Header,
    L1BlockInfo,
    NamespaceTable,
    Transaction,
)

SCHEMA_VERSION = "1.0.0"

R = TypeVar("R", bound=BaseModel)

# Lowercase record kind -> model.  The set is closed.
RECORD_TYPES: Dict[str, Type[BaseModel]] = {
    "ns_table": NamespaceTable,
    "l1_block": L1BlockInfo,
    "chain_config": ChainConfig,
    "fee_info": FeeInfo,
    "header": Header,
    "transaction": Transaction,
}


def record_type(kind: str) -> Type[BaseModel]:
    """Look up a record model by its lowercase kind name.

    Raises:
        KeyError: unknown kind.
    """
    try:
        return RECORD_TYPES[kind]
    except KeyError:
        raise KeyError(f"ERROR: unknown record kind {kind!r}; expected one of {sorted(RECORD_TYPES)}") from None


def encode(record: BaseModel) -> Dict[str, Any]:
    """Return the canonical structured encoding of ``record``."""
    return record.model_dump(mode="json", by_alias=True)


def decode(model: Type[R], data: Any) -> R:
    """Reconstruct a record of type ``model`` from its structured encoding.

    Raises:
        MalformedRecord: missing fields, wrong shapes, wrong byte lengths or
            out-of-range integers.
    """
    if not isinstance(data, dict):
        raise MalformedRecord(model.__name__, [f"expected an object, got {type(data).__name__}"])
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise MalformedRecord(model.__name__, _error_lines(exc)) from exc


def load_record(model: Type[R], source: Union[str, bytes, dict, Path]) -> R:
    """Decode a record from a JSON string, bytes, dict, or file Path.

    Raises:
        MalformedRecord: data does not decode to ``model``.
        json.JSONDecodeError: text is not JSON.
        FileNotFoundError: Path does not exist.
    """
    if isinstance(source, Path):
        data = json.loads(source.read_text(encoding="utf-8"))
    elif isinstance(source, (str, bytes)):
        data = json.loads(source)
    else:
        data = source
    return decode(model, data)


def dump_record(record: BaseModel, *, indent: int = 2) -> str:
    """Serialize a record to canonical JSON (sort_keys=True, indent=2)."""
    return json.dumps(encode(record), sort_keys=True, indent=indent, ensure_ascii=False)


def canonical_json_bytes(record: BaseModel) -> bytes:
    """UTF-8 bytes of :func:`dump_record`; byte-stable for equal records."""
    return dump_record(record).encode("utf-8")


def validate_record(model: Type[BaseModel], data: dict) -> List[str]:
    """Validate a raw dict against a record model.

    Returns a list of human-readable error strings (empty list = valid).
    Does not raise.
    """
    try:
        model.model_validate(data)
        return []
    except ValidationError as exc:
        return _error_lines(exc)


def _error_lines(exc: ValidationError) -> List[str]:
    return [f"{e['loc']}: {e['msg']}" for e in exc.errors()]
