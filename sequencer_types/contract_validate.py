import jsonschema
from pydantic import BaseModel

from .schema_loader import load_schema
from .schemas.records_v1 import encode, record_type

RECORDS_SCHEMA = "records.v1.json"


def record_schema(kind: str) -> dict:
    """Return the canonical contract for one record kind (e.g. ``"header"``)."""
    model = record_type(kind)
    schema = load_schema(RECORDS_SCHEMA)
    schema["$ref"] = f"#/$defs/{model.__name__}"
    return schema


def validate_record_data(kind: str, data: dict) -> None:
    """Validate an encoded record against the canonical records.v1.json contract.

    Raises jsonschema.ValidationError if non-conformant, KeyError for an
    unknown kind.
    """
    jsonschema.validate(data, record_schema(kind))


def validate_record_model(kind: str, record: BaseModel) -> None:
    """Encode a record and validate the encoding against the contract.

    Raises jsonschema.ValidationError if the encoding is non-conformant.
    """
    validate_record_data(kind, encode(record))
