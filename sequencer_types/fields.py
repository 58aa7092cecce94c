"""Annotated field types carrying the JSON wire encoding of record fields.

Each alias pairs a ``BeforeValidator`` (JSON text -> Python value) with a
``PlainSerializer`` (Python value -> JSON text) so a model's
``model_dump(mode="json", by_alias=True)`` is its canonical encoding.

Wire forms:
  - 20/32-byte values: ``"0x"`` + lowercase hex
  - ``HexU256``: ``"0x"`` + minimal lowercase hex (``"0x0"`` for zero)
  - ``DecimalU256``: base-10 string
  - ``U64`` and ``U256Int``: JSON integers
  - ``Base64Bytes``: standard padded base64
  - tagged byte values and commitments: ``TAG~body`` (see tagged_base64)
"""
from __future__ import annotations

import base64
import binascii
import re
from typing import Annotated, Any, Callable

from pydantic import BeforeValidator, Field, PlainSerializer, Strict

from sequencer_types.commitment import U64_MAX, U256_MAX, Commitment
from sequencer_types.tagged_base64 import TaggedBase64

ADDRESS_LEN = 20

_HEX_RE = re.compile(r"^0x[0-9a-fA-F]*$")
_DEC_RE = re.compile(r"^[0-9]+$")


def _parse_hex_bytes(length: int) -> Callable[[Any], bytes]:
    def parse(value: Any) -> bytes:
        if isinstance(value, (bytes, bytearray)):
            data = bytes(value)
        elif isinstance(value, str) and _HEX_RE.match(value) and len(value) % 2 == 0:
            data = bytes.fromhex(value[2:])
        else:
            raise ValueError(f"expected a 0x-prefixed hex string of {length} bytes")
        if len(data) != length:
            raise ValueError(f"expected {length} bytes, got {len(data)}")
        return data

    return parse


def _to_hex(data: bytes) -> str:
    return "0x" + data.hex()


def _check_u256(value: int) -> int:
    if not 0 <= value <= U256_MAX:
        raise ValueError(f"{value} is not a 256-bit unsigned integer")
    return value


def _parse_u256(value: Any) -> int:
    if isinstance(value, bool):
        raise ValueError("expected an unsigned integer, got a boolean")
    if isinstance(value, int):
        return _check_u256(value)
    if isinstance(value, str):
        if _HEX_RE.match(value) and len(value) > 2:
            return _check_u256(int(value[2:], 16))
        if _DEC_RE.match(value):
            return _check_u256(int(value))
    raise ValueError("expected an unsigned integer, a decimal string or a 0x hex string")


def _to_hex_int(value: int) -> str:
    return hex(value)


def _to_decimal(value: int) -> str:
    return str(value)


def _parse_base64(value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if not isinstance(value, str):
        raise ValueError("expected a base64 string")
    try:
        return base64.b64decode(value, validate=True)
    except binascii.Error as exc:
        raise ValueError(f"invalid base64: {exc}") from exc


def _to_base64(data: bytes) -> str:
    return base64.b64encode(data).decode("ascii")


def tagged_bytes(tag: str, length: int):
    """Field type for a fixed-length byte value rendered as ``tag~body``."""

    def parse(value: Any) -> bytes:
        if isinstance(value, (bytes, bytearray)):
            data = bytes(value)
        else:
            data = TaggedBase64.parse(value, expected_tag=tag).value
        if len(data) != length:
            raise ValueError(f"{tag} value must be {length} bytes, got {len(data)}")
        return data

    def render(data: bytes) -> str:
        return str(TaggedBase64(tag, data))

    return Annotated[bytes, BeforeValidator(parse), PlainSerializer(render, return_type=str)]


def commitment_ref(tag: str):
    """Field type for a :class:`Commitment` of one record type, as its tagged string."""

    def parse(value: Any) -> Commitment:
        if isinstance(value, Commitment):
            if value.tag != tag:
                raise ValueError(f"expected a {tag} commitment, got {value.tag}")
            return value
        return Commitment.parse(value, tag=tag)

    def render(commitment: Commitment) -> str:
        return str(commitment)

    return Annotated[Commitment, BeforeValidator(parse), PlainSerializer(render, return_type=str)]


U64 = Annotated[int, Strict(), Field(ge=0, le=U64_MAX)]
U256Int = Annotated[int, Strict(), Field(ge=0, le=U256_MAX)]
Bytes32 = Annotated[bytes, BeforeValidator(_parse_hex_bytes(32)), PlainSerializer(_to_hex, return_type=str)]
Address = Annotated[
    bytes, BeforeValidator(_parse_hex_bytes(ADDRESS_LEN)), PlainSerializer(_to_hex, return_type=str)
]
HexU256 = Annotated[int, BeforeValidator(_parse_u256), PlainSerializer(_to_hex_int, return_type=str)]
DecimalU256 = Annotated[int, BeforeValidator(_parse_u256), PlainSerializer(_to_decimal, return_type=str)]
Base64Bytes = Annotated[bytes, BeforeValidator(_parse_base64), PlainSerializer(_to_base64, return_type=str)]
