"""Tagged base64: the printable ``TAG~body`` form of commitments and digests.

The body is unpadded URL-safe base64 of ``value || checksum``.  The checksum
byte is a CRC-8 (polynomial 0x07, zero init, no reflection) over the ASCII
tag followed by the value, xor-ed with 0x20.  A string produced here always
parses back to the same tag and value, and a parsed string always renders
back to the identical text.
"""
from __future__ import annotations

import base64
import re
from dataclasses import dataclass
from typing import Optional

from sequencer_types.errors import InvalidCommitmentFormat

SEPARATOR = "~"
CRC8_POLY = 0x07
CRC8_XOROUT = 0x20

_TAG_RE = re.compile(r"^[A-Za-z0-9_-]+$")
_BODY_RE = re.compile(r"^[A-Za-z0-9_-]+$")


def _crc8_table():
    table = []
    for byte in range(256):
        crc = byte
        for _ in range(8):
            crc = ((crc << 1) ^ CRC8_POLY) & 0xFF if crc & 0x80 else (crc << 1) & 0xFF
        table.append(crc)
    return tuple(table)


_CRC8_TABLE = _crc8_table()


def checksum(tag: str, value: bytes) -> int:
    crc = 0
    for byte in tag.encode("ascii") + value:
        crc = _CRC8_TABLE[crc ^ byte]
    return crc ^ CRC8_XOROUT


@dataclass(frozen=True)
class TaggedBase64:
    """A tag plus an opaque byte value."""

    tag: str
    value: bytes

    def __post_init__(self) -> None:
        if not _TAG_RE.match(self.tag):
            raise InvalidCommitmentFormat(f"ERROR: invalid tag {self.tag!r}")

    def __str__(self) -> str:
        raw = self.value + bytes([checksum(self.tag, self.value)])
        body = base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")
        return f"{self.tag}{SEPARATOR}{body}"

    @classmethod
    def parse(cls, text: str, expected_tag: Optional[str] = None) -> "TaggedBase64":
        """Parse ``TAG~body``.

        Raises:
            InvalidCommitmentFormat: missing separator, bad tag, body that is
                not unpadded URL-safe base64, checksum mismatch, or a tag other
                than ``expected_tag`` when one is given.
        """
        if not isinstance(text, str):
            raise InvalidCommitmentFormat(
                f"ERROR: tagged value must be a string, got {type(text).__name__}"
            )
        tag, sep, body = text.partition(SEPARATOR)
        if not sep:
            raise InvalidCommitmentFormat(f"ERROR: missing '{SEPARATOR}' in {text!r}")
        if not _TAG_RE.match(tag):
            raise InvalidCommitmentFormat(f"ERROR: invalid tag {tag!r}")
        if expected_tag is not None and tag != expected_tag:
            raise InvalidCommitmentFormat(
                f"ERROR: expected tag {expected_tag!r}, found {tag!r}"
            )
        if not _BODY_RE.match(body) or len(body) % 4 == 1:
            raise InvalidCommitmentFormat(f"ERROR: malformed body in {text!r}")
        raw = base64.urlsafe_b64decode(body + "=" * (-len(body) % 4))
        value, check = raw[:-1], raw[-1]
        if check != checksum(tag, value):
            raise InvalidCommitmentFormat(f"ERROR: checksum mismatch in {text!r}")
        parsed = cls(tag, value)
        # Non-canonical trailing bits would decode to the same bytes.
        if str(parsed) != text:
            raise InvalidCommitmentFormat(f"ERROR: non-canonical encoding {text!r}")
        return parsed
