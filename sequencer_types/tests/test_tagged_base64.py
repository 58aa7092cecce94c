"""Tagged base64 and commitment string tests.

The PUBLISHED strings are the commitments of the upstream reference
instances.  Whatever hash produced them, their tagged form must round-trip
exactly through this codec.
"""
from __future__ import annotations

import pytest

from sequencer_types.commitment import (
    COMMITMENT_TAGS,
    Commitment,
    commitment_to_u256,
    u256_to_commitment,
)
from sequencer_types.errors import InvalidCommitmentFormat
from sequencer_types.tagged_base64 import TaggedBase64, checksum

PUBLISHED = {
    "NSTABLE": "NSTABLE~GL-lEBAwNZDldxDpySRZQChNnmn9vNzdIAL8W9ENOuh_",
    "L1BLOCK": "L1BLOCK~4HpzluLK2Isz3RdPNvNrDAyQcWOF2c9JeLZzVNLmfpQ9",
    "CHAIN_CONFIG": "CHAIN_CONFIG~L6HmMktJbvnEGgpmRrsiYvQmIBstSj9UtDM7eNFFqYFO",
    "FEE_INFO": "FEE_INFO~xCCeTjJClBtwtOUrnAmT65LNTQGceuyjSJHUFfX6VRXR",
    "TX": "TX~jmYCutMVgguprgpZHywPwkehwXfibQx951gh4LSLmfwp",
    "BLOCK": "BLOCK~6Ol30XYkdKaNFXw0QAkcif18Lk8V8qkC4M81qTlwL707",
}


class TestPublishedStrings:
    @pytest.mark.parametrize("tag,text", sorted(PUBLISHED.items()))
    def test_parses_and_renders_identically(self, tag: str, text: str):
        c = Commitment.parse(text, tag=tag)
        assert c.tag == tag
        assert len(c.digest) == 32
        assert str(c) == text

    @pytest.mark.parametrize("tag,text", sorted(PUBLISHED.items()))
    def test_integer_form_is_lossless(self, tag: str, text: str):
        c = Commitment.parse(text)
        assert u256_to_commitment(tag, commitment_to_u256(c)) == c
        assert str(Commitment.from_u256(tag, c.to_u256())) == text

    @pytest.mark.parametrize("tag,text", sorted(PUBLISHED.items()))
    def test_other_tags_rejected(self, tag: str, text: str):
        for other in COMMITMENT_TAGS:
            if other == tag:
                continue
            with pytest.raises(InvalidCommitmentFormat):
                Commitment.parse(text, tag=other)

    def test_ns_table_digest_and_integer(self):
        c = Commitment.parse(PUBLISHED["NSTABLE"])
        assert c.digest.hex() == "18bfa51010303590e57710e9c9245940284d9e69fdbcdcdd2002fc5bd10d3ae8"
        assert c.to_u256() == (
            105039153368093398854673320932621886610154522806933721265920950676054092398360
        )

    def test_transaction_digest_and_integer(self):
        c = Commitment.parse(PUBLISHED["TX"])
        assert c.digest.hex() == "8e6602bad315820ba9ae0a591f2c0fc247a1c177e26d0c7de75821e0b48b99fc"
        assert c.to_u256() == (
            114254129663030498257964836358429492078392353187880131998004303302780409505422
        )


class TestMalformedStrings:
    def test_missing_separator(self):
        with pytest.raises(InvalidCommitmentFormat):
            Commitment.parse("NSTABLEGL-lEBAwNZDldxDpySRZQChNnmn9vNzdIAL8W9ENOuh_")

    def test_unknown_tag(self):
        text = str(TaggedBase64("NOT_A_RECORD", bytes(32)))
        TaggedBase64.parse(text)  # well-formed as tagged base64
        with pytest.raises(InvalidCommitmentFormat, match="unknown commitment tag"):
            Commitment.parse(text)

    def test_checksum_mismatch(self):
        text = PUBLISHED["TX"]
        corrupted = text[:-1] + ("A" if text[-1] != "A" else "B")
        with pytest.raises(InvalidCommitmentFormat):
            Commitment.parse(corrupted)

    def test_tag_swap_breaks_checksum(self):
        body = PUBLISHED["FEE_INFO"].split("~", 1)[1]
        with pytest.raises(InvalidCommitmentFormat, match="checksum"):
            TaggedBase64.parse("FEE_INFX~" + body)

    @pytest.mark.parametrize("body", [
        "",
        "abc=",
        "ab+/cd",
        "a b",
        "A",
    ])
    def test_malformed_body(self, body: str):
        with pytest.raises(InvalidCommitmentFormat):
            Commitment.parse("TX~" + body)

    def test_wrong_digest_length(self):
        text = str(TaggedBase64("TX", bytes(31)))
        with pytest.raises(InvalidCommitmentFormat, match="32 bytes"):
            Commitment.parse(text)

    def test_non_string_input(self):
        with pytest.raises(InvalidCommitmentFormat):
            Commitment.parse(b"TX~abc")  # type: ignore[arg-type]

    def test_invalid_tag_characters(self):
        with pytest.raises(InvalidCommitmentFormat):
            TaggedBase64("BAD TAG", b"")


class TestCodec:
    def test_empty_value(self):
        tb = TaggedBase64("EMPTY", b"")
        assert TaggedBase64.parse(str(tb)) == tb

    def test_checksum_covers_tag(self):
        assert checksum("A", b"\x00") != checksum("B", b"\x00")

    def test_body_is_unpadded_urlsafe(self):
        text = str(TaggedBase64("HASH", bytes(range(250, 256)) * 5 + b"\xfb\xff"))
        body = text.split("~", 1)[1]
        assert "=" not in body
        assert "+" not in body and "/" not in body
