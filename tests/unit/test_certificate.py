"""
Unit tests for the certificate adapter — chunk assembly and field location.

Test categories:
  - Assembly: chunk order, empty chunks, malformed hex
  - Voting key: marker scan, first match wins, missing/truncated key
  - Stake address: text match inside binary data, sentinel on absence
"""

from __future__ import annotations

import pytest

from catalyst_parser.adapters.certificate import (
    VOTING_KEY_MARKER,
    assemble_certificate,
    find_stake_address,
    locate_voting_key,
)
from catalyst_parser.domain.errors import MalformedHexError, VotingKeyNotFoundError
from catalyst_parser.domain.models import NOT_AVAILABLE, VotingKey
from catalyst_parser.railway import ErrorCode

KEY = bytes(range(100, 132))


# ─────────────────────── Assembly ───────────────────────


class TestAssembleCertificate:
    """Verify hex chunks are decoded and joined in order."""

    def test_concatenates_chunks_in_order(self) -> None:
        """
        GIVEN chunks "0x0102", "0x03", "0x0405"
        WHEN assembled
        THEN the bytes are 01 02 03 04 05.
        """
        assert assemble_certificate(["0x0102", "0x03", "0x0405"]) == b"\x01\x02\x03\x04\x05"

    def test_total_length_is_sum_of_chunk_lengths(self) -> None:
        chunks = ["0x" + "aa" * 64, "0x" + "bb" * 64, "0x" + "cc" * 7]
        assert len(assemble_certificate(chunks)) == 135

    def test_empty_chunk_contributes_nothing(self) -> None:
        assert assemble_certificate(["0x01", "0x", "0x02"]) == b"\x01\x02"

    def test_no_chunks_yield_empty_certificate(self) -> None:
        assert assemble_certificate([]) == b""

    def test_malformed_chunk_raises(self) -> None:
        """
        GIVEN a chunk with an odd number of hex digits
        WHEN assembled
        THEN MalformedHexError is raised.
        """
        with pytest.raises(MalformedHexError):
            assemble_certificate(["0x0102", "0x030"])


# ─────────────────────── Voting Key ───────────────────────


class TestLocateVotingKey:
    """Verify the 03 21 00 marker scan."""

    def test_extracts_32_bytes_after_marker_at_offset_10(self) -> None:
        """
        GIVEN 10 filler bytes, the marker, then 32 key bytes
        WHEN scanned
        THEN exactly those 32 bytes are returned with offset 10.
        """
        certificate = b"\xee" * 10 + VOTING_KEY_MARKER + KEY + b"\xff" * 8
        voting_key = locate_voting_key(certificate)

        assert voting_key == VotingKey(offset=10, key=KEY)

    def test_marker_at_start(self) -> None:
        voting_key = locate_voting_key(VOTING_KEY_MARKER + KEY)
        assert voting_key.offset == 0
        assert voting_key.key == KEY

    def test_first_marker_wins(self) -> None:
        """
        GIVEN two markers each followed by a different key
        WHEN scanned
        THEN the key after the lower offset is returned.
        """
        other_key = b"\x01" * 32
        certificate = VOTING_KEY_MARKER + KEY + VOTING_KEY_MARKER + other_key
        assert locate_voting_key(certificate).key == KEY

    def test_fixture_certificate(self, certificate: bytes) -> None:
        voting_key = locate_voting_key(certificate)
        assert voting_key.offset == 5
        assert voting_key.key == bytes(range(32))

    def test_missing_marker_raises(self) -> None:
        """
        GIVEN bytes without 03 21 00
        WHEN scanned
        THEN VotingKeyNotFoundError with VOTING_KEY_NOT_FOUND is raised.
        """
        with pytest.raises(VotingKeyNotFoundError, match="Could not find voting public key") as exc_info:
            locate_voting_key(b"\x03\x21\x01" + KEY)
        assert exc_info.value.code is ErrorCode.VOTING_KEY_NOT_FOUND

    @pytest.mark.parametrize("certificate", [b"", b"\x03", b"\x03\x21"])
    def test_short_input_raises(self, certificate: bytes) -> None:
        with pytest.raises(VotingKeyNotFoundError):
            locate_voting_key(certificate)

    def test_truncated_key_raises(self) -> None:
        """
        GIVEN the marker followed by only 20 bytes
        WHEN scanned
        THEN VotingKeyNotFoundError mentions the truncation.
        """
        with pytest.raises(VotingKeyNotFoundError, match="truncated"):
            locate_voting_key(b"\x00" + VOTING_KEY_MARKER + KEY[:20])


# ─────────────────────── Stake Address ───────────────────────


class TestFindStakeAddress:
    """Verify stake address text matching inside binary data."""

    def test_finds_address_between_binary_bytes(self) -> None:
        """
        GIVEN invalid UTF-8 bytes around "stake1" + 53 valid characters
        WHEN searched
        THEN the address is returned intact.
        """
        address = "stake1" + "u" * 53
        certificate = b"\xff\xfe" + address.encode("ascii") + b"\x00\xc3"
        assert find_stake_address(certificate) == address

    def test_match_is_capped_at_59_characters(self) -> None:
        address = "stake1" + "a1" * 40
        assert find_stake_address(address.encode("ascii")) == address[:65]

    def test_too_short_address_is_not_found(self) -> None:
        certificate = ("stake1" + "x" * 52).encode("ascii")
        assert find_stake_address(certificate) == NOT_AVAILABLE

    def test_uppercase_characters_end_the_match(self) -> None:
        certificate = ("stake1" + "x" * 53 + "XYZ").encode("ascii")
        assert find_stake_address(certificate) == "stake1" + "x" * 53

    def test_first_match_wins(self) -> None:
        first = "stake1" + "a" * 53
        second = "stake1" + "b" * 53
        certificate = first.encode() + b"\x00" + second.encode()
        assert find_stake_address(certificate) == first

    def test_absent_address_yields_sentinel(self) -> None:
        assert find_stake_address(b"\x03\x21\x00" + KEY) == NOT_AVAILABLE

    def test_fixture_certificate(self, certificate: bytes) -> None:
        assert find_stake_address(certificate) == "stake1" + "q" + "x8" * 26
