"""Tests for hosts_updater.core.hosts_grammar."""
from __future__ import annotations

import pytest

from hosts_updater.core.domain.errors import (
    EmptyDocumentError,
    IllegalControlCharacterError,
    InvalidAddressError,
    InvalidNameError,
    LineValidationError,
    MissingFieldError,
    ReservedMarkerError,
)
from hosts_updater.core.domain.models import Record, SourceDocument
from hosts_updater.core.hosts_grammar import (
    is_comment_or_blank,
    is_valid_address,
    is_valid_name,
    iter_records,
    validate_document,
    validate_line,
)
from hosts_updater.core.managed_section import END_MARKER, START_MARKER

ORIGIN = "https://example.com"


def _doc(text: str) -> SourceDocument:
    return SourceDocument(origin=ORIGIN, raw_text=text)


@pytest.mark.parametrize("address", ["127.0.0.1", "192.168.1.100", "0.0.0.0", "255.255.255.255"])
def test_valid_ipv4(address: str) -> None:
    assert is_valid_address(address)


@pytest.mark.parametrize(
    "address",
    ["::1", "2001:0db8:85a3:0000:0000:8a2e:0370:7334", "fe80::1", "[::1]", "[2001:db8::1]"],
)
def test_valid_ipv6(address: str) -> None:
    assert is_valid_address(address)


@pytest.mark.parametrize(
    "address",
    [
        "invalid",
        "256.1.1.1",
        "1.2.3.999",
        "abc.def.ghi.jkl",
        "1.2.3",
        "1.2.3.4.5",
        "01.2.3.4",
        "[127.0.0.1]",
        "[::1",
        "::1]",
        "fe80::1%eth0",
        "",
    ],
)
def test_invalid_address(address: str) -> None:
    assert not is_valid_address(address)


@pytest.mark.parametrize(
    "name",
    ["example.com", "sub.example.com", "localhost", "my-server-123.com", "a1b2c3.com", "A.B-c.D"],
)
def test_valid_name(name: str) -> None:
    assert is_valid_name(name)


@pytest.mark.parametrize(
    "name",
    ["", "-invalid.com", "invalid-.com", "invalid..com", "invalid_domain.com", "exam ple.com", ".com", "com."],
)
def test_invalid_name(name: str) -> None:
    assert not is_valid_name(name)


def test_label_length_limit() -> None:
    assert is_valid_name("a" * 63 + ".com")
    assert not is_valid_name("a" * 64 + ".com")


def test_total_length_limit() -> None:
    name = ".".join(["a" * 63, "b" * 63, "c" * 63, "d" * 61])
    assert len(name) == 253
    assert is_valid_name(name)
    assert not is_valid_name(name + "d")


def test_validate_line_returns_record() -> None:
    record = validate_line("  127.0.0.1\tlocalhost   www.localhost  ")
    assert record == Record(address="127.0.0.1", names=("localhost", "www.localhost"))


def test_validate_line_missing_field() -> None:
    with pytest.raises(MissingFieldError):
        validate_line("127.0.0.1")


def test_validate_line_invalid_address_carries_token() -> None:
    with pytest.raises(InvalidAddressError) as excinfo:
        validate_line("not-an-ip example.com")
    assert excinfo.value.token == "not-an-ip"


def test_validate_line_invalid_name_carries_token_and_label() -> None:
    with pytest.raises(InvalidNameError) as excinfo:
        validate_line("127.0.0.1 good.com bad_label.example.com")
    assert excinfo.value.token == "bad_label.example.com"
    assert excinfo.value.label == "bad_label"


def test_is_comment_or_blank() -> None:
    assert is_comment_or_blank("")
    assert is_comment_or_blank("   \t")
    assert is_comment_or_blank("  # comment")
    assert not is_comment_or_blank("127.0.0.1 localhost # trailing")


def test_validate_document_valid() -> None:
    validate_document(_doc("\n# comment\n127.0.0.1 localhost\n192.168.1.100 example.com\n"))


def test_validate_document_two_lines_without_trailing_newline() -> None:
    validate_document(_doc("127.0.0.1 localhost\n192.168.1.100 example.com"))


def test_validate_document_crlf() -> None:
    validate_document(_doc("127.0.0.1 localhost\r\n::1 localhost\r\n"))


@pytest.mark.parametrize("text", ["", "   ", "\n\n\t\n"])
def test_validate_document_empty(text: str) -> None:
    with pytest.raises(EmptyDocumentError):
        validate_document(_doc(text))


def test_validate_document_control_character_offset() -> None:
    with pytest.raises(IllegalControlCharacterError) as excinfo:
        validate_document(_doc("127.0.0.1 localhost\x00"))
    assert excinfo.value.offset == 19


def test_validate_document_control_character_in_comment() -> None:
    with pytest.raises(IllegalControlCharacterError):
        validate_document(_doc("# bell \x07\n127.0.0.1 localhost"))


def test_validate_document_invalid_address() -> None:
    with pytest.raises(LineValidationError) as excinfo:
        validate_document(_doc("not-an-ip example.com"))
    err = excinfo.value
    assert err.line_no == 1
    assert err.origin == ORIGIN
    assert err.text == "not-an-ip example.com"
    assert isinstance(err.reason, InvalidAddressError)
    assert err.reason.token == "not-an-ip"
    assert err.__cause__ is err.reason


def test_validate_document_reports_first_failing_line() -> None:
    text = "# header\n127.0.0.1 localhost\n\n127.0.0.1\ninvalid_line_without_ip\n"
    with pytest.raises(LineValidationError) as excinfo:
        validate_document(_doc(text))
    assert excinfo.value.line_no == 4
    assert isinstance(excinfo.value.reason, MissingFieldError)


def test_validate_document_invalid_domain() -> None:
    with pytest.raises(LineValidationError) as excinfo:
        validate_document(_doc("127.0.0.1 -invalid.com"))
    assert isinstance(excinfo.value.reason, InvalidNameError)


def test_iter_records() -> None:
    doc = _doc("# c\n127.0.0.1 a.test b.test\n\n::1 c.test\n")
    assert list(iter_records(doc)) == [
        Record(address="127.0.0.1", names=("a.test", "b.test")),
        Record(address="::1", names=("c.test",)),
    ]


@pytest.mark.parametrize("marker", [START_MARKER, END_MARKER])
def test_validate_document_rejects_marker_lines(marker: str) -> None:
    with pytest.raises(LineValidationError) as excinfo:
        validate_document(_doc(f"1.1.1.1 a.test\n  {marker}  \n2.2.2.2 b.test"))
    err = excinfo.value
    assert err.line_no == 2
    assert err.text == marker
    assert isinstance(err.reason, ReservedMarkerError)
    assert err.reason.marker == marker


def test_validate_document_allows_marker_text_inside_longer_comment() -> None:
    validate_document(_doc(f"# see {END_MARKER} below\n1.1.1.1 a.test"))
