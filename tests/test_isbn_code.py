import pytest

from isbn_code import (
    EMPTY_CODE,
    ISBNCode,
    current_check_digit,
    legacy_check_digit,
    parse,
)
from isbn_errors import ErrorKind, ISBNError


def legacy(group, registrant, publication, checksum):
    return ISBNCode("978", group, registrant, publication, checksum, True)


def current(group, registrant, publication, checksum, prefix="978"):
    return ISBNCode(prefix, group, registrant, publication, checksum, False)


# parse

@pytest.mark.parametrize("raw, expected", [
    ("4-00-310101-4", legacy("4", "00", "310101", "4")),
    ("ISBN4-00-310101-4", legacy("4", "00", "310101", "4")),
    ("978-4-00-310101-8", current("4", "00", "310101", "8")),
    ("ISBN978-4-00-310101-8", current("4", "00", "310101", "8")),
    ("979-10-90636-07-1", current("10", "90636", "07", "1", prefix="979")),
    ("4-10-109215-X", legacy("4", "10", "109215", "X")),
])
def test_parse(raw, expected):
    assert parse(raw) == expected


@pytest.mark.parametrize("raw, kind", [
    ("", ErrorKind.EMPTY),
    (None, ErrorKind.EMPTY),
    ("978-4-00-3101011-8", ErrorKind.INVALID_LENGTH),
    ("ISBN", ErrorKind.INVALID_LENGTH),
    ("4-00-31010-4", ErrorKind.INVALID_LENGTH),
    ("971-4-00-310101-8", ErrorKind.INVALID_PREFIX),
    # longitud correcta pero sin los segmentos necesarios
    ("9784003101018", ErrorKind.INVALID_LENGTH),
    ("4003101014", ErrorKind.INVALID_LENGTH),
    ("978-4-00-3101018", ErrorKind.INVALID_LENGTH),
    ("4-00-3-10101-4", ErrorKind.INVALID_LENGTH),
])
def test_parse_errors(raw, kind):
    with pytest.raises(ISBNError) as exc_info:
        parse(raw)
    assert exc_info.value.kind is kind
    assert exc_info.value.code == EMPTY_CODE
    assert str(exc_info.value) == kind.value


def test_parse_marker_is_case_sensitive():
    with pytest.raises(ISBNError) as exc_info:
        parse("isbn978-4-00-310101-8")
    assert exc_info.value.kind is ErrorKind.INVALID_LENGTH


def test_parse_does_not_check_content():
    code = parse("978-4-0A-310101-8")
    assert code.registrant == "0A"
    assert not code.is_valid()


def test_isbn_error_is_value_error():
    with pytest.raises(ValueError):
        parse("")


# is_valid

@pytest.mark.parametrize("label, code, expected", [
    ("legacy-valid", legacy("4", "00", "310101", "4"), True),
    ("legacy-valid-X", legacy("4", "10", "109215", "X"), True),
    ("legacy-invalid", legacy("4", "00", "310101", "3"), False),
    ("legacy-non-digit", legacy("4", "0O", "310101", "4"), False),
    ("valid", current("4", "00", "310101", "8"), True),
    ("invalid", current("4", "00", "310101", "7"), False),
    ("current-X", current("4", "00", "310101", "X"), False),
    ("current-short-body", current("4", "00", "31010", "8"), False),
    ("empty", EMPTY_CODE, False),
])
def test_is_valid(label, code, expected):
    assert code.is_valid() is expected, label


def test_zero_remainder_never_validates():
    # 0-00-000000: suma 0 → dígito 11 (ISBN-10) y 10 (ISBN-13)
    assert legacy_check_digit("000000000") == 11
    assert current_check_digit("000000000000") == 10
    assert not legacy("0", "00", "000000", "0").is_valid()
    assert not current("0", "00", "000000", "0", prefix="000").is_valid()


def test_legacy_body_too_long_is_invalid():
    code = ISBNCode("978", "0000", "0000", "0001", "1", True)
    assert legacy_check_digit("000000000001") is None
    assert not code.is_valid()


def test_check_digits():
    assert legacy_check_digit("400310101") == 4
    assert legacy_check_digit("410109215") == 10
    assert legacy_check_digit("4001x0101") is None
    assert current_check_digit("978400310101") == 8
    assert current_check_digit("97840031010") is None
    assert current_check_digit("97840031010a") is None


# update

@pytest.mark.parametrize("code, new_checksum", [
    (legacy("4", "00", "310101", "4"), "8"),
    (legacy("4", "10", "109205", "X"), "8"),
    (current("4", "00", "310101", "8"), "8"),
])
def test_update(code, new_checksum):
    out = code.update()
    assert not out.is_legacy
    assert out.checksum == new_checksum
    assert out.prefix == "978"
    assert out[1:4] == code[1:4]


def test_update_returns_new_value():
    code = legacy("4", "00", "310101", "4")
    out = code.update()
    assert out is not code
    assert code.is_legacy
    assert code.checksum == "4"
    assert out.is_valid()


def test_update_is_noop_on_current():
    code = current("4", "00", "310101", "7")
    assert code.update() is code


def test_update_non_digit_fails():
    with pytest.raises(ISBNError) as exc_info:
        legacy("4", "0O", "310101", "4").update()
    assert exc_info.value.kind is ErrorKind.INVALID
    assert exc_info.value.code == EMPTY_CODE


# format

@pytest.mark.parametrize("label, code, expected", [
    ("legacy", legacy("4", "10", "109205", "2"), "ISBN4-10-109205-2"),
    ("current", current("4", "00", "310101", "8"), "ISBN978-4-00-310101-8"),
    ("empty", EMPTY_CODE, "ISBN----"),
])
def test_format(label, code, expected):
    assert code.format() == expected, label
    assert str(code) == expected


@pytest.mark.parametrize("raw", [
    "ISBN4-00-310101-4",
    "ISBN978-4-00-310101-8",
    "ISBN979-10-90636-07-1",
    "ISBN4-10-109215-X",
])
def test_format_parse_round_trip(raw):
    assert parse(raw).format() == raw


def test_parse_validate_update_format():
    code = parse("ISBN4-10-109205-2")
    assert code.is_valid()
    assert code.update().format() == "ISBN978-4-10-109205-8"


def test_code_is_immutable():
    code = parse("978-4-00-310101-8")
    with pytest.raises(AttributeError):
        code.checksum = "7"
