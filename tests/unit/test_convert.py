import pytest

from fuzzstd.convert import (
    parse,
    parse_address,
    parse_bool,
    parse_bytes,
    parse_bytes32,
    parse_int,
    parse_uint,
    to_string,
)
from fuzzstd.exceptions import ParseError
from fuzzstd.identity import derive_identity
from fuzzstd.types import SemanticType
from fuzzstd.utils import INT256_MIN, UINT256_MAX

ALICE = derive_identity("alice")


@pytest.mark.parametrize(
    "value,typ,expected",
    [
        (0, None, "0"),
        (UINT256_MAX, None, str(UINT256_MAX)),
        (-42, None, "-42"),
        (True, None, "true"),
        (False, None, "false"),
        (b"\x01\xab", None, "0x01ab"),
        (b"", None, "0x"),
        (b"\x00" * 32, None, "0x" + "00" * 32),
        ("hello", None, "hello"),
        (ALICE.lower(), "address", ALICE),
        (bytes.fromhex(ALICE[2:]), "address", ALICE),
        (5, SemanticType.INT256, "5"),
    ],
)
def test_to_string(value, typ, expected):
    assert to_string(value, typ) == expected


@pytest.mark.parametrize(
    "text,typ,expected",
    [
        ("0", "uint256", 0),
        ("42", "uint256", 42),
        ("0x2a", "uint256", 42),
        ("0X2A", "uint256", 42),
        (str(UINT256_MAX), "uint256", UINT256_MAX),
        ("-42", "int256", -42),
        ("-0x2a", "int256", -42),
        (str(INT256_MIN), "int256", INT256_MIN),
        ("true", "bool", True),
        ("false", "bool", False),
        ("0x01ab", "bytes", b"\x01\xab"),
        ("01ab", "bytes", b"\x01\xab"),
        ("0x", "bytes", b""),
        ("", "bytes", b""),
        ("0x01", "bytes32", b"\x01" + b"\x00" * 31),
        ("hello world", "string", "hello world"),
    ],
)
def test_parse(text, typ, expected):
    assert parse(text, typ) == expected


def test_parse_address():
    assert parse_address(ALICE.lower()) == ALICE
    assert parse_address(ALICE) == ALICE


@pytest.mark.parametrize(
    "text,typ",
    [
        ("", "uint256"),
        ("-1", "uint256"),
        ("1_000", "uint256"),
        (" 1", "uint256"),
        ("1.5", "uint256"),
        ("0x", "uint256"),
        ("\u0661\u0662", "uint256"),
        ("0x_1", "uint256"),
        ("0x1 ", "uint256"),
        ("0x0x1", "uint256"),
        ("-\u0661", "int256"),
        (str(UINT256_MAX + 1), "uint256"),
        (str(INT256_MIN - 1), "int256"),
        ("True", "bool"),
        ("1", "bool"),
        ("0xabc", "bytes"),
        ("0xzz", "bytes"),
        ("0x" + "00" * 33, "bytes32"),
        ("0x1234", "address"),
        ("not an address", "address"),
    ],
)
def test_parse_errors(text, typ):
    with pytest.raises(ParseError):
        parse(text, typ)


def test_parse_rejects_bad_checksum():
    # flip the case of the first letter in the address
    idx = next(i for i, c in enumerate(ALICE) if i > 1 and c.isalpha())
    bad = ALICE[:idx] + ALICE[idx].swapcase() + ALICE[idx + 1 :]
    with pytest.raises(ParseError):
        parse_address(bad)


def test_parse_requires_type():
    with pytest.raises(ParseError):
        parse("1", None)


@pytest.mark.parametrize(
    "value,typ",
    [
        (12345, SemanticType.UINT256),
        (-12345, SemanticType.INT256),
        (True, SemanticType.BOOL),
        (b"\xde\xad", SemanticType.BYTES),
        (b"\x11" * 32, SemanticType.BYTES32),
        (ALICE, SemanticType.ADDRESS),
        ("text", SemanticType.STRING),
    ],
)
def test_parse_inverts_to_string(value, typ):
    assert parse(to_string(value, typ), typ) == value


def test_per_type_parsers():
    assert parse_uint("7") == 7
    assert parse_int("-7") == -7
    assert parse_bool("true") is True
    assert parse_bytes("0xff") == b"\xff"
    assert parse_bytes32("0xff") == b"\xff" + b"\x00" * 31
