import string

from eth_utils import is_hex, remove_0x_prefix, to_checksum_address

from fuzzstd.exceptions import ParseError
from fuzzstd.types import SemanticType, is_valid_address, resolve_type
from fuzzstd.utils import in_bounds


def to_string(value, typ=None) -> str:
    typ = resolve_type((value,), typ)

    if typ.is_numeric:
        return str(value)
    if typ is SemanticType.ADDRESS:
        return to_checksum_address(value)
    if typ in (SemanticType.BYTES, SemanticType.BYTES32):
        return "0x" + bytes(value).hex()
    if typ is SemanticType.BOOL:
        return "true" if value else "false"
    return value


def _parse_int(text: str, signed: bool) -> int:
    negative = signed and text.startswith("-")
    body = text[1:] if negative else text
    # plain `int()` would also accept underscores, whitespace and non-ascii digits
    if body[:2].lower() == "0x":
        digits, base = body[2:], 16
        ok = digits != "" and all(c in string.hexdigits for c in digits)
    else:
        digits, base = body, 10
        ok = digits.isascii() and digits.isdigit()
    if not ok:
        raise ParseError(f"not an integer: {text!r}")

    ret = int(digits, base)
    if negative:
        ret = -ret
    if not in_bounds(ret, signed=signed):
        typ = "int256" if signed else "uint256"
        raise ParseError(f"{text!r} is out of range for {typ}")
    return ret


def _parse_hex(text: str) -> bytes:
    if not is_hex(text) and text not in ("", "0x"):
        raise ParseError(f"not a hex string: {text!r}")
    body = remove_0x_prefix(text)
    if len(body) % 2 != 0:
        raise ParseError(f"odd-length hex string: {text!r}")
    return bytes.fromhex(body)


def parse(text: str, typ):
    """
    Parse `text` into a value of semantic type `typ`.

    Inverse of `to_string`; raises `ParseError` on malformed input.
    """
    if not isinstance(text, str):
        raise ParseError(f"expected str, got {type(text).__name__}")
    if typ is None:
        raise ParseError("parse requires an explicit type")
    typ = resolve_type((), typ)

    if typ is SemanticType.UINT256:
        return _parse_int(text, signed=False)
    if typ is SemanticType.INT256:
        return _parse_int(text, signed=True)
    if typ is SemanticType.ADDRESS:
        if not is_valid_address(text):
            raise ParseError(f"not a valid address: {text!r}")
        return to_checksum_address(text)
    if typ is SemanticType.BYTES:
        return _parse_hex(text)
    if typ is SemanticType.BYTES32:
        ret = _parse_hex(text)
        if len(ret) > 32:
            raise ParseError(f"too long for bytes32 ({len(ret)} bytes): {text!r}")
        return ret.ljust(32, b"\x00")
    if typ is SemanticType.BOOL:
        if text == "true":
            return True
        if text == "false":
            return False
        raise ParseError(f"not a bool: {text!r}")
    return text


def parse_address(text: str) -> str:
    return parse(text, SemanticType.ADDRESS)


def parse_bytes(text: str) -> bytes:
    return parse(text, SemanticType.BYTES)


def parse_bytes32(text: str) -> bytes:
    return parse(text, SemanticType.BYTES32)


def parse_bool(text: str) -> bool:
    return parse(text, SemanticType.BOOL)


def parse_uint(text: str) -> int:
    return parse(text, SemanticType.UINT256)


def parse_int(text: str) -> int:
    return parse(text, SemanticType.INT256)
