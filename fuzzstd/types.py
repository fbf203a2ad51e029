import enum

from eth_utils import (
    is_address,
    is_checksum_address,
    is_checksum_formatted_address,
    to_checksum_address,
)

from fuzzstd.exceptions import TypeMismatch
from fuzzstd.utils import StringEnum, in_bounds, is_integer

_BYTES_LIKE = (bytes, bytearray, memoryview)


def is_valid_address(value) -> bool:
    # mixed-case hex must carry a valid EIP-55 checksum
    if not isinstance(value, str) or not is_address(value):
        return False
    return not (is_checksum_formatted_address(value) and not is_checksum_address(value))


class SemanticType(StringEnum):
    """
    The value types understood by the assertion and conversion layers.

    The enum value is the canonical type name used in messages.
    """

    UINT256 = enum.auto()
    INT256 = enum.auto()
    ADDRESS = enum.auto()
    BYTES32 = enum.auto()
    BYTES = enum.auto()
    STRING = enum.auto()
    BOOL = enum.auto()

    @property
    def is_numeric(self) -> bool:
        return self in (SemanticType.UINT256, SemanticType.INT256)

    def validate(self, value) -> None:
        if not self.is_valid(value):
            raise TypeMismatch(f"{value!r} is not a valid {self}")

    def is_valid(self, value) -> bool:
        if self is SemanticType.UINT256:
            return in_bounds(value, signed=False)
        if self is SemanticType.INT256:
            return in_bounds(value, signed=True)
        if self is SemanticType.ADDRESS:
            if isinstance(value, _BYTES_LIKE):
                return len(value) == 20
            return is_valid_address(value)
        if self is SemanticType.BYTES32:
            return isinstance(value, _BYTES_LIKE) and len(value) == 32
        if self is SemanticType.BYTES:
            return isinstance(value, _BYTES_LIKE)
        if self is SemanticType.STRING:
            return isinstance(value, str)
        if self is SemanticType.BOOL:
            return isinstance(value, bool)
        raise NotImplementedError(self)  # pragma: nocover

    def canonicalize(self, value):
        """Normalize a valid value so that equal contents compare equal."""
        if self is SemanticType.ADDRESS:
            return to_checksum_address(value)
        if self in (SemanticType.BYTES32, SemanticType.BYTES):
            return bytes(value)
        return value

    @classmethod
    def infer(cls, *values) -> "SemanticType":
        """
        Pick the semantic type shared by all of `values`.

        ints are uint256 unless one of them is negative; bytes are bytes32
        only if every value is exactly 32 bytes; strs are addresses only if
        every value is a valid hex address.
        """
        assert len(values) > 0

        if all(isinstance(v, bool) for v in values):
            return cls.BOOL

        if all(is_integer(v) for v in values):
            for typ in (cls.UINT256, cls.INT256):
                if all(typ.is_valid(v) for v in values):
                    return typ
            raise TypeMismatch(f"integers out of int256/uint256 range: {values!r}")

        if all(isinstance(v, _BYTES_LIKE) for v in values):
            if cls.BYTES32.is_valid_all(values):
                return cls.BYTES32
            return cls.BYTES

        if all(isinstance(v, str) for v in values):
            if cls.ADDRESS.is_valid_all(values):
                return cls.ADDRESS
            return cls.STRING

        types = ", ".join(type(v).__name__ for v in values)
        raise TypeMismatch(f"cannot compare values of mixed types: ({types})")

    def is_valid_all(self, values) -> bool:
        return all(self.is_valid(v) for v in values)


def resolve_type(values, typ=None) -> SemanticType:
    """
    Return `typ` (as a SemanticType) after validating every value against it,
    or the inferred type when `typ` is None.
    """
    if typ is None:
        return SemanticType.infer(*values)

    if isinstance(typ, str):
        if not SemanticType.is_valid_value(typ):
            raise TypeMismatch(f"unknown type name: {typ}")
        typ = SemanticType(typ)

    for v in values:
        typ.validate(v)
    return typ
