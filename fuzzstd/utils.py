import enum
from typing import List

from Crypto.Hash import keccak  # type: ignore

from fuzzstd.exceptions import FuzzStdPanic


class StringEnum(enum.Enum):
    # Must be first, or else won't work, specifies what .value is
    @staticmethod
    def _generate_next_value_(name, start, count, last_values):
        return name.lower()

    # Override ValueError with our own internal exception
    @classmethod
    def _missing_(cls, value):
        raise FuzzStdPanic(f"{value} is not a valid {cls.__name__}")

    @classmethod
    def is_valid_value(cls, value: str) -> bool:
        return value in set(o.value for o in cls)

    @classmethod
    def options(cls) -> List["StringEnum"]:
        return list(cls)

    @classmethod
    def values(cls) -> List[str]:
        return [v.value for v in cls.options()]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, self.__class__):
            raise FuzzStdPanic(f"bad comparison: ({type(other)}, {type(self)})")
        return self is other

    def __str__(self) -> str:
        return self.value

    def __hash__(self) -> int:
        # let `dataclass` know that this class is not mutable
        return super().__hash__()


def keccak256(x: bytes) -> bytes:
    return keccak.new(digest_bits=256, data=x).digest()


UINT256_MAX = 2**256 - 1
INT256_MIN = -(2**255)
INT256_MAX = 2**255 - 1

# order of the secp256k1 group; valid signing scalars are in [1, N)
SECP256K1_N = 0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141


def int_bounds(signed, bits):
    """
    calculate the bounds on an integer type
    ex. int_bounds(True, 8) -> (-128, 127)
        int_bounds(False, 8) -> (0, 255)
    """
    if signed:
        return -(2 ** (bits - 1)), (2 ** (bits - 1)) - 1
    return 0, (2**bits) - 1


def is_integer(value) -> bool:
    # bool is a subclass of int, but True is not a valid uint256
    return isinstance(value, int) and not isinstance(value, bool)


def in_bounds(value, signed=False, bits=256) -> bool:
    lo, hi = int_bounds(signed, bits)
    return is_integer(value) and lo <= value <= hi


def to_bytes(value) -> bytes:
    """Coerce a label-like value (str or bytes-like) to bytes."""
    if isinstance(value, str):
        return value.encode("utf-8")
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    raise TypeError(f"expected str or bytes, got {type(value).__name__}")
