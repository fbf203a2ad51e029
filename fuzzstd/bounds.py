from fuzzstd.exceptions import OutOfRange
from fuzzstd.utils import INT256_MIN, in_bounds


def bound(x: int, min_: int, max_: int) -> int:
    """
    Fold an arbitrary uint256 `x` into the inclusive range [min_, max_].

    The bounds may be given in either order. The mapping is
    `min_ + x % (max_ - min_ + 1)`, which favours the low end of the range
    when the range size does not divide 2**256. Existing corpora and seeds
    rely on this exact mapping, so it must not be changed to a debiased one.

    The range size is computed on unbounded ints, so the full uint256 range
    has size 2**256 and returns `x` unchanged.
    """
    for name, val in (("x", x), ("min", min_), ("max", max_)):
        if not in_bounds(val, signed=False):
            raise OutOfRange(f"bound: {name} is not a uint256: {val!r}")

    if min_ > max_:
        min_, max_ = max_, min_

    size = max_ - min_ + 1
    return min_ + x % size


def bound_int(x: int, min_: int, max_: int) -> int:
    """
    int256 version of `bound`.

    Values are shifted into the uint256 domain by 2**255, bounded, and
    shifted back, so ordering and normalization behave as in `bound`.
    """
    for name, val in (("x", x), ("min", min_), ("max", max_)):
        if not in_bounds(val, signed=True):
            raise OutOfRange(f"bound_int: {name} is not an int256: {val!r}")

    offset = -INT256_MIN
    return bound(x + offset, min_ + offset, max_ + offset) - offset
