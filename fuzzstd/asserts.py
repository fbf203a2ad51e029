"""
Assertion vocabulary for fuzz harnesses.

Every check takes an optional custom message. When it is omitted, a fixed
message naming the predicate and the semantic type of the inputs is used,
e.g. "Assertion failed: uint256 inputs are not equal.". A failed check
raises `AssertionFailure`, which aborts the current execution unit; the
host (see `BaseHost.execution_unit`) is responsible for rolling back state.

The semantic type is inferred from the values unless `typ=` is given, see
`SemanticType.infer`.
"""
import operator

from fuzzstd.exceptions import AssertionFailure, TypeMismatch
from fuzzstd.types import SemanticType, resolve_type

_PREFIX = "Assertion failed: "

# predicate name -> (holds, default message template)
_COMPARISONS = {
    "eq": (operator.eq, "{typ} inputs are not equal."),
    "not_eq": (operator.ne, "{typ} inputs are equal."),
    "gt": (operator.gt, "{typ} input a is not greater than b."),
    "lt": (operator.lt, "{typ} input a is not less than b."),
    "ge": (operator.ge, "{typ} input a is not greater than or equal to b."),
    "le": (operator.le, "{typ} input a is not less than or equal to b."),
}

_ORDERINGS = ("gt", "lt", "ge", "le")


def default_message(predicate: str, typ: SemanticType) -> str:
    _, template = _COMPARISONS[predicate]
    return _PREFIX + template.format(typ=typ)


def _check(predicate, a, b, err, typ):
    typ = resolve_type((a, b), typ)
    if predicate in _ORDERINGS and not typ.is_numeric:
        raise TypeMismatch(f"ordering is not defined for {typ} inputs")

    holds, _ = _COMPARISONS[predicate]
    if holds(typ.canonicalize(a), typ.canonicalize(b)):
        return

    if err is None:
        err = default_message(predicate, typ)
    raise AssertionFailure(err, left=a, right=b)


def fail(err="Assertion failed."):
    raise AssertionFailure(err)


def assert_true(condition, err=None):
    if condition is True:
        return
    raise AssertionFailure(err if err is not None else _PREFIX + "Expected true, got false")


def assert_false(condition, err=None):
    if condition is False:
        return
    raise AssertionFailure(err if err is not None else _PREFIX + "Expected false, got true")


def assert_eq(a, b, err=None, *, typ=None):
    _check("eq", a, b, err, typ)


def assert_not_eq(a, b, err=None, *, typ=None):
    _check("not_eq", a, b, err, typ)


def assert_gt(a, b, err=None, *, typ=None):
    _check("gt", a, b, err, typ)


def assert_lt(a, b, err=None, *, typ=None):
    _check("lt", a, b, err, typ)


def assert_ge(a, b, err=None, *, typ=None):
    _check("ge", a, b, err, typ)


def assert_le(a, b, err=None, *, typ=None):
    _check("le", a, b, err, typ)


def assert_approx_eq_abs(a, b, max_delta, err=None, *, typ=None):
    """
    Fail when `a` and `b` differ by more than `max_delta`.
    """
    typ = resolve_type((a, b), typ)
    if not typ.is_numeric:
        raise TypeMismatch(f"approximate equality is not defined for {typ} inputs")
    SemanticType.UINT256.validate(max_delta)

    if abs(a - b) <= max_delta:
        return

    if err is None:
        err = f"{_PREFIX}{typ} inputs differ by more than max_delta."
    raise AssertionFailure(err, left=a, right=b)
