from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

from fuzzstd.asserts import (
    assert_approx_eq_abs,
    assert_eq,
    assert_false,
    assert_ge,
    assert_gt,
    assert_le,
    assert_lt,
    assert_not_eq,
    assert_true,
    fail,
)
from fuzzstd.bounds import bound, bound_int
from fuzzstd.cheats import Cheats
from fuzzstd.identity import derive_identity, derive_identity_and_secret
from fuzzstd.settings import DEFAULT_BALANCE, HostSettings
from fuzzstd.types import SemanticType

__version__: str
try:
    __version__ = _version(__name__)
except PackageNotFoundError:
    from fuzzstd.version import version

    __version__ = version
