from contextlib import contextmanager
from typing import Generator

import hypothesis
import pytest

from fuzzstd.cheats import Cheats
from fuzzstd.exceptions import AssertionFailure
from fuzzstd.host.pyevm import PyEvmHost, default_account_keys
from fuzzstd.settings import HostSettings
from fuzzstd.utils import keccak256

############
# PATCHING #
############


# disable hypothesis deadline globally
hypothesis.settings.register_profile("ci", deadline=None)
hypothesis.settings.load_profile("ci")


def pytest_addoption(parser):
    parser.addoption("--tracing", action="store_true")
    parser.addoption(
        "--evm-version",
        choices=["paris", "shanghai", "cancun"],
        default="shanghai",
        help="set evm version",
    )


def pytest_configure(config):
    config.addinivalue_line("markers", "fuzzing: hypothesis-driven property tests")


@pytest.fixture(scope="session")
def evm_version(pytestconfig):
    return pytestconfig.getoption("evm_version")


@pytest.fixture(scope="session")
def tracing(pytestconfig):
    return pytestconfig.getoption("tracing")


@pytest.fixture
def keccak():
    return keccak256


@pytest.fixture(scope="module")
def gas_limit():
    # set absurdly high gas limit so that london basefee never adjusts
    # (note: 2**63 - 1 is max that py-evm allows)
    return 10**10


@pytest.fixture(scope="module")
def account_keys():
    return default_account_keys()


@pytest.fixture(scope="module")
def host_settings(gas_limit, evm_version, tracing):
    return HostSettings(gas_limit=gas_limit, evm_version=evm_version, tracing=tracing)


@pytest.fixture(scope="module")
def env(host_settings, account_keys) -> PyEvmHost:
    return PyEvmHost(host_settings, account_keys=account_keys)


@pytest.fixture
def cheats(env):
    return Cheats(env)


# like `pytest.raises(AssertionFailure)`, optionally checking the message
@pytest.fixture(scope="module")
def assertion_failed():
    @contextmanager
    def fn(exception=AssertionFailure, exc_text=None):
        with pytest.raises(exception) as excinfo:
            yield

        if exc_text is not None:
            assert str(excinfo.value) == exc_text, (exc_text, excinfo.value)

    return fn


@pytest.hookimpl(hookwrapper=True)
def pytest_runtest_call(item) -> Generator:
    # Isolate tests by reverting the state of the environment after each test
    env = item.funcargs.get("env")
    if env:
        env.reset_pranks()
        with env.anchor():
            yield
        env.reset_pranks()
    else:
        yield
