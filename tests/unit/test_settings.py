import pytest

from fuzzstd.settings import DEFAULT_BALANCE, DEFAULT_CHAIN_ID, HostSettings


def test_defaults():
    settings = HostSettings(ffi=False, tracing=False)
    assert settings.chain_id == DEFAULT_CHAIN_ID == 1
    assert settings.block_number == 1
    assert DEFAULT_BALANCE == 2**128


def test_from_env(monkeypatch):
    monkeypatch.setenv("FUZZSTD_FFI", "1")
    monkeypatch.setenv("FUZZSTD_EVM_VERSION", "cancun")
    monkeypatch.delenv("FUZZSTD_TRACING", raising=False)

    settings = HostSettings.from_env(chain_id=31337)
    assert settings.ffi is True
    assert settings.tracing is False
    assert settings.evm_version == "cancun"
    assert settings.chain_id == 31337


def test_dict_round_trip():
    settings = HostSettings(chain_id=5, ffi=True)
    assert HostSettings.from_dict(settings.as_dict()) == settings


@pytest.mark.parametrize(
    "kwargs", [{"gas_limit": 2**63}, {"gas_limit": 0}, {"ffi": 1}, {"chain_id": -1}]
)
def test_sanity_checks(kwargs):
    with pytest.raises(AssertionError):
        HostSettings(**kwargs)
