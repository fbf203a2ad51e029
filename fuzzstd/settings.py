import dataclasses
import os
from dataclasses import dataclass

FUZZSTD_FFI = os.environ.get("FUZZSTD_FFI", "0") == "1"
FUZZSTD_TRACING = os.environ.get("FUZZSTD_TRACING", "0") == "1"
FUZZSTD_EVM_VERSION = os.environ.get("FUZZSTD_EVM_VERSION", "shanghai")

# large enough that fuzzed transfers never hit insufficient-funds
DEFAULT_BALANCE = 2**128

DEFAULT_CHAIN_ID = 1

# (note: 2**63 - 1 is max that py-evm allows)
DEFAULT_GAS_LIMIT = 10**10

DEFAULT_BLOCK_NUMBER = 1


@dataclass
class HostSettings:
    gas_limit: int = DEFAULT_GAS_LIMIT
    evm_version: str = FUZZSTD_EVM_VERSION
    block_number: int = DEFAULT_BLOCK_NUMBER
    chain_id: int = DEFAULT_CHAIN_ID
    ffi: bool = FUZZSTD_FFI
    tracing: bool = FUZZSTD_TRACING

    def __post_init__(self):
        # sanity check inputs
        assert isinstance(self.gas_limit, int) and 0 < self.gas_limit < 2**63
        assert isinstance(self.evm_version, str)
        assert isinstance(self.block_number, int) and self.block_number >= 0
        assert isinstance(self.chain_id, int) and self.chain_id >= 0
        assert isinstance(self.ffi, bool)
        assert isinstance(self.tracing, bool)

    @classmethod
    def from_env(cls, **overrides):
        # re-read the environment, the module constants are fixed at import
        data = {
            "ffi": os.environ.get("FUZZSTD_FFI", "0") == "1",
            "tracing": os.environ.get("FUZZSTD_TRACING", "0") == "1",
            "evm_version": os.environ.get("FUZZSTD_EVM_VERSION", "shanghai"),
        }
        data.update(overrides)
        return cls(**data)

    def as_dict(self):
        return dataclasses.asdict(self)

    @classmethod
    def from_dict(cls, data):
        return cls(**data)
