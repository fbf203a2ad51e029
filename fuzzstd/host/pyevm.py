import copy
import logging
from itertools import count
from typing import Optional

from cached_property import cached_property
from eth.abc import ChainAPI, ComputationAPI, VirtualMachineAPI
from eth.chains.mainnet import MainnetChain
from eth.constants import GENESIS_DIFFICULTY
from eth.db.atomic import AtomicDB
from eth.exceptions import Revert, VMError
from eth.tools.builder import chain as chain_builder
from eth.vm.base import StateAPI
from eth.vm.execution_context import ExecutionContext
from eth.vm.message import Message
from eth_abi import decode as abi_decode
from eth_keys.datatypes import PrivateKey
from eth_typing import Address
from eth_utils import setup_DEBUG2_logging, to_canonical_address, to_checksum_address

from fuzzstd.exceptions import EvmError, ExecutionReverted, NonceNotIncreasing, OutOfRange
from fuzzstd.host.base import BaseHost
from fuzzstd.identity import secret_from_label
from fuzzstd.settings import HostSettings
from fuzzstd.utils import in_bounds, keccak256

log = logging.getLogger(__name__)

_ERROR_SELECTOR = keccak256(b"Error(string)")[:4]


def default_account_keys(n: int = 10) -> list[PrivateKey]:
    secrets = [secret_from_label(f"fuzzstd account {i}") for i in range(n)]
    return [PrivateKey(s.to_bytes(32, "big")) for s in secrets]


class PyEvmHost(BaseHost):
    """Host fuzz-state capability backed by the Py-EVM library."""

    def __init__(
        self,
        settings: Optional[HostSettings] = None,
        account_keys: Optional[list[PrivateKey]] = None,
    ) -> None:
        super().__init__(settings)

        self._keys = account_keys if account_keys is not None else default_account_keys()
        self.default_sender = self._keys[0].public_key.to_checksum_address()

        if self.settings.tracing:
            logger = logging.getLogger("eth.vm.computation.BaseComputation")
            setup_DEBUG2_logging()
            logger.setLevel("DEBUG2")

        spec = getattr(chain_builder, self.settings.evm_version + "_at")(
            self.settings.block_number
        )
        self._chain: ChainAPI = chain_builder.build(MainnetChain, spec).from_genesis(
            base_db=AtomicDB(),
            genesis_params={"difficulty": GENESIS_DIFFICULTY, "gas_limit": self.settings.gas_limit},
        )

        if self.settings.chain_id != self.chain_id:
            self.chain_id = self.settings.chain_id

        self._snapshot_ids = count()
        self._snapshots: dict[int, tuple] = {}
        self._last_computation: Optional[ComputationAPI] = None

    @cached_property
    def _state(self) -> StateAPI:
        return self._vm.state

    @cached_property
    def _vm(self) -> VirtualMachineAPI:
        return self._chain.get_vm()

    @property
    def _context(self) -> ExecutionContext:
        context = self._state.execution_context
        assert isinstance(context, ExecutionContext)  # help mypy
        return context

    @property
    def accounts(self) -> list[str]:
        return [key.public_key.to_checksum_address() for key in self._keys]

    # snapshots

    def snapshot(self) -> int:
        snapshot_id = next(self._snapshot_ids)
        ctx = copy.copy(self._state.execution_context)
        self._snapshots[snapshot_id] = (self._state.snapshot(), ctx)
        log.debug("snapshot: %d", snapshot_id)
        return snapshot_id

    def revert_to(self, snapshot_id: int) -> bool:
        if snapshot_id not in self._snapshots:
            return False

        snapshot, ctx = self._snapshots[snapshot_id]
        self._state.revert(snapshot)
        self._state.execution_context = ctx
        # the journal drops every checkpoint taken after this one
        self._forget_snapshots_from(snapshot_id)
        log.debug("revert_to: %d", snapshot_id)
        return True

    def discard_snapshot(self, snapshot_id: int) -> None:
        if snapshot_id not in self._snapshots:
            return
        snapshot, _ = self._snapshots[snapshot_id]
        self._state.commit(snapshot)
        self._forget_snapshots_from(snapshot_id)

    def _forget_snapshots_from(self, snapshot_id: int) -> None:
        for k in [k for k in self._snapshots if k >= snapshot_id]:
            del self._snapshots[k]

    # block context

    @property
    def timestamp(self) -> int:
        return self._context.timestamp

    @timestamp.setter
    def timestamp(self, value: int):
        _check_uint256("timestamp", value)
        log.debug("timestamp: %d", value)
        self._context._timestamp = value

    @property
    def block_number(self) -> int:
        return self._context.block_number

    @block_number.setter
    def block_number(self, value: int):
        _check_uint256("block_number", value)
        log.debug("block_number: %d", value)
        self._context._block_number = value

    @property
    def base_fee(self) -> int:
        return self._context.base_fee_per_gas

    @base_fee.setter
    def base_fee(self, value: int):
        _check_uint256("base_fee", value)
        log.debug("base_fee: %d", value)
        self._context._base_fee_per_gas = value

    @property
    def prevrandao(self) -> bytes:
        return self._context.mix_hash

    @prevrandao.setter
    def prevrandao(self, value):
        if isinstance(value, int):
            _check_uint256("prevrandao", value)
            value = value.to_bytes(32, "big")
        log.debug("prevrandao: 0x%s", value.hex())
        self._context._mix_hash = value

    @property
    def chain_id(self) -> int:
        return self._context.chain_id

    @chain_id.setter
    def chain_id(self, value: int):
        _check_uint256("chain_id", value)
        log.debug("chain_id: %d", value)
        self._context._chain_id = value

    @property
    def coinbase(self) -> str:
        return to_checksum_address(self._context.coinbase)

    @coinbase.setter
    def coinbase(self, value):
        log.debug("coinbase: %s", value)
        self._context._coinbase = _addr(value)

    # accounts

    def get_balance(self, address) -> int:
        return self._state.get_balance(_addr(address))

    def set_balance(self, address, value: int) -> None:
        log.debug("set_balance: %s %d", address, value)
        self._state.set_balance(_addr(address), value)

    def get_code(self, address) -> bytes:
        return self._state.get_code(_addr(address))

    def set_code(self, address, code: bytes) -> None:
        log.debug("set_code: %s (%d bytes)", address, len(code))
        self._state.set_code(_addr(address), bytes(code))

    def load(self, address, slot: int) -> int:
        return self._state.get_storage(_addr(address), slot)

    def store(self, address, slot: int, value: int) -> None:
        log.debug("store: %s[%d] = %d", address, slot, value)
        self._state.set_storage(_addr(address), slot, value)

    def get_nonce(self, address) -> int:
        return self._state.get_nonce(_addr(address))

    def set_nonce(self, address, value: int) -> None:
        current = self.get_nonce(address)
        if value <= current:
            raise NonceNotIncreasing(
                f"new nonce ({value}) must be strictly greater than current nonce ({current})"
            )
        log.debug("set_nonce: %s %d", address, value)
        self._state.set_nonce(_addr(address), value)

    # execution

    @property
    def last_computation(self) -> Optional[ComputationAPI]:
        return self._last_computation

    def message_call(
        self,
        to,
        sender=None,
        data: bytes | str = b"",
        value: int = 0,
        gas: int | None = None,
        gas_price: int = 0,
        is_modifying: bool = True,
    ) -> bytes:
        if isinstance(data, str):
            data = bytes.fromhex(data.removeprefix("0x"))
        sender = _addr(self.resolve_sender(sender))

        with self.call_frame():
            try:
                computation = self._state.computation_class.apply_message(
                    state=self._state,
                    message=Message(
                        to=_addr(to),
                        sender=sender,
                        data=data,
                        code=self.get_code(to),
                        value=value,
                        gas=self.settings.gas_limit if gas is None else gas,
                        is_static=not is_modifying,
                    ),
                    transaction_context=self._make_tx_context(sender, gas_price),
                )
            except VMError as e:
                # py-evm raises when user is out-of-funds instead of returning a failed computation
                raise EvmError(str(e)) from e

        self._check_computation(computation)
        return computation.output

    def _make_tx_context(self, sender, gas_price):
        context_class = self._state.transaction_context_class
        return context_class(origin=sender, gas_price=gas_price)

    def _check_computation(self, computation):
        self._last_computation = computation
        if computation.is_error:
            if isinstance(computation.error, Revert):
                (output,) = computation.error.args
                _raise_revert(output, computation.error)

            raise EvmError(str(computation.error)) from computation.error


def _raise_revert(output_bytes: bytes, error: Exception):
    """
    Tries to parse the EIP-838 revert reason from the output bytes.
    """
    if output_bytes[:4] == _ERROR_SELECTOR:
        (msg,) = abi_decode(["string"], output_bytes[4:])
        raise ExecutionReverted(msg) from error

    raise ExecutionReverted(f"0x{output_bytes.hex()}") from error


def _addr(address) -> Address:
    """Convert an address (hex str or 20 bytes) to an Address object."""
    return Address(to_canonical_address(address))


def _check_uint256(name: str, value) -> None:
    if not in_bounds(value, signed=False):
        raise OutOfRange(f"{name} must be a uint256, got {value!r}")
