import logging
import subprocess
from contextlib import contextmanager
from typing import Optional

from eth_utils import is_0x_prefixed, is_hex, to_checksum_address

from fuzzstd import convert, identity
from fuzzstd.exceptions import FFIDisabled, FFIFailed
from fuzzstd.settings import HostSettings

log = logging.getLogger(__name__)


class BaseHost:
    """
    Base class for host fuzz-state capabilities.

    A host owns the chain state that cheats manipulate. Subclasses implement
    the state accessors; this class provides the impersonation bookkeeping,
    the crypto and text-conversion defaults, and foreign process invocation.

    Sender resolution for a call at depth `d` (first match wins):
      1. a pending one-shot `prank` (consumed by the call)
      2. a `prank_here` caller registered at depth `d`
      3. the scoped `start_prank` caller
      4. the explicitly requested sender, or `default_sender`
    """

    def __init__(self, settings: Optional[HostSettings] = None) -> None:
        self.settings = settings or HostSettings()
        self.default_sender: Optional[str] = None

        self._next_caller: Optional[str] = None
        self._scoped_caller: Optional[str] = None
        self._here_callers: dict[int, str] = {}
        self._call_depth = 0

    # impersonation

    def prank(self, who) -> None:
        self._next_caller = to_checksum_address(who)

    def start_prank(self, who) -> None:
        self._scoped_caller = to_checksum_address(who)

    def stop_prank(self) -> None:
        self._scoped_caller = None

    def prank_here(self, who) -> None:
        """
        Impersonate `who` for every call made from the current call depth.

        Host-driven calls such as `PyEvmHost.message_call` open a frame one
        level below the caller, while calls nested inside the EVM never pass
        back through the host. In practice a caller registered from test code
        therefore applies to every top-level call until `reset_pranks()`.
        """
        self._here_callers[self._call_depth] = to_checksum_address(who)

    def reset_pranks(self) -> None:
        self._next_caller = None
        self._scoped_caller = None
        self._here_callers.clear()

    def _prank_state(self):
        return self._next_caller, self._scoped_caller, dict(self._here_callers)

    def _restore_prank_state(self, state) -> None:
        self._next_caller, self._scoped_caller, here_callers = state
        self._here_callers = dict(here_callers)

    def resolve_sender(self, sender=None) -> Optional[str]:
        if self._next_caller is not None:
            ret, self._next_caller = self._next_caller, None
            return ret
        if self._call_depth in self._here_callers:
            return self._here_callers[self._call_depth]
        if self._scoped_caller is not None:
            return self._scoped_caller
        if sender is not None:
            return to_checksum_address(sender)
        return self.default_sender

    @contextmanager
    def call_frame(self):
        # callers registered with `prank_here` inside the frame die with it
        self._call_depth += 1
        try:
            yield
        finally:
            self._here_callers.pop(self._call_depth, None)
            self._call_depth -= 1

    # crypto

    def addr(self, secret: int) -> str:
        return identity.secret_to_identity(secret)

    def sign(self, secret: int, digest: bytes) -> tuple[int, int, int]:
        return identity.sign(secret, digest)

    # text conversion

    def to_string(self, value, typ=None) -> str:
        return convert.to_string(value, typ)

    def parse(self, text: str, typ):
        return convert.parse(text, typ)

    # foreign process invocation

    def ffi(self, argv: list[str]) -> bytes:
        if isinstance(argv, (str, bytes)):
            raise TypeError(f"ffi expects a sequence of arguments, got {argv!r}")
        if not self.settings.ffi:
            raise FFIDisabled(
                "ffi is disabled", hint="enable it with FUZZSTD_FFI=1 or HostSettings(ffi=True)"
            )

        log.debug("ffi: %s", argv)
        try:
            res = subprocess.run(list(argv), capture_output=True)
        except OSError as e:
            raise FFIFailed(f"ffi command {argv!r} could not be run: {e}") from e
        if res.returncode != 0:
            stderr = res.stderr.decode("utf-8", errors="replace").strip()
            raise FFIFailed(f"ffi command {argv!r} exited with status {res.returncode}: {stderr}")

        out = res.stdout.rstrip(b"\r\n")
        try:
            text = out.decode("ascii")
        except UnicodeDecodeError:
            return out
        if is_0x_prefixed(text) and is_hex(text) and len(text) % 2 == 0:
            return bytes.fromhex(text[2:])
        return out

    # snapshots

    @contextmanager
    def anchor(self):
        """Run a block and always roll the state back afterwards."""
        pranks = self._prank_state()
        snapshot_id = self.snapshot()
        try:
            yield
        finally:
            self.revert_to(snapshot_id)
            self._restore_prank_state(pranks)

    @contextmanager
    def execution_unit(self):
        """
        Run one fuzz iteration. If it raises (e.g. an `AssertionFailure`),
        every state change made inside the block is discarded before the
        exception propagates. Pending impersonations are part of that state.
        """
        pranks = self._prank_state()
        snapshot_id = self.snapshot()
        try:
            yield
        except BaseException:
            self.revert_to(snapshot_id)
            self._restore_prank_state(pranks)
            raise
        else:
            self.discard_snapshot(snapshot_id)

    def snapshot(self) -> int:
        raise NotImplementedError  # must be implemented by subclasses

    def revert_to(self, snapshot_id: int) -> bool:
        raise NotImplementedError  # must be implemented by subclasses

    def discard_snapshot(self, snapshot_id: int) -> None:
        raise NotImplementedError  # must be implemented by subclasses

    # block context

    @property
    def timestamp(self) -> int:
        raise NotImplementedError  # must be implemented by subclasses

    @timestamp.setter
    def timestamp(self, value: int):
        raise NotImplementedError  # must be implemented by subclasses

    @property
    def block_number(self) -> int:
        raise NotImplementedError  # must be implemented by subclasses

    @block_number.setter
    def block_number(self, value: int):
        raise NotImplementedError  # must be implemented by subclasses

    @property
    def base_fee(self) -> int:
        raise NotImplementedError  # must be implemented by subclasses

    @base_fee.setter
    def base_fee(self, value: int):
        raise NotImplementedError  # must be implemented by subclasses

    @property
    def prevrandao(self) -> bytes:
        raise NotImplementedError  # must be implemented by subclasses

    @prevrandao.setter
    def prevrandao(self, value: bytes):
        raise NotImplementedError  # must be implemented by subclasses

    @property
    def chain_id(self) -> int:
        raise NotImplementedError  # must be implemented by subclasses

    @chain_id.setter
    def chain_id(self, value: int):
        raise NotImplementedError  # must be implemented by subclasses

    @property
    def coinbase(self) -> str:
        raise NotImplementedError  # must be implemented by subclasses

    @coinbase.setter
    def coinbase(self, value: str):
        raise NotImplementedError  # must be implemented by subclasses

    # accounts

    def get_balance(self, address) -> int:
        raise NotImplementedError  # must be implemented by subclasses

    def set_balance(self, address, value: int) -> None:
        raise NotImplementedError  # must be implemented by subclasses

    def get_code(self, address) -> bytes:
        raise NotImplementedError  # must be implemented by subclasses

    def set_code(self, address, code: bytes) -> None:
        raise NotImplementedError  # must be implemented by subclasses

    def load(self, address, slot: int) -> int:
        raise NotImplementedError  # must be implemented by subclasses

    def store(self, address, slot: int, value: int) -> None:
        raise NotImplementedError  # must be implemented by subclasses

    def get_nonce(self, address) -> int:
        raise NotImplementedError  # must be implemented by subclasses

    def set_nonce(self, address, value: int) -> None:
        raise NotImplementedError  # must be implemented by subclasses
