from fuzzstd import identity
from fuzzstd.bounds import bound, bound_int
from fuzzstd.host.base import BaseHost
from fuzzstd.settings import DEFAULT_BALANCE
from fuzzstd.types import SemanticType


class Cheats:
    """
    State manipulation helpers for fuzz harnesses.

    Every method forwards to the host capability; `hoax`, `start_hoax`,
    `skip` and `rewind` are compositions of two host calls.
    """

    bound = staticmethod(bound)
    bound_int = staticmethod(bound_int)

    def __init__(self, host: BaseHost) -> None:
        self.host = host

    # block context

    def warp(self, timestamp: int) -> None:
        self.host.timestamp = timestamp

    def skip(self, seconds: int) -> None:
        self.warp(self.host.timestamp + seconds)

    def rewind(self, seconds: int) -> None:
        self.warp(self.host.timestamp - seconds)

    def roll(self, block_number: int) -> None:
        self.host.block_number = block_number

    def fee(self, base_fee: int) -> None:
        self.host.base_fee = base_fee

    def prevrandao(self, value) -> None:
        self.host.prevrandao = value

    def chain_id(self, value: int) -> None:
        self.host.chain_id = value

    def coinbase(self, who) -> None:
        self.host.coinbase = who

    # impersonation

    def prank(self, who) -> None:
        self.host.prank(who)

    def start_prank(self, who) -> None:
        self.host.start_prank(who)

    def stop_prank(self) -> None:
        self.host.stop_prank()

    def prank_here(self, who) -> None:
        self.host.prank_here(who)

    def hoax(self, who, give: int = DEFAULT_BALANCE) -> None:
        self.deal(who, give)
        self.prank(who)

    def start_hoax(self, who, give: int = DEFAULT_BALANCE) -> None:
        self.deal(who, give)
        self.start_prank(who)

    # accounts

    def deal(self, who, give: int) -> None:
        self.host.set_balance(who, give)

    def etch(self, who, code: bytes) -> None:
        self.host.set_code(who, code)

    def store(self, account, slot: int, value: int) -> None:
        self.host.store(account, slot, value)

    def load(self, account, slot: int) -> int:
        return self.host.load(account, slot)

    def get_nonce(self, account) -> int:
        return self.host.get_nonce(account)

    def set_nonce(self, account, value: int) -> None:
        self.host.set_nonce(account, value)

    # identities

    def addr(self, secret: int) -> str:
        return self.host.addr(secret)

    def sign(self, secret: int, digest: bytes) -> tuple[int, int, int]:
        return self.host.sign(secret, digest)

    def make_addr(self, label) -> str:
        return identity.derive_identity(label, host=self.host)

    def make_addr_and_key(self, label) -> tuple[str, int]:
        return identity.derive_identity_and_secret(label, host=self.host)

    # snapshots

    def snapshot(self) -> int:
        return self.host.snapshot()

    def revert_to(self, snapshot_id: int) -> bool:
        return self.host.revert_to(snapshot_id)

    def execution_unit(self):
        return self.host.execution_unit()

    # foreign process invocation

    def ffi(self, argv: list[str]) -> bytes:
        return self.host.ffi(argv)

    # text conversion

    def to_string(self, value, typ=None) -> str:
        return self.host.to_string(value, typ)

    def parse(self, text: str, typ):
        return self.host.parse(text, typ)

    def parse_address(self, text: str) -> str:
        return self.parse(text, SemanticType.ADDRESS)

    def parse_bytes(self, text: str) -> bytes:
        return self.parse(text, SemanticType.BYTES)

    def parse_bytes32(self, text: str) -> bytes:
        return self.parse(text, SemanticType.BYTES32)

    def parse_bool(self, text: str) -> bool:
        return self.parse(text, SemanticType.BOOL)

    def parse_uint(self, text: str) -> int:
        return self.parse(text, SemanticType.UINT256)

    def parse_int(self, text: str) -> int:
        return self.parse(text, SemanticType.INT256)
