from fuzzstd.host.base import BaseHost


class RecordingHost(BaseHost):
    """
    In-memory host which records every state mutation as a
    (capability, *args) tuple, in call order.
    """

    def __init__(self, settings=None):
        super().__init__(settings)
        self.calls = []
        self._timestamp = 1
        self._balances = {}
        self._nonces = {}
        self._snapshots = []

    def _record(self, *call):
        self.calls.append(call)

    @property
    def timestamp(self):
        return self._timestamp

    @timestamp.setter
    def timestamp(self, value):
        self._record("timestamp", value)
        self._timestamp = value

    @property
    def block_number(self):
        raise NotImplementedError

    @block_number.setter
    def block_number(self, value):
        self._record("block_number", value)

    @property
    def base_fee(self):
        raise NotImplementedError

    @base_fee.setter
    def base_fee(self, value):
        self._record("base_fee", value)

    @property
    def prevrandao(self):
        raise NotImplementedError

    @prevrandao.setter
    def prevrandao(self, value):
        self._record("prevrandao", value)

    @property
    def chain_id(self):
        raise NotImplementedError

    @chain_id.setter
    def chain_id(self, value):
        self._record("chain_id", value)

    @property
    def coinbase(self):
        raise NotImplementedError

    @coinbase.setter
    def coinbase(self, value):
        self._record("coinbase", value)

    def prank(self, who):
        self._record("prank", who)
        super().prank(who)

    def start_prank(self, who):
        self._record("start_prank", who)
        super().start_prank(who)

    def stop_prank(self):
        self._record("stop_prank")
        super().stop_prank()

    def prank_here(self, who):
        self._record("prank_here", who)
        super().prank_here(who)

    def get_balance(self, address):
        return self._balances.get(address, 0)

    def set_balance(self, address, value):
        self._record("set_balance", address, value)
        self._balances[address] = value

    def set_code(self, address, code):
        self._record("set_code", address, code)

    def store(self, address, slot, value):
        self._record("store", address, slot, value)

    def load(self, address, slot):
        return 0

    def get_nonce(self, address):
        return self._nonces.get(address, 0)

    def set_nonce(self, address, value):
        self._record("set_nonce", address, value)
        self._nonces[address] = value

    def snapshot(self):
        self._snapshots.append((dict(self._balances), self._timestamp))
        return len(self._snapshots) - 1

    def revert_to(self, snapshot_id):
        if snapshot_id >= len(self._snapshots):
            return False
        self._balances, self._timestamp = self._snapshots[snapshot_id]
        del self._snapshots[snapshot_id:]
        return True

    def discard_snapshot(self, snapshot_id):
        del self._snapshots[snapshot_id:]
