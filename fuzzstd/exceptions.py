class _BaseFuzzStdException(Exception):
    """
    Base fuzzstd exception class.

    This exception is not raised directly. Other exceptions inherit it in
    order to share message and hint formatting.
    """

    def __init__(self, message="Error Message not found.", *, hint=None):
        """
        Exception initializer.

        Arguments
        ---------
        message : str
            Error message to display with the exception.
        hint : str | Callable[[], str], optional
            Additional triage information, appended to the message. May be a
            callable, in which case it is only evaluated when formatted.
        """
        self._message = message
        self._hint = hint
        super().__init__(message)

    @property
    def hint(self):
        # some hints are expensive to compute, so we wait until the last
        # minute when the formatted message is actually requested to compute
        # them.
        if callable(self._hint):
            return self._hint()
        return self._hint

    @property
    def message(self):
        msg = self._message
        if self.hint:
            msg += f"\n\n  (hint: {self.hint})"
        return msg

    def __str__(self):
        return self.message


class FuzzStdException(_BaseFuzzStdException):
    """
    Base exception class for fuzzstd errors.

    All errors raised on purpose by fuzzstd inherit from this class.
    """


class AssertionFailure(FuzzStdException, AssertionError):
    """
    A predicate checked by `fuzzstd.asserts` was not satisfied.

    Raising this aborts the current execution unit. The string form is
    exactly the (default or custom) failure message.
    """

    def __init__(self, message, left=None, right=None):
        super().__init__(message)
        self.left = left
        self.right = right


class TypeMismatch(FuzzStdException, TypeError):
    """Values do not belong to the requested (or any single) semantic type."""


class ParseError(FuzzStdException, ValueError):
    """Text could not be parsed as the requested semantic type."""


class OutOfRange(FuzzStdException, ValueError):
    """An integer input is outside the working width."""


class InvalidSecretRange(FuzzStdException, ValueError):
    """A secret is not a valid secp256k1 signing scalar."""


class HostCapabilityError(FuzzStdException):
    """Base class for failures raised by a host fuzz-state capability."""


class NonceNotIncreasing(HostCapabilityError):
    """Attempted to set an account nonce to a value not above the current one."""


class FFIDisabled(HostCapabilityError):
    """Foreign process invocation was requested but is not enabled."""


class FFIFailed(HostCapabilityError):
    """A foreign process exited with a non-zero status."""


class EvmError(HostCapabilityError):
    """Exception raised when a call fails."""


class ExecutionReverted(EvmError):
    """Exception raised when a call reverts."""


class FuzzStdPanic(_BaseFuzzStdException):
    """
    Unexpected error during fuzzstd operation.

    This exception represents a bug in fuzzstd, not in user code.
    """
