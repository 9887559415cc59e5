class HarnessError(Exception):
    """Base class for errors raised by the product API harness."""


class InvalidArgument(HarnessError, ValueError):
    """A generator or catalog helper was called outside its contract
    (string length out of bounds, unknown category, empty choice set, ...)."""


class AssertionFailure(HarnessError, AssertionError):
    """A response broke the contract a validator checks.

    Subclasses AssertionError so pytest reports it as a plain test failure.
    """


class TransportFailure(HarnessError):
    """The request never produced a response (connection error or timeout)."""

    def __init__(self, method: str, url: str, reason: str):
        self.method = method
        self.url = url
        self.reason = reason
        super().__init__(f"{method.upper()} {url} failed: {reason}")
