"""Exception types raised by fibo_add."""


class FiboError(Exception):
    """Base class for every error raised by this package."""


class InvalidInputError(FiboError, ValueError, TypeError):
    """An argument violated a function's precondition.

    Subclasses both ``ValueError`` and ``TypeError`` so callers can catch
    whichever fits: a non-positive index is a bad value, a non-integer
    index is a bad type.

    Attributes:
        value: The rejected argument.
        reason: Short description of the violated precondition.
    """

    def __init__(self, value, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"invalid input {value!r}: {reason}")


class ConfigError(FiboError):
    """Configuration file could not be read or parsed."""

    def __init__(self, path: str, detail: str):
        self.path = path
        self.detail = detail
        super().__init__(f"cannot load config {path}: {detail}")
