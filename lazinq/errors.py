"""exception types raised by lazinq.

every error derives from ``LazinqError`` and from the closest builtin, so
``except ValueError`` keeps working for callers that do not import lazinq.
"""


class LazinqError(Exception):
    """base class for all lazinq errors."""


class NoElementError(LazinqError, ValueError):
    """first/last requested on an empty sequence."""

    def __init__(self, message: str = "sequence contains no elements"):
        super().__init__(message)


class IndexOutOfRangeError(LazinqError, IndexError):
    """element_at requested with a negative or out-of-bounds index."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"index {index} is out of range")


class NotExactlyOneError(LazinqError, ValueError):
    """single() found zero or more than one matching element."""

    def __init__(self, found: int):
        # found is 0 or 2; counting stops at the second match
        self.found = found
        if found == 0:
            message = "sequence contains no matching elements"
        else:
            message = "sequence contains more than one matching element"
        super().__init__(message)


class EmptyCollectionError(LazinqError, ValueError):
    """a reduction with no sensible default was requested on an empty sequence."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"cannot calculate {operation} of empty sequence")


class DecodeError(LazinqError, ValueError):
    """encoded input could not be decoded into an ordered sequence."""


class UnsupportedTypeError(LazinqError, TypeError):
    """a reduction or ordering was invoked on values it cannot handle."""


class CancelledError(LazinqError):
    """the context driving an operation was cancelled."""

    def __init__(self, message: str = "context canceled"):
        super().__init__(message)


class DeadlineExceededError(CancelledError):
    """the context deadline passed before the operation finished."""

    def __init__(self, message: str = "context deadline exceeded"):
        super().__init__(message)
