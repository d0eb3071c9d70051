class VetcareError(Exception):
    """Base class for every error raised by the website behavior layer."""


class StorageError(VetcareError):
    pass


class StorageDecodeError(StorageError):
    """A stored value is present but can't be decoded into what the caller expects."""

    def __init__(self, key, reason):
        self.key = key
        self.reason = reason
        super().__init__(f"stored value for {key!r} is unreadable: {reason}")


class StorageWriteError(StorageError):
    """A tier refused the write (quota, serialization, backend failure)."""

    def __init__(self, key, cause):
        self.key = key
        self.cause = cause
        super().__init__(f"could not write {key!r}: {cause}")


class WriteConflict(StorageError):
    """The durable version moved between read and write."""

    def __init__(self, key, expected, actual):
        self.key = key
        self.expected = expected
        self.actual = actual
        super().__init__(f"{key!r} is at version {actual}, expected {expected}")


class NavigationError(VetcareError):
    def __init__(self, url, reason):
        self.url = url
        self.reason = reason
        super().__init__(f"{url}: {reason}")


class TransportError(NavigationError):
    """Network failure, timeout or a non-2xx status."""


class ProtocolError(NavigationError):
    """A 2xx response whose body doesn't match the navigation contract."""
