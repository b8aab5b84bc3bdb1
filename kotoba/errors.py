"""Exception types for Kotoba."""


class KotobaError(Exception):
    """Base class for Kotoba errors."""


class StorageError(KotobaError):
    """
    A key/value storage operation failed (quota, serialization, I/O).

    Returned inside a StorageResult; never raised past the storage boundary.
    """

    def __init__(self, key: str, message: str):
        super().__init__(f"{key}: {message}")
        self.key = key
        self.message = message


class CatalogError(KotobaError):
    """A vocabulary book could not be found or parsed."""
