class MigrationError(Exception):
    pass

class DecodeError(MigrationError):
    """A stored record does not match its schema."""

    def __init__(self, key: bytes, reason: str):
        self.key = key
        super().__init__(f"Cannot decode record {key!r}: {reason}")

class InvalidRangeError(MigrationError):
    pass

class MissingHistoricalDataError(MigrationError):
    pass

class StorageIOError(MigrationError):
    pass

class SupplyMismatchError(MigrationError):
    pass

class ConfigurationError(MigrationError, ValueError):
    pass
