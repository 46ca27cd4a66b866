class StorageError(Exception):
    """Raised when there is an error with storage operations."""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Storage error for '{key}': {reason}")


class FileDoesNotExistError(StorageError):
    """Raised when a requested file does not exist in storage."""

    def __init__(self, key: str):
        super().__init__(key, "File does not exist")
