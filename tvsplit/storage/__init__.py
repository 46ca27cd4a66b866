from tvsplit.storage.errors import FileDoesNotExistError, StorageError
from tvsplit.storage.interface import Storage
from tvsplit.storage.local import LocalStorage

__all__ = [
    "Storage",
    "LocalStorage",
    "StorageError",
    "FileDoesNotExistError",
]
