"""Interface for artifact storage operations.

Persisted artifacts are directories. A storage instance is rooted at one
artifact directory and addresses the files inside it by relative keys
(e.g. `metadata.json`, `model.joblib`).
"""

from typing import Any, Protocol


class Storage(Protocol):
    """Interface for storage services.

    Methods cover clearing the root, JSON I/O and joblib I/O.
    """

    def is_empty(self) -> bool:
        """Check whether the storage root is missing or holds no entries.

        A root that exists but is not a directory is not empty.
        """
        ...

    def purge(self) -> None:
        """Delete the storage root and everything beneath it.

        Raises:
            StorageError: If the root cannot be removed.
        """
        ...

    def read_json(self, key: str) -> dict[str, Any]:
        """Read a JSON file from the given key.

        Args:
            key: The key of the JSON file.

        Returns:
            Parsed JSON as a dictionary.

        Raises:
            FileDoesNotExistError: If the file does not exist.
            StorageError: If the file cannot be parsed.
        """
        ...

    def write_json(self, data: dict[str, Any], key: str) -> None:
        """Write a dictionary to a JSON file at the given key.

        Args:
            data: The dictionary to write.
            key: The key where the JSON file will be written.

        Raises:
            StorageError: If there is an error during the write operation.
        """
        ...

    def read_joblib(self, key: str) -> Any:
        """Read a joblib-serialized object from the given key.

        Args:
            key: The key of the joblib file.

        Returns:
            The deserialized object.

        Raises:
            FileDoesNotExistError: If the file does not exist.
            StorageError: If the file cannot be deserialized.
        """
        ...

    def write_joblib(self, obj: Any, key: str) -> None:
        """Write an object to a joblib file at the given key.

        Args:
            obj: The object to serialize.
            key: The key where the joblib file will be written.

        Raises:
            StorageError: If there is an error during the write operation.
        """
        ...
