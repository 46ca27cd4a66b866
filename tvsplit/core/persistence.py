"""Metadata format and generic save/load helpers for persisted artifacts.

Every persisted component is a directory holding a `metadata.json` record:

```json
{
  "class": "tvsplit.core.validation.TrainValidationSplitModel",
  "uid": "tvs_0f3b9c2e71aa",
  "timestamp": 1760000000000,
  "formatVersion": 1,
  "paramMap": {"trainRatio": 0.75, "seed": 42, "estimatorParamMaps": [...]},
  "metadata": {"validationMetrics": [0.81, 0.86]}
}
```

`class`, `uid` and `paramMap` are required. `metadata` is an optional
extension map; readers ignore the extension fields they do not know.
Composite components save their children in sub-directories using the
children's own `save`, and reload them through `load_instance`.
"""

from dataclasses import dataclass, field
import json
from pathlib import Path
import time
from typing import Any

from loguru import logger

from tvsplit.core.errors import PersistenceReadError, PersistenceWriteError
from tvsplit.core.identifiable import class_identity
from tvsplit.core.protocols import Persistable
from tvsplit.core.registry import LoaderRegistry, get_loader_registry
from tvsplit.storage import FileDoesNotExistError, LocalStorage, Storage, StorageError

METADATA_KEY = "metadata.json"
FORMAT_VERSION = 1
REQUIRED_FIELDS = ("class", "uid", "paramMap")


@dataclass(frozen=True, slots=True)
class Metadata:
    """Parsed metadata record of a persisted component.

    Attributes:
        path: Directory the record was read from.
        class_identity: Identity of the class that wrote the artifact.
        uid: UID of the persisted component.
        param_map: Persisted parameter values.
        extra: Extension map, empty when absent.
        timestamp: Write time in milliseconds since the epoch, if recorded.
        format_version: Version of the metadata format.
    """

    path: str
    class_identity: str
    uid: str
    param_map: dict[str, Any]
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: int | None = None
    format_version: int = FORMAT_VERSION

    def get_param(self, name: str) -> Any:
        """Get a required parameter value.

        Raises:
            PersistenceReadError: If the parameter was not persisted.
        """
        if name not in self.param_map:
            raise PersistenceReadError(self.path, f"paramMap is missing '{name}'")
        return self.param_map[name]

    def get_extra(self, name: str) -> Any:
        """Get a required extension field.

        Raises:
            PersistenceReadError: If the field was not persisted.
        """
        if name not in self.extra:
            raise PersistenceReadError(self.path, f"metadata is missing '{name}'")
        return self.extra[name]


def ensure_persistable(
    component: Any,
    role: str,
    path: str | Path,
    registry: LoaderRegistry | None = None,
) -> None:
    """Check that a component can be saved and reloaded.

    Args:
        component: The component about to be saved.
        role: Human-readable role of the component (e.g. "estimator").
        path: Target path, used in error messages.
        registry: Loader registry, defaults to the global one.

    Raises:
        PersistenceWriteError: If the component cannot be saved, or if no
            loader is registered for its class.
    """
    registry = registry or get_loader_registry()
    if not isinstance(component, Persistable):
        raise PersistenceWriteError(
            path, f"{role} {type(component).__name__} does not support persistence"
        )
    identity = class_identity(type(component))
    if not registry.is_registered(identity):
        raise PersistenceWriteError(path, f"{role} {identity} has no registered loader")


def ensure_json_serializable(value: Any, what: str, path: str | Path) -> None:
    """Check that a value can be written to a metadata record.

    Raises:
        PersistenceWriteError: If the value is not JSON serializable.
    """
    try:
        json.dumps(value)
    except (TypeError, ValueError) as e:
        raise PersistenceWriteError(path, f"{what} is not JSON serializable: {e}") from e


def open_target(path: str | Path, overwrite: bool = False) -> Storage:
    """Open the storage for a new artifact at `path`.

    Raises:
        PersistenceWriteError: If `path` already holds files and `overwrite` is False.
    """
    storage = LocalStorage(Path(path))
    if storage.is_empty():
        return storage
    if not overwrite:
        raise PersistenceWriteError(path, "path already exists, use overwrite=True to replace it")
    try:
        storage.purge()
    except StorageError as e:
        raise PersistenceWriteError(path, e.reason) from e
    return storage


def write_metadata(
    instance: Any,
    path: str | Path,
    param_map: dict[str, Any] | None = None,
    extra: dict[str, Any] | None = None,
    overwrite: bool = False,
) -> Storage:
    """Write the metadata record of `instance` as a new artifact at `path`.

    The record is validated before anything on disk is touched.

    Args:
        instance: The component being saved. Must have a `uid`.
        path: Target directory.
        param_map: Parameter values to persist.
        extra: Optional extension map.
        overwrite: Whether an existing artifact at `path` may be replaced.

    Returns:
        The storage rooted at `path`, for writing any additional files.
    """
    record: dict[str, Any] = {
        "class": class_identity(type(instance)),
        "uid": instance.uid,
        "timestamp": int(time.time() * 1000),
        "formatVersion": FORMAT_VERSION,
        "paramMap": dict(param_map or {}),
    }
    if extra:
        record["metadata"] = dict(extra)
    ensure_json_serializable(record, "metadata", path)

    storage = open_target(path, overwrite)
    try:
        storage.write_json(record, METADATA_KEY)
    except StorageError as e:
        raise PersistenceWriteError(path, e.reason) from e

    logger.debug(f"Saved {record['class']} ({instance.uid}) to {path}")
    return storage


def read_metadata(path: str | Path, expected_identity: str | None = None) -> Metadata:
    """Read and validate the metadata record at `path`.

    Args:
        path: Artifact directory.
        expected_identity: If given, the recorded class identity must match it exactly.

    Returns:
        The parsed metadata.

    Raises:
        PersistenceReadError: If the record is missing, unparsable, lacks a
            required field or was written by another class.
    """
    storage = LocalStorage(Path(path))
    try:
        record = storage.read_json(METADATA_KEY)
    except FileDoesNotExistError as e:
        raise PersistenceReadError(path, "metadata not found") from e
    except StorageError as e:
        raise PersistenceReadError(path, f"metadata is unreadable: {e.reason}") from e

    if not isinstance(record, dict):
        raise PersistenceReadError(path, "metadata is not a JSON object")

    missing = [name for name in REQUIRED_FIELDS if name not in record]
    if missing:
        raise PersistenceReadError(path, f"metadata is missing required fields {missing}")

    identity = record["class"]
    if expected_identity is not None and identity != expected_identity:
        raise PersistenceReadError(
            path,
            f"expected class '{expected_identity}' but found '{identity}'",
            identity=str(identity),
        )

    param_map = record["paramMap"]
    extra = record.get("metadata") or {}
    if not isinstance(param_map, dict) or not isinstance(extra, dict):
        raise PersistenceReadError(path, "paramMap and metadata must be JSON objects")

    return Metadata(
        path=str(path),
        class_identity=str(identity),
        uid=str(record["uid"]),
        param_map=param_map,
        extra=extra,
        timestamp=record.get("timestamp"),
        format_version=record.get("formatVersion", FORMAT_VERSION),
    )


def load_instance(path: str | Path, registry: LoaderRegistry | None = None) -> Any:
    """Load any persisted component using the loader registered for its identity.

    Args:
        path: Artifact directory.
        registry: Loader registry, defaults to the global one.

    Returns:
        The reloaded component.

    Raises:
        PersistenceReadError: If the metadata is invalid, no loader is
            registered for the recorded identity, or the artifact files are
            missing or corrupt.
    """
    registry = registry or get_loader_registry()
    metadata = read_metadata(path)

    loader = registry.get(metadata.class_identity)
    if loader is None:
        raise PersistenceReadError(
            path,
            f"no loader registered for '{metadata.class_identity}'",
            identity=metadata.class_identity,
        )

    try:
        return loader(Path(path))
    except StorageError as e:
        raise PersistenceReadError(path, e.reason) from e


class DefaultParamsPersistable:
    """Mixin persisting a component as its `uid` plus `get_params()`.

    Suitable for components whose whole state is a set of JSON-serializable
    constructor arguments. Subclasses must accept `uid` and every key of
    `get_params()` as keyword arguments, and should be decorated with
    `@register_persistable`.
    """

    uid: str

    def get_params(self) -> dict[str, Any]:
        raise NotImplementedError

    def save(self, path: str | Path, overwrite: bool = False) -> None:
        write_metadata(self, path, param_map=self.get_params(), overwrite=overwrite)

    @classmethod
    def load(cls, path: str | Path) -> Any:
        metadata = read_metadata(path, expected_identity=class_identity(cls))
        try:
            return cls(uid=metadata.uid, **metadata.param_map)
        except (TypeError, ValueError) as e:
            raise PersistenceReadError(
                path, f"cannot rebuild {cls.__name__}: {e}", identity=metadata.class_identity
            ) from e


__all__ = [
    "METADATA_KEY",
    "FORMAT_VERSION",
    "Metadata",
    "ensure_persistable",
    "ensure_json_serializable",
    "open_target",
    "write_metadata",
    "read_metadata",
    "load_instance",
    "DefaultParamsPersistable",
]
