"""Unique identifiers for validators, models and other persistable components."""

from uuid_extensions import uuid7


def random_uid(prefix: str) -> str:
    """Generate a unique identifier such as `tvs_4f1c9e0b2a7d`.

    The suffix is taken from the random tail of a UUID v7.
    """
    return f"{prefix}_{uuid7().hex[-12:]}"


def class_identity(cls: type) -> str:
    """Return the implementation identity recorded in persisted metadata."""
    return f"{cls.__module__}.{cls.__qualname__}"


__all__ = ["random_uid", "class_identity"]
