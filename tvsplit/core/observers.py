"""Base observer implementations and safe notification."""

from collections.abc import Sequence
from typing import Any

from loguru import logger

from tvsplit.core.protocols import ParamMap, SelectionResult, ValidationObserver


class IgnoreAllObserver:
    """Observer that ignores every event.

    Subclass it and override only the hooks of interest.
    """

    def on_candidate_scored(self, uid: str, index: int, params: ParamMap, metric: float) -> None:
        return None

    def on_candidates_scored(self, uid: str, metrics: Sequence[float]) -> None:
        return None

    def on_best_selected(self, uid: str, selection: SelectionResult, params: ParamMap) -> None:
        return None


def notify(observer: ValidationObserver | None, event: str, *args: Any) -> None:
    """Invoke `event` on the observer, discarding any error it raises.

    Args:
        observer: The observer to notify, or None.
        event: Name of the observer hook.
        *args: Arguments forwarded to the hook.
    """
    if observer is None:
        return
    try:
        getattr(observer, event)(*args)
    except Exception as e:
        logger.warning(f"Observer {type(observer).__name__}.{event} failed: {e}")


__all__ = ["IgnoreAllObserver", "notify"]
