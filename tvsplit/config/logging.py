"""Configuration and setup for logging of validation runs."""

from collections.abc import Sequence
import sys

from loguru import logger

from tvsplit.core.observers import IgnoreAllObserver
from tvsplit.core.protocols import ParamMap, SelectionResult
from tvsplit.settings import TvsSettings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | {message}"
)


class LoggingObserver(IgnoreAllObserver):
    """Observer that logs validation events.

    Per-candidate scores are logged at DEBUG, the metric summary at INFO and
    the selected candidate at SUCCESS.
    """

    def on_candidate_scored(self, uid: str, index: int, params: ParamMap, metric: float) -> None:
        with logger.contextualize(uid=uid, candidate=index):
            logger.debug(f"{uid}: candidate {index} {dict(params)} scored {metric}")

    def on_candidates_scored(self, uid: str, metrics: Sequence[float]) -> None:
        with logger.contextualize(uid=uid):
            logger.info(f"{uid}: scored {len(metrics)} candidates: {list(metrics)}")

    def on_best_selected(self, uid: str, selection: SelectionResult, params: ParamMap) -> None:
        with logger.contextualize(uid=uid, best_index=selection.best_index):
            logger.success(
                f"{uid}: selected candidate {selection.best_index} {dict(params)} "
                f"with metric {selection.best_metric}"
            )


def configure_logging(settings: TvsSettings) -> None:
    logger.remove()  # Remove default handler

    serialize = settings.logging.serialize
    logger.add(
        sys.stderr,
        serialize=serialize,
        level=settings.logging.level,
        format="{message}" if serialize else CONSOLE_FORMAT,
        backtrace=True,
        diagnose=settings.logging.debug,  # Include variable values only in debug mode
    )


__all__ = ["LoggingObserver", "configure_logging"]
