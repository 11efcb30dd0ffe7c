"""
Structured Logger - Infrastructure Layer

JSON-line logging on top of stdlib logging. Infrastructure and API wiring
obtain one via get_logger(); application services keep plain module-level
logging.getLogger() with %-style messages.

Roadmap lifecycle events (load, completion, rejected completion) carry
roadmap_id / milestone_id fields so the persistence and reward collaborators
downstream can be audited by field instead of by message text.
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

_CONTEXT_ATTR = "structured_context"


def _ensure_json_handler(logger: logging.Logger) -> None:
    """Attach the stdout JSON handler once per logger name."""
    if any(isinstance(h.formatter, _JsonFormatter) for h in logger.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(_JsonFormatter())
    logger.addHandler(handler)
    logger.propagate = False


class StructuredLogger:
    """
    Logger whose keyword arguments become JSON fields.

    Usage:
        logger = get_logger("infrastructure.ingestion")
        logger.info("Parsing roadmap document", roadmap_id="rm-1")
        logger.error("Roadmap rejected", error=exc, roadmap_id="rm-1")
        logger.log_milestone_completed("rm-1", "milestone-python-0", completed_at)
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        self._logger = logging.getLogger(name)
        _ensure_json_handler(self._logger)
        self._logger.setLevel(level)

    @property
    def name(self) -> str:
        return self._logger.name

    def debug(self, message: str, **context: Any) -> None:
        self._emit(logging.DEBUG, message, context)

    def info(self, message: str, **context: Any) -> None:
        self._emit(logging.INFO, message, context)

    def warning(self, message: str, **context: Any) -> None:
        self._emit(logging.WARNING, message, context)

    def error(self, message: str, error: Optional[Exception] = None, **context: Any) -> None:
        """ERROR record; when error is given its type, text and traceback are included."""
        if error is not None:
            context.setdefault("error_type", type(error).__name__)
            context.setdefault("error_detail", str(error))
        self._emit(logging.ERROR, message, context, exc=error)

    # ------------------------------------------------------------------
    # Roadmap events
    # ------------------------------------------------------------------

    def log_roadmap_loaded(self, roadmap_id: str, phase_count: int, milestone_count: int, skill_count: int) -> None:
        self.info(
            "Roadmap loaded",
            roadmap_id=roadmap_id,
            phase_count=phase_count,
            milestone_count=milestone_count,
            skill_count=skill_count,
        )

    def log_milestone_completed(self, roadmap_id: str, milestone_id: str, completed_at: datetime) -> None:
        self.info(
            "Milestone completed",
            roadmap_id=roadmap_id,
            milestone_id=milestone_id,
            completed_at=completed_at.isoformat(),
        )

    def log_completion_rejected(self, roadmap_id: str, milestone_id: str, reason: str) -> None:
        """WARNING record for a refused completion; the milestone state is unchanged."""
        self.warning(
            "Milestone completion rejected",
            roadmap_id=roadmap_id,
            milestone_id=milestone_id,
            reason=reason,
        )

    def _emit(
        self,
        level: int,
        message: str,
        context: Dict[str, Any],
        exc: Optional[BaseException] = None,
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        exc_info = (type(exc), exc, exc.__traceback__) if exc is not None and exc.__traceback__ else None
        self._logger.log(level, message, exc_info=exc_info, extra={_CONTEXT_ATTR: context})


class _JsonFormatter(logging.Formatter):
    """
    One JSON object per line, e.g.

        {"ts": "2026-10-18T10:00:00+00:00", "level": "INFO", "logger": "api.roadmaps",
         "message": "Milestone completed", "roadmap_id": "rm-1"}
    """

    def format(self, record: logging.LogRecord) -> str:  # noqa: A003
        payload: Dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(timespec="seconds"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(getattr(record, _CONTEXT_ATTR, {}))

        if record.exc_info:
            payload["traceback"] = self.formatException(record.exc_info)

        # Korean skill names stay readable
        return json.dumps(payload, default=str, ensure_ascii=False)


def get_logger(name: str, level: int = logging.INFO) -> StructuredLogger:
    """
    Factory for StructuredLogger.

    Example:
        from infrastructure.logging import get_logger
        logger = get_logger(__name__)
    """
    return StructuredLogger(name, level)
