"""Logging and event recording for reconcilers."""

from __future__ import annotations

import logging
from typing import Any, Protocol

EVENT_WARNING = "Warning"
EVENT_NORMAL = "Normal"


class Recorder(Protocol):
    def event(self, resource: Any, event_type: str, reason: str, message: str) -> None: ...


def _format(msg: str, fields: dict[str, Any]) -> str:
    if not fields:
        return msg
    return msg + " " + " ".join(f"{key}={value}" for key, value in fields.items())


class EventReporter:
    """Logs messages and records events against a resource."""

    def __init__(self, logger: logging.Logger, recorder: Recorder, resource: Any) -> None:
        self._log = logger
        self._recorder = recorder
        self._resource = resource

    def info(self, msg: str, **kwargs: Any) -> None:
        """Log at info level."""
        self._log.info(_format(msg, kwargs))

    def debug(self, msg: str, **kwargs: Any) -> None:
        """Log at debug level."""
        self._log.debug(_format(msg, kwargs))

    def error(self, err: BaseException, msg: str, **kwargs: Any) -> None:
        """Log at error level, including the error."""
        self._log.error(_format(msg, {**kwargs, "error": err}))

    def record_info(self, reason: str, msg: str) -> None:
        """Record a normal event."""
        self._recorder.event(self._resource, EVENT_NORMAL, reason, msg)

    def record_error(self, reason: str, err: BaseException) -> None:
        """Record a warning event."""
        self._recorder.event(self._resource, EVENT_WARNING, reason, str(err))