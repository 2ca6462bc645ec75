"""Contextual log fields for the wizard.

Every record gets ``session_id``, ``class_level`` and ``wizard_step``
attributes (``"-"`` when unset) so a single browser session can be followed
through the logs while the user moves between classes and steps.
"""

from __future__ import annotations

import contextvars
import logging
from contextlib import contextmanager
from types import MappingProxyType
from typing import Iterator, Mapping

_DEFAULT_LOG_FORMAT = (
    "%(asctime)s %(levelname)s [session=%(session_id)s class=%(class_level)s "
    "step=%(wizard_step)s] %(name)s: %(message)s"
)

_CONTEXT_VARS: Mapping[str, contextvars.ContextVar[str]] = MappingProxyType(
    {
        name: contextvars.ContextVar(name, default="-")
        for name in ("session_id", "class_level", "wizard_step")
    }
)
_DEFAULT_RECORD_FACTORY = logging.getLogRecordFactory()
_RECORD_FACTORY_INSTALLED = False


def _apply_context(record: logging.LogRecord) -> None:
    for name, var in _CONTEXT_VARS.items():
        setattr(record, name, var.get())


class _ContextFilter(logging.Filter):
    """Fill context fields on records created before the factory was installed."""

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: D401 - logging protocol
        _apply_context(record)
        return True


def _coerce(value: object | None) -> str:
    if value is None:
        return "-"
    return str(value).strip() or "-"


def configure_logging(*, level: int = logging.INFO) -> None:
    """Set up the root logger once and attach the context fields to every record."""

    global _RECORD_FACTORY_INSTALLED
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=level, format=_DEFAULT_LOG_FORMAT)
    if not any(isinstance(flt, _ContextFilter) for flt in root.filters):
        root.addFilter(_ContextFilter())
    if _RECORD_FACTORY_INSTALLED:
        return

    def _record_factory(*args: object, **kwargs: object) -> logging.LogRecord:
        record = _DEFAULT_RECORD_FACTORY(*args, **kwargs)
        _apply_context(record)
        return record

    logging.setLogRecordFactory(_record_factory)
    _RECORD_FACTORY_INSTALLED = True


def set_session_id(session_id: str | None) -> None:
    configure_logging()
    _CONTEXT_VARS["session_id"].set(_coerce(session_id))


def set_wizard_position(class_level: object | None, step: object | None) -> None:
    """Bind the class being configured and its step for subsequent records."""

    _CONTEXT_VARS["class_level"].set(_coerce(class_level))
    _CONTEXT_VARS["wizard_step"].set(_coerce(step))


@contextmanager
def log_context(
    *,
    session_id: str | None = None,
    class_level: object | None = None,
    wizard_step: object | None = None,
) -> Iterator[None]:
    """Temporarily override context fields; ``None`` leaves a field as it is."""

    overrides = {"session_id": session_id, "class_level": class_level, "wizard_step": wizard_step}
    tokens = [
        (_CONTEXT_VARS[name], _CONTEXT_VARS[name].set(_coerce(value)))
        for name, value in overrides.items()
        if value is not None
    ]
    try:
        yield
    finally:
        for var, token in reversed(tokens):
            var.reset(token)
