"""Per-request / per-command log context.

The API binds ``endpoint`` for every request and routes add ``puuid`` or
``match_id``; CLI commands bind ``command``. Values are held as an immutable
mapping so a snapshot taken for a queued record cannot change afterwards.
"""
from __future__ import annotations

import contextvars
from types import MappingProxyType
from typing import Any, Dict, Mapping

_EMPTY: Mapping[str, Any] = MappingProxyType({})
_context: contextvars.ContextVar[Mapping[str, Any]] = contextvars.ContextVar("log_context", default=_EMPTY)


def _merged(values: Dict[str, Any]) -> Mapping[str, Any]:
    current = dict(_context.get())
    current.update({k: v for k, v in values.items() if v is not None})
    return MappingProxyType(current)


def snapshot() -> Mapping[str, Any]:
    """The bound values, read-only; safe to keep on a record handed to another thread."""
    return _context.get()


def get_context() -> Dict[str, Any]:
    return dict(_context.get())


def bind(**values: Any) -> None:
    _context.set(_merged(values))


class context:
    """Bind values for the duration of a ``with`` block and restore the outer ones on exit."""

    def __init__(self, **values: Any) -> None:
        self._values = values
        self._token: contextvars.Token | None = None

    def __enter__(self) -> Mapping[str, Any]:
        bound = _merged(self._values)
        self._token = _context.set(bound)
        return bound

    def __exit__(self, exc_type, exc, tb) -> bool:
        if self._token is not None:
            _context.reset(self._token)
            self._token = None
        return False
