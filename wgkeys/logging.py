"""Logging setup that tags records with the interface being provisioned.

The provisioner and the command runner log paths and commands, never key
material. Tagging each record with the interface name lets a config run that
provisions several interfaces be read back per interface.
"""

from __future__ import annotations

import contextvars
import json
import logging
import sys
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import UTC, datetime
from pathlib import Path

_UNSET = "-"

_ACTIVE_INTERFACE: contextvars.ContextVar[tuple[str, str] | None] = contextvars.ContextVar(
    "wgkeys_active_interface",
    default=None,
)


def active_interface() -> tuple[str, str] | None:
    """Return ``(interface, key_dir)`` for the keypair currently being provisioned, if any."""
    return _ACTIVE_INTERFACE.get()


@contextmanager
def provisioning_scope(interface: str, directory: str | Path) -> Iterator[None]:
    token = _ACTIVE_INTERFACE.set((interface, str(directory)))
    try:
        yield
    finally:
        _ACTIVE_INTERFACE.reset(token)


class InterfaceFilter(logging.Filter):
    """Set ``interface`` and ``key_dir`` on each record, ``-`` outside a provisioning scope."""

    def filter(self, record: logging.LogRecord) -> bool:
        interface, key_dir = active_interface() or (_UNSET, _UNSET)
        record.interface = interface
        record.key_dir = key_dir
        return True


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, str] = {
            "timestamp": datetime.fromtimestamp(record.created, UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        interface = getattr(record, "interface", _UNSET)
        if interface != _UNSET:
            payload["interface"] = interface
            payload["key_dir"] = getattr(record, "key_dir", _UNSET)
        if record.exc_info is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=True)


_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(interface)s] %(message)s"


def setup_logging(level: int | str = logging.INFO, json_output: bool = False) -> None:
    """Route all records to stderr, replacing any handlers from an earlier call.

    stderr keeps stdout free for the key material the CLI prints.
    """

    handler = logging.StreamHandler(stream=sys.stderr)
    handler.setFormatter(_JsonFormatter() if json_output else logging.Formatter(_TEXT_FORMAT))
    handler.addFilter(InterfaceFilter())

    root_logger = logging.getLogger()
    root_logger.handlers[:] = [handler]
    root_logger.setLevel(level.upper() if isinstance(level, str) else level)


__all__ = [
    "InterfaceFilter",
    "active_interface",
    "provisioning_scope",
    "setup_logging",
]
