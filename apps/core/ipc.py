"""
In-process call surface used by the desktop shell.

Each app registers its handlers on named channels (``product:getAll``,
``invoice:create`` ...) from its ``ipc`` module, imported when the app is
ready. ``dispatch`` runs one handler; ``handle_message`` wraps a request
envelope and never raises, so a failing call does not stop the serving
process.

Example:
    @channel("product:getAll")
    def list_products(payload):
        ...

    dispatch("product:getAll")
"""

import logging
from typing import Any, Callable, Dict, List, Optional

from .exceptions import LedgerError, RecordValidationError

logger = logging.getLogger(__name__)

_channels: Dict[str, Callable[[Any], Any]] = {}


def channel(name: str):
    """Register the decorated function as the handler for ``name``."""

    def decorator(func):
        if name in _channels and _channels[name] is not func:
            raise ValueError(f"IPC channel {name!r} is already registered")
        _channels[name] = func
        return func

    return decorator


def registered_channels() -> List[str]:
    return sorted(_channels)


def dispatch(name: str, payload: Any = None) -> Any:
    """
    Call the handler registered for ``name`` with ``payload``.

    Raises:
        RecordValidationError: no handler is registered for the channel
        LedgerError: whatever the handler raises
    """
    try:
        handler = _channels[name]
    except KeyError:
        raise RecordValidationError(f"Unknown channel: {name}")
    return handler(payload)


def require_id(value: Any, label: str) -> Any:
    """Return ``value`` or raise a validation error when it is empty."""
    if value in (None, "", 0):
        raise RecordValidationError(f"{label} ID is required")
    return value


def handle_message(message: Dict[str, Any]) -> Dict[str, Any]:
    """
    Process one request envelope ``{"id", "channel", "payload"}``.

    Returns:
        ``{"id", "ok": True, "result"}`` or
        ``{"id", "ok": False, "error": {"type", "message"}}``
    """
    if not isinstance(message, dict):
        message = {}
    request_id: Optional[Any] = message.get("id")
    name = message.get("channel")
    try:
        if not name:
            raise RecordValidationError("Request must be an object with a channel")
        result = dispatch(name, message.get("payload"))
        return {"id": request_id, "ok": True, "result": result}
    except LedgerError as e:
        logger.warning(f"IPC {name} failed: {e.error_type}: {e.message}")
        error = {"type": e.error_type, "message": e.message}
        if e.details:
            error["details"] = e.details
        return {"id": request_id, "ok": False, "error": error}
    except Exception as e:
        logger.error(f"IPC {name} crashed: {e}", exc_info=True)
        return {"id": request_id, "ok": False, "error": {"type": "internal", "message": str(e)}}
