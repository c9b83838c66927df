"""
Outward signal that a rendered page is stale and must be regenerated.
"""
from __future__ import annotations

import logging
from threading import Lock
from typing import Callable, List

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]

_LISTENERS: List[Listener] = []
_LISTENERS_LOCK = Lock()


def shipment_page_path(shipment_id) -> str:
    return f"/admin/services/import/{shipment_id}"


def register_listener(listener: Listener) -> None:
    with _LISTENERS_LOCK:
        if listener not in _LISTENERS:
            _LISTENERS.append(listener)


def unregister_listener(listener: Listener) -> None:
    with _LISTENERS_LOCK:
        if listener in _LISTENERS:
            _LISTENERS.remove(listener)


def revalidate_path(path: str) -> None:
    """Notify every listener that `path` is stale. A failing listener does not fail the write."""
    logger.info("Revalidating %s", path)
    with _LISTENERS_LOCK:
        listeners = list(_LISTENERS)
    for listener in listeners:
        try:
            listener(path)
        except Exception:
            logger.exception("Revalidation listener failed for %s", path)
