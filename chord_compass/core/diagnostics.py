from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable

_LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class DiagnosticEvent:
    code: str
    message: str
    context: dict[str, Any] = field(default_factory=dict)


Listener = Callable[[DiagnosticEvent], None]


class DiagnosticChannel:
    """
    Observability channel for malformed-input warnings.

    Every event is logged; subscribers get the structured event as well.
    Emitting never changes what the solving functions return.
    """

    def __init__(self) -> None:
        self._listeners: list[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        with self._lock:
            if callback not in self._listeners:
                self._listeners.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe

    def emit(self, code: str, message: str, **context: Any) -> DiagnosticEvent:
        event = DiagnosticEvent(code=code, message=message, context=dict(context))
        _LOG.warning("%s: %s", code, message)

        with self._lock:
            listeners = list(self._listeners)
        for callback in listeners:
            try:
                callback(event)
            except Exception as exc:
                _LOG.error("Diagnostic listener failed for %s: %s", code, exc)
        return event

    def clear(self) -> None:
        with self._lock:
            self._listeners = []


diagnostics = DiagnosticChannel()
