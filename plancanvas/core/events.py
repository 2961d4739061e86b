"""Event registration and dispatch for engine consumers."""
import logging
from typing import Any, Callable, Dict, List, Optional

from ..utils.logger import setup_logger

ZONE_CREATED = "zone_created"
ZONE_UPDATED = "zone_updated"
ZONE_DELETED = "zone_deleted"
DEVICE_MOVED = "device_moved"
DEVICE_ROTATED = "device_rotated"
DEVICES_ARRANGED = "devices_arranged"
DEVICES_ALIGNED = "devices_aligned"
SELECTION_CHANGED = "selection_changed"
MODE_CHANGED = "mode_changed"
VIEWPORT_CHANGED = "viewport_changed"
THEME_CHANGED = "theme_changed"
VALIDATION_FAILED = "validation_failed"

EVENT_NAMES = frozenset({
    ZONE_CREATED,
    ZONE_UPDATED,
    ZONE_DELETED,
    DEVICE_MOVED,
    DEVICE_ROTATED,
    DEVICES_ARRANGED,
    DEVICES_ALIGNED,
    SELECTION_CHANGED,
    MODE_CHANGED,
    VIEWPORT_CHANGED,
    THEME_CHANGED,
    VALIDATION_FAILED,
})


class EventEmitter:
    """
    Minimal synchronous event bus.

    Handlers run in registration order on the caller's stack. A handler that
    raises is logged and skipped; the remaining handlers still run.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self._handlers: Dict[str, List[Callable[..., Any]]] = {name: [] for name in EVENT_NAMES}
        self.log = logger or setup_logger(self.__class__.__name__)

    def on(self, name: str, handler: Callable[..., Any]) -> Callable[[], None]:
        """
        Register a handler.

        Args:
            name: Event name, one of EVENT_NAMES
            handler: Callable receiving the event arguments

        Returns:
            A function that unregisters the handler
        """
        if name not in self._handlers:
            raise ValueError(f"Unknown event '{name}'")
        self._handlers[name].append(handler)

        def unsubscribe() -> None:
            if handler in self._handlers[name]:
                self._handlers[name].remove(handler)

        return unsubscribe

    def emit(self, name: str, *args: Any) -> None:
        for handler in list(self._handlers.get(name, [])):
            try:
                handler(*args)
            except Exception:
                self.log.exception(f"Error in {name} handler")

    def handler_count(self, name: str) -> int:
        return len(self._handlers.get(name, []))
