"""
Observer registry for resolution lifecycle events.
Scoped to one MentionResolver instance; there is no process-wide bus.
"""

import logging
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

logger = logging.getLogger(__name__)

HookCallable = Callable[[str, dict[str, Any]], None]


@dataclass
class HookHandler:
    """Registered hook handler with priority."""

    handler: HookCallable
    priority: int = 0
    name: str | None = None

    def __lt__(self, other: "HookHandler") -> bool:
        """Sort by priority (lower number = higher priority)."""
        return self.priority < other.priority


class MentionHooks:
    """
    Manages lifecycle observers for one resolver instance.
    Handlers run synchronously in priority order; a failing handler does not
    stop the others and never reaches the caller.
    """

    def __init__(self):
        """Initialize empty hook registry."""
        self._handlers: dict[str, list[HookHandler]] = defaultdict(list)

    def register(
        self,
        event: str,
        handler: HookCallable,
        priority: int = 0,
        name: str | None = None,
    ) -> Callable[[], None]:
        """
        Register a handler for an event.

        Args:
            event: Event name (see events.py)
            handler: Function called as handler(event, data)
            priority: Execution priority (lower = earlier)
            name: Optional handler name for debugging

        Returns:
            Unregister function
        """
        hook_handler = HookHandler(
            handler=handler,
            priority=priority,
            name=name or getattr(handler, "__name__", repr(handler)),
        )

        self._handlers[event].append(hook_handler)
        self._handlers[event].sort()

        logger.debug(
            f"Registered hook '{hook_handler.name}' for event '{event}' with priority {priority}"
        )

        def unregister():
            """Remove this handler from the registry."""
            if hook_handler in self._handlers[event]:
                self._handlers[event].remove(hook_handler)
                logger.debug(f"Unregistered hook '{hook_handler.name}' from event '{event}'")

        return unregister

    on = register

    def emit(self, event: str, data: dict[str, Any]) -> None:
        """
        Deliver an event to every handler registered for it.

        Args:
            event: Event name
            data: Event payload, passed unchanged to each handler
        """
        handlers = list(self._handlers.get(event, []))
        if not handlers:
            return

        for hook_handler in handlers:
            try:
                hook_handler.handler(event, data)
            except Exception as e:
                logger.error(
                    f"Error in hook handler '{hook_handler.name}' for event '{event}': {e}"
                )

    def handler_count(self, event: str) -> int:
        """Number of handlers registered for an event."""
        return len(self._handlers.get(event, []))
