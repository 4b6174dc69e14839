"""Listener support shared by the stateful services."""

from typing import Any, Callable

Listener = Callable[[Any], None]


class Observable:
    """Keeps a plain list of listeners and notifies them after mutations."""

    def __init__(self):
        self._listeners: list[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener.

        Args:
            listener: Callable invoked with the service's current state

        Returns:
            Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, state: Any) -> None:
        for listener in list(self._listeners):
            listener(state)
