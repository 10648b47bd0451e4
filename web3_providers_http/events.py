"""
Provider notifications.

EIP-1193 providers announce connectivity changes through three events:
  connect       → {"chainId": "0x1"}
  disconnect    → {"code": 4900}
  chainChanged  → "0x5"

EventEmitter keeps an ordered listener list per event. Listeners run in
registration order inside ``emit``; coroutine listeners are awaited in place.
"""

import inspect
from enum import Enum
from typing import Any, Callable, Optional, Union

import structlog

logger = structlog.get_logger()

Listener = Callable[..., Any]


class ProviderEvent(str, Enum):
    CONNECT = "connect"
    DISCONNECT = "disconnect"
    CHAIN_CHANGED = "chainChanged"


class _OnceWrapper:
    """Listener that unregisters itself before its first call."""

    def __init__(self, emitter: "EventEmitter", event: ProviderEvent, listener: Listener):
        self.emitter = emitter
        self.event = event
        self.listener = listener

    def __call__(self, *args: Any) -> Any:
        self.emitter.off(self.event, self)
        return self.listener(*args)


class EventEmitter:
    """Registry of listeners keyed by ProviderEvent."""

    def __init__(self) -> None:
        self._listeners: dict[ProviderEvent, list[Listener]] = {event: [] for event in ProviderEvent}

    @staticmethod
    def _event(event: Union[ProviderEvent, str]) -> ProviderEvent:
        try:
            return ProviderEvent(event)
        except ValueError:
            raise ValueError(
                f"Unsupported event {event!r}, expected one of "
                f"{', '.join(e.value for e in ProviderEvent)}"
            ) from None

    def on(self, event: Union[ProviderEvent, str], listener: Listener) -> "EventEmitter":
        """Register ``listener`` for ``event``. Returns self for chaining."""
        if not callable(listener):
            raise TypeError("listener must be callable")
        self._listeners[self._event(event)].append(listener)
        return self

    def once(self, event: Union[ProviderEvent, str], listener: Listener) -> "EventEmitter":
        """Register ``listener`` for the next ``event`` only."""
        event = self._event(event)
        return self.on(event, _OnceWrapper(self, event, listener))

    def off(self, event: Union[ProviderEvent, str], listener: Listener) -> "EventEmitter":
        """Remove the first registration of ``listener`` (plain or once)."""
        listeners = self._listeners[self._event(event)]
        for i, registered in enumerate(listeners):
            if registered == listener or (
                isinstance(registered, _OnceWrapper) and registered.listener == listener
            ):
                del listeners[i]
                break
        return self

    def remove_all_listeners(self, event: Optional[Union[ProviderEvent, str]] = None) -> "EventEmitter":
        if event is None:
            for listeners in self._listeners.values():
                listeners.clear()
        else:
            self._listeners[self._event(event)].clear()
        return self

    def listeners(self, event: Union[ProviderEvent, str]) -> list[Listener]:
        return [
            l.listener if isinstance(l, _OnceWrapper) else l
            for l in self._listeners[self._event(event)]
        ]

    def listener_count(self, event: Union[ProviderEvent, str]) -> int:
        return len(self._listeners[self._event(event)])

    async def emit(self, event: Union[ProviderEvent, str], *args: Any) -> bool:
        """
        Call every listener of ``event`` with ``args``.

        A listener that raises is logged and skipped so one bad subscriber
        cannot break the provider call that triggered the notification.

        Returns:
            True if the event had listeners
        """
        event = self._event(event)
        # Copy so once-listeners can unregister while iterating
        listeners = list(self._listeners[event])
        for listener in listeners:
            try:
                result = listener(*args)
                if inspect.isawaitable(result):
                    await result
            except Exception as e:
                logger.error(
                    "event_listener_failed",
                    provider_event=event.value,
                    error=str(e),
                    error_type=type(e).__name__,
                )
        return bool(listeners)
