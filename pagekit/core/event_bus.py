# pagekit/core/event_bus.py

import logging
from typing import Callable, Dict, Any, Hashable, List, Set, Tuple
from ..interfaces.event_bus import EventBus as EventBusInterface
from ..events import EventType

logger = logging.getLogger(__name__)

class EventBus(EventBusInterface):
    """
    In-process push notification for controller state changes.

    Listeners subscribe either to every event of a type or only to the events
    published for one list key. Callbacks run synchronously inside publish():
    type-wide listeners first, then the listeners of the event's key, each in
    subscription order. An observer therefore sees a key's transitions in
    the order the controller made them.
    """

    def __init__(self, debug_logging: bool = False):
        """
        Initialize a new event bus.

        Args:
            debug_logging: Whether to log all events for debugging
        """
        self.listeners: Dict[EventType, List[Callable[..., Any]]] = {}
        self.key_listeners: Dict[Tuple[EventType, Hashable], List[Callable[..., Any]]] = {}
        self.debug_logging = debug_logging

    def subscribe(self, event_type: EventType, callback: Callable[..., Any]) -> None:
        """
        Subscribe to every event of a type, whatever key it concerns.

        Args:
            event_type: Type of event to subscribe to (EventType enum)
            callback: Function called with the event data as keyword arguments
        """
        self._add(self.listeners.setdefault(event_type, []), callback, event_type.name)

    def subscribe_key(self, event_type: EventType, key: Hashable, callback: Callable[..., Any]) -> None:
        """
        Subscribe to the events of a type published for one list key.

        Args:
            event_type: Type of event to subscribe to (EventType enum)
            key: List key the events must carry as `key=`
            callback: Function called with the event data as keyword arguments
        """
        self._add(
            self.key_listeners.setdefault((event_type, key), []),
            callback,
            f"{event_type.name}[{key}]",
        )

    def unsubscribe(self, event_type: EventType, callback: Callable[..., Any]) -> bool:
        """
        Remove a type-wide subscription.

        Returns:
            True if the callback was subscribed, False otherwise
        """
        return self._remove(self.listeners, event_type, callback, event_type.name)

    def unsubscribe_key(self, event_type: EventType, key: Hashable, callback: Callable[..., Any]) -> bool:
        """
        Remove a key-scoped subscription.

        Returns:
            True if the callback was subscribed for that key, False otherwise
        """
        return self._remove(self.key_listeners, (event_type, key), callback, f"{event_type.name}[{key}]")

    def publish(self, event_type: EventType, **data: Any) -> None:
        """
        Publish an event.

        Args:
            event_type: Type of event to publish (EventType enum)
            **data: Data associated with the event; `key=` selects the
                key-scoped listeners that receive it
        """
        if self.debug_logging:
            logger.debug(f"Event published: {event_type.name} - {data}")

        event_data = {
            "event_type": event_type.value,
            "event_enum": event_type,
            **data
        }

        # Copies: a callback may unsubscribe itself while we iterate
        callbacks = list(self.listeners.get(event_type, []))
        if "key" in data:
            callbacks.extend(self.key_listeners.get((event_type, data["key"]), []))

        for callback in callbacks:
            try:
                callback(**event_data)
            except Exception as e:
                logger.error(f"Error in event handler for '{event_type.name}': {e}")

    def get_event_types(self) -> Set[EventType]:
        """
        Get all event types that have subscribers, type-wide or key-scoped.

        Returns:
            Set of event types with active subscribers
        """
        types = {event_type for event_type, callbacks in self.listeners.items() if callbacks}
        types.update(event_type for (event_type, _key), callbacks in self.key_listeners.items() if callbacks)
        return types

    def get_subscriber_count(self, event_type: EventType) -> int:
        """
        Get the number of subscribers for an event type, across all keys.

        Args:
            event_type: The event type to check (EventType enum)

        Returns:
            Number of subscribers for the event type
        """
        scoped = sum(
            len(callbacks)
            for (scoped_type, _key), callbacks in self.key_listeners.items()
            if scoped_type is event_type
        )
        return len(self.listeners.get(event_type, [])) + scoped

    def has_subscribers(self, event_type: EventType) -> bool:
        """
        Check if an event type has any subscribers.

        Returns:
            True if the event type has subscribers, False otherwise
        """
        return self.get_subscriber_count(event_type) > 0

    def clear_all_subscriptions(self) -> None:
        """
        Clear all event subscriptions.
        Useful for testing or when shutting down the application.
        """
        self.listeners.clear()
        self.key_listeners.clear()
        logger.debug("All event subscriptions cleared")

    # ------------------------------------------------------------------ #
    # internals
    # ------------------------------------------------------------------ #

    @staticmethod
    def _add(callbacks: List[Callable[..., Any]], callback: Callable[..., Any], label: str) -> None:
        # Avoid duplicate subscriptions
        if callback not in callbacks:
            callbacks.append(callback)
            logger.debug(f"Subscribed to event '{label}'")

    @staticmethod
    def _remove(table: Dict[Any, List[Callable[..., Any]]], slot: Any, callback: Callable[..., Any], label: str) -> bool:
        callbacks = table.get(slot)
        if not callbacks or callback not in callbacks:
            return False
        callbacks.remove(callback)
        if not callbacks:
            del table[slot]
        logger.debug(f"Unsubscribed from event '{label}'")
        return True
