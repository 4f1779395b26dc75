"""
Round events.

A `Game` announces each step of a round (the bet, every public card, player
actions, dealer draws, results and the payout) on an `EventEmitter`. Display
layers and audit loggers subscribe to follow a round without reaching into
the game. Handlers run synchronously in subscription order. A handler that
raises is logged and skipped; the round carries on.
"""

import logging
import threading
from enum import Enum
from typing import Any, Callable, Dict, List, Tuple, Union

logger = logging.getLogger("fairjack.events")


class EngineEventType(Enum):
    """
    Event types emitted while a round is played.
    """

    GAME_CREATED = "game_created"
    SHUFFLE = "shuffle"
    ROUND_ENDED = "round_ended"

    PLAYER_BET = "player_bet"
    PLAYER_ACTION = "player_action"

    CARD_DEALT = "card_dealt"

    HAND_SPLIT = "hand_split"
    HAND_RESULT = "hand_result"

    DEALER_ACTION = "dealer_action"

    MONEY_PAYOUT = "money_payout"

    ERROR = "error"


EventKey = Union[EngineEventType, str]
Handler = Callable[[Dict[str, Any]], None]
AnyHandler = Callable[[Tuple[str, Dict[str, Any]]], None]


def _name(event_type: EventKey) -> str:
    return event_type.name if isinstance(event_type, Enum) else event_type


class EventEmitter:
    """
    Dispatches round events to subscribers.

    ``on`` handlers receive the event's data dict; ``on_any`` handlers receive
    an ``(event_name, data)`` pair for every event. Both return a function
    that cancels the subscription.
    """

    def __init__(self):
        self._handlers: Dict[str, List[Handler]] = {}
        self._any: List[AnyHandler] = []

    def on(self, event_type: EventKey, callback: Handler) -> Callable[[], None]:
        handlers = self._handlers.setdefault(_name(event_type), [])
        handlers.append(callback)
        return lambda: _discard(handlers, callback)

    def on_any(self, callback: AnyHandler) -> Callable[[], None]:
        self._any.append(callback)
        return lambda: _discard(self._any, callback)

    def emit(self, event_type: EventKey, data: Dict[str, Any]) -> None:
        name = _name(event_type)
        calls = [(cb, data) for cb in self._handlers.get(name, ())]
        calls += [(cb, (name, data)) for cb in self._any]
        for callback, payload in calls:
            try:
                callback(payload)
            except Exception:
                logger.exception("Error in event handler for %s", name)


def _discard(handlers: list, callback: Callable) -> None:
    if callback in handlers:
        handlers.remove(callback)


class EventBus:
    """
    Process-wide emitter used by games created without their own.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        with cls._lock:
            if cls._instance is None:
                cls._instance = EventEmitter()
            return cls._instance
