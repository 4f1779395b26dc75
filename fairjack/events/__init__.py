"""
Event system for the fairjack engine.
"""

from fairjack.events.emitter import EventEmitter, EventBus, EngineEventType

__all__ = ["EventEmitter", "EventBus", "EngineEventType"]
