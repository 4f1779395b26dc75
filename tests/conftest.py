"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by every test package.
"""

import pytest

from fairjack.common.card import Card
from fairjack.common.deck import Deck
from fairjack.events import EventBus


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def stacked_deck():
    """Build a deck that deals the given card notations in the given order."""

    def build(*notations):
        return Deck(cards=[Card.from_notation(n) for n in reversed(notations)])

    return build
