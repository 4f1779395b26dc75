"""
Fixtures for scripting blackjack rounds card by card.

Cards are dealt player, dealer (hole), player, dealer (up card), then in the
order the round draws them.
"""

import pytest

from fairjack.blackjack.game import Game
from fairjack.blackjack.player import Player
from fairjack.blackjack.rules import Ruleset
from fairjack.events import EventEmitter


@pytest.fixture
def events():
    return EventEmitter()


@pytest.fixture
def make_game(stacked_deck, events):
    def build(*cards, chips=1000, rules=None):
        return Game(
            rules or Ruleset(),
            Player(chips=chips),
            deck=stacked_deck(*cards),
            event_bus=events,
        )

    return build
