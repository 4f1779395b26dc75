"""
Fixtures that play a complete committed round.
"""

import pytest

from fairjack.blackjack.action import Action
from fairjack.blackjack.game import Game, Phase
from fairjack.blackjack.player import Player
from fairjack.blackjack.rules import Ruleset
from fairjack.fairness.commitment import HouseCommitment
from fairjack.fairness.pcg import PcgRng
from fairjack.fairness.verifier import RoundRecord


@pytest.fixture
def rules():
    return Ruleset().with_decks(2)


@pytest.fixture
def played_round(rules):
    """Commit, reshuffle as the player, play to the end and reveal."""
    house = PcgRng.from_entropy(bytes(range(16)))
    house_seed = house.to_seed()
    game = Game(rules, Player(chips=500), rng=house)
    commitment = HouseCommitment.create(house_seed, game.deck, rules.decks)

    player_rng = PcgRng(2024, 7)
    player_seed = player_rng.to_seed()
    game.player_shuffle(player_rng)
    final_deck_hash = game.deck_commitment()

    game.bet(25)
    while game.state.phase is Phase.PLAYER:
        game.action(Action.STAND)
    while game.state.phase is Phase.DEALER:
        game.dealer()
    game.finish()

    return RoundRecord(
        commitment=commitment,
        house_seed=house_seed,
        player_seed=player_seed,
        final_deck_hash=final_deck_hash,
        dealt=game.dealt,
    )
