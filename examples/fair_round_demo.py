#!/usr/bin/env python3
"""
Example script playing one provably fair round end to end.

The house commits to its seed and deck order, the player reshuffles with
their own seed, the round is played and settled, and afterwards the revealed
seeds are stored in a ledger and the round is verified independently.
"""

import logging

from fairjack.blackjack import Action, Game, GameError, Phase, Player, Ruleset
from fairjack.events import EventBus
from fairjack.fairness import (
    FairnessVerifier,
    HouseCommitment,
    PcgRng,
    SQLiteCommitmentStore,
)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def log_event(event):
    event_type, data = event
    logger.info("%s %s", event_type, data)


def choose_action(view):
    hand = view.active_hand
    if hand.is_splittable and not hand.split_aces and len(view.player.hands) < 4:
        if hand.cards[0].value in (8, 11):
            return Action.SPLIT
    if len(hand) == 2 and hand.score() in (10, 11):
        return Action.DOUBLE
    if hand.score() < 17:
        return Action.HIT
    return Action.STAND


def run_fair_round_demo():
    """Run the fair round demo."""
    EventBus.get_instance().on_any(log_event)
    rules = Ruleset().with_decks(2)

    # House: seed, shuffle, publish hashes
    house_rng = PcgRng.from_entropy()
    house_seed = house_rng.to_seed()
    game = Game(rules, Player(chips=1000), rng=house_rng)
    commitment = HouseCommitment.create(house_seed, game.deck, rules.decks)
    logger.info("House commitment: %s", commitment.to_dict())

    store = SQLiteCommitmentStore()
    round_id = store.record_commitment(commitment, rules.to_dict())

    # Player: reshuffle with their own seed and note the deck hash
    player_rng = PcgRng.from_entropy()
    player_seed = player_rng.to_seed()
    game.player_shuffle(player_rng)
    final_deck_hash = game.deck_commitment()
    store.record_final_deck(round_id, final_deck_hash)

    view = game.bet(50)
    while view.state.phase is Phase.PLAYER:
        action = choose_action(view)
        try:
            view = game.action(action)
        except GameError as e:
            logger.info("%s refused (%s), standing instead", action.value, e)
            view = game.action(Action.STAND)
    while view.state.phase is Phase.DEALER:
        view = game.dealer()

    logger.info("Dealer: %s (%d)", view.dealer, view.dealer.score())
    for hand, outcome in zip(view.player.hands, view.outcomes):
        logger.info("Hand %s (%d): %s %d", hand, hand.score(), outcome.result.value, outcome.amount)
    player = game.finish()
    logger.info("Chips after the round: %d", player.chips)

    # Reveal and verify
    store.record_reveal(
        round_id,
        house_seed,
        player_seed,
        game.dealt,
        [outcome.result.value for outcome in view.outcomes],
    )
    record = store.load_record(round_id)
    results = FairnessVerifier().verify(record)
    store.store_verification_results(round_id, results)
    for result in results:
        logger.info("%s", result)

    store.close()
    return all(result.passed for result in results)


if __name__ == "__main__":
    fair = run_fair_round_demo()
    logger.info("Round verified fair: %s", fair)
