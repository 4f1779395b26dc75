"""
The blackjack round engine.

A `Game` plays exactly one round for one player:

    Ready -> Player(0) -> ... -> Player(n) -> Dealer -> Final

``bet`` deals the round, ``action`` plays the active hand, ``dealer`` draws
for the house one card at a time and settles the round, and ``finish`` pays
the player and consumes the game. Every step returns a `View`, a detached
snapshot that never exposes the dealer's hole card before the dealer plays.

Chips leave the player's bankroll when a bet, double or split is placed and
only come back in ``finish``. The one exception is deck exhaustion, which
refunds the whole outstanding bet and moves the game to ``Error``.

Before the bet, the player may reshuffle the house-shuffled deck with their
own RNG (``player_shuffle``). Together with the seed and deck commitments in
`fairjack.fairness`, this lets either party replay the exact deal afterwards.
"""

import copy
import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Callable, Dict, List, Optional, Tuple

from fairjack.blackjack.action import Action
from fairjack.blackjack.constants import (
    BLACKJACK_DENOMINATOR,
    BLACKJACK_NUMERATOR,
    MAX_HANDS,
    WIN_MULTIPLIER,
)
from fairjack.blackjack.errors import (
    DeckExhaustedError,
    DoubleAfterSplitError,
    InsufficientFundsError,
    InvalidActionError,
    SurrenderNotAllowedError,
)
from fairjack.blackjack.hand import BlackjackHand
from fairjack.blackjack.player import Player
from fairjack.blackjack.rules import Ruleset
from fairjack.common.card import Card
from fairjack.common.deck import Deck, RangeSource
from fairjack.events import EngineEventType, EventBus, EventEmitter
from fairjack.fairness.commitment import deck_commitment

logger = logging.getLogger("fairjack.game")


class Phase(Enum):
    READY = auto()
    PLAYER = auto()
    DEALER = auto()
    FINAL = auto()
    ERROR = auto()


@dataclass(frozen=True)
class State:
    """
    A game or hand state. ``hand`` is the index of the hand awaiting a
    decision and is only set in the ``PLAYER`` phase.
    """

    phase: Phase
    hand: Optional[int] = None

    @classmethod
    def ready(cls) -> "State":
        return cls(Phase.READY)

    @classmethod
    def player(cls, hand: int) -> "State":
        return cls(Phase.PLAYER, hand)

    @classmethod
    def dealer(cls) -> "State":
        return cls(Phase.DEALER)

    @classmethod
    def final(cls) -> "State":
        return cls(Phase.FINAL)

    @classmethod
    def error(cls) -> "State":
        return cls(Phase.ERROR)

    def __str__(self) -> str:
        if self.phase is Phase.PLAYER:
            return f"Player({self.hand})"
        return self.phase.name.capitalize()


class Result(Enum):
    WIN = "win"
    BLACKJACK = "blackjack"
    PUSH = "push"
    LOSE = "lose"
    SURRENDER = "surrender"


@dataclass(frozen=True)
class Outcome:
    """
    The settled result of one hand.

    ``amount`` is the payout for a win, blackjack or push, the forfeited
    stake for a loss, and the half stake handed back for a surrender.
    """

    result: Result
    amount: int

    @property
    def payout(self) -> int:
        """Chips returned to the player when the round is finished."""
        if self.result is Result.LOSE:
            return 0
        return self.amount

    @property
    def is_loss(self) -> bool:
        return self.result in (Result.LOSE, Result.SURRENDER)


@dataclass(frozen=True)
class Last:
    """The most recent publicly visible card and who received it."""

    to_dealer: bool
    card: Card


@dataclass(frozen=True)
class View:
    """
    Snapshot of a game for a caller. Holds its own copies of every hand, so
    it stays valid and unchanged while the game moves on.
    """

    rules: Ruleset
    bet: int
    dealer: BlackjackHand
    player: Player
    state: State
    states: Tuple[State, ...]
    last: Optional[Last]
    outcomes: Tuple[Outcome, ...]

    @property
    def active_hand(self) -> Optional[BlackjackHand]:
        if self.state.phase is not Phase.PLAYER:
            return None
        return self.player.hands[self.state.hand]


class Game:
    """
    One round of blackjack between the house and a single player.

    Args:
        rules: Table rules, fixed for the life of the game.
        player: The player and their bankroll. The game mutates this object.
        rng: House RNG. Shuffles a freshly built deck; when ``deck`` is given
            it is shuffled only if an RNG is passed too.
        deck: A prepared deck to play from instead of building one.
        event_bus: Emitter for round events. Defaults to the global bus.
    """

    def __init__(
        self,
        rules: Ruleset,
        player: Player,
        rng: Optional[RangeSource] = None,
        deck: Optional[Deck] = None,
        event_bus: Optional[EventEmitter] = None,
    ):
        self.rules = rules
        self.player = player
        self.events = event_bus or EventBus.get_instance()
        if deck is None:
            deck = Deck(rules.decks)
            deck.shuffle(rng)
        elif rng is not None:
            deck.shuffle(rng)
        self.deck = deck
        self.dealer_hand = BlackjackHand()
        self._wager = 0
        self.last: Optional[Last] = None

        self._phase = Phase.READY
        self._active = 0
        self._states: List[State] = [State.ready()]
        self._stakes: List[int] = []
        self._acted: List[bool] = []
        self._outcomes: List[Optional[Outcome]] = []
        self._dealt: List[Card] = []
        self._consumed = False

        logger.debug("Game created with %d cards (%s)", deck.size, rules)
        self.events.emit(
            EngineEventType.GAME_CREATED,
            {"rules": rules.to_dict(), "cards": deck.size},
        )

    @property
    def state(self) -> State:
        if self._phase is Phase.PLAYER:
            return State.player(self._active)
        return State(self._phase)

    @property
    def total_bet(self) -> int:
        """Chips staked this round, including doubles and splits."""
        return self._wager

    @property
    def states(self) -> Tuple[State, ...]:
        return tuple(self._states)

    @property
    def outcomes(self) -> Tuple[Outcome, ...]:
        return tuple(o for o in self._outcomes if o is not None)

    @property
    def dealt(self) -> Tuple[str, ...]:
        """
        Notation of every card drawn this round, in draw order. Only available
        once the round is over, since it includes the hole card.
        """
        if self._phase not in (Phase.FINAL, Phase.ERROR):
            raise InvalidActionError("The deal transcript is sealed until the round ends")
        return tuple(card.notation for card in self._dealt)

    def deck_commitment(self) -> str:
        """SHA-256 of the deck's current order."""
        return deck_commitment(self.deck)

    def view(self) -> View:
        if self._phase in (Phase.DEALER, Phase.FINAL):
            dealer = self.dealer_hand.copy()
        elif self._phase is Phase.READY:
            dealer = BlackjackHand()
        else:
            dealer = self.dealer_hand.hidden_hole()

        return View(
            rules=self.rules,
            bet=self._wager,
            dealer=dealer,
            player=copy.deepcopy(self.player),
            state=self.state,
            states=self.states,
            last=self.last,
            outcomes=self.outcomes,
        )

    def player_shuffle(self, rng: RangeSource) -> View:
        """
        Reshuffle the deck with the player's RNG. Only applies before the bet;
        afterwards the deck order is locked and the call does nothing.
        """
        if self._phase is not Phase.READY or self._consumed:
            logger.info("Player shuffle ignored in state %s", self.state)
            return self.view()
        self.deck.shuffle(rng)
        logger.debug("Deck reshuffled by player")
        self.events.emit(EngineEventType.SHUFFLE, {"by": "player"})
        return self.view()

    def bet(self, amount: int) -> View:
        """
        Once the game is in Ready state, the player may place a bet and be
        dealt a hand of cards.

        :raises InvalidActionError: Outside the Ready state or for a zero bet.
        :raises InsufficientFundsError: If the bankroll cannot cover the bet.
        :raises DeckExhaustedError: If the deck runs out during the deal.
        """
        if self._phase is not Phase.READY or self._consumed:
            raise InvalidActionError(f"Cannot bet in state {self.state}")
        if amount <= 0:
            raise InvalidActionError("Bet must be a positive number of chips")
        if self.player.chips < amount:
            raise InsufficientFundsError(amount - self.player.chips)

        self.player.reset_hands()
        self.player.chips -= amount
        self._wager = amount
        self._stakes = [amount]
        self._acted = [False]
        self._outcomes = [None]
        self._states = [State.player(0)]
        self._active = 0
        self.events.emit(EngineEventType.PLAYER_BET, {"amount": amount})
        logger.debug("Bet of %d placed", amount)

        hand = self.player.hands[0]
        for _ in range(2):
            card = self._draw()
            hand.deal(card)
            self._reveal(card, to_dealer=False, hand=0)
            card = self._draw()
            self.dealer_hand.deal(card)
            if len(self.dealer_hand) == 1:
                self.events.emit(
                    EngineEventType.CARD_DEALT, {"to": "dealer", "hidden": True}
                )
            else:
                self._reveal(card, to_dealer=True)

        self._phase = Phase.PLAYER
        self._refresh()
        return self.view()

    def action(self, action: Action) -> View:
        """
        Play the active hand.

        :raises InvalidActionError: Outside a player turn or when the action
            does not apply to the active hand.
        """
        if self._phase is not Phase.PLAYER:
            raise InvalidActionError(f"No hand to play in state {self.state}")

        handlers: Dict[Action, Callable[[int, BlackjackHand], None]] = {
            Action.HIT: self._hit,
            Action.STAND: self._stand,
            Action.DOUBLE: self._double,
            Action.SPLIT: self._split,
            Action.SURRENDER: self._surrender,
        }
        idx = self._active
        hand = self.player.hands[idx]
        handlers[action](idx, hand)

        logger.debug("Hand %d: %s -> %s", idx, action.value, self.state)
        self.events.emit(
            EngineEventType.PLAYER_ACTION,
            {"hand": idx, "action": action.value, "state": str(self.state)},
        )
        return self.view()

    def dealer(self) -> View:
        """
        Draw the next dealer card. The call that leaves the dealer with
        nothing more to draw also settles every hand waiting on the dealer.
        """
        if self._phase is not Phase.DEALER:
            raise InvalidActionError(f"Dealer cannot play in state {self.state}")

        if self._dealer_must_draw():
            card = self._draw()
            self.dealer_hand.deal(card)
            self.last = Last(True, card)
            self.events.emit(
                EngineEventType.DEALER_ACTION,
                {"action": "hit", "card": card.notation, "total": self.dealer_hand.score()},
            )
            if self._dealer_must_draw():
                return self.view()

        self._resolve()
        return self.view()

    def finish(self) -> Player:
        """
        Winnings are not transferred back to the player until finish() is
        called. This forces the round to go to completion. The game cannot
        be used afterwards.
        """
        if self._consumed or self._phase is not Phase.FINAL:
            raise InvalidActionError(f"Cannot finish in state {self.state}")
        self._consumed = True

        winnings = sum(outcome.payout for outcome in self.outcomes)
        self.player.chips += winnings
        logger.debug("Round finished, %d chips paid out", winnings)
        self.events.emit(
            EngineEventType.MONEY_PAYOUT,
            {"amount": winnings, "chips": self.player.chips},
        )
        return self.player

    def _hit(self, idx: int, hand: BlackjackHand) -> None:
        card = self._draw()
        hand.deal(card)
        self._reveal(card, to_dealer=False, hand=idx)
        self._acted[idx] = True
        self._refresh()

    def _stand(self, idx: int, hand: BlackjackHand) -> None:
        self._acted[idx] = True
        self._advance()

    def _double(self, idx: int, hand: BlackjackHand) -> None:
        if len(hand) != 2:
            raise InvalidActionError("Can only double down on two cards")
        if len(self.player.hands) > 1 and not self.rules.double_after_split:
            raise DoubleAfterSplitError("Doubling after a split is not allowed")
        stake = self._stakes[idx]
        if self.player.chips < stake:
            raise InsufficientFundsError(stake - self.player.chips)

        self.player.chips -= stake
        self._stakes[idx] += stake
        self._wager += stake
        card = self._draw()
        hand.deal(card)
        self._reveal(card, to_dealer=False, hand=idx)
        self._acted[idx] = True
        self._advance()

    def _split(self, idx: int, hand: BlackjackHand) -> None:
        if not hand.is_splittable:
            raise InvalidActionError("Only a pair of equal value can be split")
        if hand.split_aces:
            raise InvalidActionError("Split aces cannot be split again")
        if len(self.player.hands) >= MAX_HANDS:
            raise InvalidActionError(f"No more than {MAX_HANDS} hands per round")
        stake = self._stakes[idx]
        if self.player.chips < stake:
            raise InsufficientFundsError(stake - self.player.chips)

        self.player.chips -= stake
        self._wager += stake
        new_hand = hand.split_off()
        self.player.hands.insert(idx + 1, new_hand)
        self._stakes.insert(idx + 1, stake)
        self._acted.insert(idx + 1, False)
        self._outcomes.insert(idx + 1, None)
        self._states.insert(idx + 1, State.player(idx + 1))
        self._reindex()
        self._acted[idx] = True
        self.events.emit(
            EngineEventType.HAND_SPLIT, {"hand": idx, "hands": len(self.player.hands)}
        )

        card = self._draw()
        hand.deal(card)
        self._reveal(card, to_dealer=False, hand=idx)
        card = self._draw()
        new_hand.deal(card)
        self._reveal(card, to_dealer=False, hand=idx + 1)
        self._refresh()

    def _surrender(self, idx: int, hand: BlackjackHand) -> None:
        if not self.rules.surrender_allowed:
            raise SurrenderNotAllowedError("Surrender is not offered at this table")
        if self._acted[idx] or hand.is_split or len(hand) != 2:
            raise InvalidActionError("Surrender is only possible as the first decision")

        outcome = Outcome(Result.SURRENDER, self._stakes[idx] // 2)
        self._outcomes[idx] = outcome
        self._states[idx] = State.final()
        self._acted[idx] = True
        self._announce(idx, outcome)
        self._advance()

    def _draw(self) -> Card:
        """Draw a card from the deck, failing the round if it is empty."""
        card = self.deck.draw()
        if card is None:
            refund = self._wager
            self.player.chips += refund
            self._wager = 0
            self._phase = Phase.ERROR
            self._states = [State.error() for _ in self._states]
            logger.error("Deck exhausted mid-round; refunded %d chips", refund)
            self.events.emit(
                EngineEventType.ERROR, {"error": "deck_exhausted", "refund": refund}
            )
            raise DeckExhaustedError(f"Deck exhausted, bet of {refund} refunded")
        self._dealt.append(card)
        return card

    def _reveal(self, card: Card, to_dealer: bool, hand: Optional[int] = None) -> None:
        self.last = Last(to_dealer, card)
        self.events.emit(
            EngineEventType.CARD_DEALT,
            {
                "to": "dealer" if to_dealer else "player",
                "hand": hand,
                "card": card.notation,
                "hidden": False,
            },
        )

    def _reindex(self) -> None:
        self._states = [
            State.player(i) if state.phase is Phase.PLAYER else state
            for i, state in enumerate(self._states)
        ]

    def _refresh(self) -> None:
        """Move past the active hand if it is a blackjack or bust."""
        if self._phase is not Phase.PLAYER:
            return
        hand = self.player.hands[self._active]
        if hand.is_blackjack or hand.is_bust:
            self._advance()

    def _advance(self) -> None:
        """
        Close the active hand and hand the turn to the next unplayed hand,
        then to the dealer, or straight to Final when no hand needs the dealer.
        """
        idx = self._active
        if self._states[idx].phase is Phase.PLAYER:
            self._states[idx] = State.dealer()

        for j in range(idx + 1, len(self._states)):
            if self._states[j].phase is Phase.PLAYER:
                self._active = j
                self._refresh()
                return

        if any(state.phase is Phase.DEALER for state in self._states):
            self._phase = Phase.DEALER
        else:
            self._finalize()

    def _dealer_must_draw(self) -> bool:
        contenders = [
            hand
            for hand, state in zip(self.player.hands, self._states)
            if state.phase is Phase.DEALER and not hand.is_bust
        ]
        return bool(contenders) and self.rules.dealer_should_hit(self.dealer_hand)

    def _resolve(self) -> None:
        for idx, hand in enumerate(self.player.hands):
            if self._states[idx].phase is not Phase.DEALER:
                continue
            outcome = self._settle(hand, self._stakes[idx])
            self._outcomes[idx] = outcome
            self._states[idx] = State.final()
            self._announce(idx, outcome)
        self._finalize()

    def _settle(self, hand: BlackjackHand, stake: int) -> Outcome:
        """
        Bust first, then blackjack, then dealer bust, then the totals.
        """
        dealer = self.dealer_hand
        if hand.is_bust:
            return Outcome(Result.LOSE, stake)
        if hand.is_blackjack:
            if dealer.is_blackjack:
                return Outcome(Result.PUSH, stake)
            return Outcome(
                Result.BLACKJACK, stake * BLACKJACK_NUMERATOR // BLACKJACK_DENOMINATOR
            )
        if dealer.is_bust:
            return Outcome(Result.WIN, stake * WIN_MULTIPLIER)
        score, dealer_score = hand.score(), dealer.score()
        if score > dealer_score:
            return Outcome(Result.WIN, stake * WIN_MULTIPLIER)
        if score == dealer_score:
            return Outcome(Result.PUSH, stake)
        return Outcome(Result.LOSE, stake)

    def _announce(self, idx: int, outcome: Outcome) -> None:
        self.events.emit(
            EngineEventType.HAND_RESULT,
            {"hand": idx, "result": outcome.result.value, "amount": outcome.amount},
        )

    def _finalize(self) -> None:
        self._phase = Phase.FINAL
        logger.debug("Round complete: %s", [o.result.value for o in self.outcomes])
        self.events.emit(
            EngineEventType.ROUND_ENDED,
            {"outcomes": [o.result.value for o in self.outcomes]},
        )
