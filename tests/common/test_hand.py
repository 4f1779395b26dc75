from fairjack.common.card import Card, Rank, Suit
from fairjack.common.hand import Hand


def test_hand_starts_empty():
    hand = Hand()
    assert len(hand) == 0
    assert hand.cards == ()


def test_add_card_keeps_deal_order():
    hand = Hand()
    first = Card(Suit.HEARTS, Rank.ACE)
    second = Card(Suit.CLUBS, Rank.TWO)
    hand.add_card(first)
    hand.add_card(second)
    assert hand.cards == (first, second)


def test_initial_cards_are_copied():
    cards = [Card(Suit.HEARTS, Rank.ACE)]
    hand = Hand(cards)
    cards.append(Card(Suit.CLUBS, Rank.TWO))
    assert len(hand) == 1


def test_hand_equality():
    card = Card(Suit.SPADES, Rank.KING)
    assert Hand([card]) == Hand([card])
    assert Hand([card]) != Hand()
    assert Hand() != "Hand()"


def test_hand_repr_and_str():
    hand = Hand([Card(Suit.HEARTS, Rank.ACE), Card(Suit.SPADES, Rank.TEN)])
    assert repr(hand) == "Hand([Card(Suit.HEARTS, Rank.ACE), Card(Suit.SPADES, Rank.TEN)])"
    assert str(hand) == "A of ♥, 10 of ♠"
