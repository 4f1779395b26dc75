import dataclasses

import pytest

from fairjack.common.card import Card, Rank, Suit


def test_card_initialization():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    assert card.suit == Suit.HEARTS
    assert card.rank == Rank.EIGHT


def test_card_repr():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    assert repr(card) == "Card(Suit.HEARTS, Rank.EIGHT)"


def test_card_str():
    assert str(Card(Suit.HEARTS, Rank.EIGHT)) == "8 of ♥"
    assert str(Card(Suit.SPADES, Rank.TEN)) == "10 of ♠"
    assert str(Card(Suit.CLUBS, Rank.QUEEN)) == "Q of ♣"


def test_card_notation():
    assert Card(Suit.HEARTS, Rank.ACE).notation == "Ah"
    assert Card(Suit.SPADES, Rank.KING).notation == "Ks"
    assert Card(Suit.DIAMONDS, Rank.TEN).notation == "Td"
    assert Card(Suit.CLUBS, Rank.TWO).notation == "2c"


def test_card_from_notation():
    assert Card.from_notation("Qd") == Card(Suit.DIAMONDS, Rank.QUEEN)
    for rank in Rank:
        for suit in Suit:
            card = Card(suit, rank)
            assert Card.from_notation(card.notation) == card


@pytest.mark.parametrize("notation", ["", "A", "10h", "1h", "Ax", "ah"])
def test_card_from_invalid_notation(notation):
    with pytest.raises(ValueError):
        Card.from_notation(notation)


def test_card_values():
    assert Card(Suit.HEARTS, Rank.TWO).value == 2
    assert Card(Suit.HEARTS, Rank.NINE).value == 9
    assert Card(Suit.HEARTS, Rank.TEN).value == 10
    assert Card(Suit.HEARTS, Rank.JACK).value == 10
    assert Card(Suit.HEARTS, Rank.QUEEN).value == 10
    assert Card(Suit.HEARTS, Rank.KING).value == 10
    assert Card(Suit.HEARTS, Rank.ACE).value == 11


def test_ace_is_the_only_rank_above_ten():
    assert [rank for rank in Rank if rank.rank_value > 10] == [Rank.ACE]


def test_ten_and_jack_are_distinct_ranks():
    assert Rank.TEN is not Rank.JACK
    assert len(Rank) == 13


def test_card_equality_and_hash():
    a = Card(Suit.SPADES, Rank.ACE)
    b = Card(Suit.SPADES, Rank.ACE)
    assert a == b
    assert hash(a) == hash(b)
    assert a != Card(Suit.CLUBS, Rank.ACE)
    assert len({a, b}) == 1


def test_card_is_immutable():
    card = Card(Suit.SPADES, Rank.ACE)
    with pytest.raises(dataclasses.FrozenInstanceError):
        card.rank = Rank.TWO


def test_invalid_suit():
    with pytest.raises(TypeError):
        Card("Z", Rank.EIGHT)


def test_invalid_rank():
    with pytest.raises(TypeError):
        Card(Suit.HEARTS, "invalid")


def test_non_string_rank():
    with pytest.raises(TypeError):
        Card(Suit.HEARTS, 123)
