"""
Tests for Card and Deck classes.
"""

import random

import pytest
from headsup.core.card import Card, Deck, Rank, Suit, parse_cards


class TestCard:
    """Tests for Card class."""

    def test_card_creation(self):
        """Test creating a card."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_rank_values(self):
        """Ranks carry their poker value, Ace high."""
        assert Rank.TWO == 2
        assert Rank.TEN == 10
        assert Rank.ACE == 14

    def test_card_from_string(self):
        """Test creating cards from string notation."""
        card1 = Card.from_string("As")
        assert card1.rank == Rank.ACE
        assert card1.suit == Suit.SPADES

        card2 = Card.from_string("K♥")
        assert card2.rank == Rank.KING
        assert card2.suit == Suit.HEARTS

        card3 = Card.from_string("Td")
        assert card3.rank == Rank.TEN
        assert card3.suit == Suit.DIAMONDS

        card4 = Card.from_string("10c")
        assert card4.rank == Rank.TEN
        assert card4.suit == Suit.CLUBS

    def test_invalid_card_string(self):
        """Test that invalid strings raise errors."""
        with pytest.raises(ValueError):
            Card.from_string("X")
        with pytest.raises(ValueError):
            Card.from_string("1s")
        with pytest.raises(ValueError):
            Card.from_string("Ax")

    def test_card_equality(self):
        """Cards are equal by value."""
        card1 = Card(Rank.ACE, Suit.SPADES)
        card2 = Card(Rank.ACE, Suit.SPADES)
        card3 = Card(Rank.KING, Suit.SPADES)

        assert card1 == card2
        assert card1 != card3
        assert card1 == Card.from_string("As")

    def test_card_hash(self):
        """Equal cards hash equally."""
        cards = {Card(Rank.ACE, Suit.SPADES), Card(Rank.ACE, Suit.SPADES)}
        assert len(cards) == 1

    def test_card_is_immutable(self):
        """Cards cannot be changed after creation."""
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_string_representation(self):
        """Test card string representations."""
        card = Card(Rank.ACE, Suit.SPADES)
        assert str(card) == "A♠"
        assert repr(card) == "Card(As)"
        assert card.short_str == "As"

    def test_card_to_dict(self):
        card = Card(Rank.QUEEN, Suit.HEARTS)
        assert card.to_dict() == {
            "rank": "Q",
            "suit": "♥",
            "text": "Q♥",
            "color": "red",
        }


class TestDeck:
    """Tests for Deck class."""

    def test_deck_has_52_cards(self, unshuffled_deck):
        """A new deck holds every card exactly once."""
        assert len(unshuffled_deck) == 52
        assert len(set(unshuffled_deck.cards)) == 52

    def test_canonical_order(self, unshuffled_deck):
        """Unshuffled decks run suit by suit from Two to Ace."""
        cards = unshuffled_deck.cards
        assert cards[0] == Card(Rank.TWO, Suit.CLUBS)
        assert cards[12] == Card(Rank.ACE, Suit.CLUBS)
        assert cards[13] == Card(Rank.TWO, Suit.DIAMONDS)
        assert cards[-1] == Card(Rank.ACE, Suit.SPADES)
        assert Deck().cards == cards

    def test_shuffle_is_permutation(self, deck):
        """Shuffling reorders without adding or losing cards."""
        assert len(deck) == 52
        assert set(deck.cards) == set(Deck().cards)

    def test_seeded_shuffle_is_reproducible(self):
        deck1 = Deck(shuffle=True, rng=random.Random(3))
        deck2 = Deck(shuffle=True, rng=random.Random(3))
        assert deck1.cards == deck2.cards

    def test_draw_takes_front_card(self, unshuffled_deck):
        card = unshuffled_deck.draw()
        assert card == Card(Rank.TWO, Suit.CLUBS)
        assert len(unshuffled_deck) == 51
        assert unshuffled_deck.dealt_cards == [card]

    def test_draw_many(self, deck):
        """Drawn cards leave the deck."""
        hand = deck.draw_many(2)
        assert len(hand) == 2
        assert deck.remaining == 50
        for card in hand:
            assert card not in deck.cards

    def test_draw_from_empty_deck(self, unshuffled_deck):
        """An empty deck yields no card rather than inventing one."""
        unshuffled_deck.draw_many(52)
        assert unshuffled_deck.remaining == 0
        assert unshuffled_deck.draw() is None

    def test_draw_many_stops_early(self, unshuffled_deck):
        unshuffled_deck.draw_many(50)
        rest = unshuffled_deck.draw_many(5)
        assert len(rest) == 2
        assert unshuffled_deck.draw_many(3) == []

    def test_no_card_drawn_twice(self, deck):
        drawn = deck.draw_many(52)
        assert len(set(drawn)) == 52

    def test_reset(self, deck):
        deck.draw_many(9)
        deck.reset()
        assert len(deck) == 52
        assert deck.dealt_cards == []


class TestParseCards:
    """Tests for parse_cards function."""

    def test_parse_space_separated(self):
        cards = parse_cards("As Kh 10d")
        assert cards == [
            Card(Rank.ACE, Suit.SPADES),
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.TEN, Suit.DIAMONDS),
        ]

    def test_parse_no_separator(self):
        cards = parse_cards("AsKhTd")
        assert len(cards) == 3
        assert cards[2] == Card(Rank.TEN, Suit.DIAMONDS)

    def test_parse_with_symbols(self):
        cards = parse_cards("A♠ K♥")
        assert cards == [Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)]

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            parse_cards("AsK")
