"""
Hand Evaluation for heads-up Hold'em.

This module picks the best 5-card hand out of 5-7 cards and returns a
HandScore that can be compared directly: a higher category wins, and equal
categories are decided by the category's tiebreak ranks, most significant
first.

Hand Categories (best to worst):
10. Royal Flush: A♠ K♠ Q♠ J♠ T♠
 9. Straight Flush: 5 consecutive cards of same suit
 8. Four of a Kind: 4 cards of same rank
 7. Full House: 3 of a kind + pair
 6. Flush: 5 cards of same suit
 5. Straight: 5 consecutive cards
 4. Three of a Kind: 3 cards of same rank
 3. Two Pair: 2 different pairs
 2. One Pair: 2 cards of same rank
 1. High Card: No made hand

Tiebreak ranks per category:
- straight / straight flush / royal flush: [top rank of the run]
- four of a kind: [quad rank, kicker]
- full house: [trip rank, pair rank]
- flush, high card: [5 ranks descending]
- three of a kind: [trip rank, kicker1, kicker2]
- two pair: [high pair, low pair, kicker]
- one pair: [pair rank, kicker1, kicker2, kicker3]

Note: Ace can be low in A-2-3-4-5 straight (wheel), whose top rank is 5.
"""

from __future__ import annotations
from collections import Counter
from dataclasses import dataclass
from enum import Enum, IntEnum
from functools import total_ordering
from typing import Dict, List, Optional, Sequence, Tuple

from headsup.core.card import Card, Rank, Suit, LOW_ACE


MIN_EVAL_CARDS = 5
MAX_EVAL_CARDS = 7
STRAIGHT_LENGTH = 5


class HandCategory(IntEnum):
    """Hand categories from best (highest value) to worst (lowest value)."""
    ROYAL_FLUSH = 10
    STRAIGHT_FLUSH = 9
    FOUR_OF_A_KIND = 8
    FULL_HOUSE = 7
    FLUSH = 6
    STRAIGHT = 5
    THREE_OF_A_KIND = 4
    TWO_PAIR = 3
    ONE_PAIR = 2
    HIGH_CARD = 1


# Category names for display
HAND_CATEGORY_NAMES = {
    HandCategory.ROYAL_FLUSH: "Royal Flush",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
    HandCategory.FOUR_OF_A_KIND: "Four of a Kind",
    HandCategory.FULL_HOUSE: "Full House",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.TWO_PAIR: "Two Pair",
    HandCategory.ONE_PAIR: "One Pair",
    HandCategory.HIGH_CARD: "High Card",
}

# Shown while fewer than five cards are known
EVALUATING_LABEL = "Evaluating..."


@total_ordering
@dataclass(frozen=True, eq=False)
class HandScore:
    """
    The best 5-card hand found in a set of cards.

    Attributes:
        category: The hand category
        ranks: Tiebreak ranks, most significant first
        cards: The five cards realising the hand (used for highlighting)

    Only (category, ranks) take part in comparison; two scores built from
    different cards compare equal when their strength is equal.
    """
    category: HandCategory
    ranks: Tuple[int, ...]
    cards: Tuple[Card, ...]

    @property
    def key(self) -> Tuple[int, Tuple[int, ...]]:
        return int(self.category), self.ranks

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HandScore):
            return self.key == other.key
        return NotImplemented

    def __lt__(self, other: HandScore) -> bool:
        if not isinstance(other, HandScore):
            return NotImplemented
        return self.key < other.key

    def __hash__(self) -> int:
        return hash(self.key)

    @property
    def name(self) -> str:
        return category_name(self.category)


class HeadsUpResult(Enum):
    """Outcome of comparing two hands over the same board."""
    A_WINS = "A_WINS"
    B_WINS = "B_WINS"
    SPLIT = "SPLIT"


def evaluate_best5(cards: Sequence[Card]) -> HandScore:
    """
    Evaluate the best 5-card hand out of 5-7 cards.

    Args:
        cards: 5-7 distinct Card objects (hole cards + board)

    Returns:
        The HandScore of the strongest 5-card combination

    Raises:
        ValueError: If not 5-7 cards are provided. Callers must never let
            this happen; it signals a bug, not a user error.
    """
    if not MIN_EVAL_CARDS <= len(cards) <= MAX_EVAL_CARDS:
        raise ValueError(
            f"Need {MIN_EVAL_CARDS}-{MAX_EVAL_CARDS} cards, got {len(cards)}"
        )

    cards = list(cards)
    groups = _rank_groups(cards)

    # Straight flush (royal flush included)
    flush_suit = find_flush(cards)
    if flush_suit is not None:
        suited = [c for c in cards if c.suit == flush_suit]
        top = find_straight(c.rank for c in suited)
        if top is not None:
            category = (
                HandCategory.ROYAL_FLUSH if top == Rank.ACE
                else HandCategory.STRAIGHT_FLUSH
            )
            return _score(category, [top], _straight_cards(suited, top))

    # Four of a kind
    quad_rank, quad_count = groups[0]
    if quad_count == 4:
        quads = _cards_of_rank(cards, quad_rank, 4)
        kicker = _highest_cards(cards, exclude={quad_rank}, n=1)
        return _score(
            HandCategory.FOUR_OF_A_KIND,
            [quad_rank] + [c.rank for c in kicker],
            quads + kicker,
        )

    # Full house: trips plus a different rank holding at least a pair
    trips = [rank for rank, count in groups if count == 3]
    if trips:
        trip_rank = trips[0]
        pair_rank = next(
            (rank for rank, count in groups if count >= 2 and rank != trip_rank),
            None,
        )
        if pair_rank is not None:
            return _score(
                HandCategory.FULL_HOUSE,
                [trip_rank, pair_rank],
                _cards_of_rank(cards, trip_rank, 3) + _cards_of_rank(cards, pair_rank, 2),
            )

    # Flush
    if flush_suit is not None:
        suited = sorted(
            (c for c in cards if c.suit == flush_suit),
            key=lambda c: c.rank,
            reverse=True,
        )[:5]
        return _score(HandCategory.FLUSH, [c.rank for c in suited], suited)

    # Straight
    top = find_straight(c.rank for c in cards)
    if top is not None:
        return _score(HandCategory.STRAIGHT, [top], _straight_cards(cards, top))

    # Three of a kind
    if trips:
        trip_rank = trips[0]
        kickers = _highest_cards(cards, exclude={trip_rank}, n=2)
        return _score(
            HandCategory.THREE_OF_A_KIND,
            [trip_rank] + [c.rank for c in kickers],
            _cards_of_rank(cards, trip_rank, 3) + kickers,
        )

    pairs = [rank for rank, count in groups if count == 2]

    # Two pair
    if len(pairs) >= 2:
        high, low = pairs[0], pairs[1]
        kicker = _highest_cards(cards, exclude={high, low}, n=1)
        return _score(
            HandCategory.TWO_PAIR,
            [high, low] + [c.rank for c in kicker],
            _cards_of_rank(cards, high, 2) + _cards_of_rank(cards, low, 2) + kicker,
        )

    # One pair
    if pairs:
        pair_rank = pairs[0]
        kickers = _highest_cards(cards, exclude={pair_rank}, n=3)
        return _score(
            HandCategory.ONE_PAIR,
            [pair_rank] + [c.rank for c in kickers],
            _cards_of_rank(cards, pair_rank, 2) + kickers,
        )

    # High card
    best = _highest_cards(cards, exclude=set(), n=5)
    return _score(HandCategory.HIGH_CARD, [c.rank for c in best], best)


def find_flush(cards: Sequence[Card]) -> Optional[Suit]:
    """Return the suit held by at least five of the cards, if any."""
    suit_counts = Counter(c.suit for c in cards)
    for suit, count in suit_counts.items():
        if count >= 5:
            return suit
    return None


def find_straight(ranks) -> Optional[int]:
    """
    Find the highest straight among the given ranks.

    Duplicates are ignored. An Ace also plays as 1 so the wheel
    (A-2-3-4-5) is found with a top of 5.

    Returns:
        The top rank value of the highest 5-card run, or None
    """
    values = sorted({int(r) for r in ranks}, reverse=True)
    if values and values[0] == Rank.ACE:
        values.append(LOW_ACE)

    # values are distinct and descending, so a window spanning exactly 4 is a run
    for i in range(len(values) - STRAIGHT_LENGTH + 1):
        if values[i] - values[i + STRAIGHT_LENGTH - 1] == STRAIGHT_LENGTH - 1:
            return values[i]
    return None


def compare_heads_up(
    hole_a: Sequence[Card],
    hole_b: Sequence[Card],
    board: Sequence[Card],
) -> HeadsUpResult:
    """
    Compare two players' hands over a shared board.

    A split is declared whenever both scores are equal in strength, even if
    the cards making them differ.
    """
    score_a = evaluate_best5(list(hole_a) + list(board))
    score_b = evaluate_best5(list(hole_b) + list(board))

    if score_a > score_b:
        return HeadsUpResult.A_WINS
    elif score_b > score_a:
        return HeadsUpResult.B_WINS
    return HeadsUpResult.SPLIT


def category_name(category: HandCategory) -> str:
    return HAND_CATEGORY_NAMES[category]


def best_hand_label(cards: Sequence[Card]) -> str:
    """Category name of the best hand so far, or a placeholder below five cards."""
    if len(cards) < MIN_EVAL_CARDS:
        return EVALUATING_LABEL
    return evaluate_best5(cards).name


def describe_score(score: HandScore) -> str:
    """Get a human-readable description of a scored hand."""
    category = score.category
    ranks = score.ranks

    if category == HandCategory.ROYAL_FLUSH:
        return "Royal Flush"
    elif category == HandCategory.STRAIGHT_FLUSH:
        return f"Straight Flush, {_rank_name(ranks[0])} high"
    elif category == HandCategory.FOUR_OF_A_KIND:
        return f"Four of a Kind, {_plural(ranks[0])}"
    elif category == HandCategory.FULL_HOUSE:
        return f"Full House, {_plural(ranks[0])} full of {_plural(ranks[1])}"
    elif category == HandCategory.FLUSH:
        return f"Flush, {_rank_name(ranks[0])} high"
    elif category == HandCategory.STRAIGHT:
        if ranks[0] == Rank.FIVE:
            return "Straight, Five high (Wheel)"
        return f"Straight, {_rank_name(ranks[0])} high"
    elif category == HandCategory.THREE_OF_A_KIND:
        return f"Three of a Kind, {_plural(ranks[0])}"
    elif category == HandCategory.TWO_PAIR:
        return f"Two Pair, {_plural(ranks[0])} and {_plural(ranks[1])}"
    elif category == HandCategory.ONE_PAIR:
        return f"Pair of {_plural(ranks[0])}"
    else:
        return f"High Card, {_rank_name(ranks[0])}"


def _rank_groups(cards: List[Card]) -> List[Tuple[Rank, int]]:
    """(rank, count) pairs ordered by count, then by rank, both descending."""
    counts = Counter(c.rank for c in cards)
    return sorted(counts.items(), key=lambda g: (g[1], g[0]), reverse=True)


def _cards_of_rank(cards: List[Card], rank: int, n: int) -> List[Card]:
    return [c for c in cards if c.rank == rank][:n]


def _highest_cards(cards: List[Card], exclude: set, n: int) -> List[Card]:
    """The n highest cards whose rank is not excluded."""
    rest = [c for c in cards if c.rank not in exclude]
    return sorted(rest, key=lambda c: c.rank, reverse=True)[:n]


def _straight_cards(cards: List[Card], top: int) -> List[Card]:
    """One card per value of the run ending at top, highest first."""
    by_value: Dict[int, Card] = {}
    for card in cards:
        by_value.setdefault(int(card.rank), card)
        if card.rank == Rank.ACE:
            by_value.setdefault(LOW_ACE, card)
    return [by_value[v] for v in range(top, top - STRAIGHT_LENGTH, -1)]


def _score(category: HandCategory, ranks: List[int], cards: List[Card]) -> HandScore:
    return HandScore(
        category=category,
        ranks=tuple(int(r) for r in ranks),
        cards=tuple(cards),
    )


_RANK_NAMES = {
    Rank.TWO: "Two", Rank.THREE: "Three", Rank.FOUR: "Four",
    Rank.FIVE: "Five", Rank.SIX: "Six", Rank.SEVEN: "Seven",
    Rank.EIGHT: "Eight", Rank.NINE: "Nine", Rank.TEN: "Ten",
    Rank.JACK: "Jack", Rank.QUEEN: "Queen", Rank.KING: "King",
    Rank.ACE: "Ace",
}


def _rank_name(rank: int) -> str:
    return _RANK_NAMES[Rank(rank)]


def _plural(rank: int) -> str:
    return "Sixes" if rank == Rank.SIX else f"{_rank_name(rank)}s"
