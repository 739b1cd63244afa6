"""
Tests for hand evaluation.
"""

import itertools
import random
from collections import Counter

import pytest
from headsup.core.card import Card, Deck, Rank, Suit, parse_cards
from headsup.core.hand import (
    EVALUATING_LABEL, HandCategory, HandScore, HeadsUpResult,
    best_hand_label, category_name, compare_heads_up, describe_score, evaluate_best5,
    find_flush, find_straight,
)


def score(cards_str):
    return evaluate_best5(parse_cards(cards_str))


class TestHandCategories:
    """Tests for each hand category."""

    def test_royal_flush(self, royal_flush):
        result = evaluate_best5(royal_flush)
        assert result.category == HandCategory.ROYAL_FLUSH
        assert result.ranks == (14,)
        assert result.name == "Royal Flush"

    def test_royal_flush_in_seven_cards(self):
        result = score("As Ks Qs Js Ts 2c 3h")
        assert result.category == HandCategory.ROYAL_FLUSH
        assert set(result.cards) == set(parse_cards("As Ks Qs Js Ts"))

    def test_straight_flush(self):
        result = score("9h 8h 7h 6h 5h 2c 3d")
        assert result.category == HandCategory.STRAIGHT_FLUSH
        assert result.ranks == (9,)

    def test_steel_wheel(self):
        """A-2-3-4-5 suited is a five-high straight flush, not a royal."""
        result = score("Ah 2h 3h 4h 5h Kd Qc")
        assert result.category == HandCategory.STRAIGHT_FLUSH
        assert result.ranks == (5,)

    def test_straight_flush_beats_quads_on_same_cards(self):
        result = score("5h 6h 7h 8h 9h 9s 9d")
        assert result.category == HandCategory.STRAIGHT_FLUSH
        assert result.ranks == (9,)

    def test_straight_flush_over_higher_plain_straight(self):
        """The suited run wins even when an unsuited run goes higher."""
        result = score("5h 6h 7h 8h 9h Td 2c")
        assert result.category == HandCategory.STRAIGHT_FLUSH
        assert result.ranks == (9,)

    def test_four_of_a_kind(self):
        result = score("9s 9h 9d 9c Ks Kh 2d")
        assert result.category == HandCategory.FOUR_OF_A_KIND
        assert result.ranks == (9, 13)

    def test_full_house(self):
        result = score("Ks Kh Kd 9c 9h 2s 3d")
        assert result.category == HandCategory.FULL_HOUSE
        assert result.ranks == (13, 9)

    def test_full_house_from_two_trips(self):
        """With two sets of trips the lower one plays as the pair."""
        result = score("Ks Kh Kd 9c 9h 9d 2s")
        assert result.category == HandCategory.FULL_HOUSE
        assert result.ranks == (13, 9)
        assert len(result.cards) == 5

    def test_full_house_picks_highest_pair(self):
        result = score("5s 5h 5d Qc Qh 7d 7s")
        assert result.category == HandCategory.FULL_HOUSE
        assert result.ranks == (5, 12)

    def test_full_house_does_not_reuse_trips(self):
        """Trips alone are not a full house."""
        result = score("Ks Kh Kd 9c 7h 2s 3d")
        assert result.category == HandCategory.THREE_OF_A_KIND

    def test_flush(self):
        result = score("As Js 9s 7s 5s 3s Kd")
        assert result.category == HandCategory.FLUSH
        assert result.ranks == (14, 11, 9, 7, 5)
        assert all(c.suit == Suit.SPADES for c in result.cards)

    def test_straight(self):
        result = score("9c 8d 7h 6s 5c 2d Kh")
        assert result.category == HandCategory.STRAIGHT
        assert result.ranks == (9,)

    def test_broadway_straight(self):
        result = score("Ah Kd Qc Js Th")
        assert result.category == HandCategory.STRAIGHT
        assert result.ranks == (14,)

    def test_six_card_straight_uses_top(self):
        result = score("4c 5d 6h 7s 8c 9d 2h")
        assert result.category == HandCategory.STRAIGHT
        assert result.ranks == (9,)

    def test_wheel_straight(self, wheel_straight):
        """A-2-3-4-5 counts as a straight with the Five on top."""
        result = evaluate_best5(wheel_straight)
        assert result.category == HandCategory.STRAIGHT
        assert result.ranks == (5,)
        assert Card(Rank.ACE, Suit.SPADES) in result.cards

    def test_wheel_with_pair_on_board(self):
        result = score("As 2h 3c 4d 5s 9c 9h")
        assert result.category == HandCategory.STRAIGHT
        assert result.ranks == (5,)

    def test_no_wraparound_straight(self):
        result = score("Qs Kh Ad 2c 3s")
        assert result.category == HandCategory.HIGH_CARD

    def test_three_of_a_kind(self):
        result = score("7s 7h 7d Ac Kd 2s 3h")
        assert result.category == HandCategory.THREE_OF_A_KIND
        assert result.ranks == (7, 14, 13)

    def test_two_pair(self):
        result = score("As Ah Kc Kd Qs 2c 3h")
        assert result.category == HandCategory.TWO_PAIR
        assert result.ranks == (14, 13, 12)

    def test_two_pair_from_three_pairs(self):
        """The third pair can still play as the kicker."""
        result = score("Ah Ad Kc Kd 5s 5h 7c")
        assert result.category == HandCategory.TWO_PAIR
        assert result.ranks == (14, 13, 7)

        result = score("Ah Ad Kc Kd 5s 5h 3c")
        assert result.ranks == (14, 13, 5)

    def test_one_pair(self):
        result = score("Js Jh 9c 7d 4s 3h 2c")
        assert result.category == HandCategory.ONE_PAIR
        assert result.ranks == (11, 9, 7, 4)

    def test_high_card(self):
        result = score("Ah Jd 9c 7s 5h 3d 2c")
        assert result.category == HandCategory.HIGH_CARD
        assert result.ranks == (14, 11, 9, 7, 5)


class TestEvaluatorInput:
    """Tests for evaluator preconditions."""

    def test_too_few_cards(self):
        with pytest.raises(ValueError):
            evaluate_best5(parse_cards("As Kh Qd Jc"))

    def test_too_many_cards(self):
        with pytest.raises(ValueError):
            evaluate_best5(parse_cards("As Kh Qd Jc Ts 9s 8s 7s"))

    def test_result_has_five_cards_from_input(self):
        cards = parse_cards("Ah Jd 9c 7s 5h 3d 2c")
        result = evaluate_best5(cards)
        assert len(result.cards) == 5
        assert len(set(result.cards)) == 5
        assert set(result.cards) <= set(cards)


class TestHelpers:
    """Tests for flush and straight detection."""

    def test_find_flush(self):
        assert find_flush(parse_cards("As Ks 2s 7s 9s 3d")) == Suit.SPADES
        assert find_flush(parse_cards("As Ks 2s 7s 9d 3d")) is None

    def test_find_straight(self):
        assert find_straight([Rank.FIVE, Rank.FOUR, Rank.THREE, Rank.TWO, Rank.ACE]) == 5
        assert find_straight([10, 11, 12, 13, 14, 9]) == 14
        assert find_straight([2, 3, 4, 5, 7, 8, 9]) is None

    def test_find_straight_ignores_duplicates(self):
        assert find_straight([6, 6, 7, 8, 8, 9, 10]) == 10


class TestHandComparison:
    """Tests for comparing hands."""

    def test_category_order(self):
        hands = [
            score("Ah Jd 9c 7s 5h"),        # high card
            score("Js Jh 9c 7d 4s"),        # one pair
            score("As Ah Kc Kd Qs"),        # two pair
            score("7s 7h 7d Ac Kd"),        # trips
            score("9c 8d 7h 6s 5c"),        # straight
            score("As Js 9s 7s 5s"),        # flush
            score("Ks Kh Kd 9c 9h"),        # full house
            score("9s 9h 9d 9c Ks"),        # quads
            score("9h 8h 7h 6h 5h"),        # straight flush
            score("As Ks Qs Js Ts"),        # royal flush
        ]
        assert hands == sorted(hands)
        for lower, higher in zip(hands, hands[1:]):
            assert lower < higher

    def test_wheel_loses_to_six_high_straight(self):
        wheel = score("As 2h 3d 4c 5s")
        six_high = score("2c 3h 4d 5c 6s")
        assert wheel < six_high

    def test_kicker_decides(self):
        board = parse_cards("Kh Kd 7s 4c 2h")
        hole_a = parse_cards("Ac 3d")
        hole_b = parse_cards("Qd 5s")
        assert compare_heads_up(hole_a, hole_b, board) == HeadsUpResult.A_WINS
        assert compare_heads_up(hole_b, hole_a, board) == HeadsUpResult.B_WINS

    def test_board_plays_split(self):
        """Both players playing a broadway board split."""
        board = parse_cards("As Ks Qd Jh Tc")
        result = compare_heads_up(parse_cards("2c 3d"), parse_cards("4h 5s"), board)
        assert result == HeadsUpResult.SPLIT

    def test_equal_strength_different_cards_split(self):
        board = parse_cards("Kh Kd 7s 7c 2h")
        result = compare_heads_up(parse_cards("Ac 3d"), parse_cards("Ad 4s"), board)
        assert result == HeadsUpResult.SPLIT

    def test_scores_ignore_cards_when_equal(self):
        a = score("Ac Kh Kd 7s 7c")
        b = score("Ad Kh Kd 7s 7c")
        assert a == b
        assert hash(a) == hash(b)

    def test_comparison_is_antisymmetric(self):
        rng = random.Random(5)
        for _ in range(200):
            deck = Deck(shuffle=True, rng=rng)
            board = deck.draw_many(5)
            hole_a, hole_b = deck.draw_many(2), deck.draw_many(2)
            forward = compare_heads_up(hole_a, hole_b, board)
            backward = compare_heads_up(hole_b, hole_a, board)
            mirrored = {
                HeadsUpResult.A_WINS: HeadsUpResult.B_WINS,
                HeadsUpResult.B_WINS: HeadsUpResult.A_WINS,
                HeadsUpResult.SPLIT: HeadsUpResult.SPLIT,
            }
            assert backward == mirrored[forward]


class TestBestFiveSelection:
    """The seven-card result matches the best of every five-card subset."""

    @staticmethod
    def _assert_realizes(result: HandScore):
        counts = sorted(Counter(c.rank for c in result.cards).values(), reverse=True)
        suits = {c.suit for c in result.cards}
        expected_counts = {
            HandCategory.FOUR_OF_A_KIND: [4, 1],
            HandCategory.FULL_HOUSE: [3, 2],
            HandCategory.THREE_OF_A_KIND: [3, 1, 1],
            HandCategory.TWO_PAIR: [2, 2, 1],
            HandCategory.ONE_PAIR: [2, 1, 1, 1],
            HandCategory.HIGH_CARD: [1, 1, 1, 1, 1],
        }
        if result.category in expected_counts:
            assert counts == expected_counts[result.category]
        if result.category in (HandCategory.FLUSH, HandCategory.STRAIGHT_FLUSH,
                               HandCategory.ROYAL_FLUSH):
            assert len(suits) == 1
        if result.category in (HandCategory.STRAIGHT, HandCategory.STRAIGHT_FLUSH,
                               HandCategory.ROYAL_FLUSH):
            assert find_straight(c.rank for c in result.cards) == result.ranks[0]

    def test_random_seven_card_hands(self):
        rng = random.Random(2024)
        for _ in range(150):
            cards = Deck(shuffle=True, rng=rng).draw_many(7)
            result = evaluate_best5(cards)

            best_subset = max(
                evaluate_best5(list(combo))
                for combo in itertools.combinations(cards, 5)
            )
            assert result == best_subset
            assert set(result.cards) <= set(cards)
            self._assert_realizes(result)


class TestLabels:
    """Tests for display labels and descriptions."""

    def test_label_below_five_cards(self):
        assert best_hand_label(parse_cards("As Ah")) == EVALUATING_LABEL
        assert best_hand_label(parse_cards("As Ah Kd Qc")) == "Evaluating..."

    def test_label_with_five_or_more(self):
        assert best_hand_label(parse_cards("As Ah Kd Qc 2s")) == "One Pair"
        assert best_hand_label(parse_cards("As Ah Kd Kc 2s 3h")) == "Two Pair"

    def test_describe_two_pair(self):
        assert describe_score(score("As Ah Kc Kd Qs")) == "Two Pair, Aces and Kings"

    def test_describe_wheel(self):
        assert describe_score(score("As 2h 3d 4c 5s")) == "Straight, Five high (Wheel)"

    def test_describe_full_house(self):
        assert describe_score(score("Ks Kh Kd 9c 9h")) == "Full House, Kings full of Nines"

    def test_describe_pair_of_sixes(self):
        assert describe_score(score("6s 6h Kd 9c 2h")) == "Pair of Sixes"

    def test_category_name(self):
        assert category_name(HandCategory.FULL_HOUSE) == "Full House"
        assert score("Ks Kh Kd 9c 9h").name == category_name(HandCategory.FULL_HOUSE)

    def test_describe_royal(self, royal_flush):
        assert describe_score(evaluate_best5(royal_flush)) == "Royal Flush"
