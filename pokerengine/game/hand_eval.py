"""Hand evaluation for Texas Hold'em.

Hands are compared in two steps: first by category (``HandRank``), then,
between hands of the same category, by a single integer tie-rank. The
tie-ranks are deliberately coarse (sums and weighted sums of ranks rather
than a full kicker-by-kicker ordering) and must stay that way; showdown
results depend on them.
"""
from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from itertools import combinations
from typing import Iterable, Sequence

from pokerengine.game.deck import Card, Rank

WHEEL = [2, 3, 4, 5, 14]


class HandRank(IntEnum):
    """Poker hand categories (higher is better)."""
    HIGH_CARD = 0
    PAIR = 1
    TWO_PAIR = 2
    THREE_OF_A_KIND = 3
    STRAIGHT = 4
    FLUSH = 5
    FULL_HOUSE = 6
    FOUR_OF_A_KIND = 7
    STRAIGHT_FLUSH = 8


def sort_cards(cards: Iterable[Card]) -> list[Card]:
    """Order cards by rank, then suit, lowest first."""
    return sorted(cards, key=lambda c: c.sort_key)


def _five(cards: Iterable[Card]) -> list[Card]:
    ordered = sort_cards(cards)
    if len(ordered) != 5:
        raise ValueError(f"Expected 5 cards, got {len(ordered)}")
    if len(set(ordered)) != 5:
        raise ValueError(f"Duplicate cards in {ordered}")
    return ordered


def _is_flush(cards: list[Card]) -> bool:
    return len({c.suit for c in cards}) == 1


def _is_straight(ranks: list[int]) -> bool:
    """Check if ascending ranks form a straight (wheel included)."""
    if ranks == WHEEL:
        return True
    return len(set(ranks)) == 5 and ranks[-1] - ranks[0] == 4


def _ranks_with_count(counts: Counter, n: int) -> list[int]:
    return sorted(rank for rank, count in counts.items() if count == n)


def classify(cards: Iterable[Card]) -> HandRank:
    """Classify exactly 5 cards, checking from the strongest category down.

    Args:
        cards: Five distinct cards, in any order.

    Returns:
        The hand category.

    Raises:
        ValueError: If there are not exactly 5 distinct cards.
    """
    ordered = _five(cards)
    ranks = [c.rank.value for c in ordered]
    counts = sorted(Counter(ranks).values(), reverse=True)
    is_flush = _is_flush(ordered)
    is_straight = _is_straight(ranks)

    if is_straight and is_flush:
        return HandRank.STRAIGHT_FLUSH
    if counts[0] == 4:
        return HandRank.FOUR_OF_A_KIND
    if counts == [3, 2]:
        return HandRank.FULL_HOUSE
    if is_flush:
        return HandRank.FLUSH
    if is_straight:
        return HandRank.STRAIGHT
    if counts[0] == 3:
        return HandRank.THREE_OF_A_KIND
    if counts[:2] == [2, 2]:
        return HandRank.TWO_PAIR
    if counts[0] == 2:
        return HandRank.PAIR
    return HandRank.HIGH_CARD


def straight_high(cards: Iterable[Card]) -> int:
    """Top card of a straight; the wheel counts as 1."""
    ranks = [c.rank.value for c in sort_cards(cards)]
    if ranks == WHEEL:
        return 1
    return ranks[-1]


def tie_rank(cards: Iterable[Card]) -> int:
    """Rank a 5-card hand against others of the same category.

    Values are only comparable between hands that ``classify`` puts in the
    same category.

    Args:
        cards: Five distinct cards.

    Returns:
        Integer where higher wins the tie.
    """
    ordered = _five(cards)
    category = classify(ordered)
    ranks = [c.rank.value for c in ordered]
    counts = Counter(ranks)

    if category in (HandRank.STRAIGHT, HandRank.STRAIGHT_FLUSH):
        return straight_high(ordered)

    if category in (HandRank.HIGH_CARD, HandRank.FLUSH):
        return sum(ranks)

    if category == HandRank.PAIR:
        pair = _ranks_with_count(counts, 2)[0]
        return pair * 1000 + sum(r for r in ranks if r != pair)

    if category == HandRank.TWO_PAIR:
        low_pair, high_pair = _ranks_with_count(counts, 2)
        kicker = _ranks_with_count(counts, 1)[0]
        return low_pair * 1000 + high_pair * 100 + kicker

    if category == HandRank.THREE_OF_A_KIND:
        trips = _ranks_with_count(counts, 3)[0]
        return trips * 1000 + sum(r for r in ranks if r != trips)

    if category == HandRank.FULL_HOUSE:
        trips = _ranks_with_count(counts, 3)[0]
        pair = _ranks_with_count(counts, 2)[0]
        return trips * 1000 + pair

    # Four of a kind
    quad = _ranks_with_count(counts, 4)[0]
    kicker = _ranks_with_count(counts, 1)[0]
    return quad * 1000 + kicker


def best_hand(hole_cards: Sequence[Card], board: Sequence[Card]) -> list[Card]:
    """Pick the best 5-card combination from hole cards and board.

    Every 5-card subset is classified and the subsets of the highest
    category are kept. Straights and straight flushes are separated by their
    top card. Other categories return the last subset enumerated; kickers are
    not compared here.

    Args:
        hole_cards: The seat's hole cards.
        board: Community cards.

    Returns:
        Five cards, lowest first.

    Raises:
        ValueError: If fewer than 5 cards are available.
    """
    all_cards = sort_cards(list(board) + list(hole_cards))

    if len(all_cards) < 5:
        raise ValueError(f"Need at least 5 cards, got {len(all_cards)}")

    best_rank = HandRank.HIGH_CARD
    best_combos: list[tuple[Card, ...]] = []

    for combo in combinations(all_cards, 5):
        rank = classify(combo)
        if rank > best_rank:
            best_rank = rank
            best_combos = [combo]
        elif rank == best_rank:
            best_combos.append(combo)

    if best_rank in (HandRank.STRAIGHT, HandRank.STRAIGHT_FLUSH):
        best = best_combos[0]
        best_top = straight_high(best)
        for combo in best_combos[1:]:
            top = straight_high(combo)
            if top > best_top:
                best, best_top = combo, top
        return list(best)

    return list(best_combos[-1])


_NAMES = {
    HandRank.HIGH_CARD: "High Card",
    HandRank.PAIR: "Pair",
    HandRank.TWO_PAIR: "Two Pair",
    HandRank.THREE_OF_A_KIND: "Three of a Kind",
    HandRank.STRAIGHT: "Straight",
    HandRank.FLUSH: "Flush",
    HandRank.FULL_HOUSE: "Full House",
    HandRank.FOUR_OF_A_KIND: "Four of a Kind",
    HandRank.STRAIGHT_FLUSH: "Straight Flush",
}


def get_hand_name(rank: HandRank) -> str:
    """Human-readable category name."""
    return _NAMES[rank]


def describe(cards: Sequence[Card]) -> str:
    """Describe a 5-card hand, e.g. "Full House, Js full of 8s"."""
    ordered = _five(cards)
    rank = classify(ordered)
    counts = Counter(c.rank.value for c in ordered)
    top = Rank(ordered[-1].rank.value)

    if rank in (HandRank.STRAIGHT, HandRank.STRAIGHT_FLUSH):
        high = straight_high(ordered)
        return f"{get_hand_name(rank)}, {Rank(5 if high == 1 else high)} high"
    if rank == HandRank.FOUR_OF_A_KIND:
        return f"Four of a Kind, {Rank(_ranks_with_count(counts, 4)[0])}s"
    if rank == HandRank.FULL_HOUSE:
        trips = Rank(_ranks_with_count(counts, 3)[0])
        pair = Rank(_ranks_with_count(counts, 2)[0])
        return f"Full House, {trips}s full of {pair}s"
    if rank == HandRank.THREE_OF_A_KIND:
        return f"Three of a Kind, {Rank(_ranks_with_count(counts, 3)[0])}s"
    if rank == HandRank.TWO_PAIR:
        low_pair, high_pair = _ranks_with_count(counts, 2)
        return f"Two Pair, {Rank(high_pair)}s and {Rank(low_pair)}s"
    if rank == HandRank.PAIR:
        return f"Pair of {Rank(_ranks_with_count(counts, 2)[0])}s"
    return f"{get_hand_name(rank)}, {top} high"


@total_ordering
@dataclass(eq=False)
class HandResult:
    """Result of hand evaluation."""
    rank: HandRank
    tie_rank: int
    cards: list[Card]  # The 5 cards making the hand
    description: str

    @property
    def strength(self) -> tuple[int, int]:
        return (self.rank.value, self.tie_rank)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HandResult):
            return NotImplemented
        return self.strength == other.strength

    def __lt__(self, other: "HandResult") -> bool:
        return self.strength < other.strength


def evaluate_hand(hole_cards: Sequence[Card], board: Sequence[Card]) -> HandResult:
    """Evaluate the best 5-card hand from hole cards and community cards.

    Args:
        hole_cards: Player's 2 hole cards.
        board: 3-5 community cards.

    Returns:
        Best HandResult.
    """
    cards = best_hand(hole_cards, board)
    return HandResult(
        rank=classify(cards),
        tie_rank=tie_rank(cards),
        cards=cards,
        description=describe(cards),
    )
