"""Showdown: choose the winning seats."""
from pokerengine.game.deck import Card
from pokerengine.game.hand_eval import HandRank, best_hand, classify, describe, tie_rank
from pokerengine.game.player import Seat
from pokerengine.utils.logger import get_logger

logger = get_logger(__name__)


def resolve_winners(seats: list[Seat], board: list[Card]) -> list[int]:
    """Evaluate every live seat and return the indices of the winners.

    Each non-folded seat gets its ``best_combo`` and ``hand_rank`` filled
    in. Seats holding the best category win; if several do, only those with
    the highest tie-rank for that category remain, and they share the pot.

    Args:
        seats: The table's seats, in seating order.
        board: Community cards.

    Returns:
        Indices into ``seats``, in seating order.
    """
    live = [idx for idx, seat in enumerate(seats) if seat.is_active]
    if not live:
        return []

    best_rank = HandRank.HIGH_CARD
    for idx in live:
        seat = seats[idx]
        seat.best_combo = best_hand(seat.hole_cards, board)
        seat.hand_rank = classify(seat.best_combo)
        if seat.hand_rank > best_rank:
            best_rank = seat.hand_rank
        logger.debug(f"{seat.name} shows {describe(seat.best_combo)}")

    contenders = [idx for idx in live if seats[idx].hand_rank == best_rank]
    if len(contenders) == 1:
        return contenders

    ranks = {idx: tie_rank(seats[idx].best_combo) for idx in contenders}
    top = max(ranks.values())
    return [idx for idx in contenders if ranks[idx] == top]
