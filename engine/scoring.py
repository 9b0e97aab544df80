"""
Scoring - Final score calculation for a memory game.

score = pairs solved * 100 + seconds left * 10 - moves * 5, floored at 0.
"""

PAIR_POINTS = 100
TIME_BONUS_PER_SECOND = 10
MOVE_PENALTY = 5


def compute_score(pairs_solved: int, time_remaining: int, moves: int) -> int:
    """
    Calculate the score for a finished (or in-progress) round.

    Args:
        pairs_solved: Number of matched pairs
        time_remaining: Seconds left on the countdown
        moves: Number of accepted card flips

    Returns:
        The non-negative score
    """
    base_score = pairs_solved * PAIR_POINTS
    time_bonus = time_remaining * TIME_BONUS_PER_SECOND
    moves_penalty = moves * MOVE_PENALTY
    return max(0, base_score + time_bonus - moves_penalty)
