from hangman.models import Participant

# Points for a won round, indexed by mistakes made; anything past the table earns the floor
POINTS_BY_MISTAKES = (100, 80, 60, 40)
MIN_POINTS = 20


def score_for_mistakes(mistakes: int) -> int:
    """Points awarded to the guesser for revealing the word with ``mistakes`` misses."""
    mistakes = max(0, int(mistakes))
    if mistakes < len(POINTS_BY_MISTAKES):
        return POINTS_BY_MISTAKES[mistakes]
    return MIN_POINTS


def award_points(guesser: Participant, mistakes: int) -> int:
    """Add the round's points to the guesser's running score.

    Only called for won rounds. Returns the points awarded.
    """
    points = score_for_mistakes(mistakes)
    guesser.score += points
    return points
