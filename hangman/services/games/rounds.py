from hangman.models import (
    PHASE_ROUND_A,
    PHASE_ROUND_B,
    SUBPHASE_PLAYING,
    Session,
)


def guesser_slot(phase: str) -> int:
    """Slot 0 guesses in round A, slot 1 in round B."""
    if phase == PHASE_ROUND_A:
        return 0
    if phase == PHASE_ROUND_B:
        return 1
    raise ValueError(f"not a play round: {phase}")


def start_play_round(session: Session, phase: str) -> None:
    """Set up a fresh play round for ``phase``.

    The guesser is fixed by slot, the answer is the other participant's
    committed word. Reveal, guess and mistake state start empty.
    """
    guesser = session.participants[guesser_slot(phase)]
    setter = session.opponent(guesser.sid)
    session.clear_round()
    session.phase = phase
    session.subphase = SUBPHASE_PLAYING
    session.turn = guesser.sid
    session.answer = (setter.word or '').upper()
    session.revealed = [False] * len(session.answer)


def setter_of(session: Session):
    """The participant whose word is being guessed, if a round is set up."""
    if session.turn is None:
        return None
    return session.opponent(session.turn)
