from dataclasses import dataclass
from typing import Optional

from hangman.models import MAX_MISTAKES, Session
from .normalize import normalize_letter

STATUS_CONTINUE = 'continue'
STATUS_WON = 'won'
STATUS_LOST = 'lost'


@dataclass(frozen=True)
class GuessOutcome:
    letter: str
    hit: bool
    status: str

    @property
    def decided(self) -> bool:
        return self.status != STATUS_CONTINUE


def resolve_guess(session: Session, raw_letter) -> Optional[GuessOutcome]:
    """Apply one letter guess to the current play round.

    Returns None, leaving the session untouched, when the input is not a
    single letter or the letter was already tried this round. A letter that
    occurs several times reveals every occurrence and counts as one hit.
    Win is checked before loss. Phase and subphase are left to the caller.
    """
    letter = normalize_letter(raw_letter)
    if not letter or letter in session.guesses:
        return None

    session.guesses.append(letter)
    hit = False
    for idx, ch in enumerate(session.answer):
        if ch == letter:
            session.revealed[idx] = True
            hit = True
    if not hit:
        session.mistakes += 1

    if all(session.revealed):
        status = STATUS_WON
    elif session.mistakes >= MAX_MISTAKES:
        status = STATUS_LOST
    else:
        status = STATUS_CONTINUE
    return GuessOutcome(letter=letter, hit=hit, status=status)
