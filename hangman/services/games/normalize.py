"""Input cleanup for values arriving from clients.

Every function accepts any JSON value and never raises; what cannot be
salvaged comes back empty and the caller drops the action.
"""
import math
import re

from hangman.models import (
    MAX_CHAT_LENGTH,
    MAX_HINT_LENGTH,
    MAX_NAME_LENGTH,
    MAX_ROUNDS,
    MAX_WORD_LENGTH,
    MIN_ROUNDS,
)

_NON_LETTERS = re.compile(r'[^A-Z]')
DEFAULT_NAME = 'Player'


def _text(value) -> str:
    if value is None:
        return ''
    return str(value)


def letters_only(value) -> str:
    return _NON_LETTERS.sub('', _text(value).upper())


def normalize_name(value) -> str:
    name = _text(value) or DEFAULT_NAME
    return name[:MAX_NAME_LENGTH]


def normalize_word(value) -> str:
    return letters_only(value)[:MAX_WORD_LENGTH]


def normalize_hint(value) -> str:
    return _text(value)[:MAX_HINT_LENGTH]


def normalize_letter(value) -> str:
    """Return the single guessed letter, or '' when the input is not exactly one letter."""
    letter = letters_only(value)
    return letter if len(letter) == 1 else ''


def normalize_chat(value) -> str:
    return _text(value)[:MAX_CHAT_LENGTH].strip()


def clamp_rounds(value) -> int:
    """Round count in [MIN_ROUNDS, MAX_ROUNDS]; anything non-numeric or zero counts as 1."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return MIN_ROUNDS
    if math.isnan(number) or number == 0:
        return MIN_ROUNDS
    if math.isinf(number):
        return MAX_ROUNDS if number > 0 else MIN_ROUNDS
    return max(MIN_ROUNDS, min(MAX_ROUNDS, int(number)))
