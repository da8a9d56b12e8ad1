from hangman.services.games.normalize import (
    clamp_rounds,
    normalize_chat,
    normalize_hint,
    normalize_letter,
    normalize_name,
    normalize_word,
)


def test_word_is_uppercased_letters_only_and_truncated():
    assert normalize_word('ca-t 9s') == 'CATS'
    assert normalize_word('abcdefghijklmnopqrstuvwxyz') == 'ABCDEFGHIJKLMNOP'
    assert normalize_word(None) == ''
    assert normalize_word(1234) == ''


def test_hint_and_name_truncation():
    assert normalize_hint('x' * 200) == 'x' * 120
    assert normalize_hint(None) == ''
    assert normalize_name('') == 'Player'
    assert normalize_name(None) == 'Player'
    assert normalize_name('A' * 30) == 'A' * 20


def test_letter_must_be_exactly_one_letter():
    assert normalize_letter('a') == 'A'
    assert normalize_letter(' b! ') == 'B'
    assert normalize_letter('ab') == ''
    assert normalize_letter('7') == ''
    assert normalize_letter(None) == ''
    assert normalize_letter({'letter': 'a'}) == ''


def test_round_count_is_clamped():
    assert clamp_rounds(5) == 5
    assert clamp_rounds('4') == 4
    assert clamp_rounds(0) == 1
    assert clamp_rounds(-3) == 1
    assert clamp_rounds(99) == 10
    assert clamp_rounds('lots') == 1
    assert clamp_rounds(None) == 1
    assert clamp_rounds(2.9) == 2
    assert clamp_rounds(float('nan')) == 1


def test_chat_is_trimmed():
    assert normalize_chat('  hi  ') == 'hi'
    assert normalize_chat('   ') == ''
    assert len(normalize_chat('y' * 500)) == 400
