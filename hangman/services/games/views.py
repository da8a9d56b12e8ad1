from typing import Any, Dict, List

from hangman.models import MAX_MISTAKES, OUTCOME_LOST, Session

MASK_PLACEHOLDER = '_'


def serialize_lobby(session: Session) -> Dict[str, Any]:
    return {
        'phase': session.phase,
        'rounds': session.total_rounds,
        'current_round': session.current_round,
        'rematch_votes': len(session.rematch_votes),
        'players': [p.to_dict() for p in session.participants],
    }


def display_mask(session: Session) -> List[str]:
    return [ch if shown else MASK_PLACEHOLDER for ch, shown in zip(session.answer, session.revealed)]


def serialize_round(session: Session) -> Dict[str, Any]:
    """Round view sent to both players.

    The answer itself only appears once the round has been lost.
    """
    payload = {
        'phase': session.phase,
        'subphase': session.subphase,
        'turn': session.turn,
        'player_order': [p.sid for p in session.participants],
        'mistakes': session.mistakes,
        'max_mistakes': MAX_MISTAKES,
        'guesses': list(session.guesses),
        'mask': display_mask(session),
    }
    if session.outcome == OUTCOME_LOST:
        payload['answer'] = session.answer
    return payload


def serialize_scores(session: Session) -> List[Dict[str, Any]]:
    return [{'id': p.sid, 'name': p.name, 'score': p.score} for p in session.participants]


def winner_message(scores: List[Dict[str, Any]]) -> str:
    """Strictly higher score wins; equal scores are a tie."""
    if len(scores) < 2:
        return f"{scores[0]['name']} wins!" if scores else "It's a tie!"
    first, second = scores[0], scores[1]
    if first['score'] > second['score']:
        return f"{first['name']} wins!"
    if second['score'] > first['score']:
        return f"{second['name']} wins!"
    return "It's a tie!"
