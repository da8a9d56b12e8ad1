import logging
import threading
from typing import List

from flask import current_app, has_app_context

from hangman.models import (
    DEFAULT_CHAT_LIMIT,
    DEFAULT_TOTAL_ROUNDS,
    MAX_PARTICIPANTS,
    OUTCOME_LOST,
    OUTCOME_WON,
    PHASE_ENTRY,
    PHASE_FINISHED,
    PHASE_LOBBY,
    PHASE_ROUND_A,
    PHASE_ROUND_B,
    ROUND_PHASES,
    SUBPHASE_IDLE,
    SUBPHASE_PLAYING,
    SUBPHASE_RESULT,
    SYSTEM_NAME,
    ChatMessage,
    Participant,
    Session,
)
from . import events as ev
from .events import Event
from .guesses import STATUS_WON, resolve_guess
from .normalize import (
    clamp_rounds,
    normalize_chat,
    normalize_hint,
    normalize_name,
    normalize_word,
)
from .rounds import setter_of, start_play_round
from .scoring import award_points
from .views import serialize_lobby, serialize_round, serialize_scores, winner_message

_logger = logging.getLogger(__name__)


def _log(message: str) -> None:
    if has_app_context():
        current_app.logger.info(message)
    else:
        _logger.info(message)


class MatchStateMachine:
    """Sole writer of one session's state.

    Each action first checks its guard over phase, subphase, caller and turn
    holder. A failed guard returns an empty list and leaves the session
    untouched: invalid or out-of-phase input is dropped, not reported.
    Actions never emit anything themselves; they return the events to
    deliver, in order.
    """

    def __init__(self, key: str, default_rounds: int = DEFAULT_TOTAL_ROUNDS, chat_limit: int = DEFAULT_CHAT_LIMIT):
        self.key = key
        self.default_rounds = clamp_rounds(default_rounds)
        self.chat_limit = chat_limit
        self.lock = threading.RLock()
        self.session = self._new_session()

    def _new_session(self, participants=None) -> Session:
        return Session(key=self.key, total_rounds=self.default_rounds, participants=list(participants or []))

    # ---- event helpers ----

    def _lobby_event(self) -> Event:
        return Event(ev.LOBBY_UPDATE, (serialize_lobby(self.session),))

    def _word_entry_event(self) -> Event:
        s = self.session
        return Event(ev.WORD_ENTRY_STARTED, ({'round': s.current_round + 1, 'total_rounds': s.total_rounds},))

    def _post_chat(self, name: str, text: str) -> Event:
        msg = ChatMessage(name=name, text=text)
        chat = self.session.chat
        chat.append(msg)
        if len(chat) > self.chat_limit:
            del chat[:len(chat) - self.chat_limit]
        return Event(ev.CHAT_MESSAGE, (msg.to_dict(),))

    # ---- lobby ----

    def join(self, sid, name) -> List[Event]:
        s = self.session
        nm = normalize_name(name)
        player = s.participant(sid)
        if player is None and s.is_full():
            _log(f"[room-full] session={self.key} sid={sid}")
            return [Event(ev.ROOM_FULL, to=sid)]
        if player is None:
            s.participants.append(Participant(sid=sid, name=nm))
            _log(f"[join] session={self.key} sid={sid} name={nm} slot={len(s.participants) - 1}")
        else:
            player.name = nm
        return [
            self._lobby_event(),
            Event(ev.CHAT_HISTORY, ([m.to_dict() for m in s.chat],), to=sid),
            self._post_chat(SYSTEM_NAME, f"{nm} joined"),
        ]

    def set_rounds(self, sid, value) -> List[Event]:
        s = self.session
        if s.phase != PHASE_LOBBY or s.slot(sid) != 0:
            return []
        s.total_rounds = clamp_rounds(value)
        return [self._lobby_event()]

    def set_ready(self, sid, ready) -> List[Event]:
        s = self.session
        player = s.participant(sid)
        if player is None:
            return []
        player.ready = bool(ready)
        events = [self._lobby_event()]
        if (
            s.phase == PHASE_LOBBY
            and len(s.participants) == MAX_PARTICIPANTS
            and all(p.ready for p in s.participants)
        ):
            s.phase = PHASE_ENTRY
            _log(f"[entry] session={self.key} round={s.current_round + 1}/{s.total_rounds}")
            events.append(self._word_entry_event())
            # Words handed in while still in the lobby already count
            if s.all_words_submitted():
                events.append(self._start_round_a())
        return events

    # ---- word entry ----

    def submit_word(self, sid, word, hint) -> List[Event]:
        s = self.session
        player = s.participant(sid)
        if player is None or s.phase not in (PHASE_LOBBY, PHASE_ENTRY):
            return []
        player.word = normalize_word(word) or None
        player.hint = normalize_hint(hint)
        events = [self._lobby_event()]
        if s.phase == PHASE_ENTRY and s.all_words_submitted():
            events.append(self._start_round_a())
        return events

    def _start_round_a(self) -> Event:
        s = self.session
        start_play_round(s, PHASE_ROUND_A)
        _log(f"[round] session={self.key} phase={s.phase} turn={s.turn}")
        return Event(ev.ROUND_STARTED, (serialize_round(s),))

    # ---- play rounds ----

    def request_hint(self, sid) -> List[Event]:
        s = self.session
        if s.participant(sid) is None or s.phase not in ROUND_PHASES:
            return []
        setter = setter_of(s)
        hint = (setter.hint if setter else None) or ''
        # Shared reveal: both players see it
        return [Event(ev.HINT_REVEALED, ({'hint': hint},))]

    def guess(self, sid, letter) -> List[Event]:
        s = self.session
        if s.subphase != SUBPHASE_PLAYING or sid != s.turn:
            return []
        outcome = resolve_guess(s, letter)
        if outcome is None:
            return []

        decision = None
        if outcome.decided:
            s.subphase = SUBPHASE_RESULT
            if outcome.status == STATUS_WON:
                s.outcome = OUTCOME_WON
                points = award_points(s.participant(s.turn), s.mistakes)
                decision = {
                    'won': True,
                    'points': points,
                    'message': f"Your guess was CORRECT.\nYour score is {points} points.",
                }
            else:
                s.outcome = OUTCOME_LOST
                decision = {
                    'won': False,
                    'answer': s.answer,
                    'message': f"Out of tries. Word was {s.answer}.",
                }
            _log(f"[decided] session={self.key} phase={s.phase} outcome={s.outcome} mistakes={s.mistakes}")

        events = [Event(ev.ROUND_UPDATED, (serialize_round(s), {'last_letter': outcome.letter, 'was_hit': outcome.hit}))]
        if decision is not None:
            events.append(Event(ev.ROUND_DECIDED, (decision,)))
        return events

    def advance(self, sid) -> List[Event]:
        s = self.session
        if s.participant(sid) is None or s.subphase != SUBPHASE_RESULT:
            return []
        if s.phase == PHASE_ROUND_A:
            start_play_round(s, PHASE_ROUND_B)
            _log(f"[round] session={self.key} phase={s.phase} turn={s.turn}")
            return [Event(ev.ROUND_STARTED, (serialize_round(s),))]
        if s.phase != PHASE_ROUND_B:
            return []

        s.current_round += 1
        s.clear_round()
        s.subphase = SUBPHASE_IDLE
        if s.current_round >= s.total_rounds:
            return [self._finish()]
        for p in s.participants:
            p.clear_submission()
        s.phase = PHASE_ENTRY
        _log(f"[entry] session={self.key} round={s.current_round + 1}/{s.total_rounds}")
        return [self._word_entry_event()]

    def _finish(self) -> Event:
        s = self.session
        s.phase = PHASE_FINISHED
        scores = serialize_scores(s)
        message = winner_message(scores)
        _log(f"[finish] session={self.key} scores={[(x['name'], x['score']) for x in scores]}")
        return Event(ev.MATCH_FINISHED, ({'scores': scores, 'winner_message': message},))

    # ---- after the match ----

    def vote_rematch(self, sid) -> List[Event]:
        s = self.session
        if s.participant(sid) is None or s.phase != PHASE_FINISHED:
            return []
        s.rematch_votes.add(sid)
        if all(p.sid in s.rematch_votes for p in s.participants):
            self._start_new_match()
        return [self._lobby_event()]

    def _start_new_match(self) -> None:
        s = self.session
        total_rounds = s.total_rounds
        for p in s.participants:
            p.score = 0
            p.ready = False
            p.clear_submission()
        fresh = self._new_session(s.participants)
        fresh.total_rounds = total_rounds
        fresh.chat = s.chat
        self.session = fresh
        _log(f"[rematch] session={self.key}")

    # ---- chat and departure ----

    def send_chat(self, sid, text) -> List[Event]:
        player = self.session.participant(sid)
        if player is None:
            return []
        clean = normalize_chat(text)
        if not clean:
            return []
        return [self._post_chat(player.name, clean)]

    def leave(self, sid) -> List[Event]:
        """Drop a participant and rebuild the session as a fresh lobby.

        Survivors keep their name, ready flag and score but lose any
        submitted word. A match never survives a departure.
        """
        s = self.session
        player = s.participant(sid)
        if player is None:
            return []
        survivors = [p for p in s.participants if p.sid != sid]
        for p in survivors:
            p.clear_submission()
        self.session = self._new_session(survivors)
        _log(f"[leave] session={self.key} sid={sid} name={player.name} remaining={len(survivors)}")
        return [self._lobby_event(), self._post_chat(SYSTEM_NAME, f"{player.name} left")]
