import time
from dataclasses import dataclass, field
from typing import List, Optional, Set

PHASE_LOBBY = 'lobby'
PHASE_ENTRY = 'entry'
PHASE_ROUND_A = 'round_a'
PHASE_ROUND_B = 'round_b'
PHASE_FINISHED = 'finished'
ROUND_PHASES = (PHASE_ROUND_A, PHASE_ROUND_B)

SUBPHASE_IDLE = 'idle'
SUBPHASE_PLAYING = 'playing'
SUBPHASE_RESULT = 'result'

OUTCOME_WON = 'won'
OUTCOME_LOST = 'lost'

MAX_PARTICIPANTS = 2
MAX_MISTAKES = 6
MAX_WORD_LENGTH = 16
MAX_HINT_LENGTH = 120
MAX_NAME_LENGTH = 20
MAX_CHAT_LENGTH = 400
MIN_ROUNDS = 1
MAX_ROUNDS = 10
DEFAULT_TOTAL_ROUNDS = 3
DEFAULT_CHAT_LIMIT = 200
SYSTEM_NAME = 'System'


@dataclass
class Participant:
    sid: str
    name: str
    ready: bool = False
    word: Optional[str] = None
    hint: Optional[str] = None
    score: int = 0

    @property
    def has_word(self) -> bool:
        return bool(self.word)

    def clear_submission(self):
        self.word = None
        self.hint = None

    def to_dict(self):
        # Never includes the word or hint
        return {
            'id': self.sid,
            'name': self.name,
            'ready': self.ready,
            'has_word': self.has_word,
            'score': self.score,
        }


@dataclass
class ChatMessage:
    name: str
    text: str
    ts: int = field(default_factory=lambda: int(time.time() * 1000))

    def to_dict(self):
        return {'name': self.name, 'text': self.text, 'ts': self.ts}


@dataclass
class Session:
    """Canonical state of one two-player match.

    Only the match state machine writes to it. ``participants`` is in join
    order: slot 0 configures the match and guesses in round A, slot 1
    guesses in round B.
    """

    key: str
    total_rounds: int = DEFAULT_TOTAL_ROUNDS
    participants: List[Participant] = field(default_factory=list)
    phase: str = PHASE_LOBBY
    subphase: str = SUBPHASE_IDLE
    current_round: int = 0
    turn: Optional[str] = None
    answer: str = ''
    revealed: List[bool] = field(default_factory=list)
    guesses: List[str] = field(default_factory=list)
    mistakes: int = 0
    outcome: Optional[str] = None
    rematch_votes: Set[str] = field(default_factory=set)
    chat: List[ChatMessage] = field(default_factory=list)

    def participant(self, sid) -> Optional[Participant]:
        for p in self.participants:
            if p.sid == sid:
                return p
        return None

    def slot(self, sid) -> Optional[int]:
        for idx, p in enumerate(self.participants):
            if p.sid == sid:
                return idx
        return None

    def opponent(self, sid) -> Optional[Participant]:
        for p in self.participants:
            if p.sid != sid:
                return p
        return None

    def is_full(self) -> bool:
        return len(self.participants) >= MAX_PARTICIPANTS

    def all_words_submitted(self) -> bool:
        return len(self.participants) == MAX_PARTICIPANTS and all(p.has_word for p in self.participants)

    def clear_round(self):
        """Discard everything that belongs to a single play round."""
        self.turn = None
        self.answer = ''
        self.revealed = []
        self.guesses = []
        self.mistakes = 0
        self.outcome = None
