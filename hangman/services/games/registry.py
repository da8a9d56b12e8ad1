from typing import Dict, Optional

from hangman.models import DEFAULT_CHAT_LIMIT, DEFAULT_TOTAL_ROUNDS
from .machine import MatchStateMachine

DEFAULT_SESSION_KEY = 'our-little-game'


class SessionRegistry:
    """Maps a session key to the state machine that owns that session.

    The default key is always present. Other keys are created on first use
    and dropped again once their last participant has left.
    """

    def __init__(self, default_key: str = DEFAULT_SESSION_KEY, default_rounds: int = DEFAULT_TOTAL_ROUNDS,
                 chat_limit: int = DEFAULT_CHAT_LIMIT):
        self.default_key = default_key
        self.default_rounds = default_rounds
        self.chat_limit = chat_limit
        self._machines: Dict[str, MatchStateMachine] = {}
        self.reset()

    def init_app(self, app) -> None:
        self.default_key = app.config.get('SESSION_KEY', DEFAULT_SESSION_KEY)
        self.default_rounds = int(app.config.get('DEFAULT_TOTAL_ROUNDS', DEFAULT_TOTAL_ROUNDS))
        self.chat_limit = int(app.config.get('CHAT_HISTORY_LIMIT', DEFAULT_CHAT_LIMIT))
        self.reset()
        app.extensions['hangman'] = self

    def reset(self) -> None:
        self._machines = {self.default_key: self._build(self.default_key)}

    def _build(self, key: str) -> MatchStateMachine:
        return MatchStateMachine(key, default_rounds=self.default_rounds, chat_limit=self.chat_limit)

    def get(self, key: Optional[str] = None) -> MatchStateMachine:
        key = key or self.default_key
        machine = self._machines.get(key)
        if machine is None:
            machine = self._machines[key] = self._build(key)
        return machine

    def release(self, key: str) -> None:
        machine = self._machines.get(key)
        if machine is None or machine.session.participants:
            return
        if key == self.default_key:
            # Departures already rebuilt the session; keep the slot
            return
        del self._machines[key]
