"""Outward events produced by the match state machine."""
from dataclasses import dataclass
from typing import Any, Optional, Tuple

ROOM_FULL = 'room_full'
LOBBY_UPDATE = 'lobby_update'
WORD_ENTRY_STARTED = 'word_entry_started'
ROUND_STARTED = 'round_started'
ROUND_UPDATED = 'round_updated'
HINT_REVEALED = 'hint_revealed'
ROUND_DECIDED = 'round_decided'
MATCH_FINISHED = 'match_finished'
CHAT_HISTORY = 'chat_history'
CHAT_MESSAGE = 'chat_message'


@dataclass(frozen=True)
class Event:
    """One message to deliver.

    ``to`` is the sid of a single recipient; None means every member of the
    session's room.
    """

    name: str
    args: Tuple[Any, ...] = ()
    to: Optional[str] = None

    @property
    def is_private(self) -> bool:
        return self.to is not None
