"""Game domain services: scoring, rounds, guesses and the match state machine.

This package contains pure(ish) domain logic that socket handlers and HTTP
routes call into, keeping transport concerns separated from core game
mechanics.
"""
from .events import Event
from .machine import MatchStateMachine
from .registry import SessionRegistry

__all__ = ['Event', 'MatchStateMachine', 'SessionRegistry']
