from __future__ import annotations

import threading
import uuid
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator, Optional

from ...engine.game import GameState


@dataclass
class Session:
    """One live game plus the lock that serializes every access to it."""

    state: GameState
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False)


class InMemorySessionStore:
    """Thread-safe in-memory game session store.

    Responsibilities:
    - Create new sessions with unique `game_id`s
    - Hand out a session's state under that session's lock
    - Delete sessions

    The store lock only guards the id -> session mapping; a commit and the
    status evaluation that follows run under the per-session lock.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._sessions: Dict[str, Session] = {}

    def create(self, state: Optional[GameState] = None) -> str:
        """Create a new game session and return its `game_id`."""
        gid = str(uuid.uuid4())
        if state is None:
            state = GameState.new()
        with self._lock:
            self._sessions[gid] = Session(state)
        return gid

    def get(self, game_id: str) -> Optional[Session]:
        with self._lock:
            return self._sessions.get(game_id)

    @contextmanager
    def locked(self, game_id: str) -> Iterator[Optional[GameState]]:
        """Yield the session's state with its lock held, or None if unknown."""
        session = self.get(game_id)
        if session is None:
            yield None
            return
        with session.lock:
            yield session.state

    def delete(self, game_id: str) -> bool:
        with self._lock:
            return self._sessions.pop(game_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
