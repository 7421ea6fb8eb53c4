from __future__ import annotations

import re
import threading
import uuid
from datetime import datetime, timezone
from typing import Callable, Dict, TypeVar

from .controller import FormController

T = TypeVar("T")


class SessionNotFoundError(KeyError):
    pass


class SessionStore:
    """In-memory registry holding one FormController per form session.

    Calls into a controller go through ``run`` so that concurrent requests
    for the same session are serialized.
    """

    def __init__(self) -> None:
        self._sessions: Dict[str, FormController] = {}
        self._lock = threading.Lock()

    def create_session(self, controller: FormController, *, roll_number: str | None = None) -> str:
        with self._lock:
            session_id = self._generate_id(roll_number)
            while session_id in self._sessions:
                session_id = self._generate_id(roll_number)
            self._sessions[session_id] = controller
            return session_id

    def get_session(self, session_id: str) -> FormController | None:
        with self._lock:
            return self._sessions.get(session_id)

    def run(self, session_id: str, operation: Callable[[FormController], T]) -> T:
        with self._lock:
            controller = self._sessions.get(session_id)
            if controller is None:
                raise SessionNotFoundError(session_id)
            try:
                return operation(controller)
            finally:
                # A submitted form is finished; its state is not retained.
                if controller.is_submitted:
                    self._sessions.pop(session_id, None)

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._sessions.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _generate_id(self, roll_number: str | None) -> str:
        ts = datetime.now(timezone.utc).strftime("%Y%m%d%H%M%S")
        suffix = uuid.uuid4().hex
        if roll_number:
            safe = re.sub(r"[^A-Za-z0-9_-]", "-", roll_number)
            return f"form_{safe}_{suffix}"
        return f"form_{ts}_{suffix}"


__all__ = ["SessionStore", "SessionNotFoundError"]
