"""
Session storage for route map clients.
In-memory only: a session holds the current text fields and state,
never a route history.
"""

from typing import Optional
from collections import OrderedDict

from ..processing.presentation import RouteSession


class SessionStore:
    """
    Bounded in-memory store of RouteSession objects.

    Least recently used sessions are dropped once max_entries is exceeded.
    """

    def __init__(self, max_entries: int = 100):
        """
        Initialize session store.

        Args:
            max_entries: Maximum number of sessions to keep (least recently used are dropped)
        """
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._store: OrderedDict[str, RouteSession] = OrderedDict()

    def create(self, start_text: str = "", end_text: str = "") -> RouteSession:
        """Open a new session and return it."""
        session = RouteSession(start_text=start_text, end_text=end_text)
        self.add(session)
        return session

    def add(self, session: RouteSession) -> None:
        self._store[session.session_id] = session
        self._store.move_to_end(session.session_id)

        # Trim if exceeds max
        while len(self._store) > self.max_entries:
            self._store.popitem(last=False)

    def get(self, session_id: str) -> Optional[RouteSession]:
        """
        Get a session by ID, marking it as recently used.

        Returns:
            RouteSession if found, None otherwise
        """
        session = self._store.get(session_id)
        if session is not None:
            self._store.move_to_end(session_id)
        return session

    def remove(self, session_id: str) -> bool:
        """Drop a session. Returns False if it did not exist."""
        return self._store.pop(session_id, None) is not None

    def count(self) -> int:
        return len(self._store)

    def clear(self) -> None:
        """Clear all sessions (useful for testing)."""
        self._store.clear()


# Global singleton instance
_session_store: Optional[SessionStore] = None


def get_session_store() -> SessionStore:
    """Get the global session store instance."""
    global _session_store
    if _session_store is None:
        from ..config import get_yaml_setting
        _session_store = SessionStore(
            max_entries=int(get_yaml_setting("sessions", "max_entries", default=100))
        )
    return _session_store


def set_session_store(store: SessionStore):
    """Replace the global session store (called from main.py)."""
    global _session_store
    _session_store = store
