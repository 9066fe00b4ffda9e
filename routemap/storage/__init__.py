"""In-memory storage."""

from .sessions import SessionStore, get_session_store, set_session_store

__all__ = ["SessionStore", "get_session_store", "set_session_store"]
