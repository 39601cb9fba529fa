"""
Chat session persistence.

Two implementations share one interface:
- SupabaseSessionStore: `chats` and `messages` tables
- InMemorySessionStore: process-local, used when Supabase isn't configured
"""
from datetime import datetime, timezone
from typing import Any, Optional, Protocol, Sequence
import itertools
import logging
import threading
import uuid

from ..errors import SessionStoreError

logger = logging.getLogger(__name__)


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class SessionStore(Protocol):
    def create_session(self, title: str) -> dict[str, Any]:
        ...

    def list_sessions(self) -> list[dict[str, Any]]:
        ...

    def append_message(
        self, session_id: str, role: str, content: str, agent: Optional[str] = None
    ) -> None:
        ...

    def append_messages(self, session_id: str, messages: Sequence[dict[str, Any]]) -> None:
        """Store all of *messages* ({role, content, agent?}) or none of them."""
        ...

    def list_messages(self, session_id: str) -> list[dict[str, Any]]:
        ...

    def touch(self, session_id: str) -> None:
        ...


class SupabaseSessionStore:
    """Sessions in `chats`, messages in `messages` (linked by chat_id)."""

    def __init__(self, client):
        self.supabase = client

    def create_session(self, title: str) -> dict[str, Any]:
        try:
            result = self.supabase.table("chats").insert({"title": title}).execute()
        except Exception as e:
            raise SessionStoreError(f"Failed to create session: {e}") from e
        if not result.data:
            raise SessionStoreError("Failed to create session: no row returned")
        return result.data[0]

    def list_sessions(self) -> list[dict[str, Any]]:
        try:
            result = (
                self.supabase.table("chats")
                .select("*")
                .order("updated_at", desc=True)
                .execute()
            )
        except Exception as e:
            raise SessionStoreError(f"Failed to fetch sessions: {e}") from e
        return result.data or []

    def append_message(
        self, session_id: str, role: str, content: str, agent: Optional[str] = None
    ) -> None:
        self.append_messages(session_id, [{"role": role, "content": content, "agent": agent}])

    def append_messages(self, session_id: str, messages: Sequence[dict[str, Any]]) -> None:
        rows = []
        for message in messages:
            row = {"chat_id": session_id, "role": message["role"], "content": message["content"]}
            if message.get("agent"):
                row["agent_type"] = message["agent"]
            rows.append(row)
        if not rows:
            return
        # single request: the rows land together or not at all
        try:
            self.supabase.table("messages").insert(rows).execute()
        except Exception as e:
            raise SessionStoreError(f"Failed to store message: {e}") from e

    def list_messages(self, session_id: str) -> list[dict[str, Any]]:
        try:
            result = (
                self.supabase.table("messages")
                .select("*")
                .eq("chat_id", session_id)
                .order("created_at")
                .execute()
            )
        except Exception as e:
            raise SessionStoreError(f"Failed to fetch messages: {e}") from e
        return result.data or []

    def touch(self, session_id: str) -> None:
        try:
            self.supabase.table("chats").update({"updated_at": _now()}).eq("id", session_id).execute()
        except Exception as e:
            raise SessionStoreError(f"Failed to update session: {e}") from e


class InMemorySessionStore:
    """Thread-safe in-memory store. Contents are lost on restart."""

    def __init__(self):
        self._sessions: dict[str, dict[str, Any]] = {}
        self._messages: dict[str, list[dict[str, Any]]] = {}
        # tie-breaker for sessions updated within the same clock tick
        self._order: dict[str, int] = {}
        self._counter = itertools.count()
        self._lock = threading.Lock()

    def create_session(self, title: str) -> dict[str, Any]:
        now = _now()
        session = {"id": str(uuid.uuid4()), "title": title, "created_at": now, "updated_at": now}
        with self._lock:
            self._sessions[session["id"]] = session
            self._messages[session["id"]] = []
            self._order[session["id"]] = next(self._counter)
        logger.info(f"[session_store] created session {session['id'][:8]}")
        return dict(session)

    def list_sessions(self) -> list[dict[str, Any]]:
        with self._lock:
            ordered = sorted(
                self._sessions.values(),
                key=lambda s: (s["updated_at"], self._order[s["id"]]),
                reverse=True,
            )
            return [dict(s) for s in ordered]

    def append_message(
        self, session_id: str, role: str, content: str, agent: Optional[str] = None
    ) -> None:
        self.append_messages(session_id, [{"role": role, "content": content, "agent": agent}])

    def append_messages(self, session_id: str, messages: Sequence[dict[str, Any]]) -> None:
        rows = [
            {
                "chat_id": session_id,
                "role": m["role"],
                "content": m["content"],
                "agent_type": m.get("agent"),
                "created_at": _now(),
            }
            for m in messages
        ]
        with self._lock:
            if session_id not in self._sessions:
                raise SessionStoreError(f"Unknown session: {session_id}")
            self._messages[session_id].extend(rows)

    def list_messages(self, session_id: str) -> list[dict[str, Any]]:
        with self._lock:
            return [dict(m) for m in self._messages.get(session_id, [])]

    def touch(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is None:
                raise SessionStoreError(f"Unknown session: {session_id}")
            session["updated_at"] = _now()
            self._order[session_id] = next(self._counter)
