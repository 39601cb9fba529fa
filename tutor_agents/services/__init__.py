from .groq_client import CompletionClient, GroqCompletionClient, get_groq_client
from .supabase_client import get_supabase_client
from .session_store import InMemorySessionStore, SessionStore, SupabaseSessionStore
from .opik_setup import setup_opik
from .logging_setup import configure_logging

__all__ = [
    "CompletionClient",
    "GroqCompletionClient",
    "get_groq_client",
    "get_supabase_client",
    "InMemorySessionStore",
    "SessionStore",
    "SupabaseSessionStore",
    "setup_opik",
    "configure_logging",
]
