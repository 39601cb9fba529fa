"""
Supabase client wrapper.
"""
from supabase import create_client, Client
from functools import lru_cache


@lru_cache()
def get_supabase_client(url: str, key: str) -> Client:
    """Get a cached Supabase client for the given project."""
    return create_client(url, key)
