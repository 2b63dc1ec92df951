"""Database connection"""
from functools import lru_cache

from supabase import create_client, Client
from formbuilder.config import get_settings


@lru_cache()
def get_supabase_admin() -> Client:
    """
    Get the service role Supabase client

    The client is created on first use so importing the app does not
    require a reachable database.

    Returns:
        Supabase client authenticated with the service role key
    """
    settings = get_settings()
    return create_client(
        settings.supabase_url,
        settings.supabase_service_role_key
    )
