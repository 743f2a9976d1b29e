"""Supabase client construction."""

from supabase import Client, create_client

from brainybot.config.settings import Settings


def create_supabase(settings: Settings) -> Client:
    """Service-role client for table access. Ownership is checked in the services."""
    return create_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
