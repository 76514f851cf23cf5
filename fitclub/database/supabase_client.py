import logging

from fastapi import FastAPI, Request
from supabase import Client, ClientOptions, create_client

from fitclub.config import settings

logger = logging.getLogger(__name__)


class SupabaseClient:
    """Process-wide Supabase clients, created once at startup and kept on ``app.state``."""

    @staticmethod
    def create_service_client() -> Client:
        """Client with service_role key; bypasses RLS. Falls back to the anon key when unset."""
        if not settings.supabase_url or not settings.supabase_key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be configured")
        key = settings.supabase_service_role_key or settings.supabase_key
        if not settings.supabase_service_role_key:
            logger.warning("SUPABASE_SERVICE_ROLE_KEY not set; admin auth calls will fail")
        return create_client(settings.supabase_url, key)

    @staticmethod
    def create_auth_client() -> Client:
        """Anon-key client for password sign-in.

        Signing in stores the user session on the client it was called on, so
        this client is never used for table access.
        """
        if not settings.supabase_url or not settings.supabase_key:
            raise RuntimeError("SUPABASE_URL and SUPABASE_KEY must be configured")
        return create_client(
            settings.supabase_url,
            settings.supabase_key,
            options=ClientOptions(auto_refresh_token=False, persist_session=False),
        )


def init_supabase(app: FastAPI) -> None:
    app.state.supabase = SupabaseClient.create_service_client()
    app.state.supabase_auth = SupabaseClient.create_auth_client()
    logger.info("Supabase clients initialised for %s", settings.supabase_url)


def get_supabase(request: Request) -> Client:
    return request.app.state.supabase


def get_auth_client(request: Request) -> Client:
    return request.app.state.supabase_auth
