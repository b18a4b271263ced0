# submission_api/database.py — Supabase client handle

import logging
from functools import lru_cache

from fastapi import Request
from supabase import Client, create_client

from submission_api.config import get_settings

logger = logging.getLogger(__name__)


@lru_cache
def get_supabase_client() -> Client:
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_service_key)


def check_store_connection(client: Client, table: str) -> None:
    """
    Probe the submissions table once so an unreachable store fails startup
    instead of the first upload. Raises whatever the client raises.
    """
    client.table(table).select("id").limit(1).execute()
    logger.info("Connected to data store", extra={"table": table})


def get_store_client(request: Request) -> Client:
    """FastAPI dependency returning the client bound at startup."""
    return request.app.state.supabase_client
