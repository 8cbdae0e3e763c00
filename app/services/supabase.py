import logging
import os

from supabase import AsyncClientOptions, acreate_client

logger = logging.getLogger(__name__)


class SupabaseConfigError(RuntimeError):
    pass


async def create_portal_client():
    # One client per portal session; it carries that session's auth state
    supabase_url = os.getenv("SUPABASE_URL")
    supabase_key = os.getenv("SUPABASE_KEY")

    if not supabase_url or not supabase_key:
        logger.error("Supabase URL or Key not found in environment variables")
        raise SupabaseConfigError("Server configuration error")

    logger.info("Creating Supabase client")
    return await acreate_client(
        supabase_url,
        supabase_key,
        options=AsyncClientOptions(auto_refresh_token=False, persist_session=False),
    )
