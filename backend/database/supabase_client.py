"""
DataGrid Sheets - Supabase Client
=================================
Singleton Supabase client for database connections

Usage:
    from database.supabase_client import supabase
    result = supabase.table('error_logs').select('*').execute()
"""

from supabase import create_client, Client
from typing import Optional

from config import settings
from utils import logger

MODULE = "Supabase"


class SupabaseClient:
    """
    Singleton Supabase client manager

    Provides:
    - Single client instance (connection pooling)
    - Admin client for elevated operations
    - Connection validation
    """

    _instance: Optional[Client] = None
    _admin_instance: Optional[Client] = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get regular Supabase client (anon key)

        Returns:
            Client: Supabase client instance

        Raises:
            ValueError: If Supabase credentials are not configured
        """
        if cls._instance is None:
            if not settings.is_supabase_configured():
                raise ValueError(
                    "Supabase is not configured. Please set SUPABASE_URL and "
                    "SUPABASE_KEY in your .env file."
                )

            cls._instance = create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_KEY
            )
            logger.info(f"Connected to {settings.SUPABASE_URL}", MODULE)

        return cls._instance

    @classmethod
    def get_admin_client(cls) -> Client:
        """
        Get admin Supabase client (service key)

        Reading arbitrary tables usually needs to bypass RLS policies, so the
        service key is preferred when present.

        Returns:
            Client: Supabase admin client instance
        """
        if cls._admin_instance is None:
            if not settings.SUPABASE_SERVICE_KEY:
                logger.warn("Service key not configured, using anon key", MODULE)
                return cls.get_client()

            cls._admin_instance = create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_SERVICE_KEY
            )
            logger.info("Admin client connected", MODULE)

        return cls._admin_instance

    @classmethod
    def test_connection(cls, client: Optional[Client] = None) -> Optional[int]:
        """
        Test Supabase connection by counting rows of the probe table

        Returns:
            int or None: Row count of the probe table, None if the probe failed
        """
        try:
            client = client or cls.get_client()
            result = client.table(settings.HEALTHCHECK_TABLE) \
                .select('*', count='exact', head=True) \
                .execute()
            logger.info(f"Supabase connected! Row count: {result.count}", MODULE)
            return result.count
        except Exception as e:
            logger.error(f"Connection test failed: {str(e)}", MODULE)
            return None


# =============================================================================
# Convenience: Global Client Instance
# =============================================================================

supabase: Optional[Client] = None

if settings.is_supabase_configured():
    try:
        if settings.SUPABASE_SERVICE_KEY:
            supabase = SupabaseClient.get_admin_client()
            logger.info("Using admin client (service key) - RLS bypassed", MODULE)
        else:
            supabase = SupabaseClient.get_client()
            logger.info("Using regular client (anon key) - RLS policies apply", MODULE)
    except ValueError as e:
        logger.warn(f"Initialization skipped: {str(e)}", MODULE)
else:
    logger.warn("Configuration not found. Table endpoints will fail until "
                "SUPABASE_URL and SUPABASE_KEY are set.", MODULE)


if __name__ == "__main__":
    print("=" * 70)
    print("Supabase Client Test")
    print("=" * 70)
    print(f"Supabase URL: {settings.SUPABASE_URL}")
    print(f"Supabase Configured: {settings.is_supabase_configured()}")

    if settings.is_supabase_configured():
        count = SupabaseClient.test_connection()
        if count is not None:
            print(f"\n✓ Supabase connection successful ({settings.HEALTHCHECK_TABLE}: {count} rows)")
        else:
            print("\n✗ Supabase connection failed")
            print("Please check your .env configuration")
    else:
        print("\n✗ Supabase not configured")
        print("Please set SUPABASE_URL and SUPABASE_KEY in .env")

    print("=" * 70)
