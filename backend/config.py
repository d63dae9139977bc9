"""
DataGrid Sheets - Configuration Management
==========================================
Environment variable management using Pydantic Settings

Usage:
    from config import settings
    print(settings.SUPABASE_URL)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional


class Settings(BaseSettings):
    """
    Application configuration loaded from environment variables
    """

    # ==========================================================================
    # Supabase Configuration
    # ==========================================================================
    SUPABASE_URL: str = ""
    SUPABASE_KEY: str = ""  # anon/public key
    SUPABASE_SERVICE_KEY: Optional[str] = None  # for admin operations
    TABLE_NAMES_RPC: str = "get_table_names"
    HEALTHCHECK_TABLE: str = "error_logs"

    # ==========================================================================
    # Application Settings
    # ==========================================================================
    APP_NAME: str = "DataGrid Sheets API"
    APP_VERSION: str = "1.0.0"
    HOST: str = "0.0.0.0"
    PORT: int = 5000

    # ==========================================================================
    # Paging / Export
    # ==========================================================================
    DEFAULT_PAGE_SIZE: int = 50
    MAX_PAGE_SIZE: int = 1000
    EXPORT_BATCH_SIZE: int = 1000

    # ==========================================================================
    # Logging
    # ==========================================================================
    LOG_TO_FILE: bool = True

    # ==========================================================================
    # Pydantic Settings Configuration
    # ==========================================================================
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra fields in .env
    )

    def is_supabase_configured(self) -> bool:
        """Check if Supabase is properly configured"""
        return bool(self.SUPABASE_URL and self.SUPABASE_KEY)


# =============================================================================
# Global Settings Instance
# =============================================================================
settings = Settings()


if __name__ == "__main__":
    print("=" * 70)
    print("Configuration Status")
    print("=" * 70)
    print(f"App Name: {settings.APP_NAME}")
    print(f"App Version: {settings.APP_VERSION}")
    print(f"Supabase Configured: {settings.is_supabase_configured()}")
    print(f"Supabase URL: {settings.SUPABASE_URL[:50]}..." if settings.SUPABASE_URL else "Not set")
    print(f"Page Size: {settings.DEFAULT_PAGE_SIZE} (max {settings.MAX_PAGE_SIZE})")
    print(f"Export Batch Size: {settings.EXPORT_BATCH_SIZE}")
    print("=" * 70)
