"""
DataGrid Sheets - Client Configuration
======================================
Environment variable management for the spreadsheet client

Usage:
    from frontend.settings import client_settings
    print(client_settings.API_URL)
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

LOCAL_API_URL = "http://localhost:5000"


class ClientSettings(BaseSettings):
    """
    Spreadsheet client configuration loaded from environment variables
    """

    API_URL: str = ""  # deployed backend, used when not running on localhost
    GRID_ROWS: int = 50
    GRID_COLS: int = 80
    PAGE_SIZE: int = 50

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="DATAGRID_",
        case_sensitive=True,
        extra="ignore"
    )


client_settings = ClientSettings()


def get_base_url(hostname: str = "localhost") -> str:
    """Backend base URL for the host the client runs on"""
    if hostname == "localhost":
        return LOCAL_API_URL
    return client_settings.API_URL
