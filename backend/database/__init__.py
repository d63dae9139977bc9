"""
Database package for DataGrid Sheets
====================================
Supabase-based data access layer
"""

from .supabase_client import SupabaseClient, supabase
from .table_repository import TableRepository

__all__ = ["SupabaseClient", "supabase", "TableRepository"]
