"""
Shared helpers for DataGrid Sheets
"""
