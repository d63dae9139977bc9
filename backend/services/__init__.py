"""
Service layer for DataGrid Sheets
"""
