"""Database package for the tree catalog.

This package contains all database-related functionality including:
- CoreDatabaseService: async engine and session management
- RowStore / SQLModelRowStore: the generic row interface the species core reads and writes through
"""

# Database components should be imported directly from their modules:
# from treecatalog.database.core import CoreDatabaseService
# from treecatalog.database.row_store import RowStore, SQLModelRowStore
