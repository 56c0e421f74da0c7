"""
Infrastructure layer - Database
"""

from waltz.infra.database import Database, get_database, set_database

__all__ = [
    "Database",
    "get_database",
    "set_database",
]
