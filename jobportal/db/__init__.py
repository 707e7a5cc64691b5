"""
Database module - MongoDB connection and typed queries.
"""
from jobportal.db.mongodb import get_mongo_db, test_mongo_connection
from jobportal.db.query import QuerySpec

__all__ = [
    "get_mongo_db",
    "test_mongo_connection",
    "QuerySpec",
]
