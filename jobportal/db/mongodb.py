"""
MongoDB Connection Utility

MongoDB stores every record of the portal:
- users: accounts, credentials, verification/reset tokens, profiles
- jobs: postings owned by employers
- applications: one seeker's submission against one job
"""
import logging

from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from jobportal.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection by name (see COLLECTIONS)."""
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.warning("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "jobs": "jobs",
    "applications": "applications",
}


def init_mongo_indexes(db: Database = None):
    """
    Create indexes for the eligibility counts and listings.
    Call this once during app startup.
    """
    db = db if db is not None else get_mongo_db()

    # Email is unique across all users
    db[COLLECTIONS["users"]].create_index("email", unique=True)

    db[COLLECTIONS["jobs"]].create_index("postedBy")
    db[COLLECTIONS["jobs"]].create_index([("expired", ASCENDING), ("jobPostedOn", DESCENDING)])

    # Per-job cap and rolling-window cap both filter on the applicant first
    db[COLLECTIONS["applications"]].create_index([
        ("applicantID.user", ASCENDING),
        ("job", ASCENDING)
    ])
    db[COLLECTIONS["applications"]].create_index([
        ("applicantID.user", ASCENDING),
        ("createdAt", DESCENDING)
    ])
    db[COLLECTIONS["applications"]].create_index([
        ("employerID.user", ASCENDING),
        ("employerDeleted", ASCENDING)
    ])

    logger.info("MongoDB indexes created successfully")
