"""
MongoDB Connection Utility

MongoDB stores every recruiting entity:
- companies: employer profiles with the ids of the jobs they own
- jobs: postings, each stamped with its company's name and logo
- applications: free-form application documents
- candidates: job seeker profiles (read here only for ownership checks)
"""
import logging

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.collection import Collection
from app.core.config import get_settings

settings = get_settings()
logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(settings.mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the recruiting database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[settings.mongodb_db]
    return _db


def get_collection(name: str) -> Collection:
    """Get a specific collection (see COLLECTIONS)."""
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
    "companies": "companies",
    "jobs": "jobs",
    "applications": "applications",
    "candidates": "candidates"
}


def init_mongo_indexes(db: Database = None):
    """
    Create indexes for the lookups the API performs.
    Call this once during app startup.
    """
    db = db if db is not None else get_mongo_db()

    # Owner lookups when a company is created
    db[COLLECTIONS["companies"]].create_index("userId")
    db[COLLECTIONS["candidates"]].create_index("userId")

    # Job lookups scoped to a company
    db[COLLECTIONS["jobs"]].create_index("companyId")

    # Application filter
    db[COLLECTIONS["applications"]].create_index("application_num")

    logger.info("MongoDB indexes created successfully")
