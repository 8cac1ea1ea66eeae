"""
MongoDB client initialization and access utilities.

This module configures the asynchronous MongoDB client used by the
Policy Studio backend. The catalog of datasets (`resources`) and the
saved policies (`policies`) live in this database; the policy compilers
themselves never touch it.

Environment variables:
    - MONGODB_URI: Full MongoDB connection string (default: mongodb://localhost:27017)
    - MONGODB_DB:  Database name (default: policy_studio)

Usage example:
    >>> from app.db.client import init_mongo, get_db
    >>> await init_mongo()
    >>> db = get_db()
    >>> await db["resources"].count_documents({})
"""

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase
from dotenv import load_dotenv
import os

load_dotenv()

# ------------------------------------------------------------------------------
# Configuration
# ------------------------------------------------------------------------------

MONGO_URI = os.getenv("MONGODB_URI", "mongodb://localhost:27017")
MONGO_DB_NAME = os.getenv("MONGODB_DB", "policy_studio")

client: AsyncIOMotorClient = None
_db: AsyncIOMotorDatabase = None

# ------------------------------------------------------------------------------
# Initialization
# ------------------------------------------------------------------------------

async def init_mongo():
    """
    Initialize the global MongoDB client and database handle.

    Called once on application startup. Motor connects lazily, so no
    request is sent to the server here.

    Example:
        >>> await init_mongo()
        ✅ Connected to MongoDB at mongodb://localhost:27017, using database 'policy_studio'
    """
    global client, _db
    client = AsyncIOMotorClient(MONGO_URI)
    _db = client[MONGO_DB_NAME]
    print(f"✅ Connected to MongoDB at {MONGO_URI}, using database '{MONGO_DB_NAME}'")


async def close_mongo():
    """Close the global MongoDB client, if any."""
    global client, _db
    if client is not None:
        client.close()
        print("ℹ️ MongoDB connection closed.")
    client = None
    _db = None

# ------------------------------------------------------------------------------
# Database Access
# ------------------------------------------------------------------------------

def get_db() -> AsyncIOMotorDatabase:
    """
    Retrieve the initialized MongoDB database instance.

    Raises:
        RuntimeError: If `init_mongo()` has not been called yet.
    """

    if _db is None:
        raise RuntimeError("MongoDB was not initialized. Call init_mongo() first.")
    return _db
