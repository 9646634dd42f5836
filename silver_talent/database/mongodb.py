# silver_talent/database/mongodb.py

from pymongo import MongoClient, ASCENDING, DESCENDING
from pymongo.errors import ConnectionFailure
from bson import ObjectId
from bson.errors import InvalidId
from fastapi import HTTPException
from typing import Optional, Dict, Any
from datetime import datetime, timezone
from silver_talent.config import Config
import logging

logger = logging.getLogger(__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_object_id(value: Any, label: str = "Document") -> ObjectId:
    """Convert a path/body identifier into an ObjectId.

    Malformed identifiers are reported the same way as missing documents (404).
    """
    if isinstance(value, ObjectId):
        return value
    try:
        return ObjectId(str(value))
    except (InvalidId, TypeError):
        raise HTTPException(status_code=404, detail=f"{label} not found (invalid ID format).")


def serialize_doc(value: Any) -> Any:
    """Make a Mongo document JSON friendly (ObjectId -> str), recursively."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, dict):
        return {k: serialize_doc(v) for k, v in value.items()}
    if isinstance(value, list):
        return [serialize_doc(v) for v in value]
    return value


class MongoDB:
    def __init__(self, client: Optional[MongoClient] = None, database_name: Optional[str] = None):
        self.client = client
        self.db = None
        self.connect(database_name or Config.DATABASE_NAME)

    def connect(self, database_name: str):
        """Establish connection to MongoDB"""
        try:
            if self.client is None:
                self.client = MongoClient(Config.MONGODB_URI)
                # Test connection
                self.client.admin.command('ping')
                logger.info("Successfully connected to MongoDB")
            self.db = self.client[database_name]

            # Unique indexes back up the application-level checks (slugs, emails)
            self._create_indexes()

        except ConnectionFailure as e:
            logger.error(f"Failed to connect to MongoDB: {e}")
            raise

    def _create_indexes(self):
        """Create uniqueness constraints and the indexes used by listings"""
        self.jobs.create_index([("createdAt", DESCENDING)])
        self.jobs.create_index([("category", ASCENDING)])

        self.applications.create_index([("jobId", ASCENDING)])
        self.applications.create_index([("status", ASCENDING), ("appliedDate", DESCENDING)])

        self.blog_posts.create_index([("slug", ASCENDING)], unique=True)
        self.blog_posts.create_index([("isPublished", ASCENDING), ("publishDate", DESCENDING)])
        self.blog_posts.create_index([("category", ASCENDING)])

        self.blog_categories.create_index([("slug", ASCENDING)], unique=True)
        self.blog_categories.create_index([("name", ASCENDING)], unique=True)

        self.contact_submissions.create_index([("status", ASCENDING), ("submittedAt", DESCENDING)])
        self.contact_info.create_index([("identifier", ASCENDING)], unique=True)

        self.subscriptions.create_index([("email", ASCENDING)], unique=True)

    def ping(self) -> bool:
        try:
            self.client.admin.command('ping')
            return True
        except Exception as e:
            logger.warning(f"MongoDB ping failed: {e}")
            return False

    @property
    def jobs(self):
        return self.db[Config.JOBS_COLLECTION]

    @property
    def applications(self):
        return self.db[Config.APPLICATIONS_COLLECTION]

    @property
    def blog_posts(self):
        return self.db[Config.BLOG_POSTS_COLLECTION]

    @property
    def blog_categories(self):
        return self.db[Config.BLOG_CATEGORIES_COLLECTION]

    @property
    def contact_submissions(self):
        return self.db[Config.CONTACT_SUBMISSIONS_COLLECTION]

    @property
    def contact_info(self):
        return self.db[Config.CONTACT_INFO_COLLECTION]

    @property
    def subscriptions(self):
        return self.db[Config.SUBSCRIPTIONS_COLLECTION]

    def get_by_id(self, collection, doc_id: Any, label: str = "Document") -> Dict:
        """Fetch one document or raise 404"""
        doc = collection.find_one({"_id": parse_object_id(doc_id, label)})
        if not doc:
            raise HTTPException(status_code=404, detail=f"{label} not found.")
        return doc
