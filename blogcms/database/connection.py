import logging
from datetime import datetime, timezone
from typing import List, Optional

from bson import ObjectId
from bson.errors import InvalidId
from fastapi import Request
from pymongo import DESCENDING, MongoClient, ReturnDocument
from pymongo.errors import PyMongoError

from blogcms.core.config import Settings
from blogcms.models.schemas import BlogPost, BlogWrite

logger = logging.getLogger(__name__)

NEWEST_FIRST = [("createdAt", DESCENDING), ("_id", DESCENDING)]


def connect(settings: Settings) -> MongoClient:
    return MongoClient(settings.mongo_uri)


def ping(client: MongoClient) -> bool:
    """Return True if the server answers the ping admin command."""
    try:
        client.admin.command("ping")
        return True
    except PyMongoError as e:
        logger.warning(f"MongoDB ping failed: {e}")
        return False


def _now():
    # naive UTC at millisecond precision, the way Mongo hands it back
    now = datetime.now(timezone.utc).replace(tzinfo=None)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _object_id(blog_id: str) -> Optional[ObjectId]:
    try:
        return ObjectId(blog_id)
    except (InvalidId, TypeError):
        return None


def _doc_to_post(doc) -> Optional[BlogPost]:
    if not doc:
        return None
    doc["id"] = str(doc.pop("_id"))
    doc.setdefault("tags", [])
    # stored values are UTC; a client without tz_aware hands them back naive
    for field in ("createdAt", "updatedAt"):
        value = doc.get(field)
        if isinstance(value, datetime) and value.tzinfo is None:
            doc[field] = value.replace(tzinfo=timezone.utc)
    return BlogPost(**doc)


class BlogStore:
    """The blogs collection. Ids that are not valid ObjectIds never match."""

    def __init__(self, collection):
        self.collection = collection

    @classmethod
    def from_client(cls, client: MongoClient, settings: Settings) -> "BlogStore":
        return cls(client[settings.mongo_db_name][settings.mongo_collection])

    def create(self, data: BlogWrite, image: Optional[str] = None) -> BlogPost:
        now = _now()
        doc = data.model_dump()
        doc.update({"image": image, "createdAt": now, "updatedAt": now})
        result = self.collection.insert_one(doc)
        return self.get(str(result.inserted_id))

    def list(self) -> List[BlogPost]:
        return [_doc_to_post(d) for d in self.collection.find().sort(NEWEST_FIRST)]

    def get(self, blog_id: str) -> Optional[BlogPost]:
        oid = _object_id(blog_id)
        if oid is None:
            return None
        return _doc_to_post(self.collection.find_one({"_id": oid}))

    def get_by_title(self, title: str) -> Optional[BlogPost]:
        # duplicate titles: newest post wins
        docs = self.collection.find({"title": title}).sort(NEWEST_FIRST).limit(1)
        return _doc_to_post(next(iter(docs), None))

    def replace(self, blog_id: str, data: BlogWrite, image: Optional[str] = None) -> Optional[BlogPost]:
        """Replace text fields and tags. ``image`` is only written when given."""
        oid = _object_id(blog_id)
        if oid is None:
            return None
        fields = data.model_dump()
        fields["updatedAt"] = _now()
        if image is not None:
            fields["image"] = image
        doc = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": fields},
            return_document=ReturnDocument.AFTER,
        )
        return _doc_to_post(doc)

    def exists(self, blog_id: str) -> bool:
        oid = _object_id(blog_id)
        return oid is not None and self.collection.count_documents({"_id": oid}, limit=1) > 0

    def delete(self, blog_id: str) -> bool:
        oid = _object_id(blog_id)
        if oid is None:
            return False
        return self.collection.delete_one({"_id": oid}).deleted_count > 0


# FastAPI dependency
def get_store(request: Request) -> BlogStore:
    return request.app.state.store
