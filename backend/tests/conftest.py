# shared fixtures for backend api tests
# provides mock db, a fixed clock, test user, auth tokens, and httpx test client

import copy
import re
import pytest
import pytest_asyncio
from unittest.mock import MagicMock
from datetime import datetime, timezone
from bson import ObjectId

from httpx import AsyncClient, ASGITransport

from app.main import app
from app.services.db import get_db
from app.services.auth_service import hash_password, create_access_token
from app.services.day_utils import MS_PER_DAY
from app.dependencies import get_current_user, get_clock


# fixed "now": sunday 2025-06-15 12:00 utc
FIXED_NOW = int(datetime(2025, 6, 15, 12, 0, tzinfo=timezone.utc).timestamp() * 1000)
HOUR_MS = 3_600_000


def days_ago(n: float, now: int = FIXED_NOW) -> int:
    """timestamp n days before the fixed clock"""
    return int(now - n * MS_PER_DAY)


# test ids
USER_OID = ObjectId("665f1c2e8b3e4a0012345601")
USER_2_OID = ObjectId("665f1c2e8b3e4a0012345602")
USER_ID = str(USER_OID)
USER_2_ID = str(USER_2_OID)


# test user documents (as they'd appear from mongodb)

USER_DOC = {
    "_id": USER_OID,
    "email": "riya.sharma@email.com",
    "hashed_password": hash_password("emoti1234"),
    "name": "Riya Sharma",
    "is_premium": True,
    "avatar_url": None,
    "created_at": "2025-05-01T00:00:00Z",
}

USER_2_DOC = {
    "_id": USER_2_OID,
    "email": "arjun.mehta@email.com",
    "hashed_password": hash_password("emoti1234"),
    "name": "Arjun Mehta",
    "is_premium": False,
    "avatar_url": None,
    "created_at": "2025-05-20T00:00:00Z",
}


# sample data — user 2 already has a short log

SAMPLE_MOOD_LOG = {
    "_id": ObjectId(),
    "user_id": USER_2_ID,
    "events": [
        {"timestamp": days_ago(2), "emotion": "anxious"},
        {"timestamp": days_ago(1), "emotion": "okay"},
        {"timestamp": days_ago(0), "emotion": "hopeful"},
    ],
}


# user 2 has journal entries yesterday and the day before, none today
SAMPLE_JOURNALS = [
    {
        "_id": ObjectId(),
        "journal_id": "a1b2c3d4e5f6",
        "user_id": USER_2_ID,
        "text": "Grateful for a calm walk after work.",
        "mood": "grateful",
        "sentiment": "high",
        "pinned": False,
        "word_count": 7,
        "created_at": days_ago(1),
        "updated_at": days_ago(1),
    },
    {
        "_id": ObjectId(),
        "journal_id": "b2c3d4e5f6a1",
        "user_id": USER_2_ID,
        "text": "So tired and anxious about the exam.",
        "mood": "low",
        "sentiment": "low",
        "pinned": True,
        "word_count": 7,
        "created_at": days_ago(2),
        "updated_at": days_ago(2),
    },
]

# async cursor mock

class AsyncCursorMock:
    """mock for motor's async cursor — supports async for and chained methods"""

    def __init__(self, data=None):
        self._data = data or []
        self._index = 0

    def sort(self, key_or_list, direction=1):
        keys = key_or_list if isinstance(key_or_list, list) else [(key_or_list, direction)]
        for key, d in reversed(keys):
            self._data.sort(key=lambda doc: doc.get(key, 0), reverse=d < 0)
        return self

    def skip(self, n):
        self._data = self._data[n:]
        return self

    def limit(self, n):
        self._data = self._data[:n]
        return self

    def __aiter__(self):
        self._index = 0
        return self

    async def __anext__(self):
        if self._index >= len(self._data):
            raise StopAsyncIteration
        item = self._data[self._index]
        self._index += 1
        return item

    async def to_list(self, length=None):
        if length is not None:
            return self._data[:length]
        return self._data


class MockCollection:
    """mock for a motor collection with async methods.
    reads return copies so callers can't mutate the stored documents."""

    def __init__(self, data=None):
        self._data = data or []
        self.inserted = []

    def find(self, query=None, projection=None):
        results = self._data
        if query:
            results = [d for d in results if self._matches(d, query)]
        return AsyncCursorMock([copy.deepcopy(d) for d in results])

    async def find_one(self, query=None, projection=None):
        doc = self._find(query)
        return copy.deepcopy(doc) if doc is not None else None

    async def insert_one(self, doc):
        oid = doc.get("_id", ObjectId())
        doc["_id"] = oid
        self._data.append(doc)
        self.inserted.append(doc)
        result = MagicMock()
        result.inserted_id = oid
        return result

    async def count_documents(self, query=None):
        if not query:
            return len(self._data)
        return len([d for d in self._data if self._matches(d, query)])

    async def update_one(self, query, update, upsert=False):
        result = MagicMock()
        result.modified_count = 0
        result.upserted_id = None
        doc = self._find(query)
        if doc is None and upsert:
            doc = self._upsert(query, update)
            result.upserted_id = doc["_id"]
        elif doc is not None:
            result.modified_count = 1
        if doc is not None:
            self._apply(doc, update)
        return result

    async def find_one_and_update(self, query, update, upsert=False, return_document=None):
        doc = self._find(query)
        if doc is None:
            if not upsert:
                return None
            doc = self._upsert(query, update)
        self._apply(doc, update)
        return copy.deepcopy(doc)

    async def delete_one(self, query):
        result = MagicMock()
        doc = self._find(query)
        result.deleted_count = 0
        if doc is not None:
            self._data.remove(doc)
            result.deleted_count = 1
        return result

    async def create_index(self, *args, **kwargs):
        return "mock_index"

    def _find(self, query):
        if not query:
            return self._data[0] if self._data else None
        for doc in self._data:
            if self._matches(doc, query):
                return doc
        return None

    def _upsert(self, query, update):
        doc = {k: v for k, v in query.items() if not isinstance(v, dict) and not k.startswith("$")}
        doc["_id"] = ObjectId()
        doc.update(update.get("$setOnInsert", {}))
        self._data.append(doc)
        return doc

    def _apply(self, doc, update):
        """subset of mongodb update operators: $set, $push with $each / $slice"""
        if "$set" in update:
            doc.update(copy.deepcopy(update["$set"]))
        for key, val in update.get("$push", {}).items():
            items = doc.setdefault(key, [])
            if isinstance(val, dict) and "$each" in val:
                items.extend(copy.deepcopy(val["$each"]))
                if "$slice" in val:
                    s = val["$slice"]
                    doc[key] = items[s:] if s < 0 else items[:s]
            else:
                items.append(copy.deepcopy(val))

    def _matches(self, doc, query):
        """basic mongodb query matching for tests: equality, $in, $regex, $or"""
        for key, value in query.items():
            if key == "$or":
                if not any(self._matches(doc, sub) for sub in value):
                    return False
                continue
            doc_val = doc.get(key)
            if isinstance(value, dict) and "$regex" in value:
                flags = re.IGNORECASE if "i" in value.get("$options", "") else 0
                if not isinstance(doc_val, str) or not re.search(value["$regex"], doc_val, flags):
                    return False
            elif isinstance(value, dict) and "$in" in value:
                if doc_val not in value["$in"]:
                    return False
            elif doc_val != value:
                return False
        return True


class MockDatabase:
    """mock database that mimics the Database class"""

    def __init__(self):
        self.users = MockCollection([
            copy.deepcopy(USER_DOC),
            copy.deepcopy(USER_2_DOC),
        ])
        self.mood_events = MockCollection([copy.deepcopy(SAMPLE_MOOD_LOG)])
        self.dashboard_stats = MockCollection([])
        self.journals = MockCollection(copy.deepcopy(SAMPLE_JOURNALS))

    async def connect(self):
        pass

    async def close(self):
        pass


@pytest.fixture
def mock_db():
    """create a fresh mock database for each test"""
    return MockDatabase()


def _user_dict(doc=USER_DOC):
    """return user dict as get_current_user would return"""
    user = copy.deepcopy(doc)
    user["id"] = str(user.pop("_id"))
    return user


@pytest.fixture
def user_token():
    """jwt access token for the test user"""
    return create_access_token({"sub": USER_ID})


@pytest_asyncio.fixture
async def client(mock_db):
    """httpx async test client with the mock db and fixed clock, no auth override"""

    async def override_get_db():
        return mock_db

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


async def _authed_client(mock_db, user_doc):
    async def override_get_db():
        return mock_db

    async def override_get_current_user():
        return _user_dict(user_doc)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user] = override_get_current_user
    app.dependency_overrides[get_clock] = lambda: (lambda: FIXED_NOW)

    transport = ASGITransport(app=app)
    return AsyncClient(transport=transport, base_url="http://test")


@pytest_asyncio.fixture
async def user_client(mock_db):
    """client authenticated as the test user (empty mood log)"""
    async with await _authed_client(mock_db, USER_DOC) as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_2_client(mock_db):
    """client authenticated as the second user (three-day log)"""
    async with await _authed_client(mock_db, USER_2_DOC) as ac:
        yield ac
    app.dependency_overrides.clear()
