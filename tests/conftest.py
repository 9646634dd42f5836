import time

import mongomock
import pytest
from fastapi.testclient import TestClient

from silver_talent.database.mongodb import MongoDB, utcnow
from silver_talent.dependencies import get_application_notifier, get_db, get_media_store, get_notifier
from silver_talent.main import app
from silver_talent.services.media import MediaStoreError
from silver_talent.services.notifier import NotificationError


class FakeMediaStore:
    def __init__(self):
        self.uploads = []
        self.deleted = []
        self.fail_upload = False
        self.fail_delete = False
        self.delay = 0

    def upload(self, content, filename, folder, resource_type="auto"):
        if self.delay:
            time.sleep(self.delay)
        if self.fail_upload:
            raise MediaStoreError("upload refused")
        public_id = f"{folder}/{len(self.uploads) + 1}"
        self.uploads.append({"public_id": public_id, "filename": filename, "folder": folder, "size": len(content)})
        return {"public_id": public_id, "url": f"https://media.test/{public_id}"}

    def delete(self, public_id, resource_type="image"):
        if self.fail_delete:
            raise MediaStoreError("delete refused")
        self.deleted.append(public_id)
        return {"result": "ok"}


class FakeNotifier:
    is_configured = True
    is_ready = True

    def __init__(self, default_recipient="admin@silvertalent.test", fail=False):
        self.default_recipient = default_recipient
        self.fail = fail
        self.sent = []

    def sender(self, display_name):
        return f"{display_name} <noreply@silvertalent.test>"

    def send(self, to, subject, html_body, sender=None):
        if self.fail:
            raise NotificationError("smtp down")
        self.sent.append({"to": to, "subject": subject, "html": html_body, "sender": sender})

    def verify(self):
        return True


@pytest.fixture
def db():
    return MongoDB(client=mongomock.MongoClient(), database_name="silver_talent_test")


@pytest.fixture
def media():
    return FakeMediaStore()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def application_notifier():
    return FakeNotifier(default_recipient="owner@silvertalent.test")


@pytest.fixture
def client(db, media, notifier, application_notifier):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_media_store] = lambda: media
    app.dependency_overrides[get_notifier] = lambda: notifier
    app.dependency_overrides[get_application_notifier] = lambda: application_notifier
    yield TestClient(app, raise_server_exceptions=False)
    app.dependency_overrides.clear()


@pytest.fixture
def job(db):
    now = utcnow()
    doc = {
        "title": "Backend Engineer",
        "company": "Web Weavers Inc.",
        "location": "Remote",
        "type": "Full-time",
        "salary": "$100k",
        "category": "Information Technology",
        "description": "Build APIs.",
        "skills": ["python", "mongodb"],
        "logo": None,
        "rating": 4.5,
        "applicants": 0,
        "postedDate": now,
        "createdAt": now,
        "updatedAt": now,
    }
    doc["_id"] = db.jobs.insert_one(doc).inserted_id
    return doc


@pytest.fixture
def category(db):
    doc = {"name": "Career Advice", "slug": "career-advice", "description": "", "createdAt": utcnow()}
    doc["_id"] = db.blog_categories.insert_one(doc).inserted_id
    return doc
