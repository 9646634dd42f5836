from bson import ObjectId

from silver_talent.database.mongodb import utcnow
from silver_talent.dependencies import get_notifier
from silver_talent.main import app
from silver_talent.services.notifier import DisabledNotifier


def insert_submission(db, **overrides):
    doc = {
        "name": "Ravi",
        "email": "ravi@example.com",
        "fullPhoneNumber": "+91 98450 00000",
        "countryName": "India",
        "countryCode": "IN",
        "message": "Do you hire interns?",
        "status": "New",
        "adminNotes": None,
        "submittedAt": utcnow(),
        "repliedAt": None,
    }
    doc.update(overrides)
    doc["_id"] = db.contact_submissions.insert_one(doc).inserted_id
    return doc


# ---------- contact info ----------

def test_contact_info_created_on_first_read(client, db):
    resp = client.get("/api/contact-info")
    assert resp.status_code == 200
    assert resp.json()["email"] == "contact@silvertalent.com"
    client.get("/api/contact-info")
    assert db.contact_info.count_documents({}) == 1


def test_update_contact_info(client, db):
    payload = {"address": " 1 Market St ", "phone": "+1 555 0100", "email": "HELLO@Example.com",
               "locationMapUrl": "https://maps.example/embed"}
    resp = client.put("/api/contact-info", json=payload)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["address"] == "1 Market St"
    assert data["email"] == "hello@example.com"
    assert client.get("/api/contact-info").json()["phone"] == "+1 555 0100"
    assert db.contact_info.count_documents({}) == 1


def test_update_contact_info_requires_all_fields(client, db):
    resp = client.put("/api/contact-info", json={"address": "1 Market St", "phone": "123"})
    assert resp.status_code == 400
    assert set(resp.json()["errors"]) == {"email", "locationMapUrl"}
    assert db.contact_info.count_documents({}) == 0


# ---------- public form ----------

def test_submit_contact_form(client, db, notifier):
    resp = client.post("/api/contact-us", json={
        "name": "Ravi", "email": "Ravi@Example.com", "fullPhoneNumber": "+91 98450 00000",
        "countryName": "India", "countryCode": "IN", "message": "Hello <team>",
    })
    assert resp.status_code == 200
    assert resp.json()["success"] is True

    saved = db.contact_submissions.find_one()
    assert saved["status"] == "New"
    assert saved["email"] == "ravi@example.com"
    assert notifier.sent[0]["to"] == "admin@silvertalent.test"
    assert "Hello &lt;team&gt;" in notifier.sent[0]["html"]


def test_submit_contact_form_with_alternate_field_names(client, db):
    resp = client.post("/api/contact-us", json={
        "yourName": "Meera", "yourEmail": "meera@example.com",
        "fullPhoneNumber": "+44 20 7946 0000", "yourMessage": "Partnership enquiry",
    })
    assert resp.status_code == 200
    saved = db.contact_submissions.find_one()
    assert saved["name"] == "Meera"
    assert saved["message"] == "Partnership enquiry"
    assert saved["countryName"] == ""


def test_submit_contact_form_validation(client, db):
    resp = client.post("/api/contact-us", json={"name": " ", "email": "bad", "message": "Hi"})
    assert resp.status_code == 400
    assert set(resp.json()["errors"]) == {"name", "email", "fullPhoneNumber"}
    assert db.contact_submissions.count_documents({}) == 0


def test_submit_contact_form_survives_mail_failure(client, db, notifier):
    notifier.fail = True
    resp = client.post("/api/contact-us", json={
        "name": "Ravi", "email": "ravi@example.com", "fullPhoneNumber": "1", "message": "Hi",
    })
    assert resp.status_code == 200
    assert db.contact_submissions.count_documents({}) == 1


# ---------- admin ----------

def test_list_submissions_newest_first(client, db):
    insert_submission(db, name="Older")
    insert_submission(db, name="Newer", status="Viewed")
    body = client.get("/api/contact-submissions").json()
    assert [s["name"] for s in body["submissions"]] == ["Newer", "Older"]

    viewed = client.get("/api/contact-submissions", params={"status_filter": "Viewed"}).json()
    assert viewed["totalCount"] == 1


def test_mark_replied_without_notes_sets_replied_at(client, db):
    submission = insert_submission(db)
    resp = client.put(f"/api/contact-submissions/{submission['_id']}/status", json={"status": "Replied"})
    assert resp.status_code == 200
    assert db.contact_submissions.find_one({"_id": submission["_id"]})["repliedAt"] is not None


def test_mark_replied_with_notes_leaves_replied_at(client, db):
    submission = insert_submission(db)
    resp = client.put(f"/api/contact-submissions/{submission['_id']}/status",
                      json={"status": "Replied", "adminNotes": "Phoned them"})
    assert resp.status_code == 200
    saved = db.contact_submissions.find_one({"_id": submission["_id"]})
    assert saved["repliedAt"] is None
    assert saved["adminNotes"] == "Phoned them"


def test_status_can_move_backwards(client, db):
    submission = insert_submission(db, status="Archived")
    resp = client.put(f"/api/contact-submissions/{submission['_id']}/status", json={"status": "New"})
    assert resp.status_code == 200
    assert resp.json()["submission"]["status"] == "New"


def test_invalid_status_rejected(client, db):
    submission = insert_submission(db)
    resp = client.put(f"/api/contact-submissions/{submission['_id']}/status", json={"status": "Closed"})
    assert resp.status_code == 400


def test_respond_to_submission(client, db, notifier):
    submission = insert_submission(db)
    resp = client.post(f"/api/contact-submissions/{submission['_id']}/respond",
                       json={"subject": "Re: interns", "body": "Yes we do."})
    assert resp.status_code == 200
    saved = db.contact_submissions.find_one({"_id": submission["_id"]})
    assert saved["status"] == "Replied"
    assert saved["repliedAt"] is not None
    assert "Subject: Re: interns" in saved["adminNotes"]
    assert notifier.sent[-1]["to"] == "ravi@example.com"


def test_respond_without_status_change(client, db):
    submission = insert_submission(db, status="Viewed")
    resp = client.post(f"/api/contact-submissions/{submission['_id']}/respond",
                       json={"subject": "Hi", "body": "Thanks", "updateStatusToReplied": False})
    assert resp.status_code == 200
    saved = db.contact_submissions.find_one({"_id": submission["_id"]})
    assert saved["status"] == "Viewed"
    assert saved["repliedAt"] is None
    assert "Status set to: Viewed" in saved["adminNotes"]


def test_respond_send_failure(client, db, notifier):
    submission = insert_submission(db)
    notifier.fail = True
    resp = client.post(f"/api/contact-submissions/{submission['_id']}/respond",
                       json={"subject": "Hi", "body": "Thanks"})
    assert resp.status_code == 500
    saved = db.contact_submissions.find_one({"_id": submission["_id"]})
    assert saved["status"] == "New"
    assert saved["adminNotes"] is None


def test_respond_error_order(client, db):
    assert client.post(f"/api/contact-submissions/{ObjectId()}/respond",
                       json={"subject": "", "body": "x"}).status_code == 400
    assert client.post(f"/api/contact-submissions/{ObjectId()}/respond",
                       json={"subject": "Hi", "body": "x"}).status_code == 404

    submission = insert_submission(db)
    app.dependency_overrides[get_notifier] = lambda: DisabledNotifier()
    assert client.post(f"/api/contact-submissions/{submission['_id']}/respond",
                       json={"subject": "Hi", "body": "x"}).status_code == 503


def test_delete_submission(client, db):
    submission = insert_submission(db)
    assert client.delete(f"/api/contact-submissions/{submission['_id']}").status_code == 200
    assert client.delete(f"/api/contact-submissions/{submission['_id']}").status_code == 404
