# silver_talent/services/contact_service.py
import logging
from typing import Any, Dict, Optional

from fastapi import BackgroundTasks, HTTPException
from pymongo import ReturnDocument

from silver_talent.config import Config
from silver_talent.database.mongodb import MongoDB, parse_object_id, serialize_doc, utcnow
from silver_talent.models.contact import (
    EMAIL_PATTERN, ContactForm, ContactInfoUpdate, ContactSubmission, SubmissionResponse, SubmissionStatusUpdate,
)
from silver_talent.services.application_service import response_audit_line
from silver_talent.services.listing import ListingQuery, paginate, parse_page_params
from silver_talent.services.notifier import NotificationError, escape, text_to_html
from silver_talent.services.side_effects import run_side_effects
from silver_talent.services.validation import clean, matches

logger = logging.getLogger(__name__)


class ContactService:
    def __init__(self, db: MongoDB, notifier):
        self.db = db
        self.notifier = notifier

    # ---------- contact info singleton ----------

    def get_contact_info(self) -> Dict:
        """Created with defaults on first read"""
        now = utcnow()
        info = self.db.contact_info.find_one_and_update(
            {"identifier": Config.CONTACT_INFO_IDENTIFIER},
            {"$setOnInsert": dict(Config.CONTACT_INFO_DEFAULTS, createdAt=now, updatedAt=now)},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return serialize_doc(info)

    def update_contact_info(self, payload: ContactInfoUpdate) -> Dict:
        values = payload.model_dump()
        if any(value is None for value in values.values()):
            raise HTTPException(status_code=400, detail={
                "message": "All contact fields are required.",
                "errors": {name: f"{name} is required." for name, value in values.items() if value is None},
            })
        values = {name: value.strip() for name, value in values.items()}
        values["email"] = values["email"].lower()
        info = self.db.contact_info.find_one_and_update(
            {"identifier": Config.CONTACT_INFO_IDENTIFIER},
            {"$set": dict(values, updatedAt=utcnow())},
            upsert=True,
            return_document=ReturnDocument.AFTER,
        )
        return {"message": "Contact information updated successfully.", "data": serialize_doc(info)}

    # ---------- public form ----------

    def submit_contact_form(self, form: ContactForm, background_tasks: BackgroundTasks) -> Dict:
        errors = {}
        if not clean(form.name):
            errors["name"] = "Your name is required."
        if not matches(EMAIL_PATTERN, clean(form.email)):
            errors["email"] = "A valid email address is required."
        if not clean(form.fullPhoneNumber):
            errors["fullPhoneNumber"] = "Your phone number is required."
        if not clean(form.message):
            errors["message"] = "Your message is required."
        if errors:
            raise HTTPException(status_code=400, detail={"message": " ".join(errors.values()), "errors": errors})

        submission = ContactSubmission(
            name=clean(form.name),
            email=clean(form.email).lower(),
            fullPhoneNumber=clean(form.fullPhoneNumber),
            countryName=clean(form.countryName) or "",
            countryCode=clean(form.countryCode) or "",
            message=clean(form.message),
            status="New",
            submittedAt=utcnow(),
        )
        doc = submission.model_dump()
        doc["_id"] = self.db.contact_submissions.insert_one(doc).inserted_id
        logger.info(f"Contact submission saved: {doc['_id']}")

        if self.notifier.is_configured and self.notifier.default_recipient:
            background_tasks.add_task(run_side_effects, [("admin contact notification", lambda: self._notify_admin(doc))])
        else:
            logger.warning("Email service not configured; admin will not be notified of this submission.")

        return {
            "success": True,
            "message": "Thank you for your message! We have received it and will get back to you soon.",
        }

    def _notify_admin(self, doc: Dict):
        html_body = f"""
            <h1>New Contact Form Submission Received</h1>
            <p>A new message has been submitted through the website contact form and saved to the database.</p>
            <hr>
            <p><strong>Name:</strong> {escape(doc['name'])}</p>
            <p><strong>Email:</strong> {escape(doc['email'])}</p>
            <p><strong>Phone:</strong> {escape(doc['fullPhoneNumber'])}</p>
            <p><strong>Message:</strong></p>
            <div style="padding:10px;border:1px solid #eee;background-color:#f9f9f9;white-space:pre-wrap;">{text_to_html(escape(doc['message']))}</div>
            <hr>
            <p><small>You can view and respond to this submission in the admin dashboard.</small></p>
        """
        self.notifier.send(
            self.notifier.default_recipient,
            f"New Contact Submission: {doc['name']}",
            html_body,
            sender=self.notifier.sender("Website System"),
        )

    # ---------- admin ----------

    def get_submissions(self, status_filter: Optional[str] = None, page: Any = 1, limit: Any = 50) -> Dict:
        query: Dict[str, Any] = {}
        if status_filter and status_filter != "All":
            query["status"] = status_filter
        effective_page, effective_limit = parse_page_params(page, limit, default_limit=50)
        listing = ListingQuery(filter=query, sort=[("submittedAt", -1), ("_id", -1)],
                               page=effective_page, limit=effective_limit)
        result = paginate(self.db.contact_submissions, listing, "submissions")
        result["success"] = True
        return result

    def update_status(self, submission_id: str, payload: SubmissionStatusUpdate) -> Dict:
        """Any status may be set from any other; Replied without a note stamps repliedAt"""
        updates: Dict[str, Any] = {"status": payload.status}
        if payload.adminNotes is not None:
            updates["adminNotes"] = payload.adminNotes
        if payload.status == "Replied" and not payload.adminNotes:
            updates["repliedAt"] = utcnow()

        submission = self.db.contact_submissions.find_one_and_update(
            {"_id": parse_object_id(submission_id, "Submission")},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        if not submission:
            raise HTTPException(status_code=404, detail="Submission not found.")
        return {"success": True, "message": "Submission status updated.", "submission": serialize_doc(submission)}

    def respond(self, submission_id: str, payload: SubmissionResponse) -> Dict:
        subject, body = clean(payload.subject), clean(payload.body)
        if not subject or not body:
            raise HTTPException(status_code=400, detail="Email subject and body are required.")

        submission = self.db.get_by_id(self.db.contact_submissions, submission_id, "Contact submission")

        if not (self.notifier.is_configured and self.notifier.is_ready):
            logger.error("Email service is not configured; cannot respond to submission.")
            raise HTTPException(status_code=503, detail="Email service is not configured. Cannot send response.")

        try:
            self.notifier.send(submission["email"], subject, text_to_html(body),
                               sender=self.notifier.sender(Config.COMPANY_NAME))
        except NotificationError as e:
            logger.error(f"Failed to send response for submission {submission_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to send response email. Please try again later.")

        updates: Dict[str, Any] = {}
        status = submission.get("status")
        if payload.updateStatusToReplied:
            status = "Replied"
            updates.update(status=status, repliedAt=utcnow())
        updates["adminNotes"] = (submission.get("adminNotes") or "") + response_audit_line(subject, status)
        updated = self.db.contact_submissions.find_one_and_update(
            {"_id": submission["_id"]}, {"$set": updates}, return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Response sent to {submission['email']} for submission {submission_id}")
        return {"success": True, "message": "Response sent successfully and submission updated.",
                "submission": serialize_doc(updated)}

    def delete_submission(self, submission_id: str) -> Dict:
        result = self.db.contact_submissions.delete_one({"_id": parse_object_id(submission_id, "Submission")})
        if not result.deleted_count:
            raise HTTPException(status_code=404, detail="Submission not found.")
        return {"success": True, "message": "Submission deleted successfully."}
