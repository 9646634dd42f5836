# silver_talent/services/application_service.py
import logging
from typing import Any, Callable, Dict, List, Optional, Tuple

from fastapi import BackgroundTasks, HTTPException
from pymongo import ReturnDocument

from silver_talent.config import Config
from silver_talent.database.mongodb import MongoDB, parse_object_id, serialize_doc, utcnow
from silver_talent.models.application import Application, ApplicationResponse, ApplicationStatusUpdate
from silver_talent.models.contact import EMAIL_PATTERN
from silver_talent.services.listing import paginate, parse_page_params, parse_sort, ListingQuery
from silver_talent.services.media import MediaStoreError, UploadedFile
from silver_talent.services.notifier import NotificationError, escape, text_to_html
from silver_talent.services.side_effects import run_side_effects
from silver_talent.services.validation import clean, matches, require_fields

logger = logging.getLogger(__name__)

MAX_RESUME_BYTES = Config.MAX_RESUME_SIZE_MB * 1024 * 1024


def response_audit_line(subject: str, status: str) -> str:
    stamp = utcnow().strftime("%Y-%m-%d %H:%M:%S UTC")
    return f"\n--- Response Sent ({stamp}) ---\nSubject: {subject}\nStatus set to: {status}\n---"


class ApplicationService:
    def __init__(self, db: MongoDB, media_store, notifier):
        self.db = db
        self.media_store = media_store
        self.notifier = notifier

    def apply_for_job(self, fields: Dict[str, Any], resume_file: Optional[UploadedFile],
                      background_tasks: BackgroundTasks) -> Dict:
        """
        Validate, upload the resume, persist the application, then queue the
        admin/applicant emails. Nothing after the insert can fail the request.
        """
        values = require_fields({name: fields.get(name) for name in
                                 ("jobId", "jobTitle", "companyName", "name", "email")})
        if not matches(EMAIL_PATTERN, values["email"]):
            raise HTTPException(status_code=400, detail={"message": "A valid email address is required.",
                                                         "errors": {"email": "Invalid email address."}})

        if resume_file is None:
            raise HTTPException(status_code=400, detail="Resume file is required (expected field name: resume).")
        if resume_file.content_type not in Config.ALLOWED_RESUME_TYPES:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid resume file type. Allowed: PDF, DOC, DOCX. Received: {resume_file.content_type}",
            )
        content = resume_file.content
        if len(content) > MAX_RESUME_BYTES:
            raise HTTPException(status_code=400, detail=f"Resume file size exceeds {Config.MAX_RESUME_SIZE_MB}MB.")

        job_oid = parse_object_id(values["jobId"], "Job")
        if not self.db.jobs.find_one({"_id": job_oid}, {"_id": 1}):
            raise HTTPException(status_code=404, detail="Job not found.")

        try:
            resume = self.media_store.upload(content, resume_file.filename or "resume", Config.RESUMES_FOLDER)
        except MediaStoreError as e:
            logger.error(f"Resume upload failed: {e}")
            raise HTTPException(status_code=500, detail="Failed to upload resume. Please try again.")

        now = utcnow()
        application = Application(
            jobId=job_oid,
            jobTitle=values["jobTitle"],
            companyName=values["companyName"],
            name=values["name"],
            email=values["email"].lower(),
            coverLetter=clean(fields.get("coverLetter")),
            resume=resume,
            status="Pending",
            appliedDate=now,
            createdAt=now,
            updatedAt=now,
        )
        doc = application.model_dump()
        try:
            result = self.db.applications.insert_one(doc)
        except Exception:
            # The uploaded resume is left in place for manual cleanup
            logger.warning(f"Potential cleanup needed: resume {resume['public_id']} uploaded but saving the application failed.")
            raise
        doc["_id"] = result.inserted_id
        logger.info(f"Application saved for {doc['name']} for job {doc['jobTitle']}. App ID: {result.inserted_id}")

        background_tasks.add_task(run_side_effects, self._application_emails(doc))
        return {
            "success": True,
            "message": "Application submitted successfully! We will review it and get back to you.",
            "applicationId": str(result.inserted_id),
        }

    def _application_emails(self, doc: Dict) -> List[Tuple[str, Callable[[], None]]]:
        company = Config.COMPANY_NAME
        effects = []

        owner = self.notifier.default_recipient
        if owner:
            admin_html = f"""
                <p>A new job application has been submitted:</p>
                <ul>
                    <li><strong>Applicant:</strong> {escape(doc['name'])} ({escape(doc['email'])})</li>
                    <li><strong>For Job:</strong> {escape(doc['jobTitle'])} at {escape(doc['companyName'])}</li>
                    <li><strong>Applied On:</strong> {doc['appliedDate'].strftime('%Y-%m-%d')}</li>
                    <li><strong>Resume:</strong> <a href="{escape(doc['resume']['url'])}" target="_blank">View/Download Resume</a></li>
                </ul>
                <p>Details available in the admin dashboard.</p>
            """
            effects.append(("admin application notification", lambda: self.notifier.send(
                owner,
                f"New Job Application: {doc['jobTitle']} - {doc['name']}",
                admin_html,
                sender=self.notifier.sender("Job Portal Admin"),
            )))
        else:
            logger.warning("OWNER_EMAIL not configured; admin will not be notified of this application.")

        applicant_html = f"""
            <p>Dear {escape(doc['name'])},</p>
            <p>Thank you for applying for the <strong>{escape(doc['jobTitle'])}</strong> position at <strong>{escape(doc['companyName'])}</strong>.</p>
            <p>We have successfully received your application. Our hiring team will review your qualifications and experience and contact you regarding the next steps if your profile is a match.</p>
            <br/>
            <p>Sincerely,</p>
            <p>The {escape(company)} Team</p>
        """
        effects.append(("applicant confirmation", lambda: self.notifier.send(
            doc["email"],
            f"Your Application for {doc['jobTitle']} at {doc['companyName']} - Received!",
            applicant_html,
            sender=self.notifier.sender(f"{company} Careers"),
        )))
        return effects

    def _with_job(self, application: Dict) -> Dict:
        job = self.db.jobs.find_one({"_id": application.get("jobId")}, {"title": 1})
        application["job"] = job
        return application

    def get_all_applications(self, page: Any = 1, limit: Any = 20, sort: Optional[str] = None,
                             status_filter: Optional[str] = None) -> Dict:
        query: Dict[str, Any] = {}
        if status_filter and status_filter != "All":
            query["status"] = status_filter
        effective_page, effective_limit = parse_page_params(page, limit, default_limit=20)
        listing = ListingQuery(
            filter=query,
            sort=parse_sort(sort, "-appliedDate"),
            page=effective_page,
            limit=effective_limit,
        )
        result = paginate(self.db.applications, listing, "applications", transform=self._with_job)
        result["success"] = True
        return result

    def get_application(self, application_id: str) -> Dict:
        application = self.db.get_by_id(self.db.applications, application_id, "Application")
        return serialize_doc(self._with_job(application))

    def update_status(self, application_id: str, payload: ApplicationStatusUpdate) -> Dict:
        updates: Dict[str, Any] = {"status": payload.status, "updatedAt": utcnow()}
        if payload.adminNotes is not None:
            updates["adminNotes"] = payload.adminNotes
        application = self.db.applications.find_one_and_update(
            {"_id": parse_object_id(application_id, "Application")},
            {"$set": updates},
            return_document=ReturnDocument.AFTER,
        )
        if not application:
            raise HTTPException(status_code=404, detail="Application not found.")
        logger.info(f"Application {application_id} status set to {payload.status}")
        return {"success": True, "message": "Application status updated.", "application": serialize_doc(application)}

    def respond(self, application_id: str, payload: ApplicationResponse) -> Dict:
        """Email the applicant; only a successful send changes the record"""
        subject, body = clean(payload.subject), clean(payload.body)
        if not subject or not body:
            raise HTTPException(status_code=400, detail="Response subject and body are required.")

        application = self.db.get_by_id(self.db.applications, application_id, "Application")

        if not (self.notifier.is_configured and self.notifier.is_ready):
            logger.error("Email service not configured; cannot respond to application.")
            raise HTTPException(status_code=503, detail="Email service unavailable. Cannot send response.")

        company = Config.COMPANY_NAME
        html_body = (
            f"<p>Dear {escape(application['name'])},</p>"
            f'<div style="white-space: pre-wrap; font-family: Arial, sans-serif; line-height: 1.6;">{text_to_html(body)}</div>'
            f"<br/><p>Best regards,</p><p>The {escape(company)} Team</p>"
        )
        try:
            self.notifier.send(application["email"], subject, html_body,
                               sender=self.notifier.sender(f"{company} Hiring Team"))
        except NotificationError as e:
            logger.error(f"Failed to send response for application {application_id}: {e}")
            raise HTTPException(status_code=500, detail="Failed to send response email. Please try again later.")

        status = payload.newStatus or "Contacted"
        notes = (application.get("adminNotes") or "") + response_audit_line(subject, status)
        updated = self.db.applications.find_one_and_update(
            {"_id": application["_id"]},
            {"$set": {"status": status, "adminNotes": notes, "updatedAt": utcnow()}},
            return_document=ReturnDocument.AFTER,
        )
        logger.info(f"Response sent to {application['email']}; application {application_id} set to {status}")
        return {
            "success": True,
            "message": "Response sent successfully to the applicant and status updated.",
            "updatedApplication": serialize_doc(updated),
        }
