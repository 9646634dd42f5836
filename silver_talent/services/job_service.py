# silver_talent/services/job_service.py
import logging
from typing import Any, Dict, Optional
from urllib.parse import quote

from fastapi import HTTPException
from pydantic import ValidationError

from silver_talent.config import Config
from silver_talent.data import FEATURED_COMPANIES, JOB_CATEGORIES, LOCATIONS, JOB_TYPES
from silver_talent.database.mongodb import MongoDB, serialize_doc, utcnow
from silver_talent.models.job import Job
from silver_talent.services.listing import build_job_listing, paginate
from silver_talent.services.media import MediaStoreError, UploadedFile, delete_quietly
from silver_talent.services.validation import require_fields, split_list

logger = logging.getLogger(__name__)

REQUIRED_JOB_FIELDS = ("title", "company", "location", "type", "salary", "category", "description")


def placeholder_logo(company: str) -> Dict[str, Optional[str]]:
    initials = quote((company or "")[:2].upper())
    return {"public_id": None, "url": f"https://via.placeholder.com/128/CCCCCC/FFFFFF?text={initials}"}


def validation_errors(error: ValidationError) -> Dict[str, str]:
    return {".".join(str(p) for p in e["loc"]): e["msg"] for e in error.errors()}


class JobService:
    def __init__(self, db: MongoDB, media_store):
        self.db = db
        self.media_store = media_store

    def get_all_jobs(self, q: Optional[str] = None, category: Optional[str] = None,
                     location: Optional[str] = None, type: Optional[str] = None,
                     page: Any = 1, limit: Any = None, admin_view: Any = None) -> Dict:
        listing = build_job_listing(q=q, category=category, location=location, type=type,
                                    page=page, limit=limit, admin_view=admin_view)
        return paginate(self.db.jobs, listing, "jobs")

    def get_job(self, job_id: str) -> Dict:
        return serialize_doc(self.db.get_by_id(self.db.jobs, job_id, "Job"))

    def _upload_logo(self, logo_file: UploadedFile) -> Optional[Dict[str, str]]:
        """Logo uploads never block the job write; None means it failed"""
        try:
            return self.media_store.upload(logo_file.content, logo_file.filename or "logo", Config.COMPANY_LOGOS_FOLDER)
        except MediaStoreError as e:
            logger.warning(f"Logo upload error (non-blocking): {e}")
            return None

    def create_job(self, fields: Dict[str, Any], logo_file: Optional[UploadedFile] = None) -> Dict:
        values = require_fields({name: fields.get(name) for name in REQUIRED_JOB_FIELDS})

        logo = placeholder_logo(values["company"])
        if logo_file is not None:
            logo = self._upload_logo(logo_file) or logo

        now = utcnow()
        try:
            job = Job(
                **values,
                skills=split_list(fields.get("skills")),
                logo=logo,
                rating=fields.get("rating") or 0,
                applicants=0,
                postedDate=now,
                createdAt=now,
                updatedAt=now,
            )
        except ValidationError as e:
            raise HTTPException(status_code=400, detail={"message": "Validation Error", "errors": validation_errors(e)})

        doc = job.to_document()
        result = self.db.jobs.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info(f"Job created: {values['title']} at {values['company']} ({result.inserted_id})")
        return {"message": "Job vacancy added successfully!", "job": serialize_doc(doc)}

    def update_job(self, job_id: str, fields: Dict[str, Any], logo_file: Optional[UploadedFile] = None,
                   remove_logo: bool = False) -> Dict:
        existing = self.db.get_by_id(self.db.jobs, job_id, "Job")
        values = require_fields({name: fields.get(name) for name in REQUIRED_JOB_FIELDS})

        updates: Dict[str, Any] = dict(values)
        if fields.get("skills") is not None:
            updates["skills"] = split_list(fields.get("skills"))
        if fields.get("rating") not in (None, ""):
            try:
                rating = float(fields["rating"])
            except (TypeError, ValueError):
                rating = -1
            if not 0 <= rating <= 5:
                raise HTTPException(status_code=400, detail={"message": "Validation Error",
                                                             "errors": {"rating": "rating must be between 0 and 5."}})
            updates["rating"] = rating

        previous_logo = existing.get("logo") or {}
        if logo_file is not None:
            uploaded = self._upload_logo(logo_file)
            if uploaded:
                delete_quietly(self.media_store, previous_logo, "while replacing logo ")
                updates["logo"] = uploaded
        elif remove_logo:
            delete_quietly(self.media_store, previous_logo, "on remove request ")
            updates["logo"] = placeholder_logo(values["company"])

        updates["updatedAt"] = utcnow()
        self.db.jobs.update_one({"_id": existing["_id"]}, {"$set": updates})
        job = self.db.jobs.find_one({"_id": existing["_id"]})
        return {"message": "Job vacancy updated successfully!", "job": serialize_doc(job)}

    def delete_job(self, job_id: str) -> Dict:
        job = self.db.get_by_id(self.db.jobs, job_id, "Job")
        delete_quietly(self.media_store, job.get("logo"), "for deleted job ")
        self.db.jobs.delete_one({"_id": job["_id"]})
        # Applications referencing this job are intentionally left in place
        logger.info(f"Job deleted: {job['_id']}")
        return {"message": "Job vacancy deleted successfully!", "jobId": str(job["_id"])}

    def get_featured_companies(self):
        counts: Dict[str, int] = {}
        for job in self.db.jobs.find({}, {"company": 1}):
            name = (job.get("company") or "").lower()
            counts[name] = counts.get(name, 0) + 1
        return [
            dict(company, _id=company["id"], jobs=counts.get(company["name"].lower(), 0))
            for company in FEATURED_COMPANIES
        ]

    def get_filter_options(self):
        return {"categories": JOB_CATEGORIES, "locations": LOCATIONS, "jobTypes": JOB_TYPES}
