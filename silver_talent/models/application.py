# silver_talent/models/application.py
from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime
from bson import ObjectId

from silver_talent.models.job import MediaRef

APPLICATION_STATUSES = ("Pending", "Viewed", "In Progress", "Contacted", "Hired", "Rejected")
APPLICATION_STATUS_PATTERN = "^(Pending|Viewed|In Progress|Contacted|Hired|Rejected)$"

class Application(BaseModel):
    model_config = {"arbitrary_types_allowed": True}

    jobId: ObjectId
    # Snapshot of the job at application time, never re-synced
    jobTitle: str
    companyName: str

    name: str
    email: str
    coverLetter: Optional[str] = None
    resume: MediaRef

    status: str = Field(default="Pending", pattern=APPLICATION_STATUS_PATTERN)
    adminNotes: Optional[str] = None
    appliedDate: Optional[datetime] = None
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

class ApplicationStatusUpdate(BaseModel):
    status: str = Field(pattern=APPLICATION_STATUS_PATTERN)
    adminNotes: Optional[str] = None

class ApplicationResponse(BaseModel):
    subject: Optional[str] = None
    body: Optional[str] = None
    newStatus: Optional[str] = Field(default=None, pattern=APPLICATION_STATUS_PATTERN)
