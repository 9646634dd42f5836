# silver_talent/models/contact.py
from pydantic import AliasChoices, BaseModel, Field
from typing import Optional
from datetime import datetime

CONTACT_STATUSES = ("New", "Viewed", "Replied", "Archived")
CONTACT_STATUS_PATTERN = "^(New|Viewed|Replied|Archived)$"
EMAIL_PATTERN = r"^\S+@\S+\.\S+$"

class ContactForm(BaseModel):
    """Public contact form. Accepts both the short and the yourX field names."""
    model_config = {"populate_by_name": True}

    name: Optional[str] = Field(default=None, validation_alias=AliasChoices("name", "yourName"))
    email: Optional[str] = Field(default=None, validation_alias=AliasChoices("email", "yourEmail"))
    fullPhoneNumber: Optional[str] = None
    countryName: Optional[str] = None
    countryCode: Optional[str] = None
    message: Optional[str] = Field(default=None, validation_alias=AliasChoices("message", "yourMessage"))

class ContactSubmission(BaseModel):
    name: str
    email: str = Field(pattern=EMAIL_PATTERN)
    fullPhoneNumber: str
    countryName: str = ""
    countryCode: str = ""
    message: str
    status: str = Field(default="New", pattern=CONTACT_STATUS_PATTERN)
    adminNotes: Optional[str] = None
    submittedAt: Optional[datetime] = None
    repliedAt: Optional[datetime] = None

class SubmissionStatusUpdate(BaseModel):
    status: str = Field(pattern=CONTACT_STATUS_PATTERN)
    adminNotes: Optional[str] = None

class SubmissionResponse(BaseModel):
    subject: Optional[str] = None
    body: Optional[str] = None
    updateStatusToReplied: bool = True

class ContactInfoUpdate(BaseModel):
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    locationMapUrl: Optional[str] = None
