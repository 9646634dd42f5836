# silver_talent/models/job.py
from pydantic import BaseModel, Field
from typing import List, Optional, Dict
from datetime import datetime

class MediaRef(BaseModel):
    """Pointer to an object held by the media store"""
    public_id: Optional[str] = None
    url: Optional[str] = None

class Job(BaseModel):
    title: str = Field(min_length=1)
    company: str = Field(min_length=1)
    location: str = Field(min_length=1)
    type: str = Field(min_length=1, description="Full-time, Part-time, Contract...")
    salary: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str = Field(min_length=1)
    skills: List[str] = []

    logo: Optional[MediaRef] = None

    # Metadata
    postedDate: Optional[datetime] = None
    rating: float = Field(default=0, ge=0, le=5)
    applicants: int = Field(default=0, ge=0)
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

    def to_document(self) -> Dict:
        return self.model_dump()
