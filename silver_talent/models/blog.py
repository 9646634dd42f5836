# silver_talent/models/blog.py
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from bson import ObjectId

from silver_talent.models.job import MediaRef

class BlogCategory(BaseModel):
    name: str = Field(min_length=1)
    slug: Optional[str] = None
    description: str = ""
    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None

class BlogCategoryPayload(BaseModel):
    name: Optional[str] = None
    description: Optional[str] = None

class BlogPost(BaseModel):
    model_config = {"arbitrary_types_allowed": True}

    title: str = Field(min_length=1)
    slug: Optional[str] = None
    excerpt: str = Field(min_length=1)
    content: List[str] = Field(min_length=1, description="Paragraphs")
    author: str = Field(min_length=1)
    readTime: str = Field(min_length=1)
    featuredImage: Optional[MediaRef] = None
    category: ObjectId
    tags: List[str] = []

    # publishDate is set on the unpublished -> published transition only
    isPublished: bool = False
    publishDate: Optional[datetime] = None
    views: int = Field(default=0, ge=0)

    createdAt: Optional[datetime] = None
    updatedAt: Optional[datetime] = None
