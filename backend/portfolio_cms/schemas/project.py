"""
Pydantic schemas for Project records
"""

from pydantic import BaseModel, Field, validator
from typing import Optional, List
from datetime import datetime


class ProjectBase(BaseModel):
    """Base project schema with the editable fields"""

    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Project title; the slug is derived from it"
    )

    description: str = Field(
        ...,
        description="Long-form project description"
    )

    technologies: List[str] = Field(
        default_factory=list,
        description="Ordered list of technology names"
    )

    images: List[str] = Field(
        default_factory=list,
        description="Ordered list of image URLs"
    )

    live_url: Optional[str] = Field(None, description="Deployed site URL")

    github_url: Optional[str] = Field(None, description="Source repository URL")

    category: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Showcase category"
    )

    featured: bool = Field(False, description="Shown on the home page")

    @validator('title')
    def validate_title(cls, v):
        """Reject whitespace-only titles"""
        if not v.strip():
            raise ValueError("Title cannot be blank")
        return v


class ProjectCreate(ProjectBase):
    """Schema for creating a new project"""
    pass


class ProjectUpdate(BaseModel):
    """Partial update; only fields that are set are merged"""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    technologies: Optional[List[str]] = None
    images: Optional[List[str]] = None
    live_url: Optional[str] = None
    github_url: Optional[str] = None
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    featured: Optional[bool] = None

    @validator('title')
    def validate_title(cls, v):
        """A title may be left out, but not blanked"""
        if v is not None and not v.strip():
            raise ValueError("Title cannot be blank")
        return v


class Project(ProjectBase):
    """Stored project record"""

    id: str
    slug: str
    created_at: datetime
    updated_at: datetime


class ProjectFilters(BaseModel):
    """In-memory filters applied by the project listing"""

    category: Optional[str] = None
    featured: Optional[bool] = None
    search: Optional[str] = None
