"""
Pydantic schemas for TeamMember records
"""

from pydantic import BaseModel, Field
from typing import Optional, Dict, List
from datetime import datetime


class TeamMemberBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    role: str = Field(..., min_length=1, max_length=200, description="Job title shown on the team page")
    bio: str = ""
    avatar: Optional[str] = Field(None, description="Avatar image URL")
    skills: List[str] = Field(default_factory=list)
    experience: str = ""
    social_links: Dict[str, str] = Field(default_factory=dict)
    specialties: List[str] = Field(default_factory=list)


class TeamMemberCreate(TeamMemberBase):
    """Schema for creating a team member; new members start active"""
    pass


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    role: Optional[str] = Field(None, min_length=1, max_length=200)
    bio: Optional[str] = None
    avatar: Optional[str] = None
    skills: Optional[List[str]] = None
    experience: Optional[str] = None
    social_links: Optional[Dict[str, str]] = None
    specialties: Optional[List[str]] = None
    is_active: Optional[bool] = None


class TeamMember(TeamMemberBase):
    """Stored team member record"""

    id: str
    joined_date: datetime
    is_active: bool = True
