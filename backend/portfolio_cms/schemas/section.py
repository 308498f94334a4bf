"""
Pydantic schemas for editable page sections
"""

from enum import Enum
from pydantic import BaseModel, Field
from typing import Any, Dict
from datetime import datetime


class SectionType(str, Enum):
    """Fixed set of section keys; exactly one record per key"""

    HERO = "hero"
    ABOUT = "about"
    TEAM = "team"
    TOOLS = "tools"
    CONTACT = "contact"
    FOOTER = "footer"


class Section(BaseModel):
    """Stored section record; content shape depends on the type"""

    id: str
    type: SectionType
    content: Dict[str, Any] = Field(default_factory=dict)
    updated_at: datetime

    class Config:
        use_enum_values = True


class SectionUpdate(BaseModel):
    """Request body for upserting a section"""

    section: SectionType
    content: Dict[str, Any]
