"""Encrypted record stores for projects, sections and team members."""
from .record_store import RecordStore
from .project_store import ProjectStore, generate_slug
from .section_store import SectionStore, DEFAULT_SECTIONS
from .team_member_store import TeamMemberStore

__all__ = [
    "RecordStore",
    "ProjectStore", "generate_slug",
    "SectionStore", "DEFAULT_SECTIONS",
    "TeamMemberStore",
]
