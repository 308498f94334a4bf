"""
Pydantic schemas for records and API request/response validation
"""

from .common import RecordPage, Pagination, PaginatedResponse, APIResponse
from .user import User, UserPublic, UserCreate, LoginRequest, AuthResult, TokenClaims, VerifyResult
from .project import Project, ProjectCreate, ProjectUpdate, ProjectFilters
from .section import Section, SectionType, SectionUpdate
from .team_member import TeamMember, TeamMemberCreate, TeamMemberUpdate

__all__ = [
    # Envelopes
    "RecordPage", "Pagination", "PaginatedResponse", "APIResponse",
    # User / auth schemas
    "User", "UserPublic", "UserCreate", "LoginRequest", "AuthResult", "TokenClaims", "VerifyResult",
    # Project schemas
    "Project", "ProjectCreate", "ProjectUpdate", "ProjectFilters",
    # Section schemas
    "Section", "SectionType", "SectionUpdate",
    # Team member schemas
    "TeamMember", "TeamMemberCreate", "TeamMemberUpdate",
]
