"""
Main API router that includes all endpoint routers
"""

from fastapi import APIRouter

from portfolio_cms.api.api_v1.endpoints import auth, projects, sections, team_members

# Create main API router
api_router = APIRouter()

# Include all endpoint routers
api_router.include_router(auth.router, prefix="/auth", tags=["authentication"])
api_router.include_router(projects.router, prefix="/projects", tags=["projects"])
api_router.include_router(sections.router, prefix="/sections", tags=["sections"])
api_router.include_router(team_members.router, prefix="/team-members", tags=["team-members"])
