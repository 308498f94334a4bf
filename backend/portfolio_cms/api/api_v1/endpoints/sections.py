"""
Editable page section endpoints
"""

from typing import Dict

from fastapi import APIRouter, Depends

from portfolio_cms.api.deps import get_section_store, require_admin
from portfolio_cms.core.exceptions import RecordNotFound
from portfolio_cms.schemas.common import APIResponse
from portfolio_cms.schemas.section import Section, SectionType, SectionUpdate
from portfolio_cms.schemas.user import TokenClaims
from portfolio_cms.services.section_store import SectionStore

router = APIRouter()


@router.get("/", response_model=APIResponse[Dict[str, Section]])
def list_sections(store: SectionStore = Depends(get_section_store)):
    return APIResponse[Dict[str, Section]](success=True, data=store.get_all_sections())


@router.get("/{section_type}", response_model=APIResponse[Section])
def get_section(section_type: SectionType, store: SectionStore = Depends(get_section_store)):
    section = store.get_section(section_type)
    if not section:
        raise RecordNotFound("Section", section_type.value)
    return APIResponse[Section](success=True, data=section)


@router.put("/", response_model=APIResponse[Section])
def update_section(
    body: SectionUpdate,
    store: SectionStore = Depends(get_section_store),
    _admin: TokenClaims = Depends(require_admin),
):
    section = store.update_section(body.section, body.content)
    return APIResponse[Section](success=True, data=section, message="Section updated successfully")
