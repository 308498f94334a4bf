"""
Project store - records plus an ordered id list and a slug -> id index

Persisted document:
    {"projects": {id: project}, "project_ids": [id, ...], "project_slugs": {slug: id}}
"""

import re
from datetime import datetime
from typing import Any, Dict, Optional

from portfolio_cms.schemas.common import RecordPage
from portfolio_cms.schemas.project import Project, ProjectFilters
from portfolio_cms.services.record_store import RecordStore

_DEFAULT_SLUG = "project"


def generate_slug(title: str) -> str:
    """
    Convert a project title to a URL slug.

    Example: "My New App!" -> "my-new-app"
    """
    s = title.lower()
    s = re.sub(r"[^a-z0-9 -]", "", s)
    s = re.sub(r"\s+", "-", s)
    s = re.sub(r"-+", "-", s)
    return s.strip().strip("-")


class ProjectStore(RecordStore[Project]):
    kind = "Project"
    record_model = Project
    records_key = "projects"
    ids_key = "project_ids"
    slugs_key = "project_slugs"
    id_prefix = "project"
    immutable_fields = frozenset({"id", "slug", "created_at", "updated_at"})

    def empty(self) -> Dict[str, Any]:
        return {self.records_key: {}, self.ids_key: [], self.slugs_key: {}}

    # ------------------------------------------------------------------
    # Slug index
    # ------------------------------------------------------------------

    def _reserve_slug(self, document: Dict[str, Any], title: Any, record_id: str) -> str:
        """Slug for `title`, suffixed -2, -3, ... while another record holds it."""
        slugs = document[self.slugs_key]
        # Non-string titles are rejected by validation after this runs
        base = (generate_slug(title) if isinstance(title, str) else "") or _DEFAULT_SLUG
        slug, n = base, 2
        while slugs.get(slug) not in (None, record_id):
            slug = f"{base}-{n}"
            n += 1
        return slug

    def _prepare_new(self, document: Dict[str, Any], data: Dict[str, Any], now: datetime) -> None:
        data["slug"] = self._reserve_slug(document, data.get("title"), data["id"])
        data["created_at"] = now
        data["updated_at"] = now

    def _prepare_update(self, document: Dict[str, Any], existing: Project, merged: Dict[str, Any], now: datetime) -> None:
        merged["updated_at"] = now
        if merged["title"] == existing.title:
            return

        slugs = document[self.slugs_key]
        new_slug = self._reserve_slug(document, merged["title"], existing.id)
        if slugs.get(existing.slug) == existing.id:
            del slugs[existing.slug]
        slugs[new_slug] = existing.id
        merged["slug"] = new_slug

    def _index_insert(self, document: Dict[str, Any], record: Project) -> None:
        document[self.slugs_key][record.slug] = record.id

    def _index_remove(self, document: Dict[str, Any], record: Project) -> None:
        slugs = document[self.slugs_key]
        if slugs.get(record.slug) == record.id:
            del slugs[record.slug]

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_by_slug(self, slug: str) -> Optional[Project]:
        document = self.load()
        record_id = document[self.slugs_key].get(slug)
        if record_id is None:
            return None
        raw = document[self.records_key].get(record_id)
        return self._parse(raw) if raw is not None else None

    def list(
        self,
        filters: Optional[ProjectFilters] = None,
        page: int = 1,
        limit: int = 10,
    ) -> RecordPage[Project]:
        """Filtered projects, newest update first, one page at a time."""
        filters = filters or ProjectFilters()
        search = filters.search.lower() if filters.search else None

        def matches(project: Project) -> bool:
            if filters.category and project.category != filters.category:
                return False
            if filters.featured is not None and project.featured != filters.featured:
                return False
            if search:
                return (
                    search in project.title.lower()
                    or search in project.description.lower()
                    or any(search in t.lower() for t in project.technologies)
                )
            return True

        return self.list_records(matches, lambda p: p.updated_at, page, limit)
