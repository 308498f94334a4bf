"""
Team member store

Persisted document:
    {"members": {id: member}, "member_ids": [id, ...]}
"""

from datetime import datetime
from typing import Any, Dict, List

from portfolio_cms.schemas.team_member import TeamMember
from portfolio_cms.services.record_store import RecordStore


class TeamMemberStore(RecordStore[TeamMember]):
    kind = "TeamMember"
    record_model = TeamMember
    records_key = "members"
    ids_key = "member_ids"
    id_prefix = "member"
    immutable_fields = frozenset({"id", "joined_date"})

    def _prepare_new(self, document: Dict[str, Any], data: Dict[str, Any], now: datetime) -> None:
        data["joined_date"] = now
        data["is_active"] = True

    def list(self, active_only: bool = False) -> List[TeamMember]:
        """All members (or only active ones), most recently joined first."""
        predicate = (lambda m: m.is_active) if active_only else None
        return self.list_records(predicate, lambda m: m.joined_date).records
