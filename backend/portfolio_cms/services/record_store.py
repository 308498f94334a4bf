"""
Generic encrypted record store

A store owns one collection document of the shape

    {<records_key>: {id: record}, <ids_key>: [id, ...], ...secondary indices}

and performs every mutation as load -> mutate map and indices together ->
one save, while holding the backend lock. Records are pydantic models in
memory and JSON-mode dicts on disk.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, FrozenSet, Generic, Iterator, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from portfolio_cms.core.exceptions import InvalidRecord
from portfolio_cms.core.records import new_record_id, utcnow
from portfolio_cms.db.database import CollectionBackend
from portfolio_cms.schemas.common import RecordPage

logger = logging.getLogger(__name__)

R = TypeVar("R", bound=BaseModel)


class RecordStore(Generic[R]):
    """Base class for id-keyed collections with an ordered id list."""

    kind: str = "Record"
    record_model: Type[R]
    records_key: str = "records"
    ids_key: str = "record_ids"
    id_prefix: str = "record"
    immutable_fields: FrozenSet[str] = frozenset({"id"})

    def __init__(self, backend: CollectionBackend):
        self.backend = backend

    # ------------------------------------------------------------------
    # Collection document
    # ------------------------------------------------------------------

    def empty(self) -> Dict[str, Any]:
        return {self.records_key: {}, self.ids_key: []}

    def load(self) -> Dict[str, Any]:
        """Full collection; empty when the backing file is missing or unreadable."""
        document = self.backend.load(self.empty)
        for key, value in self.empty().items():
            document.setdefault(key, value)
        return document

    def save(self, document: Dict[str, Any]) -> None:
        self.backend.save(document)

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _prepare_new(self, document: Dict[str, Any], data: Dict[str, Any], now: datetime) -> None:
        """Fill generated fields on a record about to be inserted."""

    def _prepare_update(self, document: Dict[str, Any], existing: R, merged: Dict[str, Any], now: datetime) -> None:
        """Adjust generated fields and secondary indices for an update."""

    def _index_insert(self, document: Dict[str, Any], record: R) -> None:
        """Add a new record to secondary indices."""

    def _index_remove(self, document: Dict[str, Any], record: R) -> None:
        """Drop a record from secondary indices."""

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def _parse(self, raw: Dict[str, Any]) -> R:
        return self.record_model.model_validate(raw)

    def _validate(self, data: Dict[str, Any]) -> R:
        """Parse caller-supplied fields, reporting failures as InvalidRecord."""
        try:
            return self._parse(data)
        except ValidationError as e:
            raise InvalidRecord(self.kind, [{"loc": list(err["loc"]), "msg": err["msg"]} for err in e.errors()])

    def _dump(self, record: R) -> Dict[str, Any]:
        return record.model_dump(mode="json")

    def iter_records(self, document: Dict[str, Any]) -> Iterator[R]:
        """Records in id-list order, skipping ids without a record."""
        records = document[self.records_key]
        for record_id in document[self.ids_key]:
            raw = records.get(record_id)
            if raw is not None:
                yield self._parse(raw)

    def get(self, record_id: str) -> Optional[R]:
        raw = self.load()[self.records_key].get(record_id)
        return self._parse(raw) if raw is not None else None

    def create(self, fields: Union[BaseModel, Dict[str, Any]]) -> R:
        with self.backend.lock:
            document = self.load()
            now = utcnow()
            data = fields.model_dump() if isinstance(fields, BaseModel) else dict(fields)
            for key in self.immutable_fields:
                data.pop(key, None)
            data["id"] = new_record_id(self.id_prefix)
            self._prepare_new(document, data, now)

            record = self._validate(data)
            document[self.records_key][record.id] = self._dump(record)
            document[self.ids_key].append(record.id)
            self._index_insert(document, record)
            self.save(document)

        logger.info(f"{self.kind} created: {record.id}")
        return record

    def _clean_changes(self, changes: Dict[str, Any]) -> Dict[str, Any]:
        """Drop immutable, unknown, and null-for-required fields from an update."""
        fields = self.record_model.model_fields
        cleaned = {}
        for key, value in changes.items():
            if key in self.immutable_fields or key not in fields:
                continue
            if value is None and fields[key].is_required():
                continue
            cleaned[key] = value
        return cleaned

    def update(self, record_id: str, changes: Dict[str, Any]) -> Optional[R]:
        with self.backend.lock:
            document = self.load()
            raw = document[self.records_key].get(record_id)
            if raw is None:
                return None

            existing = self._parse(raw)
            merged = {**existing.model_dump(), **self._clean_changes(changes)}
            self._prepare_update(document, existing, merged, utcnow())

            record = self._validate(merged)
            document[self.records_key][record_id] = self._dump(record)
            self.save(document)

        logger.info(f"{self.kind} updated: {record_id}")
        return record

    def delete(self, record_id: str) -> bool:
        with self.backend.lock:
            document = self.load()
            raw = document[self.records_key].get(record_id)
            if raw is None:
                return False

            self._index_remove(document, self._parse(raw))
            del document[self.records_key][record_id]
            document[self.ids_key] = [i for i in document[self.ids_key] if i != record_id]
            self.save(document)

        logger.info(f"{self.kind} deleted: {record_id}")
        return True

    def list_records(
        self,
        predicate: Optional[Callable[[R], bool]] = None,
        sort_key: Optional[Callable[[R], Any]] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> RecordPage[R]:
        """
        Filter, sort (descending), count, then slice one 1-based page.

        `total` is the size of the filtered set, independent of the page.
        Pages past the end, or a non-positive page/limit, yield no records.
        """
        records: List[R] = [
            r for r in self.iter_records(self.load())
            if predicate is None or predicate(r)
        ]
        if sort_key is not None:
            records.sort(key=sort_key, reverse=True)

        total = len(records)
        if limit is None:
            return RecordPage[self.record_model](records=records, total=total)
        if page < 1 or limit < 1:
            return RecordPage[self.record_model](records=[], total=total)

        start = (page - 1) * limit
        return RecordPage[self.record_model](records=records[start:start + limit], total=total)

    def initialize_defaults(self) -> None:
        """Seed default content; most collections have none."""
