"""
Response envelopes shared by the stores and the API
"""

from pydantic import BaseModel
from typing import Generic, List, Optional, TypeVar

T = TypeVar("T")


class RecordPage(BaseModel, Generic[T]):
    """One page of a filtered listing; total counts the filtered set"""

    records: List[T]
    total: int


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class PaginatedResponse(BaseModel, Generic[T]):
    data: List[T]
    pagination: Pagination


class APIResponse(BaseModel, Generic[T]):
    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    message: Optional[str] = None
