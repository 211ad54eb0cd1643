"""Response envelopes shared by every endpoint."""

from typing import Generic, Optional, TypeVar
from pydantic import BaseModel

T = TypeVar("T")


class Pagination(BaseModel):
    """Page metadata for paginated listings."""

    total: int
    page: int
    limit: int
    pages: int


class APIResponse(BaseModel, Generic[T]):
    """Success envelope: ``{success, message, data}``."""

    success: bool = True
    message: str = "Success"
    data: Optional[T] = None
    pagination: Optional[Pagination] = None


class ErrorResponse(BaseModel):
    """Error envelope rendered by the application exception handlers."""

    success: bool = False
    message: str
    code: str
