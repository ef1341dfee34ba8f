from typing import Optional, List, Generic, TypeVar, Any
from pydantic import BaseModel

T = TypeVar("T")


# Envelope wrapping every response body: {success, message, data?}
class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: str
    data: Optional[T] = None


class PaginationMeta(BaseModel):
    total_items: int
    current_page: int
    total_pages: int


# Paginated payload, used by list endpoints that page
class PaginatedData(BaseModel, Generic[T]):
    data: List[T]
    meta: PaginationMeta


# Error responses
class ErrorResponse(BaseModel):
    success: bool = False
    message: str


class ValidationErrorResponse(ErrorResponse):
    errors: List[Any]
