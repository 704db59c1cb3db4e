"""
Pydantic 스키마 모듈
"""

from app.schemas.common import FieldError, MessageResponse, ValidationErrorResponse
from app.schemas.product import (
    PageResult,
    ProductCreateRequest,
    ProductQuery,
    ProductResponse,
    ProductUpdateRequest,
)

__all__ = [
    "FieldError",
    "MessageResponse",
    "ValidationErrorResponse",
    "PageResult",
    "ProductCreateRequest",
    "ProductQuery",
    "ProductResponse",
    "ProductUpdateRequest",
]
