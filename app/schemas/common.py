"""
공통 응답 스키마

오류 응답 형식을 정의합니다.
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """
    단일 메시지 오류 응답 (404, 409, 500)

    Example:
        {"message": "Product with id 1 not found"}
    """

    message: str = Field(..., description="오류 설명")


class FieldError(BaseModel):
    """필드 단위 검증 오류"""

    field: str = Field(..., description="오류가 발생한 필드")
    message: str = Field(..., description="오류 설명")


class ValidationErrorResponse(BaseModel):
    """
    검증 실패 응답 (400)

    Example:
        {
            "message": "Validation failed",
            "errors": [
                {"field": "price", "message": "Price must be greater than 0"}
            ]
        }
    """

    message: str = Field("Validation failed", description="오류 요약")
    errors: list[FieldError] = Field(default_factory=list, description="필드별 오류 목록")
