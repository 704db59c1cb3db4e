"""
상품 관련 Pydantic 스키마

API 요청/응답 모델과 요청 검증 규칙을 정의합니다.
서비스 계층에 도달하기 전에 구조적 검증(필수값, 길이, 범위)을 수행합니다.
"""

from datetime import datetime
from decimal import Decimal
from typing import Annotated, Generic, Optional, TypeVar

from pydantic import (
    AfterValidator,
    BaseModel,
    ConfigDict,
    Field,
    PlainSerializer,
    ValidationInfo,
    field_validator,
)

from app.core.config import get_settings

T = TypeVar("T")

# JSON 응답에서는 문자열이 아닌 숫자로 직렬화
Price = Annotated[
    Decimal, PlainSerializer(float, return_type=float, when_used="json")
]


def validate_price(price: Decimal) -> Decimal:
    """
    상품 가격 검증

    0보다 커야 하고, 설정된 최소 가격 이상, 최대 가격 미만이어야 합니다.

    Raises:
        ValueError: 가격이 허용 범위를 벗어난 경우
    """
    settings = get_settings()
    if price <= 0:
        raise ValueError("Price must be greater than 0")
    if price < settings.min_product_price:
        raise ValueError(f"Price must be at least {settings.min_product_price}")
    if price >= settings.max_product_price:
        raise ValueError(f"Price must be less than {settings.max_product_price:,}")
    return price


# 저장 컬럼 Numeric(10, 2)와 같은 자릿수 (반올림 저장 방지)
ProductPrice = Annotated[
    Decimal,
    Field(max_digits=10, decimal_places=2),
    AfterValidator(validate_price),
]


class ProductCreateRequest(BaseModel):
    """
    상품 생성 요청 스키마

    Example:
        {
            "name": "iPhone 16 Pro",
            "brand": "Apple",
            "price": 999.99
        }
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="상품명 (1-100자)",
        examples=["iPhone 16 Pro"],
    )
    brand: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="브랜드명 (1-100자)",
        examples=["Apple"],
    )
    price: ProductPrice = Field(
        ...,
        description="상품 가격 (0 초과, 최대 가격 미만, 소수점 2자리 이하)",
        examples=[999.99],
    )


class ProductUpdateRequest(ProductCreateRequest):
    """
    상품 수정 요청 스키마

    생성 요청과 같은 필드와 검증 규칙을 사용합니다 (전체 교체).

    Example:
        {
            "name": "iPhone 16 Pro",
            "brand": "Apple",
            "price": 949.99
        }
    """


class ProductQuery(BaseModel):
    """
    상품 목록 조회 조건 (필터 + 페이지네이션)

    쿼리 파라미터 이름은 camelCase(minPrice, pageNumber 등)이며,
    코드에서는 snake_case 필드명으로도 생성할 수 있습니다.

    Example:
        GET /api/products?brand=apple&minPrice=100&pageNumber=2&pageSize=20
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    name: Optional[str] = Field(None, description="상품명 부분 일치 필터")
    brand: Optional[str] = Field(None, description="브랜드명 부분 일치 필터")
    min_price: Optional[Decimal] = Field(
        None, ge=0, alias="minPrice", description="최소 가격 (포함)"
    )
    max_price: Optional[Decimal] = Field(
        None, ge=0, alias="maxPrice", description="최대 가격 (포함)"
    )
    page_number: int = Field(1, gt=0, alias="pageNumber", description="페이지 번호 (1부터)")
    page_size: int = Field(
        10, gt=0, le=100, alias="pageSize", description="페이지 크기 (1-100)"
    )

    @field_validator("max_price")
    @classmethod
    def check_price_range(
        cls, max_price: Optional[Decimal], info: ValidationInfo
    ) -> Optional[Decimal]:
        """최소/최대 가격이 모두 있으면 최소 가격 <= 최대 가격"""
        min_price = info.data.get("min_price")
        if min_price is not None and max_price is not None and min_price > max_price:
            raise ValueError("Minimum price must be less than or equal to maximum price")
        return max_price

    @property
    def offset(self) -> int:
        """페이지네이션 시작 위치 (0부터)"""
        return (self.page_number - 1) * self.page_size


class ProductResponse(BaseModel):
    """
    상품 정보 응답 스키마

    Example:
        {
            "id": 1,
            "name": "iPhone 16 Pro",
            "brand": "Apple",
            "price": 999.99,
            "created_at": "2025-01-22T10:30:00",
            "updated_at": "2025-01-22T10:30:00"
        }
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(..., description="상품 ID")
    name: str = Field(..., description="상품명")
    brand: str = Field(..., description="브랜드명")
    price: Price = Field(..., description="상품 가격")
    created_at: datetime = Field(..., description="상품 생성 일시")
    updated_at: datetime = Field(..., description="상품 수정 일시")


class PageResult(BaseModel, Generic[T]):
    """
    페이지 단위 조회 결과

    total_count는 현재 페이지가 아닌 조건에 맞는 전체 건수입니다.

    Example:
        {
            "items": [...],
            "total_count": 42,
            "page_number": 1,
            "page_size": 10
        }
    """

    model_config = ConfigDict(frozen=True)

    items: list[T] = Field(default_factory=list, description="현재 페이지 항목")
    total_count: int = Field(..., description="조건에 맞는 전체 항목 수")
    page_number: int = Field(..., description="페이지 번호")
    page_size: int = Field(..., description="페이지 크기")
