"""
FastAPI 의존성 주입 함수들

데이터베이스 세션, 저장소, 서비스, 목록 조회 조건 등의 의존성을 제공합니다.
"""

from decimal import Decimal
from typing import Optional

from fastapi import Depends, Query
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.orm import Session

from app.db.database import get_db
from app.repositories.product_repository import ProductRepository
from app.schemas.product import ProductQuery
from app.services.product_service import ProductService


def get_product_repository(db: Session = Depends(get_db)) -> ProductRepository:
    """요청 단위 DB 세션을 사용하는 상품 저장소"""
    return ProductRepository(db)


def get_product_service(
    repository: ProductRepository = Depends(get_product_repository),
) -> ProductService:
    """상품 서비스"""
    return ProductService(repository)


def get_product_query(
    name: Optional[str] = Query(None, description="상품명 부분 일치 필터"),
    brand: Optional[str] = Query(None, description="브랜드명 부분 일치 필터"),
    min_price: Optional[Decimal] = Query(None, alias="minPrice", description="최소 가격 (포함)"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", description="최대 가격 (포함)"),
    page_number: int = Query(1, alias="pageNumber", description="페이지 번호 (1부터)"),
    page_size: int = Query(10, alias="pageSize", description="페이지 크기 (1-100)"),
) -> ProductQuery:
    """
    쿼리 파라미터로 ProductQuery를 생성하는 의존성 함수

    범위 검증은 ProductQuery 스키마가 담당하며,
    실패하면 RequestValidationError로 변환하여 400 응답 처리기로 넘깁니다.

    Raises:
        RequestValidationError: 페이지/가격 조건이 유효하지 않은 경우
    """
    try:
        return ProductQuery.model_validate(
            {
                "name": name,
                "brand": brand,
                "minPrice": min_price,
                "maxPrice": max_price,
                "pageNumber": page_number,
                "pageSize": page_size,
            }
        )
    except ValidationError as e:
        raise RequestValidationError(e.errors())
