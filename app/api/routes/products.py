"""
상품 카탈로그 API 엔드포인트

상품 목록 조회(필터/페이지네이션), 단건 조회, 생성, 수정, 삭제 기능을 제공합니다.
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from app.api.deps import get_product_query, get_product_service
from app.core.exceptions import ProductAlreadyExistsException
from app.schemas.common import MessageResponse, ValidationErrorResponse
from app.schemas.product import (
    PageResult,
    ProductCreateRequest,
    ProductQuery,
    ProductResponse,
    ProductUpdateRequest,
)
from app.services.product_service import ProductService


router = APIRouter(
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ValidationErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": MessageResponse},
    },
)


def _not_found(product_id: int) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Product with id {product_id} not found",
    )


@router.get("", response_model=PageResult[ProductResponse])
def list_products(
    query: ProductQuery = Depends(get_product_query),
    service: ProductService = Depends(get_product_service),
):
    """
    상품 목록을 필터 및 페이지네이션 조건으로 조회합니다.

    Args:
        query: 상품명/브랜드 부분 일치, 가격 범위, 페이지 번호/크기
        service: 상품 서비스

    Returns:
        PageResult[ProductResponse]: 상품명 → 브랜드 순으로 정렬된 현재 페이지

    Example:
        Request:
        ```
        GET /api/products?brand=apple&minPrice=500&pageNumber=1&pageSize=10
        ```

        Response (200):
        ```json
        {
            "items": [
                {
                    "id": 1,
                    "name": "iPhone 16 Pro",
                    "brand": "Apple",
                    "price": 999.99,
                    "created_at": "2025-01-22T10:30:00",
                    "updated_at": "2025-01-22T10:30:00"
                }
            ],
            "total_count": 1,
            "page_number": 1,
            "page_size": 10
        }
        ```
    """
    return service.list_products(query)


@router.get(
    "/{product_id}",
    response_model=ProductResponse,
    responses={status.HTTP_404_NOT_FOUND: {"model": MessageResponse}},
)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    """
    특정 상품의 상세 정보를 조회합니다.

    Raises:
        HTTPException 404: 상품을 찾을 수 없는 경우
    """
    product = service.get_product(product_id)

    if product is None:
        raise _not_found(product_id)

    return product


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={status.HTTP_409_CONFLICT: {"model": MessageResponse}},
)
def create_product(
    product_data: ProductCreateRequest,
    request: Request,
    response: Response,
    service: ProductService = Depends(get_product_service),
):
    """
    새 상품을 생성합니다.

    응답의 Location 헤더에 생성된 상품의 조회 URL을 담습니다.

    Raises:
        HTTPException 409: 같은 상품명 + 브랜드(대소문자 무시) 상품이 이미 있는 경우

    Example:
        Request:
        ```json
        {
            "name": "iPhone 16 Pro",
            "brand": "Apple",
            "price": 999.99
        }
        ```

        Response (201):
        ```json
        {
            "id": 1,
            "name": "iPhone 16 Pro",
            "brand": "Apple",
            "price": 999.99,
            "created_at": "2025-01-22T10:30:00",
            "updated_at": "2025-01-22T10:30:00"
        }
        ```
    """
    try:
        product = service.create_product(product_data)
    except ProductAlreadyExistsException as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )

    response.headers["Location"] = str(
        request.url_for("get_product", product_id=product.id)
    )
    return product


@router.put(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        status.HTTP_404_NOT_FOUND: {"model": MessageResponse},
        status.HTTP_409_CONFLICT: {"model": MessageResponse},
    },
)
def update_product(
    product_id: int,
    product_data: ProductUpdateRequest,
    service: ProductService = Depends(get_product_service),
):
    """
    상품의 상품명, 브랜드, 가격을 수정합니다.

    자기 자신의 상품명 + 브랜드를 그대로 유지하는 수정은 허용됩니다.

    Raises:
        HTTPException 404: 상품을 찾을 수 없는 경우
        HTTPException 409: 다른 상품과 상품명 + 브랜드가 겹치는 경우
    """
    try:
        product = service.update_product(product_id, product_data)
    except ProductAlreadyExistsException as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        )

    if product is None:
        raise _not_found(product_id)

    return product


@router.delete(
    "/{product_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={status.HTTP_404_NOT_FOUND: {"model": MessageResponse}},
)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
):
    """
    상품을 삭제합니다.

    Raises:
        HTTPException 404: 상품을 찾을 수 없는 경우
    """
    if not service.delete_product(product_id):
        raise _not_found(product_id)

    return Response(status_code=status.HTTP_204_NO_CONTENT)
