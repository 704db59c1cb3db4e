"""상품 관리 서비스."""

from datetime import datetime
from typing import Callable, Optional

import structlog

from app.core.exceptions import ProductAlreadyExistsException
from app.models import Product
from app.models.product import utcnow
from app.repositories.product_repository import ProductRepository
from app.schemas.product import (
    PageResult,
    ProductCreateRequest,
    ProductQuery,
    ProductResponse,
    ProductUpdateRequest,
)

logger = structlog.get_logger(__name__)


class ProductService:
    """
    상품 생성, 조회, 수정, 삭제 서비스.

    저장소가 처리하지 않는 비즈니스 규칙(상품명 + 브랜드 중복 검사,
    생성 시각 기록, 엔티티 → 응답 변환)을 담당합니다.
    상품이 없는 경우는 예외 대신 None / False로 반환합니다.
    """

    def __init__(
        self,
        repository: ProductRepository,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.repository = repository
        self.clock = clock

    def create_product(self, product_data: ProductCreateRequest) -> ProductResponse:
        """
        상품을 생성합니다.

        Args:
            product_data: 검증된 상품 생성 요청

        Returns:
            생성된 상품 정보 (created_at == updated_at)

        Raises:
            ProductAlreadyExistsException: 같은 상품명 + 브랜드 상품이 이미 있는 경우
        """
        log = logger.bind(name=product_data.name, brand=product_data.brand)
        log.info("product.create_requested")

        if self.repository.exists(product_data.name, product_data.brand):
            log.warning("product.duplicate")
            raise ProductAlreadyExistsException(product_data.name, product_data.brand)

        now = self.clock()
        product = Product(
            name=product_data.name,
            brand=product_data.brand,
            price=product_data.price,
            created_at=now,
            updated_at=now,
        )

        try:
            created = self.repository.create(product)
        except Exception:
            log.error("product.create_failed")
            raise

        log.info("product.created", product_id=created.id)
        return self._to_response(created)

    def get_product(self, product_id: int) -> Optional[ProductResponse]:
        """
        ID로 상품을 조회합니다.

        Returns:
            상품 정보, 없으면 None
        """
        product = self.repository.get_by_id(product_id)
        if product is None:
            logger.warning("product.not_found", product_id=product_id)
            return None

        return self._to_response(product)

    def list_products(self, query: ProductQuery) -> PageResult[ProductResponse]:
        """
        조건에 맞는 상품 목록을 페이지 단위로 조회합니다.

        Args:
            query: 필터 및 페이지네이션 조건

        Returns:
            정렬 순서, total_count, page_number, page_size를 유지한 결과
        """
        logger.info("product.list_requested", query=query.model_dump())
        page = self.repository.get_all(query)

        return PageResult[ProductResponse](
            items=[self._to_response(product) for product in page.items],
            total_count=page.total_count,
            page_number=page.page_number,
            page_size=page.page_size,
        )

    def update_product(
        self, product_id: int, product_data: ProductUpdateRequest
    ) -> Optional[ProductResponse]:
        """
        상품의 상품명, 브랜드, 가격을 수정합니다.

        로드한 객체를 직접 수정하지 않고 새 값으로 만든 Product를
        저장소에 넘겨 교체합니다 (updated_at은 저장소가 갱신).

        Returns:
            수정된 상품 정보, 상품이 없으면 None

        Raises:
            ProductAlreadyExistsException: 다른 상품과 상품명 + 브랜드가 겹치는 경우
        """
        log = logger.bind(product_id=product_id)
        log.info("product.update_requested", name=product_data.name, brand=product_data.brand)

        existing = self.repository.get_by_id(product_id)
        if existing is None:
            log.warning("product.not_found")
            return None

        if self.repository.exists(
            product_data.name, product_data.brand, exclude_id=product_id
        ):
            log.warning("product.duplicate", name=product_data.name, brand=product_data.brand)
            raise ProductAlreadyExistsException(product_data.name, product_data.brand)

        replacement = Product(
            id=existing.id,
            name=product_data.name,
            brand=product_data.brand,
            price=product_data.price,
            created_at=existing.created_at,
        )

        try:
            updated = self.repository.update(replacement)
        except Exception:
            log.error("product.update_failed")
            raise

        if updated is None:
            # 조회와 수정 사이에 삭제된 경우
            log.warning("product.not_found")
            return None

        log.info("product.updated")
        return self._to_response(updated)

    def delete_product(self, product_id: int) -> bool:
        """
        상품을 삭제합니다.

        Returns:
            삭제했으면 True, 상품이 없으면 False
        """
        deleted = self.repository.delete(product_id)

        if deleted:
            logger.info("product.deleted", product_id=product_id)
        else:
            logger.warning("product.not_found", product_id=product_id)

        return deleted

    @staticmethod
    def _to_response(product: Product) -> ProductResponse:
        """Product 엔티티를 응답 스키마로 변환"""
        return ProductResponse.model_validate(product)
