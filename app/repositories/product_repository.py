"""상품 저장소 (Repository)."""

from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Generic, Iterator, Optional, TypeVar

import structlog
from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import ProductAlreadyExistsException, StoreException
from app.models import Product
from app.models.product import casefold_key, utcnow
from app.schemas.product import ProductQuery

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_LIKE_ESCAPE = "\\"


def _contains_pattern(term: str) -> str:
    """LIKE 와일드카드(%, _)를 이스케이프한 부분 일치 패턴"""
    escaped = (
        term.replace(_LIKE_ESCAPE, _LIKE_ESCAPE * 2)
        .replace("%", f"{_LIKE_ESCAPE}%")
        .replace("_", f"{_LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


@dataclass(frozen=True)
class Page(Generic[T]):
    """저장소 조회 결과 한 페이지 (생성 후 변경되지 않음)."""

    items: list[T] = field(default_factory=list)
    total_count: int = 0
    page_number: int = 1
    page_size: int = 10


class ProductRepository:
    """
    상품 저장소.

    조회/필터/페이지네이션 요청을 SQLAlchemy 쿼리로 변환합니다.
    저장소 오류(SQLAlchemyError)는 롤백 후 StoreException으로 감싸서 전달하고,
    상품명 + 브랜드 유일성 위반은 ProductAlreadyExistsException으로 변환합니다.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = utcnow):
        self.db = db
        self.clock = clock

    @contextmanager
    def _store_errors(self, action: str, **context) -> Iterator[None]:
        """SQLAlchemy 오류를 롤백 + 로깅 후 StoreException으로 변환"""
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(
                "product_store.failed", action=action, exc_info=True, **context
            )
            raise StoreException(f"Failed to {action}") from e

    def get_by_id(self, product_id: int) -> Optional[Product]:
        """
        ID로 상품을 조회합니다.

        Returns:
            Product 객체, 없으면 None (오류 아님)
        """
        with self._store_errors("get product", product_id=product_id):
            return self.db.get(Product, product_id)

    def get_all(self, query: ProductQuery) -> Page[Product]:
        """
        조건에 맞는 상품을 페이지 단위로 조회합니다.

        필터 적용 순서: 상품명 부분 일치 → 브랜드 부분 일치 → 최소 가격 → 최대 가격
        (문자열은 casefold 키로 비교하여 유니코드 대소문자도 무시, 가격 범위는 양 끝 포함)

        total_count는 페이지네이션 전 전체 건수이며,
        정렬은 상품명 → 브랜드(각각 대소문자 무시) → ID 오름차순입니다.
        offset이 total_count 이상이면 목록 쿼리 없이 빈 페이지를 반환합니다.

        Args:
            query: 필터 및 페이지네이션 조건

        Returns:
            Page[Product] (page_number, page_size는 요청 값 그대로)
        """
        with self._store_errors("list products", query=query.model_dump()):
            queryable = self.db.query(Product)

            if query.name:
                queryable = queryable.filter(
                    Product.name_key.like(
                        _contains_pattern(casefold_key(query.name)), escape=_LIKE_ESCAPE
                    )
                )
            if query.brand:
                queryable = queryable.filter(
                    Product.brand_key.like(
                        _contains_pattern(casefold_key(query.brand)), escape=_LIKE_ESCAPE
                    )
                )
            if query.min_price is not None:
                queryable = queryable.filter(Product.price >= query.min_price)
            if query.max_price is not None:
                queryable = queryable.filter(Product.price <= query.max_price)

            total_count = queryable.count()

            # 범위를 벗어난 offset은 저장소로 보내지 않음 (SQLite INTEGER 범위 초과 방지)
            if query.offset >= total_count:
                items = []
            else:
                items = (
                    queryable.order_by(
                        Product.name_key.asc(),
                        Product.name.asc(),
                        Product.brand_key.asc(),
                        Product.brand.asc(),
                        Product.id.asc(),
                    )
                    .offset(query.offset)
                    .limit(query.page_size)
                    .all()
                )

        return Page(
            items=items,
            total_count=total_count,
            page_number=query.page_number,
            page_size=query.page_size,
        )

    def create(self, product: Product) -> Product:
        """
        상품을 저장합니다. ID는 저장소가 할당합니다.

        중복 여부는 호출자가 exists()로 먼저 확인하지만,
        동시 요청으로 유일 인덱스 위반이 발생하면 중복 예외로 변환합니다.

        Raises:
            ProductAlreadyExistsException: 유일 인덱스 위반
            StoreException: 그 외 저장소 오류
        """
        with self._store_errors("create product", name=product.name, brand=product.brand):
            self.db.add(product)
            try:
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                logger.warning(
                    "product_store.unique_violation",
                    name=product.name,
                    brand=product.brand,
                )
                raise ProductAlreadyExistsException(product.name, product.brand) from e
            self.db.refresh(product)

        logger.info("product_store.created", product_id=product.id)
        return product

    def update(self, product: Product) -> Optional[Product]:
        """
        product.id에 해당하는 상품의 name, brand, price를 교체합니다.

        updated_at은 호출자가 넘긴 값과 무관하게 현재 시각으로 설정됩니다.
        단일 UPDATE 문으로 교체하므로 로드된 객체를 직접 수정하지 않습니다.

        Returns:
            갱신된 Product 객체, 대상이 없으면 None

        Raises:
            ProductAlreadyExistsException: 유일 인덱스 위반
            StoreException: 그 외 저장소 오류
        """
        with self._store_errors("update product", product_id=product.id):
            statement = (
                update(Product)
                .where(Product.id == product.id)
                .values(
                    name=product.name,
                    name_key=casefold_key(product.name),
                    brand=product.brand,
                    brand_key=casefold_key(product.brand),
                    price=product.price,
                    updated_at=self.clock(),
                )
            )
            try:
                result = self.db.execute(statement)
                self.db.commit()
            except IntegrityError as e:
                self.db.rollback()
                logger.warning(
                    "product_store.unique_violation",
                    product_id=product.id,
                    name=product.name,
                    brand=product.brand,
                )
                raise ProductAlreadyExistsException(product.name, product.brand) from e

            if result.rowcount == 0:
                logger.warning("product_store.update_missing", product_id=product.id)
                return None

            updated = self.db.get(Product, product.id)

        logger.info("product_store.updated", product_id=product.id)
        return updated

    def delete(self, product_id: int) -> bool:
        """
        상품을 삭제합니다 (물리 삭제).

        Returns:
            삭제했으면 True, 대상이 없으면 False (오류 아님)
        """
        with self._store_errors("delete product", product_id=product_id):
            product = self.db.get(Product, product_id)
            if product is None:
                return False

            self.db.delete(product)
            self.db.commit()

        logger.info("product_store.deleted", product_id=product_id)
        return True

    def exists(self, name: str, brand: str, exclude_id: Optional[int] = None) -> bool:
        """
        같은 상품명 + 브랜드(대소문자 무시) 상품이 있는지 확인합니다.

        Args:
            name: 상품명
            brand: 브랜드명
            exclude_id: 검사에서 제외할 상품 ID (수정 시 자기 자신)
        """
        with self._store_errors("check product existence", name=name, brand=brand):
            queryable = self.db.query(Product.id).filter(
                Product.name_key == casefold_key(name),
                Product.brand_key == casefold_key(brand),
            )
            if exclude_id is not None:
                queryable = queryable.filter(Product.id != exclude_id)

            return self.db.query(queryable.exists()).scalar()

    def count(self) -> int:
        """전체 상품 수"""
        with self._store_errors("count products"):
            return self.db.query(Product).count()
