"""
샘플 데이터 등록

카탈로그가 비어 있을 때 개발/데모용 상품을 등록합니다.
"""

from decimal import Decimal

import structlog
from sqlalchemy.orm import Session

from app.models import Product
from app.repositories.product_repository import ProductRepository

logger = structlog.get_logger(__name__)

SAMPLE_PRODUCTS = [
    ("iPhone 16 Pro", "Apple", Decimal("999.99")),
    ("Galaxy S25", "Samsung", Decimal("989.99")),
    ("Pixel", "Google", Decimal("899.99")),
    ("Surface Pro 9", "Microsoft", Decimal("1399.99")),
    ("ThinkPad X1 Carbon", "Lenovo", Decimal("1199.99")),
]


def seed_sample_products(db: Session) -> int:
    """
    카탈로그가 비어 있으면 샘플 상품을 등록합니다.

    Args:
        db: 데이터베이스 세션

    Returns:
        등록한 상품 수 (이미 상품이 있으면 0)
    """
    repository = ProductRepository(db)
    if repository.count() > 0:
        return 0

    for name, brand, price in SAMPLE_PRODUCTS:
        now = repository.clock()
        repository.create(
            Product(name=name, brand=brand, price=price, created_at=now, updated_at=now)
        )

    logger.info("catalog.seeded", count=len(SAMPLE_PRODUCTS))
    return len(SAMPLE_PRODUCTS)
