"""
Product 모델
"""

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import validates

from app.db.database import Base


def casefold_key(value: str) -> str:
    """대소문자 무시 비교용 키 (유니코드 casefold)"""
    return value.casefold()


def utcnow() -> datetime:
    """현재 UTC 시각 (timezone 정보 없는 naive datetime으로 저장)"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Product(Base):
    """
    상품 모델

    Attributes:
        id: 상품 고유 ID (Primary Key, 저장소가 자동 할당)
        name: 상품명 (Not Null, 1-100자)
        brand: 브랜드명 (Not Null, 1-100자)
        price: 가격 (Not Null, 0보다 큼, 소수점 2자리)
        created_at: 생성 일시 (생성 시 한 번만 설정)
        updated_at: 수정 일시 (수정할 때마다 갱신)

    name_key, brand_key는 name, brand를 casefold한 값으로 자동 설정되며
    상품명 + 브랜드 조합(대소문자 무시)의 유일성 제약과 필터/정렬에 사용됩니다.
    """

    __tablename__ = "products"
    __table_args__ = (
        UniqueConstraint("name_key", "brand_key", name="uq_products_name_brand"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    name = Column(String(100), nullable=False, index=True)
    brand = Column(String(100), nullable=False)
    # casefold는 문자열을 늘릴 수 있음 (예: "ß" -> "ss")
    name_key = Column(String(300), nullable=False, index=True)
    brand_key = Column(String(300), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, nullable=False)

    @validates("name", "brand")
    def _sync_key(self, key: str, value: str) -> str:
        setattr(self, f"{key}_key", casefold_key(value) if value is not None else None)
        return value

    def __repr__(self) -> str:
        """Product 객체의 문자열 표현"""
        return (
            f"<Product(id={self.id}, name='{self.name}', "
            f"brand='{self.brand}', price={self.price})>"
        )

    def __str__(self) -> str:
        return f"Product: {self.name} ({self.brand})"

