"""
pytest 픽스처 정의
"""

import os

# 앱 모듈 import 전에 설정 (엔진/설정이 import 시점에 생성됨)
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SEED_SAMPLE_DATA", "false")

from datetime import datetime, timedelta

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.config import Settings
from app.db.database import Base, get_db
from app.main import app
from app.repositories.product_repository import ProductRepository
from app.services.product_service import ProductService


class FakeClock:
    """호출할 때마다 일정 간격으로 증가하는 테스트용 시계"""

    def __init__(
        self,
        start: datetime = datetime(2025, 1, 22, 10, 30, 0),
        step: timedelta = timedelta(minutes=1),
    ):
        self.current = start
        self.step = step

    def __call__(self) -> datetime:
        now = self.current
        self.current += self.step
        return now


@pytest.fixture(scope="session")
def settings():
    """테스트용 설정 객체 픽스처"""
    return Settings(
        database_url="sqlite://",
        seed_sample_data=False,
    )


@pytest.fixture(scope="function")
def test_db() -> Session:
    """
    테스트용 in-memory SQLite 데이터베이스 세션 픽스처

    각 테스트 함수마다 새로운 데이터베이스를 생성합니다.
    TestClient는 다른 스레드에서 세션을 사용하므로 StaticPool로
    하나의 connection을 공유합니다.
    """
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    # 모든 테이블 생성
    Base.metadata.create_all(bind=engine)

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    db = TestingSessionLocal()

    try:
        yield db
    finally:
        db.close()
        # 모든 테이블 삭제
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture
def clock() -> FakeClock:
    """테스트용 시계 (2025-01-22 10:30부터 호출마다 1분씩 증가)"""
    return FakeClock()


@pytest.fixture
def product_repository(test_db: Session, clock: FakeClock) -> ProductRepository:
    """테스트 DB와 테스트용 시계를 사용하는 상품 저장소"""
    return ProductRepository(test_db, clock=clock)


@pytest.fixture
def product_service(
    product_repository: ProductRepository, clock: FakeClock
) -> ProductService:
    """테스트 저장소를 사용하는 상품 서비스"""
    return ProductService(product_repository, clock=clock)


@pytest.fixture(scope="function")
def test_client(test_db: Session):
    """각 테스트마다 테스트 데이터베이스를 사용하는 TestClient 픽스처"""

    def override_get_db():
        try:
            yield test_db
        except Exception:
            test_db.rollback()
            raise

    # 데이터베이스 의존성 오버라이드
    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as client:
        yield client

    # 정리
    app.dependency_overrides.clear()
