"""
SQLAlchemy 데이터베이스 설정

SQLAlchemy 엔진, 세션, Base 클래스를 정의합니다.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from app.core.config import get_settings

settings = get_settings()

# SQLite 사용 시 check_same_thread 비활성화 (요청마다 다른 스레드에서 세션 사용)
connect_args = {"check_same_thread": False} if settings.is_sqlite else {}

engine = create_engine(
    settings.database_url,
    connect_args=connect_args,
    pool_pre_ping=True,  # connection 유효성 자동 체크
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def get_db():
    """
    FastAPI 의존성 주입용 데이터베이스 세션 제너레이터

    사용 예:
        def get_product_repository(db: Session = Depends(get_db)):
            return ProductRepository(db)

    요청이 끝나면 세션을 닫습니다. 커밋/롤백은 저장소가 담당합니다.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
