from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_exception_handlers
from app.api.middleware import AuditLoggingMiddleware, RequestLoggingMiddleware
from app.api.routes import products
from app.core.config import get_settings
from app.core.logging import configure_logging
from app.db.database import Base, SessionLocal, engine
from app.db.seed import seed_sample_products

settings = get_settings()
configure_logging(settings)

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """시작 시 테이블 생성 및 (설정 시) 샘플 데이터 등록"""
    Base.metadata.create_all(bind=engine)

    if settings.seed_sample_data:
        db = SessionLocal()
        try:
            seed_sample_products(db)
        finally:
            db.close()

    logger.info("app.started", env=settings.app_env)
    yield


app = FastAPI(
    title=settings.app_name,
    description=(
        "상품 카탈로그 관리 API - 필터링, 페이지네이션, 요청 검증을 지원하는 "
        "상품 CRUD 서비스"
    ),
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# 나중에 추가한 미들웨어가 바깥쪽에서 실행됨 (요청 ID 생성 → 감사 로그)
app.add_middleware(AuditLoggingMiddleware, audit_paths=settings.audit_path_list)
app.add_middleware(RequestLoggingMiddleware)

register_exception_handlers(app)

# 라우터 등록
app.include_router(products.router, prefix="/api/products", tags=["products"])


@app.get("/")
async def root():
    """루트 엔드포인트"""
    return {
        "message": settings.app_name,
        "status": "running",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """헬스체크 엔드포인트 (Docker 헬스체크용)"""
    return {"status": "healthy"}
