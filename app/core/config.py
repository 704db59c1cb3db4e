"""
애플리케이션 설정 관리

Pydantic Settings를 사용하여 환경 변수를 로드합니다.
.env 파일 또는 시스템 환경 변수에서 설정을 읽어옵니다.
"""

from decimal import Decimal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """애플리케이션 설정 클래스"""

    # 애플리케이션 설정
    app_name: str = "Product Catalog API"
    app_env: str = "development"
    log_level: str = "INFO"
    log_json: bool = False

    # 데이터베이스 설정
    database_url: str = "sqlite:///./catalog.db"

    # 상품 가격 범위 (최소값 이상, 최대값 미만)
    min_product_price: Decimal = Decimal("0.01")
    max_product_price: Decimal = Decimal("1000000")

    # 빈 카탈로그일 때 시작 시 샘플 상품 등록 여부
    seed_sample_data: bool = True

    # 감사 로그 대상 경로 (쉼표로 구분된 prefix 목록)
    audit_paths: str = "/api/products"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # 정의되지 않은 환경 변수 무시
    )

    @property
    def is_sqlite(self) -> bool:
        """SQLite 데이터베이스 사용 여부"""
        return self.database_url.startswith("sqlite")

    @property
    def audit_path_list(self) -> list[str]:
        """
        감사 로그 대상 경로 목록 파싱

        Returns:
            ["/api/products", ...] (소문자, 공백 제거)
        """
        return [
            path.strip().lower() for path in self.audit_paths.split(",") if path.strip()
        ]


def get_settings() -> Settings:
    """
    Settings 인스턴스를 반환하는 팩토리 함수
    """
    return Settings()
