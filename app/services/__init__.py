"""비즈니스 로직 서비스."""

from app.services.product_service import ProductService

__all__ = ["ProductService"]
