"""
상품 API 엔드포인트 통합 테스트
"""

import pytest
from fastapi.testclient import TestClient

from app.api.deps import get_product_service
from app.core.exceptions import StoreException
from app.main import app


def _create(client: TestClient, name: str, brand: str, price: float = 100):
    response = client.post(
        "/api/products", json={"name": name, "brand": brand, "price": price}
    )
    assert response.status_code == 201
    return response.json()


class TestProductCreateAPI:
    """상품 생성 API 테스트 클래스"""

    def test_create_product_success(self, test_client):
        """상품 생성 성공 테스트 (201 Created + Location)"""
        response = test_client.post(
            "/api/products",
            json={"name": "iPhone 16 Pro", "brand": "Apple", "price": 999.99},
        )

        assert response.status_code == 201

        data = response.json()
        assert data["id"] > 0
        assert data["name"] == "iPhone 16 Pro"
        assert data["brand"] == "Apple"
        assert data["price"] == 999.99
        assert data["created_at"] == data["updated_at"]

        # Location 헤더는 단건 조회 URL
        assert response.headers["location"].endswith(f"/api/products/{data['id']}")
        location_response = test_client.get(response.headers["location"])
        assert location_response.status_code == 200

    def test_create_product_duplicate(self, test_client):
        """같은 상품명 + 브랜드(대소문자 무시) 생성 실패 (409 Conflict)"""
        _create(test_client, "Phone", "Acme", 100)

        response = test_client.post(
            "/api/products", json={"name": "phone", "brand": "ACME", "price": 50}
        )

        assert response.status_code == 409
        assert "already exists" in response.json()["message"]

    def test_create_product_validation_error(self, test_client):
        """검증 실패 시 필드별 오류 목록 (400 Bad Request)"""
        response = test_client.post(
            "/api/products", json={"name": "", "brand": "Acme", "price": 0}
        )

        assert response.status_code == 400

        data = response.json()
        assert data["message"] == "Validation failed"
        fields = {error["field"]: error["message"] for error in data["errors"]}
        assert "name" in fields
        assert fields["price"] == "Price must be greater than 0"

    def test_create_product_missing_body_fields(self, test_client):
        """필수 필드 누락 (400 Bad Request)"""
        response = test_client.post("/api/products", json={"name": "Phone"})

        assert response.status_code == 400
        fields = {error["field"] for error in response.json()["errors"]}
        assert fields == {"brand", "price"}

    def test_create_product_price_ceiling(self, test_client):
        """최대 가격 이상 (400 Bad Request)"""
        response = test_client.post(
            "/api/products", json={"name": "Yacht", "brand": "Acme", "price": 1000000}
        )

        assert response.status_code == 400

    @pytest.mark.parametrize("price", [999999.999, 0.014])
    def test_create_product_price_with_three_decimal_places(self, test_client, price):
        """소수점 3자리 가격은 반올림 저장 없이 거부 (400 Bad Request)"""
        response = test_client.post(
            "/api/products", json={"name": "Yacht", "brand": "Acme", "price": price}
        )

        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == ["price"]
        assert test_client.get("/api/products").json()["total_count"] == 0

    def test_create_product_duplicate_non_ascii_ignoring_case(self, test_client):
        """악센트/움라우트 문자의 대소문자만 다른 조합도 중복 (409 Conflict)"""
        _create(test_client, "Éclair", "Ärzte", 10)

        response = test_client.post(
            "/api/products", json={"name": "éclair", "brand": "ärzte", "price": 10}
        )

        assert response.status_code == 409

    def test_create_product_missing_body(self, test_client):
        """요청 본문 없음 (400 Bad Request, field = body)"""
        response = test_client.post("/api/products")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "body"

    def test_create_product_malformed_json(self, test_client):
        """잘못된 JSON 본문 (400 Bad Request, field = body)"""
        response = test_client.post(
            "/api/products",
            content=b'{"name": "Phone",',
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert [error["field"] for error in response.json()["errors"]] == ["body"]


class TestProductGetAPI:
    """상품 단건 조회 API 테스트 클래스"""

    def test_get_product_success(self, test_client):
        """상품 조회 성공 (200 OK)"""
        created = _create(test_client, "Pixel", "Google", 899.99)

        response = test_client.get(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json() == created

    def test_get_product_not_found(self, test_client):
        """없는 상품 조회 (404 Not Found)"""
        response = test_client.get("/api/products/999")

        assert response.status_code == 404
        assert response.json() == {"message": "Product with id 999 not found"}

    def test_get_product_invalid_id(self, test_client):
        """숫자가 아닌 ID (400 Bad Request)"""
        response = test_client.get("/api/products/abc")

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "product_id"


class TestProductListAPI:
    """상품 목록 조회 API 테스트 클래스"""

    def test_list_products_empty(self, test_client):
        """상품이 없는 경우"""
        response = test_client.get("/api/products")

        assert response.status_code == 200
        assert response.json() == {
            "items": [],
            "total_count": 0,
            "page_number": 1,
            "page_size": 10,
        }

    def test_list_products_filter_and_paging(self, test_client):
        """필터 + 페이지네이션 쿼리 파라미터"""
        _create(test_client, "Phone A", "Acme", 100)
        _create(test_client, "Phone B", "Acme", 200)
        _create(test_client, "Phone C", "Acme", 300)
        _create(test_client, "Phone D", "Globex", 250)
        _create(test_client, "Tablet", "Acme", 150)

        response = test_client.get(
            "/api/products",
            params={
                "name": "phone",
                "brand": "acme",
                "minPrice": 100,
                "maxPrice": 300,
                "pageNumber": 2,
                "pageSize": 2,
            },
        )

        assert response.status_code == 200
        data = response.json()
        assert data["total_count"] == 3
        assert data["page_number"] == 2
        assert data["page_size"] == 2
        assert [item["name"] for item in data["items"]] == ["Phone C"]

    def test_list_products_sorted_by_name(self, test_client):
        """삽입 순서와 무관하게 상품명 순"""
        _create(test_client, "B", "Acme", 10)
        _create(test_client, "A", "Acme", 5)

        response = test_client.get("/api/products")

        assert [item["name"] for item in response.json()["items"]] == ["A", "B"]

    def test_list_products_sorted_ignoring_case(self, test_client):
        """소문자로 시작하는 상품명도 알파벳 순서대로"""
        _create(test_client, "Banana", "Acme", 10)
        _create(test_client, "apple", "Acme", 10)

        response = test_client.get("/api/products")

        assert [item["name"] for item in response.json()["items"]] == ["apple", "Banana"]

    def test_list_products_huge_page_number(self, test_client):
        """매우 큰 페이지 번호도 오류 없이 빈 목록"""
        _create(test_client, "Phone", "Acme", 100)
        page_number = 10**17

        response = test_client.get(
            "/api/products", params={"pageNumber": page_number, "pageSize": 100}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["items"] == []
        assert data["total_count"] == 1
        assert data["page_number"] == page_number

    @pytest.mark.parametrize(
        "params, field",
        [
            ({"pageNumber": 0}, "pageNumber"),
            ({"pageSize": 101}, "pageSize"),
            ({"minPrice": -5}, "minPrice"),
            ({"minPrice": 10, "maxPrice": 5}, "maxPrice"),
            ({"pageSize": "many"}, "pageSize"),
        ],
    )
    def test_list_products_invalid_query(self, test_client, params, field):
        """잘못된 조회 조건 (400 Bad Request)"""
        response = test_client.get("/api/products", params=params)

        assert response.status_code == 400
        assert field in {error["field"] for error in response.json()["errors"]}


class TestProductUpdateAPI:
    """상품 수정 API 테스트 클래스"""

    def test_update_product_success(self, test_client):
        """상품 수정 성공 (200 OK)"""
        created = _create(test_client, "Phone", "Acme", 100)

        response = test_client.put(
            f"/api/products/{created['id']}",
            json={"name": "Phone", "brand": "Acme", "price": 50},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["price"] == 50
        assert data["created_at"] == created["created_at"]
        assert data["updated_at"] >= created["updated_at"]

    def test_update_product_not_found(self, test_client):
        """없는 상품 수정 (404 Not Found)"""
        response = test_client.put(
            "/api/products/999", json={"name": "Phone", "brand": "Acme", "price": 50}
        )

        assert response.status_code == 404

    def test_update_product_conflict(self, test_client):
        """다른 상품과 상품명 + 브랜드 충돌 (409 Conflict)"""
        _create(test_client, "Phone", "Acme", 100)
        tablet = _create(test_client, "Tablet", "Acme", 200)

        response = test_client.put(
            f"/api/products/{tablet['id']}",
            json={"name": "Phone", "brand": "Acme", "price": 200},
        )

        assert response.status_code == 409
        assert "already exists" in response.json()["message"]

    def test_update_product_validation_error(self, test_client):
        """수정 요청 검증 실패 (400 Bad Request)"""
        created = _create(test_client, "Phone", "Acme", 100)

        response = test_client.put(
            f"/api/products/{created['id']}",
            json={"name": "Phone", "brand": "", "price": 50},
        )

        assert response.status_code == 400


class TestProductDeleteAPI:
    """상품 삭제 API 테스트 클래스"""

    def test_delete_product_success(self, test_client):
        """상품 삭제 성공 (204 No Content), 재삭제는 404"""
        created = _create(test_client, "Phone", "Acme", 100)

        response = test_client.delete(f"/api/products/{created['id']}")
        assert response.status_code == 204
        assert response.content == b""

        second = test_client.delete(f"/api/products/{created['id']}")
        assert second.status_code == 404

        assert test_client.get(f"/api/products/{created['id']}").status_code == 404


class FailingProductService:
    """항상 저장소/예상 외 오류를 내는 테스트용 서비스"""

    def __init__(self, error: Exception):
        self.error = error

    def get_product(self, product_id):
        raise self.error

    def list_products(self, query):
        raise self.error


class TestServerErrors:
    """500 오류 응답 테스트"""

    def test_store_error_returns_generic_500(self, test_client):
        """저장소 오류는 내부 정보 없이 500"""
        app.dependency_overrides[get_product_service] = lambda: FailingProductService(
            StoreException("connection refused by db-primary:5432")
        )

        response = test_client.get("/api/products/1")

        assert response.status_code == 500
        assert response.json() == {
            "message": "An unexpected error occurred. Please try again later."
        }
        assert "db-primary" not in response.text

    def test_unexpected_error_returns_500(self, test_db):
        """예상하지 못한 예외도 500"""
        app.dependency_overrides[get_product_service] = lambda: FailingProductService(
            RuntimeError("boom")
        )

        try:
            with TestClient(app, raise_server_exceptions=False) as client:
                response = client.get("/api/products")
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 500
        assert "boom" not in response.text


class TestServiceEndpoints:
    """루트/헬스체크/문서 엔드포인트"""

    def test_root(self, test_client):
        """루트 엔드포인트"""
        response = test_client.get("/")

        assert response.status_code == 200
        assert response.json()["status"] == "running"

    def test_health(self, test_client):
        """헬스체크"""
        response = test_client.get("/health")

        assert response.json() == {"status": "healthy"}

    def test_openapi_document(self, test_client):
        """OpenAPI 문서에 상품 경로 포함"""
        response = test_client.get("/openapi.json")

        assert response.status_code == 200
        paths = response.json()["paths"]
        assert "/api/products" in paths
        assert "/api/products/{product_id}" in paths

    def test_unknown_route_message_format(self, test_client):
        """없는 경로도 message 형식"""
        response = test_client.get("/api/unknown")

        assert response.status_code == 404
        assert "message" in response.json()
