"""
커스텀 예외 정의

애플리케이션 전역에서 사용되는 커스텀 예외 클래스들입니다.
상품이 없는 경우는 예외가 아니라 None 반환으로 표현합니다.
"""


class ProductAlreadyExistsException(Exception):
    """
    같은 상품명 + 브랜드 조합(대소문자 무시)의 상품이 이미 존재할 때 발생하는 예외

    HTTP Status Code: 409 Conflict
    """

    def __init__(self, name: str, brand: str):
        self.name = name
        self.brand = brand
        self.message = (
            f"Product with name '{name}' and brand '{brand}' already exists"
        )
        super().__init__(self.message)


class StoreException(Exception):
    """
    데이터 저장소 접근 실패 시 발생하는 예외 (연결 실패, 쿼리 오류 등)

    HTTP Status Code: 500 Internal Server Error
    """

    def __init__(self, message: str = "Product store operation failed"):
        self.message = message
        super().__init__(self.message)
