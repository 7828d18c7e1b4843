"""점원 워크스테이션 예외 정의"""


class ClerkError(Exception):
    """점원 애플리케이션 기본 오류"""
    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class DuplicateItem(ClerkError):
    """이미 묶음에 들어 있는 도서를 다시 추가"""
    def __init__(self, isbn: str):
        self.isbn = isbn
        super().__init__(f"이미 묶음에 포함된 도서입니다: {isbn}")


class IndexOutOfRange(ClerkError, IndexError):
    """묶음 항목 인덱스가 범위를 벗어남 (호출자 버그)"""
    def __init__(self, index: int, size: int):
        self.index = index
        self.size = size
        super().__init__(f"잘못된 묶음 인덱스: {index} (항목 {size}개)")


class InvalidDiscount(ClerkError, ValueError):
    """할인율이 0~1 범위를 벗어남"""
    def __init__(self, value):
        self.value = value
        super().__init__(f"할인율은 0~1 사이여야 합니다: {value}")


class NotLoggedIn(ClerkError):
    """로그인 없이 점원 전용 작업 요청"""
    def __init__(self, action: str):
        self.action = action
        super().__init__(f"로그인이 필요한 작업입니다: {action}")


class BundleNotActive(ClerkError):
    """묶음 구성 세션이 시작되지 않음"""
    def __init__(self):
        super().__init__("묶음 구성이 시작되지 않았습니다")
