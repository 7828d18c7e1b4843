"""
입력 검증 모듈
==============
도서 데이터, 입고 요청 수량, 묶음 입력 검증

사용법:
    validator = BookValidator()
    errors = validator.validate(book_data)
    if errors:
        print(f"검증 실패: {errors}")
"""
import re
import logging
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Dict, List, Optional, Any, Tuple
from dataclasses import dataclass

from bookstore_clerk.constants import DISCOUNT_PLACES, REQUEST_MIN_QUANTITY

logger = logging.getLogger(__name__)


@dataclass
class ValidationError:
    """검증 오류"""
    field: str
    message: str
    value: Any = None


class BookValidator:
    """
    도서 정보 검증기

    ISBN, 가격, 제목 등 도서 데이터 검증
    """

    # ISBN-13 패턴 (978 또는 979로 시작, 13자리)
    ISBN13_PATTERN = re.compile(r'^97[89]\d{10}$')
    # ISBN-10 패턴 (10자리, 마지막은 숫자 또는 X)
    ISBN10_PATTERN = re.compile(r'^\d{9}[\dX]$')

    # 제목 길이
    MAX_TITLE_LENGTH = 500

    @staticmethod
    def clean_isbn(isbn: str) -> str:
        """공백/하이픈 제거"""
        return re.sub(r'[\s-]', '', str(isbn)).upper()

    def validate_isbn(self, isbn: str) -> Optional[ValidationError]:
        """
        ISBN 검증

        Args:
            isbn: ISBN 문자열

        Returns:
            ValidationError 또는 None (유효한 경우)
        """
        if not isbn:
            return ValidationError("isbn", "ISBN이 비어 있습니다")

        clean_isbn = self.clean_isbn(isbn)

        if len(clean_isbn) == 13:
            if not self.ISBN13_PATTERN.match(clean_isbn):
                return ValidationError(
                    "isbn",
                    "ISBN-13 형식이 아닙니다 (978/979로 시작하는 13자리)",
                    isbn
                )
            if not self._verify_isbn13_checksum(clean_isbn):
                return ValidationError("isbn", "ISBN-13 체크섬 오류", isbn)

        elif len(clean_isbn) == 10:
            if not self.ISBN10_PATTERN.match(clean_isbn):
                return ValidationError(
                    "isbn",
                    "ISBN-10 형식이 아닙니다 (10자리)",
                    isbn
                )
            if not self._verify_isbn10_checksum(clean_isbn):
                return ValidationError("isbn", "ISBN-10 체크섬 오류", isbn)
        else:
            return ValidationError(
                "isbn",
                f"ISBN 길이 오류 ({len(clean_isbn)}자리, 10 또는 13자리 필요)",
                isbn
            )

        return None

    def _verify_isbn13_checksum(self, isbn: str) -> bool:
        """ISBN-13 체크섬 검증"""
        total = sum(
            int(digit) * (1 if i % 2 == 0 else 3)
            for i, digit in enumerate(isbn)
        )
        return total % 10 == 0

    def _verify_isbn10_checksum(self, isbn: str) -> bool:
        """ISBN-10 체크섬 검증 (마지막 X = 10)"""
        total = 0
        for i, ch in enumerate(isbn):
            value = 10 if ch == "X" else int(ch)
            total += value * (10 - i)
        return total % 11 == 0

    def validate_price(self, price: Any, field_name: str = "price") -> Optional[ValidationError]:
        """
        가격 검증 (0 이상 소수)

        Args:
            price: 가격 값
            field_name: 필드명 (오류 메시지용)

        Returns:
            ValidationError 또는 None
        """
        if price is None:
            return ValidationError(field_name, "가격이 없습니다")

        try:
            value = Decimal(str(price))
        except InvalidOperation:
            return ValidationError(field_name, f"가격이 숫자가 아닙니다: {price}", price)

        if not value.is_finite() or value < 0:
            return ValidationError(field_name, f"가격은 0 이상이어야 합니다: {price}", price)

        return None

    def validate_title(self, title: str) -> Optional[ValidationError]:
        """제목 검증"""
        if not title or not str(title).strip():
            return ValidationError("title", "제목이 비어 있습니다")

        if len(str(title).strip()) > self.MAX_TITLE_LENGTH:
            return ValidationError(
                "title",
                f"제목이 너무 깁니다 (최대 {self.MAX_TITLE_LENGTH}자)",
                str(title)[:100] + "..."
            )

        return None

    def validate(self, book_data: Dict) -> List[ValidationError]:
        """
        도서 데이터 전체 검증

        Args:
            book_data: 도서 데이터 딕셔너리 (isbn, title, price)

        Returns:
            ValidationError 리스트 (빈 리스트면 유효)
        """
        errors = []

        for err in (
            self.validate_isbn(book_data.get("isbn")),
            self.validate_title(book_data.get("title")),
            self.validate_price(book_data.get("price")),
        ):
            if err:
                errors.append(err)

        return errors


class RequestValidator:
    """입고 요청 수량 검증기"""

    def __init__(self, max_quantity: int = 9999):
        self.max_quantity = max_quantity

    def validate_quantity(self, quantity: Any) -> Optional[ValidationError]:
        """
        요청 수량 검증 (1 ~ max_quantity 정수)

        Returns:
            ValidationError 또는 None
        """
        not_integer = ValidationError("quantity", f"수량이 정수가 아닙니다: {quantity}", quantity)
        if isinstance(quantity, bool) or (isinstance(quantity, float) and not quantity.is_integer()):
            return not_integer
        try:
            value = int(quantity)
        except (ValueError, TypeError):
            return not_integer

        if value < REQUEST_MIN_QUANTITY:
            return ValidationError(
                "quantity",
                f"수량이 너무 적습니다 (최소 {REQUEST_MIN_QUANTITY})",
                value
            )

        if value > self.max_quantity:
            return ValidationError(
                "quantity",
                f"수량이 너무 많습니다 (최대 {self.max_quantity:,})",
                value
            )

        return None


class BundleValidator:
    """묶음 입력 검증기"""

    MAX_NAME_LENGTH = 200

    def validate_name(self, name: str) -> Optional[ValidationError]:
        """묶음 이름 검증"""
        if not name or not str(name).strip():
            return ValidationError("name", "묶음 이름이 비어 있습니다")
        if len(str(name).strip()) > self.MAX_NAME_LENGTH:
            return ValidationError(
                "name",
                f"묶음 이름이 너무 깁니다 (최대 {self.MAX_NAME_LENGTH}자)",
                name
            )
        return None

    def validate_discount_percent(self, percent: Any) -> Tuple[Optional[Decimal], Optional[ValidationError]]:
        """
        UI 할인율(%) → 0~1 소수 변환

        Returns:
            (할인율, None) 또는 (None, ValidationError)
        """
        try:
            value = Decimal(str(percent))
        except InvalidOperation:
            return None, ValidationError("discount", f"할인율이 숫자가 아닙니다: {percent}", percent)

        if not value.is_finite() or not (0 <= value <= 100):
            return None, ValidationError("discount", "할인율은 0~100% 사이여야 합니다", percent)

        fraction = (value / 100).quantize(Decimal(1).scaleb(-DISCOUNT_PLACES), rounding=ROUND_HALF_UP)
        return fraction, None


def validate_book_data(data: Dict) -> Tuple[bool, List[str]]:
    """
    간단한 도서 검증 함수

    Args:
        data: 도서 데이터

    Returns:
        (유효 여부, 에러 메시지 리스트)
    """
    validator = BookValidator()
    errors = validator.validate(data)

    if errors:
        return False, [f"{e.field}: {e.message}" for e in errors]
    return True, []
