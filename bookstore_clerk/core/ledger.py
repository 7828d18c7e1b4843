"""
묶음 장부 모듈
==============
할인 묶음(번들)에 담긴 도서와 할인율, 누적 합계(할인 후 금액 / 절감액) 관리

합계는 항목 추가/삭제/할인 변경 때마다 해당 항목의 증감분만 반영한다.
금액은 Decimal로 누적하므로 반복 추가/삭제에도 오차가 쌓이지 않는다.

사용법:
    ledger = BundleLedger()
    ledger.add_item("9780131103627", "30.00")
    ledger.set_discount(0, "0.10")
    print(format_money(ledger.total_after_discount))  # 27.00
"""
import logging
from dataclasses import dataclass, replace
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import List, Tuple

from bookstore_clerk.constants import MAX_DISCOUNT, MIN_DISCOUNT, MONEY_PLACES
from bookstore_clerk.exceptions import DuplicateItem, IndexOutOfRange, InvalidDiscount

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
_QUANT = Decimal(1).scaleb(-MONEY_PLACES)  # 0.01


def to_decimal(value) -> Decimal:
    """float은 str을 거쳐 변환 (이진 오차 방지)"""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


def format_money(value) -> str:
    """표시용 금액 문자열 (소수 2자리, 반올림)"""
    return str(to_decimal(value).quantize(_QUANT, rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class BundleItem:
    """묶음에 담긴 도서 한 권"""
    isbn: str
    list_price: Decimal
    discount: Decimal = ZERO

    @property
    def savings(self) -> Decimal:
        return self.list_price * self.discount

    @property
    def discounted_price(self) -> Decimal:
        return self.list_price - self.savings


class BundleLedger:
    """
    묶음 구성 장부

    Attributes:
        total_after_discount: Σ 정가 × (1 − 할인율)
        total_savings: Σ 정가 × 할인율
        active: 묶음 구성 세션 진행 여부
    """

    def __init__(self):
        self._items: List[BundleItem] = []
        self.total_after_discount = ZERO
        self.total_savings = ZERO
        self.active = False

    def __len__(self):
        return len(self._items)

    def __contains__(self, isbn: str) -> bool:
        return any(item.isbn == isbn for item in self._items)

    def __repr__(self):
        return (
            f"<BundleLedger(items={len(self._items)}, "
            f"after_discount={self.total_after_discount}, savings={self.total_savings})>"
        )

    def begin(self):
        """새 묶음 구성 시작"""
        self.clear()
        self.active = True

    def items(self) -> Tuple[BundleItem, ...]:
        """현재 항목 (표시 순서, 읽기 전용 스냅샷)"""
        return tuple(self._items)

    def add_item(self, isbn: str, list_price) -> BundleItem:
        """
        도서 추가 (할인율 0)

        Raises:
            DuplicateItem: 이미 담긴 ISBN
        """
        if isbn in self:
            raise DuplicateItem(isbn)

        item = BundleItem(isbn=isbn, list_price=to_decimal(list_price))
        self._items.append(item)
        self.total_after_discount += item.list_price
        logger.debug(f"묶음 추가: {isbn} ({item.list_price}) → {self!r}")
        return item

    def remove_item(self, index: int) -> BundleItem:
        """
        도서 제거 - 뒤 항목의 인덱스는 하나씩 당겨진다

        Raises:
            IndexOutOfRange: 잘못된 인덱스
        """
        item = self._item_at(index)
        savings = item.savings
        self.total_savings -= savings
        self.total_after_discount -= item.list_price - savings
        del self._items[index]
        logger.debug(f"묶음 제거: {item.isbn} → {self!r}")
        return item

    def set_discount(self, index: int, fraction) -> BundleItem:
        """
        할인율 변경

        Raises:
            IndexOutOfRange: 잘못된 인덱스
            InvalidDiscount: 0~1 범위 밖
        """
        item = self._item_at(index)
        try:
            new_fraction = to_decimal(fraction)
            in_range = MIN_DISCOUNT <= new_fraction <= MAX_DISCOUNT
        except (InvalidOperation, TypeError, ValueError):
            in_range = False
        if not in_range:
            raise InvalidDiscount(fraction)

        delta = (new_fraction - item.discount) * item.list_price
        self.total_after_discount -= delta
        self.total_savings += delta
        updated = replace(item, discount=new_fraction)
        self._items[index] = updated
        return updated

    def clear(self):
        """항목 비우고 합계 초기화, 구성 종료"""
        self._items.clear()
        self.total_after_discount = ZERO
        self.total_savings = ZERO
        self.active = False

    def _item_at(self, index: int) -> BundleItem:
        if not isinstance(index, int) or not 0 <= index < len(self._items):
            raise IndexOutOfRange(index, len(self._items))
        return self._items[index]
