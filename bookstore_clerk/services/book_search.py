"""
도서 검색 서비스
================
판매 이력 기준 도서 검색 (판매 횟수 / 재고 / 기간 필터)과 도서 상세 조회

검색 쿼리:
    구매 이력 ⋈ 도서
    WHERE 구매일 BETWEEN :from_date AND :to_date
      AND 재고 BETWEEN :from_stock AND :to_stock
    GROUP BY isbn
    HAVING COUNT(*) BETWEEN :from_bought AND :to_bought
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload, sessionmaker

from bookstore_clerk.constants import DEFAULT_FROM_DATE, DEFAULT_TO_DATE
from bookstore_clerk.core.filters import EffectiveQueryBounds
from bookstore_clerk.models import Book, PurchaseHistory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DateRange:
    """구매 이력 조회 기간 (양 끝 포함)"""
    from_date: date = DEFAULT_FROM_DATE
    to_date: date = DEFAULT_TO_DATE

    def __post_init__(self):
        if self.from_date > self.to_date:
            raise ValueError(f"시작일이 종료일보다 늦습니다: {self.from_date} > {self.to_date}")


@dataclass(frozen=True)
class BookStat:
    """검색 결과 한 행"""
    isbn: str
    sold_count: int
    quantity: int


@dataclass(frozen=True)
class BookDetail:
    """선택한 도서의 상세 정보"""
    isbn: str
    title: str
    price: Decimal
    quantity: int
    year: Optional[int]
    publisher: Optional[str]
    authors: List[str] = field(default_factory=list)


class BookSearchService:
    """도서 검색/상세 조회"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def search(self, bounds: EffectiveQueryBounds, date_range: DateRange = None) -> List[BookStat]:
        """
        필터 범위로 도서 검색

        Args:
            bounds: 판매 횟수/재고 범위
            date_range: 구매 이력 기간 (None이면 전체)

        Returns:
            BookStat 리스트 (ISBN 순)
        """
        date_range = date_range or DateRange()
        sold_count = func.count(PurchaseHistory.id)

        stmt = (
            select(
                Book.isbn,
                sold_count.label("sold_count"),
                func.max(Book.quantity).label("quantity"),
            )
            .join(PurchaseHistory, PurchaseHistory.isbn == Book.isbn)
            .where(
                PurchaseHistory.date.between(date_range.from_date, date_range.to_date),
                Book.quantity.between(bounds.from_stock, bounds.to_stock),
            )
            .group_by(Book.isbn)
            .having(sold_count.between(bounds.from_bought, bounds.to_bought))
            .order_by(Book.isbn)
        )

        with self.session_factory() as session:
            rows = session.execute(stmt).all()

        logger.debug(f"도서 검색 {bounds.as_params()} → {len(rows)}건")
        return [
            BookStat(isbn=row.isbn, sold_count=int(row.sold_count), quantity=int(row.quantity))
            for row in rows
        ]

    def get_details(self, isbn: str) -> Optional[BookDetail]:
        """
        도서 상세 조회

        Returns:
            BookDetail 또는 None (없는 ISBN)
        """
        stmt = (
            select(Book)
            .where(Book.isbn == isbn)
            .options(selectinload(Book.authors), selectinload(Book.publisher))
        )
        with self.session_factory() as session:
            book = session.execute(stmt).scalar_one_or_none()
            if book is None:
                logger.warning(f"도서 없음: {isbn}")
                return None

            return BookDetail(
                isbn=book.isbn,
                title=book.title,
                price=Decimal(book.price),
                quantity=book.quantity,
                year=book.year,
                publisher=book.publisher.name if book.publisher else None,
                authors=[author.name for author in book.authors],
            )
