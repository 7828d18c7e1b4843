"""
묶음 저장 서비스
================
묶음 레코드 + 구성 도서 레코드를 한 트랜잭션으로 저장 (전부 아니면 전무)
"""
import logging
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload, sessionmaker

from bookstore_clerk.core.ledger import BundleItem
from bookstore_clerk.models import Bundle, BundleBook
from bookstore_clerk.services.transaction_manager import run_atomic
from bookstore_clerk.utils.validators import BundleValidator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SavedBundle:
    """저장된 묶음 (표시용)"""
    id: int
    name: str
    comment: Optional[str]
    clerk_id: int
    created_at: datetime
    items: List[Tuple[str, Decimal]] = field(default_factory=list)  # (isbn, 할인율)
    list_total: Decimal = Decimal("0")
    sale_total: Decimal = Decimal("0")


def _insert_bundle(
    session: Session,
    name: str,
    comment: str,
    items: Sequence[BundleItem],
    clerk_id: int,
) -> int:
    bundle = Bundle(name=name, comment=comment, clerk_id=clerk_id)
    session.add(bundle)
    session.flush()

    for position, item in enumerate(items):
        session.add(BundleBook(
            bundle_id=bundle.id,
            isbn=item.isbn,
            discount=item.discount,
            position=position,
        ))
    session.flush()
    return bundle.id


class BundleService:
    """묶음 저장소"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self.validator = BundleValidator()

    def save(
        self,
        name: str,
        comment: str,
        items: Sequence[BundleItem],
        clerk_id: int,
    ) -> bool:
        """
        묶음 저장

        Args:
            name: 묶음 이름
            comment: 설명
            items: 장부 항목 (isbn + 할인율)
            clerk_id: 작성 점원

        Returns:
            성공 여부 (실패 시 아무것도 저장되지 않음)
        """
        err = self.validator.validate_name(name)
        if err:
            logger.warning(f"묶음 저장 거부: {err.message}")
            return False
        if not items:
            logger.warning("묶음 저장 거부: 구성 도서가 없습니다")
            return False

        outcome = run_atomic(
            self.session_factory, _insert_bundle,
            name.strip(), comment or None, list(items), clerk_id,
        )
        if not outcome["success"]:
            logger.error(f"묶음 저장 실패 (롤백): {outcome['error']}")
            return False

        logger.info(f"묶음 저장: #{outcome['result']} '{name.strip()}' ({len(items)}권, 점원 {clerk_id})")
        return True

    def list_bundles(self, clerk_id: Optional[int] = None) -> List[SavedBundle]:
        """저장된 묶음 목록 (최신순)"""
        stmt = (
            select(Bundle)
            .options(selectinload(Bundle.items).selectinload(BundleBook.book))
            .order_by(Bundle.id.desc())
        )
        if clerk_id is not None:
            stmt = stmt.where(Bundle.clerk_id == clerk_id)

        with self.session_factory() as session:
            bundles = session.execute(stmt).scalars().all()
            return [
                SavedBundle(
                    id=b.id,
                    name=b.name,
                    comment=b.comment,
                    clerk_id=b.clerk_id,
                    created_at=b.created_at,
                    items=[(item.isbn, Decimal(item.discount)) for item in b.items],
                    list_total=b.total_list_price,
                    sale_total=b.total_sale_price,
                )
                for b in bundles
            ]
