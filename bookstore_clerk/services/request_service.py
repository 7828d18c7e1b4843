"""입고 요청 서비스 - 점원·도서당 1건의 요청 등록/수정/삭제"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Session, sessionmaker

from bookstore_clerk.models import RestockRequest
from bookstore_clerk.services.transaction_manager import run_atomic
from bookstore_clerk.utils.validators import RequestValidator

logger = logging.getLogger(__name__)


def _find(session: Session, isbn: str, clerk_id: int) -> Optional[RestockRequest]:
    stmt = select(RestockRequest).where(
        RestockRequest.isbn == isbn,
        RestockRequest.clerk_id == clerk_id,
    )
    return session.execute(stmt).scalar_one_or_none()


def _upsert(session: Session, isbn: str, quantity: int, clerk_id: int) -> str:
    existing = _find(session, isbn, clerk_id)
    if existing:
        existing.quantity = quantity
        return "updated"
    session.add(RestockRequest(isbn=isbn, quantity=quantity, clerk_id=clerk_id))
    return "inserted"


def _delete(session: Session, isbn: str, clerk_id: int) -> bool:
    existing = _find(session, isbn, clerk_id)
    if existing is None:
        return False
    session.delete(existing)
    return True


class RequestService:
    """입고 요청 저장소"""

    def __init__(self, session_factory: sessionmaker, max_quantity: int = 9999):
        self.session_factory = session_factory
        self.validator = RequestValidator(max_quantity=max_quantity)

    def get(self, isbn: str, clerk_id: int) -> Optional[int]:
        """현재 요청 수량 (없으면 None)"""
        with self.session_factory() as session:
            existing = _find(session, isbn, clerk_id)
            return existing.quantity if existing else None

    def submit(self, isbn: str, quantity, clerk_id: int) -> bool:
        """
        요청 등록 (이미 있으면 수량 수정)

        Returns:
            성공 여부
        """
        err = self.validator.validate_quantity(quantity)
        if err:
            logger.warning(f"입고 요청 거부 ({isbn}): {err.message}")
            return False

        outcome = run_atomic(self.session_factory, _upsert, isbn, int(quantity), clerk_id)
        if not outcome["success"]:
            logger.error(f"입고 요청 저장 실패 ({isbn}, 점원 {clerk_id}): {outcome['error']}")
            return False

        logger.info(f"입고 요청 {outcome['result']}: {isbn} × {int(quantity)} (점원 {clerk_id})")
        return True

    def delete(self, isbn: str, clerk_id: int) -> bool:
        """
        요청 삭제

        Returns:
            삭제 여부 (요청이 없었으면 False)
        """
        outcome = run_atomic(self.session_factory, _delete, isbn, clerk_id)
        if not outcome["success"]:
            logger.error(f"입고 요청 삭제 실패 ({isbn}, 점원 {clerk_id}): {outcome['error']}")
            return False
        if outcome["result"]:
            logger.info(f"입고 요청 삭제: {isbn} (점원 {clerk_id})")
        return bool(outcome["result"])
