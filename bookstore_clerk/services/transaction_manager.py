"""
트랜잭션 관리 모듈
==================
원자적 작업 보장 (성공 시 커밋, 실패 시 롤백)

사용법:
    with atomic_session(session_factory) as session:
        session.add(obj)

    outcome = run_atomic(session_factory, save_func, payload)
    if not outcome["success"]:
        print(outcome["error"])
"""
import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

logger = logging.getLogger(__name__)


@contextmanager
def atomic_session(session_factory: sessionmaker):
    """
    원자적 작업을 보장하는 컨텍스트 매니저

    성공 시 자동 커밋, 실패 시 자동 롤백

    Args:
        session_factory: SQLAlchemy 세션 팩토리

    Yields:
        Session: 데이터베이스 세션

    Raises:
        SQLAlchemyError: 데이터베이스 오류 시 (롤백 후)
    """
    session = session_factory()

    try:
        yield session
        session.commit()
        logger.debug("트랜잭션 커밋 완료")
    except IntegrityError as e:
        session.rollback()
        logger.warning(f"무결성 오류로 롤백: {e}")
        raise
    except SQLAlchemyError as e:
        session.rollback()
        logger.error(f"DB 오류로 롤백: {e}")
        raise
    except Exception as e:
        session.rollback()
        logger.error(f"예상치 못한 오류로 롤백: {e}")
        raise
    finally:
        session.close()


def run_atomic(
    session_factory: sessionmaker,
    func: Callable[..., Any],
    *args,
    **kwargs,
) -> Dict[str, Any]:
    """
    단일 작업 처리 (원자적)

    Args:
        session_factory: 세션 팩토리
        func: 작업 함수 (session, *args, **kwargs) -> result

    Returns:
        {"success": bool, "result": Any, "error": Optional[str]}
    """
    try:
        with atomic_session(session_factory) as session:
            result = func(session, *args, **kwargs)
        return {"success": True, "result": result, "error": None}
    except SQLAlchemyError as e:
        return {"success": False, "result": None, "error": f"{type(e).__name__}: {str(e)[:200]}"}
