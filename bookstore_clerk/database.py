"""데이터베이스 연결 및 세션 관리

엔진/세션 팩토리는 진입점에서 한 번 만들어 필요한 곳에 주입한다.
  - DATABASE_URL이 있으면 그대로 사용
  - 없으면 DB_DRIVER / DB_HOST / DB_NAME ... 로 URL 조립
  - sqlite 드라이버는 DB_NAME을 파일명으로 사용
"""
import logging
import sqlite3
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.engine import URL, Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from bookstore_clerk.constants import TIMEOUT_CONFIG

_logger = logging.getLogger(__name__)

ROOT = Path(__file__).resolve().parent.parent

# 베이스 클래스
Base = declarative_base()


# ─── URL 결정 ───

def build_database_url(settings):
    """설정으로부터 DB URL 결정"""
    if settings.database_url:
        return settings.database_url

    if settings.db_driver == "sqlite":
        db_path = ROOT / f"{settings.db_name}.db"
        return f"sqlite:///{db_path}"

    password = settings.db_password
    if password and settings.encryption_key:
        from bookstore_clerk.utils.encryption import EncryptionManager
        password = EncryptionManager(settings.encryption_key).decrypt(password)

    return URL.create(
        settings.db_driver,
        username=settings.db_user,
        password=password,
        host=settings.db_host,
        port=settings.db_port,
        database=settings.db_name,
    )


def _is_sqlite(url) -> bool:
    """SQLite 여부 판별"""
    return str(url).startswith("sqlite:")


def create_engine_for_url(url) -> Engine:
    """URL에 따라 적절한 엔진 생성"""
    if _is_sqlite(url):
        eng = create_engine(
            url,
            connect_args={"check_same_thread": False, "timeout": TIMEOUT_CONFIG["db_connect"]},
            echo=False,
        )

        # SQLite WAL 모드 + busy_timeout + 외래키
        @event.listens_for(eng, "connect")
        def _set_sqlite_pragma(dbapi_conn, connection_record):
            cursor = dbapi_conn.cursor()
            cursor.execute(f"PRAGMA busy_timeout={TIMEOUT_CONFIG['db_busy']}")
            cursor.execute("PRAGMA foreign_keys=ON")
            try:
                cursor.execute("PRAGMA journal_mode=WAL")
            except sqlite3.OperationalError:
                _logger.debug("WAL 모드 전환 실패 (DB 잠금), 기존 journal 모드 유지")
            cursor.close()
        return eng

    _logger.info("서버 DB 엔진으로 연결합니다.")
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_size=5,
        max_overflow=10,
    )


def create_session_factory(engine: Engine) -> sessionmaker:
    """세션 팩토리 생성"""
    return sessionmaker(autoflush=False, bind=engine, expire_on_commit=False)


def init_db(engine: Engine):
    """데이터베이스 초기화 (테이블 생성)"""
    # 모델 등록
    import bookstore_clerk.models  # noqa: F401

    Base.metadata.create_all(bind=engine)
    _logger.info("데이터베이스 테이블 준비 완료")
