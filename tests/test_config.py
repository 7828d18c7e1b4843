"""
config.py / database.py 테스트
==============================
DB URL 결정, 암호화된 비밀번호 복호화, SQLite 엔진 설정 테스트
"""
import pytest
import sys
import tempfile
from pathlib import Path

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import text

from bookstore_clerk.config import Settings
from bookstore_clerk.database import ROOT, build_database_url, create_engine_for_url
from bookstore_clerk.utils.encryption import EncryptionManager


class TestBuildDatabaseUrl:
    """build_database_url 테스트"""

    def test_explicit_url_wins(self):
        """DATABASE_URL 우선"""
        settings = Settings(database_url="sqlite:///custom.db", db_driver="postgresql")
        assert build_database_url(settings) == "sqlite:///custom.db"

    def test_sqlite_file_under_root(self):
        """sqlite 드라이버는 DB_NAME 파일"""
        settings = Settings(database_url=None, db_driver="sqlite", db_name="shop")
        assert build_database_url(settings) == f"sqlite:///{ROOT / 'shop.db'}"

    def test_server_url(self):
        """서버 DB URL 조립"""
        settings = Settings(
            database_url=None, db_driver="postgresql", db_host="db.local", db_port=5432,
            db_name="books", db_user="clerk", db_password="plain", encryption_key=None,
        )
        url = build_database_url(settings)
        assert url.drivername == "postgresql"
        assert url.host == "db.local"
        assert url.port == 5432
        assert url.database == "books"
        assert url.password == "plain"

    def test_encrypted_password(self):
        """암호화 키가 있으면 비밀번호 복호화"""
        key = EncryptionManager.generate_key()
        token = EncryptionManager(key).encrypt("s3cret")
        settings = Settings(
            database_url=None, db_driver="postgresql", db_user="clerk",
            db_password=token, encryption_key=key,
        )
        assert build_database_url(settings).password == "s3cret"


class TestEncryptionManager:
    """EncryptionManager 테스트"""

    def test_wrong_key(self):
        """다른 키로 복호화 실패"""
        token = EncryptionManager(EncryptionManager.generate_key()).encrypt("value")
        with pytest.raises(ValueError):
            EncryptionManager(EncryptionManager.generate_key()).decrypt(token)


class TestSqliteEngine:
    """SQLite 엔진 PRAGMA 테스트"""

    def setup_method(self):
        self.temp_db = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
        self.db_path = self.temp_db.name
        self.engine = create_engine_for_url(f"sqlite:///{self.db_path}")

    def teardown_method(self):
        self.engine.dispose()
        self.temp_db.close()
        try:
            Path(self.db_path).unlink(missing_ok=True)
        except PermissionError:
            pass  # Windows 파일 잠금 무시

    def test_foreign_keys_enabled(self):
        """외래키 제약 활성화"""
        with self.engine.connect() as conn:
            assert conn.execute(text("PRAGMA foreign_keys")).scalar() == 1

    def test_busy_timeout(self):
        """잠금 대기 시간"""
        with self.engine.connect() as conn:
            assert conn.execute(text("PRAGMA busy_timeout")).scalar() == 30000


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
