"""점원 인증 서비스"""
import hashlib
import hmac
import logging

from sqlalchemy.orm import sessionmaker

from bookstore_clerk.models import Clerk

logger = logging.getLogger(__name__)


def hash_password(plaintext: str) -> str:
    """로그인 폼이 전송하는 비밀번호 다이제스트 (MD5 hex)"""
    return hashlib.md5((plaintext or "").encode("utf-8")).hexdigest()


class AuthService:
    """점원 ID + 비밀번호 다이제스트 확인"""

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory

    def authenticate(self, clerk_id, password_digest: str) -> bool:
        """
        자격 증명 확인

        Args:
            clerk_id: 점원 ID (숫자 또는 숫자 문자열)
            password_digest: hash_password() 결과

        Returns:
            일치 여부
        """
        try:
            clerk_id = int(str(clerk_id).strip())
        except ValueError:
            logger.warning(f"로그인 실패: 숫자가 아닌 점원 ID ({clerk_id!r})")
            return False

        with self.session_factory() as session:
            clerk = session.get(Clerk, clerk_id)
            stored = clerk.password_hash if clerk and clerk.is_active else None

        if stored is None or not hmac.compare_digest(
            stored.lower().encode("utf-8"), (password_digest or "").lower().encode("utf-8")
        ):
            logger.warning(f"로그인 실패: 점원 {clerk_id}")
            return False

        logger.info(f"로그인 성공: 점원 {clerk_id}")
        return True

    @staticmethod
    def create_clerk(session, clerk_id: int, name: str, password: str) -> Clerk:
        """점원 계정 생성 (커밋은 호출자)"""
        clerk = Clerk(id=clerk_id, name=name, password_hash=hash_password(password))
        session.add(clerk)
        return clerk
