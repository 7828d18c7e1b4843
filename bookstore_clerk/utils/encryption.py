"""암호화 유틸리티"""
from cryptography.fernet import Fernet, InvalidToken


class EncryptionManager:
    """설정에 저장된 DB 비밀번호 암호화 관리자"""

    def __init__(self, key: str):
        self.cipher = Fernet(key.encode())

    @staticmethod
    def generate_key() -> str:
        """새 Fernet 키 (.env의 ENCRYPTION_KEY 용)"""
        return Fernet.generate_key().decode()

    def encrypt(self, plaintext: str) -> str:
        """
        평문 암호화

        Args:
            plaintext: 암호화할 평문

        Returns:
            암호화된 문자열
        """
        if not plaintext:
            return ""
        return self.cipher.encrypt(plaintext.encode()).decode()

    def decrypt(self, ciphertext: str) -> str:
        """
        암호문 복호화

        Args:
            ciphertext: 복호화할 암호문

        Returns:
            복호화된 평문

        Raises:
            ValueError: 키가 맞지 않거나 손상된 토큰
        """
        if not ciphertext:
            return ""
        try:
            return self.cipher.decrypt(ciphertext.encode()).decode()
        except InvalidToken as e:
            raise ValueError("DB 비밀번호 복호화 실패 (ENCRYPTION_KEY 확인)") from e
