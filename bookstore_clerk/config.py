"""애플리케이션 설정"""
import logging
from functools import lru_cache
from logging.handlers import RotatingFileHandler
from typing import Optional

from pydantic_settings import BaseSettings

LOG_FORMAT = '[%(asctime)s] %(levelname)s [%(name)s] %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


class Settings(BaseSettings):
    """환경변수 기반 설정"""

    # Database - database_url이 있으면 그대로 사용, 없으면 아래 항목으로 조립
    database_url: Optional[str] = None
    db_driver: str = "sqlite"          # sqlite / postgresql
    db_host: str = "localhost"
    db_port: Optional[int] = None
    db_name: str = "bookstore"
    db_user: Optional[str] = None
    db_password: Optional[str] = None  # encryption_key가 있으면 Fernet 토큰

    # Security
    encryption_key: Optional[str] = None

    # Filter / request limits (UI 입력 상한)
    filter_max_value: int = 9000
    request_max_quantity: int = 9999

    # Logging
    log_level: str = "INFO"
    log_file: Optional[str] = None
    log_file_max_bytes: int = 10485760  # 10MB
    log_backup_count: int = 5

    class Config:
        env_file = ".env"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """설정 인스턴스 (프로세스당 1회 로드)"""
    return Settings()


def configure_logging(cfg: Settings = None):
    """진입점에서 1회 호출하는 로깅 설정"""
    cfg = cfg or get_settings()
    handlers = [logging.StreamHandler()]
    if cfg.log_file:
        handlers.append(RotatingFileHandler(
            cfg.log_file,
            maxBytes=cfg.log_file_max_bytes,
            backupCount=cfg.log_backup_count,
            encoding="utf-8",
        ))

    logging.basicConfig(
        level=cfg.log_level,
        format=LOG_FORMAT,
        datefmt=LOG_DATE_FORMAT,
        handlers=handlers,
    )
