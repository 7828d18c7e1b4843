"""유틸리티 모듈"""

from .encryption import EncryptionManager
from .validators import BookValidator, BundleValidator, RequestValidator, ValidationError

__all__ = [
    "EncryptionManager",
    "BookValidator",
    "BundleValidator",
    "RequestValidator",
    "ValidationError",
]
