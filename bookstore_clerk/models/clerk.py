"""점원 계정 모델"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime
from bookstore_clerk.database import Base


class Clerk(Base):
    """점원 (숫자 ID + MD5 비밀번호 해시)"""

    __tablename__ = "clerk"

    id = Column(Integer, primary_key=True, autoincrement=False)
    name = Column(String(100), nullable=False)
    password_hash = Column(String(32), nullable=False)  # MD5 hex
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    requests = relationship("RestockRequest", back_populates="clerk")
    bundles = relationship("Bundle", back_populates="clerk")

    def __repr__(self):
        return f"<Clerk(id={self.id}, name='{self.name}')>"
