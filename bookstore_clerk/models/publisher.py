"""출판사 모델"""
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import relationship
from bookstore_clerk.database import Base


class Publisher(Base):
    """출판사 정보"""
    __tablename__ = "publisher"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), unique=True, nullable=False, index=True)

    # Relationships
    books = relationship("Book", back_populates="publisher")

    def __repr__(self):
        return f"<Publisher(name='{self.name}')>"
