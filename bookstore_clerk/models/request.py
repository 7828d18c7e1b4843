"""입고 요청 모델"""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from bookstore_clerk.database import Base


class RestockRequest(Base):
    """점원이 남긴 도서 입고(재주문) 요청 - 점원·도서당 1건"""

    __tablename__ = "request"
    __table_args__ = (
        UniqueConstraint("isbn", "clerk_id", name="uix_request_isbn_clerk"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    isbn = Column(String(13), ForeignKey("book.isbn"), nullable=False, index=True)
    clerk_id = Column(Integer, ForeignKey("clerk.id"), nullable=False, index=True)
    quantity = Column(Integer, nullable=False)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    # Relationships
    book = relationship("Book")
    clerk = relationship("Clerk", back_populates="requests")

    def __repr__(self):
        return f"<RestockRequest(isbn='{self.isbn}', clerk={self.clerk_id}, quantity={self.quantity})>"
