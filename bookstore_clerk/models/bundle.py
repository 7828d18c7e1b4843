"""묶음 모델"""
from decimal import Decimal

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime
from bookstore_clerk.database import Base


class Bundle(Base):
    """할인 묶음 (안 팔리는 도서를 묶어 재고 소진)"""
    __tablename__ = "bundle"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)
    comment = Column(Text)
    clerk_id = Column(Integer, ForeignKey("clerk.id"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Relationships
    clerk = relationship("Clerk", back_populates="bundles")
    items = relationship(
        "BundleBook",
        back_populates="bundle",
        cascade="all, delete-orphan",
        order_by="BundleBook.position",
    )

    def __repr__(self):
        return f"<Bundle(name='{self.name}', count={len(self.items)})>"

    @property
    def total_list_price(self) -> Decimal:
        """정가 합계"""
        return sum((item.book.price for item in self.items), Decimal("0"))

    @property
    def total_sale_price(self) -> Decimal:
        """할인 적용 판매가 합계"""
        return sum((item.sale_price for item in self.items), Decimal("0"))
