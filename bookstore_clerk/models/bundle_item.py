"""묶음 구성 아이템 모델"""
from sqlalchemy import Column, Integer, String, Numeric, ForeignKey, UniqueConstraint, Index
from sqlalchemy.orm import relationship
from bookstore_clerk.constants import DISCOUNT_PLACES
from bookstore_clerk.database import Base


class BundleBook(Base):
    """묶음을 구성하는 개별 도서와 할인율"""

    __tablename__ = "bundle_book"
    __table_args__ = (
        UniqueConstraint("bundle_id", "isbn", name="uix_bundle_isbn"),
        Index("ix_bundle_book_isbn", "isbn"),
    )

    id = Column(Integer, primary_key=True)
    bundle_id = Column(Integer, ForeignKey("bundle.id", ondelete="CASCADE"), nullable=False)
    isbn = Column(String(13), ForeignKey("book.isbn"), nullable=False)
    discount = Column(Numeric(DISCOUNT_PLACES + 1, DISCOUNT_PLACES), nullable=False, default=0)  # 0.000 ~ 1.000
    position = Column(Integer, nullable=False, default=0)  # 구성 순서

    # Relationships
    bundle = relationship("Bundle", back_populates="items")
    book = relationship("Book")

    def __repr__(self):
        return f"<BundleBook(bundle={self.bundle_id}, isbn='{self.isbn}', discount={self.discount})>"

    @property
    def sale_price(self):
        """할인 적용가"""
        return self.book.price * (1 - self.discount)
