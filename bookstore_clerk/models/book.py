"""도서 / 저자 / 구매 이력 모델"""
from sqlalchemy import Column, Integer, String, Numeric, Date, ForeignKey, Table, Index
from sqlalchemy.orm import relationship
from bookstore_clerk.database import Base


# 도서 ↔ 저자 (다대다)
book_author = Table(
    "book_author",
    Base.metadata,
    Column("isbn", String(13), ForeignKey("book.isbn", ondelete="CASCADE"), primary_key=True),
    Column("author_id", Integer, ForeignKey("author.id", ondelete="CASCADE"), primary_key=True),
)


class Author(Base):
    """저자"""
    __tablename__ = "author"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(200), nullable=False)

    books = relationship("Book", secondary=book_author, back_populates="authors")

    def __repr__(self):
        return f"<Author(name='{self.name}')>"


class Book(Base):
    """매장 도서"""
    __tablename__ = "book"

    isbn = Column(String(13), primary_key=True)
    title = Column(String(500), nullable=False)
    price = Column(Numeric(10, 2), nullable=False)  # 정가
    quantity = Column(Integer, nullable=False, default=0)  # 매장 재고
    year = Column(Integer)
    publisher_id = Column(Integer, ForeignKey("publisher.id"), index=True)

    # Relationships
    publisher = relationship("Publisher", back_populates="books")
    authors = relationship("Author", secondary=book_author, back_populates="books", order_by="Author.name")
    purchases = relationship("PurchaseHistory", back_populates="book")

    def __repr__(self):
        return f"<Book(isbn='{self.isbn}', title='{self.title[:30]}')>"


class PurchaseHistory(Base):
    """판매(구매) 이력 - 한 행이 한 번의 판매"""
    __tablename__ = "history_of_purchasing"
    __table_args__ = (
        Index("ix_purchase_isbn_date", "isbn", "date"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    isbn = Column(String(13), ForeignKey("book.isbn"), nullable=False)
    date = Column(Date, nullable=False)

    book = relationship("Book", back_populates="purchases")

    def __repr__(self):
        return f"<PurchaseHistory(isbn='{self.isbn}', date={self.date})>"
