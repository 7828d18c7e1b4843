"""SQLAlchemy 모델"""
from bookstore_clerk.models.publisher import Publisher
from bookstore_clerk.models.book import Author, Book, PurchaseHistory, book_author
from bookstore_clerk.models.clerk import Clerk
from bookstore_clerk.models.request import RestockRequest
from bookstore_clerk.models.bundle import Bundle
from bookstore_clerk.models.bundle_item import BundleBook

__all__ = [
    "Publisher",
    "Author",
    "Book",
    "PurchaseHistory",
    "book_author",
    "Clerk",
    "RestockRequest",
    "Bundle",
    "BundleBook",
]
