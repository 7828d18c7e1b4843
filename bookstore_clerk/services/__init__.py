"""서비스 모듈"""
from bookstore_clerk.services.auth import AuthService, hash_password
from bookstore_clerk.services.book_search import BookDetail, BookSearchService, BookStat, DateRange
from bookstore_clerk.services.bundle_service import BundleService, SavedBundle
from bookstore_clerk.services.clerk_controller import ClerkAction, ClerkController
from bookstore_clerk.services.request_service import RequestService
from bookstore_clerk.services.transaction_manager import atomic_session, run_atomic

__all__ = [
    'AuthService',
    'hash_password',
    'BookDetail',
    'BookSearchService',
    'BookStat',
    'DateRange',
    'BundleService',
    'SavedBundle',
    'ClerkAction',
    'ClerkController',
    'RequestService',
    'atomic_session',
    'run_atomic',
]
