"""
점원 컨트롤러
=============
UI 이벤트(액션) → 처리 함수 디스패치 테이블

로그인 세션마다 하나씩 만들어지며, 필터 조정기와 묶음 장부를 단독 소유한다.
DB 세션 팩토리는 생성 시 주입받는다.

사용법:
    controller = ClerkController(session_factory)
    if controller.dispatch(ClerkAction.LOGIN, 7, hash_password("secret")):
        controller.dispatch(ClerkAction.APPLY_PRESET, FilterPreset.TRENDING)
        rows = controller.rows
"""
import logging
from datetime import date
from enum import Enum
from functools import partial
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.orm import sessionmaker

from bookstore_clerk.core.filters import FilterPreset, FilterRangeReconciler
from bookstore_clerk.core.ledger import BundleItem, BundleLedger
from bookstore_clerk.exceptions import BundleNotActive, NotLoggedIn
from bookstore_clerk.services.auth import AuthService
from bookstore_clerk.services.book_search import BookDetail, BookSearchService, BookStat, DateRange
from bookstore_clerk.services.bundle_service import BundleService
from bookstore_clerk.services.request_service import RequestService

logger = logging.getLogger(__name__)


class ClerkAction(str, Enum):
    """UI 액션"""
    LOGIN = "login"
    LOGOUT = "logout"

    SET_BOUGHT_MORE = "set_bought_more"
    SET_BOUGHT_LESS = "set_bought_less"
    TOGGLE_BOUGHT_MORE = "toggle_bought_more"
    TOGGLE_BOUGHT_LESS = "toggle_bought_less"
    SET_STOCK_MORE = "set_stock_more"
    SET_STOCK_LESS = "set_stock_less"
    TOGGLE_STOCK_MORE = "toggle_stock_more"
    TOGGLE_STOCK_LESS = "toggle_stock_less"
    APPLY_PRESET = "apply_preset"
    SET_DATE_RANGE = "set_date_range"
    REFRESH = "refresh"

    SELECT_BOOK = "select_book"
    FILL_REQUEST = "fill_request"
    DELETE_REQUEST = "delete_request"

    BEGIN_BUNDLE = "begin_bundle"
    ADD_TO_BUNDLE = "add_to_bundle"
    REMOVE_FROM_BUNDLE = "remove_from_bundle"
    SET_BUNDLE_DISCOUNT = "set_bundle_discount"
    SAVE_BUNDLE = "save_bundle"
    CANCEL_BUNDLE = "cancel_bundle"


# 로그인 없이 허용되는 액션
PUBLIC_ACTIONS = frozenset({ClerkAction.LOGIN, ClerkAction.LOGOUT})


class ClerkController:
    """
    점원 세션 컨트롤러

    Attributes:
        clerk_id: 로그인한 점원 ID (None=로그아웃 상태)
        filters: 판매/재고 필터 조정기
        ledger: 묶음 장부
        rows: 마지막 검색 결과
        status_message: 상태 표시줄 문구
        selected: 선택된 도서 상세
        selected_request: 선택된 도서에 대한 내 입고 요청 수량
    """

    def __init__(
        self,
        session_factory: sessionmaker,
        auth: AuthService = None,
        search: BookSearchService = None,
        requests: RequestService = None,
        bundles: BundleService = None,
    ):
        self.auth = auth or AuthService(session_factory)
        self.search = search or BookSearchService(session_factory)
        self.requests = requests or RequestService(session_factory)
        self.bundles = bundles or BundleService(session_factory)

        self.clerk_id: Optional[int] = None
        self.filters = FilterRangeReconciler()
        self.ledger = BundleLedger()
        self.date_range = DateRange()
        self.rows: List[BookStat] = []
        self.status_message = ""
        self.selected: Optional[BookDetail] = None
        self.selected_request: Optional[int] = None

        self._handlers: Dict[ClerkAction, Callable[..., Any]] = {
            ClerkAction.LOGIN: self.login,
            ClerkAction.LOGOUT: self.logout,
            ClerkAction.SET_BOUGHT_MORE: partial(self._set_bound, "bought", "lower"),
            ClerkAction.SET_BOUGHT_LESS: partial(self._set_bound, "bought", "upper"),
            ClerkAction.TOGGLE_BOUGHT_MORE: partial(self._set_active, "bought", "lower"),
            ClerkAction.TOGGLE_BOUGHT_LESS: partial(self._set_active, "bought", "upper"),
            ClerkAction.SET_STOCK_MORE: partial(self._set_bound, "stock", "lower"),
            ClerkAction.SET_STOCK_LESS: partial(self._set_bound, "stock", "upper"),
            ClerkAction.TOGGLE_STOCK_MORE: partial(self._set_active, "stock", "lower"),
            ClerkAction.TOGGLE_STOCK_LESS: partial(self._set_active, "stock", "upper"),
            ClerkAction.APPLY_PRESET: self.apply_preset,
            ClerkAction.SET_DATE_RANGE: self.set_date_range,
            ClerkAction.REFRESH: self.refresh,
            ClerkAction.SELECT_BOOK: self.select_book,
            ClerkAction.FILL_REQUEST: self.fill_request,
            ClerkAction.DELETE_REQUEST: self.delete_request,
            ClerkAction.BEGIN_BUNDLE: self.begin_bundle,
            ClerkAction.ADD_TO_BUNDLE: self.add_to_bundle,
            ClerkAction.REMOVE_FROM_BUNDLE: self.ledger_call("remove_item"),
            ClerkAction.SET_BUNDLE_DISCOUNT: self.ledger_call("set_discount"),
            ClerkAction.SAVE_BUNDLE: self.save_bundle,
            ClerkAction.CANCEL_BUNDLE: self.cancel_bundle,
        }

    @property
    def is_logged_in(self) -> bool:
        return self.clerk_id is not None

    def dispatch(self, action, *args, **kwargs):
        """
        액션 실행

        Raises:
            NotLoggedIn: 로그인 전 점원 전용 액션
            ValueError: 알 수 없는 액션
        """
        action = ClerkAction(action)
        if action not in PUBLIC_ACTIONS and not self.is_logged_in:
            raise NotLoggedIn(action.value)
        return self._handlers[action](*args, **kwargs)

    # ─── 로그인 ───

    def login(self, clerk_id, password_digest: str) -> bool:
        """
        로그인 - 실패 시 로그아웃 상태 유지 (재시도는 UI가 묻는다)

        Returns:
            성공 여부

        Raises:
            SQLAlchemyError: 첫 검색 실패 (로그아웃 상태 유지)
        """
        self.logout()
        if not self.auth.authenticate(clerk_id, password_digest):
            return False

        # 첫 검색이 성공해야 로그인 상태가 된다
        self.refresh()
        self.clerk_id = int(str(clerk_id).strip())
        return True

    def logout(self):
        """세션 상태 초기화"""
        if self.clerk_id is not None:
            logger.info(f"로그아웃: 점원 {self.clerk_id}")
        self.clerk_id = None
        self.filters = FilterRangeReconciler()
        self.ledger.clear()
        self.date_range = DateRange()
        self.rows = []
        self.status_message = ""
        self.selected = None
        self.selected_request = None

    # ─── 필터 / 검색 ───

    def _set_bound(self, metric: str, side: str, value: int) -> List[BookStat]:
        if side == "lower":
            self.filters.set_lower_bound(metric, value)
        else:
            self.filters.set_upper_bound(metric, value)
        return self.refresh()

    def _set_active(self, metric: str, side: str, flag: bool) -> List[BookStat]:
        if side == "lower":
            self.filters.set_lower_active(metric, flag)
        else:
            self.filters.set_upper_active(metric, flag)
        return self.refresh()

    def apply_preset(self, preset) -> List[BookStat]:
        self.filters.apply_preset(preset)
        return self.refresh()

    def set_date_range(self, from_date: date, to_date: date) -> List[BookStat]:
        """
        Raises:
            ValueError: 시작일 > 종료일
        """
        self.date_range = DateRange(from_date, to_date)
        return self.refresh()

    def refresh(self) -> List[BookStat]:
        """현재 필터로 검색 재실행"""
        self.rows = self.search.search(self.filters.effective_bounds(), self.date_range)
        self.status_message = f"{len(self.rows)}건이 검색되었습니다."
        return self.rows

    # ─── 선택 / 입고 요청 ───

    def select_book(self, isbn: Optional[str]) -> Optional[BookDetail]:
        """행 선택 - 선택 없음이면 선택 해제만 한다"""
        if not isbn:
            self.selected = None
            self.selected_request = None
            return None

        self.selected = self.search.get_details(isbn)
        self.selected_request = (
            self.requests.get(isbn, self.clerk_id) if self.selected else None
        )
        return self.selected

    def fill_request(self, quantity, isbn: str = None) -> bool:
        """선택 도서(또는 지정 ISBN) 입고 요청 등록/수정"""
        isbn = isbn or (self.selected.isbn if self.selected else None)
        if not isbn:
            logger.warning("입고 요청: 선택된 도서 없음")
            return False

        ok = self.requests.submit(isbn, quantity, self.clerk_id)
        if ok and self.selected and self.selected.isbn == isbn:
            self.selected_request = int(quantity)
        return ok

    def delete_request(self, isbn: str = None) -> bool:
        isbn = isbn or (self.selected.isbn if self.selected else None)
        if not isbn:
            return False

        ok = self.requests.delete(isbn, self.clerk_id)
        if ok and self.selected and self.selected.isbn == isbn:
            self.selected_request = None
        return ok

    # ─── 묶음 ───

    def begin_bundle(self):
        self.ledger.begin()
        logger.info(f"묶음 구성 시작: 점원 {self.clerk_id}")

    def ledger_call(self, method: str) -> Callable[..., Any]:
        """구성 세션 확인 후 장부 메서드 호출"""
        def _call(*args, **kwargs):
            self._require_bundle()
            return getattr(self.ledger, method)(*args, **kwargs)
        return _call

    def add_to_bundle(self, isbn: str = None) -> Optional[BundleItem]:
        """
        선택 도서(또는 지정 ISBN)를 묶음에 추가

        Raises:
            BundleNotActive: 구성 세션 없음
            DuplicateItem: 이미 담긴 도서
        """
        self._require_bundle()
        if isbn and (self.selected is None or self.selected.isbn != isbn):
            detail = self.search.get_details(isbn)
        else:
            detail = self.selected
        if detail is None:
            logger.warning("묶음 추가: 선택된 도서 없음")
            return None

        return self.ledger.add_item(detail.isbn, detail.price)

    def save_bundle(self, name: str, comment: str = "") -> bool:
        """
        묶음 저장 - 성공 시 장부를 비우고 구성 종료, 실패 시 장부 유지

        Raises:
            BundleNotActive: 구성 세션 없음
        """
        self._require_bundle()
        ok = self.bundles.save(name, comment, self.ledger.items(), self.clerk_id)
        if ok:
            self.ledger.clear()
        return ok

    def cancel_bundle(self):
        self.ledger.clear()
        logger.info(f"묶음 구성 취소: 점원 {self.clerk_id}")

    def _require_bundle(self):
        if not self.ledger.active:
            raise BundleNotActive()
