"""
clerk_controller.py 테스트
==========================
로그인 게이트, 필터 디스패치, 선택/입고 요청, 묶음 구성 흐름 테스트
"""
import pytest
import sys
import tempfile
from datetime import date
from decimal import Decimal
from pathlib import Path

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy.exc import OperationalError, SQLAlchemyError

from bookstore_clerk.core.filters import EffectiveQueryBounds, FilterPreset
from bookstore_clerk.database import create_engine_for_url, create_session_factory, init_db
from bookstore_clerk.exceptions import BundleNotActive, DuplicateItem, IndexOutOfRange, NotLoggedIn
from bookstore_clerk.models import Book, Bundle, PurchaseHistory
from bookstore_clerk.services.auth import AuthService, hash_password
from bookstore_clerk.services.clerk_controller import ClerkAction, ClerkController
from bookstore_clerk.services.transaction_manager import atomic_session

# isbn, 정가, 재고, 판매 횟수
CATALOGUE = [
    ("9780000000011", "30.00", 3, 18),
    ("9780000000012", "10.00", 40, 1),
    ("9780000000013", "20.00", 20, 6),
]


class TestClerkController:
    """ClerkController 테스트"""

    def setup_method(self):
        """임시 DB + 점원 1명 + 도서 3권"""
        self.temp_db = tempfile.NamedTemporaryFile(suffix=".db", delete=False)
        self.db_path = self.temp_db.name
        self.engine = create_engine_for_url(f"sqlite:///{self.db_path}")
        init_db(self.engine)
        self.session_factory = create_session_factory(self.engine)

        with atomic_session(self.session_factory) as session:
            for n, (isbn, price, quantity, sales) in enumerate(CATALOGUE, start=1):
                session.add(Book(isbn=isbn, title=f"Title {n}", price=Decimal(price), quantity=quantity))
                for _ in range(sales):
                    session.add(PurchaseHistory(isbn=isbn, date=date(2024, 3, n)))
            AuthService.create_clerk(session, 3, "Clerk", "pw")

        self.controller = ClerkController(self.session_factory)

    def teardown_method(self):
        self.engine.dispose()
        self.temp_db.close()
        try:
            Path(self.db_path).unlink(missing_ok=True)
        except PermissionError:
            pass  # Windows 파일 잠금 무시

    def login(self):
        assert self.controller.dispatch(ClerkAction.LOGIN, 3, hash_password("pw"))

    # ─── 로그인 ───

    def test_actions_require_login(self):
        """로그인 전 점원 전용 액션 거부"""
        with pytest.raises(NotLoggedIn):
            self.controller.dispatch(ClerkAction.REFRESH)
        with pytest.raises(NotLoggedIn):
            self.controller.dispatch(ClerkAction.BEGIN_BUNDLE)

    def test_login_failure(self):
        """잘못된 비밀번호"""
        assert self.controller.dispatch(ClerkAction.LOGIN, 3, hash_password("nope")) is False
        assert not self.controller.is_logged_in
        assert self.controller.rows == []

    def test_login_runs_initial_search(self):
        """로그인 직후 열린 범위 검색"""
        self.login()
        assert self.controller.clerk_id == 3
        assert [r.isbn for r in self.controller.rows] == [isbn for isbn, *_ in CATALOGUE]
        assert self.controller.status_message == "3건이 검색되었습니다."

    def test_login_stays_logged_out_when_search_fails(self):
        """첫 검색이 DB 오류로 실패하면 로그인되지 않음"""
        class BrokenSearch:
            def search(self, bounds, date_range=None):
                raise OperationalError("SELECT 1", {}, Exception("database is locked"))

        controller = ClerkController(self.session_factory, search=BrokenSearch())

        with pytest.raises(SQLAlchemyError):
            controller.dispatch(ClerkAction.LOGIN, 3, hash_password("pw"))

        assert not controller.is_logged_in
        assert controller.rows == []
        with pytest.raises(NotLoggedIn):
            controller.dispatch(ClerkAction.REFRESH)

    def test_logout_resets_session(self):
        """로그아웃 시 상태 초기화"""
        self.login()
        self.controller.dispatch(ClerkAction.APPLY_PRESET, FilterPreset.TRENDING)
        self.controller.dispatch(ClerkAction.BEGIN_BUNDLE)
        self.controller.dispatch(ClerkAction.ADD_TO_BUNDLE, "9780000000011")

        self.controller.dispatch(ClerkAction.LOGOUT)

        assert not self.controller.is_logged_in
        assert self.controller.filters.preset is FilterPreset.CUSTOM
        assert len(self.controller.ledger) == 0
        assert not self.controller.ledger.active
        assert self.controller.rows == []

    def test_unknown_action(self):
        """알 수 없는 액션"""
        with pytest.raises(ValueError):
            self.controller.dispatch("fly")

    # ─── 필터 ───

    def test_filter_actions_refresh_rows(self):
        """필터 조정 → 재검색"""
        self.login()
        self.controller.dispatch(ClerkAction.SET_BOUGHT_MORE, 4)
        assert len(self.controller.rows) == 3  # 토글 꺼짐

        self.controller.dispatch(ClerkAction.TOGGLE_BOUGHT_MORE, True)
        assert [r.isbn for r in self.controller.rows] == ["9780000000011", "9780000000013"]
        assert self.controller.status_message == "2건이 검색되었습니다."

    def test_filter_clamp_through_dispatch(self):
        """상한을 하한 아래로 내리면 하한도 내려감"""
        self.login()
        self.controller.dispatch(ClerkAction.SET_STOCK_MORE, 30)
        self.controller.dispatch(ClerkAction.SET_STOCK_LESS, 10)
        assert (self.controller.filters.stock.lower, self.controller.filters.stock.upper) == (10, 10)

    def test_preset_dispatch(self):
        """프리셋 적용 후 검색"""
        self.login()
        self.controller.dispatch(ClerkAction.APPLY_PRESET, "trending")
        assert self.controller.filters.effective_bounds() == EffectiveQueryBounds(15, 9000, 0, 10)
        assert [r.isbn for r in self.controller.rows] == ["9780000000011"]

        self.controller.dispatch(ClerkAction.APPLY_PRESET, FilterPreset.OVERSTOCKED)
        assert [r.isbn for r in self.controller.rows] == ["9780000000012"]

    def test_date_range(self):
        """기간 설정"""
        self.login()
        self.controller.dispatch(ClerkAction.SET_DATE_RANGE, date(2024, 3, 2), date(2024, 3, 3))
        assert [r.isbn for r in self.controller.rows] == ["9780000000012", "9780000000013"]

        with pytest.raises(ValueError):
            self.controller.dispatch(ClerkAction.SET_DATE_RANGE, date(2024, 3, 3), date(2024, 3, 2))

    # ─── 선택 / 입고 요청 ───

    def test_select_and_request(self):
        """선택 도서에 입고 요청"""
        self.login()
        detail = self.controller.dispatch(ClerkAction.SELECT_BOOK, "9780000000012")
        assert detail.title == "Title 2"
        assert self.controller.selected_request is None

        assert self.controller.dispatch(ClerkAction.FILL_REQUEST, 5) is True
        assert self.controller.selected_request == 5

        # 다시 선택하면 저장된 요청이 보임
        self.controller.dispatch(ClerkAction.SELECT_BOOK, None)
        self.controller.dispatch(ClerkAction.SELECT_BOOK, "9780000000012")
        assert self.controller.selected_request == 5

        assert self.controller.dispatch(ClerkAction.DELETE_REQUEST) is True
        assert self.controller.selected_request is None

    def test_select_nothing(self):
        """선택 없음은 조회하지 않고 선택 해제"""
        self.login()
        self.controller.dispatch(ClerkAction.SELECT_BOOK, "9780000000012")
        assert self.controller.dispatch(ClerkAction.SELECT_BOOK, "") is None
        assert self.controller.selected is None

    def test_request_without_selection(self):
        """선택 도서 없이 요청"""
        self.login()
        assert self.controller.dispatch(ClerkAction.FILL_REQUEST, 5) is False
        assert self.controller.dispatch(ClerkAction.DELETE_REQUEST) is False

    def test_invalid_request_quantity(self):
        """잘못된 수량은 요청 수량을 바꾸지 않음"""
        self.login()
        self.controller.dispatch(ClerkAction.SELECT_BOOK, "9780000000012")
        assert self.controller.dispatch(ClerkAction.FILL_REQUEST, 0) is False
        assert self.controller.selected_request is None

    # ─── 묶음 ───

    def test_bundle_requires_begin(self):
        """구성 시작 전 묶음 작업 거부"""
        self.login()
        with pytest.raises(BundleNotActive):
            self.controller.dispatch(ClerkAction.ADD_TO_BUNDLE, "9780000000011")
        with pytest.raises(BundleNotActive):
            self.controller.dispatch(ClerkAction.REMOVE_FROM_BUNDLE, 0)
        with pytest.raises(BundleNotActive):
            self.controller.dispatch(ClerkAction.SAVE_BUNDLE, "name")

    def test_bundle_flow(self):
        """구성 → 추가 → 할인 → 제거 → 저장"""
        self.login()
        self.controller.dispatch(ClerkAction.BEGIN_BUNDLE)

        self.controller.dispatch(ClerkAction.SELECT_BOOK, "9780000000011")
        self.controller.dispatch(ClerkAction.ADD_TO_BUNDLE)
        self.controller.dispatch(ClerkAction.SET_BUNDLE_DISCOUNT, 0, Decimal("0.10"))
        self.controller.dispatch(ClerkAction.ADD_TO_BUNDLE, "9780000000012")
        self.controller.dispatch(ClerkAction.ADD_TO_BUNDLE, "9780000000013")

        ledger = self.controller.ledger
        assert ledger.total_after_discount == Decimal("57.00")
        assert ledger.total_savings == Decimal("3.00")

        self.controller.dispatch(ClerkAction.REMOVE_FROM_BUNDLE, 0)
        assert ledger.total_after_discount == Decimal("30.00")
        assert ledger.total_savings == Decimal("0")

        assert self.controller.dispatch(ClerkAction.SAVE_BUNDLE, "Clearance", "two books") is True
        assert not ledger.active
        assert len(ledger) == 0

        saved = self.controller.bundles.list_bundles(3)
        assert [isbn for isbn, _ in saved[0].items] == ["9780000000012", "9780000000013"]

    def test_duplicate_add(self):
        """같은 도서 두 번 추가"""
        self.login()
        self.controller.dispatch(ClerkAction.BEGIN_BUNDLE)
        self.controller.dispatch(ClerkAction.ADD_TO_BUNDLE, "9780000000011")
        with pytest.raises(DuplicateItem):
            self.controller.dispatch(ClerkAction.ADD_TO_BUNDLE, "9780000000011")
        assert len(self.controller.ledger) == 1

    def test_add_without_selection(self):
        """선택 도서 없이 추가"""
        self.login()
        self.controller.dispatch(ClerkAction.BEGIN_BUNDLE)
        assert self.controller.dispatch(ClerkAction.ADD_TO_BUNDLE) is None
        assert len(self.controller.ledger) == 0

    def test_remove_bad_index(self):
        """잘못된 인덱스 제거"""
        self.login()
        self.controller.dispatch(ClerkAction.BEGIN_BUNDLE)
        with pytest.raises(IndexOutOfRange):
            self.controller.dispatch(ClerkAction.REMOVE_FROM_BUNDLE, 0)

    def test_failed_save_keeps_ledger(self):
        """저장 실패 시 장부 유지"""
        self.login()
        self.controller.dispatch(ClerkAction.BEGIN_BUNDLE)
        self.controller.dispatch(ClerkAction.ADD_TO_BUNDLE, "9780000000011")

        assert self.controller.dispatch(ClerkAction.SAVE_BUNDLE, "   ") is False
        assert self.controller.ledger.active
        assert len(self.controller.ledger) == 1

        with self.session_factory() as session:
            assert session.query(Bundle).count() == 0

    def test_cancel_bundle(self):
        """구성 취소"""
        self.login()
        self.controller.dispatch(ClerkAction.BEGIN_BUNDLE)
        self.controller.dispatch(ClerkAction.ADD_TO_BUNDLE, "9780000000011")
        self.controller.dispatch(ClerkAction.CANCEL_BUNDLE)

        assert not self.controller.ledger.active
        assert self.controller.ledger.total_after_discount == 0


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
