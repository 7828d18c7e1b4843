"""비즈니스 상수 - 매직넘버 중앙 관리"""
from datetime import date

# ─────────────────────────────────────────────
# 검색 필터 (판매량/재고 범위)
# ─────────────────────────────────────────────
OPEN_LOWER_BOUND = 0      # 하한 비활성 시 사용하는 값
OPEN_UPPER_BOUND = 9000   # 상한 비활성 시 사용하는 값 (스핀박스 최대치와 동일)

# 기본 구매 이력 조회 기간 (사실상 전체 기간)
DEFAULT_FROM_DATE = date(1, 1, 1)
DEFAULT_TO_DATE = date(3000, 12, 12)

# 프리셋 정의: metric → (하한, 상한), None이면 해당 쪽 비활성
FILTER_PRESETS = {
    "trending": {
        "stock": (None, 10),    # 재고 10권 이하
        "bought": (15, None),   # 15회 이상 판매
    },
    "overstocked": {
        "stock": (10, None),    # 재고 10권 이상
        "bought": (None, 5),    # 5회 이하 판매
    },
}

# ─────────────────────────────────────────────
# 묶음 (번들) 가격
# ─────────────────────────────────────────────
MONEY_PLACES = 2            # 표시용 소수 자릿수
MIN_DISCOUNT = 0            # 할인율 하한 (0 = 0%)
MAX_DISCOUNT = 1            # 할인율 상한 (1 = 100%)
DISCOUNT_PLACES = 3         # 저장 가능한 할인율 소수 자릿수 (bundle_book.discount)

# ─────────────────────────────────────────────
# 입고 요청
# ─────────────────────────────────────────────
REQUEST_MIN_QUANTITY = 1
REQUEST_DEFAULT_QUANTITY = 1

# ─────────────────────────────────────────────
# 타임아웃 설정
# ─────────────────────────────────────────────
TIMEOUT_CONFIG = {
    "db_busy": 30000,           # SQLite busy 타임아웃 (ms)
    "db_connect": 30,           # DB 연결 타임아웃 (초)
}
