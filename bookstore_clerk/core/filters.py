"""
필터 범위 조정 모듈
==================
판매 횟수 / 재고 수량 필터의 "이상"(하한)과 "이하"(상한) 값을 항상
하한 ≤ 상한 으로 유지하고, 검색 쿼리에 넘길 실효 범위를 계산

사용법:
    reconciler = FilterRangeReconciler()
    reconciler.set_lower_bound("bought", 15)
    reconciler.set_lower_active("bought", True)
    params = reconciler.effective_bounds().as_params()

    reconciler.apply_preset(FilterPreset.TRENDING)
"""
import logging
from dataclasses import dataclass, asdict
from enum import Enum
from typing import Dict, Optional, Tuple

from bookstore_clerk.constants import FILTER_PRESETS, OPEN_LOWER_BOUND, OPEN_UPPER_BOUND

logger = logging.getLogger(__name__)


class FilterPreset(str, Enum):
    """필터 프리셋"""
    TRENDING = "trending"          # 잘 팔리는데 재고가 적은 책
    OVERSTOCKED = "overstocked"    # 안 팔리는데 재고가 많은 책
    CUSTOM = "custom"              # 점원이 직접 조정 중


@dataclass(frozen=True)
class EffectiveQueryBounds:
    """검색 쿼리에 바인딩할 실효 범위"""
    from_bought: int
    to_bought: int
    from_stock: int
    to_stock: int

    def as_params(self) -> Dict[str, int]:
        """바인드 파라미터 딕셔너리"""
        return asdict(self)


class RangePair:
    """
    하한/상한 한 쌍

    lower 쪽이 "N 이상" 컨트롤, upper 쪽이 "N 이하" 컨트롤.
    한쪽 값을 바꾸면 순서가 깨지지 않도록 반대쪽을 끌어온다.
    """

    def __init__(
        self,
        lower: int = OPEN_LOWER_BOUND,
        upper: int = OPEN_UPPER_BOUND,
        lower_active: bool = False,
        upper_active: bool = False,
    ):
        if lower > upper:
            raise ValueError(f"하한이 상한보다 큽니다: {lower} > {upper}")
        self.lower = int(lower)
        self.upper = int(upper)
        self.lower_active = bool(lower_active)
        self.upper_active = bool(upper_active)

    def __repr__(self):
        return (
            f"<RangePair([{self.lower}, {self.upper}], "
            f"lower_active={self.lower_active}, upper_active={self.upper_active})>"
        )

    def set_lower_bound(self, value: int):
        self.lower = int(value)
        if self.lower > self.upper:
            self.upper = self.lower

    def set_upper_bound(self, value: int):
        self.upper = int(value)
        if self.upper < self.lower:
            self.lower = self.upper

    def set_lower_active(self, flag: bool):
        """이상 쪽을 켜면 이하 값은 그보다 작을 수 없음"""
        self.lower_active = bool(flag)
        if self.lower_active:
            self.upper = max(self.upper, self.lower)

    def set_upper_active(self, flag: bool):
        """이하 쪽을 켜면 이상 값은 그보다 클 수 없음"""
        self.upper_active = bool(flag)
        if self.upper_active:
            self.lower = min(self.lower, self.upper)

    def effective(self) -> Tuple[int, int]:
        """비활성 쪽은 열린 범위 값으로 대체"""
        lower = self.lower if self.lower_active else OPEN_LOWER_BOUND
        upper = self.upper if self.upper_active else OPEN_UPPER_BOUND
        return lower, upper

    def _write(self, lower: Optional[int], upper: Optional[int]):
        """프리셋 기록 (클램핑 없음)"""
        self.lower_active = lower is not None
        self.upper_active = upper is not None
        if lower is not None:
            self.lower = int(lower)
        if upper is not None:
            self.upper = int(upper)

    def _settle(self, keep_lower: bool):
        """순서 재검증 - keep_lower면 상한을, 아니면 하한을 움직인다"""
        if self.lower > self.upper:
            if keep_lower:
                self.upper = self.lower
            else:
                self.lower = self.upper


class FilterRangeReconciler:
    """
    판매 횟수(bought) / 재고(stock) 필터 조정기

    Attributes:
        bought: 판매 횟수 범위
        stock: 재고 수량 범위
        preset: 마지막으로 적용된 프리셋 (수동 조정 시 CUSTOM)
    """

    METRICS = ("bought", "stock")

    def __init__(self):
        self.bought = RangePair()
        self.stock = RangePair()
        self.preset = FilterPreset.CUSTOM

    def pair(self, metric: str) -> RangePair:
        if metric not in self.METRICS:
            raise KeyError(f"알 수 없는 필터: {metric}")
        return getattr(self, metric)

    # ─── 수동 조정 ───

    def set_lower_bound(self, metric: str, value: int):
        self.pair(metric).set_lower_bound(value)
        self._mark_custom(metric)

    def set_upper_bound(self, metric: str, value: int):
        self.pair(metric).set_upper_bound(value)
        self._mark_custom(metric)

    def set_lower_active(self, metric: str, flag: bool):
        self.pair(metric).set_lower_active(flag)
        self._mark_custom(metric)

    def set_upper_active(self, metric: str, flag: bool):
        self.pair(metric).set_upper_active(flag)
        self._mark_custom(metric)

    def _mark_custom(self, metric: str):
        self.preset = FilterPreset.CUSTOM
        logger.debug(f"필터 변경: {metric}={self.pair(metric)!r}")

    # ─── 프리셋 ───

    def apply_preset(self, preset) -> FilterPreset:
        """
        프리셋 적용

        네 필드를 먼저 모두 기록한 뒤 순서를 재검증한다.
        재검증은 프리셋이 지정하지 않은 쪽만 움직이므로 프리셋 값은 그대로 남는다.

        Args:
            preset: FilterPreset 또는 그 값 문자열

        Returns:
            적용된 FilterPreset

        Raises:
            ValueError: 알 수 없는 프리셋
        """
        preset = FilterPreset(preset)
        if preset is FilterPreset.CUSTOM:
            self.preset = preset
            return preset

        targets = FILTER_PRESETS[preset.value]
        for metric, (lower, upper) in targets.items():
            self.pair(metric)._write(lower, upper)
        for metric, (lower, _upper) in targets.items():
            self.pair(metric)._settle(keep_lower=lower is not None)

        self.preset = preset
        logger.debug(f"프리셋 적용: {preset.value} bought={self.bought!r} stock={self.stock!r}")
        return preset

    # ─── 쿼리 범위 ───

    def effective_bounds(self) -> EffectiveQueryBounds:
        from_bought, to_bought = self.bought.effective()
        from_stock, to_stock = self.stock.effective()
        return EffectiveQueryBounds(
            from_bought=from_bought,
            to_bought=to_bought,
            from_stock=from_stock,
            to_stock=to_stock,
        )
