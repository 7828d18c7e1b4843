"""UI와 분리된 점원 상태 로직"""
from bookstore_clerk.core.filters import (
    EffectiveQueryBounds,
    FilterPreset,
    FilterRangeReconciler,
    RangePair,
)
from bookstore_clerk.core.ledger import BundleItem, BundleLedger, format_money, to_decimal

__all__ = [
    "EffectiveQueryBounds",
    "FilterPreset",
    "FilterRangeReconciler",
    "RangePair",
    "BundleItem",
    "BundleLedger",
    "format_money",
    "to_decimal",
]
