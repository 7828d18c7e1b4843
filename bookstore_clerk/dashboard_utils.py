"""
대시보드 공통 유틸리티
=====================
검색 결과 → DataFrame 변환, 금액 포맷, AgGrid 래퍼 등 모든 페이지에서 공유하는 함수.
"""
from typing import List, Optional, Sequence

import pandas as pd
import streamlit as st
from st_aggrid import AgGrid, GridOptionsBuilder

from bookstore_clerk.core.ledger import BundleItem, format_money
from bookstore_clerk.services.book_search import BookStat


# ─── DataFrame 변환 ───

def rows_to_df(rows: Sequence[BookStat]) -> pd.DataFrame:
    """검색 결과 → 표시용 DataFrame"""
    return pd.DataFrame(
        [(r.isbn, r.sold_count, r.quantity) for r in rows],
        columns=["ISBN", "판매 횟수", "재고"],
    )


def ledger_to_df(items: Sequence[BundleItem]) -> pd.DataFrame:
    """묶음 항목 → 표시용 DataFrame"""
    return pd.DataFrame(
        [
            (
                i,
                item.isbn,
                format_money(item.list_price),
                f"{item.discount * 100:.1f}%",
                format_money(item.discounted_price),
            )
            for i, item in enumerate(items)
        ],
        columns=["#", "ISBN", "정가", "할인", "할인가"],
    )


# ─── 포맷터 ───

def fmt_money(val) -> str:
    """$12.50 형식 금액"""
    return f"${format_money(val)}"


# ─── AgGrid 래퍼 ───

def render_select_grid(df: pd.DataFrame, key: str, height: int = 400, page_size: int = 20) -> Optional[dict]:
    """
    단일 행 선택 AgGrid

    Returns:
        선택된 행 딕셔너리 또는 None
    """
    gb = GridOptionsBuilder.from_dataframe(df)
    gb.configure_pagination(paginationAutoPageSize=False, paginationPageSize=page_size)
    gb.configure_default_column(resizable=True, sortable=True, filterable=True)
    gb.configure_selection(selection_mode="single", use_checkbox=False)
    grid = AgGrid(
        df,
        gridOptions=gb.build(),
        update_on=["selectionChanged"],
        height=height,
        theme="streamlit",
        key=key,
    )

    selected = grid["selected_rows"]
    if selected is None or len(selected) == 0:
        return None
    if isinstance(selected, pd.DataFrame):
        return selected.iloc[0].to_dict()
    return dict(selected[0])


# ─── KPI 카드 ───

def render_kpi_row(metrics: List[tuple]):
    """
    KPI 카드 행 렌더링.
    metrics: [(label, value, delta?), ...]
    """
    cols = st.columns(len(metrics))
    for col, item in zip(cols, metrics):
        label, value = item[0], item[1]
        delta = item[2] if len(item) > 2 else None
        col.metric(label, value, delta=delta)
