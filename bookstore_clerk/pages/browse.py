"""
도서 조회 페이지
================
프리셋/판매 횟수/재고/기간 필터, 검색 결과, 도서 상세, 입고 요청.
"""
import logging

import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from bookstore_clerk.constants import DEFAULT_FROM_DATE, DEFAULT_TO_DATE, REQUEST_DEFAULT_QUANTITY
from bookstore_clerk.core.filters import FilterPreset
from bookstore_clerk.dashboard_utils import fmt_money, render_select_grid, rows_to_df
from bookstore_clerk.services.clerk_controller import ClerkAction, ClerkController

logger = logging.getLogger(__name__)

PRESET_LABELS = {
    FilterPreset.TRENDING: "인기 (재고 부족)",
    FilterPreset.OVERSTOCKED: "재고 과다",
    FilterPreset.CUSTOM: "직접 설정",
}

# 위젯 키 → (값 액션, 토글 액션, metric, side)
FILTER_WIDGETS = {
    "flt_bought_more": (ClerkAction.SET_BOUGHT_MORE, ClerkAction.TOGGLE_BOUGHT_MORE, "bought", "lower"),
    "flt_bought_less": (ClerkAction.SET_BOUGHT_LESS, ClerkAction.TOGGLE_BOUGHT_LESS, "bought", "upper"),
    "flt_stock_more": (ClerkAction.SET_STOCK_MORE, ClerkAction.TOGGLE_STOCK_MORE, "stock", "lower"),
    "flt_stock_less": (ClerkAction.SET_STOCK_LESS, ClerkAction.TOGGLE_STOCK_LESS, "stock", "upper"),
}


def sync_filter_widgets(controller: ClerkController):
    """조정된 필터 값을 위젯 상태에 다시 기록"""
    for key, (_set_action, _toggle_action, metric, side) in FILTER_WIDGETS.items():
        pair = controller.filters.pair(metric)
        st.session_state[key] = getattr(pair, side)
        st.session_state[f"{key}_on"] = getattr(pair, f"{side}_active")
    st.session_state["flt_preset"] = controller.filters.preset


def _dispatch(controller: ClerkController, action, *args):
    try:
        controller.dispatch(action, *args)
    except SQLAlchemyError as e:
        st.session_state["browse_error"] = f"DB 오류: {e}"
        logger.exception("검색 중 DB 오류")
    sync_filter_widgets(controller)


def _on_value_change(controller: ClerkController, key: str):
    _dispatch(controller, FILTER_WIDGETS[key][0], st.session_state[key])


def _on_toggle_change(controller: ClerkController, key: str):
    _dispatch(controller, FILTER_WIDGETS[key][1], st.session_state[f"{key}_on"])


def _on_preset_change(controller: ClerkController):
    _dispatch(controller, ClerkAction.APPLY_PRESET, st.session_state["flt_preset"])


def _render_filters(controller: ClerkController, max_value: int):
    if "flt_preset" not in st.session_state:
        sync_filter_widgets(controller)

    st.radio(
        "프리셋",
        list(FilterPreset),
        format_func=lambda p: PRESET_LABELS[p],
        horizontal=True,
        key="flt_preset",
        on_change=_on_preset_change,
        args=(controller,),
    )

    labels = {
        "flt_bought_more": "판매 횟수 이상",
        "flt_bought_less": "판매 횟수 이하",
        "flt_stock_more": "재고 이상",
        "flt_stock_less": "재고 이하",
    }
    cols = st.columns(len(FILTER_WIDGETS))
    for col, key in zip(cols, FILTER_WIDGETS):
        with col:
            st.checkbox(labels[key], key=f"{key}_on", on_change=_on_toggle_change, args=(controller, key))
            st.number_input(
                labels[key],
                min_value=0,
                max_value=max_value,
                step=1,
                key=key,
                label_visibility="collapsed",
                on_change=_on_value_change,
                args=(controller, key),
            )

    with st.expander("판매 기간"):
        _d1, _d2, _d3 = st.columns([2, 2, 1])
        with _d1:
            from_date = st.date_input("시작일", value=controller.date_range.from_date,
                                      min_value=DEFAULT_FROM_DATE, max_value=DEFAULT_TO_DATE, key="flt_from_date")
        with _d2:
            to_date = st.date_input("종료일", value=controller.date_range.to_date,
                                    min_value=DEFAULT_FROM_DATE, max_value=DEFAULT_TO_DATE, key="flt_to_date")
        with _d3:
            st.markdown("<br>", unsafe_allow_html=True)
            if st.button("기간 적용", key="btn_flt_dates"):
                try:
                    controller.dispatch(ClerkAction.SET_DATE_RANGE, from_date, to_date)
                except ValueError as e:
                    st.warning(str(e))


def _render_detail(controller: ClerkController, max_quantity: int):
    detail = controller.selected
    if detail is None:
        st.caption("목록에서 도서를 선택하세요.")
        return

    st.markdown(f"**{detail.title}**")
    st.markdown(
        f"ISBN: `{detail.isbn}` | 출판사: {detail.publisher or '-'} | 연도: {detail.year or '-'}"
    )
    st.markdown(f"저자: {', '.join(detail.authors) or '-'}")
    st.markdown(f"정가 {fmt_money(detail.price)} | 재고 {detail.quantity}권")

    current = controller.selected_request
    st.markdown(f"내 입고 요청: **{current}권**" if current else "내 입고 요청: 없음")

    with st.form("request_form"):
        quantity = st.number_input(
            "요청 수량",
            min_value=1,
            max_value=max_quantity,
            value=current or REQUEST_DEFAULT_QUANTITY,
            step=1,
        )
        _r1, _r2 = st.columns(2)
        with _r1:
            submit = st.form_submit_button("요청 저장", type="primary")
        with _r2:
            delete = st.form_submit_button("요청 삭제", disabled=current is None)

    if submit:
        if controller.dispatch(ClerkAction.FILL_REQUEST, int(quantity)):
            st.success("입고 요청을 저장했습니다.")
        else:
            st.error("입고 요청 저장 실패")
    if delete:
        if controller.dispatch(ClerkAction.DELETE_REQUEST):
            st.success("입고 요청을 삭제했습니다.")
        else:
            st.error("입고 요청 삭제 실패")


def render(controller: ClerkController, max_value: int, max_quantity: int):
    """조회 탭 렌더링"""
    st.subheader("도서 조회")
    _render_filters(controller, max_value)

    _error = st.session_state.pop("browse_error", None)
    if _error:
        st.error(_error)

    st.caption(controller.status_message)
    _grid_col, _detail_col = st.columns([3, 2])
    with _grid_col:
        selected_row = render_select_grid(rows_to_df(controller.rows), key="browse_grid")

    selected_isbn = selected_row["ISBN"] if selected_row else None
    current_isbn = controller.selected.isbn if controller.selected else None
    if selected_isbn != current_isbn:
        try:
            controller.dispatch(ClerkAction.SELECT_BOOK, selected_isbn)
        except SQLAlchemyError as e:
            st.error(f"DB 오류: {e}")
            logger.exception("도서 상세 조회 오류")

    with _detail_col:
        _render_detail(controller, max_quantity)
