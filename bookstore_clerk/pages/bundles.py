"""
묶음 관리 페이지
================
묶음 구성 시작/취소/저장, 선택 도서 추가, 항목별 할인율, 누적 합계, 저장된 묶음 목록.
"""
import logging

import pandas as pd
import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from bookstore_clerk.core.ledger import BundleItem
from bookstore_clerk.dashboard_utils import fmt_money, ledger_to_df, render_kpi_row
from bookstore_clerk.exceptions import DuplicateItem, InvalidDiscount
from bookstore_clerk.services.clerk_controller import ClerkAction, ClerkController
from bookstore_clerk.utils.validators import BundleValidator

logger = logging.getLogger(__name__)


def discount_widget_key(item: BundleItem) -> str:
    """항목별 할인율 입력 위젯 키 (ISBN 기준)"""
    return f"bundle_pct_{item.isbn}"


def _clear_item_widgets():
    """항목별 할인율 위젯 상태 제거"""
    for key in [k for k in st.session_state.keys() if str(k).startswith("bundle_pct_")]:
        del st.session_state[key]
    st.session_state.pop("bundle_item_idx", None)


def _render_builder(controller: ClerkController):
    ledger = controller.ledger
    items = ledger.items()

    render_kpi_row([
        ("구성 도서", f"{len(items)}권"),
        ("할인 후 합계", fmt_money(ledger.total_after_discount)),
        ("절감액", fmt_money(ledger.total_savings)),
    ])

    _a1, _a2 = st.columns([3, 1])
    with _a1:
        if controller.selected:
            st.markdown(f"선택 도서: **{controller.selected.title}** (`{controller.selected.isbn}`)")
        else:
            st.caption("조회 탭에서 도서를 선택하면 묶음에 추가할 수 있습니다.")
    with _a2:
        if st.button("선택 도서 추가", disabled=controller.selected is None, key="btn_bundle_add"):
            try:
                controller.dispatch(ClerkAction.ADD_TO_BUNDLE)
                st.rerun()
            except DuplicateItem as e:
                st.warning(e.message)

    if not items:
        st.info("묶음이 비어 있습니다.")
    else:
        st.dataframe(ledger_to_df(items), hide_index=True, width="stretch")

        _e1, _e2, _e3, _e4 = st.columns([3, 2, 1, 1])
        with _e1:
            index = st.selectbox(
                "항목",
                range(len(items)),
                format_func=lambda i: f"{i}: {items[i].isbn}",
                key="bundle_item_idx",
            )
        with _e2:
            percent = st.number_input(
                "할인율 (%)", min_value=0.0, max_value=100.0, step=5.0,
                value=float(items[index].discount * 100), key=discount_widget_key(items[index]),
            )
        with _e3:
            st.markdown("<br>", unsafe_allow_html=True)
            if st.button("할인 적용", key="btn_bundle_disc"):
                fraction, err = BundleValidator().validate_discount_percent(percent)
                if err:
                    st.warning(err.message)
                else:
                    try:
                        controller.dispatch(ClerkAction.SET_BUNDLE_DISCOUNT, index, fraction)
                        st.rerun()
                    except InvalidDiscount as e:
                        st.warning(e.message)
        with _e4:
            st.markdown("<br>", unsafe_allow_html=True)
            if st.button("항목 제거", key="btn_bundle_remove"):
                removed = controller.dispatch(ClerkAction.REMOVE_FROM_BUNDLE, index)
                st.session_state.pop("bundle_item_idx", None)
                st.session_state.pop(discount_widget_key(removed), None)
                st.rerun()

    st.divider()
    with st.form("bundle_save_form"):
        name = st.text_input("묶음 이름")
        comment = st.text_area("설명")
        _s1, _s2 = st.columns(2)
        with _s1:
            save = st.form_submit_button("묶음 저장", type="primary", disabled=not items)
        with _s2:
            cancel = st.form_submit_button("구성 취소")

    if save:
        if controller.dispatch(ClerkAction.SAVE_BUNDLE, name, comment):
            st.success(f"묶음 '{name.strip()}'을(를) 저장했습니다.")
            _clear_item_widgets()
            st.rerun()
        else:
            st.error("묶음 저장 실패 - 구성은 그대로 남아 있습니다.")
    if cancel:
        controller.dispatch(ClerkAction.CANCEL_BUNDLE)
        _clear_item_widgets()
        st.rerun()


def _render_saved(controller: ClerkController):
    st.markdown("#### 저장된 묶음")
    try:
        saved = controller.bundles.list_bundles()
    except SQLAlchemyError as e:
        st.error(f"DB 오류: {e}")
        logger.exception("묶음 목록 조회 오류")
        return

    if not saved:
        st.caption("저장된 묶음이 없습니다.")
        return

    st.dataframe(
        pd.DataFrame(
            [
                (
                    b.id,
                    b.name,
                    b.comment or "",
                    len(b.items),
                    fmt_money(b.list_total),
                    fmt_money(b.sale_total),
                    ", ".join(f"{isbn} ({discount * 100:.0f}%)" for isbn, discount in b.items),
                    b.created_at.strftime("%Y-%m-%d %H:%M") if b.created_at else "-",
                )
                for b in saved
            ],
            columns=["ID", "이름", "설명", "권수", "정가 합계", "판매가 합계", "구성", "작성일"],
        ),
        hide_index=True,
        width="stretch",
    )


def render(controller: ClerkController):
    """묶음 탭 렌더링"""
    st.subheader("할인 묶음")

    if controller.ledger.active:
        _render_builder(controller)
    elif st.button("새 묶음 구성", type="primary", key="btn_bundle_begin"):
        controller.dispatch(ClerkAction.BEGIN_BUNDLE)
        st.rerun()

    st.divider()
    _render_saved(controller)
