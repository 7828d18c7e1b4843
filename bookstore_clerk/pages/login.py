"""
로그인 페이지
=============
점원 ID + 비밀번호 확인. 실패 시 재시도 여부를 묻는다.
"""
import logging

import streamlit as st
from sqlalchemy.exc import SQLAlchemyError

from bookstore_clerk.services.auth import hash_password
from bookstore_clerk.services.clerk_controller import ClerkAction, ClerkController

logger = logging.getLogger(__name__)


def render(controller: ClerkController):
    st.title("점원 로그인")

    if st.session_state.get("login_failed"):
        st.error("입력한 자격 증명과 일치하는 점원이 없습니다. 다시 시도하시겠습니까?")
        _retry_col, _cancel_col, _ = st.columns([1, 1, 4])
        with _retry_col:
            if st.button("다시 시도", type="primary", key="btn_login_retry"):
                st.session_state["login_failed"] = False
                st.rerun()
        with _cancel_col:
            if st.button("취소", key="btn_login_cancel"):
                st.session_state["login_failed"] = False
                st.session_state["login_cancelled"] = True
                st.rerun()
        return

    if st.session_state.get("login_cancelled"):
        st.info("로그인이 취소되었습니다.")
        if st.button("로그인", key="btn_login_again"):
            st.session_state["login_cancelled"] = False
            st.rerun()
        return

    with st.form("login_form", clear_on_submit=True):
        clerk_id = st.text_input("점원 ID")
        password = st.text_input("비밀번호", type="password")
        submitted = st.form_submit_button("로그인", type="primary")

    if submitted:
        try:
            ok = controller.dispatch(ClerkAction.LOGIN, clerk_id, hash_password(password))
        except SQLAlchemyError as e:
            st.error(f"DB 오류: {e}")
            logger.exception("로그인 중 DB 오류")
            return

        if ok:
            st.rerun()
        else:
            st.session_state["login_failed"] = True
            st.rerun()
