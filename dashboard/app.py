"""서점 점원 워크스테이션 - 메인 페이지"""
import logging
import sys
from pathlib import Path

import streamlit as st

# 프로젝트 루트 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

from bookstore_clerk.config import configure_logging, get_settings
from bookstore_clerk.database import build_database_url, create_engine_for_url, create_session_factory
from bookstore_clerk.pages import browse, bundles, login
from bookstore_clerk.services.clerk_controller import ClerkAction, ClerkController

logger = logging.getLogger(__name__)

st.set_page_config(
    page_title="서점 점원",
    page_icon="📚",
    layout="wide"
)


@st.cache_resource
def get_session_factory():
    """엔진/세션 팩토리 (프로세스당 1개)"""
    settings = get_settings()
    configure_logging(settings)
    engine = create_engine_for_url(build_database_url(settings))
    logger.info("DB 엔진 생성")
    return create_session_factory(engine)


def get_controller() -> ClerkController:
    """브라우저 세션당 컨트롤러 1개"""
    if "controller" not in st.session_state:
        st.session_state["controller"] = ClerkController(get_session_factory())
    return st.session_state["controller"]


try:
    controller = get_controller()
except Exception as e:
    st.error(f"데이터베이스에 연결할 수 없습니다: {e}")
    logger.exception("DB 연결 실패")
    st.stop()

if not controller.is_logged_in:
    login.render(controller)
    st.stop()

settings = get_settings()

with st.sidebar:
    st.markdown(f"**점원 #{controller.clerk_id}**")
    if st.button("다시 로그인", key="btn_relogin"):
        controller.dispatch(ClerkAction.LOGOUT)
        for _key in [k for k in st.session_state.keys() if k != "controller"]:
            del st.session_state[_key]
        st.rerun()

tab_names = ["📚 도서 조회", "🎁 할인 묶음"]
tabs = st.tabs(tab_names)

with tabs[0]:
    browse.render(controller, settings.filter_max_value, settings.request_max_quantity)

with tabs[1]:
    bundles.render(controller)
