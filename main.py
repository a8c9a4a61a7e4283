# =============================================================================
# Shift Request Calendar - Main Application
# =============================================================================
import logging
import traceback

import streamlit as st

# Import our modular components with error handling
try:
    from models.constants import APP_TITLE, ROLE_LABELS
    from models.data_models import AppSettings, Role
except ImportError as e:
    st.error(f"Failed to import models: {e}")
    st.stop()

try:
    from core.exceptions import ShiftAppError
    from core.services import Services, build_services
    from core.settings import load_settings
except ImportError as e:
    st.error(f"Failed to import core modules: {e}")
    st.stop()

try:
    from ui.calendar import (
        render_calendar, render_deadline_banner, render_month_navigation, render_staff_legend,
    )
    from ui.data_status import render_data_status
    from ui.history import deleted_history_panel, shift_list_panel
    from ui.holidays import holidays_panel
    from ui.requests import render_quick_mode_panel, render_request_form
    from ui.session import dispatch, get_state, init_session
    from ui.staff import staff_panel
except ImportError as e:
    st.error(f"Failed to import UI components: {e}")
    st.stop()

# Page configuration
st.set_page_config(
    page_title=APP_TITLE,
    page_icon="📅",
    layout="wide",
    initial_sidebar_state="collapsed"
)

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

@st.cache_resource
def get_settings() -> AppSettings:
    return load_settings()

@st.cache_resource
def get_services() -> Services:
    """Stores shared by every browser session of this server process."""
    services = build_services(get_settings())
    # keep live snapshots for backends that support them
    services.staff.subscribe(lambda members: logger.debug(f"staff: {len(members)}"))
    services.shifts.subscribe(lambda shifts: logger.debug(f"shifts: {len(shifts)}"))
    services.shifts.subscribe_deleted(lambda history: logger.debug(f"deleted: {len(history)}"))
    services.holidays.subscribe(lambda docs: logger.debug(f"custom holidays: {len(docs)}"))
    return services

def render_header() -> None:
    """Title row with the role switch and refresh button."""
    state = get_state()
    col1, col2, col3 = st.columns([4, 1, 1])
    with col1:
        st.title(f"📅 {APP_TITLE}")
    with col2:
        roles = list(Role)
        role = st.selectbox(
            "👤 ロール",
            options=roles,
            index=roles.index(state.role),
            format_func=lambda r: ROLE_LABELS[r.value],
            key="role_select",
        )
        if role != state.role:
            dispatch("switch_role", role)
            st.rerun()
    with col3:
        st.write("")
        if st.button("🔄 更新", use_container_width=True):
            st.rerun()

def render_calendar_view(services: Services) -> None:
    now = services.shifts.clock()
    state = get_state()

    render_request_form(services, state, now)
    render_quick_mode_panel(services, get_state(), now)
    render_deadline_banner(get_state(), now)
    render_month_navigation(get_state())
    render_staff_legend(services)
    render_calendar(services, get_state(), now)

def render_interface(services: Services, settings: AppSettings) -> None:
    render_header()
    state = get_state()

    if state.role != Role.ADMIN:
        render_calendar_view(services)
        return

    tab1, tab2, tab3, tab4, tab5 = st.tabs([
        "📅 カレンダー", "📋 希望一覧", "👥 スタッフ", "🎌 休日", "📊 集計",
    ])
    with tab1:
        render_calendar_view(services)
    with tab2:
        shift_list_panel(services, get_state())
        st.markdown("---")
        deleted_history_panel(services, get_state())
    with tab3:
        staff_panel(services)
    with tab4:
        holidays_panel(services, get_state())
    with tab5:
        render_data_status(services, get_state(), settings)

def main():
    """Main application function."""
    try:
        settings = get_settings()
        services = get_services()
        init_session(services)
    except ShiftAppError as e:
        st.error(f"Failed to initialize application: {e}")
        st.stop()

    try:
        render_interface(services, settings)
    except ShiftAppError as e:
        st.error(str(e))
    except Exception as e:
        logger.error(f"Failed to render interface: {e}", exc_info=True)
        st.error(f"Failed to render interface: {e}")
        st.error(f"Error details: {traceback.format_exc()}")

if __name__ == "__main__":
    main()
