# =============================================================================
# Holiday Management UI Components
# =============================================================================

import streamlit as st

from core.services import Services
from core.state import AppState
from ui.session import current_actor, run_action

def holidays_panel(services: Services, state: AppState) -> None:
    """Administrator panel for custom holidays layered over the public ones."""
    st.header("🎌 休日管理")

    with st.form("add_holiday_form", clear_on_submit=True):
        col1, col2 = st.columns(2)
        with col1:
            day = st.date_input("日付", value=None)
        with col2:
            name = st.text_input("名称", placeholder="例: 年末休診")
        if st.form_submit_button("➕ 休日を追加", type="primary"):
            if run_action(lambda: services.holidays.add_custom(day, name, current_actor()),
                          success="休日を追加しました"):
                st.rerun()

    st.subheader(f"📅 {state.year}年{state.month}月の休日")
    month_holidays = services.holidays.holidays_in_month(state.year, state.month)
    if month_holidays:
        for day, name in month_holidays.items():
            st.write(f"**{day.month}/{day.day}**: {name}")
    else:
        st.caption("この月の休日はありません")

    st.subheader("✏️ 追加した休日")
    custom = services.holidays.custom_holidays()
    if not custom:
        st.caption("追加された休日はありません")
        return

    for holiday in custom:
        col1, col2 = st.columns([4, 1])
        with col1:
            st.write(f"{holiday.date.isoformat()}: {holiday.name}")
        with col2:
            if st.button("🗑️ 削除", key=f"remove_holiday_{holiday.id}"):
                if run_action(lambda: services.holidays.remove_custom(holiday.date, current_actor()),
                              success="休日を削除しました"):
                    st.rerun()
