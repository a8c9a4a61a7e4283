# =============================================================================
# Shift Deletion and Restore UI Components
# =============================================================================

import streamlit as st

from core.services import Services
from core.state import AppState
from ui.session import current_actor, run_action

def shift_list_panel(services: Services, state: AppState) -> None:
    """Requests for the viewed month, each with a delete button."""
    st.header(f"📋 {state.year}年{state.month}月の希望一覧")
    shifts = services.shifts.shifts_for_month(state.year, state.month)
    if not shifts:
        st.info("この月の希望はまだありません")
        return

    for shift in shifts:
        col1, col2, col3, col4 = st.columns([2, 2, 3, 1])
        with col1:
            st.write(shift.date.isoformat())
        with col2:
            st.write(f"{services.staff.name_of(shift.staff_id) or shift.staff_id}")
        with col3:
            st.write(f"{shift.time_type.label} ({shift.time_range}) {shift.notes}")
        with col4:
            if st.button("🗑️", key=f"remove_shift_{shift.id}", help="この希望を削除"):
                remove = lambda: services.shifts.remove(
                    shift.id, current_actor(), target_month=(state.year, state.month))
                if run_action(remove, success="希望を削除しました"):
                    st.rerun()

def deleted_history_panel(services: Services, state: AppState) -> None:
    """Deleted requests, newest first, with restore buttons."""
    st.header("♻️ 削除履歴")
    history = services.shifts.deleted_shifts()
    if not history:
        st.info("削除された希望はありません")
        return

    for record in history:
        shift = record.shift
        col1, col2, col3 = st.columns([3, 3, 1])
        with col1:
            st.write(
                f"**{shift.date.isoformat()}** {services.staff.name_of(shift.staff_id) or shift.staff_id} "
                f"{shift.time_type.label}"
            )
        with col2:
            st.caption(f"削除: {record.deleted_at:%Y-%m-%d %H:%M} ({record.deleted_by or '-'})")
        with col3:
            if st.button("復元", key=f"restore_{record.id}"):
                restore = lambda: services.shifts.restore(
                    record, current_actor(), target_month=(state.year, state.month))
                if run_action(restore, success="希望を復元しました"):
                    st.rerun()
