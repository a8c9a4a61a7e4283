# =============================================================================
# Shift Request UI Components
# =============================================================================

from datetime import datetime

import streamlit as st

from core.services import Services
from core.state import AppState, state_can_submit
from models.data_models import Role, TimeType
from ui.session import current_actor, dispatch, get_state, run_action

def render_quick_mode_panel(services: Services, state: AppState, now: datetime) -> None:
    """Staff-only controls for toggling requests directly on the calendar."""
    if state.role != Role.STAFF:
        return

    allowed = state_can_submit(state, now)
    enabled = st.checkbox(
        "カレンダーで直接選択",
        value=state.quick_mode and allowed,
        disabled=not allowed,
        key="quick_mode_checkbox",
    )
    if enabled != state.quick_mode and allowed:
        state = dispatch("set_quick_mode", enabled)

    if not (state.quick_mode and allowed):
        return

    members = services.staff.members()
    if not members:
        st.warning("スタッフが登録されていません")
        return

    member_ids = [m.id for m in members]
    names = {m.id: m.name for m in members}
    col1, col2 = st.columns([1, 2])
    with col1:
        staff_id = st.selectbox(
            "スタッフ",
            options=member_ids,
            index=member_ids.index(state.selected_staff_id) if state.selected_staff_id in member_ids else 0,
            format_func=lambda sid: names[sid],
            key="quick_staff",
        )
        if staff_id != state.selected_staff_id:
            state = dispatch("select_staff", staff_id)
    with col2:
        slots = list(TimeType)
        time_type = st.radio(
            "時間帯",
            options=slots,
            index=slots.index(state.selected_time_type),
            format_func=lambda t: t.label,
            horizontal=True,
            key="quick_time_type",
        )
        if time_type != state.selected_time_type:
            state = dispatch("select_time_type", time_type)

    slot = state.selected_time_type
    st.markdown(
        f"**設定:** {names.get(state.selected_staff_id, '')} - {slot.label} ({slot.start}-{slot.end})"
    )
    st.caption("💡 カレンダーの日付のボタンで希望を追加/削除")

def render_request_form(services: Services, state: AppState, now: datetime) -> None:
    """Detailed request entry (希望提出)."""
    disabled = state.role == Role.STAFF and not state_can_submit(state, now)

    if not state.show_request_form:
        if st.button("＋ 希望提出", type="primary", disabled=disabled):
            dispatch("open_request_form")
            st.rerun()
        return

    members = services.staff.members()
    if not members:
        st.warning("スタッフが登録されていません")
        return
    member_ids = [m.id for m in members]
    names = {m.id: m.name for m in members}
    draft = state.draft

    with st.form("request_form"):
        st.subheader("📝 希望提出")
        staff_id = st.selectbox(
            "スタッフ",
            options=member_ids,
            index=member_ids.index(draft.staff_id) if draft.staff_id in member_ids else 0,
            format_func=lambda sid: names[sid],
        )
        day = st.date_input("日付", value=draft.date)
        slots = list(TimeType)
        time_type = st.selectbox(
            "時間帯",
            options=slots,
            index=slots.index(draft.time_type),
            format_func=lambda t: f"{t.label} ({t.start}-{t.end})",
        )
        notes = st.text_area("備考", value=draft.notes, placeholder="特記事項があれば入力してください")

        col1, col2 = st.columns(2)
        submitted = col1.form_submit_button("💾 保存", type="primary")
        cancelled = col2.form_submit_button("閉じる")

    if cancelled:
        dispatch("close_request_form")
        st.rerun()

    if submitted:
        state = dispatch("edit_draft", staff_id=staff_id, date=day, time_type=time_type, notes=notes)
        submit = lambda: services.shifts.add_detailed(
            get_state().draft, current_actor(), target_month=(state.year, state.month))
        ok = run_action(submit, success="希望を提出しました")
        if ok:
            dispatch("reset_draft")
            st.rerun()
