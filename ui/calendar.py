# =============================================================================
# Calendar UI Components for Shift Request Calendar
# =============================================================================

import html
from datetime import date, datetime
from typing import Dict, List

import streamlit as st

from core.calendar_grid import calendar_days
from core.deadline import deadline, is_deadline_passed
from core.services import Services
from core.state import AppState, quick_mode_active
from models.constants import DAY_KIND_COLORS, WEEKDAY_LABELS
from models.data_models import DayCell, Role, Shift
from ui.session import current_actor, dispatch, run_action

def render_month_navigation(state: AppState) -> None:
    """
    Render month navigation controls.
    """
    col1, col2, col3 = st.columns([1, 2, 1])

    with col1:
        if st.button("← 前月", use_container_width=True):
            dispatch("navigate_month", -1)
            st.rerun()

    with col2:
        st.markdown(
            f"<h3 style='text-align:center;margin:0'>{state.year}年 {state.month}月</h3>",
            unsafe_allow_html=True,
        )

    with col3:
        if st.button("次月 →", use_container_width=True):
            dispatch("navigate_month", 1)
            st.rerun()

def render_deadline_banner(state: AppState, now: datetime) -> None:
    """Show the request deadline for the viewed month."""
    due = deadline(state.year, state.month)
    st.info(
        f"{state.year}年{state.month}月分の希望提出期限: "
        f"{due.year}/{due.month}/{due.day} まで"
    )
    if state.role == Role.STAFF and is_deadline_passed(state.year, state.month, now):
        st.error("※ 期限を過ぎているため、希望の提出・変更はできません")

def render_staff_legend(services: Services) -> None:
    st.markdown("#### 👥 受付スタッフ")
    members = services.staff.members()
    if not members:
        st.caption("スタッフが登録されていません")
        return
    chips = "".join(
        f"<span style='display:inline-flex;align-items:center;margin-right:16px'>"
        f"<span style='width:14px;height:14px;border-radius:50%;background:{m.color};"
        f"display:inline-block;margin-right:6px'></span>{html.escape(m.name)}</span>"
        for m in members
    )
    st.markdown(chips, unsafe_allow_html=True)

def _shift_chip(shift: Shift, name: str, color: str) -> str:
    return (
        f"<div style='border:2px solid {color};border-radius:4px;background:white;"
        f"padding:2px 4px;margin:2px 0;font-size:12px;line-height:1.3'>"
        f"<b>{html.escape(name)}</b><br>{shift.time_type.label}<br>"
        f"<span style='color:#6B7280'>{shift.time_range}</span></div>"
    )

def _day_header(cell: DayCell) -> str:
    color = DAY_KIND_COLORS[cell.kind.value] if cell.is_current_month else "#9CA3AF"
    header = f"<div style='font-weight:600;color:{color}'>{cell.date.day}</div>"
    if cell.holiday_name:
        header += (
            f"<div style='font-size:11px;color:{DAY_KIND_COLORS['holiday']}'>"
            f"{html.escape(cell.holiday_name)}</div>"
        )
    return header

def _shifts_by_date(shifts: List[Shift]) -> Dict[date, List[Shift]]:
    grouped: Dict[date, List[Shift]] = {}
    for shift in shifts:
        grouped.setdefault(shift.date, []).append(shift)
    return grouped

def render_calendar(services: Services, state: AppState, now: datetime) -> None:
    """
    Render the month grid. In quick mode each current-month day gets a button
    that toggles the selected staff member's request for the selected slot.
    """
    month = calendar_days(state.year, state.month, services.holidays.lookup())
    shifts = _shifts_by_date(services.shifts.all_shifts())
    quick = quick_mode_active(state, now)
    members = {m.id: m for m in services.staff.members()}

    header_cols = st.columns(7)
    for col, label in zip(header_cols, WEEKDAY_LABELS):
        col.markdown(
            f"<div style='text-align:center;font-weight:600;background:#F3F4F6;padding:6px'>{label}</div>",
            unsafe_allow_html=True,
        )

    for week in month.weeks():
        cols = st.columns(7)
        for col, cell in zip(cols, week):
            with col:
                with st.container(border=True):
                    body = _day_header(cell)
                    for shift in shifts.get(cell.date, []):
                        member = members.get(shift.staff_id)
                        body += _shift_chip(
                            shift,
                            member.name if member else "",
                            member.color if member else services.staff.color_of(shift.staff_id),
                        )
                    st.markdown(body, unsafe_allow_html=True)

                    if quick and cell.is_current_month:
                        _render_quick_toggle(services, state, cell)

def _render_quick_toggle(services: Services, state: AppState, cell: DayCell) -> None:
    existing = services.shifts.find(state.selected_staff_id, cell.date, state.selected_time_type)
    label = "－ 取消" if existing else "＋ 希望"
    if st.button(label, key=f"quick_{cell.date.isoformat()}", use_container_width=True):
        ok = run_action(lambda: services.shifts.toggle(
            state.selected_staff_id, cell.date, state.selected_time_type, current_actor(),
            target_month=(state.year, state.month),
        ))
        if ok:
            st.rerun()
