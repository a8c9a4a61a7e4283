# =============================================================================
# View State and Reducers
# =============================================================================
#
# The UI keeps a single AppState in the Streamlit session. Every UI event is
# handled by one pure reducer returning a new state; shift, staff and holiday
# writes go through the stores instead.

from datetime import date, datetime
from typing import Any, Callable, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict

from core.deadline import can_submit
from core.utils import add_months, validate_month
from models.constants import DEFAULT_STAFF
from models.data_models import Role, ShiftDraft, TimeType

class AppState(BaseModel):
    year: int
    month: int
    role: Role = Role.STAFF
    quick_mode: bool = False
    selected_staff_id: str = DEFAULT_STAFF[0]["id"]
    selected_time_type: TimeType = TimeType.MORNING
    draft: ShiftDraft = ShiftDraft()
    show_request_form: bool = False

    model_config = ConfigDict(frozen=True)

def initial_state(today: date) -> AppState:
    return AppState(year=today.year, month=today.month)

# --- reducers ---------------------------------------------------------------

def navigate_month(state: AppState, direction: int) -> AppState:
    year, month = add_months(state.year, state.month, direction)
    return state.model_copy(update={"year": year, "month": month})

def go_to_month(state: AppState, year: int, month: int) -> AppState:
    validate_month(year, month)
    return state.model_copy(update={"year": year, "month": month})

def switch_role(state: AppState, role: Union[Role, str]) -> AppState:
    role = Role(role)
    # quick mode is a staff-only control
    quick_mode = state.quick_mode if role == Role.STAFF else False
    return state.model_copy(update={"role": role, "quick_mode": quick_mode})

def set_quick_mode(state: AppState, enabled: bool) -> AppState:
    return state.model_copy(update={"quick_mode": bool(enabled)})

def select_staff(state: AppState, staff_id: str) -> AppState:
    return state.model_copy(update={
        "selected_staff_id": staff_id,
        "draft": state.draft.model_copy(update={"staff_id": staff_id}),
    })

def select_time_type(state: AppState, time_type: Union[TimeType, str]) -> AppState:
    time_type = TimeType(time_type)
    return state.model_copy(update={
        "selected_time_type": time_type,
        "draft": state.draft.model_copy(update={"time_type": time_type}),
    })

def edit_draft(state: AppState, **changes: Any) -> AppState:
    if "time_type" in changes:
        changes["time_type"] = TimeType(changes["time_type"])
    draft = ShiftDraft(**{**state.draft.model_dump(), **changes})
    return state.model_copy(update={"draft": draft})

def open_request_form(state: AppState) -> AppState:
    return state.model_copy(update={"show_request_form": True})

def close_request_form(state: AppState) -> AppState:
    return state.model_copy(update={"show_request_form": False})

def reset_draft(state: AppState) -> AppState:
    """Clear the detailed-entry form after a successful submission."""
    return state.model_copy(update={"draft": ShiftDraft(), "show_request_form": False})

REDUCERS: Dict[str, Callable[..., AppState]] = {
    "navigate_month": navigate_month,
    "go_to_month": go_to_month,
    "switch_role": switch_role,
    "set_quick_mode": set_quick_mode,
    "select_staff": select_staff,
    "select_time_type": select_time_type,
    "edit_draft": edit_draft,
    "open_request_form": open_request_form,
    "close_request_form": close_request_form,
    "reset_draft": reset_draft,
}

def reduce(state: AppState, event: str, *args: Any, **kwargs: Any) -> AppState:
    try:
        reducer = REDUCERS[event]
    except KeyError:
        raise ValueError(f"Unknown event: {event}")
    return reducer(state, *args, **kwargs)

# --- selectors --------------------------------------------------------------

def viewed_month(state: AppState) -> date:
    return date(state.year, state.month, 1)

def state_can_submit(state: AppState, now: Optional[datetime]) -> bool:
    return can_submit(state.role, now, state.year, state.month)

def quick_mode_active(state: AppState, now: Optional[datetime]) -> bool:
    """Quick mode only applies to staff while the viewed month is open."""
    return state.role == Role.STAFF and state.quick_mode and state_can_submit(state, now)
