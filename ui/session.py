# =============================================================================
# Session Helpers for the Streamlit UI
# =============================================================================

import logging
from typing import Any, Callable, Optional

import streamlit as st

from core.exceptions import ShiftAppError
from core.identity import make_actor, new_session_uid
from core.services import Services
from core.state import AppState, initial_state, reduce
from models.data_models import Actor

logger = logging.getLogger(__name__)

def init_session(services: Services) -> None:
    """Create the per-session state on first run."""
    if "session_uid" not in st.session_state:
        st.session_state.session_uid = new_session_uid()
    if "app_state" not in st.session_state:
        st.session_state.app_state = initial_state(services.shifts.clock().date())

def get_state() -> AppState:
    return st.session_state.app_state

def dispatch(event: str, *args: Any, **kwargs: Any) -> AppState:
    """Run one reducer against the session state and store the result."""
    st.session_state.app_state = reduce(get_state(), event, *args, **kwargs)
    return st.session_state.app_state

def current_actor() -> Actor:
    return make_actor(st.session_state.session_uid, get_state().role)

def run_action(action: Callable[[], Any], success: Optional[str] = None) -> bool:
    """
    Run a store mutation, showing any ShiftAppError as an error message.
    Returns True when the action succeeded.
    """
    try:
        action()
    except ShiftAppError as e:
        logger.warning(f"Action rejected: {e}")
        st.error(str(e))
        return False
    if success:
        st.toast(success)
    return True
