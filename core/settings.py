"""
Runtime settings for the shift request calendar.

Resolved in order: environment variables, then Streamlit secrets, then the
defaults in ``models/constants.py``.

Example ``.streamlit/secrets.toml``::

    [shift_app]
    backend = "firestore"

    [firestore]
    project_id = "my-project"
    # remaining service account fields ...
"""
import logging
import os
from typing import Any, Dict, Optional

import streamlit as st
from streamlit.errors import StreamlitAPIException

from models.constants import (
    APP_TIMEZONE, BACKEND_FIRESTORE, BACKEND_JSON, BACKEND_MEMORY, DATA_DIR, DEFAULT_BACKEND,
)
from models.data_models import AppSettings
from core.exceptions import ValidationError

logger = logging.getLogger(__name__)

VALID_BACKENDS = (BACKEND_MEMORY, BACKEND_JSON, BACKEND_FIRESTORE)

def _read_secrets() -> Dict[str, Any]:
    # no secrets.toml: FileNotFoundError, or StreamlitAPIException on newer releases
    try:
        return {key: st.secrets[key] for key in st.secrets}
    except (FileNotFoundError, KeyError, StreamlitAPIException) as e:
        logger.debug(f"No Streamlit secrets available: {e}")
        return {}

def load_settings(secrets: Optional[Dict[str, Any]] = None) -> AppSettings:
    """Build AppSettings from env vars and Streamlit secrets."""
    secrets = _read_secrets() if secrets is None else secrets
    app_section = dict(secrets.get("shift_app", {}) or {})
    firestore_section = dict(secrets.get("firestore", {}) or {})

    backend = (os.environ.get("SHIFT_BACKEND") or app_section.get("backend") or DEFAULT_BACKEND).strip().lower()
    if backend not in VALID_BACKENDS:
        raise ValidationError(f"Unknown backend '{backend}'. Use one of: {', '.join(VALID_BACKENDS)}")

    return AppSettings(
        backend=backend,
        data_dir=os.environ.get("SHIFT_DATA_DIR") or app_section.get("data_dir") or DATA_DIR,
        timezone=os.environ.get("SHIFT_TIMEZONE") or app_section.get("timezone") or APP_TIMEZONE,
        firestore_project=(os.environ.get("GOOGLE_CLOUD_PROJECT")
                           or firestore_section.get("project_id")),
        firestore_credentials=firestore_section,
    )
