"""Helpers for initializing Streamlit session state."""
from __future__ import annotations

import streamlit as st

SESSION_DEFAULTS = {
    "recipe_url": "",
    "imported_recipe": None,
    "import_error": "",
}


def initialize_session_state() -> None:
    """Ensure Streamlit session state contains the expected keys."""
    for key, value in SESSION_DEFAULTS.items():
        st.session_state.setdefault(key, value)


def reset_import_state() -> None:
    """Forget the previous import result before a new attempt."""
    st.session_state.imported_recipe = None
    st.session_state.import_error = ""


__all__ = ["initialize_session_state", "reset_import_state", "SESSION_DEFAULTS"]
