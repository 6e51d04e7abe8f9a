"""
Farmer Registry - Main Entry Point
Farmer registration with admin dashboards behind demo authentication

VERSION: 2.0.0
DATE: October 2026
CHANGES FROM V1.1.0:
- Path-based routing guarded on every run (sign-in, sign-up, profile,
  dashboard, farmers grid, registration)
- Session store constructed explicitly and kept in this browser session
- Farmer data comes from the configured farmer store (JSON file by default)
"""
import logging

import streamlit as st

from auth.guard import (
    DASHBOARD_PATH,
    FARMERS_PATH,
    PLACEHOLDER,
    PROFILE_PATH,
    REDIRECT,
    REGISTRATION_PATH,
    SIGNIN_PATH,
    SIGNUP_PATH,
    resolve,
)
from auth.login import show_logout_button, show_signin_page, show_signup_page, show_user_info
from auth.profile import show_profile_page
from auth.session import SessionStatus, SessionStore
from components.home import show_home
from components.sidebar import get_current_path, navigate, show_page_breadcrumb, show_sidebar
from config.logging_config import setup_logging
from config.settings import get_settings
from modules.farmers.dashboard_view import show_dashboard_view
from modules.farmers.grid_view import show_grid_view
from modules.farmers.registration_form import show_registration_form

# Page configuration
st.set_page_config(
    page_title="Farmer Registry",
    page_icon="🌾",
    layout="wide",
    initial_sidebar_state="expanded"
)

settings = get_settings()
setup_logging(settings.log_level)
logger = logging.getLogger("farmer_registry")


def get_session_store() -> SessionStore:
    """Create the session store once per browser session and resolve Loading"""
    if 'session_store' not in st.session_state:
        st.session_state.session_store = SessionStore(
            st.session_state,
            inactivity_limit=settings.inactivity_seconds,
        )
    store = st.session_state.session_store
    if store.status == SessionStatus.LOADING:
        with st.spinner("Loading..."):
            store.init()
    return store


def track_activity(store: SessionStore):
    """
    Every script run follows a click or key press. Expiry is evaluated
    before the run counts as activity.
    """
    if store.status != SessionStatus.AUTHENTICATED:
        return
    if store.check_expiry():
        return
    store.tracker.dispatch('click')


def render_page(path: str, store: SessionStore):
    if path == SIGNIN_PATH:
        show_signin_page(store)
    elif path == SIGNUP_PATH:
        show_signup_page(store)
    elif path == PROFILE_PATH:
        show_profile_page(store)
    elif path == DASHBOARD_PATH:
        show_dashboard_view(settings.table_page_size)
    elif path == FARMERS_PATH:
        show_grid_view(settings.grid_page_size, on_register=lambda: navigate(REGISTRATION_PATH))
    elif path == REGISTRATION_PATH:
        show_registration_form()
    else:
        show_home(store)


def main():
    """Main application logic"""
    store = get_session_store()
    track_activity(store)

    pending = store.consume_redirect()
    if pending:
        navigate(pending)

    path = get_current_path()
    decision = resolve(path, store)

    if decision.action == PLACEHOLDER:
        st.info("Loading...")
        st.stop()

    if decision.action == REDIRECT:
        logger.debug("Redirecting %s -> %s", path, decision.target)
        navigate(decision.target)

    # Signed-in chrome
    if store.is_authenticated:
        show_sidebar(store)
        show_user_info(store)
        show_logout_button(store)
        show_page_breadcrumb(path)

    render_page(path, store)


if __name__ == "__main__":
    main()
