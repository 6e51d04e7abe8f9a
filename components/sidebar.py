"""
Sidebar Navigation Component
Farmer Registry

VERSION: 2.0.0 - Path-based navigation with role-filtered links
"""
from typing import List, Tuple

import streamlit as st

from auth.guard import (
    DASHBOARD_PATH,
    FARMERS_PATH,
    HOME_PATH,
    PROFILE_PATH,
    REGISTRATION_PATH,
    SIGNIN_PATH,
    normalize_path,
)
from auth.session import Role, SessionStore

PAGE_TITLES = {
    HOME_PATH: ('🏠', 'Home'),
    DASHBOARD_PATH: ('📊', 'Dashboard'),
    FARMERS_PATH: ('🌾', 'Farmers'),
    REGISTRATION_PATH: ('📝', 'Register Farmer'),
    PROFILE_PATH: ('👤', 'My Profile'),
}


def get_current_path() -> str:
    if 'current_path' not in st.session_state:
        st.session_state.current_path = st.query_params.get('page', SIGNIN_PATH)
    return normalize_path(st.session_state.current_path)


def navigate(path: str):
    """Imperative navigation: store the path and rerun the script"""
    st.session_state.current_path = path
    st.query_params['page'] = path
    st.rerun()


def nav_links(store: SessionStore) -> List[str]:
    links = [HOME_PATH]
    if store.has_role(Role.SUPERADMIN):
        links += [DASHBOARD_PATH, FARMERS_PATH]
    links += [REGISTRATION_PATH, PROFILE_PATH]
    return links


def show_sidebar(store: SessionStore):
    """Display sidebar navigation"""
    current = get_current_path()

    with st.sidebar:
        st.markdown("# 🌾 Farmer Registry")
        st.markdown("---")

        for path in nav_links(store):
            icon, title = PAGE_TITLES[path]
            if st.button(f"{icon} {title}", key=f"nav_{path}", width='stretch',
                         type="primary" if current == path else "secondary"):
                navigate(path)


def show_page_breadcrumb(path: str) -> Tuple[str, str]:
    icon, title = PAGE_TITLES.get(path, PAGE_TITLES[HOME_PATH])
    st.caption(f"{icon} {title}")
    return icon, title
