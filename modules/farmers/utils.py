"""
Shared Utilities for the Farmers module
Per-session repository, view state, debounce wiring and formatters
"""
import time
from datetime import datetime
from typing import Dict

import streamlit as st

from config.settings import get_settings
from db.db_farmers import build_store
from .constants import AVATAR_COLORS
from .query import Debouncer, QueryState, parse_timestamp
from .repository import FarmerRepository


# =====================================================
# DATA ACCESS
# =====================================================

@st.cache_resource(show_spinner=False)
def get_store():
    """One store per process; the JSON file is shared by every session"""
    settings = get_settings()
    return build_store(settings.storage_backend, settings.data_file)


def get_repository() -> FarmerRepository:
    """Repository (and its last loaded list) lives in this browser session"""
    if 'farmer_repository' not in st.session_state:
        st.session_state.farmer_repository = FarmerRepository(get_store())
    repo = st.session_state.farmer_repository
    if not repo.loaded and not repo.error:
        with st.spinner("Loading farmers..."):
            repo.refresh()
    return repo


# =====================================================
# SESSION STATE HELPERS
# =====================================================

def init_view_state(prefix: str, page_size: int):
    """Query state and debouncer for one view ('dash' or 'grid')"""
    state_key = f'{prefix}_query'
    if state_key not in st.session_state:
        st.session_state[state_key] = QueryState(page_size=page_size)
    debounce_key = f'{prefix}_debouncer'
    if debounce_key not in st.session_state:
        st.session_state[debounce_key] = Debouncer(delay=get_settings().debounce_seconds)


def get_query(prefix: str) -> QueryState:
    return st.session_state[f'{prefix}_query']


def set_query(prefix: str, state: QueryState):
    st.session_state[f'{prefix}_query'] = state


def commit_search(prefix: str, raw: str) -> str:
    """
    Feed the live search text through the view's debouncer.
    Waits out the quiet period inside this run; a newer input reruns the
    script, which abandons the wait and restarts it.
    """
    debouncer: Debouncer = st.session_state[f'{prefix}_debouncer']
    debouncer.push(raw)
    if debouncer.pending:
        time.sleep(debouncer.remaining())
    return debouncer.poll()


# =====================================================
# UI FORMATTERS
# =====================================================

def format_registered(value, with_time: bool = False) -> str:
    ts = parse_timestamp(value)
    if not ts:
        return "-"
    dt = datetime.fromtimestamp(ts)
    return dt.strftime('%Y-%m-%d %H:%M') if with_time else dt.strftime('%Y-%m-%d')


def avatar_initials(name: str) -> str:
    parts = [p for p in (name or '').split(' ') if p]
    return ''.join(p[0] for p in parts)[:2].upper() or 'U'


def avatar_color(name: str) -> str:
    code = ord(name[0]) if name else 0
    return AVATAR_COLORS[code % len(AVATAR_COLORS)]


def farmer_key(farmer: Dict, idx: int) -> str:
    return str(farmer.get('id') or f"{farmer.get('email', '')}-{idx}")
