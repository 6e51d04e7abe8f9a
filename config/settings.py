"""
Application settings
Farmer Registry

VERSION: 1.0.0
Settings are read from st.secrets with environment overrides:

    [storage]
    backend = "json"            # or "supabase"
    data_file = "data/data.json"

    [auth]
    inactivity_hours = 3
    demo_email = "Deekibraa@gmail.com"
    demo_password = "123456"

    [app]
    log_level = "INFO"
"""
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import streamlit as st


# ============================================================
# DEFAULTS
# ============================================================

DEFAULT_DATA_FILE = os.path.join("data", "data.json")
DEFAULT_BACKEND = "json"
DEFAULT_INACTIVITY_HOURS = 3
DEFAULT_DEBOUNCE_SECONDS = 0.22
TABLE_PAGE_SIZE = 8
GRID_PAGE_SIZE = 9

DEMO_USER = {
    'id': '1',
    'name': 'Test User',
    'email': 'Deekibraa@gmail.com',
    'role': 'superadmin',
    'subcity': 'DemoCity',
    'avatar': '/images/default-avatar.png',
}
DEMO_PASSWORD = '123456'
DEMO_TOKEN = 'fake-jwt-token-demo'


@dataclass(frozen=True)
class Settings:
    data_file: str = DEFAULT_DATA_FILE
    storage_backend: str = DEFAULT_BACKEND
    inactivity_hours: float = DEFAULT_INACTIVITY_HOURS
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    table_page_size: int = TABLE_PAGE_SIZE
    grid_page_size: int = GRID_PAGE_SIZE
    demo_email: str = DEMO_USER['email']
    demo_password: str = DEMO_PASSWORD
    log_level: str = "INFO"

    @property
    def inactivity_seconds(self) -> float:
        return self.inactivity_hours * 60 * 60


def _section(name: str) -> Dict[str, Any]:
    """Read one st.secrets section, empty when no secrets file exists"""
    try:
        return dict(st.secrets.get(name, {}))
    except Exception:
        # st.secrets raises when .streamlit/secrets.toml is missing
        return {}


def load_settings(env: Optional[Dict[str, str]] = None) -> Settings:
    """
    Build Settings from secrets, then environment overrides
    Args:
        env: Environment mapping (defaults to os.environ)
    Returns:
        Settings instance
    """
    env = os.environ if env is None else env
    storage = _section("storage")
    auth = _section("auth")
    app = _section("app")

    return Settings(
        data_file=env.get("FARMERS_DATA_FILE", storage.get("data_file", DEFAULT_DATA_FILE)),
        storage_backend=env.get("FARMERS_STORAGE_BACKEND", storage.get("backend", DEFAULT_BACKEND)).lower(),
        inactivity_hours=float(auth.get("inactivity_hours", DEFAULT_INACTIVITY_HOURS)),
        debounce_seconds=float(app.get("debounce_seconds", DEFAULT_DEBOUNCE_SECONDS)),
        table_page_size=int(app.get("table_page_size", TABLE_PAGE_SIZE)),
        grid_page_size=int(app.get("grid_page_size", GRID_PAGE_SIZE)),
        demo_email=auth.get("demo_email", DEMO_USER['email']),
        demo_password=auth.get("demo_password", DEMO_PASSWORD),
        log_level=env.get("FARMERS_LOG_LEVEL", app.get("log_level", "INFO")).upper(),
    )


@st.cache_resource(show_spinner=False)
def get_settings() -> Settings:
    """Cached settings for the running app"""
    return load_settings()
