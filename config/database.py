"""
Database configuration and connection utilities for Supabase
Farmer Registry

VERSION HISTORY:
1.1.0 - Supabase is an optional backend; the JSON file store is the default
1.0.0 - Database singleton pattern
"""
import logging
from typing import Optional

import streamlit as st
from supabase import create_client, Client

logger = logging.getLogger(__name__)


class DatabaseConfigError(RuntimeError):
    """Raised when Supabase credentials are missing or invalid"""


# ============================================================
# DATABASE CLIENT
# ============================================================

class Database:
    """Holds the shared Supabase client"""

    _instance: Optional[Client] = None

    @classmethod
    def get_client(cls) -> Client:
        """Get or create Supabase client (singleton pattern)"""
        if cls._instance is None:
            try:
                url = st.secrets["supabase"]["url"]
                key = st.secrets["supabase"]["service_role_key"]
            except Exception as e:
                raise DatabaseConfigError(f"Supabase credentials not configured: {e}") from e
            cls._instance = create_client(url, key)
            logger.info("Connected Supabase client for %s", url)
        return cls._instance
