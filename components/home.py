"""
Home Page
Landing view for every signed-in user

VERSION: 1.0.0
"""
from datetime import date

import streamlit as st

from auth.guard import DASHBOARD_PATH, FARMERS_PATH, PROFILE_PATH, REGISTRATION_PATH
from auth.session import Role, SessionStore
from components.sidebar import navigate


def show_home(store: SessionStore):
    """Welcome message and quick actions by role"""
    identity = store.identity

    st.markdown(f"### Welcome back, {identity.name or identity.email}! 👋")
    st.caption(f"📅 {date.today().strftime('%B %d, %Y')}")
    st.markdown("---")

    st.markdown("## 🌾 Farmer Registry")
    st.write("Register farmers, review their farms and export the registry.")

    is_superadmin = store.has_role(Role.SUPERADMIN)

    col1, col2, col3 = st.columns(3)
    with col1:
        if st.button("📝 Register a Farmer", width='stretch', type="primary"):
            navigate(REGISTRATION_PATH)
    with col2:
        if is_superadmin:
            if st.button("📊 Open Dashboard", width='stretch'):
                navigate(DASHBOARD_PATH)
        elif st.button("👤 My Profile", width='stretch'):
            navigate(PROFILE_PATH)
    with col3:
        if is_superadmin and st.button("🌾 Browse Farmers", width='stretch'):
            navigate(FARMERS_PATH)

    if not is_superadmin:
        st.info("The farmer dashboards are available to super administrators only.")
