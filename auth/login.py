"""
Sign In / Sign Up Pages and Authentication UI
Farmer Registry

VERSION: 2.0.0 - Demo-only authentication with a local sign-up flow
"""
import time

import streamlit as st

from auth.guard import DASHBOARD_PATH, SIGNIN_PATH, SIGNUP_PATH
from auth.session import SessionStore
from auth.users import DEMO_TOKEN, LocalUserRegistry, authenticate
from components.sidebar import navigate
from config.settings import get_settings
from modules.farmers.validation import SIGNUP_FIELDS, validate_signup


def show_signin_page(store: SessionStore):
    """Display sign-in page"""
    settings = get_settings()

    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.markdown("# 🌾 Welcome Back")
        st.markdown("---")

        with st.form("signin_form"):
            email = st.text_input("Email", placeholder="Email")
            password = st.text_input("Password", type="password", placeholder="Password")
            submit = st.form_submit_button("Sign In", width='stretch', type="primary")

            if submit:
                if not email or not password:
                    st.error("Please enter both email and password")
                else:
                    handle_signin(store, email, password)

        st.caption(f"Use demo: **{settings.demo_email}** / **{settings.demo_password}**")

        st.markdown("---")
        if st.button("👤 Don't have an account? Sign Up", width='stretch'):
            navigate(SIGNUP_PATH)


def handle_signin(store: SessionStore, email: str, password: str):
    settings = get_settings()
    with st.spinner("Signing in..."):
        identity, error_message = authenticate(email, password, settings.demo_email, settings.demo_password)

    if identity:
        store.begin(identity, DEMO_TOKEN)
        st.success("✅ Login successful! Redirecting...")
        navigate(DASHBOARD_PATH)
    else:
        st.error(f"❌ {error_message}")


def show_signup_page(store: SessionStore):
    """Display step-by-step sign-up page"""
    if 'signup_step' not in st.session_state:
        st.session_state.signup_step = 0
    if 'signup_data' not in st.session_state:
        st.session_state.signup_data = {field: '' for field, _ in SIGNUP_FIELDS}

    step = st.session_state.signup_step
    data = st.session_state.signup_data
    field, validator = SIGNUP_FIELDS[step]

    col1, col2, col3 = st.columns([1, 2, 1])
    with col2:
        st.markdown("# 🌱 Create Account")
        st.progress((step + 1) / len(SIGNUP_FIELDS), text=f"Step {step + 1} of {len(SIGNUP_FIELDS)}")

        labels = {'name': 'Full Name', 'email': 'Email', 'password': 'Password'}
        widget_key = f"signup_{field}"
        if widget_key not in st.session_state:
            st.session_state[widget_key] = data[field]
        data[field] = st.text_input(
            labels[field],
            type="password" if field == 'password' else "default",
            key=widget_key,
        )
        live_error = validator(data[field])
        if data[field] and live_error:
            st.caption(f"⚠️ {live_error}")

        col_back, col_next = st.columns(2)
        with col_back:
            if step > 0 and st.button("← Back", width='stretch'):
                st.session_state.signup_step -= 1
                st.rerun()
        with col_next:
            last_step = step == len(SIGNUP_FIELDS) - 1
            if st.button("Create Account" if last_step else "Next →", type="primary", width='stretch'):
                if live_error:
                    st.error(live_error)
                elif not last_step:
                    st.session_state.signup_step += 1
                    st.rerun()
                else:
                    handle_signup(store, data)

        st.markdown("---")
        if st.button("🔑 Already have an account? Sign In", width='stretch'):
            navigate(SIGNIN_PATH)


def handle_signup(store: SessionStore, data):
    errors = validate_signup(data)
    if errors:
        first = next(i for i, (field, _) in enumerate(SIGNUP_FIELDS) if field in errors)
        st.session_state.signup_step = first
        st.error(errors[SIGNUP_FIELDS[first][0]])
        return

    with st.spinner("Creating account..."):
        registry = LocalUserRegistry(st.session_state)
        identity, error_message = registry.register(data['name'].strip(), data['email'].strip())

    if not identity:
        st.error(f"❌ {error_message}")
        return

    store.begin(identity, DEMO_TOKEN)
    del st.session_state.signup_step
    del st.session_state.signup_data
    st.success("✅ Account created! Redirecting...")
    time.sleep(1)
    navigate(DASHBOARD_PATH)


def show_logout_button(store: SessionStore):
    """Display sign-out button in sidebar"""
    if st.sidebar.button("🚪 Sign Out", width='stretch'):
        store.end()
        st.rerun()


def show_user_info(store: SessionStore):
    """Display current user info in sidebar"""
    identity = store.identity
    if identity:
        st.sidebar.markdown("---")
        st.sidebar.markdown("### 👤 User Info")
        st.sidebar.write(f"**Name:** {identity.name or 'N/A'}")
        st.sidebar.write(f"**Email:** {identity.email}")
        st.sidebar.write(f"**Role:** {identity.role.value}")
        st.sidebar.markdown("---")
