"""
Profile Page
View the signed-in identity, edit name/email/subcity, sign out
"""
import streamlit as st

from auth.session import SessionStore
from modules.farmers.validation import validate_profile


def show_profile_page(store: SessionStore):
    identity = store.identity
    if identity is None:
        return

    st.markdown("## 👤 My Profile")
    st.markdown("---")

    if 'profile_edit' not in st.session_state:
        st.session_state.profile_edit = False

    if not st.session_state.profile_edit:
        st.write(f"**Name:** {identity.name or 'N/A'}")
        st.write(f"**Email:** {identity.email}")
        st.write(f"**Subcity:** {identity.subcity or 'N/A'}")
        st.write(f"**Role:** {identity.role.value}")

        col1, col2 = st.columns(2)
        with col1:
            if st.button("✏️ Edit Profile", width='stretch'):
                st.session_state.profile_edit = True
                st.rerun()
        with col2:
            if st.button("🚪 Sign Out", width='stretch', key="profile_signout"):
                store.end()
                st.rerun()
        return

    with st.form("profile_form"):
        name = st.text_input("Name", value=identity.name)
        email = st.text_input("Email", value=identity.email)
        subcity = st.text_input("Subcity", value=identity.subcity or '')
        st.text_input("Role", value=identity.role.value, disabled=True)

        col1, col2 = st.columns(2)
        with col1:
            save = st.form_submit_button("💾 Save", type="primary", width='stretch')
        with col2:
            cancel = st.form_submit_button("Cancel", width='stretch')

    if cancel:
        st.session_state.profile_edit = False
        st.rerun()

    if save:
        errors = validate_profile({'name': name, 'email': email, 'subcity': subcity})
        if errors:
            for message in errors.values():
                st.error(message)
            return

        with st.spinner("Saving..."):
            store.update_identity(name=name.strip(), email=email.strip(), subcity=subcity.strip())
        st.success("✅ Profile updated")
        st.session_state.profile_edit = False
