"""
Farmer Registration
Three-step form: Personal Info -> Farm Details -> Review & Submit
"""
import logging

import streamlit as st

from .constants import FARM_TYPES, FARMER_FIELDS, REGISTRATION_STEPS
from .repository import FarmerSaveError
from .utils import get_repository
from .validation import validate_registration, validate_step

logger = logging.getLogger(__name__)

FIELD_LABELS = {
    'name': 'Name',
    'email': 'Email',
    'subcity': 'Subcity',
    'phone': 'Phone',
    'farmName': 'Farm Name',
    'farmType': 'Farm Type',
    'farmSize': 'Farm Size',
}


def empty_form():
    return {field: '' for field in FARMER_FIELDS}


def init_registration_state():
    if 'reg_step' not in st.session_state:
        st.session_state.reg_step = 0
    if 'reg_form' not in st.session_state:
        st.session_state.reg_form = empty_form()
    if 'reg_error' not in st.session_state:
        st.session_state.reg_error = ''
    if 'reg_success' not in st.session_state:
        st.session_state.reg_success = False


def form_field(label: str, field: str):
    """Text input bound to reg_form; widget state is re-seeded after step changes"""
    key = f"reg_field_{field}"
    if key not in st.session_state:
        st.session_state[key] = st.session_state.reg_form[field]
    st.session_state.reg_form[field] = st.text_input(label, key=key)


def clear_form_widgets():
    for field in FARMER_FIELDS:
        st.session_state.pop(f"reg_field_{field}", None)


def show_registration_form():
    init_registration_state()
    step = st.session_state.reg_step
    form = st.session_state.reg_form

    st.markdown("## 📝 Farmer Registration")

    # Progress
    st.progress((step + 1) / len(REGISTRATION_STEPS),
                text=f"Step {step + 1} of {len(REGISTRATION_STEPS)}: {REGISTRATION_STEPS[step]}")

    if st.session_state.reg_success:
        st.success("✅ Farmer registered successfully!")
        st.session_state.reg_success = False

    if step == 0:
        form_field("Name *", "name")
        form_field("Email *", "email")
        form_field("Subcity", "subcity")
        form_field("Phone", "phone")

    elif step == 1:
        form_field("Farm Name *", "farmName")
        options = ["-- Farm Type --"] + FARM_TYPES
        current = options.index(form['farmType']) if form['farmType'] in FARM_TYPES else 0
        picked = st.selectbox("Farm Type *", options, index=current)
        form['farmType'] = picked if picked in FARM_TYPES else ''
        form_field("Farm Size (acres) *", "farmSize")

    else:
        st.markdown("### Review your details")
        for field in FARMER_FIELDS:
            st.write(f"**{FIELD_LABELS[field]}:** {form[field] or 'N/A'}")

    if st.session_state.reg_error:
        st.error(st.session_state.reg_error)

    col_back, col_spacer, col_next = st.columns([1, 2, 1])
    with col_back:
        if step > 0 and st.button("← Back", width='stretch', key="reg_back"):
            st.session_state.reg_step -= 1
            st.session_state.reg_error = ''
            st.rerun()
    with col_next:
        if step < len(REGISTRATION_STEPS) - 1:
            if st.button("Next →", type="primary", width='stretch', key="reg_next"):
                error = validate_step(step, form)
                st.session_state.reg_error = error
                if not error:
                    st.session_state.reg_step += 1
                st.rerun()
        elif st.button("Submit", type="primary", width='stretch', key="reg_submit"):
            submit_registration(form)
            st.rerun()


def submit_registration(form):
    """POST the form; success resets to step one with a notice"""
    error = validate_registration(form)
    if error:
        st.session_state.reg_error = error
        return False

    repo = get_repository()
    with st.spinner("Submitting..."):
        try:
            repo.register(form)
        except FarmerSaveError as e:
            st.session_state.reg_error = str(e)
            return False

    logger.info("Registered farmer %s", form.get('email'))
    st.session_state.reg_form = empty_form()
    clear_form_widgets()
    st.session_state.reg_step = 0
    st.session_state.reg_error = ''
    st.session_state.reg_success = True
    repo.loaded = False
    return True
