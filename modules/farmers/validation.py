"""
Form validation for farmer registration, sign-up and profile edits
Each validator returns an error message, or "" when the value is fine
"""
import math
import re
from typing import Dict

from .constants import FARM_TYPES

EMAIL_PATTERN = re.compile(r'\S+@\S+\.\S+')
STRICT_EMAIL_PATTERN = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')


def _to_number(value) -> float:
    try:
        number = float(str(value).strip())
    except ValueError:
        return 0.0
    return number if math.isfinite(number) else 0.0


# =====================================================
# FARMER REGISTRATION (per step)
# =====================================================

def validate_personal_step(form: Dict) -> str:
    name = str(form.get('name', '')).strip()
    email = str(form.get('email', '')).strip()
    if not name or not email:
        return 'Please enter your name and a valid email.'
    if not EMAIL_PATTERN.search(email):
        return 'Invalid email address.'
    return ''


def validate_farm_step(form: Dict) -> str:
    if not str(form.get('farmName', '')).strip():
        return 'Please enter your farm name.'
    farm_type = str(form.get('farmType', '')).strip()
    if not farm_type or farm_type not in FARM_TYPES:
        return 'Please select your farm type.'
    farm_size = str(form.get('farmSize', '')).strip()
    if not farm_size or _to_number(farm_size) <= 0:
        return 'Please enter a valid farm size.'
    return ''


STEP_VALIDATORS = {
    0: validate_personal_step,
    1: validate_farm_step,
}


def validate_step(step: int, form: Dict) -> str:
    validator = STEP_VALIDATORS.get(step)
    return validator(form) if validator else ''


def validate_registration(form: Dict) -> str:
    """Full check before submit; first failing step wins"""
    for step in sorted(STEP_VALIDATORS):
        error = STEP_VALIDATORS[step](form)
        if error:
            return error
    return ''


# =====================================================
# ACCOUNT FORMS
# =====================================================

def validate_full_name(value: str) -> str:
    return 'Name must be at least 3 characters' if len(value.strip()) < 3 else ''


def validate_email(value: str) -> str:
    return '' if STRICT_EMAIL_PATTERN.match(value) else 'Please enter a valid email'


def validate_password(value: str) -> str:
    return '' if len(value) >= 6 else 'Password must be at least 6 characters long'


SIGNUP_FIELDS = [
    ('name', validate_full_name),
    ('email', validate_email),
    ('password', validate_password),
]


def validate_signup(form: Dict) -> Dict[str, str]:
    """Field -> message for every failing sign-up field"""
    errors = {}
    for field, validator in SIGNUP_FIELDS:
        message = validator(str(form.get(field, '')))
        if message:
            errors[field] = message
    return errors


def validate_profile_field(field: str, value: str) -> str:
    value = value or ''
    if field == 'name':
        if not value.strip():
            return 'Name is required'
        if len(value.strip()) < 3:
            return 'Name too short'
    elif field == 'email':
        if not value.strip():
            return 'Email is required'
        if not STRICT_EMAIL_PATTERN.match(value):
            return 'Invalid email address'
    elif field == 'subcity':
        if not value.strip():
            return 'Subcity is required'
    return ''


def validate_profile(form: Dict) -> Dict[str, str]:
    """Role is read-only and never validated"""
    errors = {}
    for field in ('name', 'email', 'subcity'):
        message = validate_profile_field(field, str(form.get(field) or ''))
        if message:
            errors[field] = message
    return errors
