"""
Tests for form validation
"""
import pytest

from modules.farmers.validation import (
    validate_email,
    validate_farm_step,
    validate_full_name,
    validate_password,
    validate_personal_step,
    validate_profile,
    validate_registration,
    validate_signup,
    validate_step,
)


def complete_form(**overrides):
    form = {
        "name": "Abebe", "email": "abebe@example.com", "subcity": "", "phone": "",
        "farmName": "Sunrise", "farmType": "Grains", "farmSize": "2.5",
    }
    form.update(overrides)
    return form


class TestRegistrationSteps:

    def test_personal_step_requires_name_and_email(self):
        assert validate_personal_step(complete_form(name="  ")) == 'Please enter your name and a valid email.'
        assert validate_personal_step(complete_form(email="")) == 'Please enter your name and a valid email.'

    def test_personal_step_email_shape(self):
        assert validate_personal_step(complete_form(email="abebe")) == 'Invalid email address.'
        assert validate_personal_step(complete_form()) == ''

    @pytest.mark.parametrize('overrides, message', [
        ({"farmName": ""}, 'Please enter your farm name.'),
        ({"farmType": ""}, 'Please select your farm type.'),
        ({"farmType": "Fishery"}, 'Please select your farm type.'),
        ({"farmSize": ""}, 'Please enter a valid farm size.'),
        ({"farmSize": "0"}, 'Please enter a valid farm size.'),
        ({"farmSize": "big"}, 'Please enter a valid farm size.'),
        ({"farmSize": "nan"}, 'Please enter a valid farm size.'),
        ({"farmSize": "inf"}, 'Please enter a valid farm size.'),
        ({"farmSize": "-Infinity"}, 'Please enter a valid farm size.'),
    ])
    def test_farm_step(self, overrides, message):
        assert validate_farm_step(complete_form(**overrides)) == message

    def test_review_step_has_no_checks(self):
        assert validate_step(2, {}) == ''

    def test_full_registration_reports_first_failure(self):
        form = complete_form(name="", farmName="")
        assert validate_registration(form) == 'Please enter your name and a valid email.'
        assert validate_registration(complete_form()) == ''


class TestAccountForms:

    def test_field_rules(self):
        assert validate_full_name("Al") == 'Name must be at least 3 characters'
        assert validate_full_name("Alem") == ''
        assert validate_email("a@b") == 'Please enter a valid email'
        assert validate_email("a@b.co") == ''
        assert validate_password("12345") == 'Password must be at least 6 characters long'
        assert validate_password("123456") == ''

    def test_signup_collects_every_error(self):
        errors = validate_signup({"name": "", "email": "x", "password": ""})
        assert set(errors) == {"name", "email", "password"}
        assert validate_signup({"name": "Alem", "email": "a@b.co", "password": "secret"}) == {}

    def test_profile(self):
        errors = validate_profile({"name": "Al", "email": "", "subcity": None})
        assert errors == {
            "name": 'Name too short',
            "email": 'Email is required',
            "subcity": 'Subcity is required',
        }
        assert validate_profile({"name": "Alem", "email": "a@b.co", "subcity": "Bole"}) == {}
