"""
Tests for the route guard
"""
import pytest

from auth.guard import (
    ALLOW,
    PLACEHOLDER,
    REDIRECT,
    GuardDecision,
    decide,
    decide_superadmin,
    normalize_path,
    resolve,
)
from auth.session import Identity, Role, SessionStore


def signed_in(clock, role):
    store = SessionStore({}, clock=clock)
    store.init()
    store.begin(Identity(id='9', name='Someone', email='s@example.com', role=role), 'tok')
    return store


@pytest.fixture
def anonymous(clock):
    store = SessionStore({}, clock=clock)
    store.init()
    return store


class TestDecide:

    def test_loading_renders_placeholder(self, clock):
        store = SessionStore({}, clock=clock)
        assert decide('/dashboard', store) == GuardDecision(PLACEHOLDER)
        assert resolve('/auth/signin', store).action == PLACEHOLDER

    def test_anonymous_private_path_goes_to_signin(self, anonymous):
        assert decide('/dashboard', anonymous) == GuardDecision(REDIRECT, '/auth/signin')
        assert decide('/', anonymous).target == '/auth/signin'

    def test_anonymous_public_path_allowed(self, anonymous):
        assert decide('/auth/signin', anonymous).allowed
        assert decide('/auth/signup', anonymous).allowed

    def test_signed_in_public_path_goes_to_dashboard(self, clock):
        store = signed_in(clock, Role.USER)
        assert decide('/auth/signin', store) == GuardDecision(REDIRECT, '/dashboard')

    def test_expired_session_treated_as_anonymous(self, clock):
        store = signed_in(clock, Role.SUPERADMIN)
        clock.advance(4 * 60 * 60)
        assert decide('/farmers', store).target == '/auth/signin'


class TestSuperadmin:

    @pytest.mark.parametrize('role', [Role.USER, Role.ADMIN, Role.WORKERS, Role.MODERATOR])
    def test_other_roles_sent_home(self, clock, role):
        store = signed_in(clock, role)
        assert resolve('/dashboard', store) == GuardDecision(REDIRECT, '/')
        assert resolve('/farmers', store) == GuardDecision(REDIRECT, '/')

    def test_superadmin_allowed(self, clock):
        store = signed_in(clock, Role.SUPERADMIN)
        assert resolve('/dashboard', store).action == ALLOW
        assert resolve('/farmers', store).action == ALLOW

    def test_non_admin_pages_open_to_any_role(self, clock):
        store = signed_in(clock, Role.USER)
        assert resolve('/FarmerRegistration', store).allowed
        assert resolve('/auth/profile', store).allowed

    def test_fallback_target(self, clock):
        store = signed_in(clock, Role.USER)
        assert decide_superadmin(store, fallback='/auth/profile').target == '/auth/profile'


class TestNormalizePath:

    @pytest.mark.parametrize('raw, expected', [
        (None, '/'),
        ('', '/'),
        ('dashboard', '/dashboard'),
        ('/farmers/', '/farmers'),
        ('/nowhere', '/'),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_path(raw) == expected
