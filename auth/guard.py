"""
Route Guard
Decides whether the requested page may render for the current session
"""
from dataclasses import dataclass
from typing import Optional

from auth.session import Role, SessionStatus, SessionStore

SIGNIN_PATH = '/auth/signin'
SIGNUP_PATH = '/auth/signup'
PROFILE_PATH = '/auth/profile'
DASHBOARD_PATH = '/dashboard'
FARMERS_PATH = '/farmers'
REGISTRATION_PATH = '/FarmerRegistration'
HOME_PATH = '/'

PUBLIC_PATHS = frozenset({SIGNIN_PATH, SIGNUP_PATH})
SUPERADMIN_PATHS = frozenset({DASHBOARD_PATH, FARMERS_PATH})
KNOWN_PATHS = frozenset({HOME_PATH, PROFILE_PATH, REGISTRATION_PATH}) | PUBLIC_PATHS | SUPERADMIN_PATHS

DEFAULT_LANDING = DASHBOARD_PATH

ALLOW = 'allow'
PLACEHOLDER = 'placeholder'
REDIRECT = 'redirect'


@dataclass(frozen=True)
class GuardDecision:
    action: str
    target: Optional[str] = None

    @property
    def allowed(self) -> bool:
        return self.action == ALLOW


def normalize_path(path: Optional[str]) -> str:
    if not path:
        return HOME_PATH
    path = path if path.startswith('/') else f'/{path}'
    if len(path) > 1:
        path = path.rstrip('/')
    return path if path in KNOWN_PATHS else HOME_PATH


def decide(path: str, store: SessionStore) -> GuardDecision:
    """
    Auth guard for every page
    - Loading: render a placeholder, never redirect
    - No active session on a private path: go to sign-in
    - Active session on a sign-in/sign-up path: go to the landing page
    """
    if store.status == SessionStatus.LOADING:
        return GuardDecision(PLACEHOLDER)

    path = normalize_path(path)
    is_public = path in PUBLIC_PATHS

    if not store.is_authenticated and not is_public:
        return GuardDecision(REDIRECT, SIGNIN_PATH)

    if store.is_authenticated and is_public:
        return GuardDecision(REDIRECT, DEFAULT_LANDING)

    return GuardDecision(ALLOW)


def decide_superadmin(store: SessionStore, fallback: str = HOME_PATH) -> GuardDecision:
    """Stricter guard for the admin dashboards: superadmin only, whatever the path"""
    if store.status == SessionStatus.LOADING:
        return GuardDecision(PLACEHOLDER)
    if not store.has_role(Role.SUPERADMIN):
        return GuardDecision(REDIRECT, fallback)
    return GuardDecision(ALLOW)


def resolve(path: str, store: SessionStore) -> GuardDecision:
    """Apply both guards in order for a navigation to `path`"""
    decision = decide(path, store)
    if decision.allowed and normalize_path(path) in SUPERADMIN_PATHS:
        return decide_superadmin(store)
    return decision
