"""
Demo accounts
Sign-in accepts the configured demo user only; sign-up keeps a simulated
user list in the session storage under `users`. Nothing here is checked
against a backend.
"""
import json
import logging
import time
from typing import Callable, Dict, List, MutableMapping, Optional, Tuple

from auth.session import Identity, Role
from config.settings import DEMO_TOKEN, DEMO_USER

logger = logging.getLogger(__name__)

USERS_KEY = 'users'
DEFAULT_AVATAR = '/images/default-avatar.png'


def authenticate(email: str, password: str, demo_email: str, demo_password: str) -> Tuple[Optional[Identity], str]:
    """
    Check credentials against the demo account
    Returns:
        Tuple of (identity or None, error_message)
    """
    if email == demo_email and password == demo_password:
        data = dict(DEMO_USER)
        data['email'] = demo_email
        return Identity.from_dict(data), ""
    logger.info("Rejected sign-in for %s", email)
    return None, "Invalid email or password"


class LocalUserRegistry:
    """Simulated registered users, stored as a JSON list"""

    def __init__(self, storage: MutableMapping, clock: Callable[[], float] = time.time):
        self.storage = storage
        self._clock = clock

    def all(self) -> List[Dict]:
        try:
            users = json.loads(self.storage.get(USERS_KEY) or '[]')
        except ValueError:
            return []
        return users if isinstance(users, list) else []

    def exists(self, email: str) -> bool:
        return any(u.get('email') == email for u in self.all() if isinstance(u, dict))

    def register(self, name: str, email: str) -> Tuple[Optional[Identity], str]:
        """Add a `user`-role account; duplicate emails are refused"""
        if self.exists(email):
            return None, "Email already registered"

        identity = Identity(
            id=str(int(self._clock() * 1000)),
            name=name or 'New User',
            email=email,
            role=Role.USER,
            avatar=DEFAULT_AVATAR,
        )
        users = self.all()
        users.append(identity.to_dict())
        self.storage[USERS_KEY] = json.dumps(users)
        logger.info("Registered local user %s", email)
        return identity, ""


__all__ = ['authenticate', 'LocalUserRegistry', 'DEMO_TOKEN']
