"""
Session Management with Inactivity Expiry
Farmer Registry

VERSION: 2.0.0
DATE: October 2026
CHANGES FROM V1.2.0:
- SessionManager static class replaced by an explicitly constructed
  SessionStore that owns its storage mapping (st.session_state in the app)
- Demo-only authentication: no backend verification of identity or token
- Sessions expire after 3 hours without activity
- Activity listeners are attached only while a session is active

Persisted keys (all strings):
    user          JSON-serialized identity
    token         opaque token
    lastActivity  epoch milliseconds
"""
import json
import logging
import time
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Callable, Iterable, MutableMapping, Optional, Set, Union

logger = logging.getLogger(__name__)

USER_KEY = 'user'
TOKEN_KEY = 'token'
LAST_ACTIVITY_KEY = 'lastActivity'

INACTIVITY_LIMIT_SECONDS = 3 * 60 * 60

ACTIVITY_EVENTS = ('mousemove', 'keydown', 'click')


class Role(str, Enum):
    USER = 'user'
    ADMIN = 'admin'
    SUPERADMIN = 'superadmin'
    WORKERS = 'workers'
    MODERATOR = 'moderator'

    @classmethod
    def parse(cls, value: str) -> 'Role':
        if value == 'worker':
            return cls.WORKERS
        return cls(value)


class SessionStatus(Enum):
    LOADING = 'loading'
    UNAUTHENTICATED = 'unauthenticated'
    AUTHENTICATED = 'authenticated'


@dataclass
class Identity:
    id: str
    name: str
    email: str
    role: Role
    avatar: str = ''
    subcity: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> 'Identity':
        return cls(
            id=str(data.get('id', data.get('_id', ''))),
            name=data.get('name', ''),
            email=data['email'],
            role=Role.parse(data['role']),
            avatar=data.get('avatar', ''),
            subcity=data.get('subcity'),
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data['role'] = self.role.value
        return data


@dataclass
class Session:
    identity: Identity
    token: str
    last_activity: float  # epoch seconds


def is_expired(now: float, last_activity: float,
               limit: float = INACTIVITY_LIMIT_SECONDS) -> bool:
    """True when more than `limit` seconds passed since the last activity"""
    return now - last_activity > limit


class ActivityTracker:
    """
    Forwards user-interaction events to a callback while attached.
    Usable as a context manager so detach always runs.
    """

    def __init__(self, on_activity: Callable[[], None], events: Iterable[str] = ACTIVITY_EVENTS):
        self._on_activity = on_activity
        self.events: Set[str] = set(events)
        self.attached = False

    def attach(self):
        self.attached = True

    def detach(self):
        self.attached = False

    def dispatch(self, event: str) -> bool:
        """Deliver one event; returns True when it refreshed the session"""
        if not self.attached or event not in self.events:
            return False
        self._on_activity()
        return True

    def __enter__(self):
        self.attach()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.detach()
        return False


class SessionStore:
    """
    Persisted session with a Loading -> (Un)Authenticated state machine

    Args:
        storage: Key/value mapping that survives reruns
        clock: Returns the current epoch time in seconds
        inactivity_limit: Seconds of inactivity before the session expires
    """

    def __init__(self, storage: MutableMapping, clock: Callable[[], float] = time.time,
                 inactivity_limit: float = INACTIVITY_LIMIT_SECONDS):
        self.storage = storage
        self.clock = clock
        self.inactivity_limit = inactivity_limit
        self.status = SessionStatus.LOADING
        self.session: Optional[Session] = None
        self.pending_redirect: Optional[str] = None
        self.tracker = ActivityTracker(self.touch)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self) -> SessionStatus:
        """Resolve the Loading state from persisted data"""
        self.session = self.restore()
        if self.session is None:
            self.status = SessionStatus.UNAUTHENTICATED
        else:
            self.status = SessionStatus.AUTHENTICATED
            self.tracker.attach()
        return self.status

    def teardown(self):
        """Release listeners; persisted data is left for the next init()"""
        self.tracker.detach()

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    def restore(self) -> Optional[Session]:
        """Read the persisted session. Never raises; bad data reads as absent."""
        try:
            raw_user = self.storage.get(USER_KEY)
            token = self.storage.get(TOKEN_KEY)
            if not raw_user or not token:
                return None

            identity = Identity.from_dict(json.loads(raw_user))
            raw_activity = self.storage.get(LAST_ACTIVITY_KEY)
            last_activity = int(raw_activity) / 1000 if raw_activity else self.clock()
        except (AttributeError, TypeError, ValueError, KeyError) as e:
            logger.error("Error loading auth data from storage: %s", e)
            return None

        if is_expired(self.clock(), last_activity, self.inactivity_limit):
            logger.info("Stored session for %s expired", identity.email)
            self._clear()
            return None

        return Session(identity=identity, token=token, last_activity=last_activity)

    def begin(self, identity: Identity, token: str) -> Session:
        """Sign in: persist identity, token and a fresh activity timestamp"""
        now = self.clock()
        self.storage[USER_KEY] = json.dumps(identity.to_dict())
        self.storage[TOKEN_KEY] = token
        self.storage[LAST_ACTIVITY_KEY] = str(int(now * 1000))

        self.session = Session(identity=identity, token=token, last_activity=now)
        self.status = SessionStatus.AUTHENTICATED
        self.pending_redirect = None
        self.tracker.attach()
        logger.info("Session started for %s (%s)", identity.email, identity.role.value)
        return self.session

    def end(self, redirect_to: str = '/auth/signin'):
        """Sign out: clear persisted fields and ask the guard to redirect"""
        if self.session:
            logger.info("Session ended for %s", self.session.identity.email)
        self.tracker.detach()
        self._clear()
        self.session = None
        self.status = SessionStatus.UNAUTHENTICATED
        self.pending_redirect = redirect_to

    def touch(self):
        """Refresh lastActivity to now"""
        if self.session is None:
            return
        now = self.clock()
        self.session.last_activity = now
        self.storage[LAST_ACTIVITY_KEY] = str(int(now * 1000))

    def is_expired(self) -> bool:
        if self.session is None:
            return False
        return is_expired(self.clock(), self.session.last_activity, self.inactivity_limit)

    def check_expiry(self) -> bool:
        """Evaluate expiry now; an expired session ends. Returns True if it did."""
        if self.session is not None and self.is_expired():
            logger.info("Session for %s expired after inactivity", self.session.identity.email)
            self.end()
            return True
        return False

    @property
    def is_authenticated(self) -> bool:
        return (self.session is not None
                and bool(self.session.token)
                and not self.is_expired())

    @property
    def identity(self) -> Optional[Identity]:
        return self.session.identity if self.session else None

    def has_role(self, required: Union[Role, str, Iterable[Union[Role, str]]]) -> bool:
        """True iff the session is active and its role is in `required`"""
        if not self.is_authenticated:
            return False
        if isinstance(required, (Role, str)):
            required = [required]
        wanted = set()
        for r in required:
            if isinstance(r, Role):
                wanted.add(r)
                continue
            try:
                wanted.add(Role.parse(r))
            except ValueError:
                # Unknown role names never match
                continue
        return self.session.identity.role in wanted

    def update_identity(self, **changes) -> Identity:
        """Persist profile edits; role is read-only"""
        if self.session is None:
            raise RuntimeError("No active session")
        changes.pop('role', None)
        data = self.session.identity.to_dict()
        data.update({k: v for k, v in changes.items() if v is not None})
        identity = Identity.from_dict(data)
        self.session.identity = identity
        self.storage[USER_KEY] = json.dumps(identity.to_dict())
        return identity

    def consume_redirect(self) -> Optional[str]:
        target, self.pending_redirect = self.pending_redirect, None
        return target

    def _clear(self):
        for key in (USER_KEY, TOKEN_KEY, LAST_ACTIVITY_KEY):
            self.storage.pop(key, None)
