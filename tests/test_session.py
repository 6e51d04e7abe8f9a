"""
Tests for the session store and activity tracking
"""
import json

import pytest

from auth.session import (
    INACTIVITY_LIMIT_SECONDS,
    ActivityTracker,
    Identity,
    Role,
    SessionStatus,
    SessionStore,
    is_expired,
)

HOUR = 60 * 60


def admin_identity():
    return Identity(id='1', name='Test User', email='admin@example.com',
                    role=Role.SUPERADMIN, avatar='/a.png', subcity='DemoCity')


def user_identity():
    return Identity(id='2', name='Plain User', email='user@example.com', role=Role.USER)


@pytest.fixture
def storage():
    return {}


@pytest.fixture
def store(storage, clock):
    return SessionStore(storage, clock=clock)


class TestIsExpired:

    def test_four_hours_is_expired(self, clock):
        assert is_expired(clock(), clock() - 4 * HOUR) is True

    def test_two_hours_is_not_expired(self, clock):
        assert is_expired(clock(), clock() - 2 * HOUR) is False

    def test_exactly_at_limit_is_not_expired(self, clock):
        assert is_expired(clock(), clock() - INACTIVITY_LIMIT_SECONDS) is False


class TestLifecycle:

    def test_starts_loading(self, store):
        assert store.status == SessionStatus.LOADING
        assert not store.is_authenticated

    def test_init_without_stored_session(self, store):
        assert store.init() == SessionStatus.UNAUTHENTICATED
        assert store.session is None

    def test_begin_persists_fields(self, store, storage, clock):
        store.init()
        store.begin(admin_identity(), 'fake-jwt-token-demo')

        assert store.status == SessionStatus.AUTHENTICATED
        assert store.is_authenticated
        assert json.loads(storage['user'])['email'] == 'admin@example.com'
        assert json.loads(storage['user'])['role'] == 'superadmin'
        assert storage['token'] == 'fake-jwt-token-demo'
        assert storage['lastActivity'] == str(int(clock() * 1000))

    def test_init_restores_valid_session(self, storage, clock):
        SessionStore(storage, clock=clock).begin(admin_identity(), 'tok')
        clock.advance(2 * HOUR)

        restored = SessionStore(storage, clock=clock)
        assert restored.init() == SessionStatus.AUTHENTICATED
        assert restored.identity == admin_identity()
        assert restored.tracker.attached

    def test_init_discards_expired_session(self, storage, clock):
        SessionStore(storage, clock=clock).begin(admin_identity(), 'tok')
        clock.advance(4 * HOUR)

        restored = SessionStore(storage, clock=clock)
        assert restored.init() == SessionStatus.UNAUTHENTICATED
        assert 'user' not in storage
        assert 'token' not in storage
        assert 'lastActivity' not in storage

    def test_end_clears_storage_and_requests_signin(self, store, storage):
        store.init()
        store.begin(admin_identity(), 'tok')
        store.end()

        assert store.status == SessionStatus.UNAUTHENTICATED
        assert storage == {}
        assert store.consume_redirect() == '/auth/signin'
        assert store.consume_redirect() is None
        assert not store.tracker.attached

    def test_teardown_detaches_but_keeps_data(self, store, storage):
        store.begin(admin_identity(), 'tok')
        store.teardown()
        assert not store.tracker.attached
        assert 'token' in storage


class TestRestoreFailsSoft:

    @pytest.mark.parametrize('raw_user', ['{not json', '"just a string"', '{"name": "no email"}',
                                          '{"email": "a@b.c", "role": "pilot"}'])
    def test_malformed_user_reads_as_absent(self, storage, clock, raw_user):
        storage.update({'user': raw_user, 'token': 'tok', 'lastActivity': '1'})
        store = SessionStore(storage, clock=clock)
        assert store.restore() is None
        assert store.init() == SessionStatus.UNAUTHENTICATED

    def test_malformed_timestamp_reads_as_absent(self, storage, clock):
        storage.update({'user': json.dumps(admin_identity().to_dict()), 'token': 'tok',
                        'lastActivity': 'yesterday'})
        assert SessionStore(storage, clock=clock).restore() is None

    def test_identity_without_token_is_absent(self, storage, clock):
        storage['user'] = json.dumps(admin_identity().to_dict())
        assert SessionStore(storage, clock=clock).restore() is None


class TestActivity:

    def test_touch_refreshes_timestamp(self, store, storage, clock):
        store.begin(admin_identity(), 'tok')
        clock.advance(2 * HOUR)
        store.touch()
        clock.advance(2 * HOUR)

        assert not store.is_expired()
        assert storage['lastActivity'] == str(int((clock() - 2 * HOUR) * 1000))

    def test_check_expiry_ends_stale_session(self, store, clock):
        store.begin(admin_identity(), 'tok')
        clock.advance(3 * HOUR + 1)

        assert store.is_expired()
        assert store.check_expiry() is True
        assert store.status == SessionStatus.UNAUTHENTICATED
        assert not store.is_authenticated

    def test_tracked_events_touch_only_while_attached(self, store, clock):
        store.begin(admin_identity(), 'tok')
        clock.advance(HOUR)

        assert store.tracker.dispatch('mousemove') is True
        assert store.session.last_activity == clock()
        assert store.tracker.dispatch('scroll') is False

        store.end()
        assert store.tracker.dispatch('click') is False

    def test_tracker_context_manager_releases(self):
        calls = []
        tracker = ActivityTracker(lambda: calls.append(1))
        with tracker:
            tracker.dispatch('keydown')
        tracker.dispatch('keydown')
        assert calls == [1]
        assert not tracker.attached


class TestRoles:

    def test_has_role_single_and_set(self, store):
        store.begin(admin_identity(), 'tok')
        assert store.has_role(Role.SUPERADMIN)
        assert store.has_role('superadmin')
        assert store.has_role([Role.ADMIN, Role.SUPERADMIN])
        assert not store.has_role(Role.ADMIN)

    def test_unknown_role_name_never_matches(self, store):
        store.begin(admin_identity(), 'tok')
        assert store.has_role('guest') is False
        assert store.has_role(['guest', Role.SUPERADMIN]) is True

    def test_has_role_false_without_session(self, store):
        store.init()
        assert not store.has_role(Role.USER)

    def test_has_role_false_once_expired(self, store, clock):
        store.begin(user_identity(), 'tok')
        clock.advance(4 * HOUR)
        assert not store.has_role(Role.USER)

    def test_worker_alias(self):
        assert Role.parse('worker') is Role.WORKERS
        assert Role.parse('workers') is Role.WORKERS


class TestUpdateIdentity:

    def test_update_persists_and_keeps_role(self, store, storage):
        store.begin(user_identity(), 'tok')
        store.update_identity(name='Renamed', subcity='Kirkos', role='superadmin')

        assert store.identity.name == 'Renamed'
        assert store.identity.role is Role.USER
        assert json.loads(storage['user'])['subcity'] == 'Kirkos'

    def test_update_requires_session(self, store):
        with pytest.raises(RuntimeError):
            store.update_identity(name='x')
