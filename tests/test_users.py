"""
Tests for demo authentication and the local user registry
"""
import json

from auth.session import Role
from auth.users import DEFAULT_AVATAR, LocalUserRegistry, authenticate
from config.settings import DEMO_PASSWORD, DEMO_USER


class TestAuthenticate:

    def test_demo_credentials(self):
        identity, message = authenticate(DEMO_USER['email'], DEMO_PASSWORD,
                                         DEMO_USER['email'], DEMO_PASSWORD)
        assert message == ""
        assert identity.role is Role.SUPERADMIN
        assert identity.name == 'Test User'
        assert identity.subcity == 'DemoCity'

    def test_wrong_password(self):
        identity, message = authenticate(DEMO_USER['email'], 'nope', DEMO_USER['email'], DEMO_PASSWORD)
        assert identity is None
        assert message == "Invalid email or password"


class TestLocalUserRegistry:

    def test_register_appends_user(self, clock):
        storage = {}
        registry = LocalUserRegistry(storage, clock=clock)

        identity, message = registry.register("Alem", "alem@example.com")

        assert message == ""
        assert identity.role is Role.USER
        assert identity.avatar == DEFAULT_AVATAR
        assert identity.id == str(int(clock() * 1000))
        assert json.loads(storage['users'])[0]['email'] == "alem@example.com"

    def test_duplicate_email_refused(self, clock):
        registry = LocalUserRegistry({}, clock=clock)
        registry.register("Alem", "alem@example.com")
        identity, message = registry.register("Other", "alem@example.com")
        assert identity is None
        assert message == "Email already registered"
        assert len(registry.all()) == 1

    def test_corrupt_list_reads_empty(self):
        assert LocalUserRegistry({'users': '{oops'}).all() == []
        assert LocalUserRegistry({'users': '{"a": 1}'}).all() == []
