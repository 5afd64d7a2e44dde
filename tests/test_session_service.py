from types import SimpleNamespace

import pytest
from supabase import AuthError

from services.auth.session_service import AuthFailure, SupabaseSessionProvider


class FakeAuth:
    def __init__(self):
        self.calls = []
        self.error = None
        self.session = None
        self.unsubscribed = False

    def _maybe_fail(self):
        if self.error is not None:
            raise self.error

    def get_session(self):
        return self.session

    def sign_in_with_password(self, credentials):
        self.calls.append(("sign_in", credentials))
        self._maybe_fail()
        return SimpleNamespace(session="session", user=SimpleNamespace(email=credentials["email"]))

    def sign_up(self, credentials):
        self.calls.append(("sign_up", credentials))
        self._maybe_fail()
        return SimpleNamespace(session=None, user=SimpleNamespace(email=credentials["email"]))

    def sign_out(self):
        self.calls.append(("sign_out",))
        self._maybe_fail()

    def on_auth_state_change(self, callback):
        self.calls.append(("subscribe", callback))

        def unsubscribe():
            self.unsubscribed = True

        return SimpleNamespace(unsubscribe=unsubscribe)


@pytest.fixture
def auth():
    return FakeAuth()


@pytest.fixture
def provider(auth):
    return SupabaseSessionProvider(SimpleNamespace(auth=auth))


def test_sign_in_returns_session(provider, auth):
    result = provider.sign_in("a@b.c", "secret1")
    assert result.session == "session"
    assert not result.needs_confirmation
    assert auth.calls == [("sign_in", {"email": "a@b.c", "password": "secret1"})]


def test_sign_up_without_session_needs_confirmation(provider):
    assert provider.sign_up("a@b.c", "secret1").needs_confirmation


def test_auth_errors_keep_service_message(provider, auth):
    auth.error = AuthError("Invalid login credentials", None)
    with pytest.raises(AuthFailure, match="Invalid login credentials"):
        provider.sign_in("a@b.c", "bad")


def test_other_errors_propagate(provider, auth):
    auth.error = ConnectionError("offline")
    with pytest.raises(ConnectionError):
        provider.sign_out()


def test_subscribe_returns_unsubscribe(provider, auth):
    listener = lambda event, session: None  # noqa: E731
    unsubscribe = provider.subscribe(listener)
    assert auth.calls[-1] == ("subscribe", listener)
    unsubscribe()
    assert auth.unsubscribed
