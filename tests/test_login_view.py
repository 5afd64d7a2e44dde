import pytest

from fakes import DeferredTaskRunner, FakeSessionProvider
from services.auth.auth_controller import CONFIRMATION_MESSAGE, AuthController
from services.auth.session_service import AuthFailure
from ui import settings as ui_settings
from ui.views.login_view import LoginView


@pytest.fixture
def provider():
    return FakeSessionProvider()


@pytest.fixture
def view(qtbot, provider, sync_runner):
    view = LoginView(AuthController(provider, sync_runner))
    qtbot.addWidget(view)
    return view


def _submit(view, email, password):
    view.email_edit.setText(email)
    view.password_edit.setText(password)
    return view.submit()


def test_sign_in_remembers_email(view, provider):
    signed_in = []
    view.controller.signed_in.connect(signed_in.append)
    assert _submit(view, "user@example.com", "secret1")
    assert len(signed_in) == 1
    assert ui_settings.get_last_email() == "user@example.com"


def test_last_email_is_prefilled(qtbot, provider, sync_runner):
    ui_settings.set_last_email("saved@example.com")
    view = LoginView(AuthController(provider, sync_runner))
    qtbot.addWidget(view)
    assert view.email_edit.text() == "saved@example.com"


def test_short_password_on_sign_up(view, provider):
    view.toggle_mode()
    assert view.sign_up_mode
    assert view.submit_btn.text() == "Зарегистрироваться"

    assert not _submit(view, "new@example.com", "123")
    assert not view.message_label.isHidden()
    assert view.message_label.text() == "Пароль должен содержать не менее 6 символов"
    assert provider.network_calls() == []


def test_auth_error_is_displayed(view, provider):
    provider.sign_in_error = AuthFailure("Invalid login credentials")
    _submit(view, "user@example.com", "wrong-pass")
    assert view.message_label.text() == "Invalid login credentials"
    assert view.submit_btn.isEnabled()


def test_confirmation_message_returns_to_sign_in(view, provider):
    provider.require_confirmation = True
    view.toggle_mode()
    _submit(view, "new@example.com", "secret1")
    assert view.message_label.text() == CONFIRMATION_MESSAGE
    assert not view.sign_up_mode


def test_controls_disabled_while_request_in_flight(qtbot, provider):
    runner = DeferredTaskRunner()
    view = LoginView(AuthController(provider, runner))
    qtbot.addWidget(view)
    _submit(view, "user@example.com", "secret1")

    assert not view.submit_btn.isEnabled()
    assert not view.toggle_btn.isEnabled()
    view.toggle_mode()
    assert not view.sign_up_mode

    runner.run_all()
    assert view.submit_btn.isEnabled()
    assert view.submit_btn.text() == "Войти"
