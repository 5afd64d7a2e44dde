from __future__ import annotations

import logging

from PySide6.QtCore import QObject, Signal

from services.validators import ValidationError, validate_credentials
from ui.common.task_runner import TaskRunner

from .session_service import AuthFailure, AuthResult, SessionProvider

logger = logging.getLogger(__name__)

CONFIRMATION_MESSAGE = (
    "Аккаунт создан. Подтвердите email по ссылке из письма, затем войдите."
)


class AuthController(QObject):
    """Вход и регистрация: одна попытка на нажатие, без автоповторов."""

    signed_in = Signal(object)
    signed_up = Signal(str)
    failed = Signal(str)
    busy_changed = Signal(bool)

    def __init__(
        self,
        session_provider: SessionProvider,
        task_runner: TaskRunner,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self._provider = session_provider
        self._runner = task_runner
        self._busy = False

    @property
    def busy(self) -> bool:
        return self._busy

    def _set_busy(self, busy: bool) -> None:
        if self._busy != busy:
            self._busy = busy
            self.busy_changed.emit(busy)

    def sign_in(self, email: str, password: str) -> bool:
        if self._busy:
            return False
        try:
            email = validate_credentials(email, password)
        except ValidationError as exc:
            self.failed.emit(str(exc))
            return False

        def on_success(result: AuthResult) -> None:
            self._set_busy(False)
            self.signed_in.emit(result.session)

        self._set_busy(True)
        self._runner.submit(
            lambda: self._provider.sign_in(email, password), on_success, self._on_error
        )
        return True

    def sign_up(self, email: str, password: str) -> bool:
        if self._busy:
            return False
        try:
            email = validate_credentials(email, password, sign_up=True)
        except ValidationError as exc:
            self.failed.emit(str(exc))
            return False

        def on_success(result: AuthResult) -> None:
            self._set_busy(False)
            if result.needs_confirmation:
                self.signed_up.emit(CONFIRMATION_MESSAGE)
            else:
                self.signed_in.emit(result.session)

        self._set_busy(True)
        self._runner.submit(
            lambda: self._provider.sign_up(email, password), on_success, self._on_error
        )
        return True

    def _on_error(self, exc: BaseException) -> None:
        self._set_busy(False)
        if isinstance(exc, AuthFailure):
            message = str(exc)
        else:
            logger.error("Ошибка обращения к сервису авторизации: %s", exc)
            message = f"Сервис авторизации недоступен: {exc}"
        self.failed.emit(message)


__all__ = ["AuthController", "CONFIRMATION_MESSAGE"]
