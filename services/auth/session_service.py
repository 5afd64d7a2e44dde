"""Работа с сессией пользователя через Supabase Auth."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Protocol

from supabase import AuthError

logger = logging.getLogger(__name__)

SessionListener = Callable[[str, Any], None]
Unsubscribe = Callable[[], None]


class AuthFailure(RuntimeError):
    """Отказ сервиса авторизации; текст показывается пользователю как есть."""


@dataclass(frozen=True)
class AuthResult:
    session: Any | None
    user: Any | None = None

    @property
    def needs_confirmation(self) -> bool:
        """Аккаунт создан, но вход возможен только после подтверждения email."""
        return self.session is None


class SessionProvider(Protocol):
    """Интерфейс источника сессии, от которого зависят контроллеры."""

    def get_session(self) -> Any | None: ...

    def sign_in(self, email: str, password: str) -> AuthResult: ...

    def sign_up(self, email: str, password: str) -> AuthResult: ...

    def sign_out(self) -> None: ...

    def subscribe(self, listener: SessionListener) -> Unsubscribe: ...


class SupabaseSessionProvider:
    """Реализация :class:`SessionProvider` поверх ``client.auth``."""

    def __init__(self, client: Any) -> None:
        self._auth = client.auth

    def get_session(self) -> Any | None:
        return self._auth.get_session()

    def sign_in(self, email: str, password: str) -> AuthResult:
        try:
            response = self._auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            logger.warning("Вход отклонён для %s: %s", email, exc)
            raise AuthFailure(str(exc)) from exc
        logger.info("Вход выполнен: %s", email)
        return AuthResult(session=response.session, user=response.user)

    def sign_up(self, email: str, password: str) -> AuthResult:
        try:
            response = self._auth.sign_up({"email": email, "password": password})
        except AuthError as exc:
            logger.warning("Регистрация отклонена для %s: %s", email, exc)
            raise AuthFailure(str(exc)) from exc
        logger.info("Зарегистрирован аккаунт: %s", email)
        return AuthResult(session=response.session, user=response.user)

    def sign_out(self) -> None:
        try:
            self._auth.sign_out()
        except AuthError as exc:
            raise AuthFailure(str(exc)) from exc
        logger.info("Сессия завершена")

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        subscription = self._auth.on_auth_state_change(listener)
        return subscription.unsubscribe


__all__ = [
    "AuthFailure",
    "AuthResult",
    "SessionListener",
    "SessionProvider",
    "SupabaseSessionProvider",
    "Unsubscribe",
]
