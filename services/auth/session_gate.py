from __future__ import annotations

import logging
from typing import Any

from PySide6.QtCore import QObject, Signal, Slot

from .session_service import SessionProvider, Unsubscribe

logger = logging.getLogger(__name__)


class SessionGate(QObject):
    """Проверяет наличие сессии и следит за её сменой.

    ``authenticated`` испускается при появлении сессии, ``unauthenticated``
    при её отсутствии на старте или после выхода.
    """

    authenticated = Signal(object)
    unauthenticated = Signal()

    # уведомления Supabase могут прийти из чужого потока
    _session_event = Signal(str, object)

    def __init__(self, session_provider: SessionProvider, parent: QObject | None = None):
        super().__init__(parent)
        self._provider = session_provider
        self._unsubscribe: Unsubscribe | None = None
        self._authenticated: bool | None = None
        self._session_event.connect(self._on_session_event)

    @property
    def is_authenticated(self) -> bool:
        return bool(self._authenticated)

    @property
    def is_subscribed(self) -> bool:
        return self._unsubscribe is not None

    def start(self) -> None:
        try:
            session = self._provider.get_session()
        except Exception:  # noqa: BLE001 - считаем, что сессии нет
            logger.exception("Не удалось проверить текущую сессию")
            session = None
        self._apply(session)

        if self._unsubscribe is None:
            self._unsubscribe = self._provider.subscribe(self._listener)

    def stop(self) -> None:
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()
            logger.debug("Подписка на смену сессии снята")

    def _listener(self, event: Any, session: Any) -> None:
        self._session_event.emit(str(event), session)

    @Slot(str, object)
    def _on_session_event(self, event: str, session: Any) -> None:
        logger.debug("Событие сессии: %s", event)
        self._apply(session)

    def _apply(self, session: Any) -> None:
        has_session = session is not None
        if has_session and not self._authenticated:
            self._authenticated = True
            self.authenticated.emit(session)
        elif not has_session and self._authenticated is not False:
            self._authenticated = False
            self.unauthenticated.emit()


__all__ = ["SessionGate"]
