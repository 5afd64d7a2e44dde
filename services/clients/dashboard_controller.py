from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping

from PySide6.QtCore import QObject, Signal

from services.auth.session_service import SessionProvider
from services.validators import ValidationError, validate_client_data
from ui.common.task_runner import TaskRunner

from .client_filters import DashboardStats
from .client_repository import ClientRepository, ClientRepositoryError
from .dashboard_state import DashboardState, DialogMode, DialogState, ListStatus
from .dto import ClientDTO, ClientDraft

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notification:
    level: str  # "success" | "error" | "info"
    title: str
    message: str


def _error_text(exc: BaseException) -> str:
    if isinstance(exc, ClientRepositoryError):
        return str(exc)
    return "Ошибка соединения с сервером"


class DashboardController(QObject):
    """Контроллер дашборда: единственный владелец списка клиентов.

    Виджеты только сообщают о намерениях (добавить, изменить, удалить),
    локальный список меняется после подтверждения сервером.
    """

    clients_changed = Signal()
    list_status_changed = Signal(object)
    dialog_changed = Signal(object)
    stats_changed = Signal(object)
    notified = Signal(object)
    logged_out = Signal()

    def __init__(
        self,
        repository: ClientRepository,
        session_provider: SessionProvider,
        task_runner: TaskRunner,
        parent: QObject | None = None,
    ):
        super().__init__(parent)
        self.repository = repository
        self.session_provider = session_provider
        self.task_runner = task_runner
        self.state = DashboardState()
        self._pending: set[str] = set()
        self._active = True
        # номер сессии: ответы, начатые до выхода, не попадают в новую
        self._generation = 0

    # --- Свойства для представления ----------------------------------------
    @property
    def clients(self) -> list[ClientDTO]:
        return list(self.state.clients)

    @property
    def visible_clients(self) -> list[ClientDTO]:
        return self.state.visible_clients

    @property
    def status(self) -> ListStatus:
        return self.state.status

    @property
    def dialog(self) -> DialogState:
        return self.state.dialog

    @property
    def search_text(self) -> str:
        return self.state.search_text

    def stats(self) -> DashboardStats:
        return self.state.stats()

    def is_pending(self, action: str) -> bool:
        return action in self._pending

    # --- Служебное -----------------------------------------------------------
    def _run(
        self,
        action: str,
        func: Callable[[], Any],
        on_success: Callable[[Any], None],
        on_error: Callable[[BaseException], None],
    ) -> bool:
        if not self._active:
            logger.debug("Дашборд закрыт, действие %s пропущено", action)
            return False
        if action in self._pending:
            logger.debug("Действие %s уже выполняется", action)
            return False
        self._pending.add(action)
        generation = self._generation

        def is_stale() -> bool:
            if generation != self._generation:
                logger.debug("Ответ на %s от прошлой сессии отброшен", action)
                return True
            self._pending.discard(action)
            return False

        def done(result):
            if not is_stale():
                on_success(result)

        def failed(exc):
            if not is_stale():
                on_error(exc)

        self.task_runner.submit(func, done, failed)
        return True

    def _notify(self, level: str, title: str, message: str) -> None:
        self.notified.emit(Notification(level, title, message))

    def _emit_clients(self) -> None:
        self.clients_changed.emit()
        self.stats_changed.emit(self.state.stats())

    def _emit_dialog(self) -> None:
        self.dialog_changed.emit(self.state.dialog)

    def activate(self) -> None:
        """Снова разрешить операции после нового входа."""
        if not self._active:
            self._generation += 1
        self._active = True

    def _end_session(self) -> None:
        self._active = False
        self._generation += 1
        self._pending.clear()
        self.state.clear()
        self._emit_clients()
        self._emit_dialog()

    # --- Загрузка ------------------------------------------------------------
    def load_clients(self) -> bool:
        if self._active and "load" not in self._pending:
            self.state.begin_loading()
            self.list_status_changed.emit(self.state.status)
        return self._run(
            "load",
            self.repository.list_clients,
            self._on_loaded,
            self._on_load_failed,
        )

    def _on_loaded(self, clients: list[ClientDTO]) -> None:
        self.state.apply_loaded(clients)
        self.list_status_changed.emit(self.state.status)
        self._emit_clients()

    def _on_load_failed(self, exc: BaseException) -> None:
        message = _error_text(exc)
        logger.error("Загрузка клиентов не удалась: %s", exc)
        self.state.apply_load_failed(message)
        self.list_status_changed.emit(self.state.status)
        self._notify("error", "Ошибка", message)

    # --- Поиск ---------------------------------------------------------------
    def set_search_text(self, text: str) -> None:
        if text == self.state.search_text:
            return
        self.state.set_search_text(text)
        self.clients_changed.emit()

    # --- Диалог --------------------------------------------------------------
    def open_create_dialog(self) -> None:
        if self.state.dialog.busy:
            return
        self.state.open_create()
        self._emit_dialog()

    def open_edit_dialog(self, client: ClientDTO) -> None:
        if self.state.dialog.busy:
            return
        self.state.open_edit(client)
        self._emit_dialog()

    def close_dialog(self) -> None:
        if not self.state.dialog.is_open or self.state.dialog.busy:
            return
        self.state.close_dialog()
        self._emit_dialog()

    def submit_dialog(self, data: Mapping[str, Any]) -> bool:
        """Сохранить данные формы; диалог закрывается только после успеха."""
        dialog = self.state.dialog
        if not dialog.is_open:
            logger.debug("Отправка формы при закрытом диалоге проигнорирована")
            return False
        try:
            cleaned = validate_client_data(data)
        except ValidationError as exc:
            self._notify("error", "Проверьте данные", str(exc))
            return False

        if dialog.mode is DialogMode.EDIT and dialog.target is not None:
            target = dialog.target.merged(cleaned)
            action = f"update:{target.id}"
        else:
            target = ClientDraft.from_mapping(cleaned)
            action = "create"
        if self.is_pending(action):
            return False

        # кнопка сохранения блокируется до завершения запроса
        self.state.set_dialog_busy(True)
        self._emit_dialog()
        if action == "create":
            started = self._create_client(target)
        else:
            started = self._update_client(target)
        if not started:
            self.state.set_dialog_busy(False)
            self._emit_dialog()
        return started

    def _finish_dialog(self, success: bool) -> None:
        if not self.state.dialog.busy:
            return
        if success:
            self.state.close_dialog()
        else:
            self.state.set_dialog_busy(False)
        self._emit_dialog()

    # --- Создание ------------------------------------------------------------
    def _create_client(self, draft: ClientDraft) -> bool:
        def on_success(created: ClientDTO) -> None:
            self.state.apply_created(created)
            self._emit_clients()
            self._finish_dialog(True)
            self._notify(
                "success",
                "Клиент добавлен",
                f"{created.name} успешно добавлен(а).",
            )

        def on_error(exc: BaseException) -> None:
            self._finish_dialog(False)
            self._notify("error", "Ошибка", f"{_error_text(exc)}: {draft.name}")

        return self._run(
            "create",
            lambda: self.repository.create_client(draft),
            on_success,
            on_error,
        )

    # --- Изменение -----------------------------------------------------------
    def _update_client(self, client: ClientDTO) -> bool:
        def on_success(_result) -> None:
            if not self.state.apply_updated(client):
                logger.warning("Клиент id=%s отсутствует в локальном списке", client.id)
            self._emit_clients()
            self._finish_dialog(True)
            self._notify(
                "success",
                "Клиент обновлён",
                f"Данные клиента {client.name} обновлены.",
            )

        def on_error(exc: BaseException) -> None:
            self._finish_dialog(False)
            self._notify("error", "Ошибка", f"{_error_text(exc)}: {client.name}")

        return self._run(
            f"update:{client.id}",
            lambda: self.repository.update_client(client),
            on_success,
            on_error,
        )

    # --- Удаление ------------------------------------------------------------
    def delete_client(self, client: ClientDTO) -> bool:
        """Удалить клиента; подтверждение запрашивается до вызова."""

        def on_success(_result) -> None:
            removed = self.state.apply_deleted(client.id)
            self._emit_clients()
            name = removed.name if removed else client.name
            self._notify("success", "Клиент удалён", f"{name} удалён(а) из списка.")

        def on_error(exc: BaseException) -> None:
            self._notify("error", "Ошибка", f"{_error_text(exc)}: {client.name}")

        return self._run(
            f"delete:{client.id}",
            lambda: self.repository.delete_client(client.id),
            on_success,
            on_error,
        )

    # --- Выход ---------------------------------------------------------------
    def logout(self) -> bool:
        def on_success(_result) -> None:
            self._end_session()
            self._notify("info", "Выход", "Вы вышли из аккаунта.")
            self.logged_out.emit()

        def on_error(exc: BaseException) -> None:
            logger.error("Не удалось завершить сессию: %s", exc)
            self._notify("error", "Ошибка", f"Не удалось выйти: {exc}")

        return self._run("logout", self.session_provider.sign_out, on_success, on_error)

    def reset(self) -> None:
        """Сбросить состояние при внешнем завершении сессии."""
        self._end_session()


__all__ = ["DashboardController", "Notification"]
