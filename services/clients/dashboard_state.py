"""Состояние дашборда клиентов без привязки к Qt.

Список, строка поиска и состояние диалога меняются только через методы
этого класса; контроллер вызывает их после завершения удалённых операций.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from .client_filters import DashboardStats, compute_stats, filter_clients
from .dto import ClientDTO


class ListStatus(str, Enum):
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


class DialogMode(str, Enum):
    CLOSED = "closed"
    CREATE = "create"
    EDIT = "edit"


@dataclass(frozen=True)
class DialogState:
    mode: DialogMode = DialogMode.CLOSED
    target: ClientDTO | None = None
    busy: bool = False

    @property
    def is_open(self) -> bool:
        return self.mode is not DialogMode.CLOSED


@dataclass
class DashboardState:
    status: ListStatus = ListStatus.LOADING
    clients: list[ClientDTO] = field(default_factory=list)
    error: str | None = None
    search_text: str = ""
    dialog: DialogState = field(default_factory=DialogState)

    # --- Список -----------------------------------------------------------
    def begin_loading(self) -> None:
        self.status = ListStatus.LOADING
        self.error = None

    def apply_loaded(self, clients: list[ClientDTO]) -> None:
        self.clients = list(clients)
        self.status = ListStatus.LOADED
        self.error = None

    def apply_load_failed(self, message: str) -> None:
        # прежний список остаётся на экране
        self.status = ListStatus.ERROR
        self.error = message

    def apply_created(self, client: ClientDTO) -> None:
        self.clients = [client] + [c for c in self.clients if c.id != client.id]

    def apply_updated(self, client: ClientDTO) -> bool:
        for index, current in enumerate(self.clients):
            if current.id == client.id:
                self.clients[index] = client
                return True
        return False

    def apply_deleted(self, client_id: str) -> ClientDTO | None:
        for index, current in enumerate(self.clients):
            if current.id == client_id:
                return self.clients.pop(index)
        return None

    def clear(self) -> None:
        self.clients = []
        self.search_text = ""
        self.status = ListStatus.LOADING
        self.error = None
        self.dialog = DialogState()

    # --- Поиск ------------------------------------------------------------
    def set_search_text(self, text: str) -> None:
        self.search_text = text or ""

    @property
    def visible_clients(self) -> list[ClientDTO]:
        return filter_clients(self.clients, self.search_text)

    def stats(self) -> DashboardStats:
        return compute_stats(self.clients)

    # --- Диалог -----------------------------------------------------------
    def open_create(self) -> None:
        self.dialog = DialogState(mode=DialogMode.CREATE)

    def open_edit(self, client: ClientDTO) -> None:
        self.dialog = DialogState(mode=DialogMode.EDIT, target=client)

    def close_dialog(self) -> None:
        self.dialog = DialogState()

    def set_dialog_busy(self, busy: bool) -> None:
        if self.dialog.is_open:
            self.dialog = replace(self.dialog, busy=busy)


__all__ = ["DashboardState", "DialogMode", "DialogState", "ListStatus"]
