from __future__ import annotations

import logging

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QScrollArea,
    QVBoxLayout,
    QWidget,
)

from services.clients.client_filters import DashboardStats
from services.clients.dashboard_controller import DashboardController
from services.clients.dashboard_state import DialogState, ListStatus
from services.export_service import export_clients_to_csv
from ui.common.message_boxes import show_error
from ui.common.search_box import SearchBox
from ui.common.styled_widgets import header_label, muted_label, styled_button
from ui.forms.client_form import ClientForm
from ui.widgets.card_grid import CardGrid
from ui.widgets.client_card import ClientCard
from ui.widgets.stat_card import StatCard

logger = logging.getLogger(__name__)


class DashboardView(QWidget):
    """Экран со списком клиентов, поиском и счётчиками."""

    data_loaded = Signal(int)

    def __init__(self, controller: DashboardController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.form: ClientForm | None = None

        self.layout = QVBoxLayout(self)
        self._build_header()
        self._build_actions()
        self._build_stats()
        self._build_content()

        controller.clients_changed.connect(self.render_clients)
        controller.list_status_changed.connect(self.on_status_changed)
        controller.stats_changed.connect(self.update_stats)
        controller.dialog_changed.connect(self.on_dialog_changed)

        self.update_stats(controller.stats())
        self.render_clients()

    # --- Построение интерфейса --------------------------------------------
    def _build_header(self):
        header = QHBoxLayout()
        titles = QVBoxLayout()
        titles.addWidget(header_label("👥 Клиенты"))
        self.user_label = muted_label("Управляйте клиентами в одном месте")
        titles.addWidget(self.user_label)
        header.addLayout(titles)
        header.addStretch()

        self.refresh_btn = styled_button("Обновить", icon="🔄", shortcut="F5")
        self.refresh_btn.clicked.connect(self.refresh)
        header.addWidget(self.refresh_btn)

        self.export_btn = styled_button("Экспорт CSV", icon="📤")
        self.export_btn.clicked.connect(lambda: self.export_csv())
        header.addWidget(self.export_btn)

        self.logout_btn = styled_button("Выйти", icon="🚪", role="danger")
        self.logout_btn.clicked.connect(self.controller.logout)
        header.addWidget(self.logout_btn)
        self.layout.addLayout(header)

    def _build_actions(self):
        actions = QHBoxLayout()
        self.search_box = SearchBox(self.controller.set_search_text, parent=self)
        actions.addWidget(self.search_box)
        actions.addStretch()
        self.add_btn = styled_button(
            "Добавить клиента", icon="➕", role="primary", shortcut="Ctrl+N"
        )
        self.add_btn.clicked.connect(self.add_new)
        actions.addWidget(self.add_btn)
        self.layout.addLayout(actions)

    def _build_stats(self):
        stats = QHBoxLayout()
        self.total_card = StatCard("Всего клиентов")
        self.active_card = StatCard("Активны сегодня")
        self.new_card = StatCard("Новые за неделю")
        for card in (self.total_card, self.active_card, self.new_card):
            stats.addWidget(card)
        self.layout.addLayout(stats)

    def _build_content(self):
        self.status_label = QLabel()
        self.status_label.setAlignment(Qt.AlignCenter)
        self.status_label.hide()
        self.layout.addWidget(self.status_label)

        self.scroll = QScrollArea()
        self.scroll.setWidgetResizable(True)
        self.content = QWidget()
        content_layout = QVBoxLayout(self.content)
        self.grid = CardGrid(self.content)
        content_layout.addWidget(self.grid)

        self.empty_widget = QWidget(self.content)
        empty_layout = QVBoxLayout(self.empty_widget)
        self.empty_title = QLabel("<h3>Клиенты не найдены</h3>")
        self.empty_title.setAlignment(Qt.AlignCenter)
        self.empty_hint = muted_label()
        self.empty_hint.setAlignment(Qt.AlignCenter)
        empty_layout.addWidget(self.empty_title)
        empty_layout.addWidget(self.empty_hint)
        content_layout.addWidget(self.empty_widget)
        content_layout.addStretch()

        self.scroll.setWidget(self.content)
        self.layout.addWidget(self.scroll)

    # --- Отображение --------------------------------------------------------
    def set_user(self, email: str | None):
        self.user_label.setText(
            f"Вы вошли как {email}" if email else "Управляйте клиентами в одном месте"
        )

    def render_clients(self):
        clients = self.controller.visible_clients
        cards = []
        for client in clients:
            card = ClientCard(client)
            card.edit_requested.connect(self.controller.open_edit_dialog)
            card.delete_requested.connect(self.controller.delete_client)
            cards.append(card)
        self.grid.set_cards(cards)
        self.search_box.set_result_count(len(clients), len(self.controller.clients))

        is_empty = not clients
        self.empty_widget.setVisible(is_empty)
        if is_empty:
            self.empty_hint.setText(
                "Попробуйте изменить условия поиска"
                if self.controller.search_text.strip()
                else "Начните с добавления первого клиента"
            )
        self.data_loaded.emit(len(clients))

    def on_status_changed(self, status: ListStatus):
        if status is ListStatus.LOADING:
            self.status_label.setText("⏳ Загрузка клиентов...")
            self.status_label.show()
        elif status is ListStatus.ERROR:
            error = self.controller.state.error or "Не удалось загрузить клиентов"
            self.status_label.setText(f"⚠️ {error}. Нажмите «Обновить», чтобы повторить.")
            self.status_label.show()
        else:
            self.status_label.hide()
        self.refresh_btn.setEnabled(status is not ListStatus.LOADING)

    def update_stats(self, stats: DashboardStats):
        self.total_card.set_value(stats.total)
        self.active_card.set_value(stats.active_today)
        self.new_card.set_value(stats.new_this_week)

    def on_dialog_changed(self, state: DialogState):
        if state.is_open and self.form is None:
            self.form = ClientForm(self.controller, parent=self)
            self.form.finished.connect(self._on_form_finished)
            self.form.open()

    def _on_form_finished(self, _result: int):
        self.form = None

    # --- Действия ------------------------------------------------------------
    def refresh(self):
        self.controller.load_clients()

    def add_new(self):
        self.controller.open_create_dialog()

    def export_csv(self, path: str | None = None):
        if path is None:
            path, _ = QFileDialog.getSaveFileName(
                self, "Экспорт клиентов", "clients.csv", "CSV (*.csv)"
            )
        if not path:
            return None
        try:
            return export_clients_to_csv(path, self.controller.visible_clients)
        except OSError as exc:
            logger.exception("Не удалось сохранить CSV")
            show_error(f"Не удалось сохранить файл: {exc}", parent=self)
            return None


__all__ = ["DashboardView"]
