from __future__ import annotations

from html import escape

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QFrame, QHBoxLayout, QLabel, QVBoxLayout, QWidget

from services.clients.dto import ClientDTO
from ui.common.message_boxes import confirm_delete
from ui.common.styled_widgets import muted_label, styled_button


def initial_of(name: str) -> str:
    name = (name or "").strip()
    return name[0].upper() if name else "?"


def _link(scheme: str, value: str) -> str:
    safe = escape(value or "")
    return f'<a href="{scheme}:{safe}">{safe}</a>'


class ClientCard(QFrame):
    """Карточка клиента с кнопками изменения и удаления.

    Карточка не меняет данные сама, а только сообщает о намерении.
    """

    edit_requested = Signal(object)
    delete_requested = Signal(object)

    def __init__(
        self,
        client: ClientDTO,
        parent: QWidget | None = None,
        *,
        confirm_func=None,
    ) -> None:
        super().__init__(parent)
        self.client = client
        self._confirm = confirm_func
        self.setObjectName("clientCard")
        self.setFrameShape(QFrame.StyledPanel)
        self.setMinimumWidth(280)

        layout = QVBoxLayout(self)

        header = QHBoxLayout()
        self.avatar_label = QLabel(initial_of(client.name))
        self.avatar_label.setAlignment(Qt.AlignCenter)
        self.avatar_label.setFixedSize(44, 44)
        self.avatar_label.setStyleSheet(
            "border-radius: 10px; background: #e0e7ff; color: #3730a3;"
            "font-size: 16pt; font-weight: 700;"
        )
        header.addWidget(self.avatar_label)

        titles = QVBoxLayout()
        self.name_label = QLabel(f"<b>{escape(client.name)}</b>")
        self.company_label = muted_label(f"🏢 {escape(client.company)}")
        titles.addWidget(self.name_label)
        titles.addWidget(self.company_label)
        header.addLayout(titles)
        header.addStretch()
        layout.addLayout(header)

        self.email_label = QLabel(f"✉️ {_link('mailto', client.email)}")
        self.phone_label = QLabel(f"📞 {_link('tel', client.phone)}")
        for label in (self.email_label, self.phone_label):
            label.setTextFormat(Qt.RichText)
            label.setOpenExternalLinks(True)
            layout.addWidget(label)

        buttons = QHBoxLayout()
        self.edit_btn = styled_button("Изменить", icon="✏️")
        self.delete_btn = styled_button("Удалить", icon="🗑", role="danger")
        self.edit_btn.clicked.connect(self._on_edit)
        self.delete_btn.clicked.connect(self._on_delete)
        buttons.addWidget(self.edit_btn)
        buttons.addWidget(self.delete_btn)
        layout.addLayout(buttons)

    def _on_edit(self) -> None:
        self.edit_requested.emit(self.client)

    def _on_delete(self) -> None:
        confirm = self._confirm or confirm_delete
        if confirm(self.client.name, parent=self):
            self.delete_requested.emit(self.client)


__all__ = ["ClientCard", "initial_of"]
