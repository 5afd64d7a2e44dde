import logging

from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QVBoxLayout,
)

from services.clients.dashboard_controller import DashboardController
from services.clients.dashboard_state import DialogMode, DialogState
from services.clients.dto import CLIENT_FIELDS, ClientDTO
from services.validators import CLIENT_FIELD_LABELS, ValidationError, validate_client_data
from ui.common.styled_widgets import header_label, muted_label, styled_button


logger = logging.getLogger(__name__)

PLACEHOLDERS = {
    "name": "Иван Иванов",
    "email": "ivan@example.com",
    "company": "ООО «Ромашка»",
    "phone": "+7 (900) 000-00-00",
}


class ClientForm(QDialog):
    """Диалог создания и редактирования клиента.

    Сохранение идёт через контроллер дашборда; окно закрывается, когда
    контроллер сообщает об успешном сохранении, а при ошибке остаётся
    открытым с введёнными данными.
    """

    def __init__(self, controller: DashboardController, parent=None):
        super().__init__(parent)
        self._controller = controller
        state = controller.dialog
        self.mode = state.mode
        self.instance: ClientDTO | None = state.target
        self._busy = False
        self.fields: dict[str, QLineEdit] = {}

        is_edit = self.mode is DialogMode.EDIT
        self.setWindowTitle("Редактировать клиента" if is_edit else "Добавить клиента")
        self.setMinimumWidth(480)

        self.layout = QVBoxLayout(self)
        self.layout.addWidget(
            header_label("Редактировать клиента" if is_edit else "Новый клиент", size=16)
        )
        self.layout.addWidget(
            muted_label(
                "Измените данные клиента ниже"
                if is_edit
                else "Заполните данные, чтобы добавить клиента"
            )
        )

        self.form_layout = QFormLayout()
        self.layout.addLayout(self.form_layout)
        self.build_form()
        if self.instance:
            self.fill_from_obj(self.instance)

        self.error_label = QLabel()
        self.error_label.setStyleSheet("color: #b91c1c;")
        self.error_label.setWordWrap(True)
        self.error_label.hide()
        self.layout.addWidget(self.error_label)

        self._create_button_panel(is_edit)
        controller.dialog_changed.connect(self._on_dialog_changed)
        self._attached = True

    # ------------------------------------------------------------------
    # UI
    # ------------------------------------------------------------------
    def build_form(self):
        for name in CLIENT_FIELDS:
            edit = QLineEdit()
            edit.setPlaceholderText(PLACEHOLDERS[name])
            edit.textChanged.connect(self._clear_error)
            self.fields[name] = edit
            self.form_layout.addRow(f"{CLIENT_FIELD_LABELS[name]} *", edit)

    def _create_button_panel(self, is_edit: bool):
        btns = QHBoxLayout()
        self._save_text = "💾 Сохранить изменения" if is_edit else "➕ Добавить клиента"
        self.save_btn = styled_button(
            "Сохранить изменения" if is_edit else "Добавить клиента",
            icon="💾" if is_edit else "➕",
            role="primary",
            shortcut="Ctrl+S",
        )
        self.save_btn.setDefault(True)
        self.cancel_btn = styled_button("Отмена", icon="❌", shortcut="Esc")

        self.save_btn.clicked.connect(self.save)
        self.cancel_btn.clicked.connect(self.reject)
        btns.addStretch()
        btns.addWidget(self.cancel_btn)
        btns.addWidget(self.save_btn)
        self.layout.addLayout(btns)

    # ------------------------------------------------------------------
    # Данные формы
    # ------------------------------------------------------------------
    def fill_from_obj(self, obj: ClientDTO):
        for name, widget in self.fields.items():
            widget.setText(getattr(obj, name, "") or "")

    def collect_data(self) -> dict:
        return {name: widget.text().strip() for name, widget in self.fields.items()}

    def _clear_error(self, *_):
        self.error_label.hide()

    def _show_validation_error(self, exc: ValidationError):
        self.error_label.setText(str(exc))
        self.error_label.show()
        for name in exc.fields:
            if name in self.fields:
                self.fields[name].setFocus()
                break

    # ------------------------------------------------------------------
    # Сохранение
    # ------------------------------------------------------------------
    def save(self):
        if self._busy:
            return
        data = self.collect_data()
        logger.debug("📤 Сохранение формы клиента: %r", data)
        try:
            validate_client_data(data)
        except ValidationError as exc:
            self._show_validation_error(exc)
            return
        self._controller.submit_dialog(data)

    def set_busy(self, busy: bool):
        self._busy = busy
        for widget in self.fields.values():
            widget.setEnabled(not busy)
        self.save_btn.setEnabled(not busy)
        self.cancel_btn.setEnabled(not busy)
        self.save_btn.setText("⏳ Сохранение..." if busy else self._save_text)

    @property
    def busy(self) -> bool:
        return self._busy

    def _on_dialog_changed(self, state: DialogState):
        if state.mode is DialogMode.CLOSED:
            self.set_busy(False)
            self._detach()
            super().accept()
            return
        self.set_busy(state.busy)

    def _detach(self):
        if not self._attached:
            return
        self._attached = False
        self._controller.dialog_changed.disconnect(self._on_dialog_changed)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------
    def reject(self):
        if self._busy:
            return
        self._detach()
        self._controller.close_dialog()
        super().reject()

    def closeEvent(self, event):
        if self._busy:
            event.ignore()
            return
        super().closeEvent(event)


__all__ = ["ClientForm"]
