from __future__ import annotations

import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFormLayout, QFrame, QLabel, QLineEdit, QVBoxLayout, QWidget

from services.auth.auth_controller import AuthController
from ui import settings as ui_settings
from ui.common.styled_widgets import header_label, muted_label, styled_button

logger = logging.getLogger(__name__)


class LoginView(QWidget):
    """Экран входа и регистрации."""

    def __init__(self, controller: AuthController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.sign_up_mode = False

        outer = QVBoxLayout(self)
        outer.addStretch()
        self.panel = QFrame()
        self.panel.setFrameShape(QFrame.StyledPanel)
        self.panel.setMaximumWidth(420)
        outer.addWidget(self.panel, alignment=Qt.AlignHCenter)
        outer.addStretch()

        layout = QVBoxLayout(self.panel)
        self.title_label = header_label("👋 Добро пожаловать")
        self.subtitle_label = muted_label()
        layout.addWidget(self.title_label)
        layout.addWidget(self.subtitle_label)

        form = QFormLayout()
        self.email_edit = QLineEdit()
        self.email_edit.setPlaceholderText("you@example.com")
        self.email_edit.setText(ui_settings.get_last_email())
        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.Password)
        self.password_edit.setPlaceholderText("Не менее 6 символов")
        self.password_edit.returnPressed.connect(self.submit)
        form.addRow("Email", self.email_edit)
        form.addRow("Пароль", self.password_edit)
        layout.addLayout(form)

        self.message_label = QLabel()
        self.message_label.setWordWrap(True)
        self.message_label.hide()
        layout.addWidget(self.message_label)

        self.submit_btn = styled_button("Войти", role="primary")
        self.submit_btn.clicked.connect(self.submit)
        layout.addWidget(self.submit_btn)

        self.toggle_btn = styled_button("")
        self.toggle_btn.setFlat(True)
        self.toggle_btn.clicked.connect(self.toggle_mode)
        layout.addWidget(self.toggle_btn)

        controller.busy_changed.connect(self.set_busy)
        controller.failed.connect(self.show_error)
        controller.signed_up.connect(self.show_message)
        self._update_texts()

    def _update_texts(self):
        if self.sign_up_mode:
            self.title_label.setText("📝 Регистрация")
            self.subtitle_label.setText("Создайте аккаунт, чтобы управлять клиентами")
            self.submit_btn.setText("Зарегистрироваться")
            self.toggle_btn.setText("Уже есть аккаунт? Войти")
        else:
            self.title_label.setText("👋 Добро пожаловать")
            self.subtitle_label.setText("Войдите, чтобы продолжить работу")
            self.submit_btn.setText("Войти")
            self.toggle_btn.setText("Нет аккаунта? Зарегистрироваться")

    def toggle_mode(self):
        if self.controller.busy:
            return
        self.sign_up_mode = not self.sign_up_mode
        self.message_label.hide()
        self._update_texts()

    def submit(self):
        email = self.email_edit.text()
        password = self.password_edit.text()
        self.message_label.hide()
        if self.sign_up_mode:
            started = self.controller.sign_up(email, password)
        else:
            started = self.controller.sign_in(email, password)
        if started:
            ui_settings.set_last_email(email.strip())
        return started

    def set_busy(self, busy: bool):
        self.submit_btn.setEnabled(not busy)
        self.toggle_btn.setEnabled(not busy)
        self.email_edit.setEnabled(not busy)
        self.password_edit.setEnabled(not busy)
        if busy:
            self.submit_btn.setText("⏳ Подождите...")
        else:
            self._update_texts()

    def show_error(self, message: str):
        self.message_label.setStyleSheet("color: #b91c1c;")
        self.message_label.setText(message)
        self.message_label.show()

    def show_message(self, message: str):
        self.message_label.setStyleSheet("color: #15803d;")
        self.message_label.setText(message)
        self.message_label.show()
        self.sign_up_mode = False
        self._update_texts()

    def reset(self):
        """Очищает пароль и сообщения при возврате на экран входа."""
        self.password_edit.clear()
        self.message_label.hide()
        self.set_busy(False)


__all__ = ["LoginView"]
