import logging

from PySide6.QtWidgets import QMessageBox, QWidget

logger = logging.getLogger(__name__)


def confirm(text: str, title="Подтверждение", parent: QWidget | None = None) -> bool:
    return (
        QMessageBox.question(
            parent,
            title,
            text,
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        == QMessageBox.Yes
    )


def confirm_delete(name: str, parent: QWidget | None = None) -> bool:
    return confirm(
        f"Клиент {name} будет удалён из списка без возможности восстановления.\n"
        "Продолжить?",
        title="Удалить клиента?",
        parent=parent,
    )


def show_error(message: str, title="Ошибка", parent: QWidget | None = None):
    logger.error("❌ UI ошибка: %s", message)
    QMessageBox.critical(parent, title, message)

