from __future__ import annotations

from PySide6.QtWidgets import QFrame, QLabel, QVBoxLayout, QWidget

from ui.common.styled_widgets import muted_label


class StatCard(QFrame):
    """Небольшой виджет-счётчик для шапки дашборда."""

    def __init__(self, title: str, value: int = 0, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFrameShape(QFrame.StyledPanel)
        layout = QVBoxLayout(self)
        self.title_label = muted_label(title)
        self.value_label = QLabel()
        self.value_label.setStyleSheet("font-size: 22pt; font-weight: 700; color: #1d4ed8;")
        layout.addWidget(self.title_label)
        layout.addWidget(self.value_label)
        self.set_value(value)

    def set_value(self, value: int) -> None:
        self.value_label.setText(str(value))

    @property
    def value(self) -> int:
        return int(self.value_label.text())


__all__ = ["StatCard"]
