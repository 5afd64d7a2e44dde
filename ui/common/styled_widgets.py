from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence
from PySide6.QtWidgets import QLabel, QPushButton, QSizePolicy


def styled_button(
    label: str, icon: str = "", tooltip: str = "", shortcut: str = "", role: str = None
) -> QPushButton:
    """
    Создаёт стилизованную кнопку с иконкой, подсказкой и шорткатом.

    Parameters
    ----------
    label : str
        Текст кнопки
    icon : str
        Эмоджи или иконка
    tooltip : str
        Всплывающая подсказка; шорткат дописывается к ней
    shortcut : str
        Горячая клавиша, например: "Ctrl+S"
    role : str
        Визуальная роль ("primary", "danger")
    """
    btn = QPushButton(f"{icon} {label}".strip())

    if shortcut:
        btn.setShortcut(QKeySequence(shortcut))
        tooltip = f"{tooltip} ({shortcut})".strip() if tooltip else shortcut
    if tooltip:
        btn.setToolTip(tooltip)
    if role:
        btn.setProperty("role", role)

    btn.setCursor(Qt.PointingHandCursor)
    btn.setMinimumHeight(34)
    btn.setSizePolicy(QSizePolicy.Minimum, QSizePolicy.Fixed)
    return btn


def header_label(text: str, *, size: int = 20) -> QLabel:
    label = QLabel(text)
    label.setProperty("class", "header")
    label.setStyleSheet(f"font-size: {size}pt; font-weight: 600;")
    return label


def muted_label(text: str = "") -> QLabel:
    label = QLabel(text)
    label.setProperty("class", "muted")
    label.setStyleSheet("color: #6b7280;")
    label.setWordWrap(True)
    return label
