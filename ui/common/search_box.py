from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QLineEdit, QWidget


class SearchBox(QWidget):
    """Строка поиска с подписью о количестве найденных записей."""

    def __init__(self, search_callback, parent=None, placeholder="Поиск клиентов..."):
        """
        search_callback: вызывается с новым текстом при каждом изменении
        """
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(6)

        layout.addWidget(QLabel("🔍"))
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText(placeholder)
        self.search_input.setClearButtonEnabled(True)
        self.search_input.setMinimumWidth(320)
        self.search_input.textChanged.connect(search_callback)
        layout.addWidget(self.search_input)

        self.count_label = QLabel()
        self.count_label.setStyleSheet("color: #6b7280;")
        self.count_label.hide()
        layout.addWidget(self.count_label)

    def keyPressEvent(self, event):
        if event.key() == Qt.Key_Escape and self.search_input.text():
            self.search_input.clear()
            return
        super().keyPressEvent(event)

    def get_text(self) -> str:
        return self.search_input.text().strip()

    def set_text(self, text: str):
        self.search_input.setText(text)

    def set_result_count(self, shown: int, total: int):
        """Показывает «Найдено: N из M», пока в строке есть запрос."""
        if self.get_text():
            self.count_label.setText(f"Найдено: {shown} из {total}")
            self.count_label.show()
        else:
            self.count_label.hide()
