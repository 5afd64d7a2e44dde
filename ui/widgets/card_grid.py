from __future__ import annotations

from typing import Iterable, List

from PySide6.QtWidgets import QGridLayout, QWidget

# Ширина (px), начиная с которой добавляется следующая колонка
COLUMN_BREAKPOINTS = (700, 1100)


def columns_for_width(width: int, breakpoints: tuple[int, ...] = COLUMN_BREAKPOINTS) -> int:
    """Число колонок сетки: 1 на узком окне, 2 на среднем, 3 на широком."""
    return 1 + sum(1 for point in breakpoints if width >= point)


class CardGrid(QWidget):
    """Адаптивная сетка карточек.

    Карточки раскладываются по строкам слева направо; при изменении
    ширины виджета число колонок пересчитывается.
    """

    def __init__(self, parent: QWidget | None = None, spacing: int = 16) -> None:
        super().__init__(parent)
        self._cards: List[QWidget] = []
        self._columns = 1
        self.grid = QGridLayout(self)
        self.grid.setContentsMargins(0, 0, 0, 0)
        self.grid.setSpacing(spacing)

    @property
    def columns(self) -> int:
        return self._columns

    @property
    def cards(self) -> list[QWidget]:
        return list(self._cards)

    def set_cards(self, cards: Iterable[QWidget]) -> None:
        self.clear()
        self._cards = list(cards)
        for card in self._cards:
            card.setParent(self)
        self._relayout()

    def clear(self) -> None:
        while self.grid.count():
            item = self.grid.takeAt(0)
            if widget := item.widget():
                widget.hide()
                widget.deleteLater()
        self._cards = []

    def _relayout(self) -> None:
        while self.grid.count():
            self.grid.takeAt(0)
        for column in range(3):
            self.grid.setColumnStretch(column, 0)
        for index, card in enumerate(self._cards):
            row, column = divmod(index, self._columns)
            self.grid.addWidget(card, row, column)
            card.show()
        for column in range(self._columns):
            self.grid.setColumnStretch(column, 1)

    def update_columns(self, width: int) -> None:
        columns = columns_for_width(width)
        if columns != self._columns:
            self._columns = columns
            self._relayout()

    def resizeEvent(self, event) -> None:  # noqa: D401 - стандарт Qt
        super().resizeEvent(event)
        self.update_columns(event.size().width())


__all__ = ["CardGrid", "columns_for_width"]
