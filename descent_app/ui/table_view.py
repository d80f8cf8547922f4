"""
table_view.py

Таблиця ітерацій градієнтного спуску.

Функціонал:
    - відображає трасу TrajectorySample;
    - колонки:
        k, крок α, x (повний вектор), f(x), ‖∇f‖;
    - хелпери:
        clear_table()
        add_sample(sample)
        populate(samples)
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QHeaderView,
)

from descent_app.core.trajectory import TrajectorySample
from .styles import MARGIN, SPACING, configure_table, set_role


def format_point(x, digits: int = 6) -> str:
    return "(" + ", ".join(f"{float(v):.{digits}f}" for v in x) + ")"


class IterationsTableWidget(QWidget):
    """
    Обгортка над QTableWidget для траси спуску.

    Колонки:
        0: k        – номер ітерації
        1: α        – прийнятий пробний крок
        2: x        – точка x_k (усі координати)
        3: f(x)     – значення цільової функції
        4: ‖∇f‖     – норма градієнта в точці, з якої зроблено крок
    """

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self._build_ui()

    def _build_ui(self) -> None:
        root = QVBoxLayout(self)
        root.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        root.setSpacing(SPACING)

        header_row = QHBoxLayout()
        header_row.setContentsMargins(0, 0, 0, 0)
        header_row.setSpacing(SPACING)

        title = QLabel("Ітерації спуску", self)
        subtitle = QLabel("k, крок α, точка xₖ, f(xₖ), ‖∇f‖", self)
        subtitle.setAlignment(Qt.AlignmentFlag.AlignRight | Qt.AlignmentFlag.AlignVCenter)
        set_role(subtitle, "muted")

        header_row.addWidget(title)
        header_row.addStretch(1)
        header_row.addWidget(subtitle)
        root.addLayout(header_row)

        self.table = QTableWidget(self)
        self.table.setColumnCount(5)
        self.table.setHorizontalHeaderLabels(["k", "α", "xₖ", "f(xₖ)", "‖∇f‖"])
        configure_table(self.table)

        h_header = self.table.horizontalHeader()
        h_header.setSectionResizeMode(0, QHeaderView.ResizeMode.ResizeToContents)
        h_header.setSectionResizeMode(1, QHeaderView.ResizeMode.ResizeToContents)
        h_header.setSectionResizeMode(2, QHeaderView.ResizeMode.Stretch)
        h_header.setSectionResizeMode(3, QHeaderView.ResizeMode.ResizeToContents)
        h_header.setSectionResizeMode(4, QHeaderView.ResizeMode.ResizeToContents)

        root.addWidget(self.table)

    # ------------------------------------------------------------------
    # Публічне API
    # ------------------------------------------------------------------

    def clear_table(self) -> None:
        self.table.setRowCount(0)

    def add_sample(self, sample: TrajectorySample) -> None:
        row = self.table.rowCount()
        self.table.insertRow(row)

        def _item(text: Any, align: Qt.AlignmentFlag) -> QTableWidgetItem:
            it = QTableWidgetItem(str(text))
            it.setFlags(it.flags() & ~Qt.ItemFlag.ItemIsEditable)
            it.setTextAlignment(align | Qt.AlignmentFlag.AlignVCenter)
            return it

        grad_norm = sample.meta.get("grad_norm")

        self.table.setItem(row, 0, _item(sample.index, Qt.AlignmentFlag.AlignHCenter))
        self.table.setItem(row, 1, _item(f"{sample.step_size:.3e}", Qt.AlignmentFlag.AlignHCenter))
        self.table.setItem(row, 2, _item(format_point(sample.x), Qt.AlignmentFlag.AlignLeft))
        self.table.setItem(row, 3, _item(f"{sample.f:.6e}", Qt.AlignmentFlag.AlignRight))
        self.table.setItem(
            row,
            4,
            _item("—" if grad_norm is None else f"{grad_norm:.3e}", Qt.AlignmentFlag.AlignRight),
        )

    def populate(self, samples: Iterable[TrajectorySample]) -> None:
        """Повністю перезаповнити таблицю трасою."""
        self.clear_table()
        self.table.setUpdatesEnabled(False)
        try:
            for sample in samples:
                self.add_sample(sample)
        finally:
            self.table.setUpdatesEnabled(True)
