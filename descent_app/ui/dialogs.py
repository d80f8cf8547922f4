"""
ui/dialogs.py

Стандартні діалоги для GUI-застосунку:

    - show_error        – повідомлення про помилку
    - show_about        – вікно "Про програму"
    - describe_outcome  – людський опис результату запуску
"""

from __future__ import annotations

from typing import Optional

from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget,
    QMessageBox,
    QDialog,
    QHBoxLayout,
    QVBoxLayout,
    QLabel,
    QDialogButtonBox,
    QFrame,
)

from descent_app.core.engine import OptimizationResult, Outcome
from .styles import MARGIN, SPACING, set_role


# ---------------------------------------------------------------------------
# Простi діалоги: помилка / about
# ---------------------------------------------------------------------------


def show_error(parent: Optional[QWidget], message: str, title: str = "Помилка") -> None:
    """
    Показати діалог помилки з червоною іконкою.
    """
    dlg = QMessageBox(parent)
    dlg.setIcon(QMessageBox.Icon.Critical)
    dlg.setWindowTitle(title)
    dlg.setText(message)
    dlg.setStandardButtons(QMessageBox.StandardButton.Ok)
    dlg.exec()


def show_about(parent: Optional[QWidget]) -> None:
    dlg = AboutDialog(parent)
    dlg.exec()


_OUTCOME_TEXT = {
    Outcome.CONVERGED: "Норма градієнта стала меншою за точність",
    Outcome.STAGNATED: "Не вдалося знайти крок, що зменшує f (застій)",
    Outcome.BUDGET_EXHAUSTED: "Досягнуто граничної кількості ітерацій",
    Outcome.CANCELLED: "Зупинено користувачем",
    Outcome.EVALUATION_FAILED: "Обчислення f неможливе",
}


def describe_outcome(result: OptimizationResult) -> str:
    """
    Перетворити Outcome на людське пояснення; для помилки обчислення
    додається текст помилки.
    """
    text = _OUTCOME_TEXT.get(result.outcome, f"Інша причина ({result.outcome.value})")
    if result.failed and result.error:
        text = f"{text}: {result.error}"
    return text


def outcome_status(result: OptimizationResult) -> str:
    """Стан рядка результату для QSS: ok, warning або error."""
    if result.failed:
        return "error"
    if result.outcome is Outcome.CONVERGED:
        return "ok"
    return "warning"


class AboutDialog(QDialog):
    """
    Вікно "Про програму" з колонкою, що займає всю висоту діалогу.
    """

    def __init__(self, parent: Optional[QWidget]) -> None:
        super().__init__(parent)
        self.setWindowTitle("Про програму")
        self.setModal(True)

        if parent is not None:
            self.resize(int(parent.width() * 0.45), int(parent.height() * 0.8))
        else:
            self.resize(640, 560)

        self._build_ui()

    def _build_ui(self) -> None:
        root = QHBoxLayout(self)
        root.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        root.setSpacing(SPACING)

        column = QFrame(self)
        column.setObjectName("aboutColumn")
        column_layout = QVBoxLayout(column)
        column_layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        column_layout.setSpacing(SPACING)

        title = QLabel("<b>Градієнтний спуск з адаптивним кроком</b>", column)
        title.setWordWrap(True)

        subtitle = QLabel("Мінімізація функцій n змінних, заданих формулою.", column)
        subtitle.setWordWrap(True)
        set_role(subtitle, "muted")

        separator = QFrame(column)
        separator.setFrameShape(QFrame.Shape.HLine)
        separator.setFrameShadow(QFrame.Shadow.Sunken)

        description = QLabel(
            (
                "<p>Градієнт оцінюється правими скінченними різницями. "
                "Крок дробиться, доки значення функції не зменшиться строго, "
                "а після вдалого кроку збільшується (але не більше 1).</p>"
                "<p>Обчислення виконується у фоновому потоці; кнопка «Стоп» "
                "зупиняє спуск на межі ітерації.</p>"
            ),
            column,
        )
        description.setWordWrap(True)

        stops = QLabel(
            """
            <p><b>Причини зупинки:</b></p>
            <ul>
                <li>‖∇f‖ менша за точність</li>
                <li>застій: жоден пробний крок не зменшує f</li>
                <li>вичерпано max_iter</li>
                <li>зупинка користувачем</li>
                <li>f не визначена в пробній точці</li>
            </ul>
            """,
            column,
        )
        stops.setWordWrap(True)

        footer = QLabel("<p><b>Версія:</b> 1.0.0</p>", column)
        footer.setWordWrap(True)
        set_role(footer, "muted")

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok,
            orientation=Qt.Orientation.Horizontal,
            parent=self,
        )
        buttons.accepted.connect(self.accept)

        column_layout.addWidget(title)
        column_layout.addWidget(subtitle)
        column_layout.addWidget(separator)
        column_layout.addWidget(description)
        column_layout.addWidget(stops)
        column_layout.addStretch(1)
        column_layout.addWidget(footer)
        column_layout.addWidget(buttons, alignment=Qt.AlignmentFlag.AlignRight)

        root.addWidget(column, stretch=1)
