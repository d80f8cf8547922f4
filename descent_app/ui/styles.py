"""
Оформлення застосунку градієнтного спуску.

Стиль задається одним глобальним QSS, а віджети лише отримують
динамічні властивості:
    - role   – призначення віджета ("primary", "stop", "ghost", "muted",
               "nav", "axis");
    - status – стан рядка результату ("idle", "running", "ok",
               "warning", "error").

Так кнопки Запустити/Стоп і рядок результату перефарбовуються при зміні
стану без локальних setStyleSheet.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from PyQt6.QtCore import Qt
from PyQt6.QtGui import QColor, QFont, QPalette
from PyQt6.QtWidgets import QApplication, QWidget, QTableWidget, QHeaderView, QAbstractItemView

MARGIN = 10
SPACING = 8
RADIUS = 5

FONT_FAMILY = "Segoe UI"
FONT_SIZE = 10


@dataclass(frozen=True)
class Theme:
    bg: str = "#101214"
    panel: str = "#181b1f"
    panel_raised: str = "#20252b"
    canvas: str = "#1b1f24"

    ink: str = "#e6e9ee"
    ink_dim: str = "#95a0b0"
    ink_on_accent: str = "#15110c"

    accent: str = "#f2a65a"
    accent_hover: str = "#ffc285"
    start_marker: str = "#7fd1b9"

    ok: str = "#8fd694"
    warn: str = "#e8d35a"
    fail: str = "#ef6a6a"

    line: str = "#2b3139"
    line_soft: str = "#1d2127"

    def status_colors(self) -> Dict[str, str]:
        return {
            "idle": self.ink,
            "running": self.accent,
            "ok": self.ok,
            "warning": self.warn,
            "error": self.fail,
        }


THEME = Theme()

# Кольори рядка результату за станом
STATUS_COLORS: Dict[str, str] = THEME.status_colors()


# ---------------------------------------------------------------------------
# QSS по блоках
# ---------------------------------------------------------------------------

def _base_rules(t: Theme) -> str:
    return f"""
    * {{
        font-family: "{FONT_FAMILY}";
        font-size: {FONT_SIZE}pt;
    }}
    QMainWindow, QDialog, QWidget#controlPanel {{
        background: {t.bg};
        color: {t.ink};
    }}
    QGroupBox {{
        background: {t.panel};
        color: {t.ink};
        border: 1px solid {t.line_soft};
        border-radius: {RADIUS}px;
        margin-top: 16px;
        padding-top: 6px;
    }}
    QGroupBox::title {{
        subcontrol-origin: margin;
        subcontrol-position: top left;
        left: 8px;
        color: {t.accent};
    }}
    QMenuBar, QStatusBar {{
        background: {t.panel};
        color: {t.ink_dim};
    }}
    QMenu::item:selected, QMenuBar::item:selected {{
        background: {t.panel_raised};
        color: {t.accent};
    }}
    QFrame#aboutColumn {{
        background: {t.panel};
        border-radius: {RADIUS}px;
    }}
    """


def _button_rules(t: Theme) -> str:
    return f"""
    QPushButton {{
        background: {t.panel_raised};
        color: {t.ink};
        border: 1px solid {t.line};
        border-radius: {RADIUS}px;
        padding: 6px 12px;
    }}
    QPushButton:hover {{ border-color: {t.accent}; }}
    QPushButton:disabled {{
        color: {t.ink_dim};
        border-color: {t.line_soft};
    }}
    QPushButton[role="primary"] {{
        background: {t.accent};
        color: {t.ink_on_accent};
        border-color: {t.accent};
        font-weight: 600;
    }}
    QPushButton[role="primary"]:hover {{ background: {t.accent_hover}; }}
    QPushButton[role="primary"]:disabled {{
        background: {t.panel_raised};
        color: {t.ink_dim};
        border-color: {t.line_soft};
    }}
    QPushButton[role="stop"]:enabled {{
        color: {t.fail};
        border-color: {t.fail};
    }}
    QPushButton[role="ghost"] {{
        background: transparent;
    }}
    QPushButton[role="nav"] {{
        min-width: 30px;
        max-width: 30px;
        padding: 4px 0;
    }}
    """


def _input_rules(t: Theme) -> str:
    return f"""
    QLineEdit, QSpinBox, QDoubleSpinBox, QComboBox {{
        background: {t.panel};
        color: {t.ink};
        border: 1px solid {t.line};
        border-radius: {RADIUS}px;
        padding: 4px 6px;
        selection-background-color: {t.accent};
        selection-color: {t.ink_on_accent};
    }}
    QLineEdit:focus, QSpinBox:focus, QDoubleSpinBox:focus, QComboBox:focus {{
        border-color: {t.accent};
    }}
    QLineEdit:disabled, QSpinBox:disabled, QDoubleSpinBox:disabled, QComboBox:disabled {{
        color: {t.ink_dim};
    }}
    QComboBox[role="axis"] {{
        min-width: 52px;
    }}
    """


def _table_rules(t: Theme) -> str:
    return f"""
    QTableWidget {{
        background: {t.panel};
        alternate-background-color: {t.panel_raised};
        color: {t.ink};
        gridline-color: {t.line_soft};
        border: 1px solid {t.line};
    }}
    QTableWidget::item:selected {{
        background: {t.accent};
        color: {t.ink_on_accent};
    }}
    QHeaderView::section {{
        background: {t.panel_raised};
        color: {t.ink_dim};
        border: none;
        border-bottom: 1px solid {t.line};
        padding: 4px 6px;
    }}
    """


def _label_rules(t: Theme) -> str:
    rules = [f'QLabel[role="muted"] {{ color: {t.ink_dim}; }}']
    for status, color in t.status_colors().items():
        rules.append(f'QLabel[status="{status}"] {{ color: {color}; }}')
    rules.append(
        f"""
    QWidget#plotView {{
        background: {t.panel};
        border: 1px solid {t.line};
        border-radius: {RADIUS}px;
    }}
    """
    )
    return "\n".join(rules)


def build_app_stylesheet(theme: Theme = THEME) -> str:
    return "\n".join(
        rules(theme)
        for rules in (_base_rules, _button_rules, _input_rules, _table_rules, _label_rules)
    )


def apply_app_style(app: QApplication) -> None:
    palette = QPalette()
    for role, color in (
        (QPalette.ColorRole.Window, THEME.bg),
        (QPalette.ColorRole.WindowText, THEME.ink),
        (QPalette.ColorRole.Base, THEME.panel),
        (QPalette.ColorRole.AlternateBase, THEME.panel_raised),
        (QPalette.ColorRole.Text, THEME.ink),
        (QPalette.ColorRole.Highlight, THEME.accent),
        (QPalette.ColorRole.HighlightedText, THEME.ink_on_accent),
    ):
        palette.setColor(role, QColor(color))

    app.setPalette(palette)
    app.setFont(QFont(FONT_FAMILY, FONT_SIZE))
    app.setStyleSheet(build_app_stylesheet())


# ---------------------------------------------------------------------------
# Динамічні властивості
# ---------------------------------------------------------------------------

def _repolish(widget: QWidget) -> None:
    # Qt не перераховує QSS сам після зміни динамічної властивості
    style = widget.style()
    style.unpolish(widget)
    style.polish(widget)
    widget.update()


def set_role(widget: QWidget, role: str) -> None:
    widget.setProperty("role", role)
    _repolish(widget)


def set_status(widget: QWidget, status: str) -> None:
    """status: один з ключів STATUS_COLORS; невідомий стан -> "idle"."""
    widget.setProperty("status", status if status in STATUS_COLORS else "idle")
    _repolish(widget)


def configure_table(table: QTableWidget) -> None:
    """Таблиця лише для читання: рядок цілком, без вертикального заголовка."""
    table.verticalHeader().setVisible(False)
    table.verticalHeader().setDefaultSectionSize(22)
    table.setAlternatingRowColors(True)
    table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
    table.setSelectionMode(QAbstractItemView.SelectionMode.SingleSelection)
    table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)

    header = table.horizontalHeader()
    header.setHighlightSections(False)
    header.setDefaultAlignment(Qt.AlignmentFlag.AlignCenter)
    header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
    header.setStretchLastSection(False)
