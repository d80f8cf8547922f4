"""
Віджет для відображення графіків процесу спуску в темному стилі.

Показує один графік за раз у вигляді каруселі:
    - графік f(k);
    - контурні лінії + траєкторія (для n = 1 — крива f(x₁) + точки спуску);
    - поверхня + траєкторія.

Для n > 2 користувач сам обирає, які дві координати проєктувати;
решта координат сітки фіксуються в кінцевій точці.
"""

from __future__ import annotations

from typing import List, Optional

import numpy as np
from PyQt6.QtCore import Qt
from PyQt6.QtWidgets import (
    QWidget,
    QVBoxLayout,
    QHBoxLayout,
    QPushButton,
    QLabel,
    QStackedWidget,
    QComboBox,
)

from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure

from descent_app.core.functions import EvaluationError, ScalarFunction
from descent_app.core.trajectory import TrajectorySample, project
from .styles import MARGIN, SPACING, THEME, set_role

_CANVAS_BG = THEME.canvas
_ACCENT = THEME.accent
_TEXT = THEME.ink
_MUTED = THEME.ink_dim


class PlotPage:
    def __init__(self, figure: Figure, canvas: FigureCanvas, axes):
        self.figure = figure
        self.canvas = canvas
        self.axes = axes


def evaluate_grid(
    func: ScalarFunction,
    base: np.ndarray,
    i: int,
    j: int,
    xi: np.ndarray,
    xj: np.ndarray,
) -> np.ndarray:
    """
    Значення f на сітці по координатах i, j; інші координати беруться з base.
    Точки, де f не визначена, стають nan.
    """
    Z = np.full(xi.shape, np.nan, dtype=float)
    point = np.array(base, dtype=float)
    for idx in np.ndindex(xi.shape):
        point[i] = xi[idx]
        point[j] = xj[idx]
        try:
            Z[idx] = func(point.copy())
        except EvaluationError:
            continue
    return Z


def _axis_range(values: np.ndarray, padding: float) -> np.ndarray:
    lo, hi = float(values.min()), float(values.max())
    if abs(hi - lo) < 1e-9:
        lo -= 1.0
        hi += 1.0
    span = hi - lo
    return np.array([lo - padding * span, hi + padding * span])


class PlotView(QWidget):
    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.setObjectName("plotView")
        self.pages_order = ["fk", "contour", "surface"]
        self.pages: dict[str, PlotPage] = {}

        self._func: Optional[ScalarFunction] = None
        self._samples: List[TrajectorySample] = []
        self._n_vars = 0

        self._build_ui()

    # ------------------------------------------------------------------
    # UI
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        layout = QVBoxLayout(self)
        layout.setContentsMargins(MARGIN, MARGIN, MARGIN, MARGIN)
        layout.setSpacing(SPACING)

        # фон для #plotView з QSS
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        nav = QHBoxLayout()
        nav.setSpacing(SPACING)
        nav.setContentsMargins(0, 0, 0, 0)

        nav.addWidget(QLabel("Графік:", self))

        self.combo_mode = QComboBox(self)
        self.combo_mode.addItems([
            "Графік f(k)",
            "Рівні та траєкторія",
            "Поверхня + траєкторія",
        ])
        self.combo_mode.currentIndexChanged.connect(self._on_combo_changed)
        nav.addWidget(self.combo_mode, stretch=1)

        nav.addWidget(QLabel("Осі:", self))
        self.combo_axis_x = QComboBox(self)
        self.combo_axis_y = QComboBox(self)
        self.combo_axis_x.currentIndexChanged.connect(self._on_axes_changed)
        self.combo_axis_y.currentIndexChanged.connect(self._on_axes_changed)
        set_role(self.combo_axis_x, "axis")
        set_role(self.combo_axis_y, "axis")
        nav.addWidget(self.combo_axis_x)
        nav.addWidget(self.combo_axis_y)

        self.btn_prev = QPushButton("◀")
        self.btn_next = QPushButton("▶")
        for btn in (self.btn_prev, self.btn_next):
            set_role(btn, "nav")
        self.btn_prev.clicked.connect(self._on_prev)
        self.btn_next.clicked.connect(self._on_next)

        nav.addWidget(self.btn_prev)
        nav.addWidget(self.btn_next)

        layout.addLayout(nav)

        self.stacked = QStackedWidget(self)
        layout.addWidget(self.stacked, stretch=1)

        self._create_pages()
        self._set_axis_choices(0)
        self.show_placeholder()

    def _create_pages(self) -> None:
        self.pages["fk"] = self._create_page()
        self.pages["contour"] = self._create_page()
        self.pages["surface"] = self._create_page(projection="3d")

        for key in self.pages_order:
            self.stacked.addWidget(self.pages[key].canvas)

    def _create_page(self, projection: Optional[str] = None) -> PlotPage:
        figure = Figure(facecolor=_CANVAS_BG)
        if projection == "3d":
            ax = figure.add_subplot(111, projection="3d")
        else:
            ax = figure.add_subplot(111)
        canvas = FigureCanvas(figure)
        canvas.setStyleSheet("background-color: transparent;")
        return PlotPage(figure, canvas, ax)

    # ------------------------------------------------------------------
    # Навігація
    # ------------------------------------------------------------------
    def _on_combo_changed(self, index: int) -> None:
        self.stacked.setCurrentIndex(index)

    def _on_prev(self) -> None:
        idx = (self.stacked.currentIndex() - 1) % len(self.pages_order)
        self._set_page(self.pages_order[idx])

    def _on_next(self) -> None:
        idx = (self.stacked.currentIndex() + 1) % len(self.pages_order)
        self._set_page(self.pages_order[idx])

    def _set_page(self, key: str) -> None:
        idx = self.pages_order.index(key)
        self.stacked.setCurrentIndex(idx)
        self.combo_mode.setCurrentIndex(idx)

    def _set_axis_choices(self, n_vars: int) -> None:
        names = [f"x{k}" for k in range(1, n_vars + 1)]
        for combo in (self.combo_axis_x, self.combo_axis_y):
            combo.blockSignals(True)
            combo.clear()
            combo.addItems(names)
            combo.blockSignals(False)
        if n_vars >= 2:
            self.combo_axis_x.setCurrentIndex(0)
            self.combo_axis_y.setCurrentIndex(1)
        enabled = n_vars > 2
        self.combo_axis_x.setEnabled(enabled)
        self.combo_axis_y.setEnabled(enabled)

    def _on_axes_changed(self, _index: int) -> None:
        if self._func is not None and self._samples and self._n_vars >= 2:
            self._plot_projection()

    # ------------------------------------------------------------------
    # Стилізація
    # ------------------------------------------------------------------
    def _style_2d_axes(self, ax) -> None:
        ax.set_facecolor(_CANVAS_BG)
        ax.tick_params(colors=_MUTED, labelsize=9)
        for spine in ax.spines.values():
            spine.set_color(THEME.line)
            spine.set_linewidth(0.8)
        ax.grid(True, color=THEME.line, linestyle="--", linewidth=0.5, alpha=0.6)
        ax.title.set_color(_TEXT)
        ax.xaxis.label.set_color(_TEXT)
        ax.yaxis.label.set_color(_TEXT)

    def _style_3d_axes(self, ax) -> None:
        ax.set_facecolor(_CANVAS_BG)
        ax.tick_params(colors=_MUTED, labelsize=8)
        ax.xaxis.label.set_color(_TEXT)
        ax.yaxis.label.set_color(_TEXT)
        ax.zaxis.label.set_color(_TEXT)
        ax.title.set_color(_TEXT)

    def _message(self, key: str, text: str) -> None:
        ax = self.pages[key].axes
        ax.clear()
        if key == "surface":
            self._style_3d_axes(ax)
            ax.text(0.5, 0.5, 0.5, text, ha="center", va="center", color=_MUTED)
        else:
            self._style_2d_axes(ax)
            ax.text(0.5, 0.5, text, ha="center", va="center", transform=ax.transAxes, color=_MUTED)
        self._redraw(key)

    def _redraw(self, key: str) -> None:
        page = self.pages[key]
        page.figure.tight_layout()
        page.canvas.draw_idle()

    # ------------------------------------------------------------------
    # Публічні методи
    # ------------------------------------------------------------------
    def show_placeholder(self) -> None:
        self._func = None
        self._samples = []
        self._message("fk", "Графік f(k) з'явиться після запуску")
        self._message("contour", "Рівні функції з'являться після запуску")
        self._message("surface", "Поверхня з'явиться після запуску")

    def plot_result(
        self,
        func: ScalarFunction,
        samples: List[TrajectorySample],
        n_vars: int,
    ) -> None:
        """Побудувати всі графіки для завершеного запуску."""
        if not samples:
            self.show_placeholder()
            return

        self._func = func
        self._samples = list(samples)
        if n_vars != self._n_vars:
            self._n_vars = n_vars
            self._set_axis_choices(n_vars)

        self.plot_fk(self._samples)
        if n_vars == 1:
            self._plot_curve_1d()
            self._message("surface", "Поверхню можна показати лише для n ≥ 2")
        else:
            self._plot_projection()

        self._set_page("contour")

    def plot_fk(self, samples: List[TrajectorySample]) -> None:
        ax = self.pages["fk"].axes
        ax.clear()
        self._style_2d_axes(ax)

        ks = [s.index for s in samples]
        fs = [float(s.f) for s in samples]

        ax.plot(ks, fs, marker="o", linestyle="-", linewidth=1.5, markersize=3, color=_ACCENT)
        if len(fs) > 1 and min(fs) > 0.0:
            ax.set_yscale("log")
        ax.set_xlabel("k (номер ітерації)")
        ax.set_ylabel("f(xₖ)")
        ax.set_title("Графік f(k)")

        self._redraw("fk")

    # ------------------------------------------------------------------
    # Внутрішні побудови
    # ------------------------------------------------------------------
    def _plot_curve_1d(self, grid_size: int = 400, padding: float = 0.25) -> None:
        ax = self.pages["contour"].axes
        ax.clear()
        self._style_2d_axes(ax)

        xs = np.array([s.x[0] for s in self._samples], dtype=float)
        fs = np.array([s.f for s in self._samples], dtype=float)

        lo, hi = _axis_range(xs, padding)
        grid = np.linspace(lo, hi, grid_size)
        values = evaluate_grid(self._func, np.zeros(1), 0, 0, grid, grid)

        ax.plot(grid, values, color=_MUTED, linewidth=1.2)
        ax.plot(xs, fs, marker="o", linestyle="-", linewidth=1.0, markersize=4, color=_ACCENT)
        ax.scatter(xs[0], fs[0], color=THEME.start_marker, marker="s", s=50, zorder=5)
        ax.scatter(xs[-1], fs[-1], color=THEME.accent, marker="*", s=120, zorder=6)
        ax.set_xlabel("x₁")
        ax.set_ylabel("f(x₁)")
        ax.set_title("Функція та точки спуску")

        self._redraw("contour")

    def _plot_projection(
        self,
        levels: int = 18,
        padding: float = 0.25,
        grid_size: int = 100,
    ) -> None:
        i = max(self.combo_axis_x.currentIndex(), 0)
        j = max(self.combo_axis_y.currentIndex(), 0)
        if i == j:
            self._message("contour", "Оберіть дві різні координати")
            self._message("surface", "Оберіть дві різні координати")
            return

        xi_traj, xj_traj, f_traj = project(self._samples, i, j)
        base = self._samples[-1].x

        xi_lo, xi_hi = _axis_range(xi_traj, padding)
        xj_lo, xj_hi = _axis_range(xj_traj, padding)
        XI, XJ = np.meshgrid(
            np.linspace(xi_lo, xi_hi, grid_size),
            np.linspace(xj_lo, xj_hi, grid_size),
        )
        Z = evaluate_grid(self._func, base, i, j, XI, XJ)

        name_i, name_j = f"x{i + 1}", f"x{j + 1}"

        contour_ax = self.pages["contour"].axes
        surface_ax = self.pages["surface"].axes
        contour_ax.clear()
        surface_ax.clear()

        if not np.isfinite(Z).any():
            self._message("contour", "Функція не визначена на цій ділянці")
            self._message("surface", "Функція не визначена на цій ділянці")
            return

        # Contour plot
        self._style_2d_axes(contour_ax)
        contour_ax.contour(XI, XJ, Z, levels=levels, colors=THEME.ink_dim, linewidths=0.8)
        contour_ax.contourf(XI, XJ, Z, levels=levels, cmap="inferno", alpha=0.45)

        contour_ax.plot(xi_traj, xj_traj, marker="o", linestyle="-", linewidth=1.2, markersize=4, color=_ACCENT)
        contour_ax.scatter(xi_traj[0], xj_traj[0], color=THEME.start_marker, marker="s", s=50, zorder=5)
        contour_ax.scatter(xi_traj[-1], xj_traj[-1], color=THEME.accent, marker="*", s=120, zorder=6)

        contour_ax.set_xlabel(name_i)
        contour_ax.set_ylabel(name_j)
        title = "Рівні функції та траєкторія"
        if self._n_vars > 2:
            title += " (інші координати — у кінцевій точці)"
        contour_ax.set_title(title)

        # Surface plot
        self._style_3d_axes(surface_ax)
        surface_ax.plot_surface(
            XI,
            XJ,
            np.ma.masked_invalid(Z),
            rstride=2,
            cstride=2,
            cmap="inferno",
            linewidth=0.2,
            antialiased=True,
            alpha=0.85,
        )
        surface_ax.plot(xi_traj, xj_traj, f_traj, color=_ACCENT, marker="o", linewidth=2, markersize=4)
        surface_ax.set_xlabel(name_i)
        surface_ax.set_ylabel(name_j)
        surface_ax.set_zlabel("f")
        surface_ax.set_title("Поверхня + траєкторія")

        self._redraw("contour")
        self._redraw("surface")
