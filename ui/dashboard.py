# dashboard.py
# Painel com KPIs e gráficos dos clientes

from typing import Any, List, Sequence, cast
from PyQt6.QtWidgets import QFrame, QGridLayout, QHBoxLayout, QLabel, QVBoxLayout
from PyQt6.QtCharts import QChart, QChartView, QBarSeries, QBarSet, QBarCategoryAxis, QValueAxis
from PyQt6.QtGui import QColor, QPainter
from PyQt6.QtCore import Qt

from core.filters import Dimension, GroupCount, aggregate_by_dimension, summarize
from core.models import Client
from core.store import RecordStore
from ui.base_page import BasePage
from ui.styles import CHART_COLORS

CHART_TITLES = {
    Dimension.SIZE: "Clientes por porte",
    Dimension.TYPE: "Clientes por tipo",
    Dimension.NEIGHBORHOOD: "Top bairros",
}


def _kpi_card(label: str) -> tuple[QFrame, QLabel]:
    card = QFrame(); card.setObjectName("KpiCard")
    lo = QVBoxLayout(card)
    value = QLabel("—"); value.setObjectName("KpiValue")
    value.setAlignment(Qt.AlignmentFlag.AlignCenter)
    caption = QLabel(label); caption.setObjectName("KpiLabel")
    caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
    lo.addWidget(value); lo.addWidget(caption)
    return card, value


def build_bar_chart(title: str, groups: Sequence[GroupCount], color: str) -> QChart:
    barset = QBarSet("Clientes")
    barset.setColor(QColor(color))
    categories: List[str] = []
    for g in groups:
        _ = barset << g.count
        categories.append(g.key or "—")
    series = QBarSeries()
    cast(Any, series).append(barset)
    chart = QChart()
    chart.addSeries(series)
    chart.setTitle(title)
    chart.legend().setVisible(False)
    axisX = QBarCategoryAxis()
    cast(Any, axisX).append(categories)
    axisY = QValueAxis()
    axisY.setLabelFormat("%d")
    axisY.setMin(0)
    axisY.setMax(max([g.count for g in groups] + [1]))
    chart.addAxis(axisX, Qt.AlignmentFlag.AlignBottom)
    chart.addAxis(axisY, Qt.AlignmentFlag.AlignLeft)
    series.attachAxis(axisX)
    series.attachAxis(axisY)
    return chart


class DashboardPage(BasePage):
    def __init__(self, store: RecordStore):
        super().__init__("Painel", "Visão geral da carteira", store)
        layout = QVBoxLayout(self.body)

        # KPIs
        kpi_layout = QHBoxLayout()
        card, self.lbl_total = _kpi_card("Total Clientes"); kpi_layout.addWidget(card)
        card, self.lbl_active = _kpi_card("Ativos"); kpi_layout.addWidget(card)
        card, self.lbl_potential = _kpi_card("Potenciais"); kpi_layout.addWidget(card)
        card, self.lbl_neighborhoods = _kpi_card("Bairros"); kpi_layout.addWidget(card)
        layout.addLayout(kpi_layout)

        grid = QGridLayout()
        self.chart_views = {}
        for i, dimension in enumerate(CHART_TITLES):
            view = QChartView()
            view.setRenderHint(QPainter.RenderHint.Antialiasing)
            view.setMinimumHeight(260)
            grid.addWidget(view, i // 2, i % 2, 1, 2 if dimension == Dimension.NEIGHBORHOOD else 1)
            self.chart_views[dimension] = view
        layout.addLayout(grid)

        self.refresh()

    def refresh(self) -> None:
        clients: List[Client] = self.load_clients()
        summary = summarize(clients)
        self.lbl_total.setText(str(summary.total))
        self.lbl_active.setText(str(summary.active))
        self.lbl_potential.setText(str(summary.potential))
        self.lbl_neighborhoods.setText(str(len({c.neighborhood for c in clients if c.neighborhood})))
        for i, (dimension, title) in enumerate(CHART_TITLES.items()):
            groups = aggregate_by_dimension(clients, dimension)
            self.chart_views[dimension].setChart(build_bar_chart(title, groups, CHART_COLORS[i]))
