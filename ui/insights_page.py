# insights_page.py
# Estratégia com IA: análise de mercado e busca de locais próximos

from typing import Any, Optional, cast

from PyQt6.QtGui import QGuiApplication
from PyQt6.QtWidgets import (
    QGroupBox, QHBoxLayout, QLineEdit, QPlainTextEdit, QPushButton, QTextEdit, QVBoxLayout,
)

from core.insights import InsightsService
from core.logger import log_error
from core.maps import map_center
from core.store import RecordStore
from ui.base_page import BasePage
from ui.dialogs.custom_messagebox import show_message
from ui.workers import CallWorker


class InsightsPage(BasePage):
    def __init__(self, store: RecordStore, insights: InsightsService):
        super().__init__("Estratégia IA", "Análises de mercado com Gemini")
        self.store = store
        self.insights = insights
        self._worker: Optional[CallWorker] = None
        layout = QVBoxLayout(self.body)

        strategy = QGroupBox("Análise de mercado")
        sl = QVBoxLayout(strategy)
        self.ed_prompt = QPlainTextEdit()
        self.ed_prompt.setPlaceholderText(
            "Ex: 'Com base nos meus clientes atuais, qual o melhor bairro para expandir as vendas "
            "de lanchonetes?' ou 'Crie um roteiro de vendas otimizado para a Ponta Verde'."
        )
        self.ed_prompt.setMaximumHeight(110)
        self.btn_strategy = QPushButton("Gerar Estratégia"); self.btn_strategy.setObjectName("Primary")
        cast(Any, self.btn_strategy.clicked).connect(self.generate_strategy)
        sl.addWidget(self.ed_prompt)
        sl.addWidget(self.btn_strategy)
        layout.addWidget(strategy)

        nearby = QGroupBox("Busca inteligente de locais")
        nl = QHBoxLayout(nearby)
        self.ed_query = QLineEdit()
        self.ed_query.setPlaceholderText("Ex: bares, padarias, lanchonetes…")
        self.btn_nearby = QPushButton("Buscar")
        cast(Any, self.btn_nearby.clicked).connect(self.search_nearby)
        nl.addWidget(self.ed_query, 1)
        nl.addWidget(self.btn_nearby)
        layout.addWidget(nearby)

        self.result = QTextEdit()
        self.result.setReadOnly(True)
        layout.addWidget(self.result, 1)
        btn_copy = QPushButton("Copiar resultado")
        cast(Any, btn_copy.clicked).connect(self.copy_result)
        layout.addWidget(btn_copy)

        if not self.insights.available:
            self.result.setPlainText("Configure 'gemini_api_key' no config.yaml para usar as análises.")

    def _busy(self, busy: bool) -> None:
        self.btn_strategy.setEnabled(not busy)
        self.btn_nearby.setEnabled(not busy)
        self.btn_strategy.setText("IA Pensando profundamente…" if busy else "Gerar Estratégia")

    def _run(self, fn, *args) -> None:
        self._busy(True)
        self.result.clear()
        self._worker = CallWorker(fn, *args)
        cast(Any, self._worker.succeeded).connect(self._on_result)
        cast(Any, self._worker.failed).connect(self._on_failed)
        self._worker.start()

    def generate_strategy(self) -> None:
        question = self.ed_prompt.toPlainText()
        if not question.strip():
            return
        self._run(self.insights.analyze_market, question, self.load_clients())

    def search_nearby(self) -> None:
        query = self.ed_query.text()
        if not query.strip():
            return
        lat, lng = map_center(self.load_clients())
        self._run(self.insights.search_nearby_places, query, lat, lng)

    def _on_result(self, text: Optional[str]) -> None:
        self._busy(False)
        self.result.setMarkdown(text or "")

    def _on_failed(self, error: Exception) -> None:
        self._busy(False)
        log_error("Falha inesperada na análise de IA", error)
        self.result.setPlainText("Análise indisponível no momento.")

    def shutdown(self) -> None:
        if self._worker is not None:
            self._worker.detach()

    def copy_result(self) -> None:
        text = self.result.toPlainText()
        if not text:
            return
        clipboard = QGuiApplication.clipboard()
        if clipboard:
            clipboard.setText(text)
            show_message(self, "Copiado", "Copiado para a área de transferência!")
