# clients_page.py
# Lista de clientes com busca, filtros e exportação CSV

from datetime import datetime
from typing import Any, Callable, List, Optional, cast

from PyQt6.QtCore import QUrl
from PyQt6.QtGui import QDesktopServices
from PyQt6.QtWidgets import (
    QAbstractItemView, QComboBox, QFileDialog, QHBoxLayout, QHeaderView, QLabel, QLineEdit,
    QPushButton, QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget,
)

from core.config import get_setting, set_export_directory
from core.constants import NEIGHBORHOODS
from core.export import write_csv
from core.filters import ClientFilter, filter_clients
from core.maps import address_search_url, maps_url, whatsapp_url
from core.models import Client, ClientSize, ClientType
from core.store import RecordStore
from ui.base_page import BasePage
from ui.dialogs.custom_messagebox import show_message

COLUMNS = ["Código", "Nome", "Tipo", "Bairro", "Responsável", "Status", "Cadastro", "Por", ""]


def format_date(iso: str) -> str:
    try:
        return datetime.fromisoformat(iso.replace('Z', '+00:00')).astimezone().strftime('%d/%m/%Y')
    except ValueError:
        return iso


class ClientsPage(BasePage):
    def __init__(self, store: RecordStore, new_client_cb: Optional[Callable[[], None]] = None) -> None:
        super().__init__("Clientes", "Listagem e exportação", store)
        self.new_client_cb = new_client_cb
        self.clients: List[Client] = []
        self.filtered: List[Client] = []
        bl = QVBoxLayout(self.body)

        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Buscar por nome, telefone ou código…")
        self.search_edit.setClearButtonEnabled(True)
        cast(Any, self.search_edit.textChanged).connect(lambda _t: self.apply_filters())
        bl.addWidget(self.search_edit)

        filters = QHBoxLayout()
        self.cb_neighborhood = QComboBox(); self.cb_neighborhood.addItem("Bairro (Todos)", "")
        for n in NEIGHBORHOODS:
            self.cb_neighborhood.addItem(n, n)
        self.cb_type = QComboBox(); self.cb_type.addItem("Tipo (Todos)", "")
        for t in ClientType:
            self.cb_type.addItem(t.value, t.value)
        self.cb_size = QComboBox(); self.cb_size.addItem("Porte (Todos)", "")
        for s in ClientSize:
            self.cb_size.addItem(s.value, s.value)
        for combo in (self.cb_neighborhood, self.cb_type, self.cb_size):
            cast(Any, combo.currentIndexChanged).connect(lambda _i: self.apply_filters())
            filters.addWidget(combo, 1)
        self.btn_export = QPushButton("Exportar")
        cast(Any, self.btn_export.clicked).connect(self.export_csv)
        filters.addWidget(self.btn_export)
        self.btn_add = QPushButton("+ Novo Cliente"); self.btn_add.setObjectName("Primary")
        if self.new_client_cb:
            cast(Any, self.btn_add.clicked).connect(self.new_client_cb)
        filters.addWidget(self.btn_add)
        bl.addLayout(filters)

        self.lbl_count = QLabel()
        self.lbl_count.setObjectName("subtitle")
        bl.addWidget(self.lbl_count)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.setAlternatingRowColors(True)
        self.table.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.table.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        if header := self.table.horizontalHeader():
            header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            header.setSectionResizeMode(1, QHeaderView.ResizeMode.Stretch)
        if vh := self.table.verticalHeader():
            vh.setVisible(False)
        bl.addWidget(self.table, 1)
        self.refresh()

    def current_filter(self) -> ClientFilter:
        return ClientFilter(
            search_term=self.search_edit.text(),
            neighborhood=self.cb_neighborhood.currentData(),
            client_type=self.cb_type.currentData(),
            client_size=self.cb_size.currentData(),
        )

    def refresh(self) -> None:
        self.clients = self.load_clients()
        self.apply_filters()

    def apply_filters(self) -> None:
        self.filtered = filter_clients(self.clients, self.current_filter())
        self.lbl_count.setText(f"Mostrando {len(self.filtered)} de {len(self.clients)} clientes")
        self.table.setRowCount(0)
        for c in self.filtered:
            row = self.table.rowCount(); self.table.insertRow(row)
            values = [f"#{c.id}", c.name, c.client_type.value, c.neighborhood, c.responsible_name,
                      c.status.value, format_date(c.created_at), c.registered_by]
            for col, value in enumerate(values):
                self.table.setItem(row, col, QTableWidgetItem(value))
            self.table.setCellWidget(row, len(COLUMNS) - 1, self._actions(c))
        if not self.filtered:
            self.lbl_count.setText(self.lbl_count.text() + " · Nenhum cliente encontrado com esses filtros.")

    def _actions(self, client: Client) -> QWidget:
        container = QWidget(); lo = QHBoxLayout(container)
        lo.setContentsMargins(0, 0, 0, 0)
        btn_map = QPushButton("Mapa")
        btn_map.setToolTip("Abrir no mapa")
        url = maps_url(client) or address_search_url(client)
        cast(Any, btn_map.clicked).connect(lambda _c=False, u=url: QDesktopServices.openUrl(QUrl(u)))
        lo.addWidget(btn_map)
        wa = whatsapp_url(client.phone)
        btn_wa = QPushButton("WhatsApp")
        btn_wa.setEnabled(wa is not None)
        if wa:
            cast(Any, btn_wa.clicked).connect(lambda _c=False, u=wa: QDesktopServices.openUrl(QUrl(u)))
        lo.addWidget(btn_wa)
        return container

    def export_csv(self) -> None:
        if not self.filtered:
            show_message(self, "Exportar", "Nenhum cliente para exportar.")
            return
        directory = QFileDialog.getExistingDirectory(self, "Pasta para salvar o CSV",
                                                     get_setting('export_directory') or "")
        if not directory:
            return
        try:
            path = write_csv(self.filtered, directory)
        except OSError as e:
            show_message(self, "Erro", f"Não foi possível salvar o arquivo:\n{e}")
            return
        set_export_directory(directory)
        show_message(self, "Exportado", f"Arquivo salvo em:\n{path}")
