# base_page.py
# Página base: cabeçalho com título/ação de atualizar e leitura protegida dos clientes

from typing import Any, List, Optional, cast

from PyQt6.QtWidgets import QHBoxLayout, QLabel, QPushButton, QVBoxLayout, QWidget

from core.errors import PersistenceFault
from core.logger import log_error
from core.models import Client
from core.store import RecordStore
from ui.dialogs.custom_messagebox import show_error


class BasePage(QWidget):
    def __init__(self, title: str, subtitle: str = "", store: Optional[RecordStore] = None) -> None:
        super().__init__()
        self.store = store
        self.v = QVBoxLayout(self)
        self.v.setContentsMargins(16, 16, 16, 16)

        head = QWidget()
        hl = QHBoxLayout(head)
        hl.setContentsMargins(0, 0, 0, 0)
        hl.addWidget(QLabel(f"<h2 style='margin:0'>{title}</h2>"))
        hl.addStretch(1)
        s = QLabel(subtitle)
        s.setObjectName("subtitle")
        hl.addWidget(s)
        if store is not None:
            btn = QPushButton("Atualizar")
            btn.setToolTip("Recarregar os dados salvos")
            cast(Any, btn.clicked).connect(self.refresh)
            hl.addWidget(btn)
        self.v.addWidget(head)

        self.body = QWidget()
        self.v.addWidget(self.body, 1)

    def load_clients(self) -> List[Client]:
        """Lê os clientes; em falha de armazenamento mostra o erro e devolve lista vazia."""
        if self.store is None:
            return []
        try:
            return self.store.list_clients()
        except PersistenceFault as e:
            log_error("Falha ao carregar clientes", e)
            show_error(self, e)
            return []

    def refresh(self) -> None:
        """Recarrega a página a partir do armazenamento."""
