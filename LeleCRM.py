# -*- coding: utf-8 -*-
# Lelé da Kuka – CRM de Vendas (PyQt6 + SQLite)
# -----------------------------------------------------
# Requisitos:
#   pip install -e .
#
# Observações:
# - Cadastro de clientes (lanchonetes, bares, restaurantes...) com GPS e consulta de CNPJ
# - Lista com busca/filtros e exportação CSV
# - Painel com KPIs e gráficos por porte, tipo e bairro
# - Estratégia com IA (Google Gemini)
# - Gestão de usuários (somente admin)
# - Dados em banco SQLite local (um blob JSON por coleção)
#
# Como executar:
#   python LeleCRM.py

from __future__ import annotations

import os
import sys
from typing import Any, Optional, cast

from PyQt6.QtCore import QSize
from PyQt6.QtGui import QCloseEvent
from PyQt6.QtWidgets import (
    QApplication, QDialog, QHBoxLayout, QLabel, QListWidget, QListWidgetItem, QMainWindow,
    QPushButton, QStackedWidget, QVBoxLayout, QWidget,
)

from core.config import get_database_path, get_setting, load_config
from core.database import Database
from core.errors import CRMError, InvalidCredentials, PersistenceFault
from core.insights import InsightsService
from core.logger import log_error, log_event, log_startup, set_level
from core.models import Role, User
from core.services import AuthService, ClientService, authorize
from core.store import RecordStore
from ui.clients_page import ClientsPage
from ui.dashboard import DashboardPage
from ui.dialogs.client_dialog import ClientDialog
from ui.dialogs.custom_messagebox import show_error, show_message
from ui.dialogs.login_dialog import LoginDialog
from ui.dialogs.users_dialog import UsersDialog
from ui.insights_page import InsightsPage
from ui.styles import qss_main
from ui.workers import wait_running

APP_FOOTER = "App Criado por Afonso Cezar · Afonsopmc@gmail.com"


class MainWindow(QMainWindow):
    def __init__(self, user: User, db: Database, store: RecordStore):
        super().__init__()
        self.user = user
        self.db = db
        self.store = store
        self.auth = AuthService(store)
        self.clients = ClientService(store)
        self.logged_out = False
        self.setWindowTitle("Lelé da Kuka - Gestão de Vendas & CRM")
        self.resize(1200, 760)
        self.setMinimumSize(900, 600)

        root = QWidget(); self.setCentralWidget(root)
        hl = QHBoxLayout(root)
        hl.setContentsMargins(0, 0, 0, 0)

        # Sidebar
        side = QWidget(); sv = QVBoxLayout(side)
        title = QLabel("LELÉ DA KUKA"); title.setObjectName("AppTitle")
        sv.addWidget(title)
        self.sidebar = QListWidget()
        self.sidebar.setObjectName("Sidebar")
        self.sidebar.setIconSize(QSize(20, 20))
        sv.addWidget(self.sidebar, 1)
        btn_new = QPushButton("+ Novo Cliente"); btn_new.setObjectName("Primary")
        cast(Any, btn_new.clicked).connect(self.new_client)
        sv.addWidget(btn_new)
        if authorize(user, Role.ADMIN):
            btn_users = QPushButton("Usuários")
            cast(Any, btn_users.clicked).connect(self.manage_users)
            sv.addWidget(btn_users)
            btn_backup = QPushButton("Backup")
            cast(Any, btn_backup.clicked).connect(self.backup)
            sv.addWidget(btn_backup)
        lbl_user = QLabel(f"{user.username} · {user.role.value}"); lbl_user.setObjectName("subtitle")
        sv.addWidget(lbl_user)
        btn_logout = QPushButton("Sair")
        cast(Any, btn_logout.clicked).connect(self.logout)
        sv.addWidget(btn_logout)
        footer = QLabel(APP_FOOTER); footer.setObjectName("subtitle"); footer.setWordWrap(True)
        sv.addWidget(footer)
        side.setFixedWidth(230)
        hl.addWidget(side)

        # Páginas
        self.pages = QStackedWidget()
        self.dashboard_page = DashboardPage(store)
        self.clients_page = ClientsPage(store, self.new_client)
        self.insights_page = InsightsPage(store, InsightsService())
        for name, page in (("Painel", self.dashboard_page), ("Clientes", self.clients_page),
                           ("Estratégia IA", self.insights_page)):
            self.sidebar.addItem(QListWidgetItem(name))
            self.pages.addWidget(page)
        cast(Any, self.sidebar.currentRowChanged).connect(self.change_page)
        hl.addWidget(self.pages, 1)
        self.sidebar.setCurrentRow(0)

    def change_page(self, index: int) -> None:
        self.pages.setCurrentIndex(index)
        page = self.pages.currentWidget()
        if page is not None:
            cast(Any, page).refresh()

    def refresh_all(self) -> None:
        self.dashboard_page.refresh()
        self.clients_page.refresh()

    def new_client(self) -> None:
        dlg = ClientDialog(self.clients, self)
        if dlg.exec() != QDialog.DialogCode.Accepted:
            return
        try:
            client = self.clients.register(dlg.get_draft(), self.user)
        except CRMError as e:
            show_error(self, e)
            return
        self.refresh_all()
        self.sidebar.setCurrentRow(1)
        show_message(self, "Cliente salvo", f"Cliente #{client.id} cadastrado com sucesso.")

    def manage_users(self) -> None:
        UsersDialog(self.auth, self.user, self).exec()

    def backup(self) -> None:
        try:
            path = self.db.create_backup()
        except PersistenceFault as e:
            show_error(self, e)
            return
        log_event(f"Backup criado: {path}")
        show_message(self, "Backup", f"Backup salvo em:\n{path}")

    def closeEvent(self, event: QCloseEvent) -> None:
        self.insights_page.shutdown()
        super().closeEvent(event)

    def logout(self) -> None:
        log_event(f"Logout: {self.user.username}")
        self.logged_out = True
        self.close()


def login(auth: AuthService) -> Optional[User]:
    """Repete o diálogo de login até acertar as credenciais ou cancelar."""
    error = ""
    while True:
        dlg = LoginDialog(error)
        if dlg.exec() != QDialog.DialogCode.Accepted:
            log_event("Login cancelado pelo usuário")
            return None
        username, password = dlg.get_values()
        try:
            return auth.authenticate(username, password)
        except InvalidCredentials as e:
            error = str(e)


def main() -> None:
    log_startup()
    set_level(str(get_setting('log_level', load_config())))
    app = QApplication(sys.argv)
    app.setStyleSheet(qss_main())

    db_path = get_database_path()
    log_event(f"Caminho do banco: {db_path}")
    try:
        os.makedirs(os.path.dirname(db_path), exist_ok=True)
        db = Database(db_path)
    except (OSError, PersistenceFault) as e:
        log_error("ERRO FATAL: não foi possível abrir o banco local", e)
        show_message(None, "Erro Fatal", f"Não foi possível abrir o banco de dados:\n{e}")
        sys.exit(1)

    ok, msg = db.verify_integrity()
    if not ok:
        log_error(f"Integridade do banco: {msg}")
        show_message(None, "Banco de dados", msg)

    store = RecordStore(db)
    auth = AuthService(store)
    while True:
        try:
            user = login(auth)
        except PersistenceFault as e:
            log_error("Falha ao ler usuários", e)
            show_error(None, e)
            sys.exit(1)
        if user is None:
            sys.exit(0)
        win = MainWindow(user, db, store)
        win.show()
        app.exec()
        if not win.logged_out:
            break
    wait_running()
    db.close()


if __name__ == "__main__":
    main()
