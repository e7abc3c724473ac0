# users_dialog.py
# Gestão de acessos (somente administradores)

from typing import Any, Optional, cast

from PyQt6.QtWidgets import (
    QAbstractItemView, QComboBox, QDialog, QFormLayout, QHBoxLayout, QHeaderView, QLabel,
    QLineEdit, QPushButton, QTableWidget, QTableWidgetItem, QVBoxLayout, QWidget,
)

from core.errors import CRMError
from core.models import Role, User
from core.services import AccessDecision, AuthService, guard_delete_user
from ui.dialogs.custom_messagebox import confirm, show_error
from ui.styles import apply_popup_style

ROLE_LABELS = {
    Role.ADMIN: "Administrador",
    Role.VENDEDOR: "Vendedor",
}


class UsersDialog(QDialog):
    """Lista, cria e exclui usuários.

    Aberto apenas para administradores (visibilidade controlada pela janela principal).
    """
    def __init__(self, auth: AuthService, current_user: User, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        apply_popup_style(self)
        self.auth = auth
        self.current_user = current_user
        self.setWindowTitle("Gestão de Acessos")
        self.resize(520, 380)
        v = QVBoxLayout(self)

        # Formulário de novo usuário
        form = QFormLayout()
        self.ed_username = QLineEdit()
        self.ed_password = QLineEdit(); self.ed_password.setEchoMode(QLineEdit.EchoMode.Password)
        self.cb_role = QComboBox()
        for role in Role:
            self.cb_role.addItem(ROLE_LABELS[role], role)
        self.cb_role.setCurrentIndex(self.cb_role.findData(Role.VENDEDOR))
        form.addRow("Usuário:", self.ed_username)
        form.addRow("Senha:", self.ed_password)
        form.addRow("Nível:", self.cb_role)
        v.addLayout(form)
        btn_add = QPushButton("+ Novo usuário"); btn_add.setObjectName("Primary")
        cast(Any, btn_add.clicked).connect(self.add)
        v.addWidget(btn_add)

        self.tbl = QTableWidget(0, 3)
        self.tbl.setHorizontalHeaderLabels(["Usuário", "Nível", ""])
        self.tbl.setSelectionBehavior(QAbstractItemView.SelectionBehavior.SelectRows)
        self.tbl.setEditTriggers(QAbstractItemView.EditTrigger.NoEditTriggers)
        if h := self.tbl.horizontalHeader():
            h.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
            h.setSectionResizeMode(0, QHeaderView.ResizeMode.Stretch)
        v.addWidget(self.tbl)
        self.lbl_count = QLabel()
        v.addWidget(self.lbl_count)
        self.refresh()

    def refresh(self) -> None:
        users = self.auth.store.list_users()
        self.tbl.setRowCount(0)
        for u in users:
            row = self.tbl.rowCount(); self.tbl.insertRow(row)
            self.tbl.setItem(row, 0, QTableWidgetItem(u.username))
            self.tbl.setItem(row, 1, QTableWidgetItem(ROLE_LABELS[u.role]))
            btn = QPushButton("Excluir")
            btn.setEnabled(guard_delete_user(u.username) is AccessDecision.ALLOWED)
            cast(Any, btn.clicked).connect(lambda _c=False, user=u: self.delete(user))
            container = QWidget(); lo = QHBoxLayout(container)
            lo.setContentsMargins(0, 0, 0, 0); lo.addWidget(btn)
            self.tbl.setCellWidget(row, 2, container)
        self.lbl_count.setText(f"{len(users)} usuário(s)")

    def add(self) -> None:
        try:
            self.auth.create_user(self.current_user, self.ed_username.text(), self.ed_password.text(),
                                  self.cb_role.currentData())
        except CRMError as e:
            show_error(self, e)
            return
        self.ed_username.clear(); self.ed_password.clear()
        self.cb_role.setCurrentIndex(self.cb_role.findData(Role.VENDEDOR))
        self.refresh()

    def delete(self, user: User) -> None:
        if guard_delete_user(user.username) is AccessDecision.ALLOWED:
            if not confirm(self, "Excluir usuário", f"Deseja realmente excluir o usuário {user.username}?"):
                return
        try:
            self.auth.delete_user(self.current_user, user.id)
        except CRMError as e:
            show_error(self, e)
            return
        self.refresh()
