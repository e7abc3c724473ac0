# login_dialog.py
# Diálogo de login de usuário

import os
import json
from pathlib import Path
from typing import Optional
from PyQt6.QtCore import Qt
from PyQt6.QtGui import QIcon, QPixmap
from PyQt6.QtWidgets import (
    QDialog, QFormLayout, QLineEdit, QDialogButtonBox, QCheckBox, QLabel, QVBoxLayout
)

from core.logger import log_warning

ASSETS_DIR = os.path.join(os.path.dirname(os.path.dirname(os.path.dirname(__file__))), "assets")


def credentials_file() -> Path:
    """Arquivo com o último usuário lembrado (nunca guarda a senha)."""
    return Path.home() / ".lele_crm" / "credentials.json"


def load_remembered_username(path: Path) -> str:
    try:
        if path.exists():
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            if isinstance(data, dict):
                return str(data.get('username') or '')
    except (OSError, ValueError) as e:
        log_warning(f"Usuário lembrado ignorado: {e}")
    return ''


def save_remembered_username(path: Path, username: Optional[str]) -> None:
    """Grava o usuário, ou apaga o arquivo quando `username` é vazio."""
    try:
        if username:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, 'w', encoding='utf-8') as f:
                json.dump({'username': username}, f)
        elif path.exists():
            path.unlink()
    except OSError as e:
        log_warning(f"Não foi possível salvar o usuário lembrado: {e}")


class LoginDialog(QDialog):
    def __init__(self, error: str = ""):
        super().__init__()
        self.setWindowTitle("Lelé da Kuka - Acesso")
        self.setMinimumWidth(360)
        ico_path = os.path.join(ASSETS_DIR, "logo.ico")
        if os.path.exists(ico_path):
            self.setWindowIcon(QIcon(ico_path))
        # QSS exclusivo da tela de login
        self.setStyleSheet("""
            QDialog {
                background: #ffffff;
            }
            QLabel {
                color: #1e293b;
                font-family: 'Segoe UI', Arial, sans-serif;
            }
            QLabel#subtitle {
                color: #9ca3af;
                font-size: 11px;
                font-weight: bold;
                letter-spacing: 2px;
            }
            QLabel#error {
                background: #fef2f2;
                color: #dc2626;
                border-radius: 8px;
                padding: 8px;
                font-size: 13px;
            }
            QLineEdit {
                background: #f9fafb;
                color: #1e293b;
                border: 1.5px solid #e5e7eb;
                border-radius: 10px;
                padding: 8px 12px;
                font-size: 15px;
            }
            QLineEdit:focus {
                border: 1.5px solid #FF3B1D;
                background: #fff;
            }
            QDialogButtonBox QPushButton {
                background: #FF3B1D;
                color: #fff;
                border-radius: 10px;
                padding: 8px 22px;
                font-weight: bold;
                font-size: 15px;
                border: none;
            }
            QDialogButtonBox QPushButton:hover {
                background: #e2321a;
            }
            QCheckBox {
                color: #475569;
                font-size: 14px;
                spacing: 8px;
            }
        """)
        vbox = QVBoxLayout(self)
        vbox.setContentsMargins(32, 24, 32, 24)
        vbox.setSpacing(10)

        logo_path = os.path.join(ASSETS_DIR, "logo.png")
        if os.path.exists(logo_path):
            logo = QLabel()
            logo.setPixmap(QPixmap(logo_path).scaledToHeight(112))
            logo.setAlignment(Qt.AlignmentFlag.AlignHCenter)
            vbox.addWidget(logo)

        title = QLabel("<b>LELÉ DA KUKA</b>")
        title.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        title.setStyleSheet("font-size: 24px; color: #1f2937;")
        vbox.addWidget(title)
        subtitle = QLabel("GESTÃO DE VENDAS & CRM")
        subtitle.setObjectName("subtitle")
        subtitle.setAlignment(Qt.AlignmentFlag.AlignHCenter)
        vbox.addWidget(subtitle)

        form = QFormLayout()
        form.setSpacing(16)
        self.username = QLineEdit()
        self.username.setPlaceholderText("Digite seu usuário")
        self.password = QLineEdit(); self.password.setEchoMode(QLineEdit.EchoMode.Password)
        self.password.setPlaceholderText("Digite sua senha")
        form.addRow("Usuário:", self.username)
        form.addRow("Senha:", self.password)
        vbox.addLayout(form)

        # Mensagem da tentativa anterior (genérica, não diz se foi usuário ou senha)
        if error:
            err = QLabel(error)
            err.setObjectName("error")
            err.setWordWrap(True)
            vbox.addWidget(err)

        self.remember_checkbox = QCheckBox("Lembrar usuário")
        vbox.addWidget(self.remember_checkbox)

        self._load_saved_credentials()

        btns = QDialogButtonBox(QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel)
        ok = btns.button(QDialogButtonBox.StandardButton.Ok)
        if ok:
            ok.setText("Entrar")
        btns.accepted.connect(self._on_accept)
        btns.rejected.connect(self.reject)
        vbox.addWidget(btns)

    def get_values(self):
        return self.username.text().strip(), self.password.text()

    def _load_saved_credentials(self):
        username = load_remembered_username(credentials_file())
        if username:
            self.username.setText(username)
            self.remember_checkbox.setChecked(True)
            self.password.setFocus()

    def _save_credentials(self):
        remembered = self.username.text().strip() if self.remember_checkbox.isChecked() else None
        save_remembered_username(credentials_file(), remembered)

    def _on_accept(self):
        """Handler quando usuário clica em Entrar"""
        self._save_credentials()
        self.accept()
