from typing import Optional, Sequence

from PyQt6.QtWidgets import QDialog, QVBoxLayout, QLabel, QPushButton, QHBoxLayout, QWidget
from PyQt6.QtCore import Qt

from core.errors import CRMError, GuardViolation, InvalidCredentials, NotFoundError, PersistenceFault, ValidationError
from ui.styles import QSS_POPUP

# Título do aviso para cada tipo de erro de domínio
ERROR_TITLES = {
    ValidationError: "Dados inválidos",
    NotFoundError: "Não encontrado",
    InvalidCredentials: "Login falhou",
    GuardViolation: "Operação bloqueada",
    PersistenceFault: "Erro de armazenamento",
}


class CustomMessageBox(QDialog):
    def __init__(self, parent=None, title="Mensagem", text="", buttons=("OK",), default=0, qss=None):
        super().__init__(parent)
        self.setWindowTitle(title)
        self.setModal(True)
        self.setMinimumWidth(320)
        layout = QVBoxLayout(self)
        label = QLabel(text)
        label.setWordWrap(True)
        label.setTextInteractionFlags(Qt.TextInteractionFlag.TextSelectableByMouse)
        label.setAlignment(Qt.AlignmentFlag.AlignLeft | Qt.AlignmentFlag.AlignVCenter)
        layout.addWidget(label)
        btn_layout = QHBoxLayout()
        btn_layout.addStretch(1)
        self._result = None
        self._btns = []
        for i, btxt in enumerate(buttons):
            btn = QPushButton(btxt)
            if i == default:
                btn.setObjectName("Primary")
            btn.clicked.connect(lambda _, ix=i: self._on_btn(ix))
            btn_layout.addWidget(btn)
            self._btns.append(btn)
        layout.addLayout(btn_layout)
        self.setStyleSheet(qss or QSS_POPUP)
        self._btns[default].setFocus()

    def _on_btn(self, ix):
        self._result = ix
        self.accept()

    @staticmethod
    def show_message(parent, title, text, buttons=("OK",), default=0, qss=None):
        dlg = CustomMessageBox(parent, title, text, buttons, default, qss)
        dlg.exec()
        return dlg._result


def show_message(parent: Optional[QWidget], title: str, text: str,
                 buttons: Sequence[str] = ("OK",), default: int = 0) -> Optional[int]:
    return CustomMessageBox.show_message(parent, title, text, tuple(buttons), default)


def show_error(parent: Optional[QWidget], error: CRMError) -> None:
    """Mostra um erro de domínio com o título correspondente ao seu tipo."""
    title = ERROR_TITLES.get(type(error), "Erro")
    show_message(parent, title, str(error))


def confirm(parent: Optional[QWidget], title: str, text: str) -> bool:
    return show_message(parent, title, text, ("Cancelar", "Confirmar"), default=1) == 1
