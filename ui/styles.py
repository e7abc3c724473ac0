# styles.py
# Folhas de estilo (QSS) da janela principal e dos popups

from PyQt6.QtWidgets import QWidget, QFileDialog

BRAND = "#FF3B1D"

# Paleta dos gráficos do painel
CHART_COLORS = ['#FF3B1D', '#FFA726', '#4CAF50', '#2196F3', '#9C27B0', '#00BCD4', '#795548', '#607D8B']

QSS_POPUP = """
QDialog, QMessageBox, QFileDialog, QInputDialog {
    background: #ffffff;
    color: #1f2937;
}
QLabel, QDialog QLabel, QMessageBox QLabel, QInputDialog QLabel {
    color: #1f2937;
    background: transparent;
}
QLineEdit, QTextEdit, QPlainTextEdit, QComboBox, QListWidget, QDoubleSpinBox {
    color: #111827;
    background: #f9fafb;
    border: 1px solid #e5e7eb;
    border-radius: 8px;
    padding: 6px;
    selection-background-color: #ffe4de;
    selection-color: #1f2937;
}
QLineEdit:focus, QTextEdit:focus, QPlainTextEdit:focus, QComboBox:focus {
    border: 1.5px solid #FF3B1D;
}
QComboBox QAbstractItemView {
    background: #ffffff;
    color: #111827;
    selection-background-color: #ffe4de;
    selection-color: #1f2937;
}
QPushButton {
    background: #f3f4f6;
    color: #111827;
    border: 1px solid #e5e7eb;
    border-radius: 10px;
    padding: 8px 14px;
}
QPushButton:hover {
    background: #ffe4de;
    border-color: #ffc2b5;
}
QPushButton#Primary {
    background: #FF3B1D;
    color: #ffffff;
    font-weight: bold;
    border: none;
}
QPushButton#Primary:hover {
    background: #e2321a;
}
"""


def qss_main() -> str:
    return QSS_POPUP + """
* { font-family: 'Segoe UI', Arial; font-size: 14px; outline: none; }
QMainWindow { background: #f7f9fc; }
#Header { background: #ffffff; border-bottom: 1px solid #e5e7eb; }
#AppTitle { color: #FF3B1D; font-size: 20px; font-weight: 800; }
QLabel#subtitle { color: #6b7280; }
QLabel#KpiValue { color: #1f2937; font-size: 26px; font-weight: 700; }
QLabel#KpiLabel { color: #6b7280; font-size: 11px; text-transform: uppercase; }
QFrame#KpiCard { background: #ffffff; border: 1px solid #f1f1f1; border-radius: 12px; }

QListWidget#Sidebar { background: #ffffff; color: #6b7280; border-right: 1px solid #e5e7eb; }
QListWidget#Sidebar::item { padding: 12px; margin: 6px; border-radius: 10px; }
QListWidget#Sidebar::item:selected { background: #FF3B1D; color: #ffffff; }
QListWidget#Sidebar::item:hover { background: #fff1ee; color: #1f2937; }

QTableWidget {
    background: #ffffff;
    alternate-background-color: #f8fafc;
    color: #111827;
    gridline-color: #e5e7eb;
    border: 1px solid #e5e7eb;
    border-radius: 4px;
}
QTableWidget::item:selected { background: #ffe4de; color: #1f2937; }
QHeaderView::section { background: #f3f4f6; color: #1f2937; padding: 6px; border: none; }
"""


def apply_popup_style(dialog: QWidget) -> None:
    """
    Aplica o estilo dos popups a um diálogo.

    Args:
        dialog: O widget de diálogo para aplicar o estilo
    """
    dialog.setStyleSheet(QSS_POPUP)
    # Forçar QFileDialog não nativo para aplicar QSS
    if isinstance(dialog, QFileDialog):
        dialog.setOption(QFileDialog.Option.DontUseNativeDialog, True)
