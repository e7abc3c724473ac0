# client_dialog.py
# Formulário de novo cadastro de cliente

from typing import Any, Optional, cast

from PyQt6.QtPositioning import QGeoPositionInfo, QGeoPositionInfoSource
from PyQt6.QtWidgets import (
    QComboBox, QDialog, QDialogButtonBox, QFormLayout, QGroupBox, QHBoxLayout, QLabel,
    QLineEdit, QPushButton, QTextEdit, QVBoxLayout, QWidget,
)

from core.config import get_setting
from core.constants import CLIENT_SEGMENTS, NEIGHBORHOODS
from core.errors import CRMError
from core.logger import log_error, log_warning
from core.lookup import autofill_from_cnpj
from core.models import ClientDraft, ClientSize, ClientStatus, ClientType, DocumentType
from core.services import ClientService
from ui.dialogs.custom_messagebox import show_error, show_message
from ui.styles import apply_popup_style
from ui.workers import CallWorker

# Tempo máximo aguardando a leitura de posição (ms)
POSITION_TIMEOUT_MS = 15000


def _enum_combo(enum_cls, current) -> QComboBox:
    combo = QComboBox()
    for member in enum_cls:
        combo.addItem(member.value, member)
    combo.setCurrentIndex(combo.findData(current))
    return combo


class ClientDialog(QDialog):
    def __init__(self, service: ClientService, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        apply_popup_style(self)
        self.service = service
        self.setWindowTitle("Novo Cadastro")
        self.resize(560, 720)
        self.latitude: Optional[float] = None
        self.longitude: Optional[float] = None
        self._worker: Optional[CallWorker] = None
        defaults = ClientDraft(city=get_setting('default_city'), state=get_setting('default_state'))

        v = QVBoxLayout(self)

        # Documentação
        doc_box = QGroupBox("Documentação")
        doc_form = QFormLayout(doc_box)
        self.cb_doc_type = _enum_combo(DocumentType, defaults.document_type)
        self.ed_document = QLineEdit()
        self.ed_document.setPlaceholderText("Somente números")
        self.btn_lookup = QPushButton("Buscar CNPJ")
        cast(Any, self.btn_lookup.clicked).connect(self.lookup_document)
        cast(Any, self.cb_doc_type.currentIndexChanged).connect(self._on_doc_type_changed)
        doc_row = QHBoxLayout(); doc_row.addWidget(self.ed_document, 1); doc_row.addWidget(self.btn_lookup)
        doc_form.addRow("Tipo:", self.cb_doc_type)
        doc_form.addRow("Documento:", doc_row)
        self.ed_razao = QLineEdit()
        doc_form.addRow("Razão Social:", self.ed_razao)
        v.addWidget(doc_box)

        # Estabelecimento
        est_box = QGroupBox("Estabelecimento")
        form = QFormLayout(est_box)
        self.ed_name = QLineEdit()
        self.ed_name.setPlaceholderText("Nome Fantasia")
        self.ed_responsible = QLineEdit()
        self.ed_phone = QLineEdit()
        self.ed_phone.setPlaceholderText("(82) 99999-9999")
        self.cb_type = _enum_combo(ClientType, defaults.client_type)
        self.cb_size = _enum_combo(ClientSize, defaults.client_size)
        self.cb_status = _enum_combo(ClientStatus, defaults.status)
        # segmento aceita texto livre além das sugestões
        self.cb_segment = QComboBox(); self.cb_segment.setEditable(True)
        self.cb_segment.addItems(CLIENT_SEGMENTS)
        form.addRow("Nome:", self.ed_name)
        form.addRow("Responsável:", self.ed_responsible)
        form.addRow("Telefone:", self.ed_phone)
        form.addRow("Tipo:", self.cb_type)
        form.addRow("Porte:", self.cb_size)
        form.addRow("Segmento:", self.cb_segment)
        form.addRow("Status:", self.cb_status)
        v.addWidget(est_box)

        # Endereço
        addr_box = QGroupBox("Localização")
        addr = QFormLayout(addr_box)
        self.ed_address = QLineEdit()
        self.cb_neighborhood = QComboBox(); self.cb_neighborhood.addItems(NEIGHBORHOODS)
        self.ed_city = QLineEdit(defaults.city)
        self.ed_state = QLineEdit(defaults.state); self.ed_state.setMaxLength(2)
        self.lbl_position = QLabel("Obtendo localização…")
        self.lbl_position.setObjectName("subtitle")
        addr.addRow("Endereço:", self.ed_address)
        addr.addRow("Bairro:", self.cb_neighborhood)
        addr.addRow("Cidade:", self.ed_city)
        addr.addRow("UF:", self.ed_state)
        addr.addRow("GPS:", self.lbl_position)
        v.addWidget(addr_box)

        self.ed_observations = QTextEdit()
        self.ed_observations.setPlaceholderText("Observações sobre o cliente, preferências, etc.")
        v.addWidget(QLabel("Observações:"))
        v.addWidget(self.ed_observations)

        btns = QDialogButtonBox(QDialogButtonBox.StandardButton.Save | QDialogButtonBox.StandardButton.Cancel)
        save = btns.button(QDialogButtonBox.StandardButton.Save)
        if save:
            save.setText("Salvar Cliente"); save.setObjectName("Primary")
        cast(Any, btns.accepted).connect(self.accept)
        cast(Any, btns.rejected).connect(self.reject)
        v.addWidget(btns)

        self._request_position()

    # ---- GPS ----
    def _request_position(self) -> None:
        self._position_source = QGeoPositionInfoSource.createDefaultSource(self)
        if self._position_source is None:
            self.lbl_position.setText("Localização indisponível")
            return
        cast(Any, self._position_source.positionUpdated).connect(self._on_position)
        cast(Any, self._position_source.errorOccurred).connect(self._on_position_error)
        self._position_source.requestUpdate(POSITION_TIMEOUT_MS)

    def _on_position(self, info: QGeoPositionInfo) -> None:
        coord = info.coordinate()
        if not coord.isValid():
            self._on_position_error(None)
            return
        self.latitude, self.longitude = coord.latitude(), coord.longitude()
        self.lbl_position.setText(f"{self.latitude:.6f}, {self.longitude:.6f}")

    def _on_position_error(self, error: Any) -> None:
        log_warning(f"Erro ao obter localização: {error}")
        self.lbl_position.setText("Localização indisponível")

    # ---- CNPJ ----
    def _on_doc_type_changed(self) -> None:
        self.btn_lookup.setVisible(self.cb_doc_type.currentData() == DocumentType.CNPJ)

    def lookup_document(self) -> None:
        self.btn_lookup.setEnabled(False)
        self.btn_lookup.setText("Buscando…")
        self._worker = CallWorker(autofill_from_cnpj, self.get_draft())
        cast(Any, self._worker.succeeded).connect(self._on_lookup_done)
        cast(Any, self._worker.failed).connect(self._on_lookup_failed)
        self._worker.start()

    def _reset_lookup_button(self) -> None:
        self.btn_lookup.setEnabled(True)
        self.btn_lookup.setText("Buscar CNPJ")

    def _on_lookup_done(self, draft: ClientDraft) -> None:
        self._reset_lookup_button()
        self.ed_razao.setText(draft.razao_social)
        self.ed_name.setText(draft.name)
        self.ed_address.setText(draft.address)
        self.cb_neighborhood.setCurrentText(draft.neighborhood)
        self.ed_city.setText(draft.city)
        self.ed_state.setText(draft.state)

    def _on_lookup_failed(self, error: Exception) -> None:
        self._reset_lookup_button()
        if isinstance(error, CRMError):
            show_error(self, error)
            return
        log_error("Erro inesperado na consulta de CNPJ", error)
        show_message(self, "Erro", f"Falha na consulta: {error}")

    # ---- dados ----
    def get_draft(self) -> ClientDraft:
        return ClientDraft(
            name=self.ed_name.text().strip(),
            razao_social=self.ed_razao.text().strip(),
            responsible_name=self.ed_responsible.text().strip(),
            phone=self.ed_phone.text().strip(),
            address=self.ed_address.text().strip(),
            neighborhood=self.cb_neighborhood.currentText(),
            city=self.ed_city.text().strip(),
            state=self.ed_state.text().strip().upper(),
            document_type=self.cb_doc_type.currentData(),
            document_value=self.ed_document.text().strip(),
            client_type=self.cb_type.currentData(),
            client_size=self.cb_size.currentData(),
            segment=self.cb_segment.currentText().strip(),
            status=self.cb_status.currentData(),
            latitude=self.latitude,
            longitude=self.longitude,
            observations=self.ed_observations.toPlainText().strip(),
        )

    def done(self, result: int) -> None:
        # a consulta pode seguir em andamento; o resultado é descartado
        if self._worker is not None:
            self._worker.detach()
        if self._position_source is not None:
            self._position_source.stopUpdates()
        super().done(result)

    def accept(self) -> None:
        try:
            self.service.validate(self.get_draft())
        except CRMError as e:
            show_error(self, e)
            return
        super().accept()
