# export.py
# Exportação da lista de clientes para CSV (separado por ponto e vírgula)

import csv
import io
import os
from datetime import date
from typing import List, Optional, Sequence

from core.constants import DEFAULT_CITY, DEFAULT_STATE
from core.logger import log_event
from core.models import Client

BOM = '\ufeff'

CSV_HEADERS = [
    'Código', 'Razão Social', 'Nome Fantasia', 'Responsável', 'Telefone', 'Endereço', 'Bairro',
    'Cidade', 'Estado', 'Tipo Doc', 'Documento', 'Tipo Cliente', 'Tamanho', 'Segmento',
    'Status', 'Latitude', 'Longitude', 'Cadastrado Por', 'Data Cadastro', 'Observações',
]


def format_coordinate(value: Optional[float]) -> str:
    if value is None:
        return ''
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))


def client_row(client: Client) -> List[str]:
    """Campos do cliente na ordem de CSV_HEADERS."""
    return [
        client.id,
        client.razao_social or '',
        client.name or '',
        client.responsible_name or '',
        client.phone or '',
        client.address or '',
        client.neighborhood or '',
        client.city or DEFAULT_CITY,
        client.state or DEFAULT_STATE,
        client.document_type.value,
        client.document_value,
        client.client_type.value,
        client.client_size.value,
        client.segment,
        client.status.value,
        format_coordinate(client.latitude),
        format_coordinate(client.longitude),
        client.registered_by,
        client.created_at,
        client.observations or '',
    ]


def encode_csv(clients: Sequence[Client]) -> str:
    """
    Gera o documento CSV (com BOM) para os clientes informados.

    Todas as células das linhas de dados vão entre aspas, com aspas internas
    duplicadas. Retorna string vazia quando não há clientes.
    """
    if not clients:
        return ''
    buffer = io.StringIO()
    writer = csv.writer(buffer, delimiter=';', quoting=csv.QUOTE_ALL, lineterminator='\n')
    for client in clients:
        writer.writerow(client_row(client))
    rows = buffer.getvalue()[:-1]
    return BOM + ';'.join(CSV_HEADERS) + '\n' + rows


def export_filename(day: Optional[date] = None) -> str:
    day = day or date.today()
    return f"clientes_lele_da_kuka_{day.isoformat()}.csv"


def write_csv(clients: Sequence[Client], directory: str, day: Optional[date] = None) -> Optional[str]:
    """
    Grava o CSV na pasta indicada.

    Args:
        clients: Clientes (normalmente já filtrados)
        directory: Pasta de destino
        day: Data usada no nome do arquivo (padrão: hoje)

    Returns:
        Caminho do arquivo gravado, ou None se não havia nada para exportar
    """
    content = encode_csv(clients)
    if not content:
        return None
    path = os.path.join(directory, export_filename(day))
    with open(path, 'w', encoding='utf-8', newline='') as f:
        f.write(content)
    log_event(f"CSV exportado: {len(clients)} clientes em {path}")
    return path
