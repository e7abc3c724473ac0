"""Fixtures compartilhadas dos testes.

Logs e dados vão para pastas temporárias antes de qualquer import de `core`,
já que o logger abre o arquivo do dia na importação.
"""

import os
import sys
import tempfile

os.environ.setdefault('LELE_CRM_LOG_DIR', tempfile.mkdtemp(prefix='lele_logs_'))
os.environ.setdefault('LELE_CRM_DATA_DIR', tempfile.mkdtemp(prefix='lele_data_'))
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import pytest

from core.models import Client, ClientSize, ClientStatus, ClientType, Role, User
from core.storage import MemoryStorage
from core.store import RecordStore


def make_client(client_id, name, **kwargs):
    kwargs.setdefault('created_at', '2025-01-01T10:00:00.000Z')
    return Client(id=client_id, name=name, **kwargs)


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return RecordStore(storage, clock=lambda: '2025-03-10T12:00:00.000Z')


@pytest.fixture
def clients():
    return [
        make_client('1000', 'Café Sol', phone='82999990000', neighborhood='Farol',
                    client_type=ClientType.LANCHONETE, client_size=ClientSize.PEQUENO,
                    status=ClientStatus.ATIVO),
        make_client('1001', 'Bar Luz', phone='82988887777', neighborhood='Farol',
                    client_type=ClientType.BAR, client_size=ClientSize.MEDIO),
        make_client('1002', 'Restaurante Mar', phone='8233334444', neighborhood='Pajuçara',
                    client_type=ClientType.RESTAURANTE, client_size=ClientSize.GRANDE,
                    status=ClientStatus.INATIVO),
    ]


@pytest.fixture
def admin():
    return User(id='admin-0', username='admin', password='123', role=Role.ADMIN)


@pytest.fixture
def seller():
    return User(id='user-1', username='maria', password='abc', role=Role.VENDEDOR)
