"""Testes das partes da interface que não dependem de interação."""

import json
from unittest.mock import patch

import pytest
from PyQt6.QtWidgets import QApplication

from core.constants import CLIENTS_KEY
from core.models import ClientDraft
from core.storage import MemoryStorage
from core.store import RecordStore
from ui.base_page import BasePage
from ui.dialogs.login_dialog import load_remembered_username, save_remembered_username


@pytest.fixture(scope='module')
def qapp():
    return QApplication.instance() or QApplication([])


# ═══════════════════════════════════════════════
# BasePage
# ═══════════════════════════════════════════════

class TestBasePage:

    def test_load_clients(self, qapp, store):
        store.create_client(ClientDraft(name='Café Sol'))
        page = BasePage("Clientes", store=store)
        assert [c.name for c in page.load_clients()] == ['Café Sol']

    def test_load_clients_without_store(self, qapp):
        assert BasePage("Sobre").load_clients() == []

    def test_corrupt_storage_shows_error(self, qapp):
        page = BasePage("Clientes", store=RecordStore(MemoryStorage({CLIENTS_KEY: '{quebrado'})))
        with patch('ui.base_page.show_error') as show_error:
            assert page.load_clients() == []
        show_error.assert_called_once()


# ═══════════════════════════════════════════════
# Lembrar usuário
# ═══════════════════════════════════════════════

class TestRememberedUsername:

    def test_only_username_is_saved(self, tmp_path):
        path = tmp_path / 'lele' / 'credentials.json'
        save_remembered_username(path, 'maria')
        data = json.loads(path.read_text(encoding='utf-8'))
        assert data == {'username': 'maria'}
        assert load_remembered_username(path) == 'maria'

    def test_unchecked_removes_file(self, tmp_path):
        path = tmp_path / 'credentials.json'
        save_remembered_username(path, 'maria')
        save_remembered_username(path, None)
        assert not path.exists()

    def test_missing_or_invalid_file(self, tmp_path):
        path = tmp_path / 'credentials.json'
        assert load_remembered_username(path) == ''
        path.write_text('{nao é json', encoding='utf-8')
        assert load_remembered_username(path) == ''

    def test_old_file_with_password_is_not_read(self, tmp_path):
        path = tmp_path / 'credentials.json'
        path.write_text(json.dumps({'u': 'YWRtaW4=', 'p': 'MTIz'}), encoding='utf-8')
        assert load_remembered_username(path) == ''
