"""Testes da consulta de CNPJ (rede sempre simulada)."""

import json
import urllib.error
from unittest.mock import MagicMock, patch

import pytest

from core.errors import NotFoundError, ValidationError
from core.lookup import CompanyInfo, apply_company_info, autofill_from_cnpj, lookup_cnpj, normalize_company
from core.models import ClientDraft

BRASILAPI_RESPONSE = {
    'cnpj': '12345678000190',
    'razao_social': 'SOL ALIMENTOS LTDA',
    'nome_fantasia': 'CAFE SOL',
    'logradouro': 'RUA DO SOL',
    'numero': '120',
    'bairro': 'Farol',
    'municipio': 'MACEIO',
    'uf': 'AL',
}


def _urlopen_returning(payload):
    mock = MagicMock()
    mock.return_value.__enter__.return_value.read.return_value = json.dumps(payload).encode('utf-8')
    return mock


class TestNormalize:

    def test_full_response(self):
        info = normalize_company(BRASILAPI_RESPONSE)
        assert info == CompanyInfo('SOL ALIMENTOS LTDA', 'CAFE SOL', 'RUA DO SOL, 120', 'Farol', 'MACEIO', 'AL')

    def test_fantasy_name_falls_back_to_razao_social(self):
        info = normalize_company({'razao_social': 'ACME LTDA', 'nome_fantasia': ''})
        assert info.nome_fantasia == 'ACME LTDA'

    def test_missing_city_and_number(self):
        info = normalize_company({'razao_social': 'ACME', 'logradouro': 'AV. BRASIL'})
        assert info.logradouro == 'AV. BRASIL'
        assert (info.cidade, info.uf) == ('Maceió', 'AL')


class TestLookupCnpj:

    def test_rejects_short_document(self):
        with patch('urllib.request.urlopen') as urlopen:
            with pytest.raises(ValidationError):
                lookup_cnpj('123')
        urlopen.assert_not_called()

    def test_found(self):
        urlopen = _urlopen_returning(BRASILAPI_RESPONSE)
        with patch('urllib.request.urlopen', urlopen):
            info = lookup_cnpj('12.345.678/0001-90', timeout=1)
        assert info.nome_fantasia == 'CAFE SOL'
        request = urlopen.call_args[0][0]
        assert request.full_url.endswith('/12345678000190')

    def test_http_404_returns_none(self):
        error = urllib.error.HTTPError('http://x', 404, 'Not Found', {}, None)
        with patch('urllib.request.urlopen', side_effect=error):
            assert lookup_cnpj('12345678000190', timeout=1) is None

    def test_network_error_returns_none(self):
        with patch('urllib.request.urlopen', side_effect=urllib.error.URLError('offline')):
            assert lookup_cnpj('12345678000190', timeout=1) is None

    def test_invalid_json_returns_none(self):
        urlopen = MagicMock()
        urlopen.return_value.__enter__.return_value.read.return_value = b'<html>'
        with patch('urllib.request.urlopen', urlopen):
            assert lookup_cnpj('12345678000190', timeout=1) is None


class TestAutofill:

    def test_apply_keeps_unknown_neighborhood(self):
        draft = ClientDraft(neighborhood='Centro', document_value='12345678000190', phone='82999')
        info = CompanyInfo('R', 'F', '', 'Bairro Fora da Lista', 'Maceió', 'AL')
        result = apply_company_info(draft, info)
        assert result.neighborhood == 'Centro'
        assert (result.name, result.razao_social, result.phone) == ('F', 'R', '82999')
        assert draft.name == ''

    def test_autofill_found(self):
        draft = ClientDraft(document_value='12345678000190')
        with patch('urllib.request.urlopen', _urlopen_returning(BRASILAPI_RESPONSE)):
            result = autofill_from_cnpj(draft)
        assert result.name == 'CAFE SOL'
        assert result.neighborhood == 'Farol'
        assert result.address == 'RUA DO SOL, 120'

    def test_autofill_not_found(self):
        draft = ClientDraft(document_value='12345678000190')
        with patch('urllib.request.urlopen', side_effect=urllib.error.URLError('offline')):
            with pytest.raises(NotFoundError):
                autofill_from_cnpj(draft)
