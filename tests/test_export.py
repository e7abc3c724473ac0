"""Testes da exportação CSV."""

import csv
import io
from datetime import date

from core.export import BOM, CSV_HEADERS, encode_csv, export_filename, format_coordinate, write_csv
from conftest import make_client


def _parse(document):
    return list(csv.reader(io.StringIO(document[len(BOM):]), delimiter=';'))


class TestEncodeCsv:

    def test_empty_list_gives_empty_document(self):
        assert encode_csv([]) == ''

    def test_starts_with_bom_and_header(self, clients):
        document = encode_csv(clients)
        assert document.startswith(BOM + 'Código;Razão Social;Nome Fantasia;')
        assert document.split('\n')[0] == BOM + ';'.join(CSV_HEADERS)
        assert len(CSV_HEADERS) == 20

    def test_one_line_per_client_without_trailing_newline(self, clients):
        document = encode_csv(clients)
        assert len(document.split('\n')) == len(clients) + 1
        assert not document.endswith('\n')

    def test_data_cells_are_quoted(self, clients):
        line = encode_csv(clients[:1]).split('\n')[1]
        assert line.startswith('"1000";"";"Café Sol";')

    def test_quotes_and_semicolons_round_trip(self):
        document = encode_csv([make_client('1000', 'A;B"C')])
        assert '"A;B""C"' in document
        rows = _parse(document)
        assert rows[1][2] == 'A;B"C'
        assert len(rows[1]) == 20

    def test_city_and_state_defaults(self):
        row = _parse(encode_csv([make_client('1000', 'X')]))[1]
        assert row[7:9] == ['Maceió', 'AL']

    def test_missing_coordinates_are_empty(self):
        row = _parse(encode_csv([make_client('1000', 'X')]))[1]
        assert row[15:17] == ['', '']

    def test_coordinates(self):
        row = _parse(encode_csv([make_client('1000', 'X', latitude=-9.6658, longitude=-35.735)]))[1]
        assert row[15:17] == ['-9.6658', '-35.735']


def test_format_coordinate():
    assert format_coordinate(None) == ''
    assert format_coordinate(0.0) == '0'
    assert format_coordinate(-9.5) == '-9.5'


def test_export_filename():
    assert export_filename(date(2025, 3, 7)) == 'clientes_lele_da_kuka_2025-03-07.csv'


class TestWriteCsv:

    def test_writes_file(self, clients, tmp_path):
        path = write_csv(clients, str(tmp_path), date(2025, 3, 7))
        assert path == str(tmp_path / 'clientes_lele_da_kuka_2025-03-07.csv')
        with open(path, encoding='utf-8', newline='') as f:
            assert f.read() == encode_csv(clients)

    def test_nothing_to_write(self, tmp_path):
        assert write_csv([], str(tmp_path)) is None
        assert list(tmp_path.iterdir()) == []
