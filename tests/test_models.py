"""Testes de conversão dos registros armazenados e dos links de cliente."""

from core.maps import DEFAULT_CENTER, address_search_url, map_center, maps_url, whatsapp_url
from core.models import Client, ClientDraft, ClientSize, ClientStatus, ClientType, DocumentType, Role, User
from conftest import make_client


class TestClientRecord:

    def test_draft_defaults(self):
        draft = ClientDraft()
        assert draft.neighborhood == 'Antares'
        assert draft.document_type == DocumentType.CNPJ
        assert draft.client_type == ClientType.LANCHONETE
        assert draft.client_size == ClientSize.PEQUENO
        assert draft.status == ClientStatus.POTENCIAL
        assert draft.latitude is None

    def test_dict_round_trip(self):
        client = make_client('1000', 'Café Sol', latitude=-9.66, longitude=-35.73, registered_by='maria')
        assert Client.from_dict(client.to_dict()) == client

    def test_missing_keys_take_defaults(self):
        client = Client.from_dict({'id': 1000, 'name': 'Antigo'})
        assert client.id == '1000'
        assert client.status == ClientStatus.POTENCIAL
        assert client.created_at == ''

    def test_unknown_enum_value_takes_default(self):
        client = Client.from_dict({'id': '1', 'clientSize': 'Gigante', 'latitude': 'abc'})
        assert client.client_size == ClientSize.PEQUENO
        assert client.latitude is None

    def test_from_draft(self):
        client = Client.from_draft(ClientDraft(name='Bar Luz'), '1001', '2025-01-01T00:00:00.000Z')
        assert (client.id, client.name) == ('1001', 'Bar Luz')


class TestUserRecord:

    def test_round_trip(self):
        user = User(id='user-1', username='maria', password='abc', role=Role.ADMIN)
        assert user.to_dict() == {'id': 'user-1', 'username': 'maria', 'password': 'abc', 'role': 'admin'}
        assert User.from_dict(user.to_dict()) == user

    def test_password_hidden_from_repr(self):
        assert 'abc' not in repr(User(id='u', username='maria', password='abc'))

    def test_unknown_role_is_seller(self):
        assert User.from_dict({'id': 'u', 'username': 'x', 'role': 'gerente'}).role == Role.VENDEDOR


class TestLinks:

    def test_maps_url(self):
        assert maps_url(make_client('1', 'X', latitude=-9.6, longitude=-35.7)).endswith('query=-9.6,-35.7')
        assert maps_url(make_client('1', 'X')) is None

    def test_address_search_url(self):
        url = address_search_url(make_client('1', 'X', address='Rua A', neighborhood='Farol'))
        assert 'Rua%20A' in url

    def test_whatsapp_url(self):
        assert whatsapp_url('(82) 99999-0000') == 'https://wa.me/5582999990000'
        assert whatsapp_url('') is None

    def test_map_center(self):
        located = [make_client('1', 'A', latitude=-10.0, longitude=-36.0),
                   make_client('2', 'B', latitude=-9.0, longitude=-35.0),
                   make_client('3', 'C')]
        assert map_center(located) == (-9.5, -35.5)
        assert map_center([]) == DEFAULT_CENTER
