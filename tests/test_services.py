"""Testes de acesso (login, perfis, exclusão de usuários) e cadastro de clientes."""

import pytest

from core.errors import GuardViolation, InvalidCredentials, ValidationError
from core.models import ClientDraft, DocumentType, Role, User
from core.services import (
    AccessDecision, AuthService, ClientService, authenticate, authorize, guard_delete_user, only_digits,
)


# ═══════════════════════════════════════════════
# Funções puras
# ═══════════════════════════════════════════════

class TestAuthenticate:

    def test_valid_credentials(self, admin, seller):
        assert authenticate('maria', 'abc', [admin, seller]) is seller

    def test_wrong_password_and_unknown_user_look_the_same(self, admin):
        with pytest.raises(InvalidCredentials) as wrong_password:
            authenticate('admin', 'errada', [admin])
        with pytest.raises(InvalidCredentials) as unknown:
            authenticate('ninguem', '123', [admin])
        assert str(wrong_password.value) == str(unknown.value) == 'Usuário ou senha inválidos.'

    def test_case_sensitive(self, admin):
        with pytest.raises(InvalidCredentials):
            authenticate('Admin', '123', [admin])

    def test_ambiguous_match_fails(self, admin):
        twin = User(id='user-2', username='admin', password='123', role=Role.VENDEDOR)
        with pytest.raises(InvalidCredentials):
            authenticate('admin', '123', [admin, twin])


def test_authorize(admin, seller):
    assert authorize(admin, Role.ADMIN)
    assert not authorize(seller, Role.ADMIN)
    assert authorize(seller, 'vendedor')


def test_guard_delete_user():
    assert guard_delete_user('admin') is AccessDecision.BLOCKED
    assert guard_delete_user('maria') is AccessDecision.ALLOWED
    assert guard_delete_user('Admin') is AccessDecision.ALLOWED


def test_only_digits():
    assert only_digits('12.345.678/0001-90') == '12345678000190'
    assert only_digits('') == ''


# ═══════════════════════════════════════════════
# AuthService
# ═══════════════════════════════════════════════

class TestAuthService:

    @pytest.fixture
    def auth(self, store):
        return AuthService(store)

    def test_login_bootstrap_admin(self, auth):
        user = auth.authenticate('admin', '123')
        assert user.id == 'admin-0'
        assert user.is_admin

    def test_login_failure(self, auth):
        with pytest.raises(InvalidCredentials):
            auth.authenticate('admin', '1234')

    def test_admin_creates_user_who_can_login(self, auth, admin):
        auth.create_user(admin, 'maria', 'abc')
        assert auth.authenticate('maria', 'abc').role == Role.VENDEDOR

    def test_seller_cannot_create_users(self, auth, seller):
        with pytest.raises(GuardViolation):
            auth.create_user(seller, 'joao', 'x')

    def test_create_requires_username_and_password(self, auth, admin):
        with pytest.raises(ValidationError):
            auth.create_user(admin, '  ', 'x')
        with pytest.raises(ValidationError):
            auth.create_user(admin, 'joao', '')

    def test_duplicate_usernames_are_accepted(self, auth, admin, store):
        auth.create_user(admin, 'maria', 'a')
        auth.create_user(admin, 'maria', 'b')
        assert [u.username for u in store.list_users()].count('maria') == 2

    def test_default_admin_cannot_be_deleted(self, auth, admin, store):
        with pytest.raises(GuardViolation):
            auth.delete_user(admin, 'admin-0')
        assert store.find_user('admin-0') is not None

    def test_admin_deletes_seller(self, auth, admin, store):
        user = auth.create_user(admin, 'maria', 'abc')
        auth.delete_user(admin, user.id)
        assert store.find_user(user.id) is None

    def test_seller_cannot_delete(self, auth, admin, seller, store):
        user = auth.create_user(admin, 'joao', 'x')
        with pytest.raises(GuardViolation):
            auth.delete_user(seller, user.id)
        assert store.find_user(user.id) is not None

    def test_delete_unknown_user_is_noop(self, auth, admin):
        auth.delete_user(admin, 'user-404')


# ═══════════════════════════════════════════════
# ClientService
# ═══════════════════════════════════════════════

class TestClientService:

    @pytest.fixture
    def service(self, store):
        return ClientService(store)

    def test_register_sets_author(self, service, seller):
        client = service.register(ClientDraft(name='Café Sol'), seller)
        assert client.id == '1000'
        assert client.registered_by == 'maria'

    def test_name_is_required(self, service, seller, store):
        with pytest.raises(ValidationError):
            service.register(ClientDraft(name='   '), seller)
        assert store.list_clients() == []

    def test_cnpj_length(self, service):
        with pytest.raises(ValidationError):
            service.validate(ClientDraft(name='X', document_value='123'))
        service.validate(ClientDraft(name='X', document_value='12.345.678/0001-90'))

    def test_cpf_length(self, service):
        draft = ClientDraft(name='X', document_type=DocumentType.CPF, document_value='123.456.789-00')
        service.validate(draft)
        with pytest.raises(ValidationError):
            service.validate(ClientDraft(name='X', document_type=DocumentType.CPF,
                                         document_value='12.345.678/0001-90'))

    def test_document_is_optional(self, service):
        service.validate(ClientDraft(name='X'))
