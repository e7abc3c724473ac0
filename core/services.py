# services.py
# Camada de serviços para regras de negócio (acesso, usuários e cadastro de clientes)

import re
from enum import Enum
from typing import Sequence

from core.constants import BOOTSTRAP_ADMIN_USERNAME
from core.errors import GuardViolation, InvalidCredentials, ValidationError
from core.logger import log_event, log_warning
from core.models import Client, ClientDraft, DocumentType, Role, User
from core.store import RecordStore


class AccessDecision(str, Enum):
    ALLOWED = 'allowed'
    BLOCKED = 'blocked'


DOCUMENT_DIGITS = {
    DocumentType.CNPJ: 14,
    DocumentType.CPF: 11,
}


def only_digits(value: str) -> str:
    return re.sub(r'\D', '', value or '')


def authenticate(username: str, password: str, users: Sequence[User]) -> User:
    """
    Confere usuário e senha (comparação exata, sensível a maiúsculas).

    Raises:
        InvalidCredentials: sem distinguir usuário inexistente de senha errada
    """
    found = [u for u in users if u.username == username and u.password == password]
    if len(found) != 1:
        raise InvalidCredentials()
    return found[0]


def authorize(user: User, required_role: Role) -> bool:
    return user.role == Role(required_role)


def guard_delete_user(target_username: str) -> AccessDecision:
    # o admin padrão nunca pode ser excluído, independente de quem pede
    if target_username == BOOTSTRAP_ADMIN_USERNAME:
        return AccessDecision.BLOCKED
    return AccessDecision.ALLOWED


class AuthService:
    def __init__(self, store: RecordStore):
        self.store = store

    def authenticate(self, username: str, password: str) -> User:
        try:
            user = authenticate(username, password, self.store.list_users())
        except InvalidCredentials:
            log_warning(f"Login falhou para usuário: {username}")
            raise
        log_event(f"Login bem-sucedido: {username} (Perfil: {user.role.value})")
        return user

    def _require_admin(self, acting_user: User) -> None:
        if not authorize(acting_user, Role.ADMIN):
            raise GuardViolation("Apenas administradores podem gerenciar usuários.")

    def create_user(self, acting_user: User, username: str, password: str,
                    role: Role = Role.VENDEDOR) -> User:
        """Cria um novo usuário. Nomes repetidos são aceitos."""
        self._require_admin(acting_user)
        username = (username or '').strip()
        if not username or not password:
            raise ValidationError("Informe usuário e senha.")
        return self.store.create_user(username, password, role)

    def delete_user(self, acting_user: User, user_id: str) -> None:
        self._require_admin(acting_user)
        target = self.store.find_user(user_id)
        if target is None:
            return
        if guard_delete_user(target.username) is AccessDecision.BLOCKED:
            log_warning(f"Tentativa de excluir o admin padrão por {acting_user.username}")
            raise GuardViolation("O usuário 'admin' padrão não pode ser excluído.")
        self.store.delete_user(user_id)


class ClientService:
    def __init__(self, store: RecordStore):
        self.store = store

    def validate(self, draft: ClientDraft) -> None:
        if not draft.name.strip():
            raise ValidationError("Informe o nome fantasia do estabelecimento.")
        digits = only_digits(draft.document_value)
        expected = DOCUMENT_DIGITS[draft.document_type]
        if digits and len(digits) != expected:
            raise ValidationError(f"Digite um {draft.document_type.value} válido com {expected} dígitos.")

    def register(self, draft: ClientDraft, user: User) -> Client:
        self.validate(draft)
        draft.registered_by = user.username
        return self.store.create_client(draft)
