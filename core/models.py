# models.py
# Definições de dataclasses e enums do domínio (clientes e usuários)

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, Optional

from core.constants import NEIGHBORHOODS, CLIENT_SEGMENTS


class ClientType(str, Enum):
    LANCHONETE = 'Lanchonete'
    BAR = 'Bar'
    RESTAURANTE = 'Restaurante'
    FOOD_TRUCK = 'Food Truck'
    PONTO_INFORMAL = 'Ponto Informal'


class ClientSize(str, Enum):
    PEQUENO = 'Pequeno'
    MEDIO = 'Médio'
    GRANDE = 'Grande'


class ClientStatus(str, Enum):
    ATIVO = 'Ativo'
    POTENCIAL = 'Potencial'
    INATIVO = 'Inativo'


class DocumentType(str, Enum):
    CPF = 'CPF'
    CNPJ = 'CNPJ'


class Role(str, Enum):
    ADMIN = 'admin'
    VENDEDOR = 'vendedor'


# Nome do campo em Python -> chave no JSON armazenado
_CLIENT_KEYS = {
    'name': 'name',
    'razao_social': 'razaoSocial',
    'responsible_name': 'responsibleName',
    'phone': 'phone',
    'address': 'address',
    'neighborhood': 'neighborhood',
    'city': 'city',
    'state': 'state',
    'document_type': 'documentType',
    'document_value': 'documentValue',
    'client_type': 'clientType',
    'client_size': 'clientSize',
    'segment': 'segment',
    'status': 'status',
    'latitude': 'latitude',
    'longitude': 'longitude',
    'registered_by': 'registeredBy',
    'observations': 'observations',
}


def _enum_or_default(enum_cls, value: Any, default):
    try:
        return enum_cls(value)
    except ValueError:
        return default


def _coordinate(value: Any) -> Optional[float]:
    if value is None or value == '':
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


@dataclass
class ClientDraft:
    """Dados de um cliente ainda sem código e data de cadastro.

    Os valores padrão são os mesmos do formulário de novo cadastro.
    """
    name: str = ''
    razao_social: str = ''
    responsible_name: str = ''
    phone: str = ''
    address: str = ''
    neighborhood: str = NEIGHBORHOODS[0]
    city: str = ''
    state: str = ''
    document_type: DocumentType = DocumentType.CNPJ
    document_value: str = ''
    client_type: ClientType = ClientType.LANCHONETE
    client_size: ClientSize = ClientSize.PEQUENO
    segment: str = CLIENT_SEGMENTS[0]
    status: ClientStatus = ClientStatus.POTENCIAL
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    registered_by: str = ''
    observations: str = ''

    def draft_fields(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in _CLIENT_KEYS}


@dataclass
class Client(ClientDraft):
    id: str = ''
    created_at: str = ''

    @classmethod
    def from_draft(cls, draft: ClientDraft, client_id: str, created_at: str) -> "Client":
        return cls(id=client_id, created_at=created_at, **draft.draft_fields())

    def to_dict(self) -> Dict[str, Any]:
        """Converte para o formato JSON armazenado (chaves camelCase, enums como texto)."""
        data: Dict[str, Any] = {'id': self.id}
        for attr, key in _CLIENT_KEYS.items():
            value = getattr(self, attr)
            data[key] = value.value if isinstance(value, Enum) else value
        data['createdAt'] = self.created_at
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Client":
        """Cria um cliente a partir do JSON armazenado.

        Chaves ausentes assumem o padrão e chaves desconhecidas são ignoradas,
        para tolerar registros gravados por versões anteriores.
        """
        defaults = ClientDraft()
        kwargs: Dict[str, Any] = {}
        for attr, key in _CLIENT_KEYS.items():
            raw = data.get(key)
            kwargs[attr] = getattr(defaults, attr) if raw is None else raw
        kwargs['document_type'] = _enum_or_default(DocumentType, kwargs['document_type'], defaults.document_type)
        kwargs['client_type'] = _enum_or_default(ClientType, kwargs['client_type'], defaults.client_type)
        kwargs['client_size'] = _enum_or_default(ClientSize, kwargs['client_size'], defaults.client_size)
        kwargs['status'] = _enum_or_default(ClientStatus, kwargs['status'], defaults.status)
        kwargs['latitude'] = _coordinate(kwargs['latitude'])
        kwargs['longitude'] = _coordinate(kwargs['longitude'])
        return cls(id=str(data.get('id', '')), created_at=str(data.get('createdAt', '')), **kwargs)


@dataclass
class User:
    id: str
    username: str
    password: str = field(default='', repr=False)
    role: Role = Role.VENDEDOR

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['role'] = self.role.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "User":
        return cls(
            id=str(data.get('id', '')),
            username=str(data.get('username', '')),
            password=str(data.get('password') or ''),
            role=_enum_or_default(Role, data.get('role'), Role.VENDEDOR),
        )
