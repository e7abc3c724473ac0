# filters.py
# Filtros e agregações sobre a lista de clientes (funções puras)

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Sequence, Union

from core.constants import NEIGHBORHOOD_TOP_N
from core.models import Client, ClientSize, ClientStatus, ClientType


@dataclass(frozen=True)
class ClientFilter:
    """Critérios da listagem. Valor vazio significa "sem restrição"."""
    search_term: str = ''
    neighborhood: str = ''
    client_type: Union[ClientType, str] = ''
    client_size: Union[ClientSize, str] = ''


@dataclass(frozen=True)
class GroupCount:
    key: str
    count: int


@dataclass(frozen=True)
class ClientSummary:
    total: int
    active: int
    potential: int


class Dimension(str, Enum):
    STATUS = 'status'
    SIZE = 'size'
    TYPE = 'type'
    NEIGHBORHOOD = 'neighborhood'


def _text(value) -> str:
    return value.value if isinstance(value, Enum) else (value or '')


def matches(client: Client, criteria: ClientFilter) -> bool:
    term = criteria.search_term
    if term:
        found = (
            term.lower() in client.name.lower()
            or term in client.phone
            or term in client.id
        )
        if not found:
            return False
    if criteria.neighborhood and client.neighborhood != criteria.neighborhood:
        return False
    client_type = _text(criteria.client_type)
    if client_type and client.client_type.value != client_type:
        return False
    client_size = _text(criteria.client_size)
    if client_size and client.client_size.value != client_size:
        return False
    return True


def filter_clients(clients: Iterable[Client], criteria: ClientFilter = ClientFilter()) -> List[Client]:
    """Mantém os clientes que atendem a todos os critérios, na ordem original."""
    return [c for c in clients if matches(c, criteria)]


def _count_enum(clients: Sequence[Client], members, attr: str) -> List[GroupCount]:
    counts: Dict[str, int] = {m.value: 0 for m in members}
    for client in clients:
        value = getattr(client, attr).value
        if value in counts:
            counts[value] += 1
    return [GroupCount(key, count) for key, count in counts.items()]


def aggregate_by_dimension(clients: Sequence[Client], dimension: Union[Dimension, str]) -> List[GroupCount]:
    """Conta clientes por dimensão.

    Dimensões de enum trazem todos os valores (inclusive com zero), na ordem do enum.
    Bairro traz só os observados, do maior para o menor, limitado aos 8 primeiros;
    empates mantêm a ordem de aparição.
    """
    dimension = Dimension(dimension)
    match dimension:
        case Dimension.STATUS:
            return _count_enum(clients, ClientStatus, 'status')
        case Dimension.SIZE:
            return _count_enum(clients, ClientSize, 'client_size')
        case Dimension.TYPE:
            return _count_enum(clients, ClientType, 'client_type')
        case Dimension.NEIGHBORHOOD:
            counts: Dict[str, int] = {}
            for client in clients:
                counts[client.neighborhood] = counts.get(client.neighborhood, 0) + 1
            ranked = sorted(counts.items(), key=lambda item: item[1], reverse=True)
            return [GroupCount(key, count) for key, count in ranked[:NEIGHBORHOOD_TOP_N]]
    raise ValueError(f"Dimensão desconhecida: {dimension}")


def summarize(clients: Sequence[Client]) -> ClientSummary:
    return ClientSummary(
        total=len(clients),
        active=sum(1 for c in clients if c.status == ClientStatus.ATIVO),
        potential=sum(1 for c in clients if c.status == ClientStatus.POTENCIAL),
    )
