# maps.py
# Links externos de um cliente (mapa e WhatsApp)

import re
from typing import Optional, Sequence, Tuple
from urllib.parse import quote

from core.models import Client

# Centro de Maceió, usado quando nenhum cliente tem coordenadas
DEFAULT_CENTER = (-9.6498, -35.7089)


def maps_url(client: Client) -> Optional[str]:
    if client.latitude is None or client.longitude is None:
        return None
    return f"https://www.google.com/maps/search/?api=1&query={client.latitude},{client.longitude}"


def address_search_url(client: Client) -> str:
    parts = [client.address, client.neighborhood, client.city or 'Maceió', client.state or 'AL']
    return "https://www.google.com/maps/search/?api=1&query=" + quote(', '.join(p for p in parts if p))


def whatsapp_url(phone: str) -> Optional[str]:
    digits = re.sub(r'\D', '', phone or '')
    if not digits:
        return None
    return f"https://wa.me/55{digits}"


def map_center(clients: Sequence[Client]) -> Tuple[float, float]:
    """Média das coordenadas conhecidas; centro de Maceió se não houver nenhuma."""
    located = [c for c in clients if c.latitude is not None and c.longitude is not None]
    if not located:
        return DEFAULT_CENTER
    return (
        sum(c.latitude for c in located) / len(located),
        sum(c.longitude for c in located) / len(located),
    )
