# lookup.py
# Consulta de CNPJ em fonte pública gratuita (BrasilAPI) para preencher o cadastro

import json
import urllib.error
import urllib.request
from dataclasses import dataclass, replace
from typing import Optional

from core.config import get_setting
from core.constants import DEFAULT_CITY, DEFAULT_STATE, NEIGHBORHOODS
from core.errors import NotFoundError, ValidationError
from core.logger import log_event, log_warning
from core.models import ClientDraft
from core.services import only_digits


@dataclass(frozen=True)
class CompanyInfo:
    razao_social: str
    nome_fantasia: str
    logradouro: str
    bairro: str
    cidade: str
    uf: str


def clean_document(value: str) -> str:
    return only_digits(value)


def normalize_company(data: dict) -> CompanyInfo:
    """Converte a resposta da BrasilAPI para os campos usados no cadastro."""
    razao = data.get('razao_social') or ''
    numero = data.get('numero')
    logradouro = f"{data.get('logradouro') or ''}{', ' + str(numero) if numero else ''}"
    return CompanyInfo(
        razao_social=razao,
        nome_fantasia=data.get('nome_fantasia') or razao,
        logradouro=logradouro,
        bairro=data.get('bairro') or '',
        cidade=data.get('municipio') or DEFAULT_CITY,
        uf=data.get('uf') or DEFAULT_STATE,
    )


def lookup_cnpj(cnpj: str, timeout: Optional[float] = None) -> Optional[CompanyInfo]:
    """
    Busca os dados de um CNPJ.

    Raises:
        ValidationError: quando o documento não tem 14 dígitos

    Returns:
        CompanyInfo, ou None se não encontrado / sem conexão
    """
    digits = clean_document(cnpj)
    if len(digits) != 14:
        raise ValidationError("Digite um CNPJ válido com 14 dígitos.")

    url = get_setting('cnpj_lookup_url').format(cnpj=digits)
    if timeout is None:
        timeout = float(get_setting('http_timeout'))
    req = urllib.request.Request(url, headers={'Accept': 'application/json', 'User-Agent': 'LeleCRM'})
    try:
        with urllib.request.urlopen(req, timeout=timeout) as response:
            data = json.loads(response.read().decode('utf-8'))
    except urllib.error.HTTPError as e:
        log_warning(f"CNPJ {digits} não encontrado (HTTP {e.code})")
        return None
    except (urllib.error.URLError, TimeoutError, OSError) as e:
        log_warning(f"Erro de rede ao buscar CNPJ {digits}: {e}")
        return None
    except json.JSONDecodeError as e:
        log_warning(f"Resposta inválida ao buscar CNPJ {digits}: {e}")
        return None

    if not isinstance(data, dict):
        return None
    log_event(f"CNPJ {digits} encontrado")
    return normalize_company(data)


def apply_company_info(draft: ClientDraft, info: CompanyInfo) -> ClientDraft:
    """Preenche o cadastro com os dados encontrados, mantendo o que a consulta não trouxe."""
    return replace(
        draft,
        razao_social=info.razao_social,
        name=info.nome_fantasia,
        address=info.logradouro or draft.address,
        neighborhood=info.bairro if info.bairro in NEIGHBORHOODS else draft.neighborhood,
        city=info.cidade or DEFAULT_CITY,
        state=info.uf or DEFAULT_STATE,
    )


def autofill_from_cnpj(draft: ClientDraft) -> ClientDraft:
    """
    Consulta o CNPJ do cadastro e devolve uma cópia preenchida.

    Raises:
        ValidationError: CNPJ sem 14 dígitos
        NotFoundError: consulta sem resultado; o cadastro original segue válido
    """
    info = lookup_cnpj(draft.document_value)
    if info is None:
        raise NotFoundError(
            "Não foi possível encontrar dados para este CNPJ automaticamente. "
            "Por favor, preencha manualmente."
        )
    return apply_company_info(draft, info)
