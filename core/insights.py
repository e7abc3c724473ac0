# insights.py
"""
Análises de mercado com Google Gemini.

As chamadas são feitas sob demanda pela tela de estratégia. Qualquer falha
(sem chave, sem rede, cota) vira uma mensagem fixa e nunca interrompe o uso
do sistema.
"""

import os
from typing import Optional, Sequence

from google import genai
from google.genai import types

from core.config import get_setting
from core.logger import log_error, log_event, log_warning
from core.models import Client

NEARBY_UNAVAILABLE = "Não foi possível realizar a busca no momento."
ANALYSIS_UNAVAILABLE = "Erro ao processar análise complexa."
NO_API_KEY = "Chave da API Gemini não configurada."

# Orçamento de raciocínio do modelo de estratégia (tokens)
THINKING_BUDGET = 32768


def strategy_prompt(question: str, clients: Sequence[Client]) -> str:
    return (
        "Atue como um estrategista de vendas para a Lelé da Kuka em Maceió-AL. \n"
        f"Temos atualmente {len(clients)} clientes cadastrados. \n"
        f"Pergunta do usuário: {question}"
    )


def nearby_prompt(query: str, latitude: float, longitude: float) -> str:
    return (
        f"Quais são os melhores {query} próximos a Maceió-AL nas coordenadas {latitude}, {longitude}? "
        "Liste 3 opções com uma breve descrição do porquê são relevantes para o comércio local."
    )


def maps_grounding_config(latitude: float, longitude: float) -> types.GenerateContentConfig:
    """Liga o Google Maps como fonte da resposta, centrado nas coordenadas informadas."""
    return types.GenerateContentConfig(
        tools=[types.Tool(google_maps=types.GoogleMaps())],
        tool_config=types.ToolConfig(
            retrieval_config=types.RetrievalConfig(
                lat_lng=types.LatLng(latitude=latitude, longitude=longitude),
            ),
        ),
    )


class InsightsService:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None,
                 strategy_model: Optional[str] = None):
        self.api_key = (api_key or get_setting('gemini_api_key')
                        or os.environ.get('GOOGLE_AI_API_KEY') or os.environ.get('API_KEY'))
        self.model = model or get_setting('gemini_model')
        self.strategy_model = strategy_model or get_setting('gemini_strategy_model')

    @property
    def available(self) -> bool:
        return bool(self.api_key)

    def _generate(self, model_name: str, prompt: str, config: types.GenerateContentConfig) -> str:
        client = genai.Client(api_key=self.api_key)
        response = client.models.generate_content(model=model_name, contents=prompt, config=config)
        return response.text or ''

    def analyze_market(self, question: str, clients: Sequence[Client]) -> Optional[str]:
        """Gera uma estratégia de vendas. Retorna None para pergunta vazia."""
        if not question or not question.strip():
            return None
        if not self.available:
            log_warning("Análise de mercado solicitada sem chave Gemini")
            return NO_API_KEY
        try:
            config = types.GenerateContentConfig(
                thinking_config=types.ThinkingConfig(thinking_budget=THINKING_BUDGET),
            )
            text = self._generate(self.strategy_model, strategy_prompt(question.strip(), clients), config)
        except Exception as e:
            log_error("Erro na análise de mercado", e)
            return ANALYSIS_UNAVAILABLE
        log_event(f"Análise de mercado gerada ({len(text)} caracteres)")
        return text

    def search_nearby_places(self, query: str, latitude: float, longitude: float) -> Optional[str]:
        if not query or not query.strip():
            return None
        if not self.available:
            log_warning("Busca de locais solicitada sem chave Gemini")
            return NO_API_KEY
        try:
            return self._generate(self.model, nearby_prompt(query.strip(), latitude, longitude),
                                  maps_grounding_config(latitude, longitude))
        except Exception as e:
            log_error("Erro na busca de locais próximos", e)
            return NEARBY_UNAVAILABLE
