# config.py
# Configurações globais e leitura de YAML

from typing import Dict, Any
import yaml
import os
import sys

# Valores usados quando a chave não existe no config.yaml
DEFAULTS: Dict[str, Any] = {
    'database_path': '',
    'export_directory': '',
    'cnpj_lookup_url': 'https://brasilapi.com.br/api/cnpj/v1/{cnpj}',
    'http_timeout': 10,
    'gemini_api_key': '',
    'gemini_model': 'gemini-2.5-flash',
    'gemini_strategy_model': 'gemini-2.5-pro',
    'default_city': 'Maceió',
    'default_state': 'AL',
    'log_level': 'INFO',
}


def get_app_data_directory() -> str:
    """
    Retorna o diretório de dados da aplicação.
    Pode ser trocado pela variável de ambiente LELE_CRM_DATA_DIR.
    """
    app_data_dir = os.getenv('LELE_CRM_DATA_DIR')
    if not app_data_dir:
        # Se estamos executando via PyInstaller
        if getattr(sys, 'frozen', False):
            app_data_dir = os.path.join(os.path.expanduser("~"), "AppData", "Local", "LeleCRM")
        else:
            # Modo desenvolvimento - usa pasta data no projeto
            app_data_dir = os.path.join(os.path.dirname(__file__), '..', 'data')

    os.makedirs(app_data_dir, exist_ok=True)
    return os.path.abspath(app_data_dir)


def get_config_path() -> str:
    return os.path.join(get_app_data_directory(), 'config.yaml')


def load_config() -> Dict[str, Any]:
    """
    Carrega as configurações do arquivo YAML.

    Returns:
        Dict[str, Any]: Dicionário com as configurações (somente o que está no arquivo)
    """
    path = get_config_path()
    if not os.path.exists(path):
        return {}
    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def save_config(data: Dict[str, Any]) -> None:
    """
    Salva as configurações no arquivo YAML.

    Args:
        data: Dicionário com as configurações para salvar
    """
    with open(get_config_path(), 'w', encoding='utf-8') as f:
        yaml.safe_dump(data, f, allow_unicode=True)


def get_setting(key: str, config: Dict[str, Any] = None) -> Any:
    """Valor de uma chave do config.yaml, ou o padrão de DEFAULTS quando vazia/ausente."""
    if config is None:
        config = load_config()
    value = config.get(key)
    if value in (None, ''):
        return DEFAULTS.get(key)
    return value


def get_database_path() -> str:
    """
    Retorna o caminho do banco local.

    Usa `database_path` do config.yaml quando definido; caso contrário
    `lele_crm.db` no diretório de dados.
    """
    configured = get_setting('database_path')
    if configured:
        return os.path.abspath(configured)
    return os.path.join(get_app_data_directory(), 'lele_crm.db')


def set_export_directory(path: str) -> None:
    """Memoriza a última pasta usada na exportação CSV."""
    config = load_config()
    config['export_directory'] = path
    save_config(config)
