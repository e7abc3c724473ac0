# logger.py
# Logger e auditoria

import logging
import os
import sys
from datetime import datetime


def get_log_dir():
    """Retorna o diretório de logs do usuário (pode ser trocado por LELE_CRM_LOG_DIR)"""
    log_dir = os.getenv('LELE_CRM_LOG_DIR')
    if not log_dir:
        if sys.platform == 'win32':
            app_data = os.getenv('LOCALAPPDATA', os.getenv('APPDATA', ''))
            if app_data:
                log_dir = os.path.join(app_data, 'LeleCRM', 'logs')
            else:
                log_dir = os.path.join(os.path.expanduser('~'), 'LeleCRM', 'logs')
        else:
            # Linux/Mac
            log_dir = os.path.expanduser('~/.lele_crm/logs')

    os.makedirs(log_dir, exist_ok=True)
    return log_dir


# Um arquivo de log por dia
LOG_DIR = get_log_dir()
LOG_PATH = os.path.join(LOG_DIR, f'lele_crm_{datetime.now().strftime("%Y%m%d")}.log')

logger = logging.getLogger('lele_crm')
logger.setLevel(logging.INFO)

if not logger.handlers:
    file_handler = logging.FileHandler(LOG_PATH, encoding='utf-8')
    file_handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(message)s', '%Y-%m-%d %H:%M:%S'))
    logger.addHandler(file_handler)

    # Também no console para debug
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter('%(asctime)s [%(levelname)s] %(message)s', '%H:%M:%S'))
    logger.addHandler(console_handler)


def log_event(msg: str):
    """Registra evento informativo"""
    logger.info(msg)


def log_error(msg: str, exc: Exception = None):
    """Registra erro com traceback opcional"""
    if exc:
        logger.error(f"{msg}: {exc}", exc_info=exc)
    else:
        logger.error(msg)


def log_warning(msg: str):
    """Registra aviso"""
    logger.warning(msg)


def log_debug(msg: str):
    """Registra mensagem de debug"""
    logger.debug(msg)


def set_level(level: str):
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))


def log_startup():
    """Registra informações de inicialização do sistema"""
    logger.info("=" * 60)
    logger.info("LELÉ DA KUKA CRM - SISTEMA INICIADO")
    logger.info("=" * 60)
    logger.info(f"Versão Python: {sys.version}")
    logger.info(f"Sistema Operacional: {sys.platform}")
    logger.info(f"Executável: {sys.executable if getattr(sys, 'frozen', False) else 'Script Python'}")
    logger.info(f"Diretório de logs: {LOG_DIR}")
    logger.info(f"Arquivo de log: {LOG_PATH}")
    logger.info("=" * 60)
