# errors.py
# Exceções do domínio, tratadas na camada de interface mais próxima da ação do usuário


class CRMError(Exception):
    """Erro base do sistema."""


class ValidationError(CRMError):
    """Dado de entrada inválido (ex.: CNPJ sem 14 dígitos). Nenhum estado é alterado."""


class NotFoundError(CRMError):
    """Consulta externa não retornou dados."""


class InvalidCredentials(CRMError):
    """Usuário ou senha inválidos, sem distinguir qual dos dois."""

    def __init__(self, message: str = "Usuário ou senha inválidos."):
        super().__init__(message)


class PersistenceFault(CRMError):
    """Falha no armazenamento local. Não há nova tentativa automática."""


class GuardViolation(CRMError):
    """Operação bloqueada por regra de negócio (ex.: excluir o admin padrão)."""
