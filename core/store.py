# store.py
# RecordStore: persistência das coleções de clientes e usuários

import json
import threading
import time
from datetime import datetime, timezone
from typing import Any, Callable, List, Optional

from core.constants import (
    BOOTSTRAP_ADMIN_ID,
    BOOTSTRAP_ADMIN_PASSWORD,
    BOOTSTRAP_ADMIN_USERNAME,
    CLIENTS_KEY,
    INITIAL_CLIENT_CODE,
    USER_ID_PREFIX,
    USERS_KEY,
)
from core.errors import PersistenceFault
from core.logger import log_event
from core.models import Client, ClientDraft, Role, User
from core.storage import Storage


def utc_timestamp() -> str:
    """Data/hora atual em ISO-8601 UTC com milissegundos (ex.: 2026-01-05T13:45:10.123Z)."""
    return datetime.now(timezone.utc).isoformat(timespec='milliseconds').replace('+00:00', 'Z')


def next_client_id(clients: List[Client]) -> str:
    numeric = [int(c.id) for c in clients if c.id.strip().isdecimal()]
    return str(max(numeric) + 1 if numeric else INITIAL_CLIENT_CODE)


class RecordStore:
    """Dono exclusivo das coleções de clientes e usuários.

    Cada coleção é lida do armazenamento a cada chamada e regravada por inteiro
    a cada alteração. Operações de escrita passam por um único lock, de modo que
    ler, calcular o próximo código e gravar seja atômico para quem compartilha
    esta instância.
    """

    def __init__(self, storage: Storage, clock: Callable[[], str] = utc_timestamp):
        self.storage = storage
        self._clock = clock
        self._lock = threading.RLock()

    # ---- leitura/gravação dos blobs ----
    def _read(self, key: str) -> List[Any]:
        raw = self.storage.get_item(key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise PersistenceFault(f"Conteúdo inválido em '{key}': {e}") from e
        if not isinstance(data, list):
            raise PersistenceFault(f"Conteúdo inválido em '{key}': lista esperada")
        return data

    def _write(self, key: str, records: List[Any]) -> None:
        self.storage.set_item(key, json.dumps(records, ensure_ascii=False))

    # ---- Clientes ----
    def list_clients(self) -> List[Client]:
        return [Client.from_dict(item) for item in self._read(CLIENTS_KEY)]

    def create_client(self, draft: ClientDraft) -> Client:
        with self._lock:
            # registros existentes são regravados como estavam, sem passar pelo modelo
            records = self._read(CLIENTS_KEY)
            existing = [Client.from_dict(item) for item in records]
            client = Client.from_draft(draft, next_client_id(existing), self._clock())
            records.append(client.to_dict())
            self._write(CLIENTS_KEY, records)
        log_event(f"Cliente cadastrado: #{client.id} {client.name} (por {client.registered_by or '-'})")
        return client

    # ---- Usuários ----
    def list_users(self) -> List[User]:
        with self._lock:
            users = [User.from_dict(item) for item in self._read(USERS_KEY)]
            if not users:
                admin = User(
                    id=BOOTSTRAP_ADMIN_ID,
                    username=BOOTSTRAP_ADMIN_USERNAME,
                    password=BOOTSTRAP_ADMIN_PASSWORD,
                    role=Role.ADMIN,
                )
                self._write(USERS_KEY, [admin.to_dict()])
                log_event("Usuário admin padrão criado")
                users = [admin]
        return users

    def create_user(self, username: str, password: str, role: Role = Role.VENDEDOR) -> User:
        with self._lock:
            users = self.list_users()
            # unicidade do id é por melhor esforço, não é verificada
            user = User(id=f"{USER_ID_PREFIX}{int(time.time() * 1000)}", username=username,
                        password=password, role=Role(role))
            users.append(user)
            self._write(USERS_KEY, [u.to_dict() for u in users])
        log_event(f"Usuário criado: {username} ({user.role.value})")
        return user

    def delete_user(self, user_id: str) -> None:
        with self._lock:
            users = self.list_users()
            remaining = [u for u in users if u.id != user_id]
            if len(remaining) == len(users):
                return
            self._write(USERS_KEY, [u.to_dict() for u in remaining])
        log_event(f"Usuário removido: {user_id}")

    def find_user(self, user_id: str) -> Optional[User]:
        for user in self.list_users():
            if user.id == user_id:
                return user
        return None
