# database.py
# Armazenamento local chave/valor em SQLite (substitui o localStorage do navegador)

import sqlite3
import os
from pathlib import Path
from datetime import datetime
from typing import Optional, Tuple

from core.errors import PersistenceFault


class Database:
    """Tabela única `local_storage(key, value)` onde cada coleção é um blob JSON.

    Qualquer falha do SQLite é propagada como PersistenceFault, sem nova tentativa.
    """

    def __init__(self, db_path: str):
        self.db_path = db_path
        try:
            # check_same_thread=False permite leitura a partir das threads de IA/consulta
            self.conn = sqlite3.connect(self.db_path, timeout=10, check_same_thread=False)
            self.conn.row_factory = sqlite3.Row
            c = self.conn.cursor()
            c.execute("PRAGMA journal_mode=WAL")
            c.execute("PRAGMA synchronous=NORMAL")
            c.execute("PRAGMA busy_timeout=5000")
            self.conn.commit()
        except sqlite3.Error as e:
            raise PersistenceFault(f"Não foi possível abrir o banco local {db_path}: {e}") from e
        self._init_db()

    def _init_db(self):
        self._execute(
            """
            CREATE TABLE IF NOT EXISTS local_storage (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL
            )
            """
        )

    def _execute(self, sql: str, params: Tuple = ()) -> sqlite3.Cursor:
        try:
            cur = self.conn.cursor()
            cur.execute(sql, params)
            self.conn.commit()
            return cur
        except sqlite3.Error as e:
            if "malformed" in str(e).lower() or "corrupt" in str(e).lower():
                raise PersistenceFault(f"Banco de dados corrompido: {e}. Restaure um backup.") from e
            raise PersistenceFault(f"Erro no armazenamento local: {e}") from e

    def get_item(self, key: str) -> Optional[str]:
        row = self._execute("SELECT value FROM local_storage WHERE key=?", (key,)).fetchone()
        return row["value"] if row else None

    def set_item(self, key: str, value: str) -> None:
        self._execute(
            "INSERT INTO local_storage(key, value) VALUES (?, ?) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value",
            (key, value),
        )

    def remove_item(self, key: str) -> None:
        self._execute("DELETE FROM local_storage WHERE key=?", (key,))

    def close(self) -> None:
        self.conn.close()

    def verify_integrity(self) -> Tuple[bool, str]:
        """Verifica a integridade do banco de dados"""
        try:
            result = self.conn.execute("PRAGMA integrity_check").fetchone()
        except sqlite3.Error as e:
            return False, f"Erro ao verificar: {e}"
        if result and result[0] == "ok":
            return True, "Banco de dados íntegro"
        return False, f"Problemas detectados: {result[0] if result else 'desconhecido'}"

    def create_backup(self, backup_dir: Optional[str] = None) -> str:
        """Cria um backup do banco de dados e retorna o caminho do arquivo gerado.

        Args:
            backup_dir: Pasta de destino (padrão: `backups` ao lado do banco)
        """
        if backup_dir is None:
            backup_dir = str(Path(self.db_path).parent / "backups")
        os.makedirs(backup_dir, exist_ok=True)

        timestamp = datetime.now().strftime('%Y%m%d_%H%M%S')
        backup_path = os.path.join(backup_dir, f"backup_{timestamp}.db")

        try:
            # Usa a API de backup do SQLite para garantir consistência
            backup_conn = sqlite3.connect(backup_path)
            with backup_conn:
                self.conn.backup(backup_conn)
            backup_conn.close()
        except sqlite3.Error as e:
            raise PersistenceFault(f"Erro ao criar backup: {e}") from e
        return backup_path
