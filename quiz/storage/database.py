"""Database - Handle explicito do armazenamento de documentos (SQLite)."""

from __future__ import annotations

import logging
import sqlite3
from pathlib import Path
from typing import Any, Optional, Sequence

from ..exceptions import PersistenceError

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS users (
    id TEXT PRIMARY KEY,
    email TEXT NOT NULL UNIQUE,
    data TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS quizzes (
    id TEXT PRIMARY KEY,
    created_by TEXT NOT NULL,
    category TEXT,
    difficulty TEXT NOT NULL,
    status TEXT NOT NULL,
    total_score INTEGER NOT NULL DEFAULT 0,
    data TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS attempts (
    id TEXT PRIMARY KEY,
    user_id TEXT NOT NULL,
    quiz_id TEXT NOT NULL,
    data TEXT NOT NULL,
    end_time TEXT NOT NULL,
    created_at TEXT NOT NULL
);

CREATE INDEX IF NOT EXISTS idx_attempts_user ON attempts(user_id);
CREATE INDEX IF NOT EXISTS idx_attempts_quiz ON attempts(quiz_id);
CREATE INDEX IF NOT EXISTS idx_quizzes_owner ON quizzes(created_by);
"""


class Database:
    """Conexao unica com o armazenamento, com ciclo de vida explicito.

    Aberta no startup da aplicacao e fechada no shutdown. Cada store recebe
    este handle no construtor; nao existe conexao global implicita.

    Cada documento e gravado como JSON na coluna ``data``; as demais colunas
    existem apenas para filtros e ordenacao. Escritas sao atomicas por
    documento (um statement + commit).

    Example:
        >>> db = Database(":memory:").open()
        >>> store = QuizStore(db)
        >>> db.close()
    """

    def __init__(self, path: str):
        """Inicializa o handle (sem abrir conexao).

        Args:
            path: Caminho do arquivo SQLite ou ``:memory:``
        """
        self.path = path
        self._conn: Optional[sqlite3.Connection] = None

    @property
    def is_open(self) -> bool:
        return self._conn is not None

    def open(self) -> Database:
        """Abre a conexao e cria o schema se necessario."""
        if self._conn is not None:
            return self

        if self.path != ":memory:":
            Path(self.path).parent.mkdir(parents=True, exist_ok=True)

        conn = sqlite3.connect(self.path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        conn.executescript(SCHEMA)
        conn.commit()
        self._conn = conn
        logger.info(f"Banco de dados aberto: {self.path}")
        return self

    def close(self) -> None:
        """Fecha a conexao (idempotente)."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None
            logger.info(f"Banco de dados fechado: {self.path}")

    @property
    def connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise PersistenceError(message="Database connection is not open")
        return self._conn

    def execute(self, sql: str, params: Sequence[Any] = ()) -> int:
        """Executa uma escrita e faz commit.

        Returns:
            Numero de linhas afetadas
        """
        with self.connection as conn:
            cursor = conn.execute(sql, params)
            return cursor.rowcount

    def fetchone(self, sql: str, params: Sequence[Any] = ()) -> Optional[sqlite3.Row]:
        return self.connection.execute(sql, params).fetchone()

    def fetchall(self, sql: str, params: Sequence[Any] = ()) -> list[sqlite3.Row]:
        return self.connection.execute(sql, params).fetchall()

    def ping(self) -> bool:
        """Verifica se a conexao responde (health check)."""
        try:
            self.connection.execute("SELECT 1").fetchone()
            return True
        except (sqlite3.Error, PersistenceError):
            return False
