"""Attempt Store - Persistencia de tentativas (somente insercao)."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models.documents import AttemptDocument

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)


class AttemptStore:
    """Armazenamento de tentativas.

    Tentativas sao imutaveis: nao ha update nem delete.
    """

    def __init__(self, db: Database):
        self.db = db

    async def create(self, attempt: AttemptDocument) -> AttemptDocument:
        """Persiste uma nova tentativa."""
        self.db.execute(
            """
            INSERT INTO attempts (id, user_id, quiz_id, data, end_time, created_at)
            VALUES (?, ?, ?, ?, ?, ?)
            """,
            (
                attempt.id,
                attempt.user,
                attempt.quiz,
                attempt.model_dump_json(by_alias=True),
                attempt.end_time.isoformat(),
                attempt.created_at.isoformat(),
            ),
        )
        logger.info(f"Tentativa salva: {attempt.id} (quiz={attempt.quiz}, user={attempt.user})")
        return attempt

    async def get(self, attempt_id: str) -> AttemptDocument | None:
        row = self.db.fetchone("SELECT data FROM attempts WHERE id = ?", (attempt_id,))
        if row is None:
            return None
        return AttemptDocument.model_validate_json(row["data"])

    async def list_for_user(self, user_id: str) -> list[AttemptDocument]:
        """Tentativas do usuario, mais recentes primeiro."""
        rows = self.db.fetchall(
            "SELECT data FROM attempts WHERE user_id = ? ORDER BY created_at DESC",
            (user_id,),
        )
        return [AttemptDocument.model_validate_json(r["data"]) for r in rows]

    async def list_for_quiz(self, quiz_id: str) -> list[AttemptDocument]:
        """Tentativas de um quiz, mais recentes primeiro."""
        rows = self.db.fetchall(
            "SELECT data FROM attempts WHERE quiz_id = ? ORDER BY created_at DESC",
            (quiz_id,),
        )
        return [AttemptDocument.model_validate_json(r["data"]) for r in rows]
