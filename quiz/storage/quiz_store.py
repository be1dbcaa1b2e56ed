"""Quiz Store - Persistencia de quizzes sobre o Database."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Iterable

from ..models.documents import QuizDocument
from ..models.schemas import QuizFilters

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)


class QuizStore:
    """Armazenamento de quizzes validados.

    O documento completo fica em JSON; ``created_by``, ``category``,
    ``difficulty``, ``status`` e ``total_score`` sao espelhados em colunas
    para os filtros da listagem publica.

    Example:
        >>> store = QuizStore(db)
        >>> await store.save(quiz)
        >>> loaded = await store.get(quiz.id)
    """

    def __init__(self, db: Database):
        """Inicializa store com o handle do banco.

        Args:
            db: Database aberto
        """
        self.db = db

    async def save(self, quiz: QuizDocument) -> QuizDocument:
        """Insere ou substitui o quiz (create e update completo).

        Args:
            quiz: Quiz ja validado pelo QuizValidator
        """
        self.db.execute(
            """
            INSERT INTO quizzes
                (id, created_by, category, difficulty, status, total_score,
                 data, created_at, updated_at)
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                category = excluded.category,
                difficulty = excluded.difficulty,
                status = excluded.status,
                total_score = excluded.total_score,
                data = excluded.data,
                updated_at = excluded.updated_at
            """,
            (
                quiz.id,
                quiz.created_by,
                quiz.category,
                quiz.difficulty.value,
                quiz.status.value,
                quiz.total_score,
                quiz.model_dump_json(by_alias=True),
                quiz.created_at.isoformat(),
                quiz.updated_at.isoformat(),
            ),
        )
        logger.debug(f"Quiz salvo: {quiz.id}")
        return quiz

    async def get(self, quiz_id: str) -> QuizDocument | None:
        """Carrega um quiz.

        Returns:
            QuizDocument se encontrado, None caso contrario
        """
        row = self.db.fetchone("SELECT data FROM quizzes WHERE id = ?", (quiz_id,))
        if row is None:
            logger.debug(f"Quiz nao encontrado: {quiz_id}")
            return None
        return QuizDocument.model_validate_json(row["data"])

    async def get_many(self, quiz_ids: Iterable[str]) -> dict[str, QuizDocument]:
        """Carrega varios quizzes de uma vez (populate de tentativas).

        Returns:
            Dict quiz_id -> QuizDocument (IDs inexistentes sao omitidos)
        """
        ids = sorted(set(quiz_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        rows = self.db.fetchall(
            f"SELECT data FROM quizzes WHERE id IN ({placeholders})", ids
        )
        quizzes = (QuizDocument.model_validate_json(r["data"]) for r in rows)
        return {q.id: q for q in quizzes}

    async def list_quizzes(self, filters: QuizFilters | None = None) -> list[QuizDocument]:
        """Lista quizzes aplicando os filtros da API.

        Tags sao filtradas apos a consulta: o quiz precisa conter todas.
        """
        filters = filters or QuizFilters()
        clauses = []
        params: list = []

        if filters.category:
            clauses.append("category = ?")
            params.append(filters.category)
        if filters.difficulty:
            clauses.append("difficulty = ?")
            params.append(filters.difficulty.value)
        if filters.status:
            clauses.append("status = ?")
            params.append(filters.status.value)
        if filters.min_score is not None:
            clauses.append("total_score >= ?")
            params.append(filters.min_score)
        if filters.max_score is not None:
            clauses.append("total_score <= ?")
            params.append(filters.max_score)

        sql = "SELECT data FROM quizzes"
        if clauses:
            sql += " WHERE " + " AND ".join(clauses)
        sql += " ORDER BY created_at DESC"

        quizzes = [QuizDocument.model_validate_json(r["data"]) for r in self.db.fetchall(sql, params)]

        if filters.tags:
            wanted = set(filters.tags)
            quizzes = [q for q in quizzes if wanted.issubset(q.tags)]

        return quizzes

    async def delete(self, quiz_id: str) -> bool:
        """Remove o quiz. Tentativas existentes sao mantidas.

        Returns:
            True se algo foi removido
        """
        removed = self.db.execute("DELETE FROM quizzes WHERE id = ?", (quiz_id,))
        if removed:
            logger.info(f"Quiz deletado: {quiz_id}")
        return removed > 0
