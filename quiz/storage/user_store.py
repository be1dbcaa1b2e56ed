"""User Store - Persistencia de usuarios."""

from __future__ import annotations

import logging
import sqlite3
from typing import TYPE_CHECKING

from ..exceptions import DuplicateEmailError
from ..models.documents import UserDocument

if TYPE_CHECKING:
    from .database import Database

logger = logging.getLogger(__name__)


class UserStore:
    """Armazenamento de usuarios. Email e unico (constraint no banco)."""

    def __init__(self, db: Database):
        self.db = db

    async def create(self, user: UserDocument) -> UserDocument:
        """Persiste novo usuario.

        Raises:
            DuplicateEmailError: Se o email ja esta cadastrado
        """
        try:
            self.db.execute(
                "INSERT INTO users (id, email, data, created_at) VALUES (?, ?, ?, ?)",
                (
                    user.id,
                    user.email,
                    user.model_dump_json(by_alias=True),
                    user.created_at.isoformat(),
                ),
            )
        except sqlite3.IntegrityError as e:
            raise DuplicateEmailError(message="Email already exists") from e

        logger.info(f"Usuario cadastrado: {user.id} ({user.role.value})")
        return user

    async def get(self, user_id: str) -> UserDocument | None:
        row = self.db.fetchone("SELECT data FROM users WHERE id = ?", (user_id,))
        if row is None:
            return None
        return UserDocument.model_validate_json(row["data"])

    async def get_by_email(self, email: str) -> UserDocument | None:
        row = self.db.fetchone("SELECT data FROM users WHERE email = ?", (email,))
        if row is None:
            return None
        return UserDocument.model_validate_json(row["data"])

    async def get_names(self, user_ids) -> dict[str, str]:
        """Nomes por ID (populate de ``createdBy``)."""
        ids = sorted(set(user_ids))
        if not ids:
            return {}
        placeholders = ", ".join("?" for _ in ids)
        rows = self.db.fetchall(f"SELECT data FROM users WHERE id IN ({placeholders})", ids)
        users = (UserDocument.model_validate_json(r["data"]) for r in rows)
        return {u.id: u.name for u in users}

    async def list_users(self) -> list[UserDocument]:
        rows = self.db.fetchall("SELECT data FROM users ORDER BY created_at")
        return [UserDocument.model_validate_json(r["data"]) for r in rows]

    async def delete(self, user_id: str) -> bool:
        removed = self.db.execute("DELETE FROM users WHERE id = ?", (user_id,))
        if removed:
            logger.info(f"Usuario removido: {user_id}")
        return removed > 0
