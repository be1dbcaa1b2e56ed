"""Excecoes do dominio de quiz.

Cada excecao carrega ``message``, ``details`` e o ``status_code`` HTTP
correspondente. O servidor converte todas elas em JSON no formato
``{"success": false, "error": message}`` (mais ``errors`` para validacao).
"""

from typing import Any, Optional


class QuizAPIError(Exception):
    """Erro base da API de quiz."""

    status_code = 500

    def __init__(self, message: str = "Server Error", details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Serializa para o corpo JSON da resposta."""
        return {"success": False, "error": self.message}


class ValidationError(QuizAPIError):
    """Entrada malformada ou fora dos limites (400).

    Attributes:
        errors: Lista de mensagens por campo
    """

    status_code = 400

    def __init__(
        self,
        message: str = "Validation Error",
        errors: Optional[list[str]] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message, details)
        self.errors = list(errors or [])

    def to_dict(self) -> dict[str, Any]:
        data = super().to_dict()
        data["errors"] = self.errors
        return data


class InvalidIdError(QuizAPIError):
    """Identificador com formato invalido (CastError, 400)."""

    status_code = 400


class AuthenticationError(QuizAPIError):
    """Credencial ausente (401)."""

    status_code = 401


class ForbiddenError(QuizAPIError):
    """Credencial invalida/expirada ou usuario sem permissao (403)."""

    status_code = 403


class NotFoundError(QuizAPIError):
    """Recurso inexistente (404)."""

    status_code = 404


class DuplicateEmailError(QuizAPIError):
    """Email ja cadastrado (400)."""

    status_code = 400


class PersistenceError(QuizAPIError):
    """Falha inesperada no armazenamento (500)."""

    status_code = 500
