"""Quiz Module - Plataforma de quizzes com correcao e analytics.

Arquitetura:
- models/: Enums, Schemas Pydantic (payloads) e Documentos persistidos
- engine/: QuizValidator, AttemptScoringEngine, QuizAnalyticsEngine
- storage/: Database (SQLite) + QuizStore, AttemptStore, UserStore
- security/: Auth Gate (JWT bearer, hash de senha)
- exceptions.py: Erros da API com status HTTP
"""

from .engine import AttemptScoringEngine, QuizAnalyticsEngine, QuizValidator, validate_quiz
from .exceptions import (
    AuthenticationError,
    DuplicateEmailError,
    ForbiddenError,
    InvalidIdError,
    NotFoundError,
    PersistenceError,
    QuizAPIError,
    ValidationError,
)
from .models import (
    AttemptDocument,
    QuestionType,
    QuizDifficulty,
    QuizDocument,
    QuizStatus,
    UserDocument,
    UserRole,
)
from .storage import AttemptStore, Database, QuizStore, UserStore

__all__ = [
    # Models
    "QuizDifficulty",
    "QuestionType",
    "QuizStatus",
    "UserRole",
    "QuizDocument",
    "AttemptDocument",
    "UserDocument",
    # Engines
    "QuizValidator",
    "validate_quiz",
    "AttemptScoringEngine",
    "QuizAnalyticsEngine",
    # Storage
    "Database",
    "QuizStore",
    "AttemptStore",
    "UserStore",
    # Errors
    "QuizAPIError",
    "ValidationError",
    "InvalidIdError",
    "AuthenticationError",
    "ForbiddenError",
    "NotFoundError",
    "DuplicateEmailError",
    "PersistenceError",
]
