"""Quiz Models - Enums, Schemas e Documentos."""

from .documents import (
    AttemptDocument,
    GradedAnswer,
    QuizDocument,
    UserDocument,
    new_object_id,
    utcnow,
)
from .enums import OPTION_COUNTS, QuestionType, QuizDifficulty, QuizStatus, UserRole
from .schemas import (
    AttemptAnswerPayload,
    AttemptPayload,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    QuizFilters,
    QuizOption,
    QuizPayload,
    QuizQuestion,
    RegisterRequest,
)

__all__ = [
    # Enums
    "QuizDifficulty",
    "QuestionType",
    "QuizStatus",
    "UserRole",
    "OPTION_COUNTS",
    # Schemas
    "QuizOption",
    "QuizQuestion",
    "QuizPayload",
    "QuizFilters",
    "AttemptAnswerPayload",
    "AttemptPayload",
    "RegisterRequest",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    # Documents
    "QuizDocument",
    "AttemptDocument",
    "GradedAnswer",
    "UserDocument",
    "new_object_id",
    "utcnow",
]
