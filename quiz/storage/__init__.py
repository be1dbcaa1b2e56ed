"""Quiz Storage - Database e stores de documentos."""

from .attempt_store import AttemptStore
from .database import Database
from .quiz_store import QuizStore
from .user_store import UserStore

__all__ = ["Database", "QuizStore", "AttemptStore", "UserStore"]
