"""Quiz Documents - Documentos persistidos (quiz, tentativa, usuario)."""

import uuid
from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import Field, computed_field

from .enums import UserRole
from .schemas import CamelModel, QuizPayload


def utcnow() -> datetime:
    """Timestamp atual em UTC (timezone-aware)."""
    return datetime.now(timezone.utc)


def new_object_id() -> str:
    """Novo identificador de documento (uuid4 hex, 32 caracteres)."""
    return uuid.uuid4().hex


class QuizDocument(QuizPayload):
    """Quiz validado e persistido.

    ``total_score`` e ``no_of_questions`` sao sempre derivados das questoes
    pelo QuizValidator antes de qualquer escrita.
    """

    id: str = Field(..., alias="_id")
    created_by: str
    total_score: int = 0
    no_of_questions: int = 0
    created_at: datetime = Field(default_factory=utcnow)
    updated_at: datetime = Field(default_factory=utcnow)

    def question_by_id(self, question_id: str):
        """Busca questao pelo ``_id`` (None se inexistente)."""
        for question in self.questions:
            if question.id == question_id:
                return question
        return None

    def public_dict(self, strip_answers: bool = False) -> dict[str, Any]:
        """Serializa para a API.

        Args:
            strip_answers: Remove ``correctAnswer`` e ``isCorrect`` (listagem publica)
        """
        data = self.to_json_dict()
        if strip_answers:
            for question in data["questions"]:
                question.pop("correctAnswer", None)
                for option in question["options"]:
                    option.pop("isCorrect", None)
        return data


class GradedAnswer(CamelModel):
    """Resposta corrigida pelo servidor."""

    question_id: str
    selected_option: Optional[str] = None
    is_correct: bool = False


class AttemptDocument(CamelModel):
    """Tentativa submetida. Imutavel apos a criacao."""

    id: str = Field(..., alias="_id")
    user: str
    quiz: str
    answers: list[GradedAnswer] = Field(default_factory=list)
    score: float
    total_questions: int
    total_score: float
    start_time: datetime = Field(default_factory=utcnow)
    end_time: datetime = Field(default_factory=utcnow)
    completed: bool = False
    time_spent: int = 0
    created_at: datetime = Field(default_factory=utcnow)

    @computed_field
    @property
    def percentage_score(self) -> float:
        """score / totalScore * 100 (0 quando o quiz nao vale pontos)."""
        if self.total_score <= 0:
            return 0.0
        return self.score / self.total_score * 100


class UserDocument(CamelModel):
    """Usuario com hash de senha e salt."""

    id: str = Field(..., alias="_id")
    name: str
    email: str
    password: str
    salt: str
    role: UserRole = UserRole.STUDENT
    created_at: datetime = Field(default_factory=utcnow)

    def public_dict(self) -> dict[str, Any]:
        """Serializa sem ``password`` e ``salt``."""
        return self.to_json_dict(exclude={"password", "salt"})
