"""Quiz Enums - Dificuldade, tipos de questao, status e papeis."""

from enum import Enum


class QuizDifficulty(str, Enum):
    """Niveis de dificuldade do quiz (buckets de analytics)."""

    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class QuestionType(str, Enum):
    """Tipos de questao suportados."""

    MULTIPLE_CHOICE = "Multiple Choice"  # 4 alternativas, 1 correta
    TRUE_FALSE = "True/False"  # 2 alternativas, 1 correta
    SHORT_ANSWER = "Short Answer"  # sem alternativas, usa correctAnswer


class QuizStatus(str, Enum):
    """Ciclo de vida de publicacao do quiz."""

    DRAFT = "Draft"
    PUBLISHED = "Published"
    ARCHIVED = "Archived"


class UserRole(str, Enum):
    """Papeis de usuario."""

    ADMIN = "admin"
    STUDENT = "student"
    TEACHER = "teacher"


# Numero exato de alternativas por tipo de questao
OPTION_COUNTS = {
    QuestionType.MULTIPLE_CHOICE: 4,
    QuestionType.TRUE_FALSE: 2,
}
