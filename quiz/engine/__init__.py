"""Quiz Engines - Logica de negocios."""

from .analytics_engine import QuizAnalyticsEngine
from .quiz_validator import QuizValidator, validate_quiz
from .scoring_engine import AttemptScoringEngine, levenshtein_ratio, percentage

__all__ = [
    "QuizValidator",
    "validate_quiz",
    "AttemptScoringEngine",
    "QuizAnalyticsEngine",
    "percentage",
    "levenshtein_ratio",
]
