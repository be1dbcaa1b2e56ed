"""Routers module for the Quiz API."""

from .analytics import router as analytics_router
from .attempts import router as attempts_router
from .quizzes import router as quizzes_router
from .users import router as users_router

# Analytics antes de attempts: prefixo /attempts/analytics e mais especifico
__all__ = [
    "users_router",
    "quizzes_router",
    "analytics_router",
    "attempts_router",
]
