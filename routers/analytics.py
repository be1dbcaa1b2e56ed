"""Analytics endpoints - Resumos por usuario e por quiz."""

import logging

from fastapi import APIRouter, Depends

import app_state
from quiz.engine import QuizAnalyticsEngine
from quiz.exceptions import NotFoundError
from quiz.security import AuthContext, get_current_user, require_owner_or_admin
from quiz.storage import AttemptStore, QuizStore
from utils.validators import validate_object_id

router = APIRouter(prefix="/attempts/analytics", tags=["Analytics"])
logger = logging.getLogger(__name__)


@router.get("/user/current")
async def current_user_analytics(
    current: AuthContext = Depends(get_current_user),
    attempts: AttemptStore = Depends(app_state.get_attempt_store),
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
    analytics: QuizAnalyticsEngine = Depends(app_state.get_analytics_engine),
):
    """Resumo de desempenho do usuario autenticado."""
    user_attempts = await attempts.list_for_user(current.id)
    referenced = await quizzes.get_many(a.quiz for a in user_attempts)
    return {"success": True, "data": analytics.user_summary(user_attempts, referenced)}


@router.get("/quiz/{quiz_id}")
async def quiz_analytics(
    quiz_id: str,
    current: AuthContext = Depends(get_current_user),
    attempts: AttemptStore = Depends(app_state.get_attempt_store),
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
    analytics: QuizAnalyticsEngine = Depends(app_state.get_analytics_engine),
):
    """Resumo de todas as tentativas de um quiz (dono do quiz ou admin)."""
    quiz = await quizzes.get(validate_object_id(quiz_id, resource="quiz"))
    if quiz is None:
        raise NotFoundError(message="Quiz not found")
    require_owner_or_admin(current, quiz.created_by, "Not authorized to view quiz analytics")

    quiz_attempts = await attempts.list_for_quiz(quiz.id)
    return {"success": True, "data": analytics.quiz_summary(quiz, quiz_attempts)}
