"""Attempt endpoints - Submissao, historico e revisao de tentativas."""

import logging

from fastapi import APIRouter, Depends

import app_state
from quiz.engine import AttemptScoringEngine, QuizAnalyticsEngine
from quiz.exceptions import ForbiddenError, NotFoundError
from quiz.models import AttemptPayload, new_object_id
from quiz.security import AuthContext, get_current_user
from quiz.storage import AttemptStore, QuizStore
from utils.validators import validate_object_id

router = APIRouter(prefix="/attempts", tags=["Attempts"])
logger = logging.getLogger(__name__)


@router.post("", status_code=201)
async def submit_attempt(
    payload: AttemptPayload,
    current: AuthContext = Depends(get_current_user),
    attempts: AttemptStore = Depends(app_state.get_attempt_store),
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
    scoring: AttemptScoringEngine = Depends(app_state.get_scoring_engine),
):
    """Registra uma tentativa.

    ``quiz``, ``answers``, ``score`` e ``totalQuestions`` sao obrigatorios
    (``0`` e valido). A correcao e refeita contra o gabarito persistido.
    """
    scoring.check_required(payload)

    quiz = await quizzes.get(validate_object_id(payload.quiz, resource="quiz"))
    if quiz is None:
        raise NotFoundError(message="Quiz not found")

    attempt = scoring.build_attempt(payload, quiz, user_id=current.id, attempt_id=new_object_id())
    await attempts.create(attempt)

    return {"success": True, "data": attempt.to_json_dict()}


@router.get("/user/quizzes")
async def user_history(
    current: AuthContext = Depends(get_current_user),
    attempts: AttemptStore = Depends(app_state.get_attempt_store),
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
    analytics: QuizAnalyticsEngine = Depends(app_state.get_analytics_engine),
):
    """Tentativas do usuario agrupadas por quiz."""
    user_attempts = await attempts.list_for_user(current.id)
    referenced = await quizzes.get_many(a.quiz for a in user_attempts)
    return analytics.history(user_attempts, referenced)


@router.get("/user/quiz/{quiz_id}")
async def user_quiz_history(
    quiz_id: str,
    current: AuthContext = Depends(get_current_user),
    attempts: AttemptStore = Depends(app_state.get_attempt_store),
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
    analytics: QuizAnalyticsEngine = Depends(app_state.get_analytics_engine),
):
    """Historico do usuario em um unico quiz (404 sem tentativas)."""
    quiz_id = validate_object_id(quiz_id, resource="quiz")
    user_attempts = await attempts.list_for_user(current.id)
    referenced = await quizzes.get_many([quiz_id])
    return analytics.quiz_history(quiz_id, user_attempts, referenced)


@router.get("/{attempt_id}/summary")
async def attempt_summary(
    attempt_id: str,
    current: AuthContext = Depends(get_current_user),
    attempts: AttemptStore = Depends(app_state.get_attempt_store),
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
    analytics: QuizAnalyticsEngine = Depends(app_state.get_analytics_engine),
):
    """Revisao questao a questao.

    Visivel para o autor da tentativa, o dono do quiz ou um admin.
    """
    attempt = await attempts.get(validate_object_id(attempt_id, resource="attempt"))
    if attempt is None:
        raise NotFoundError(message="Attempt not found")

    quiz = await quizzes.get(attempt.quiz)
    allowed = (
        current.is_admin
        or attempt.user == current.id
        or (quiz is not None and quiz.created_by == current.id)
    )
    if not allowed:
        logger.warning(f"Revisao negada: attempt={attempt.id} user={current.id}")
        raise ForbiddenError(message="Not authorized to view this attempt")

    return {"success": True, "data": analytics.attempt_summary(attempt, quiz)}
