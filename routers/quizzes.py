"""Quiz endpoints - CRUD de quizzes com validacao estrutural."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

import app_state
from quiz.engine import QuizValidator
from quiz.exceptions import NotFoundError
from quiz.models import (
    MessageResponse,
    QuizDifficulty,
    QuizDocument,
    QuizFilters,
    QuizPayload,
    QuizStatus,
    new_object_id,
    utcnow,
)
from quiz.security import AuthContext, get_current_user, require_owner_or_admin
from quiz.storage import QuizStore, UserStore
from utils.validators import validate_object_id

router = APIRouter(prefix="/quiz", tags=["Quiz"])
logger = logging.getLogger(__name__)


async def _with_creators(
    quizzes: list[QuizDocument], users: UserStore, strip_answers: bool = False
) -> list[dict]:
    """Serializa quizzes com ``createdBy`` populado como ``{_id, name}``."""
    names = await users.get_names(q.created_by for q in quizzes)
    result = []
    for quiz in quizzes:
        data = quiz.public_dict(strip_answers=strip_answers)
        data["createdBy"] = {"_id": quiz.created_by, "name": names.get(quiz.created_by)}
        result.append(data)
    return result


async def _load_quiz(quiz_id: str, quizzes: QuizStore) -> QuizDocument:
    quiz = await quizzes.get(validate_object_id(quiz_id, resource="quiz"))
    if quiz is None:
        raise NotFoundError(message="Quiz not found")
    return quiz


@router.post("", status_code=201)
async def create_quiz(
    payload: QuizPayload,
    current: AuthContext = Depends(get_current_user),
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
    validator: QuizValidator = Depends(app_state.get_quiz_validator),
):
    """Cria um quiz.

    ``totalScore`` e ``noOfQuestions`` sao sempre recalculados; valores
    enviados pelo cliente sao ignorados.
    """
    validated = validator.validate(payload)
    quiz = QuizDocument(**validated.model_dump(), id=new_object_id(), created_by=current.id)

    await quizzes.save(quiz)
    logger.info(f"Quiz criado: {quiz.id} por {current.id} ({quiz.no_of_questions} questoes)")
    return quiz.public_dict()


@router.get("")
async def list_quizzes(
    category: Optional[str] = None,
    tags: Optional[str] = Query(default=None, description="Lista separada por virgula"),
    difficulty: Optional[QuizDifficulty] = None,
    status: Optional[QuizStatus] = None,
    min_score: Optional[float] = Query(default=None, alias="minScore"),
    max_score: Optional[float] = Query(default=None, alias="maxScore"),
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
    users: UserStore = Depends(app_state.get_user_store),
):
    """Listagem publica. O gabarito (correctAnswer, isCorrect) e removido."""
    filters = QuizFilters(
        category=category,
        tags=[t.strip() for t in tags.split(",") if t.strip()] if tags else [],
        difficulty=difficulty,
        status=status,
        min_score=min_score,
        max_score=max_score,
    )
    found = await quizzes.list_quizzes(filters)
    return await _with_creators(found, users, strip_answers=True)


@router.get("/{quiz_id}")
async def get_quiz(
    quiz_id: str,
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
    users: UserStore = Depends(app_state.get_user_store),
):
    """Quiz completo, usado pela tela de resolucao."""
    quiz = await _load_quiz(quiz_id, quizzes)
    return (await _with_creators([quiz], users))[0]


@router.put("/{quiz_id}")
async def update_quiz(
    quiz_id: str,
    payload: QuizPayload,
    current: AuthContext = Depends(get_current_user),
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
    validator: QuizValidator = Depends(app_state.get_quiz_validator),
):
    """Substitui o quiz inteiro passando novamente pelo validador."""
    existing = await _load_quiz(quiz_id, quizzes)
    require_owner_or_admin(current, existing.created_by, "Not authorized to update this quiz")

    validated = validator.validate(payload)
    quiz = QuizDocument(
        **validated.model_dump(),
        id=existing.id,
        created_by=existing.created_by,
        created_at=existing.created_at,
        updated_at=utcnow(),
    )

    await quizzes.save(quiz)
    logger.info(f"Quiz atualizado: {quiz.id}")
    return quiz.public_dict()


@router.delete("/{quiz_id}", response_model=MessageResponse)
async def delete_quiz(
    quiz_id: str,
    current: AuthContext = Depends(get_current_user),
    quizzes: QuizStore = Depends(app_state.get_quiz_store),
):
    """Remove o quiz. Tentativas ja registradas permanecem."""
    quiz = await _load_quiz(quiz_id, quizzes)
    require_owner_or_admin(current, quiz.created_by, "Not authorized to delete this quiz")

    await quizzes.delete(quiz.id)
    return MessageResponse(message="Quiz deleted successfully")
