# =============================================================================
# CONFTEST - Fixtures compartilhadas para todos os testes
# =============================================================================
# Centraliza banco temporário, stores, payloads de exemplo e helpers de auth
# =============================================================================

import os
from datetime import datetime, timedelta, timezone
from typing import Any
from unittest.mock import patch

import pytest


# =============================================================================
# FIXTURES DE CONFIGURAÇÃO
# =============================================================================


@pytest.fixture
def app_config():
    """AppConfig de teste com segredo fixo."""
    from config import AppConfig

    return AppConfig(
        jwt_secret="test-secret-for-quiz-api",
        database_path=":memory:",
        environment="test",
        log_level="ERROR",
    )


# =============================================================================
# FIXTURES DO BANCO
# =============================================================================


@pytest.fixture
def db():
    """Database em memória, aberto e fechado por teste."""
    from quiz.storage import Database

    database = Database(":memory:").open()
    yield database
    database.close()


@pytest.fixture
def quiz_store(db):
    from quiz.storage import QuizStore

    return QuizStore(db)


@pytest.fixture
def attempt_store(db):
    from quiz.storage import AttemptStore

    return AttemptStore(db)


@pytest.fixture
def user_store(db):
    from quiz.storage import UserStore

    return UserStore(db)


# =============================================================================
# FIXTURES DO FASTAPI
# =============================================================================


@pytest.fixture
def client(temp_db_path):
    """Cliente de teste FastAPI com lifespan (abre e fecha o banco)."""
    from fastapi.testclient import TestClient

    with patch.dict(os.environ, {"DATABASE_PATH": str(temp_db_path)}):
        from server import app

        with TestClient(app) as test_client:
            yield test_client


@pytest.fixture
def register_user(client):
    """Factory: cadastra, faz login e retorna ``{id, token, headers}``."""

    def _register(
        email: str = "student@example.com",
        password: str = "secret123",
        name: str = "Student User",
        role: str = "student",
    ) -> dict[str, Any]:
        response = client.post(
            "/api/register",
            json={"full_name": name, "email": email, "password": password, "type": role},
        )
        assert response.status_code == 201, response.text

        login = client.post("/api/login", json={"email": email, "password": password})
        assert login.status_code == 200, login.text
        token = login.json()["token"]
        headers = {"Authorization": f"Bearer {token}"}

        me = client.get("/api/verify-token", headers=headers)
        return {"id": me.json()["user"]["id"], "token": token, "headers": headers}

    return _register


# =============================================================================
# FIXTURES DO QUIZ
# =============================================================================


@pytest.fixture
def sample_quiz_payload() -> dict[str, Any]:
    """Quiz válido: uma questão de múltipla escolha valendo 10 pontos."""
    return {
        "title": "Python Basics",
        "description": "A short quiz about Python fundamentals",
        "difficulty": "EASY",
        "timeLimit": 10,
        "category": "programming",
        "tags": ["python", "basics"],
        "questions": [
            {
                "questionType": "Multiple Choice",
                "questionText": "Which keyword defines a function?",
                "options": [
                    {"optionText": "def", "isCorrect": True},
                    {"optionText": "func", "isCorrect": False},
                    {"optionText": "lambda", "isCorrect": False},
                    {"optionText": "function", "isCorrect": False},
                ],
                "points": 10,
                "answerExplanation": "Functions are declared with def.",
            }
        ],
    }


@pytest.fixture
def mixed_quiz_payload(sample_quiz_payload) -> dict[str, Any]:
    """Quiz com os três tipos de questão (10 + 5 + 5 pontos)."""
    payload = dict(sample_quiz_payload)
    payload["title"] = "Mixed Python Quiz"
    payload["difficulty"] = "MEDIUM"
    payload["questions"] = sample_quiz_payload["questions"] + [
        {
            "questionType": "True/False",
            "questionText": "Python lists are mutable.",
            "options": [
                {"optionText": "True", "isCorrect": True},
                {"optionText": "False", "isCorrect": False},
            ],
            "points": 5,
        },
        {
            "questionType": "Short Answer",
            "questionText": "Which built-in returns the length of a list?",
            "correctAnswer": "len",
            "points": 5,
        },
    ]
    return payload


@pytest.fixture
def sample_quiz(sample_quiz_payload):
    """QuizDocument validado a partir do payload de exemplo."""
    from quiz.engine import QuizValidator
    from quiz.models import QuizDocument, QuizPayload, new_object_id

    validated = QuizValidator().validate(QuizPayload.model_validate(sample_quiz_payload))
    return QuizDocument(**validated.model_dump(), id=new_object_id(), created_by="a" * 32)


@pytest.fixture
def mixed_quiz(mixed_quiz_payload):
    """QuizDocument com múltipla escolha, verdadeiro/falso e resposta curta."""
    from quiz.engine import QuizValidator
    from quiz.models import QuizDocument, QuizPayload, new_object_id

    validated = QuizValidator().validate(QuizPayload.model_validate(mixed_quiz_payload))
    return QuizDocument(**validated.model_dump(), id=new_object_id(), created_by="a" * 32)


@pytest.fixture
def make_attempt():
    """Factory de AttemptDocument com valores padrão."""
    from quiz.models import AttemptDocument, new_object_id

    base_time = datetime(2024, 1, 15, 12, 0, 0, tzinfo=timezone.utc)

    def _make(quiz_id: str, user_id: str = "b" * 32, score: float = 10, total_score: float = 10,
              minutes_ago: int = 0, completed: bool = True, time_spent: int = 60,
              answers=None, total_questions: int = 1):
        end_time = base_time - timedelta(minutes=minutes_ago)
        return AttemptDocument(
            _id=new_object_id(),
            user=user_id,
            quiz=quiz_id,
            answers=answers or [],
            score=score,
            total_questions=total_questions,
            total_score=total_score,
            start_time=end_time - timedelta(seconds=time_spent),
            end_time=end_time,
            completed=completed,
            time_spent=time_spent,
            created_at=end_time,
        )

    return _make
