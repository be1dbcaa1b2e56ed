# =============================================================================
# TESTES DE INTEGRAÇÃO - Endpoints
# =============================================================================
# Testes de integração usando FastAPI TestClient (sem servidor externo)
# =============================================================================

import copy

import pytest


@pytest.fixture
def teacher(register_user):
    return register_user(email="teacher@example.com", name="Grace Teacher", role="teacher")


@pytest.fixture
def student(register_user):
    return register_user(email="student@example.com", name="Sam Student")


@pytest.fixture
def created_quiz(client, teacher, mixed_quiz_payload):
    """Quiz misto criado pelo professor."""
    response = client.post("/api/quiz", json=mixed_quiz_payload, headers=teacher["headers"])
    assert response.status_code == 201, response.text
    return response.json()


def _answers(quiz, selections):
    return [
        {"questionId": q["_id"], "selectedOption": choice}
        for q, choice in zip(quiz["questions"], selections)
    ]


def _submit(client, user, quiz, selections, score=0, **extra):
    body = {
        "quiz": quiz["_id"],
        "answers": _answers(quiz, selections),
        "score": score,
        "totalQuestions": len(quiz["questions"]),
        "completed": True,
        "timeSpent": 120,
    }
    body.update(extra)
    return client.post("/api/attempts", json=body, headers=user["headers"])


class TestHealthEndpoints:
    """Testes do endpoint de health check."""

    def test_health_returns_healthy(self, client):
        """GET /health - Deve retornar status healthy com banco ativo."""
        response = client.get("/health")

        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["database"] == "ok"


class TestUserEndpoints:
    """Testes de cadastro, login e sessão."""

    def test_register_and_login(self, client):
        """POST /api/register + /api/login - Deve emitir credencial."""
        register = client.post(
            "/api/register",
            json={"full_name": "Ada", "email": "Ada@Example.com", "password": "secret123"},
        )
        login = client.post("/api/login", json={"email": "ada@example.com", "password": "secret123"})

        assert register.status_code == 201
        assert register.json() == {"message": "User registered successfully"}
        assert login.status_code == 200
        assert login.json()["message"] == "User logged in successfully"
        assert login.json()["token"]

    def test_duplicate_email(self, client, student):
        """POST /api/register - Email repetido retorna 400."""
        response = client.post(
            "/api/register",
            json={"full_name": "Other", "email": "student@example.com", "password": "secret123"},
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Email already exists"

    def test_wrong_password(self, client, student):
        """POST /api/login - Senha errada retorna 400."""
        response = client.post(
            "/api/login", json={"email": "student@example.com", "password": "wrong-pass"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid credentials"

    def test_verify_token(self, client, student):
        """GET /api/verify-token - Deve retornar a identidade."""
        response = client.get("/api/verify-token", headers=student["headers"])

        assert response.status_code == 200
        assert response.json()["user"] == {
            "id": student["id"],
            "name": "Sam Student",
            "email": "student@example.com",
            "role": "student",
        }

    def test_missing_token_is_401(self, client):
        response = client.get("/api/verify-token")

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_invalid_token_is_403(self, client):
        response = client.get("/api/verify-token", headers={"Authorization": "Bearer garbage"})

        assert response.status_code == 403

    def test_logout(self, client):
        response = client.get("/api/logout")

        assert response.status_code == 200
        assert response.json()["message"] == "User logged out successfully"

    def test_delete_self(self, client, student):
        """DELETE /api/delete/:id - Usuário pode remover a própria conta."""
        response = client.delete(f"/api/delete/{student['id']}", headers=student["headers"])
        after = client.get("/api/verify-token", headers=student["headers"])

        assert response.status_code == 200
        assert response.json()["message"] == "User deleted successfully"
        assert after.status_code == 404

    def test_delete_other_user_forbidden(self, client, student, teacher):
        response = client.delete(f"/api/delete/{teacher['id']}", headers=student["headers"])

        assert response.status_code == 403

    def test_list_users_admin_only(self, client, student, register_user):
        admin = register_user(email="admin@example.com", name="Admin", role="admin")

        forbidden = client.get("/api/users", headers=student["headers"])
        allowed = client.get("/api/users", headers=admin["headers"])

        assert forbidden.status_code == 403
        assert allowed.status_code == 200
        assert all("password" not in u and "salt" not in u for u in allowed.json())


class TestQuizEndpoints:
    """Testes do CRUD de quizzes."""

    def test_create_quiz_derives_totals(self, client, teacher, sample_quiz_payload):
        """POST /api/quiz - totalScore 10 e noOfQuestions 1."""
        sample_quiz_payload["totalScore"] = 500

        response = client.post("/api/quiz", json=sample_quiz_payload, headers=teacher["headers"])

        assert response.status_code == 201
        data = response.json()
        assert data["totalScore"] == 10
        assert data["noOfQuestions"] == 1
        assert data["createdBy"] == teacher["id"]
        assert len(data["_id"]) == 32

    def test_create_requires_auth(self, client, sample_quiz_payload):
        response = client.post("/api/quiz", json=sample_quiz_payload)

        assert response.status_code == 401

    def test_two_correct_options_rejected(self, client, teacher, sample_quiz_payload):
        """POST /api/quiz - Duas alternativas corretas retorna 400."""
        sample_quiz_payload["questions"][0]["options"][1]["isCorrect"] = True

        response = client.post("/api/quiz", json=sample_quiz_payload, headers=teacher["headers"])

        assert response.status_code == 400
        assert "Each question must have exactly one correct answer" in response.json()["errors"]

    def test_duplicate_question_ids_rejected(self, client, teacher, mixed_quiz_payload):
        """POST /api/quiz - Questoes com o mesmo _id retornam 400."""
        mixed_quiz_payload["questions"][0]["_id"] = "a" * 32
        mixed_quiz_payload["questions"][1]["_id"] = "a" * 32

        response = client.post("/api/quiz", json=mixed_quiz_payload, headers=teacher["headers"])

        assert response.status_code == 400
        assert "Question IDs must be unique" in response.json()["errors"]
        assert client.get("/api/quiz").json() == []

    def test_blank_question_text_rejected(self, client, teacher, sample_quiz_payload):
        sample_quiz_payload["questions"][0]["questionText"] = ""

        response = client.post("/api/quiz", json=sample_quiz_payload, headers=teacher["headers"])

        assert response.status_code == 400
        assert "Question text is required" in response.json()["errors"]

    def test_invalid_enum_is_400(self, client, teacher, sample_quiz_payload):
        sample_quiz_payload["difficulty"] = "IMPOSSIBLE"

        response = client.post("/api/quiz", json=sample_quiz_payload, headers=teacher["headers"])

        assert response.status_code == 400
        assert response.json()["error"] == "Validation Error"

    def test_list_strips_answers_and_populates_creator(self, client, created_quiz):
        """GET /api/quiz - Gabarito removido e nome do criador populado."""
        response = client.get("/api/quiz")

        assert response.status_code == 200
        quiz = response.json()[0]
        assert quiz["createdBy"] == {"_id": created_quiz["createdBy"], "name": "Grace Teacher"}
        assert all("correctAnswer" not in q for q in quiz["questions"])
        assert all("isCorrect" not in o for q in quiz["questions"] for o in q["options"])

    def test_list_filters(self, client, teacher, created_quiz, sample_quiz_payload):
        client.post("/api/quiz", json=sample_quiz_payload, headers=teacher["headers"])

        medium = client.get("/api/quiz", params={"difficulty": "MEDIUM"}).json()
        tagged = client.get("/api/quiz", params={"tags": "python,basics"}).json()
        expensive = client.get("/api/quiz", params={"minScore": 15}).json()

        assert [q["_id"] for q in medium] == [created_quiz["_id"]]
        assert len(tagged) == 2
        assert [q["_id"] for q in expensive] == [created_quiz["_id"]]

    def test_get_quiz(self, client, created_quiz):
        """GET /api/quiz/:id - Quiz completo com criador."""
        response = client.get(f"/api/quiz/{created_quiz['_id']}")

        assert response.status_code == 200
        assert response.json()["questions"][2]["correctAnswer"] == "len"
        assert response.json()["createdBy"]["name"] == "Grace Teacher"

    def test_get_quiz_malformed_id(self, client):
        response = client.get("/api/quiz/not-an-id")

        assert response.status_code == 400
        assert response.json()["error"] == "Invalid quiz ID format"

    def test_get_quiz_not_found(self, client):
        response = client.get(f"/api/quiz/{'d' * 32}")

        assert response.status_code == 404
        assert response.json()["error"] == "Quiz not found"

    def test_update_by_owner(self, client, teacher, created_quiz, mixed_quiz_payload):
        """PUT /api/quiz/:id - Update completo revalida e recalcula."""
        payload = copy.deepcopy(mixed_quiz_payload)
        payload["questions"] = payload["questions"][:1]
        payload["status"] = "Published"

        response = client.put(
            f"/api/quiz/{created_quiz['_id']}", json=payload, headers=teacher["headers"]
        )

        assert response.status_code == 200
        assert response.json()["totalScore"] == 10
        assert response.json()["noOfQuestions"] == 1
        assert response.json()["status"] == "Published"
        assert response.json()["createdAt"] == created_quiz["createdAt"]

    def test_update_by_other_user_forbidden(self, client, student, created_quiz, mixed_quiz_payload):
        response = client.put(
            f"/api/quiz/{created_quiz['_id']}", json=mixed_quiz_payload, headers=student["headers"]
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Not authorized to update this quiz"

    def test_delete_quiz(self, client, teacher, student, created_quiz):
        """DELETE /api/quiz/:id - Só o dono remove."""
        forbidden = client.delete(f"/api/quiz/{created_quiz['_id']}", headers=student["headers"])
        deleted = client.delete(f"/api/quiz/{created_quiz['_id']}", headers=teacher["headers"])
        missing = client.get(f"/api/quiz/{created_quiz['_id']}")

        assert forbidden.status_code == 403
        assert deleted.json() == {"message": "Quiz deleted successfully"}
        assert missing.status_code == 404


class TestAttemptEndpoints:
    """Testes de submissão, histórico e revisão."""

    def test_submit_scores_on_server(self, client, student, created_quiz):
        """POST /api/attempts - Score recalculado a partir do gabarito."""
        response = _submit(client, student, created_quiz, ["def", "True", "len"], score=20)

        assert response.status_code == 201
        body = response.json()
        assert body["success"] is True
        assert body["data"]["score"] == 20
        assert body["data"]["totalScore"] == 20
        assert body["data"]["percentageScore"] == 100.0
        assert body["data"]["user"] == student["id"]

    def test_unicode_digit_answer_is_incorrect(self, client, student, created_quiz):
        """POST /api/attempts - "²" e registrada como resposta errada."""
        response = _submit(client, student, created_quiz, ["²", "True", "len"], score=10)

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["answers"][0]["isCorrect"] is False
        assert data["score"] == 10

    def test_missing_score(self, client, student, created_quiz):
        """POST /api/attempts - Sem score retorna 400 listando o campo."""
        body = {
            "quiz": created_quiz["_id"],
            "answers": [],
            "totalQuestions": 3,
        }

        response = client.post("/api/attempts", json=body, headers=student["headers"])

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields: score"

    def test_zero_score_accepted(self, client, student, created_quiz):
        """POST /api/attempts - score = 0 é válido."""
        response = _submit(client, student, created_quiz, ["func", "False", "size"], score=0)

        assert response.status_code == 201
        assert response.json()["data"]["score"] == 0

    def test_unknown_quiz(self, client, student):
        body = {"quiz": "d" * 32, "answers": [], "score": 0, "totalQuestions": 0}

        response = client.post("/api/attempts", json=body, headers=student["headers"])

        assert response.status_code == 404

    def test_history_grouped_by_quiz(self, client, student, created_quiz):
        """GET /api/attempts/user/quizzes - Totais somam as tentativas."""
        _submit(client, student, created_quiz, ["def", "True", "len"])
        _submit(client, student, created_quiz, ["func", "True", "len"])

        response = client.get("/api/attempts/user/quizzes", headers=student["headers"])

        assert response.status_code == 200
        groups = response.json()
        assert len(groups) == 1
        assert groups[0]["quizTitle"] == "Mixed Python Quiz"
        assert groups[0]["stats"]["totalAttempts"] == 2
        assert groups[0]["stats"]["highestScore"] == 100.0

    def test_single_quiz_history(self, client, student, created_quiz):
        missing = client.get(
            f"/api/attempts/user/quiz/{created_quiz['_id']}", headers=student["headers"]
        )
        _submit(client, student, created_quiz, ["def", "True", "len"])
        found = client.get(
            f"/api/attempts/user/quiz/{created_quiz['_id']}", headers=student["headers"]
        )

        assert missing.status_code == 404
        assert found.status_code == 200
        assert found.json()["stats"]["totalAttempts"] == 1

    def test_attempt_summary_access(self, client, student, teacher, register_user, created_quiz):
        """GET /api/attempts/:id/summary - Autor e dono do quiz podem ver."""
        attempt_id = _submit(client, student, created_quiz, ["def", "False", "len"]).json()["data"]["_id"]
        stranger = register_user(email="stranger@example.com", name="Stranger")

        own = client.get(f"/api/attempts/{attempt_id}/summary", headers=student["headers"])
        owner = client.get(f"/api/attempts/{attempt_id}/summary", headers=teacher["headers"])
        other = client.get(f"/api/attempts/{attempt_id}/summary", headers=stranger["headers"])

        assert own.status_code == 200
        assert own.json()["data"]["statistics"]["correctAnswers"] == 2
        assert own.json()["data"]["statistics"]["incorrectAnswers"] == 1
        assert owner.status_code == 200
        assert other.status_code == 403


class TestAnalyticsEndpoints:
    """Testes dos resumos de analytics."""

    def test_empty_user_analytics(self, client, student):
        """GET /api/attempts/analytics/user/current - Zeros sem tentativas."""
        response = client.get("/api/attempts/analytics/user/current", headers=student["headers"])

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["totalAttempts"] == 0
        assert data["averageScore"] == 0
        assert data["completionRate"] == 0

    def test_user_analytics(self, client, student, created_quiz):
        _submit(client, student, created_quiz, ["def", "True", "len"])
        _submit(client, student, created_quiz, ["func", "False", "size"])

        data = client.get(
            "/api/attempts/analytics/user/current", headers=student["headers"]
        ).json()["data"]

        assert data["totalAttempts"] == 2
        assert data["averageScore"] == 50.0
        assert data["completionRate"] == 100.0
        assert data["performanceByDifficulty"]["MEDIUM"]["totalAttempts"] == 2

    def test_quiz_analytics_owner_only(self, client, student, teacher, created_quiz):
        """GET /api/attempts/analytics/quiz/:id - Dono do quiz ou admin."""
        _submit(client, student, created_quiz, ["def", "True", "len"])

        owner = client.get(
            f"/api/attempts/analytics/quiz/{created_quiz['_id']}", headers=teacher["headers"]
        )
        other = client.get(
            f"/api/attempts/analytics/quiz/{created_quiz['_id']}", headers=student["headers"]
        )

        assert owner.status_code == 200
        data = owner.json()["data"]
        assert data["totalAttempts"] == 1
        assert data["highestScore"] == 100.0
        assert data["questionAnalysis"][0]["optionDistribution"] == {"def": 1}
        assert other.status_code == 403
