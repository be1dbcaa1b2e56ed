"""Analytics Engine - Agregacao de tentativas em estatisticas."""

import logging
from collections import Counter, defaultdict
from datetime import datetime
from typing import Any, Optional

from ..exceptions import NotFoundError
from ..models.documents import AttemptDocument, QuizDocument
from ..models.enums import QuestionType
from .scoring_engine import percentage

logger = logging.getLogger(__name__)

RECENT_ATTEMPTS_LIMIT = 5


def _mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _iso(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


class QuizAnalyticsEngine:
    """Motor de analytics sobre tentativas persistidas.

    Todas as divisoes usam guardas explicitas: colecoes vazias produzem 0,
    nunca NaN. ``highestScore`` de um conjunto vazio tambem e 0.

    Operacoes:
        - ``user_summary``: resumo do usuario (media, tempo, conclusao, dificuldade)
        - ``quiz_summary``: resumo de um quiz com analise por questao
        - ``history``: tentativas do usuario agrupadas por quiz
        - ``attempt_summary``: revisao questao a questao de uma tentativa
    """

    def user_summary(
        self, attempts: list[AttemptDocument], quizzes: dict[str, QuizDocument]
    ) -> dict[str, Any]:
        """Resumo de desempenho de um usuario.

        Args:
            attempts: Todas as tentativas do usuario
            quizzes: Quizzes referenciados, indexados por ID

        Returns:
            Dict no formato da API de analytics
        """
        ordered = sorted(attempts, key=lambda a: a.created_at, reverse=True)
        total_attempts = len(ordered)
        completed = sum(1 for a in ordered if a.completed)

        by_difficulty: dict[str, dict[str, float]] = {}
        for attempt in ordered:
            quiz = quizzes.get(attempt.quiz)
            if quiz is None:
                continue
            bucket = by_difficulty.setdefault(
                quiz.difficulty.value, {"totalAttempts": 0, "totalScore": 0.0}
            )
            bucket["totalAttempts"] += 1
            bucket["totalScore"] += attempt.percentage_score

        for bucket in by_difficulty.values():
            bucket["averageScore"] = bucket["totalScore"] / bucket["totalAttempts"]

        recent = []
        for attempt in ordered[:RECENT_ATTEMPTS_LIMIT]:
            quiz = quizzes.get(attempt.quiz)
            recent.append(
                {
                    "attemptId": attempt.id,
                    "quizId": attempt.quiz,
                    "quizTitle": quiz.title if quiz else None,
                    "score": attempt.percentage_score,
                    "date": _iso(attempt.end_time),
                    "timeSpent": attempt.time_spent,
                }
            )

        return {
            "totalQuizzes": len({a.quiz for a in ordered}),
            "totalAttempts": total_attempts,
            "averageScore": _mean([a.percentage_score for a in ordered]),
            "timeSpent": sum(a.time_spent for a in ordered),
            "completionRate": percentage(completed, total_attempts),
            "recentAttempts": recent,
            "performanceByDifficulty": by_difficulty,
        }

    def quiz_summary(
        self, quiz: QuizDocument, attempts: list[AttemptDocument]
    ) -> dict[str, Any]:
        """Resumo de todas as tentativas de um quiz."""
        percentages = [a.percentage_score for a in attempts]
        return {
            "quizId": quiz.id,
            "quizTitle": quiz.title,
            "totalAttempts": len(attempts),
            "averageScore": _mean(percentages),
            "highestScore": max(percentages) if percentages else 0.0,
            "averageTime": _mean([a.time_spent for a in attempts]),
            "questionAnalysis": self.question_analysis(quiz, attempts),
        }

    def question_analysis(
        self, quiz: QuizDocument, attempts: list[AttemptDocument]
    ) -> list[dict[str, Any]]:
        """Distribuicao de respostas e taxa de acerto por questao."""
        answers_by_question = defaultdict(list)
        for attempt in attempts:
            for answer in attempt.answers:
                answers_by_question[answer.question_id].append(answer)

        analysis = []
        for question in quiz.questions:
            answers = answers_by_question.get(question.id, [])
            correct = sum(1 for a in answers if a.is_correct)
            distribution = Counter(
                a.selected_option for a in answers if a.selected_option is not None
            )
            analysis.append(
                {
                    "questionId": question.id,
                    "questionText": question.question_text,
                    "totalAnswers": len(answers),
                    "correctAnswers": correct,
                    "correctRate": percentage(correct, len(answers)),
                    "optionDistribution": dict(distribution),
                }
            )
        return analysis

    def history(
        self, attempts: list[AttemptDocument], quizzes: dict[str, QuizDocument]
    ) -> list[dict[str, Any]]:
        """Agrupa as tentativas do usuario por quiz.

        As estatisticas de cada grupo sao acumuladas tentativa a tentativa;
        a media e incremental. A soma de ``stats.totalAttempts`` de todos os
        grupos e igual a ``len(attempts)``.
        """
        ordered = sorted(attempts, key=lambda a: a.end_time, reverse=True)
        groups: dict[str, dict[str, Any]] = {}

        for attempt in ordered:
            group = groups.get(attempt.quiz)
            if group is None:
                quiz = quizzes.get(attempt.quiz)
                group = {
                    "quizId": attempt.quiz,
                    "quizTitle": quiz.title if quiz else None,
                    "attempts": [],
                    "stats": {
                        "totalAttempts": 0,
                        "highestScore": 0.0,
                        "averageScore": 0.0,
                        "totalTimeSpent": 0,
                        "latestAttempt": None,
                    },
                }
                groups[attempt.quiz] = group

            entry = {
                "attemptId": attempt.id,
                "score": attempt.score,
                "totalScore": attempt.total_score,
                "percentage": attempt.percentage_score,
                "startTime": _iso(attempt.start_time),
                "endTime": _iso(attempt.end_time),
                "timeSpent": attempt.time_spent,
                "completed": attempt.completed,
            }
            group["attempts"].append(entry)

            stats = group["stats"]
            stats["totalAttempts"] += 1
            stats["highestScore"] = max(stats["highestScore"], entry["percentage"])
            stats["averageScore"] += (entry["percentage"] - stats["averageScore"]) / stats[
                "totalAttempts"
            ]
            stats["totalTimeSpent"] += attempt.time_spent
            if stats["latestAttempt"] is None:
                stats["latestAttempt"] = entry

        return list(groups.values())

    def quiz_history(
        self, quiz_id: str, attempts: list[AttemptDocument], quizzes: dict[str, QuizDocument]
    ) -> dict[str, Any]:
        """Historico do usuario para um unico quiz.

        Raises:
            NotFoundError: Se o usuario nao tem tentativas nesse quiz
        """
        relevant = [a for a in attempts if a.quiz == quiz_id]
        if not relevant:
            raise NotFoundError(message="No attempts found for this quiz")
        return self.history(relevant, quizzes)[0]

    def attempt_summary(
        self, attempt: AttemptDocument, quiz: Optional[QuizDocument]
    ) -> dict[str, Any]:
        """Revisao de uma tentativa, questao a questao.

        Args:
            attempt: Tentativa persistida
            quiz: Quiz da tentativa (None se foi removido)
        """
        answers = {}
        for answer in attempt.answers:
            answers.setdefault(answer.question_id, answer)

        questions = []
        for question in quiz.questions if quiz else []:
            answer = answers.get(question.id)
            is_correct = bool(answer and answer.is_correct)
            if question.question_type == QuestionType.SHORT_ANSWER:
                correct_answer = question.correct_answer
            else:
                correct_answer = next(
                    (o.option_text for o in question.options if o.is_correct), None
                )
            questions.append(
                {
                    "questionId": question.id,
                    "questionText": question.question_text,
                    "userAnswer": answer.selected_option if answer else None,
                    "correctAnswer": correct_answer,
                    "isCorrect": is_correct,
                    "points": question.points,
                    "earnedPoints": question.points if is_correct else 0,
                    "explanation": question.answer_explanation,
                }
            )

        correct_count = sum(1 for q in questions if q["isCorrect"])
        return {
            "attemptId": attempt.id,
            "quizId": attempt.quiz,
            "quizTitle": quiz.title if quiz else None,
            "score": attempt.score,
            "totalScore": attempt.total_score,
            "percentage": attempt.percentage_score,
            "timeSpent": attempt.time_spent,
            "startTime": _iso(attempt.start_time),
            "endTime": _iso(attempt.end_time),
            "questions": questions,
            "statistics": {
                "totalQuestions": len(questions),
                "correctAnswers": correct_count,
                "incorrectAnswers": len(questions) - correct_count,
                "accuracy": percentage(correct_count, len(questions)),
            },
        }
