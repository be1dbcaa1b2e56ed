"""Attempt Scoring Engine - Motor de correcao e pontuacao de tentativas."""

import logging
from datetime import datetime, timezone
from typing import Optional, Union

from ..exceptions import ValidationError
from ..models.documents import AttemptDocument, GradedAnswer, QuizDocument, utcnow
from ..models.enums import QuestionType
from ..models.schemas import AttemptAnswerPayload, AttemptPayload, QuizQuestion

logger = logging.getLogger(__name__)


def percentage(score: float, total: float) -> float:
    """Percentual de aproveitamento (0 quando ``total`` nao e positivo)."""
    if not total or total <= 0:
        return 0.0
    return score / total * 100


def levenshtein_ratio(a: str, b: str) -> float:
    """Similaridade 0-1 baseada na distancia de Levenshtein."""
    if a == b:
        return 1.0
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0

    previous = list(range(len(b) + 1))
    for i, char_a in enumerate(a, 1):
        current = [i]
        for j, char_b in enumerate(b, 1):
            cost = 0 if char_a == char_b else 1
            current.append(min(previous[j] + 1, current[j - 1] + 1, previous[j - 1] + cost))
        previous = current

    return 1 - previous[-1] / longest


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class AttemptScoringEngine:
    """Motor de correcao de tentativas.

    A correcao e sempre feita contra o gabarito do quiz persistido: o
    ``isCorrect`` e o ``score`` enviados pelo cliente servem apenas para a
    checagem de campos obrigatorios.

    Regras por tipo de questao:
        - Multiple Choice / True/False: ``selectedOption`` pode ser o texto
          da alternativa (case-insensitive) ou o indice dela
        - Short Answer: texto igual ao ``correctAnswer`` (case-insensitive)
          ou similaridade de Levenshtein >= 0.85

    Example:
        >>> engine = AttemptScoringEngine()
        >>> engine.check_required(payload)
        >>> attempt = engine.build_attempt(payload, quiz, user_id="...", attempt_id="...")
        >>> attempt.percentage_score
        100.0
    """

    REQUIRED_FIELDS = {
        "quiz": "quiz",
        "answers": "answers",
        "score": "score",
        "total_questions": "totalQuestions",
    }

    SHORT_ANSWER_SIMILARITY = 0.85

    def missing_fields(self, payload: AttemptPayload) -> list[str]:
        """Campos obrigatorios ausentes (0 e lista vazia contam como presentes)."""
        return [
            wire_name
            for attr, wire_name in self.REQUIRED_FIELDS.items()
            if getattr(payload, attr) is None
        ]

    def check_required(self, payload: AttemptPayload) -> None:
        """Levanta ValidationError listando os campos ausentes."""
        missing = self.missing_fields(payload)
        if missing:
            raise ValidationError(
                message=f"Missing required fields: {', '.join(missing)}",
                errors=missing,
            )

    def _resolve_option(self, question: QuizQuestion, selected: Union[int, str]):
        """Resolve a alternativa escolhida por texto ou indice."""
        if isinstance(selected, str):
            wanted = selected.strip().lower()
            for option in question.options:
                if option.option_text.strip().lower() == wanted:
                    return option
            # "²" e "٣" passam em isdigit() mas nao em int()
            if not (wanted.isascii() and wanted.isdigit()):
                return None
            selected = int(wanted)

        if isinstance(selected, bool):
            return None
        if 0 <= selected < len(question.options):
            return question.options[selected]
        return None

    def evaluate_answer(self, question: QuizQuestion, selected: Optional[Union[int, str]]) -> bool:
        """Avalia uma resposta individual contra o gabarito.

        Args:
            question: Questao do quiz persistido
            selected: Texto ou indice enviado pelo cliente

        Returns:
            True se correta
        """
        if selected is None:
            return False

        if question.question_type == QuestionType.SHORT_ANSWER:
            expected = (question.correct_answer or "").strip().lower()
            given = str(selected).strip().lower()
            if not expected or not given:
                return False
            return levenshtein_ratio(given, expected) >= self.SHORT_ANSWER_SIMILARITY

        option = self._resolve_option(question, selected)
        return bool(option and option.is_correct)

    def _selected_text(self, question: Optional[QuizQuestion], selected) -> Optional[str]:
        if selected is None:
            return None
        if question is not None and question.question_type != QuestionType.SHORT_ANSWER:
            option = self._resolve_option(question, selected)
            if option is not None:
                return option.option_text
        return str(selected)

    def grade_answers(
        self, quiz: QuizDocument, answers: list[AttemptAnswerPayload]
    ) -> list[GradedAnswer]:
        """Corrige todas as respostas submetidas.

        Respostas para questoes inexistentes e respostas repetidas para a
        mesma questao sao registradas como incorretas.
        """
        graded = []
        seen: set[str] = set()

        for answer in answers:
            question = quiz.question_by_id(answer.question_id)
            is_correct = False
            if question is not None and answer.question_id not in seen:
                is_correct = self.evaluate_answer(question, answer.selected_option)
            seen.add(answer.question_id)

            graded.append(
                GradedAnswer(
                    question_id=answer.question_id,
                    selected_option=self._selected_text(question, answer.selected_option),
                    is_correct=is_correct,
                )
            )

        return graded

    def calculate_score(self, quiz: QuizDocument, graded: list[GradedAnswer]) -> int:
        """Soma os pontos das questoes respondidas corretamente."""
        correct_ids = {a.question_id for a in graded if a.is_correct}
        return sum(q.points for q in quiz.questions if q.id in correct_ids)

    def build_attempt(
        self,
        payload: AttemptPayload,
        quiz: QuizDocument,
        user_id: str,
        attempt_id: str,
    ) -> AttemptDocument:
        """Monta a tentativa corrigida pronta para persistir.

        Args:
            payload: Corpo ja verificado por ``check_required``
            quiz: Quiz referenciado (gabarito autoritativo)
            user_id: Usuario autenticado
            attempt_id: ID gerado para a tentativa

        Returns:
            AttemptDocument com score e totalScore derivados do quiz
        """
        graded = self.grade_answers(quiz, payload.answers or [])
        score = self.calculate_score(quiz, graded)

        if payload.score is not None and payload.score != score:
            logger.warning(
                f"Score divergente na tentativa {attempt_id}: "
                f"cliente={payload.score} servidor={score}"
            )

        now = utcnow()
        start_time = _as_utc(payload.start_time) or now
        end_time = _as_utc(payload.end_time) or now
        if payload.time_spent is not None:
            time_spent = max(0, payload.time_spent)
        else:
            time_spent = max(0, int((end_time - start_time).total_seconds()))

        return AttemptDocument(
            _id=attempt_id,
            user=user_id,
            quiz=quiz.id,
            answers=graded,
            score=score,
            total_questions=len(quiz.questions),
            total_score=quiz.total_score,
            start_time=start_time,
            end_time=end_time,
            completed=bool(payload.completed),
            time_spent=time_spent,
            created_at=now,
        )

    @staticmethod
    def time_per_question(time_spent: float, total_questions: int) -> float:
        """Tempo medio por questao em segundos (0 sem questoes)."""
        if total_questions <= 0:
            return 0.0
        return time_spent / total_questions

    @staticmethod
    def accuracy_rate(score: float, total_score: float) -> float:
        """Taxa de acerto ponderada por pontos."""
        return percentage(score, total_score)

    def attempt_metrics(self, attempt: AttemptDocument) -> dict:
        """Metricas derivadas sob demanda para uma tentativa."""
        return {
            "percentageScore": attempt.percentage_score,
            "timePerQuestion": self.time_per_question(attempt.time_spent, attempt.total_questions),
            "accuracyRate": self.accuracy_rate(attempt.score, attempt.total_score),
        }
