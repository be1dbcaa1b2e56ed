"""Quiz Validator - Regras estruturais do quiz antes da persistencia."""

import logging
import re
from collections import Counter

from ..exceptions import ValidationError
from ..models.documents import new_object_id
from ..models.enums import OPTION_COUNTS, QuestionType
from ..models.schemas import QuizOption, QuizPayload, QuizQuestion

logger = logging.getLogger(__name__)

ONE_CORRECT_ANSWER = "Each question must have exactly one correct answer"

QUESTION_ID_PATTERN = re.compile(r"^[0-9a-f]{32}$")


def _strip(value):
    return value.strip() if isinstance(value, str) else value


class QuizValidator:
    """Validador estrutural de quizzes.

    Funcao pura chamada explicitamente pelo caminho de escrita (create e
    update completo). Nao toca no armazenamento: devolve uma copia corrigida
    do payload ou levanta ``ValidationError`` com todas as mensagens.

    Correcoes silenciosas (nao sao erros):
        - textos aparados (trim)
        - ``totalScore`` = soma dos pontos das questoes
        - ``noOfQuestions`` = quantidade real de questoes
        - ``_id`` gerado para questoes novas

    Example:
        >>> validator = QuizValidator()
        >>> quiz = validator.validate(payload)
        >>> quiz.total_score == sum(q.points for q in quiz.questions)
        True
    """

    TITLE_LENGTH = (3, 200)
    DESCRIPTION_LENGTH = (10, 2000)
    POINTS_RANGE = (1, 100)
    TIME_LIMIT_RANGE = (1, 180)
    MAX_TAGS = 10

    def sanitize(self, payload: QuizPayload) -> QuizPayload:
        """Apara textos, remove tags vazias e atribui IDs as questoes."""
        questions = [self._sanitize_question(q) for q in payload.questions]
        tags = [t.strip() for t in payload.tags if t and t.strip()]
        return payload.model_copy(
            update={
                "title": payload.title.strip(),
                "description": payload.description.strip(),
                "category": _strip(payload.category),
                "tags": tags,
                "questions": questions,
            }
        )

    def _sanitize_question(self, question: QuizQuestion) -> QuizQuestion:
        options = [
            QuizOption(option_text=o.option_text.strip(), is_correct=o.is_correct)
            for o in question.options
        ]
        return question.model_copy(
            update={
                "id": _strip(question.id) or new_object_id(),
                "question_text": question.question_text.strip(),
                "correct_answer": _strip(question.correct_answer),
                "hint": _strip(question.hint),
                "answer_explanation": _strip(question.answer_explanation),
                "options": options,
            }
        )

    def collect_errors(self, payload: QuizPayload) -> list[str]:
        """Lista todas as violacoes (vazia se o quiz e valido).

        Args:
            payload: Quiz ja sanitizado

        Returns:
            Mensagens de erro sem duplicatas, na ordem encontrada
        """
        errors: list[str] = []

        min_title, max_title = self.TITLE_LENGTH
        if len(payload.title) < min_title:
            errors.append(f"Title must be at least {min_title} characters long")
        elif len(payload.title) > max_title:
            errors.append(f"Title cannot exceed {max_title} characters")

        min_desc, max_desc = self.DESCRIPTION_LENGTH
        if len(payload.description) < min_desc:
            errors.append(f"Description must be at least {min_desc} characters long")
        elif len(payload.description) > max_desc:
            errors.append(f"Description cannot exceed {max_desc} characters")

        min_time, max_time = self.TIME_LIMIT_RANGE
        if payload.time_limit < min_time:
            errors.append(f"Time limit must be at least {min_time} minute")
        elif payload.time_limit > max_time:
            errors.append(f"Time limit cannot exceed {max_time} minutes")

        if len(payload.tags) > self.MAX_TAGS:
            errors.append(f"Cannot have more than {self.MAX_TAGS} tags")

        if not payload.questions:
            errors.append("Quiz must have at least one question")

        for question in payload.questions:
            errors.extend(self._question_errors(question))

        # Pontuacao e analise por questao dependem de IDs unicos
        id_counts = Counter(q.id for q in payload.questions)
        if any(count > 1 for count in id_counts.values()):
            errors.append("Question IDs must be unique")

        return list(dict.fromkeys(errors))

    def _question_errors(self, question: QuizQuestion) -> list[str]:
        errors = []

        if not QUESTION_ID_PATTERN.match(question.id or ""):
            errors.append("Invalid question ID format")

        if not question.question_text:
            errors.append("Question text is required")

        if any(not o.option_text for o in question.options):
            errors.append("Option text is required")

        expected = OPTION_COUNTS.get(question.question_type)
        if expected is not None:
            if len(question.options) != expected:
                errors.append(
                    f"{question.question_type.value} questions must have exactly {expected} options"
                )
            correct = sum(1 for o in question.options if o.is_correct)
            if correct != 1:
                errors.append(ONE_CORRECT_ANSWER)

        if question.question_type == QuestionType.SHORT_ANSWER and not question.correct_answer:
            errors.append("Correct answer is required for Short Answer questions")

        min_points, max_points = self.POINTS_RANGE
        if question.points < min_points:
            errors.append(f"Points must be at least {min_points}")
        elif question.points > max_points:
            errors.append(f"Points cannot exceed {max_points}")

        return errors

    def validate(self, payload: QuizPayload) -> QuizPayload:
        """Valida e corrige o quiz.

        Args:
            payload: Quiz candidato enviado pelo cliente

        Returns:
            Copia sanitizada com ``total_score`` e ``no_of_questions`` derivados

        Raises:
            ValidationError: Com a lista completa de violacoes
        """
        quiz = self.sanitize(payload)
        errors = self.collect_errors(quiz)
        if errors:
            logger.debug(f"Quiz rejeitado: {errors}")
            raise ValidationError(message="Validation Error", errors=errors)

        return quiz.model_copy(
            update={
                "total_score": sum(q.points for q in quiz.questions),
                "no_of_questions": len(quiz.questions),
            }
        )


def validate_quiz(payload: QuizPayload) -> QuizPayload:
    """Atalho funcional para ``QuizValidator().validate``."""
    return QuizValidator().validate(payload)
