"""Quiz Schemas - Modelos Pydantic para request/response.

Os nomes de campo no JSON seguem camelCase (contrato do frontend); em Python
os atributos sao snake_case via ``alias_generator``.
"""

from datetime import datetime
from typing import Any, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from .enums import QuestionType, QuizDifficulty, QuizStatus, UserRole


class CamelModel(BaseModel):
    """Base com aliases camelCase e aceite de nomes snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_json_dict(self, **kwargs: Any) -> dict[str, Any]:
        """Dump JSON-compativel usando os aliases."""
        return self.model_dump(by_alias=True, mode="json", **kwargs)


class QuizOption(CamelModel):
    """Alternativa de uma questao."""

    option_text: str = Field(..., description="Texto da alternativa")
    is_correct: bool = Field(default=False, description="Se e a alternativa correta")


class QuizQuestion(CamelModel):
    """Questao do quiz."""

    id: Optional[str] = Field(default=None, alias="_id", description="ID da questao")
    question_type: QuestionType = Field(..., description="Tipo da questao")
    question_text: str = Field(..., description="Enunciado")
    options: list[QuizOption] = Field(default_factory=list, description="Alternativas")
    correct_answer: Optional[str] = Field(
        default=None, description="Resposta correta (apenas Short Answer)"
    )
    hint: Optional[str] = Field(default=None, description="Dica opcional")
    answer_explanation: Optional[str] = Field(default=None, description="Explicacao da resposta")
    points: int = Field(..., description="Pontos da questao (1-100)")


class QuizPayload(CamelModel):
    """Corpo de criacao/atualizacao de quiz.

    Limites de tamanho e contagem sao verificados pelo QuizValidator, nao aqui,
    para que todos os erros sejam reportados juntos.
    """

    title: str
    description: str
    difficulty: QuizDifficulty
    time_limit: int = Field(..., description="Tempo limite em minutos (1-180)")
    questions: list[QuizQuestion] = Field(default_factory=list)
    no_of_questions: Optional[int] = Field(default=None, description="Recalculado no servidor")
    total_score: Optional[int] = Field(default=None, description="Recalculado no servidor")
    status: QuizStatus = QuizStatus.DRAFT
    tags: list[str] = Field(default_factory=list)
    category: Optional[str] = None
    randomize_questions: bool = False
    randomize_options: bool = False


class QuizFilters(BaseModel):
    """Filtros da listagem publica de quizzes."""

    category: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    difficulty: Optional[QuizDifficulty] = None
    status: Optional[QuizStatus] = None
    min_score: Optional[float] = None
    max_score: Optional[float] = None


class AttemptAnswerPayload(CamelModel):
    """Resposta enviada pelo cliente para uma questao."""

    question_id: str
    selected_option: Optional[Union[int, str]] = Field(
        default=None,
        validation_alias=AliasChoices(
            "selectedOption", "selected_option", "selectedAnswer", "selected_answer"
        ),
        description="Texto ou indice da alternativa escolhida / resposta curta",
    )
    is_correct: Optional[bool] = Field(default=None, description="Ignorado: recalculado")


class AttemptPayload(CamelModel):
    """Corpo de submissao de tentativa.

    Todos os campos obrigatorios sao opcionais no schema para que a ausencia
    seja reportada como ``Missing required fields`` (0 e valor valido).
    """

    quiz: Optional[str] = None
    answers: Optional[list[AttemptAnswerPayload]] = None
    score: Optional[float] = None
    total_questions: Optional[int] = None
    total_score: Optional[float] = None
    time_spent: Optional[int] = None
    completed: Optional[bool] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None


class RegisterRequest(BaseModel):
    """Request de cadastro."""

    full_name: str = Field(..., validation_alias=AliasChoices("full_name", "name"))
    email: str
    password: str
    type: UserRole = UserRole.STUDENT


class LoginRequest(BaseModel):
    """Request de login."""

    email: str
    password: str


class LoginResponse(BaseModel):
    """Response de login com credencial bearer."""

    message: str
    token: str


class MessageResponse(BaseModel):
    """Response simples com mensagem."""

    message: str
