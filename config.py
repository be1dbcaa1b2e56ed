# =============================================================================
# CONFIGURACAO DA QUIZ API
# =============================================================================
# Valores lidos do ambiente (e de um .env local, se existir) uma unica vez no
# startup. Defaults servem para desenvolvimento.
# =============================================================================

import logging
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_JWT_SECRET = "dev-secret-change-me"


def _split_csv(value: str) -> list[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


@dataclass
class AppConfig:
    """Configuracao da aplicacao.

    Attributes:
        jwt_secret: Segredo de assinatura das credenciais
        jwt_algorithm: Algoritmo JWT (HS256)
        token_expire_days: Validade da credencial em dias
        database_path: Arquivo SQLite (``:memory:`` aceito)
        cors_origins: Origens permitidas para o frontend
        log_level: Nivel do logger raiz
        environment: development, test ou production
        host: Host do uvicorn
        port: Porta do uvicorn
    """

    jwt_secret: str = DEFAULT_JWT_SECRET
    jwt_algorithm: str = "HS256"
    token_expire_days: int = 30
    database_path: str = "data/quiz.db"
    cors_origins: list[str] = field(default_factory=lambda: ["http://localhost:5173"])
    log_level: str = "INFO"
    environment: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls, load_dotenv_file: bool = True) -> "AppConfig":
        """Carrega configuracao das variaveis de ambiente.

        Args:
            load_dotenv_file: Carrega ``.env`` antes (sem sobrescrever o ambiente)
        """
        if load_dotenv_file:
            load_dotenv()

        config = cls(
            jwt_secret=os.getenv("JWT_SECRET", DEFAULT_JWT_SECRET),
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            token_expire_days=int(os.getenv("TOKEN_EXPIRE_DAYS", "30")),
            database_path=os.getenv("DATABASE_PATH", "data/quiz.db"),
            cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "http://localhost:5173")),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            environment=os.getenv("ENVIRONMENT", "development"),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "3000")),
        )

        if config.jwt_secret == DEFAULT_JWT_SECRET:
            logger.warning("JWT_SECRET nao definido, usando segredo de desenvolvimento")

        return config

    def to_dict(self) -> dict:
        """Representacao sem o segredo (para logs e /health)."""
        return {
            "jwt_algorithm": self.jwt_algorithm,
            "token_expire_days": self.token_expire_days,
            "database_path": self.database_path,
            "cors_origins": self.cors_origins,
            "log_level": self.log_level,
            "environment": self.environment,
        }
