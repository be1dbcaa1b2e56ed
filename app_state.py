"""Core module - shared state and dependency helpers."""

from __future__ import annotations

import logging
from typing import Optional

from config import AppConfig
from quiz.engine import AttemptScoringEngine, QuizAnalyticsEngine, QuizValidator
from quiz.exceptions import PersistenceError
from quiz.storage import AttemptStore, Database, QuizStore, UserStore

logger = logging.getLogger(__name__)

# =============================================================================
# STATE
# =============================================================================

config: Optional[AppConfig] = None
database: Optional[Database] = None


# =============================================================================
# LIFECYCLE
# =============================================================================


def init(app_config: Optional[AppConfig] = None) -> Database:
    """Abre o banco no startup (chamado pelo lifespan)."""
    global config, database

    config = app_config or AppConfig.from_env()
    if database is not None and database.is_open:
        database.close()

    database = Database(config.database_path).open()
    logger.info(f"Database aberto: {config.database_path} ({config.environment})")
    return database


def cleanup() -> None:
    """Fecha o banco no shutdown."""
    global database

    if database is not None:
        database.close()
        logger.info("Database fechado")
    database = None


def get_config() -> AppConfig:
    """Configuracao ativa (carrega do ambiente se o app ainda nao iniciou)."""
    global config
    if config is None:
        config = AppConfig.from_env()
    return config


def get_database() -> Database:
    if database is None or not database.is_open:
        raise PersistenceError(message="Database not initialized")
    return database


# =============================================================================
# DEPENDENCIES
# =============================================================================


def get_quiz_store() -> QuizStore:
    return QuizStore(get_database())


def get_attempt_store() -> AttemptStore:
    return AttemptStore(get_database())


def get_user_store() -> UserStore:
    return UserStore(get_database())


def get_quiz_validator() -> QuizValidator:
    return QuizValidator()


def get_scoring_engine() -> AttemptScoringEngine:
    return AttemptScoringEngine()


def get_analytics_engine() -> QuizAnalyticsEngine:
    return QuizAnalyticsEngine()
