# =============================================================================
# CONFTEST - Pytest Fixtures Globais
# =============================================================================
# Coloca a raiz do projeto no path e isola o ambiente de cada teste
# =============================================================================

import os
import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Adicionar root ao path
sys.path.insert(0, str(Path(__file__).parent))


# =============================================================================
# FIXTURES DE AMBIENTE
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_env():
    """Configura variáveis de ambiente para testes."""
    env_vars = {
        "JWT_SECRET": "test-secret-for-quiz-api",
        "JWT_ALGORITHM": "HS256",
        "TOKEN_EXPIRE_DAYS": "30",
        "DATABASE_PATH": ":memory:",
        "ENVIRONMENT": "test",
        "LOG_LEVEL": "ERROR",
    }
    with patch.dict(os.environ, env_vars):
        yield


@pytest.fixture
def temp_db_path(tmp_path: Path) -> Path:
    """Retorna path temporário para banco de dados."""
    return tmp_path / "test_quiz.db"


# =============================================================================
# FIXTURES UTILITÁRIAS
# =============================================================================


@pytest.fixture
def capture_logs(caplog):
    """Captura logs durante testes."""
    import logging

    caplog.set_level(logging.DEBUG)
    return caplog
