"""Auth Gate - Credenciais bearer (JWT) e hash de senha."""

from __future__ import annotations

import hashlib
import hmac
import logging
import secrets
from dataclasses import dataclass
from datetime import timedelta
from typing import TYPE_CHECKING, Any, Optional

import jwt
from fastapi import Header

import app_state

from ..exceptions import AuthenticationError, ForbiddenError
from ..models.documents import UserDocument, utcnow
from ..models.enums import UserRole

if TYPE_CHECKING:
    from config import AppConfig

logger = logging.getLogger(__name__)


@dataclass
class AuthContext:
    """Identidade extraida de uma credencial valida.

    Attributes:
        id: ID do usuario
        name: Nome
        email: Email
        role: Papel (admin, student, teacher)
    """

    id: str
    name: str
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role.value}


# =============================================================================
# SENHAS
# =============================================================================


def generate_salt() -> str:
    """Salt aleatorio por usuario (16 bytes em hex)."""
    return secrets.token_hex(16)


def hash_password(password: str, salt: str) -> str:
    """HMAC-SHA256 da senha com o salt como chave (hex)."""
    return hmac.new(salt.encode(), password.encode(), hashlib.sha256).hexdigest()


def verify_password(password: str, salt: str, expected_hash: str) -> bool:
    """Compara o hash em tempo constante."""
    return hmac.compare_digest(hash_password(password, salt), expected_hash)


# =============================================================================
# TOKENS
# =============================================================================


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extrai o token de ``Authorization: Bearer <token>``.

    Returns:
        Token ou None se o header estiver ausente ou em outro formato
    """
    if not authorization:
        return None
    parts = authorization.strip().split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        return None
    return parts[1]


def create_access_token(user: UserDocument, config: AppConfig) -> str:
    """Emite credencial assinada com id, name, email e role.

    Args:
        user: Usuario autenticado
        config: Configuracao com segredo, algoritmo e validade

    Returns:
        JWT codificado
    """
    now = utcnow()
    payload = {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "role": user.role.value,
        "iat": now,
        "exp": now + timedelta(days=config.token_expire_days),
    }
    return jwt.encode(payload, config.jwt_secret, algorithm=config.jwt_algorithm)


def decode_access_token(token: str, config: AppConfig) -> AuthContext:
    """Verifica assinatura e expiracao.

    Raises:
        ForbiddenError: Token invalido, expirado ou com payload incompleto
    """
    try:
        payload = jwt.decode(token, config.jwt_secret, algorithms=[config.jwt_algorithm])
        return AuthContext(
            id=payload["id"],
            name=payload["name"],
            email=payload["email"],
            role=UserRole(payload["role"]),
        )
    except jwt.ExpiredSignatureError as e:
        logger.warning("Token expirado")
        raise ForbiddenError(message="Token expired") from e
    except (jwt.InvalidTokenError, KeyError, ValueError) as e:
        logger.warning(f"Token invalido: {type(e).__name__}")
        raise ForbiddenError(message="Invalid token") from e


async def get_current_user(authorization: Optional[str] = Header(default=None)) -> AuthContext:
    """Dependency FastAPI: identidade da requisicao.

    Raises:
        AuthenticationError: Sem credencial (401)
        ForbiddenError: Credencial invalida ou expirada (403)
    """
    token = extract_bearer_token(authorization)
    if token is None:
        raise AuthenticationError(message="Authentication required")
    return decode_access_token(token, app_state.get_config())


# =============================================================================
# AUTORIZACAO
# =============================================================================


def require_owner_or_admin(
    user: AuthContext, owner_id: str, message: str = "Not authorized"
) -> None:
    """Permite apenas o dono do recurso ou um admin."""
    if user.id != owner_id and not user.is_admin:
        logger.warning(f"Acesso negado: user={user.id} owner={owner_id}")
        raise ForbiddenError(message=message)


def require_admin(user: AuthContext) -> None:
    if not user.is_admin:
        raise ForbiddenError(message="Admin access required")
