"""User endpoints - Cadastro, login e sessao."""

import logging

from fastapi import APIRouter, Depends, Response

import app_state
from quiz.exceptions import NotFoundError, ValidationError
from quiz.models import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    UserDocument,
    new_object_id,
)
from quiz.security import (
    AuthContext,
    create_access_token,
    generate_salt,
    get_current_user,
    hash_password,
    require_admin,
    require_owner_or_admin,
    verify_password,
)
from quiz.storage import UserStore
from utils.validators import validate_email, validate_object_id, validate_password

router = APIRouter(tags=["Users"])
logger = logging.getLogger(__name__)


@router.post("/register", status_code=201, response_model=MessageResponse)
async def register(
    request: RegisterRequest,
    users: UserStore = Depends(app_state.get_user_store),
):
    """Cadastra um usuario.

    A senha e gravada como HMAC-SHA256 com salt aleatorio por usuario.
    Email duplicado retorna 400.
    """
    name = request.full_name.strip()
    if not name:
        raise ValidationError(message="Name is required", errors=["full_name"])

    email = validate_email(request.email)
    password = validate_password(request.password)
    salt = generate_salt()

    await users.create(
        UserDocument(
            _id=new_object_id(),
            name=name,
            email=email,
            password=hash_password(password, salt),
            salt=salt,
            role=request.type,
        )
    )
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=LoginResponse)
async def login(
    request: LoginRequest,
    users: UserStore = Depends(app_state.get_user_store),
):
    """Autentica e devolve a credencial bearer."""
    user = await users.get_by_email(request.email.strip().lower())
    if user is None or not verify_password(request.password, user.salt, user.password):
        logger.warning("Login falhou: credenciais invalidas")
        raise ValidationError(message="Invalid credentials")

    token = create_access_token(user, app_state.get_config())
    logger.info(f"Login: {user.id}")
    return LoginResponse(message="User logged in successfully", token=token)


@router.get("/verify-token")
async def verify_token(
    current: AuthContext = Depends(get_current_user),
    users: UserStore = Depends(app_state.get_user_store),
):
    """Confirma a credencial e devolve a identidade atual do usuario."""
    user = await users.get(current.id)
    if user is None:
        raise NotFoundError(message="User not found")
    return {
        "user": {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "role": user.role.value,
        }
    }


@router.get("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Remove o cookie ``token`` (clientes bearer apenas descartam a credencial)."""
    response.delete_cookie("token")
    return MessageResponse(message="User logged out successfully")


@router.delete("/delete/{user_id}", response_model=MessageResponse)
async def delete_user(
    user_id: str,
    current: AuthContext = Depends(get_current_user),
    users: UserStore = Depends(app_state.get_user_store),
):
    """Remove um usuario (o proprio ou qualquer um, se admin)."""
    user_id = validate_object_id(user_id, resource="user")
    require_owner_or_admin(current, user_id, "Not authorized to delete this user")

    if not await users.delete(user_id):
        raise NotFoundError(message="User not found")
    return MessageResponse(message="User deleted successfully")


@router.get("/users")
async def list_users(
    current: AuthContext = Depends(get_current_user),
    users: UserStore = Depends(app_state.get_user_store),
):
    """Lista usuarios sem hash e salt (somente admin)."""
    require_admin(current)
    return [user.public_dict() for user in await users.list_users()]
