"""Quiz Security - Auth Gate."""

from .auth import (
    AuthContext,
    create_access_token,
    decode_access_token,
    extract_bearer_token,
    generate_salt,
    get_current_user,
    hash_password,
    require_admin,
    require_owner_or_admin,
    verify_password,
)

__all__ = [
    "AuthContext",
    "create_access_token",
    "decode_access_token",
    "extract_bearer_token",
    "generate_salt",
    "get_current_user",
    "hash_password",
    "require_admin",
    "require_owner_or_admin",
    "verify_password",
]
