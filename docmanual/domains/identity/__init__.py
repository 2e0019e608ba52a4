from docmanual.domains.identity.entities import User, ADMIN_ROLE
from docmanual.domains.identity.schemas import (
    UserLogin, SessionUser, LoginUser, LoginResponse, AuthStatus,
    PasswordChange, SuccessResponse
)
from docmanual.domains.identity.services import IdentityService

__all__ = [
    "User", "ADMIN_ROLE",
    "UserLogin", "SessionUser", "LoginUser", "LoginResponse", "AuthStatus",
    "PasswordChange", "SuccessResponse",
    "IdentityService"
]
