from fastapi import APIRouter, Depends
import secrets
from models.user import LoginRequest
from routes.deps import create_access_token, require_admin
from middleware.error_handlers import AuthError
from constants import Roles, ErrorCodes
from logging_config import get_logger
from config import config

router = APIRouter(prefix="/api/auth", tags=["Authentication"])
logger = get_logger("auth")

ADMIN_USER_ID = 1


def _credentials_match(username: str, password: str) -> bool:
    return secrets.compare_digest(username, config.ADMIN_USERNAME) and secrets.compare_digest(
        password, config.ADMIN_PASSWORD
    )


@router.post("/login")
async def login(credentials: LoginRequest):
    """Exchange the fixed admin credential pair for a 24h bearer token."""
    logger.info("Login attempt", extra={"data": {"username": credentials.username}})

    if not _credentials_match(credentials.username, credentials.password):
        logger.warning("Invalid credentials", extra={"data": {"username": credentials.username}})
        raise AuthError(401, "Invalid credentials", ErrorCodes.INVALID_CREDENTIALS)

    user = {"id": ADMIN_USER_ID, "username": credentials.username, "role": Roles.ADMIN}
    token = create_access_token(data=user)

    logger.info("Login successful", extra={"data": {"username": credentials.username}})
    return {
        "success": True,
        "token": token,
        "user": user,
        "expiresIn": f"{config.ACCESS_TOKEN_EXPIRE_HOURS}h",
    }


@router.get("/verify")
async def verify_token(claims: dict = Depends(require_admin)):
    """Lets the admin UI check whether a stored token is still accepted."""
    return {"valid": True, "user": {k: claims.get(k) for k in ("id", "username", "role")}, "exp": claims.get("exp")}
