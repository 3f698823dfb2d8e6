from fastapi import Request
from jose import JWTError, ExpiredSignatureError, jwt
from datetime import datetime, timedelta, timezone
from typing import Optional
from constants import Roles, ErrorCodes
from middleware.error_handlers import AuthError
from logging_config import get_logger, username_var
from database import get_db  # re-exported for routers
from config import config

logger = get_logger("auth")


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Sign `data` with iat/exp claims; defaults to the configured 24 hour window."""
    to_encode = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(hours=config.ACCESS_TOKEN_EXPIRE_HOURS))
    to_encode.update({"iat": int(now.timestamp()), "exp": int(expire.timestamp())})
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


async def require_admin(request: Request) -> dict:
    """
    Admin guard. Fails closed:
    - no Authorization header          -> 401 NO_TOKEN
    - header without a token segment   -> 401 INVALID_TOKEN_FORMAT
    - bad signature / undecodable      -> 401 INVALID_TOKEN
    - expired                          -> 401 TOKEN_EXPIRED
    - role claim other than admin      -> 403 INSUFFICIENT_PRIVILEGES
    Returns the decoded claims, also stored on request.state.user.
    """
    auth_header = request.headers.get("authorization")
    if not auth_header:
        raise AuthError(401, "Access denied. No token provided.", ErrorCodes.NO_TOKEN)

    parts = auth_header.split(" ")
    token = parts[1] if len(parts) > 1 else ""
    if not token:
        raise AuthError(401, "Access denied. Invalid token format.", ErrorCodes.INVALID_TOKEN_FORMAT)

    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except ExpiredSignatureError:
        logger.warning("Rejected expired token")
        raise AuthError(401, "Access denied. Token expired.", ErrorCodes.TOKEN_EXPIRED)
    except JWTError as e:
        logger.warning(f"JWT decode failed: {e}")
        raise AuthError(401, "Access denied. Invalid token.", ErrorCodes.INVALID_TOKEN)

    if payload.get("role") != Roles.ADMIN:
        logger.warning(
            "Access denied: admin role required",
            extra={"data": {"username": payload.get("username"), "role": payload.get("role")}}
        )
        raise AuthError(403, "Access denied. Admin privileges required.", ErrorCodes.INSUFFICIENT_PRIVILEGES)

    request.state.user = payload
    username_var.set(str(payload.get("username", "-")))
    return payload
