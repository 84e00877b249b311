# backend/app/auth.py
"""
ID token verification for the Enescena platform.

Tokens arrive as ``Authorization: Bearer`` or in the ``id_token`` cookie.
With Cognito configured they are RS256 tokens checked against the user
pool's JWKS; otherwise they are HS256 tokens signed with ID_TOKEN_SECRET,
which is also how tests mint them. The role comes from the
``custom:role`` claim.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
import logging
from typing import Any, Dict, Optional, cast

from fastapi import Request
from fastapi.security import OAuth2PasswordBearer
import jwt
from jwt import PyJWKClient, PyJWTError

from .core.config import settings
from .core.enums import UserRole
from .core.exceptions import UnauthorizedException

logger = logging.getLogger(__name__)

ROLE_CLAIM = "custom:role"

oauth2_scheme_optional = OAuth2PasswordBearer(tokenUrl="auth/login", auto_error=False)


@dataclass(frozen=True)
class Identity:
    """Verified caller identity taken from an ID token."""

    email: str
    name: Optional[str] = None
    role: Optional[str] = None


def _secret_value(secret_obj: Any) -> str:
    getter = getattr(secret_obj, "get_secret_value", None)
    if callable(getter):
        return cast(str, getter())
    return cast(str, secret_obj)


def role_from_claim(claim: Optional[str]) -> Optional[str]:
    """Return the role named by a token claim, or None when it names no known role."""
    normalized = (claim or "").strip().upper()
    return normalized if normalized in UserRole.__members__ else None


def map_role_from_claim(claim: Optional[str], default: Optional[str] = None) -> str:
    """
    Resolve the role for a new user.

    The claim wins when it names a known role; otherwise the configured
    default, and ARTIST when the default is not a known role either.
    """
    return role_from_claim(claim) or role_from_claim(default) or UserRole.ARTIST.value


@lru_cache(maxsize=4)
def _jwks_client(jwks_url: str) -> PyJWKClient:
    return PyJWKClient(jwks_url, timeout=settings.jwks_timeout_seconds)


def decode_id_token(token: str) -> Dict[str, Any]:
    """
    Verify an ID token and return its claims.

    With a user pool configured the signature is checked against the pool's
    JWKS and issuer/audience must match the pool and app client. Without
    one, tokens are HS256-signed with ID_TOKEN_SECRET (local development and
    tests).

    Raises:
        PyJWTError: the token is invalid, expired or was not issued for us
    """
    if settings.cognito_jwks_url:
        signing_key = _jwks_client(settings.cognito_jwks_url).get_signing_key_from_jwt(token)
        payload = jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            issuer=settings.cognito_issuer,
            audience=settings.cognito_client_id,
        )
        return cast(Dict[str, Any], payload)

    secret = _secret_value(settings.id_token_secret)
    if not secret:
        raise PyJWTError("No identity provider or ID token secret configured")
    payload = jwt.decode(token, secret, algorithms=["HS256"], options={"verify_aud": False})
    return cast(Dict[str, Any], payload)


def create_id_token(
    email: str,
    role: Optional[str] = None,
    name: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """Mint an HS256 ID token for local development and tests."""
    to_encode: Dict[str, Any] = {"email": email}
    if role:
        to_encode[ROLE_CLAIM] = role
    if name:
        to_encode["name"] = name
    to_encode["exp"] = datetime.now(timezone.utc) + (expires_delta or timedelta(hours=1))
    return cast(
        str,
        jwt.encode(to_encode, _secret_value(settings.id_token_secret), algorithm="HS256"),
    )


def extract_token(request: Request, bearer: Optional[str] = None) -> Optional[str]:
    """Bearer header first, then the ID token cookie."""
    if bearer:
        return bearer
    return request.cookies.get(settings.id_token_cookie_name) or None


def resolve_identity(token: Optional[str]) -> Identity:
    """
    Verify a token and map its claims to an Identity.

    Raises:
        UnauthorizedException: no token, invalid token or no email claim
    """
    if not token:
        raise UnauthorizedException("Not authenticated")

    try:
        payload = decode_id_token(token)
    except PyJWTError as e:
        logger.warning(f"ID token validation error: {str(e)}")
        raise UnauthorizedException("Could not validate credentials")

    email = payload.get("email")
    if not isinstance(email, str) or not email.strip():
        logger.warning("ID token payload missing 'email' claim")
        raise UnauthorizedException("Could not validate credentials")

    name = payload.get("name") or payload.get("cognito:username")
    return Identity(
        email=email.strip().lower(),
        name=name if isinstance(name, str) else None,
        role=role_from_claim(payload.get(ROLE_CLAIM)),
    )
