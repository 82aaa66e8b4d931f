"""Authentication gate: token extraction, verification and minting."""

from datetime import datetime, timedelta, timezone
from typing import Dict, Mapping, Optional

from fastapi import Request
from jose import jwt
from jose.exceptions import ExpiredSignatureError, JWTClaimsError, JWTError

from common.constants import DEFAULT_TOKEN_TTL_HOURS, JWT_ALGORITHM, TOKEN_COOKIE_NAME
from common.logging_config import get_logger
from distributor.exceptions import (
    AccountInactiveError,
    AuthFailedError,
    AuthRequiredError,
    InvalidTokenError,
    TokenExpiredError,
)
from distributor.types import Credential

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "

# Only signature, exp and nbf are enforced; sub, aud, iat and jti pass through as issued.
DECODE_OPTIONS = {
    "verify_sub": False,
    "verify_aud": False,
    "verify_iat": False,
    "verify_jti": False,
}


def parse_cookie_header(cookie_header: str) -> Dict[str, str]:
    """
    Parse a raw Cookie header into a name -> value mapping.

    Args:
        cookie_header: Header value (e.g., "theme=dark; token=abc")

    Returns:
        Dictionary of cookie values; pairs without "=" are ignored
    """
    cookies = {}
    for pair in cookie_header.split(';'):
        name, sep, value = pair.strip().partition('=')
        if sep and name:
            cookies[name.strip()] = value.strip()
    return cookies


def extract_token(
    cookies: Optional[Mapping[str, str]] = None,
    cookie_header: Optional[str] = None,
    authorization: Optional[str] = None,
) -> Optional[str]:
    """
    Pick the candidate token from the request's credential sources.

    Sources are tried in order: parsed cookies, the raw Cookie header, then
    the Authorization header. The first non-empty value wins.

    Args:
        cookies: Cookies already parsed by the HTTP layer
        cookie_header: Raw Cookie header value
        authorization: Authorization header value ("Bearer <token>")

    Returns:
        Token string or None when no source carries one
    """
    if cookies and cookies.get(TOKEN_COOKIE_NAME):
        return cookies[TOKEN_COOKIE_NAME]

    if cookie_header:
        token = parse_cookie_header(cookie_header).get(TOKEN_COOKIE_NAME)
        if token:
            return token

    if authorization:
        token = authorization.strip()
        if token.startswith(BEARER_PREFIX):
            token = token[len(BEARER_PREFIX):].strip()
        if token:
            return token

    return None


def verify_token(token: str, secret: str) -> Credential:
    """
    Verify a token's signature and expiry and decode its identity claims.

    Args:
        token: Encoded JWT
        secret: HMAC signing secret

    Returns:
        Credential for an active account

    Raises:
        TokenExpiredError: Token expiry has passed
        InvalidTokenError: Token is malformed or the signature does not match
        AuthFailedError: Token is not yet valid (nbf) or fails to decode otherwise
        AccountInactiveError: Token is valid but the account is not active
    """
    try:
        claims = jwt.decode(token, secret, algorithms=[JWT_ALGORITHM], options=DECODE_OPTIONS)
    except ExpiredSignatureError as e:
        raise TokenExpiredError() from e
    except JWTClaimsError as e:
        logger.debug(f"Token claim validation failed: {e}")
        raise AuthFailedError() from e
    except JWTError as e:
        raise InvalidTokenError() from e
    except Exception as e:
        logger.warning(f"Unexpected token verification failure: {e}")
        raise AuthFailedError() from e

    if not isinstance(claims, dict):
        raise AuthFailedError()

    if not claims.get("active"):
        raise AccountInactiveError()

    return Credential(
        id=claims.get("sub"),
        username=claims.get("username"),
        active=bool(claims.get("active")),
        role=claims.get("role"),
    )


def create_access_token(
    subject: str,
    username: str,
    secret: str,
    active: bool = True,
    role: Optional[str] = None,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Mint a signed token carrying the claims the gate checks.

    Args:
        subject: Account identifier stored in "sub"
        username: Account username
        secret: HMAC signing secret
        active: Whether the account is active
        role: Optional role claim
        expires_delta: Lifetime of the token (defaults to 24 hours)

    Returns:
        Encoded JWT
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=DEFAULT_TOKEN_TTL_HOURS)

    now = datetime.now(timezone.utc)
    claims = {
        "sub": subject,
        "username": username,
        "active": active,
        "role": role,
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(claims, secret, algorithm=JWT_ALGORITHM)


async def get_current_user(request: Request) -> Credential:
    """
    FastAPI dependency that runs the authentication gate.

    Args:
        request: Incoming request

    Returns:
        Credential of the authenticated account, also stored on request.state.user

    Raises:
        AuthError: Any rejection by the gate
    """
    token = extract_token(
        cookies=request.cookies,
        cookie_header=request.headers.get("cookie"),
        authorization=request.headers.get("authorization"),
    )
    if token is None:
        raise AuthRequiredError()

    credential = verify_token(token, request.app.state.settings.jwt_secret)

    request.state.user = credential
    request.state.user_id = credential.id
    return credential
