# algoprep/services/supa_auth.py
from functools import lru_cache
from typing import Dict
import logging

from jose import JWTError, jwt
from supabase import create_client, Client

from algoprep.config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_supabase() -> Client:
    if not settings.supabase_url or not settings.supabase_anon_key:
        raise RuntimeError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")
    return create_client(settings.supabase_url, settings.supabase_anon_key)


def _extract_token(authorization: str | None) -> str:
    if not authorization:
        raise ValueError("missing Authorization header")

    parts = authorization.split(" ", 1)
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise ValueError("invalid Authorization header")

    token = parts[1].strip()
    if not token:
        raise ValueError("invalid Authorization header")
    return token


def _decode_local(token: str) -> Dict[str, str | None]:
    decode_kwargs = {
        "key": settings.supabase_jwt_secret,
        "algorithms": ["HS256"],  # Supabase access token alg
    }
    if settings.supabase_jwt_audience:
        decode_kwargs["audience"] = settings.supabase_jwt_audience
    if settings.supabase_issuer:
        decode_kwargs["issuer"] = settings.supabase_issuer

    try:
        claims = jwt.decode(token, **decode_kwargs)
    except JWTError as e:
        logger.info("[AUTH] JWT decode failed: %s", e)
        raise ValueError("invalid token") from e

    user_id = claims.get("sub")
    if not user_id:
        raise ValueError("invalid token: missing sub")

    return {"user_id": user_id, "email": claims.get("email")}


def _fetch_remote(token: str) -> Dict[str, str | None]:
    # no shared secret configured: ask Supabase Auth who owns the token
    try:
        res = get_supabase().auth.get_user(token)
    except Exception as e:
        logger.info("[AUTH] supabase get_user failed: %r", e)
        raise ValueError("invalid token") from e

    user = getattr(res, "user", None)
    if user is None:
        raise ValueError("invalid token")

    return {"user_id": str(user.id), "email": getattr(user, "email", None)}


async def verify_bearer(authorization: str | None) -> Dict[str, str | None]:
    """
    - take the token out of `Authorization: Bearer <access_token>`
    - verify it with the Supabase JWT secret (HS256), or with Supabase Auth
      itself when no secret is configured
    - return the basic claims (user_id, email)
    """
    token = _extract_token(authorization)

    if settings.supabase_jwt_secret:
        return _decode_local(token)
    return _fetch_remote(token)
