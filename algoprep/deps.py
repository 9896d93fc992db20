# algoprep/deps.py
import logging

from fastapi import Depends, Header, HTTPException

from algoprep.config import settings
from algoprep.db.base import SessionLocal
from algoprep.services.supa_auth import verify_bearer

logger = logging.getLogger(__name__)


# ----------------------------
# DB session
# ----------------------------
def get_db():
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


# ----------------------------
# current user
# ----------------------------
async def get_current_user(
    authorization: str | None = Header(None),
):
    """
    Re-checks the Supabase session on every request; nothing is cached here.
    """
    try:
        claims = await verify_bearer(authorization)
    except Exception as e:
        logger.debug("[AUTH] verify_bearer failed: %r", e)
        raise HTTPException(status_code=401, detail="Unauthorized")

    return {
        "id": claims["user_id"],
        "email": claims.get("email"),
    }


async def get_current_user_optional(
    authorization: str | None = Header(None),
):
    if not authorization:
        return None
    try:
        return await get_current_user(authorization)
    except HTTPException:
        return None


def require_admin(user=Depends(get_current_user)):
    if settings.admin_emails and user.get("email") not in settings.admin_emails:
        raise HTTPException(status_code=403, detail="Admin access required")
    return user
