from fastapi import Depends, Header, HTTPException
from app.services.session_registry import registry
import logging

logger = logging.getLogger(__name__)


def bearer_token(authorization: str = Header(...)):
    if not authorization.startswith("Bearer "):
        raise HTTPException(status_code=401, detail="Invalid token format")
    return authorization.split(" ", 1)[1].strip()


async def portal_session(token: str = Depends(bearer_token)):
    session = registry.get(token)
    if session is None:
        logger.warning("No portal session for presented token")
        raise HTTPException(status_code=401, detail="Session not found or expired. Please sign in again.")

    # Pick up a profile resolution still running from the last auth event
    await session.context.settled()
    return session


def require_permission(permission: str):
    async def dependency(session=Depends(portal_session)):
        if not session.context.has_permission(permission):
            logger.warning(f"Permission '{permission}' denied for {session.context.identity.email if session.context.identity else 'unknown user'}")
            raise HTTPException(status_code=403, detail=f"Missing permission: {permission}")
        return session

    return dependency
