import logging
import time

import jwt

logger = logging.getLogger(__name__)


def token_expiry(token):
    """Expiry (epoch seconds) of a Supabase access token, or None if unreadable."""
    try:
        # Supabase issued and verified the token; only the exp claim is read here
        claims = jwt.decode(token, options={"verify_signature": False})
    except jwt.InvalidTokenError:
        return None
    exp = claims.get("exp")
    return exp if isinstance(exp, (int, float)) else None


class SessionRegistry:
    """Signed-in portal sessions keyed by their Supabase access token."""

    def __init__(self):
        self._sessions = {}

    def __len__(self):
        return len(self._sessions)

    def add(self, session):
        token = session.context.access_token
        if not token:
            raise ValueError("Cannot register a session without an access token")
        self._sessions[token] = session
        identity = session.context.identity
        logger.info(f"Registered portal session for {identity.email if identity else 'unknown user'}")
        return token

    def get(self, token):
        session = self._sessions.get(token)
        if session is None:
            return None

        exp = token_expiry(token)
        if exp is not None and exp <= time.time():
            logger.info("Portal session expired, dropping it")
            self.remove(token)
            return None
        return session

    def remove(self, token):
        session = self._sessions.pop(token, None)
        if session is not None:
            session.close()
        return session

    def clear(self):
        for token in list(self._sessions):
            self.remove(token)


registry = SessionRegistry()
