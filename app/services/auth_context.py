import asyncio
import logging

from app.schemas.auth import Identity
from app.services import permissions
from app.services.profile_resolver import ProfileResolver

logger = logging.getLogger(__name__)


class AuthContext:
    """
    Auth state for one portal session: the Supabase identity, its users
    profile, and the permissions derived from it.

    Call mount() once before use and teardown() when the session ends.
    sign_in/sign_up/sign_out only talk to Supabase; identity and profile
    change when the resulting auth event comes back through the subscription.
    """

    def __init__(self, client, resolver=None):
        self.client = client
        self.resolver = resolver or ProfileResolver(client)
        self.session = None
        self.identity = None
        self.profile = None
        self.loading = True
        self._subscription = None
        # Bumped on every auth event; only the newest resolution may set the profile
        self._generation = 0
        self._pending = set()

    # -------- Lifecycle --------
    async def mount(self):
        self._subscription = self.client.auth.on_auth_state_change(self._on_auth_state_change)

        try:
            logger.info("Getting initial session")
            session = await self.client.auth.get_session()
            self._set_session(session)
            generation = self._next_generation()

            if self.identity and self.identity.email:
                await self._resolve_profile(self.identity.email, generation)
        except Exception as e:
            logger.error(f"Error getting initial session: {str(e)}")
        finally:
            # A newer auth event still resolving clears loading itself
            if not self._pending:
                self.loading = False

    def teardown(self):
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None
        for task in list(self._pending):
            task.cancel()
        self._pending.clear()

    async def settled(self):
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # -------- Auth events --------
    def _on_auth_state_change(self, event, session):
        logger.info(f"Auth state change: {event}")
        self._set_session(session)
        generation = self._next_generation()

        if self.identity and self.identity.email:
            task = asyncio.ensure_future(self._resolve_profile(self.identity.email, generation))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)
        else:
            logger.info("No email in session, clearing profile")
            self.profile = None
            self.loading = False

    def _set_session(self, session):
        self.session = session
        user = getattr(session, "user", None)
        if user is None:
            self.identity = None
        else:
            self.identity = Identity(id=str(user.id), email=getattr(user, "email", None))

    def _next_generation(self):
        self._generation += 1
        return self._generation

    async def _resolve_profile(self, email, generation):
        profile = await self.resolver.resolve(email)
        if generation != self._generation:
            logger.info(f"Discarding stale profile for {email}, a newer auth event superseded it")
            return
        self.profile = profile
        self.loading = False

    # -------- Backend operations --------
    async def sign_in(self, email: str, password: str):
        await self.client.auth.sign_in_with_password({"email": email, "password": password})

    async def sign_up(self, email: str, password: str):
        await self.client.auth.sign_up({"email": email, "password": password})

    async def sign_out(self):
        await self.client.auth.sign_out()

    # -------- Derived state --------
    @property
    def access_token(self):
        return getattr(self.session, "access_token", None)

    @property
    def permissions(self):
        return permissions.effective_permissions(self.profile)

    def has_permission(self, permission: str) -> bool:
        return permissions.has_permission(self.profile, permission)

    def has_role(self, role: str) -> bool:
        return permissions.has_role(self.profile, role)
