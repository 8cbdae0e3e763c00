import asyncio
import logging
import os

from postgrest.exceptions import APIError

from app.schemas.auth import UserProfile

logger = logging.getLogger(__name__)

# PostgREST: ".single()" matched zero (or several) rows
NO_MATCHING_ROW = "PGRST116"

PROFILE_LOOKUP_TIMEOUT = float(os.getenv("PROFILE_LOOKUP_TIMEOUT", "5"))
ALLOW_DEFAULT_PROFILE = os.getenv("ALLOW_DEFAULT_PROFILE", "true").lower() not in ("0", "false", "no")


def default_profile(email: str, allow_full_access: bool = True) -> UserProfile:
    """
    Profile used when no users row can be loaded for an authenticated email.

    With allow_full_access the stand-in is an active administrator holding
    "all"; otherwise it is an inactive guest with no permissions.
    """
    if allow_full_access:
        return UserProfile(
            id=0,
            first_name="Demo",
            last_name="User",
            email=email,
            role="administrator",
            status="active",
            permissions=["all"],
        )
    return UserProfile(
        id=0,
        first_name="Guest",
        last_name="User",
        email=email,
        role="guest",
        status="inactive",
        permissions=[],
    )


class ProfileResolver:
    def __init__(self, client, timeout=None, allow_default_profile=None):
        self.client = client
        self.timeout = PROFILE_LOOKUP_TIMEOUT if timeout is None else timeout
        self.allow_default_profile = (
            ALLOW_DEFAULT_PROFILE if allow_default_profile is None else allow_default_profile
        )
        # Lookups that lost the race; held so they can finish in the background
        self._abandoned = set()

    async def _lookup(self, email: str):
        response = await self.client \
            .table("users") \
            .select("*") \
            .eq("email", email) \
            .single() \
            .execute()
        return response.data

    async def resolve(self, email: str) -> UserProfile:
        logger.info(f"Resolving profile for {email}")
        lookup = asyncio.ensure_future(self._lookup(email))

        try:
            # First of lookup and timer wins; a slow lookup is left running, not cancelled
            done, _ = await asyncio.wait({lookup}, timeout=self.timeout)
            if not done:
                logger.warning(f"Profile lookup for {email} timed out after {self.timeout}s, using default profile")
                self._abandon(lookup)
                return default_profile(email, self.allow_default_profile)

            data = lookup.result()
        except asyncio.CancelledError:
            # The caller went away; the lookup keeps running on its own
            if not lookup.done():
                self._abandon(lookup)
            raise
        except APIError as e:
            if e.code == NO_MATCHING_ROW:
                logger.info(f"No users row for {email}, using default profile")
            else:
                logger.error(f"Error fetching user profile for {email}: {e.message}")
            return default_profile(email, self.allow_default_profile)
        except Exception as e:
            logger.error(f"Error fetching user profile for {email}: {str(e)}")
            return default_profile(email, self.allow_default_profile)

        try:
            profile = UserProfile.model_validate({**data, "permissions": data.get("permissions") or []})
        except Exception as e:
            logger.error(f"Unusable users row for {email}: {str(e)}")
            return default_profile(email, self.allow_default_profile)

        logger.info(f"Profile found for {email}: role={profile.role}")
        return profile

    def _abandon(self, lookup):
        self._abandoned.add(lookup)
        lookup.add_done_callback(self._forget)

    def _forget(self, lookup):
        self._abandoned.discard(lookup)
        # Consume the late outcome so it is not reported as never retrieved
        if not lookup.cancelled() and lookup.exception() is not None:
            logger.debug(f"Abandoned profile lookup failed: {lookup.exception()}")
