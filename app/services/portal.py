from app.services.daily_notes import DailyNotesStore
from app.services.programs import ClassList, TeacherList
from app.services.view_router import ViewRouter
from app.services.views import VIEWS


class PortalSession:
    """A signed-in AuthContext plus the per-session caches and navigation built on it."""

    def __init__(self, context):
        self.context = context
        self.daily_notes = DailyNotesStore(context.client)
        self.classes = ClassList(context.client)
        self.teachers = TeacherList(context.client)
        # Assignment data goes stale while other tabs edit classes and users
        self.router = ViewRouter(VIEWS, on_enter={
            "programs": [self.classes.refresh, self.teachers.refresh],
        })

    async def render(self):
        page = await self.router.render(self)
        if self.router.profile_open:
            page["profile"] = self.context.profile.model_dump() if self.context.profile else None
        return page

    def close(self):
        self.context.teardown()
