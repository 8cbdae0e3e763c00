import logging

logger = logging.getLogger(__name__)

TABS = [
    "dashboard",
    "students",
    "attendance",
    "waitinglist",
    "forms",
    "dailynotes",
    "calendar",
    "announcements",
    "programs",
    "settings",
    "test",
]

DEFAULT_TAB = "dashboard"

# Not a view: opens the profile overlay on top of the active tab
PROFILE_TAB = "profile"


def resolve_tab(tab):
    """Feature view shown for a tab id; anything unknown shows the dashboard."""
    return tab if tab in TABS else DEFAULT_TAB


class ViewRouter:
    """
    Navigation state for one portal session.

    views maps each tab id to an async handler; on_enter maps a tab id to
    async refresh callbacks run when that tab becomes active.
    """

    def __init__(self, views, on_enter=None):
        missing = [tab for tab in TABS if tab not in views]
        if missing:
            raise ValueError(f"No view registered for tabs: {', '.join(missing)}")
        self.views = views
        self.on_enter = on_enter or {}
        self.active_tab = DEFAULT_TAB
        self.profile_open = False

    async def select(self, tab):
        if tab == PROFILE_TAB:
            self.profile_open = not self.profile_open
            return self.active_tab

        target = resolve_tab(tab)
        if target != tab:
            logger.warning(f"Unknown tab '{tab}', showing {DEFAULT_TAB}")

        entering = target != self.active_tab
        self.active_tab = target
        self.profile_open = False

        if entering:
            for refresh in self.on_enter.get(target, []):
                await refresh()
        return self.active_tab

    def close_profile(self):
        self.profile_open = False
        return self.active_tab

    def current_view(self):
        return self.views[self.active_tab]

    async def render(self, session):
        view = self.current_view()
        return {
            "tab": self.active_tab,
            "profile_open": self.profile_open,
            "data": await view(session),
        }
