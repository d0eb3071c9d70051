import logging
from typing import Optional

from django.conf import settings

from .constants import DARK_MODE_KEY, DARK_MODE_TOGGLE, ROOT
from .exceptions import StorageError
from .notify import NotificationSurface
from .page import Event, Page
from .store import DualStore

logger = logging.getLogger(__name__)


class ThemeToggle:
    """Dark/light preference, applied as a class on the root element."""

    css_class = "dark"

    def __init__(self, page: Page, store: DualStore, surface: NotificationSurface,
                 toggle_selector: str = DARK_MODE_TOGGLE, root_selector: str = ROOT,
                 ttl_days: Optional[int] = None):
        self.page = page
        self.store = store
        self.surface = surface
        self.toggle_selector = toggle_selector
        self.root_selector = root_selector
        self.ttl_days = settings.PREFERENCE_TTL_DAYS if ttl_days is None else ttl_days

    @property
    def is_dark(self) -> bool:
        return self.page.has_class(self.root_selector, self.css_class)

    def init(self):
        self.apply(self.stored_preference())
        self.page.on(self.toggle_selector, "click", self.on_click)

    def stored_preference(self) -> bool:
        # short-lived tier first; either tier saying "true" turns dark mode on
        return any(
            value == "true"
            for value in (self.store.read_short_lived(DARK_MODE_KEY), self.store.read_durable(DARK_MODE_KEY))
        )

    def apply(self, dark: bool):
        self.page.toggle_class(self.root_selector, self.css_class, dark)

    def on_click(self, event: Event):
        self.toggle()

    def toggle(self) -> bool:
        dark = not self.is_dark
        self.apply(dark)
        try:
            self.store.write(DARK_MODE_KEY, "true" if dark else "false", ttl_days=self.ttl_days)
        except StorageError as e:
            logger.warning("Theme preference not saved: %s", e)
        self.surface.show_toast(f"Switched to {'Dark' if dark else 'Light'} Mode", "info")
        return dark
