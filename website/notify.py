import asyncio
import itertools
import logging
from typing import Dict, List, Optional

from django.conf import settings
from django.template.loader import render_to_string

from .constants import TOAST_CONTAINER
from .page import Page

logger = logging.getLogger(__name__)


class NotificationSurface:
    """Spinners, alerts and toasts rendered into named page regions."""

    def __init__(self, page: Page, toast_container: str = TOAST_CONTAINER):
        self.page = page
        self.toast_container = toast_container
        self._toasts: Dict[str, str] = {}
        self._toast_ids = itertools.count(1)

    def show_spinner(self, selector: str, compact: bool = False) -> Optional[str]:
        """
        Append a spinner to ``selector`` and return its markup, which the
        caller hands back to ``hide_spinner``. Returns None if the region is
        missing.
        """
        fragment = render_to_string("website/partials/spinner.html", {"compact": compact})
        if not self.page.append_html(selector, fragment):
            return None
        return fragment

    def hide_spinner(self, selector: str, fragment: Optional[str]) -> bool:
        if fragment is None:
            return False
        return self.page.remove_html(selector, fragment)

    def show_alert(self, selector: str, message: str, level: str = "success") -> bool:
        html = render_to_string("website/partials/alert.html", {"message": message, "level": level})
        return self.page.set_html(selector, html)

    def show_toast(self, message: str, level: str = "info", delay_ms: Optional[int] = None) -> str:
        if delay_ms is None:
            delay_ms = settings.TOAST_DELAY_MS
        toast_id = f"toast-{next(self._toast_ids)}"
        fragment = render_to_string("website/partials/toast.html", {
            "toast_id": toast_id,
            "message": message,
            "level": level,
            "delay": delay_ms,
        })
        if not self.page.append_html(self.toast_container, fragment):
            logger.info("Toast (no container): %s", message)
            return toast_id

        self._toasts[toast_id] = fragment
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            # no loop to time it out on; stays until dismissed
            pass
        else:
            loop.call_later(delay_ms / 1000, self.dismiss_toast, toast_id)
        return toast_id

    def dismiss_toast(self, toast_id: str) -> bool:
        fragment = self._toasts.pop(toast_id, None)
        if fragment is None:
            return False
        return self.page.remove_html(self.toast_container, fragment)

    @property
    def toasts(self) -> List[str]:
        return list(self._toasts)
