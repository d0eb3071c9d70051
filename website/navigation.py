import asyncio
import itertools
import logging
from dataclasses import dataclass
from typing import Optional
from urllib.parse import urljoin

import requests as http_requests
from django.conf import settings

from .constants import CONTENT_REGION, HEADER, MOBILE_MENU, NAV_LINK, NAV_MESSAGE
from .exceptions import NavigationError, ProtocolError, TransportError
from .notify import NotificationSurface
from .page import Event, Page
from .tasks import CancelToken

logger = logging.getLogger(__name__)

FAILED_TO_LOAD = "Failed to load content"
NAVIGATION_FAILED = "Navigation failed"


@dataclass(frozen=True)
class NavigationResponse:
    status: str
    html: str = ""
    message: str = ""


def parse_navigation_response(url: str, body) -> NavigationResponse:
    """
    Validate a navigation body: ``{"status": "success", "html": str}`` or
    ``{"status": "error", "message": str}``. Anything else is a ProtocolError.
    """
    if not isinstance(body, dict):
        raise ProtocolError(url, "response body is not an object")

    status = body.get("status")
    if status == "success":
        html = body.get("html")
        if not isinstance(html, str):
            raise ProtocolError(url, "success response without html")
        return NavigationResponse("success", html=html)
    if status == "error":
        message = body.get("message")
        return NavigationResponse("error", message=message if isinstance(message, str) else "")
    raise ProtocolError(url, f"unknown status {status!r}")


class NavigationDispatcher:
    """
    Turns link clicks into JSON fetches whose html replaces the content region.

    Every navigation gets a sequence number and a cancel token. Starting a new
    navigation cancels the previous token, and a response only reaches the
    page if its token is live and its number is above the last one applied,
    so a slow stale response can never overwrite newer content.
    The spinner is removed on every exit path.
    """

    def __init__(self, page: Page, surface: NotificationSurface,
                 content_selector: str = CONTENT_REGION, spinner_selector: str = HEADER,
                 message_selector: str = NAV_MESSAGE, mobile_menu_selector: str = MOBILE_MENU,
                 base_url: Optional[str] = None, timeout: Optional[float] = None):
        self.page = page
        self.surface = surface
        self.content_selector = content_selector
        self.spinner_selector = spinner_selector
        self.message_selector = message_selector
        self.mobile_menu_selector = mobile_menu_selector
        self.base_url = base_url or settings.SITE_URL
        self.timeout = settings.NAVIGATION_TIMEOUT if timeout is None else timeout

        self._sequence = itertools.count(1)
        self._applied = 0
        self._token: Optional[CancelToken] = None

    def bind(self, link_selector: str = NAV_LINK):
        self.page.on(link_selector, "click", self.on_click)

    def on_click(self, event: Event):
        event.prevent_default()
        return self.navigate(event.data["href"])

    async def navigate(self, url: str) -> bool:
        """Returns True when the fetched html was written to the content region."""
        seq = next(self._sequence)
        if self._token is not None:
            self._token.cancel()
        token = self._token = CancelToken()

        spinner = self.surface.show_spinner(self.spinner_selector, compact=True)
        try:
            try:
                response = await self.fetch(url)
            except NavigationError as e:
                if token.cancelled:
                    logger.debug("Dropping failure of superseded navigation #%s: %s", seq, e)
                    return False
                logger.error("AJAX navigation error: %s", e)
                self.surface.show_alert(self.message_selector, NAVIGATION_FAILED, "danger")
                return False
            return self.dispatch(seq, token, response)
        finally:
            self.surface.hide_spinner(self.spinner_selector, spinner)
            if self._token is token:
                self._token = None

    def dispatch(self, seq: int, token: CancelToken, response: NavigationResponse) -> bool:
        if token.cancelled or seq <= self._applied:
            logger.debug("Discarding stale navigation response #%s", seq)
            return False

        if response.status == "success":
            if not response.html:
                # nothing to show; content region stays as it was
                logger.debug("Navigation response #%s carried empty html", seq)
                return False
            self._applied = seq
            self.page.set_html(self.content_selector, response.html)
            self.page.remove_class(self.mobile_menu_selector, "show")
            return True

        logger.warning("API error: %s", response.message)
        self.surface.show_alert(self.message_selector, response.message or FAILED_TO_LOAD, "danger")
        return False

    async def fetch(self, url: str) -> NavigationResponse:
        return await asyncio.to_thread(self.get_json, url)

    def get_json(self, url: str) -> NavigationResponse:
        absolute = urljoin(self.base_url, url)
        try:
            r = http_requests.get(
                absolute,
                headers={"Accept": "application/json", "X-Requested-With": "XMLHttpRequest"},
                timeout=self.timeout,
            )
            r.raise_for_status()
        except http_requests.RequestException as e:
            raise TransportError(absolute, e) from e

        try:
            body = r.json()
        except ValueError as e:
            raise ProtocolError(absolute, "response body is not JSON") from e
        return parse_navigation_response(absolute, body)
