from django.conf import settings

from .constants import (
    DOCUMENT, HEADER, MOBILE_MENU, MOBILE_MENU_CLOSE, MOBILE_MENU_TOGGLE,
    NAVBAR_CONTENT, NAVBAR_TOGGLER, WINDOW,
)
from .page import Event, Page


class Header:
    """Sticky header, mobile menu and navbar collapse."""

    def __init__(self, page: Page, header_selector: str = HEADER, mobile_menu_selector: str = MOBILE_MENU):
        self.page = page
        self.header = header_selector
        self.mobile_menu = mobile_menu_selector

    def init(self):
        self.page.on(WINDOW, "scroll", self.on_scroll)
        self.page.on(MOBILE_MENU_TOGGLE, "click", lambda e: self.page.add_class(self.mobile_menu, "show"))
        self.page.on(MOBILE_MENU_CLOSE, "click", lambda e: self.page.remove_class(self.mobile_menu, "show"))
        self.page.on(DOCUMENT, "click", self.on_document_click)
        self.page.on(NAVBAR_TOGGLER, "click", lambda e: self.page.toggle_class(NAVBAR_CONTENT, "show"))

    def on_scroll(self, event: Event):
        self.page.scroll_top = event.data.get("scroll_top", 0)
        self.page.toggle_class(self.header, "scrolled", self.page.scroll_top > settings.STICKY_HEADER_OFFSET)

    def on_document_click(self, event: Event):
        # clicks outside the menu close it; "ancestors" lists the containers
        # the clicked element sits in
        inside = event.target == self.mobile_menu or self.mobile_menu in event.data.get("ancestors", ())
        if not inside and event.target != MOBILE_MENU_TOGGLE:
            self.page.remove_class(self.mobile_menu, "show")
