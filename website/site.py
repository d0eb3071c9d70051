import logging
from typing import List, Optional

from django.template.loader import render_to_string

from .constants import AJAX_BUTTON, APPOINTMENTS_BODY, SERVICES_REGION, TOAST_CONTAINER
from .forms import FormSubmissionPipeline
from .header import Header
from .navigation import NavigationDispatcher
from .notify import NotificationSurface
from .page import Event, Page
from .search import SearchPipeline
from .services import AppointmentLedger, ServiceCatalog
from .store import DualStore
from .theme import ThemeToggle

logger = logging.getLogger(__name__)


class Site:
    """
    Wires every page behavior onto a Page and starts them.

    Each component starts on its own: if one raises during start-up it is
    logged and recorded in ``failed``, and the rest keep working.
    """

    def __init__(self, page: Page, namespace: str = "default", store: Optional[DualStore] = None):
        self.page = page
        self.store = store or DualStore(namespace)
        self.surface = NotificationSurface(page)
        self.catalog = ServiceCatalog(self.store)
        self.ledger = AppointmentLedger(self.store)

        self.theme = ThemeToggle(page, self.store, self.surface)
        self.header = Header(page)
        self.navigation = NavigationDispatcher(page, self.surface)
        self.search = SearchPipeline(page, self.store, self.catalog)
        self.forms = FormSubmissionPipeline(page, self.surface, self.ledger)
        self.failed: List[str] = []

    def start(self) -> "Site":
        self.page.add_element(TOAST_CONTAINER)

        steps = (
            ("theme", self.theme.init),
            ("header", self.header.init),
            ("navigation", self.navigation.bind),
            ("ajax buttons", self.bind_ajax_buttons),
            ("forms", self.init_forms),
            ("search", self.search.bind),
            ("services grid", self.render_services),
            ("appointments table", self.init_appointments_table),
        )
        for name, step in steps:
            try:
                step()
            except Exception:
                logger.exception("Could not start %s", name)
                self.failed.append(name)
        return self

    def init_forms(self):
        self.forms.bind()
        self.forms.restore(self.store)

    def bind_ajax_buttons(self, selector: str = AJAX_BUTTON):
        self.page.on(selector, "click", self.on_ajax_button)

    def on_ajax_button(self, event: Event):
        event.prevent_default()
        target = event.data.get("target")
        if target:
            self.surface.show_alert(target, "Button clicked (simulated)", "info")

    def render_services(self) -> bool:
        html = render_to_string("website/partials/services_grid.html", {"services": self.catalog.list()})
        return self.page.set_html(SERVICES_REGION, html)

    def init_appointments_table(self):
        if not self.page.has(APPOINTMENTS_BODY):
            return
        self.forms.render_table()
