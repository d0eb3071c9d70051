import logging
from typing import List, Optional

from django.conf import settings
from django.template.loader import render_to_string

from .constants import LAST_SEARCH_SUFFIX, SEARCH_INPUT, SEARCH_RESULTS
from .debounce import Debouncer
from .exceptions import StorageError
from .models import ServiceRecord
from .page import Event, Page
from .services import ServiceCatalog
from .store import DualStore

logger = logging.getLogger(__name__)


class SearchPipeline:
    """
    Search-as-you-type over the service catalog.

    Keystrokes go through a debouncer; only the last query of a burst runs.
    Filtering is local: ``endpoint`` only namespaces the remembered
    "last search" value and is never requested over the wire.
    """

    def __init__(self, page: Page, store: DualStore, catalog: ServiceCatalog,
                 input_selector: str = SEARCH_INPUT, results_selector: str = SEARCH_RESULTS,
                 endpoint: Optional[str] = None, delay_ms: Optional[int] = None):
        self.page = page
        self.store = store
        self.catalog = catalog
        self.input_selector = input_selector
        self.results_selector = results_selector
        self.endpoint = endpoint or settings.SEARCH_ENDPOINT
        delay_ms = settings.SEARCH_DEBOUNCE_MS if delay_ms is None else delay_ms
        self.debouncer = Debouncer(delay_ms / 1000)

    @property
    def last_search_key(self) -> str:
        return self.endpoint + LAST_SEARCH_SUFFIX

    def bind(self):
        self.page.on(self.input_selector, "input", self.on_input)

    def on_input(self, event: Event):
        self.debouncer.schedule(self.run, event.data.get("value") or "")

    def run(self, query: str) -> List[ServiceRecord]:
        if not query:
            self.page.empty(self.results_selector)
            return []

        try:
            self.store.write(self.last_search_key, query, ttl_days=settings.MIRROR_TTL_DAYS)
        except StorageError as e:
            logger.warning("Could not remember last search: %s", e)

        needle = query.lower()
        matches = [s for s in self.catalog.list() if needle in s.name.lower()]
        self.render(matches)
        logger.debug("Search %r matched %s service(s)", query, len(matches))
        return matches

    def render(self, services: List[ServiceRecord]):
        html = render_to_string("website/partials/search_results.html", {"services": services})
        self.page.set_html(self.results_selector, html)
