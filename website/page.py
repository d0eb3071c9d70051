"""
In-memory model of the rendered page.

Elements are addressed by the selectors the markup exposes (``#page-content``,
``#appointments-table tbody`` ...). Each element carries its inner HTML and a
class set. Forms are tracked separately as ordered field mappings.

Writing to an element that isn't on the page is a logged no-op, the same way
a jQuery selection that matches nothing silently does nothing.
"""
import inspect
import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Set

from .constants import DOCUMENT, ROOT
from .tasks import spawn

logger = logging.getLogger(__name__)


@dataclass
class Element:
    selector: str
    html: str = ""
    classes: Set[str] = field(default_factory=set)


@dataclass
class Event:
    target: str
    type: str
    data: Dict = field(default_factory=dict)
    default_prevented: bool = False
    tasks: List = field(default_factory=list)

    def prevent_default(self):
        self.default_prevented = True


class Form:
    def __init__(self, fields: Mapping[str, str]):
        self.fields: Dict[str, str] = dict(fields)
        # field name -> error message, rendered as .is-invalid markers
        self.errors: Dict[str, str] = {}

    def __contains__(self, name):
        return name in self.fields

    def set(self, name: str, value) -> bool:
        if name not in self.fields:
            return False
        self.fields[name] = "" if value is None else str(value)
        return True

    def serialize(self) -> Dict[str, str]:
        return dict(self.fields)

    def reset(self):
        for name in self.fields:
            self.fields[name] = ""

    def clear_errors(self):
        self.errors.clear()


class Page:
    def __init__(self, elements: Iterable[str] = (), forms: Optional[Mapping[str, Mapping[str, str]]] = None):
        self.elements: Dict[str, Element] = {}
        self.forms: Dict[str, Form] = {}
        self.scroll_top = 0
        self._handlers: Dict[tuple, List[Callable]] = {}

        for selector in (ROOT, *elements):
            self.add_element(selector)
        for selector, fields in (forms or {}).items():
            self.forms[selector] = Form(fields)

    # --- elements ---

    def add_element(self, selector: str, html: str = "") -> Element:
        element = self.elements.get(selector)
        if element is None:
            element = self.elements[selector] = Element(selector, html)
        return element

    def has(self, selector: str) -> bool:
        return selector in self.elements

    def _find(self, selector: str) -> Optional[Element]:
        element = self.elements.get(selector)
        if element is None:
            logger.debug("No element matches %s", selector)
        return element

    def html(self, selector: str) -> Optional[str]:
        element = self.elements.get(selector)
        return None if element is None else element.html

    def set_html(self, selector: str, html: str) -> bool:
        element = self._find(selector)
        if element is None:
            return False
        element.html = html
        return True

    def append_html(self, selector: str, html: str) -> bool:
        element = self._find(selector)
        if element is None:
            return False
        element.html += html
        return True

    def remove_html(self, selector: str, fragment: str) -> bool:
        """Remove one occurrence of ``fragment`` from the element's markup."""
        element = self._find(selector)
        if element is None or fragment not in element.html:
            return False
        element.html = element.html.replace(fragment, "", 1)
        return True

    def empty(self, selector: str) -> bool:
        return self.set_html(selector, "")

    def has_class(self, selector: str, name: str) -> bool:
        element = self.elements.get(selector)
        return element is not None and name in element.classes

    def add_class(self, selector: str, name: str):
        element = self._find(selector)
        if element is not None:
            element.classes.add(name)

    def remove_class(self, selector: str, name: str):
        element = self._find(selector)
        if element is not None:
            element.classes.discard(name)

    def toggle_class(self, selector: str, name: str, state: Optional[bool] = None) -> bool:
        element = self._find(selector)
        if element is None:
            return False
        if state is None:
            state = name not in element.classes
        if state:
            element.classes.add(name)
        else:
            element.classes.discard(name)
        return state

    # --- forms ---

    def form(self, selector: str) -> Optional[Form]:
        return self.forms.get(selector)

    # --- events ---

    def on(self, target: str, event_type: str, handler: Callable):
        self._handlers.setdefault((target, event_type), []).append(handler)

    def off(self, target: str, event_type: str):
        self._handlers.pop((target, event_type), None)

    def trigger(self, target: str, event_type: str, **data) -> Event:
        """
        Run the handlers bound to ``target``, then the document-level ones.

        A failing handler is logged and skipped so one broken component can't
        take the others down. Coroutines returned by handlers are scheduled on
        the running loop and collected in ``event.tasks``.
        """
        event = Event(target, event_type, data)
        handlers = list(self._handlers.get((target, event_type), ()))
        if target != DOCUMENT:
            handlers += self._handlers.get((DOCUMENT, event_type), ())

        for handler in handlers:
            try:
                result = handler(event)
                if inspect.isawaitable(result):
                    event.tasks.append(spawn(result))
            except Exception:
                logger.exception("%s handler on %s failed", event_type, target)
        return event
