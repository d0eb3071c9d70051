import logging
from typing import Optional

from django.template.loader import render_to_string

from .constants import APPOINTMENT_FORM, APPOINTMENTS_BODY, FORM_MESSAGE, LAST_FORM_DATA_KEY
from .exceptions import StorageDecodeError, StorageError
from .models import AppointmentRecord
from .notify import NotificationSurface
from .page import Event, Page
from .services import AppointmentLedger
from .store import DualStore, Precedence, decode_json

logger = logging.getLogger(__name__)

BOOKED = "Appointment booked successfully!"
SAVED_LOCALLY = "Appointment saved locally!"
NOT_SAVED = "Your appointment could not be saved. Please try again."


class FormSubmissionPipeline:
    """
    Booking form handling.
    Used by:
      - the appointment form's submit event
      - startup, to restore the last form data and draw the appointments table
    """

    def __init__(self, page: Page, surface: NotificationSurface, ledger: AppointmentLedger,
                 form_selector: str = APPOINTMENT_FORM, message_selector: str = FORM_MESSAGE,
                 table_selector: str = APPOINTMENTS_BODY):
        self.page = page
        self.surface = surface
        self.ledger = ledger
        self.form_selector = form_selector
        self.message_selector = message_selector
        self.table_selector = table_selector

    def bind(self):
        self.page.on(self.form_selector, "submit", self.on_submit)

    def on_submit(self, event: Event):
        event.prevent_default()
        self.submit()

    def submit(self) -> Optional[AppointmentRecord]:
        """
        Save the form as a new ledger entry.
        The confirmation only shows once the entry is persisted; on a storage
        failure the form keeps its values and an error alert is shown instead.
        """
        form = self.page.form(self.form_selector)
        if form is None:
            logger.debug("No form matches %s", self.form_selector)
            return None

        form.clear_errors()
        data = form.serialize()

        # Empty fields aren't rejected here; required-field checks happen
        # before submit ever fires.
        try:
            record = self.ledger.append(data)
        except StorageError as e:
            logger.error("Appointment not saved: %s", e)
            self.surface.show_alert(self.message_selector, NOT_SAVED, "danger")
            return None

        self.surface.show_alert(self.message_selector, BOOKED, "success")
        self.surface.show_toast(SAVED_LOCALLY, "success")
        form.reset()
        self.render_table()
        return record

    def render_table(self) -> bool:
        html = render_to_string("website/partials/appointment_rows.html", {
            "appointments": self.ledger.entries(),
        })
        return self.page.set_html(self.table_selector, html)

    def restore(self, store: DualStore) -> int:
        """Fill the form from ``lastFormData``; returns how many fields were set."""
        form = self.page.form(self.form_selector)
        if form is None:
            return 0

        raw = store.read(LAST_FORM_DATA_KEY, Precedence.DURABLE_FIRST)
        try:
            data = decode_json(LAST_FORM_DATA_KEY, raw)
        except StorageDecodeError as e:
            logger.warning("Ignoring saved form data: %s", e)
            return 0
        if not isinstance(data, dict):
            return 0

        return sum(1 for name, value in data.items() if form.set(name, value))
