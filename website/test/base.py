from django.core.cache import caches
from django.test import SimpleTestCase, override_settings

from website.constants import (
    APPOINTMENT_FIELDS, APPOINTMENT_FORM, APPOINTMENTS_BODY, CONTENT_REGION, FORM_MESSAGE,
    HEADER, MOBILE_MENU, NAV_MESSAGE, NAVBAR_CONTENT, SEARCH_RESULTS, SERVICES_REGION,
    TOAST_CONTAINER,
)
from website.page import Page

TEST_CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-short-lived",
    },
    "durable": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
        "LOCATION": "test-durable",
        "TIMEOUT": None,
    },
}

REGIONS = (
    HEADER, CONTENT_REGION, NAV_MESSAGE, SEARCH_RESULTS, SERVICES_REGION, APPOINTMENTS_BODY,
    FORM_MESSAGE, TOAST_CONTAINER, MOBILE_MENU, NAVBAR_CONTENT, "#ajax-target",
)


def make_page(regions=REGIONS, with_form=True):
    forms = {APPOINTMENT_FORM: dict.fromkeys(APPOINTMENT_FIELDS, "")} if with_form else {}
    return Page(regions, forms=forms)


@override_settings(
    CACHES=TEST_CACHES,
    SITE_URL="http://testserver",
    SEARCH_DEBOUNCE_MS=300,
    TOAST_DELAY_MS=3000,
    PREFERENCE_TTL_DAYS=30,
    MIRROR_TTL_DAYS=7,
)
class StoreTestCase(SimpleTestCase):
    """Runs every test against empty in-memory tiers."""

    def setUp(self):
        super().setUp()
        caches["default"].clear()
        caches["durable"].clear()
