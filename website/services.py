import logging
from typing import Dict, List, Mapping, Optional

from django.conf import settings

from .constants import APPOINTMENTS_KEY, DEFAULT_SERVICES, SERVICES_KEY
from .exceptions import StorageDecodeError, StorageWriteError
from .models import AppointmentRecord, ServiceRecord
from .store import DualStore, Precedence, decode_json, encode_json

logger = logging.getLogger(__name__)


def _decode_services(raw: Optional[str]) -> List[ServiceRecord]:
    data = decode_json(SERVICES_KEY, raw)
    if data is None:
        return []
    if not isinstance(data, list):
        raise StorageDecodeError(SERVICES_KEY, f"expected a list, got {type(data).__name__}")
    try:
        return [ServiceRecord.from_dict(item) for item in data]
    except (KeyError, TypeError, AttributeError) as e:
        raise StorageDecodeError(SERVICES_KEY, e) from e


def _decode_appointments(raw: Optional[str]) -> List[Dict]:
    data = decode_json(APPOINTMENTS_KEY, raw)
    if data is None:
        return []
    if not isinstance(data, list) or not all(isinstance(row, dict) for row in data):
        raise StorageDecodeError(APPOINTMENTS_KEY, "expected a list of objects")
    return data


class ServiceCatalog:
    """
    Read-through cache of service listings.

    The first ``list()`` reads the durable tier; when nothing usable is there
    the built-in defaults are used and persisted straight away. Later calls
    return that same sequence for the rest of the session.
    """

    def __init__(self, store: DualStore):
        self.store = store
        self._services: Optional[List[ServiceRecord]] = None

    def list(self) -> List[ServiceRecord]:
        if self._services is None:
            self._services = self._load()
        return list(self._services)

    def _load(self) -> List[ServiceRecord]:
        try:
            services = _decode_services(self.store.read(SERVICES_KEY, Precedence.DURABLE_FIRST))
        except StorageDecodeError as e:
            logger.warning("Ignoring stored services: %s", e)
            services = []

        if services:
            return services

        services = [ServiceRecord.from_dict(s) for s in DEFAULT_SERVICES]
        try:
            self.store.write(SERVICES_KEY, encode_json([s.to_dict() for s in services]))
        except StorageWriteError as e:
            logger.warning("Could not persist default services: %s", e)
        return services


class AppointmentLedger:
    """
    Append-only list of booking submissions.

    Each append reads the whole list, pushes the new row and writes the list
    back (durable tier, mirrored to the short-lived tier). The write is
    conditional on the version that was read, so another append made from the
    same event loop in between surfaces as ``WriteConflict`` instead of
    silently dropping a row. The version check and the cache write are not
    atomic; writers in other processes sharing the durable cache aren't
    covered.
    """

    def __init__(self, store: DualStore, mirror_ttl_days: Optional[int] = None):
        self.store = store
        self.mirror_ttl_days = mirror_ttl_days

    def _rows(self, raw: Optional[str]) -> List[Dict]:
        try:
            return _decode_appointments(raw)
        except StorageDecodeError as e:
            logger.warning("Ignoring stored appointments: %s", e)
            return []

    def entries(self) -> List[AppointmentRecord]:
        rows = self._rows(self.store.read(APPOINTMENTS_KEY, Precedence.DURABLE_FIRST))
        return [AppointmentRecord.from_dict(row) for row in rows]

    def __len__(self):
        return len(self.entries())

    def append(self, data: Mapping[str, str]) -> AppointmentRecord:
        current = self.store.read_versioned(APPOINTMENTS_KEY)
        rows = self._rows(current.value)
        rows.append(dict(data))

        ttl = self.mirror_ttl_days if self.mirror_ttl_days is not None else settings.MIRROR_TTL_DAYS
        self.store.write(
            APPOINTMENTS_KEY,
            encode_json(rows),
            ttl_days=ttl,
            expected_version=current.version,
        )
        logger.info("Appointment #%s saved locally", len(rows))
        return AppointmentRecord.from_dict(data)
