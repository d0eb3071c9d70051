from unittest import mock

from website.constants import APPOINTMENTS_KEY, DEFAULT_SERVICES, SERVICES_KEY
from website.exceptions import StorageWriteError, WriteConflict
from website.models import AppointmentRecord, ServiceRecord
from website.services import AppointmentLedger, ServiceCatalog
from website.store import DualStore, decode_json, encode_json

from .base import StoreTestCase


class ServiceCatalogTests(StoreTestCase):
    def setUp(self):
        super().setUp()
        self.store = DualStore()

    def test_first_use_seeds_and_persists_defaults(self):
        services = ServiceCatalog(self.store).list()

        self.assertEqual([s.name for s in services], [s["name"] for s in DEFAULT_SERVICES])
        self.assertEqual(decode_json(SERVICES_KEY, self.store.read_durable(SERVICES_KEY)), DEFAULT_SERVICES)
        # catalog is durable-only
        self.assertIsNone(self.store.read_short_lived(SERVICES_KEY))

    def test_list_is_idempotent(self):
        catalog = ServiceCatalog(self.store)
        self.assertEqual(catalog.list(), catalog.list())

    def test_stored_catalog_wins_over_defaults(self):
        self.store.write(SERVICES_KEY, encode_json([{"name": "Boarding", "description": "Overnight stays", "icon": "fas fa-bed"}]))

        services = ServiceCatalog(self.store).list()

        self.assertEqual(services, [ServiceRecord("Boarding", "Overnight stays", "fas fa-bed")])

    def test_unparseable_catalog_falls_back_to_defaults(self):
        for raw in ("{broken", '{"name": "x"}', "[]", '[{"description": "no name"}]', "[1, 2]"):
            with self.subTest(raw=raw):
                self.store.write(SERVICES_KEY, raw)
                services = ServiceCatalog(self.store).list()
                self.assertEqual(len(services), 4)

    def test_never_empty_when_persisting_fails(self):
        with mock.patch.object(self.store.durable, "set", side_effect=OSError("disk full")):
            services = ServiceCatalog(self.store).list()
        self.assertEqual(len(services), 4)

    def test_returned_list_is_a_copy(self):
        catalog = ServiceCatalog(self.store)
        catalog.list().clear()
        self.assertEqual(len(catalog.list()), 4)


class AppointmentLedgerTests(StoreTestCase):
    def setUp(self):
        super().setUp()
        self.store = DualStore()
        self.ledger = AppointmentLedger(self.store)

    def booking(self, name):
        return {"name": name, "email": f"{name.lower()}@x.com", "pet": "Rex", "service": "Vaccination", "date": "2025-01-01"}

    def test_empty_ledger(self):
        self.assertEqual(len(self.ledger), 0)
        self.assertEqual(self.ledger.entries(), [])

    def test_append_is_visible_at_tail(self):
        for i, name in enumerate(("A", "B", "C"), start=1):
            record = self.ledger.append(self.booking(name))
            self.assertEqual(len(self.ledger), i)
            self.assertEqual(self.ledger.entries()[-1], record)

        self.assertEqual([e.name for e in self.ledger.entries()], ["A", "B", "C"])

    def test_append_mirrors_to_short_lived(self):
        self.ledger.append(self.booking("A"))

        self.assertEqual(self.store.read_short_lived(APPOINTMENTS_KEY), self.store.read_durable(APPOINTMENTS_KEY))

    def test_extra_fields_are_kept_in_storage(self):
        self.ledger.append({**self.booking("A"), "notes": "limps"})

        rows = decode_json(APPOINTMENTS_KEY, self.store.read_durable(APPOINTMENTS_KEY))
        self.assertEqual(rows[0]["notes"], "limps")

    def test_missing_fields_read_as_empty(self):
        self.ledger.append({"name": "A"})
        self.assertEqual(self.ledger.entries(), [AppointmentRecord(name="A")])

    def test_corrupt_ledger_reads_as_empty(self):
        self.store.write(APPOINTMENTS_KEY, "not json")
        self.assertEqual(self.ledger.entries(), [])

        self.ledger.append(self.booking("A"))
        self.assertEqual(len(self.ledger), 1)

    def test_mirror_failure_leaves_ledger_unchanged(self):
        self.ledger.append(self.booking("A"))

        with mock.patch.object(self.store.short_lived, "set", side_effect=OSError("quota exceeded")):
            with self.assertRaises(StorageWriteError):
                self.ledger.append(self.booking("B"))

        self.assertEqual([e.name for e in self.ledger.entries()], ["A"])
        self.ledger.append(self.booking("B"))
        self.assertEqual([e.name for e in self.ledger.entries()], ["A", "B"])

    def test_concurrent_append_is_rejected(self):
        original = self.store.read_versioned
        raced = []

        def read_then_race(key):
            seen = original(key)
            if not raced:
                # another writer lands between our read and write
                raced.append(True)
                self.store.write(APPOINTMENTS_KEY, encode_json([self.booking("Other")]))
            return seen

        with mock.patch.object(self.store, "read_versioned", side_effect=read_then_race):
            with self.assertRaises(WriteConflict):
                self.ledger.append(self.booking("A"))

        self.assertEqual([e.name for e in self.ledger.entries()], ["Other"])
