import asyncio

from django.test import SimpleTestCase

from website.debounce import Debouncer


class DebouncerTests(SimpleTestCase):
    async def test_burst_fires_once_with_last_arguments(self):
        calls = []
        debouncer = Debouncer(0.05)

        for i in range(5):
            debouncer.schedule(calls.append, i)
            await asyncio.sleep(0.01)
        self.assertTrue(debouncer.pending)

        await asyncio.sleep(0.15)
        self.assertEqual(calls, [4])
        self.assertFalse(debouncer.pending)

    async def test_quiet_gaps_let_each_call_fire(self):
        calls = []
        debouncer = Debouncer(0.03)

        debouncer.schedule(calls.append, "a")
        await asyncio.sleep(0.1)
        debouncer.schedule(calls.append, "b")
        await asyncio.sleep(0.1)

        self.assertEqual(calls, ["a", "b"])

    async def test_cancel_drops_pending_call(self):
        calls = []
        debouncer = Debouncer(0.03)

        debouncer.schedule(calls.append, "x")
        self.assertTrue(debouncer.cancel())
        await asyncio.sleep(0.1)

        self.assertEqual(calls, [])
        self.assertFalse(debouncer.cancel())

    async def test_instances_do_not_cancel_each_other(self):
        calls = []
        first, second = Debouncer(0.03), Debouncer(0.03)

        first.schedule(calls.append, "first")
        second.schedule(calls.append, "second")
        await asyncio.sleep(0.1)

        self.assertCountEqual(calls, ["first", "second"])

    async def test_per_call_delay_override(self):
        calls = []
        debouncer = Debouncer(10)

        debouncer.schedule(calls.append, "now", delay=0.01)
        await asyncio.sleep(0.05)

        self.assertEqual(calls, ["now"])

    async def test_coroutine_callback_is_run(self):
        done = asyncio.Event()

        async def callback():
            done.set()

        Debouncer(0.01).schedule(callback)
        await asyncio.wait_for(done.wait(), timeout=1)
        self.assertTrue(done.is_set())

    async def test_failing_callback_is_logged(self):
        def boom():
            raise RuntimeError("boom")

        with self.assertLogs("website.debounce", level="ERROR"):
            Debouncer(0.01).schedule(boom)
            await asyncio.sleep(0.05)
