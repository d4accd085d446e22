import asyncio
import unittest

from storefront.client.cache import QueryCache, key_of

from tests.support import FakeClock

ORDERS = ("/api/orders",)
CART = ("/api/cart",)


class Counter:
    """Fetcher liczacy wywolania; opcjonalnie czeka na bramke."""

    def __init__(self, value="v", gate: asyncio.Event | None = None, error: Exception | None = None):
        self.calls = 0
        self.value = value
        self.gate = gate
        self.error = error

    async def __call__(self):
        self.calls += 1
        if self.gate is not None:
            await self.gate.wait()
        if self.error is not None:
            raise self.error
        return f"{self.value}{self.calls}"


class QueryCacheTestCase(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.clock = FakeClock()
        self.cache = QueryCache(clock=self.clock)

    async def test_concurrent_reads_share_one_fetch(self):
        gate = asyncio.Event()
        fetch = Counter(gate=gate)

        first = asyncio.create_task(self.cache.read(CART, fetch))
        second = asyncio.create_task(self.cache.read(CART, fetch))
        await asyncio.sleep(0)
        gate.set()

        results = await asyncio.gather(first, second)
        self.assertEqual(fetch.calls, 1)
        self.assertEqual(results, ["v1", "v1"])

    async def test_failure_reaches_every_caller_and_is_not_cached(self):
        gate = asyncio.Event()
        fetch = Counter(gate=gate, error=RuntimeError("boom"))

        first = asyncio.create_task(self.cache.read(CART, fetch))
        second = asyncio.create_task(self.cache.read(CART, fetch))
        await asyncio.sleep(0)
        gate.set()

        results = await asyncio.gather(first, second, return_exceptions=True)
        self.assertEqual(fetch.calls, 1)
        self.assertTrue(all(isinstance(r, RuntimeError) for r in results))
        self.assertIsNone(self.cache.peek(CART))

        ok = Counter()
        self.assertEqual(await self.cache.read(CART, ok), "v1")

    async def test_fresh_entry_is_served_until_stale_time_passes(self):
        fetch = Counter()

        self.assertEqual(await self.cache.read(ORDERS, fetch, stale_time=300), "v1")
        self.clock.advance(299)
        self.assertEqual(await self.cache.read(ORDERS, fetch, stale_time=300), "v1")
        self.assertEqual(fetch.calls, 1)

        self.clock.advance(2)
        self.assertEqual(await self.cache.read(ORDERS, fetch, stale_time=300), "v2")
        self.assertEqual(fetch.calls, 2)

    async def test_zero_stale_time_refetches_each_read(self):
        fetch = Counter()
        await self.cache.read(CART, fetch)
        await self.cache.read(CART, fetch)
        self.assertEqual(fetch.calls, 2)

    async def test_invalidate_by_prefix(self):
        fetch = Counter()
        await self.cache.read(ORDERS, fetch, stale_time=300)
        await self.cache.read(key_of("/api/orders", 5), fetch, stale_time=300)
        await self.cache.read(CART, fetch, stale_time=300)

        self.assertEqual(self.cache.invalidate(ORDERS), 2)
        self.assertTrue(self.cache.is_stale(ORDERS))
        self.assertTrue(self.cache.is_stale(("/api/orders", 5)))
        self.assertFalse(self.cache.is_stale(CART))

        # stara wartosc widoczna do nastepnego odczytu, ale odczyt pobiera od nowa
        self.assertEqual(self.cache.peek(ORDERS), "v1")
        self.assertEqual(await self.cache.read(ORDERS, fetch, stale_time=300), "v4")

    async def test_exact_invalidate_leaves_children(self):
        fetch = Counter()
        await self.cache.read(ORDERS, fetch, stale_time=300)
        await self.cache.read(key_of("/api/orders", 5), fetch, stale_time=300)

        self.assertEqual(self.cache.invalidate(ORDERS, exact=True), 1)
        self.assertFalse(self.cache.is_stale(("/api/orders", 5)))

    async def test_late_result_after_invalidate_is_dropped(self):
        gate = asyncio.Event()
        old = Counter(value="old", gate=gate)

        pending = asyncio.create_task(self.cache.read(ORDERS, old))
        await asyncio.sleep(0)
        self.cache.invalidate(ORDERS)
        gate.set()

        # czekajacy dostaje swoj wynik, ale cache go nie zapisuje
        self.assertEqual(await pending, "old1")
        self.assertIsNone(self.cache.peek(ORDERS))

        fresh = Counter(value="new")
        self.assertEqual(await self.cache.read(ORDERS, fresh), "new1")

    async def test_write_is_fresh_and_skips_fetch(self):
        self.cache.write(("/api/auth/me",), {"id": 1})

        fetch = Counter()
        self.assertEqual(await self.cache.read(("/api/auth/me",), fetch, stale_time=300), {"id": 1})
        self.assertEqual(fetch.calls, 0)

    async def test_write_supersedes_in_flight_fetch(self):
        gate = asyncio.Event()
        slow = Counter(value="fetched", gate=gate)

        pending = asyncio.create_task(self.cache.read(CART, slow, stale_time=300))
        await asyncio.sleep(0)
        self.cache.write(CART, "written")
        gate.set()
        await pending

        self.assertEqual(self.cache.peek(CART), "written")

    async def test_cancelled_reader_does_not_cancel_shared_fetch(self):
        gate = asyncio.Event()
        fetch = Counter(gate=gate)

        first = asyncio.create_task(self.cache.read(CART, fetch))
        second = asyncio.create_task(self.cache.read(CART, fetch))
        await asyncio.sleep(0)
        first.cancel()
        gate.set()

        with self.assertRaises(asyncio.CancelledError):
            await first
        self.assertEqual(await second, "v1")
        self.assertEqual(fetch.calls, 1)

    async def test_focus_revalidates_only_flagged_entries(self):
        me = Counter(value="me")
        banners = Counter(value="banner")
        await self.cache.read(("/api/auth/me",), me, stale_time=300, refetch_on_focus=True)
        await self.cache.read(("/api/banners",), banners, stale_time=300)

        await self.cache.on_focus()

        self.assertEqual(me.calls, 2)
        self.assertEqual(banners.calls, 1)
        self.assertEqual(self.cache.peek(("/api/auth/me",)), "me2")

    async def test_focus_failure_keeps_previous_value(self):
        flaky = Counter(value="me")
        await self.cache.read(("/api/auth/me",), flaky, stale_time=300, refetch_on_focus=True)
        flaky.error = RuntimeError("offline")

        await self.cache.on_focus()
        self.assertEqual(self.cache.peek(("/api/auth/me",)), "me1")

    async def test_remove_and_close(self):
        fetch = Counter()
        await self.cache.read(ORDERS, fetch, stale_time=300)
        await self.cache.read(key_of("/api/orders", 1), fetch, stale_time=300)

        self.assertEqual(self.cache.remove(ORDERS), 2)
        self.assertIsNone(self.cache.peek(ORDERS))

        self.cache.close()
        with self.assertRaises(RuntimeError):
            await self.cache.read(ORDERS, fetch)


class KeyTestCase(unittest.TestCase):
    def test_key_of(self):
        self.assertEqual(key_of("/api/cart"), ("/api/cart",))
        self.assertEqual(key_of(("/api/orders",), 5), ("/api/orders", 5))
        self.assertEqual(
            key_of("/api/banners", {"type": "hero", "active": True}),
            key_of("/api/banners", {"active": True, "type": "hero"}),
        )


if __name__ == "__main__":
    unittest.main()
