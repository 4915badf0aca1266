import unittest

from pydantic import ValidationError

from app.data.mock_quotes import DEFAULT_WATCHLIST, MOCK_QUOTES
from app.errors import QuoteFetchError
from app.services.quote_store import MockQuoteStore


class MockQuoteStoreTest(unittest.TestCase):
    def test_table_has_five_symbols(self):
        self.assertEqual(sorted(MOCK_QUOTES), sorted(DEFAULT_WATCHLIST))
        aapl = MOCK_QUOTES["AAPL"]
        self.assertEqual(aapl.name, "Apple Inc.")
        self.assertEqual(aapl.price, 178.25)
        self.assertEqual(aapl.volume, 45123456)
        self.assertEqual(MOCK_QUOTES["TSLA"].market_cap, "765B")

    def test_table_is_read_only(self):
        with self.assertRaises(TypeError):
            MOCK_QUOTES["NVDA"] = MOCK_QUOTES["AAPL"]
        with self.assertRaises(ValidationError):
            MOCK_QUOTES["AAPL"].price = 1.0

    def test_get_is_case_insensitive(self):
        store = MockQuoteStore()
        self.assertEqual(store.get("aapl"), store.get("AAPL"))
        self.assertIsNone(store.get("ZZZZ"))

    def test_list_many_preserves_order_and_drops_unknown(self):
        store = MockQuoteStore()
        rows = store.list_many(["TSLA", "ZZZZ", "AAPL", "NOPE", "GOOGL"])
        self.assertEqual([r.symbol for r in rows], ["TSLA", "AAPL", "GOOGL"])


class MockQuoteStoreFetchTest(unittest.IsolatedAsyncioTestCase):
    async def test_fetch_records_after_latency(self):
        store = MockQuoteStore(fetch_latency_sec=0)
        rows = await store.fetch_records(["MSFT", "XXXX"])
        self.assertEqual([r.symbol for r in rows], ["MSFT"])
        self.assertEqual(store.fetches, 1)

    async def test_failure_hook_raises(self):
        def fail(symbols):
            raise QuoteFetchError("upstream down")

        store = MockQuoteStore(fetch_latency_sec=0, failure_hook=fail)
        with self.assertRaises(QuoteFetchError):
            await store.fetch_records(["AAPL"])


if __name__ == "__main__":
    unittest.main()
