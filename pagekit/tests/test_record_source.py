import asyncio
import unittest

from ..core.mock_fetcher import MockFetcher
from ..errors import NetworkError
from ..models.pagination import PageRequest
from ..services import sample_data
from ..services.record_source import RecordSource


class TestRecordSource(unittest.TestCase):
    def setUp(self):
        self.source = RecordSource(
            sample_data.breed_logs(45),
            search_fields=("title", "breed"),
            name="breed_logs",
        )

    def test_pages_slice_in_order(self):
        first = self.source.page(PageRequest(page=0, page_size=20))
        last = self.source.page(PageRequest(page=2, page_size=20))

        self.assertEqual([r["id"] for r in first.items], list(range(1, 21)))
        self.assertEqual([r["id"] for r in last.items], list(range(41, 46)))
        self.assertEqual(last.total_count, 45)
        self.assertEqual(last.page, 2)

    def test_page_past_the_end_is_empty(self):
        result = self.source.page(PageRequest(page=5, page_size=20))
        self.assertEqual(list(result.items), [])
        self.assertEqual(result.total_count, 45)

    def test_search_is_case_insensitive(self):
        result = self.source.page(PageRequest(page=0, page_size=100, search_term="ANGUS"))
        self.assertTrue(result.items)
        self.assertTrue(all(r["breed"] == "Angus" for r in result.items))
        self.assertEqual(result.total_count, len(result.items))

    def test_filters_match_exact_values_or_any_of(self):
        single = self.source.page(PageRequest(page=0, page_size=100, filters={"status": "calved"}))
        self.assertTrue(all(r["status"] == "calved" for r in single.items))

        several = self.source.page(
            PageRequest(page=0, page_size=100, filters={"status": ["calved", "failed"]})
        )
        self.assertTrue(all(r["status"] in ("calved", "failed") for r in several.items))
        self.assertGreaterEqual(several.total_count, single.total_count)

    def test_add_and_remove(self):
        self.source.add({"id": 999, "title": "Wagyu cow #999", "breed": "Wagyu", "status": "pending"})
        self.assertEqual(len(self.source), 46)
        self.assertEqual(self.source.remove(lambda r: r["breed"] == "Wagyu"), 1)
        self.assertEqual(len(self.source), 45)

    def test_sample_data_is_deterministic(self):
        self.assertEqual(sample_data.documents(10), sample_data.documents(10))


class TestMockFetcher(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.source = RecordSource(sample_data.documents(30), name="documents")

    async def test_records_requests(self):
        fetcher = MockFetcher(self.source)
        result = await fetcher.fetch_page(PageRequest(page=1, page_size=10))
        self.assertEqual(len(result.items), 10)
        self.assertEqual(fetcher.fetch_count, 1)

    async def test_failing_page_raises_network_error(self):
        fetcher = MockFetcher(self.source, fail_pages={0})
        with self.assertRaises(NetworkError):
            await fetcher.fetch_page(PageRequest(page=0, page_size=10))

    async def test_pause_holds_fetches_until_resume(self):
        fetcher = MockFetcher(self.source)
        fetcher.pause()
        task = asyncio.create_task(fetcher.fetch_page(PageRequest(page=0, page_size=10)))
        await asyncio.sleep(0)
        self.assertFalse(task.done())

        fetcher.resume()
        result = await task
        self.assertEqual(result.total_count, 30)


if __name__ == "__main__":
    unittest.main()
