import unittest
from unittest.mock import AsyncMock, MagicMock

from photofinder.exceptions import RemoteApplicationError, RemoteFetchError
from photofinder.models import GalleryRecord
from photofinder.services.gallery_service import (
    EMPTY_GALLERY_HTML,
    fetch_gallery_list,
    parse_gallery_payload,
    render_gallery,
)


class TestParseGalleryPayload(unittest.TestCase):
    def test_categories_are_flattened(self):
        records = parse_gallery_payload(
            {
                "success": True,
                "categories": {"nature": [{"filename": "a.jpg", "url": "u1", "viewUrl": "v1"}]},
            }
        )
        self.assertEqual(len(records), 1)
        record = records[0]
        self.assertEqual(record.filename, "a.jpg")
        self.assertEqual(record.url, "u1")
        self.assertEqual(record.view_url, "v1")
        self.assertEqual(record.category, "nature")

    def test_multiple_categories_keep_order(self):
        records = parse_gallery_payload(
            {
                "success": True,
                "categories": {
                    "nature": [{"filename": "a.jpg", "url": "u1", "viewUrl": "v1"}],
                    "people": [
                        {"filename": "b.jpg", "url": "u2", "viewUrl": "v2"},
                        {"filename": "c.jpg", "url": "u3", "viewUrl": "v3"},
                    ],
                },
            }
        )
        self.assertEqual([r.filename for r in records], ["a.jpg", "b.jpg", "c.jpg"])
        self.assertEqual([r.category for r in records], ["nature", "people", "people"])

    def test_photos_shape(self):
        records = parse_gallery_payload(
            {
                "success": True,
                "photos": {
                    "k1": {"filename": "a.jpg", "downloadUrl": "d1", "url": "u1", "viewUrl": "v1"},
                    "k2": {"filename": "b.jpg", "url": "u2", "viewUrl": "v2"},
                },
            }
        )
        # downloadUrl wins over url
        self.assertEqual([r.url for r in records], ["d1", "u2"])
        self.assertTrue(all(r.category is None for r in records))

    def test_categories_win_over_photos(self):
        records = parse_gallery_payload(
            {
                "success": True,
                "categories": {"nature": [{"filename": "a.jpg", "url": "u1", "viewUrl": "v1"}]},
                "photos": {"k2": {"filename": "b.jpg", "url": "u2", "viewUrl": "v2"}},
            }
        )
        self.assertEqual([r.filename for r in records], ["a.jpg"])

    def test_no_photos(self):
        self.assertEqual(parse_gallery_payload({"success": True}), [])
        self.assertEqual(parse_gallery_payload({"success": True, "categories": {}}), [])

    def test_malformed_entries_are_skipped(self):
        records = parse_gallery_payload(
            {
                "success": True,
                "categories": {
                    "nature": [{"filename": "a.jpg", "url": "u1", "viewUrl": "v1"}, "oops"],
                    "broken": "not a list",
                },
            }
        )
        self.assertEqual(len(records), 1)

    def test_remote_failure(self):
        with self.assertRaises(RemoteApplicationError) as ctx:
            parse_gallery_payload({"success": False})
        self.assertEqual(ctx.exception.message, "Failed to load gallery")

        with self.assertRaises(RemoteApplicationError) as ctx:
            parse_gallery_payload({"success": False, "message": "quota exceeded"})
        self.assertEqual(ctx.exception.message, "quota exceeded")

        with self.assertRaises(RemoteApplicationError):
            parse_gallery_payload(["not", "an", "object"])


class TestRenderGallery(unittest.TestCase):
    def test_render_cards(self):
        html = render_gallery(
            [GalleryRecord({"filename": "a.jpg", "url": "http://x/a.jpg", "viewUrl": "http://v/a"})]
        )
        self.assertEqual(html.count('class="gallery-item'), 1)
        self.assertIn('src="http://x/a.jpg"', html)
        self.assertIn('alt="a.jpg"', html)
        self.assertIn('href="http://v/a"', html)
        self.assertIn('data-preview="http://x/a.jpg"', html)

    def test_render_escapes_values(self):
        html = render_gallery(
            [GalleryRecord({"filename": '<b>"x"</b>.jpg', "url": "u", "viewUrl": "v"})]
        )
        self.assertNotIn("<b>", html)
        self.assertIn("&lt;b&gt;&quot;x&quot;&lt;/b&gt;.jpg", html)

    def test_render_empty(self):
        self.assertEqual(render_gallery([]), EMPTY_GALLERY_HTML)


class TestFetchGalleryList(unittest.IsolatedAsyncioTestCase):
    async def test_fetch_is_not_cached(self):
        http = MagicMock()
        http.get_json = AsyncMock(
            return_value={
                "success": True,
                "photos": {"k1": {"filename": "a.jpg", "url": "u1", "viewUrl": "v1"}},
            }
        )

        first = await fetch_gallery_list(http, "https://example.test/gallery")
        second = await fetch_gallery_list(http, "https://example.test/gallery")

        self.assertEqual(first, second)
        self.assertEqual(http.get_json.await_count, 2)
        http.get_json.assert_awaited_with("https://example.test/gallery")

    async def test_fetch_errors_propagate(self):
        http = MagicMock()
        http.get_json = AsyncMock(side_effect=RemoteFetchError(404))
        with self.assertRaises(RemoteFetchError):
            await fetch_gallery_list(http, "https://example.test/gallery")


if __name__ == "__main__":
    unittest.main()
