import json
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp
from yarl import URL

from photofinder.api import HTTPClient
from photofinder.exceptions import RemoteFetchError
from photofinder.services.lookup_cache import LookupTableCache


def make_response(status=200, json_data=None, body=None):
    if body is None:
        body = json.dumps(json_data).encode() if json_data is not None else b""
    response = MagicMock()
    response.status = status
    response.ok = status < 400
    response.read = AsyncMock(return_value=body)
    return response


class TestHTTPClient(unittest.IsolatedAsyncioTestCase):
    def setUp(self):
        self.session_patcher = patch("aiohttp.ClientSession")
        self.connector_patcher = patch("aiohttp.TCPConnector")
        self.mock_session_cls = self.session_patcher.start()
        self.connector_patcher.start()
        self.mock_session = self.mock_session_cls.return_value
        self.mock_session.closed = False
        self.mock_session.close = AsyncMock()
        self.settings = MagicMock()
        self.settings.proxy = URL()
        self.client = HTTPClient(self.settings)

    def tearDown(self):
        self.connector_patcher.stop()
        self.session_patcher.stop()

    async def test_get_json_success(self):
        response = make_response(json_data={"success": True, "photos": {}})
        self.mock_session.request = AsyncMock(return_value=response)

        data = await self.client.get_json("https://example.test/lookup")

        self.assertEqual(data, {"success": True, "photos": {}})
        self.mock_session.request.assert_awaited_once_with(
            "GET", "https://example.test/lookup", headers={"Accept": "application/json"}
        )
        response.release.assert_called_once()

    async def test_get_json_error_status(self):
        response = make_response(status=500)
        self.mock_session.request = AsyncMock(return_value=response)

        with self.assertRaises(RemoteFetchError) as ctx:
            await self.client.get_json("https://example.test/lookup")

        self.assertEqual(ctx.exception.status, 500)
        self.assertEqual(ctx.exception.message, "HTTP error! status: 500")
        response.release.assert_called_once()

    async def test_get_json_connection_error(self):
        self.mock_session.request = AsyncMock(
            side_effect=aiohttp.ClientConnectionError("Connection refused")
        )

        with self.assertRaises(RemoteFetchError) as ctx:
            await self.client.get_json("https://example.test/lookup")

        self.assertIsNone(ctx.exception.status)
        self.assertIn("Connection refused", ctx.exception.message)

    async def test_get_json_invalid_body(self):
        response = make_response(body=b"<html>Sign in</html>")
        self.mock_session.request = AsyncMock(return_value=response)

        with self.assertRaises(RemoteFetchError) as ctx:
            await self.client.get_json("https://example.test/lookup")

        self.assertEqual(ctx.exception.status, 200)
        self.assertEqual(ctx.exception.message, "Response body is not valid JSON")

    async def test_get_json_empty_body(self):
        self.mock_session.request = AsyncMock(return_value=make_response(body=b""))

        with self.assertRaises(RemoteFetchError) as ctx:
            await self.client.get_json("https://example.test/lookup")

        self.assertEqual(ctx.exception.status, 200)
        self.assertEqual(ctx.exception.message, "Response body is not valid JSON")

    async def test_empty_lookup_body_is_a_fetch_error(self):
        self.mock_session.request = AsyncMock(return_value=make_response(body=b""))
        cache = LookupTableCache(self.client, "https://example.test/lookup")

        with self.assertRaises(RemoteFetchError):
            await cache.get_table()

        self.assertIsNone(cache.snapshot)

    async def test_proxy_is_applied(self):
        self.settings.proxy = URL("http://proxy:8080")
        self.mock_session.request = AsyncMock(return_value=make_response(json_data={}))

        await self.client.get_json("https://example.test/lookup")

        _, kwargs = self.mock_session.request.call_args
        self.assertEqual(kwargs["proxy"], URL("http://proxy:8080"))

    async def test_session_is_reused_and_closed(self):
        first = await self.client.get_session()
        second = await self.client.get_session()
        self.assertIs(first, second)
        self.mock_session_cls.assert_called_once()

        await self.client.close()
        self.mock_session.close.assert_awaited_once()

    async def test_closed_session_raises(self):
        await self.client.get_session()
        self.mock_session.closed = True
        with self.assertRaises(RuntimeError):
            await self.client.get_session()


if __name__ == "__main__":
    unittest.main()
