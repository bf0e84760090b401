import unittest
from unittest import mock

import requests

from arbpath.adapters.crypto.binance_adapter import BinanceTickerAdapter
from arbpath.adapters.fiat.exchangerate_adapter import ExchangeRateAdapter
from arbpath.adapters.http.json_client import JsonHttpClient
from arbpath.adapters.http.rate_limiter import SimpleRateLimiter
from arbpath.adapters.legality.gemini_adapter import GeminiSymbolsAdapter
from arbpath.core.dto import TickerPrice
from arbpath.core.errors import DataSourceError


def _response(data, status_code: int = 200):
    resp = mock.Mock()
    resp.status_code = status_code
    resp.json.return_value = data
    return resp


def _client(session, max_retries: int = 1) -> JsonHttpClient:
    return JsonHttpClient("test", timeout_sec=1, max_retries=max_retries, requests_per_sec=1000, session=session)


class JsonHttpClientTests(unittest.TestCase):
    def test_passes_timeout(self) -> None:
        session = mock.Mock()
        session.get.return_value = _response({"ok": True})

        data = _client(session).get_json("https://example.test/x")

        self.assertEqual(data, {"ok": True})
        self.assertEqual(session.get.call_args.kwargs["timeout"], 1)

    @mock.patch("arbpath.adapters.http.json_client.backoff_sleep")
    def test_retries_then_succeeds(self, sleep) -> None:
        session = mock.Mock()
        session.get.side_effect = [requests.ConnectionError("boom"), _response([1, 2])]

        data = _client(session, max_retries=2).get_json("https://example.test/x")

        self.assertEqual(data, [1, 2])
        self.assertEqual(session.get.call_count, 2)
        sleep.assert_called_once_with(0)

    @mock.patch("arbpath.adapters.http.json_client.backoff_sleep")
    def test_rate_limited_until_exhausted(self, sleep) -> None:
        session = mock.Mock()
        session.get.return_value = _response({}, status_code=429)

        with self.assertRaises(DataSourceError):
            _client(session, max_retries=3).get_json("https://example.test/x")
        self.assertEqual(session.get.call_count, 3)

    @mock.patch("arbpath.adapters.http.json_client.backoff_sleep")
    def test_client_errors_are_not_retried(self, sleep) -> None:
        session = mock.Mock()
        session.get.return_value = _response({"result": "error"}, status_code=403)

        with self.assertRaises(DataSourceError):
            _client(session, max_retries=3).get_json("https://example.test/x")
        self.assertEqual(session.get.call_count, 1)
        sleep.assert_not_called()

    @mock.patch("arbpath.adapters.http.json_client.backoff_sleep")
    def test_server_errors_are_retried(self, sleep) -> None:
        failing = _response({}, status_code=503)
        failing.raise_for_status.side_effect = requests.HTTPError("503 Server Error")
        session = mock.Mock()
        session.get.side_effect = [failing, _response({"ok": True})]

        data = _client(session, max_retries=2).get_json("https://example.test/x")

        self.assertEqual(data, {"ok": True})
        self.assertEqual(session.get.call_count, 2)

    def test_rate_limiter_rejects_bad_rate(self) -> None:
        with self.assertRaises(ValueError):
            SimpleRateLimiter(0)


class ExchangeRateAdapterTests(unittest.TestCase):
    def test_parses_conversion_rates(self) -> None:
        session = mock.Mock()
        session.get.return_value = _response(
            {"result": "success", "conversion_rates": {"USD": 1, "EUR": "0.92", "BAD": "x", "ZERO": 0}}
        )
        adapter = ExchangeRateAdapter(api_key="k", base_url="https://fx.test/v6/", client=_client(session))

        rates = adapter.get_rates("usd")

        self.assertEqual(rates, {"USD": 1.0, "EUR": 0.92})
        self.assertEqual(session.get.call_args.args[0], "https://fx.test/v6/k/latest/USD")

    def test_missing_key_returns_empty(self) -> None:
        session = mock.Mock()
        adapter = ExchangeRateAdapter(api_key="", client=_client(session))

        self.assertEqual(adapter.get_rates("USD"), {})
        session.get.assert_not_called()

    def test_failures_return_empty(self) -> None:
        session = mock.Mock()
        session.get.side_effect = requests.Timeout("slow")
        adapter = ExchangeRateAdapter(api_key="k", client=_client(session))
        self.assertEqual(adapter.get_rates("USD"), {})

        session = mock.Mock()
        session.get.return_value = _response({"result": "error", "error-type": "invalid-key"})
        adapter = ExchangeRateAdapter(api_key="k", client=_client(session))
        self.assertEqual(adapter.get_rates("USD"), {})


class BinanceTickerAdapterTests(unittest.TestCase):
    def test_parses_tickers(self) -> None:
        session = mock.Mock()
        session.get.return_value = _response([
            {"symbol": "BTCUSDT", "price": "65000.10"},
            {"symbol": "ETHBTC", "price": "0.05"},
            {"symbol": "BADPX", "price": "n/a"},
            {"symbol": "ZERO", "price": "0"},
            "junk",
        ])

        tickers = BinanceTickerAdapter(client=_client(session)).get_tickers()

        self.assertEqual(tickers, [TickerPrice("BTCUSDT", 65000.10), TickerPrice("ETHBTC", 0.05)])

    def test_failure_returns_empty(self) -> None:
        session = mock.Mock()
        session.get.side_effect = requests.ConnectionError("down")

        self.assertEqual(BinanceTickerAdapter(client=_client(session)).get_tickers(), [])

        session = mock.Mock()
        session.get.return_value = _response({"code": -1121, "msg": "Invalid symbol."})
        self.assertEqual(BinanceTickerAdapter(client=_client(session)).get_tickers(), [])


class GeminiSymbolsAdapterTests(unittest.TestCase):
    def test_uppercases_symbols(self) -> None:
        session = mock.Mock()
        session.get.return_value = _response(["btcusd", "ethbtc", 5, ""])

        pairs = GeminiSymbolsAdapter(client=_client(session)).get_reference_pairs()

        self.assertEqual(pairs, frozenset({"BTCUSD", "ETHBTC"}))

    def test_failure_returns_empty(self) -> None:
        session = mock.Mock()
        session.get.side_effect = requests.Timeout("slow")

        self.assertEqual(GeminiSymbolsAdapter(client=_client(session)).get_reference_pairs(), frozenset())


if __name__ == "__main__":
    unittest.main()
