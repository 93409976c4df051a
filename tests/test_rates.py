"""
Tests for the exchange-rate refresher and its collaborators.
"""

import itertools
import os
import socket
import tempfile
import threading
import unittest
from datetime import timedelta
from fractions import Fraction
from pathlib import Path
from unittest import mock

from measurekit.config import RatesConfig
from measurekit.errors import ConversionFailure
from measurekit.money import (
    CurrencyTable,
    ExchangeRates,
    FileRateCache,
    MemoryRateCache,
    Money,
    current_rates,
    default_rates,
    fetch_document,
    parse_rates,
    using_rates,
)

ECB_TEMPLATE = """<?xml version="1.0" encoding="UTF-8"?>
<gesmes:Envelope xmlns:gesmes="http://www.gesmes.org/xml/2002-08-01"
    xmlns="http://www.ecb.int/vocabulary/2002-08-01/eurofxref">
  <gesmes:subject>Reference rates</gesmes:subject>
  <Cube>
    <Cube time="2024-05-10">
      <Cube currency="USD" rate="{usd}"/>
      <Cube currency="JPY" rate="{jpy}"/>
      <Cube currency="GBP" rate="0.86"/>
      <Cube currency="ILS" rate="{ils}"/>
    </Cube>
  </Cube>
</gesmes:Envelope>
"""


def ecb_document(usd="1.0772", jpy="167.61", ils="4.0051"):
    return ECB_TEMPLATE.format(usd=usd, jpy=jpy, ils=ils).encode("utf-8")


class FakeFetcher:
    """Serves prepared documents and counts the requests."""

    def __init__(self, *documents):
        self.documents = itertools.cycle(documents or (ecb_document(),))
        self.calls = 0

    def __call__(self, url, timeout):
        self.calls += 1
        return next(self.documents)


class FailingFetcher:
    def __call__(self, url, timeout):
        raise ConversionFailure(f"cannot reach {url}")


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now

    def advance(self, delta):
        self.now += delta.total_seconds()


class UnwritableCache(MemoryRateCache):
    def write(self, data):
        raise ConversionFailure("read-only cache")


class RawHTTPServer:
    """Answers one request on a local socket with fixed bytes, then hangs up."""

    def __init__(self, response):
        self._sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        self._sock.bind(("127.0.0.1", 0))
        self._sock.listen(1)
        self.url = f"http://127.0.0.1:{self._sock.getsockname()[1]}/"
        self._thread = threading.Thread(target=self._serve, args=(response,), daemon=True)
        self._thread.start()

    def _serve(self, response):
        conn, _ = self._sock.accept()
        with conn:
            conn.recv(65536)
            conn.sendall(response)

    def close(self):
        self._thread.join(timeout=5)
        self._sock.close()


class TestParseRates(unittest.TestCase):
    """Test reading the ECB feed."""

    def test_rates_are_exact(self):
        """Test that rates keep their decimal value."""
        rates = parse_rates(ecb_document())
        self.assertEqual(rates["USD"], Fraction("1.0772"))
        self.assertEqual(rates["JPY"], Fraction("167.61"))
        self.assertEqual(rates["ILS"], Fraction("4.0051"))
        self.assertEqual(rates["GBP"], Fraction("0.86"))

    def test_malformed_document(self):
        """Test that broken XML is a conversion failure."""
        with self.assertRaises(ConversionFailure):
            parse_rates(b"<Cube currency=")

    def test_bad_rates(self):
        """Test unreadable and non-positive rates."""
        with self.assertRaises(ConversionFailure):
            parse_rates(ecb_document(usd="n/a"))
        with self.assertRaises(ConversionFailure):
            parse_rates(ecb_document(jpy="0"))
        with self.assertRaises(ConversionFailure):
            parse_rates(ecb_document(ils="1e50000000"))


class TestFetchDocument(unittest.TestCase):
    """Test downloading the feed from file URLs and a local socket."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "eurofxref-daily.xml"

    def test_fetch(self):
        """Test that the document bytes are returned."""
        self.path.write_bytes(ecb_document())
        self.assertEqual(fetch_document(self.path.as_uri(), 5), ecb_document())

    def test_unreachable(self):
        """Test that a failed request is a conversion failure."""
        with self.assertRaises(ConversionFailure):
            fetch_document(self.path.as_uri(), 5)

    def test_unusable_url(self):
        """Test that a URL urllib cannot open is a conversion failure."""
        with self.assertRaises(ConversionFailure):
            fetch_document("not a url", 5)

    def serve(self, response):
        env = mock.patch.dict(os.environ, {"no_proxy": "127.0.0.1", "NO_PROXY": "127.0.0.1"})
        env.start()
        self.addCleanup(env.stop)
        server = RawHTTPServer(response)
        self.addCleanup(server.close)
        return server.url

    def test_truncated_body(self):
        """Test that a body shorter than its Content-Length is a conversion failure."""
        url = self.serve(b"HTTP/1.1 200 OK\r\nContent-Length: 1000\r\n\r\n<Cub")
        with self.assertRaises(ConversionFailure):
            fetch_document(url, 5)

    def test_garbage_status_line(self):
        """Test that a malformed HTTP response is a conversion failure."""
        url = self.serve(b"garbage\r\n\r\n")
        with self.assertRaises(ConversionFailure):
            fetch_document(url, 5)

    def test_refresh_survives_bad_response(self):
        """Test that a broken response is reported in the refresh outcome."""
        url = self.serve(b"HTTP/1.1 200 OK\r\nContent-Length: 1000\r\n\r\n<Cub")
        rates = ExchangeRates(RatesConfig(url=url, tolerance=timedelta(0)), cache=MemoryRateCache())
        with self.assertLogs("measurekit.money.rates", level="WARNING"):
            outcome = rates.update()
        self.assertFalse(outcome)
        self.assertIsInstance(outcome.error, ConversionFailure)
        self.assertEqual(rates.table, CurrencyTable.default())


class TestCurrencyTable(unittest.TestCase):
    """Test CurrencyTable class."""

    def test_default(self):
        """Test the built-in rates."""
        table = CurrencyTable.default()
        self.assertEqual(table.dollar_us.factor, Fraction(25, 28))
        self.assertEqual(table.new_shekel.factor, Fraction(25, 28) * Fraction("0.26"))
        self.assertEqual(table.yen.factor, Fraction(25, 28) * Fraction("0.009"))

    def test_from_rates(self):
        """Test that units are the inverses of the rates per euro."""
        table = CurrencyTable.from_rates(parse_rates(ecb_document()))
        self.assertEqual(table.dollar_us.factor, 1 / Fraction("1.0772"))
        self.assertEqual(table.yen.factor, 1 / Fraction("167.61"))

    def test_missing_currency(self):
        """Test that a missing currency is a conversion failure."""
        with self.assertRaises(ConversionFailure) as ctx:
            CurrencyTable.from_rates({"USD": Fraction(1)})
        self.assertIn("ILS", str(ctx.exception))


class TestExchangeRates(unittest.TestCase):
    """Test refreshing the currency table."""

    def setUp(self):
        self.clock = FakeClock()
        self.cache = MemoryRateCache(clock=self.clock)
        self.fetcher = FakeFetcher()
        self.rates = ExchangeRates(fetcher=self.fetcher, cache=self.cache)

    def test_initial_state(self):
        """Test that a new holder uses the built-in rates."""
        self.assertFalse(self.rates.initialized)
        self.assertEqual(self.rates.table, CurrencyTable.default())

    def test_first_update_fetches(self):
        """Test that an empty cache triggers a fetch."""
        outcome = self.rates.update()
        self.assertTrue(outcome)
        self.assertIsNone(outcome.error)
        self.assertEqual(self.fetcher.calls, 1)
        self.assertTrue(self.rates.initialized)
        self.assertEqual(self.rates.table.dollar_us.factor, 1 / Fraction("1.0772"))
        self.assertEqual(self.cache.read(), ecb_document())

    def test_fresh_cache_skips_update(self):
        """Test that fresh, loaded rates are not refreshed again."""
        self.rates.update()
        outcome = self.rates.update()
        self.assertFalse(outcome)
        self.assertIsNone(outcome.error)
        self.assertEqual(self.fetcher.calls, 1)

    def test_stale_cache_fetches(self):
        """Test that rates older than the tolerance are fetched again."""
        self.rates.update()
        self.clock.advance(timedelta(hours=13))
        self.assertTrue(self.rates.update())
        self.assertEqual(self.fetcher.calls, 2)

    def test_explicit_tolerance(self):
        """Test overriding the configured tolerance."""
        self.rates.update()
        self.clock.advance(timedelta(minutes=5))
        self.assertFalse(self.rates.update(timedelta(hours=1)))
        self.assertTrue(self.rates.update(timedelta(minutes=1)))
        self.assertEqual(self.fetcher.calls, 2)

    def test_no_tolerance_always_fetches(self):
        """Test that a tolerance of None in the config means zero."""
        rates = ExchangeRates(RatesConfig(tolerance=None), fetcher=self.fetcher, cache=self.cache)
        rates.update()
        rates.update()
        self.assertEqual(self.fetcher.calls, 2)

    def test_fresh_cache_used_when_uninitialized(self):
        """Test that a fresh cached document is used instead of fetching."""
        cache = MemoryRateCache(ecb_document(usd="1.25"), clock=self.clock)
        rates = ExchangeRates(fetcher=self.fetcher, cache=cache)
        with self.assertLogs("measurekit.money.rates", level="DEBUG"):
            self.assertTrue(rates.update())
        self.assertEqual(self.fetcher.calls, 0)
        self.assertEqual(rates.table.dollar_us.factor, Fraction(4, 5))

    def test_fetch_failure(self):
        """Test that a failed fetch keeps the current table."""
        rates = ExchangeRates(fetcher=FailingFetcher(), cache=self.cache)
        with self.assertLogs("measurekit.money.rates", level="WARNING"):
            outcome = rates.update()
        self.assertFalse(outcome)
        self.assertIsInstance(outcome.error, ConversionFailure)
        self.assertFalse(rates.initialized)
        self.assertEqual(rates.table, CurrencyTable.default())

    def test_malformed_feed(self):
        """Test that a malformed document keeps the current table."""
        self.rates.update()
        before = self.rates.table
        rates = ExchangeRates(fetcher=FakeFetcher(b"<html>maintenance</html>"), cache=MemoryRateCache())
        outcome = rates.update()
        self.assertIsInstance(outcome.error, ConversionFailure)
        self.assertEqual(rates.table, CurrencyTable.default())
        self.assertIs(self.rates.table, before)

    def test_cache_write_failure_is_not_fatal(self):
        """Test that rates are used even when they cannot be cached."""
        rates = ExchangeRates(fetcher=self.fetcher, cache=UnwritableCache())
        with self.assertLogs("measurekit.money.rates", level="WARNING"):
            outcome = rates.update()
        self.assertTrue(outcome)
        self.assertTrue(rates.initialized)

    def test_reset(self):
        """Test restoring the built-in rates."""
        self.rates.update()
        self.rates.reset()
        self.assertFalse(self.rates.initialized)
        self.assertEqual(self.rates.table, CurrencyTable.default())


class TestRatesContext(unittest.TestCase):
    """Test binding a holder for Money."""

    def test_using_rates(self):
        """Test that the bound holder is used and then released."""
        rates = ExchangeRates(fetcher=FakeFetcher(), cache=MemoryRateCache())
        with using_rates(rates) as bound:
            self.assertIs(bound, rates)
            self.assertIs(current_rates(), rates)
        self.assertIs(current_rates(), default_rates())

    def test_money_follows_refresh(self):
        """Test that conversions use the refreshed table."""
        rates = ExchangeRates(fetcher=FakeFetcher(ecb_document(usd="1.25")), cache=MemoryRateCache())
        with using_rates(rates):
            self.assertEqual(Money(12.5).to_string("D_F2"), "$14.00")
            self.assertTrue(Money.update_rates())
            self.assertEqual(Money(12.5).to_string("D_F2"), "$15.62")

    def test_existing_values_unchanged(self):
        """Test that amounts built before a refresh keep their euro value."""
        rates = ExchangeRates(fetcher=FakeFetcher(ecb_document(usd="1.25")), cache=MemoryRateCache())
        with using_rates(rates):
            before = Money(1, Money.dollar_us())
            rates.update()
            after = Money(1, Money.dollar_us())
        self.assertEqual(before.arbitrary, Fraction(25, 28))
        self.assertEqual(after.arbitrary, Fraction(4, 5))
        self.assertNotEqual(before, after)


class TestConcurrentRefresh(unittest.TestCase):
    """Test readers running alongside refreshes."""

    def test_readers_see_whole_tables(self):
        """Test that a reader never sees a mix of two tables."""
        first, second = ecb_document(), ecb_document(usd="2", jpy="200", ils="8")
        config = RatesConfig(tolerance=None)
        rates = ExchangeRates(config, fetcher=FakeFetcher(first, second), cache=MemoryRateCache())
        valid = {
            CurrencyTable.from_rates(parse_rates(first)),
            CurrencyTable.from_rates(parse_rates(second)),
            CurrencyTable.default(),
        }
        seen_bad = []
        done = threading.Event()

        def read():
            while not done.is_set():
                table = rates.table
                if table not in valid:
                    seen_bad.append(table)

        readers = [threading.Thread(target=read) for _ in range(4)]
        for reader in readers:
            reader.start()
        for _ in range(200):
            self.assertTrue(rates.update())
        done.set()
        for reader in readers:
            reader.join()
        self.assertEqual(seen_bad, [])


class TestFileRateCache(unittest.TestCase):
    """Test FileRateCache class."""

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.path = Path(self._tmp.name) / "nested" / "rates.xml"

    def test_missing_file(self):
        """Test reading a cache that was never written."""
        cache = FileRateCache(self.path)
        self.assertEqual(cache.read(), b"")
        self.assertEqual(cache.age(), timedelta.max)

    def test_write_and_read(self):
        """Test that writes create directories and replace the file."""
        cache = FileRateCache(self.path)
        cache.write(b"first")
        cache.write(b"second")
        self.assertEqual(cache.read(), b"second")
        self.assertEqual(os.listdir(self.path.parent), ["rates.xml"])

    def test_age(self):
        """Test that the age is measured from the modification time."""
        cache = FileRateCache(self.path, clock=lambda: os.path.getmtime(self.path) + 90)
        cache.write(b"data")
        self.assertAlmostEqual(cache.age().total_seconds(), 90, places=3)

    def test_unwritable_location(self):
        """Test that an unusable path is a conversion failure."""
        blocker = Path(self._tmp.name) / "blocker"
        blocker.write_bytes(b"")
        cache = FileRateCache(blocker / "rates.xml")
        with self.assertRaises(ConversionFailure):
            cache.write(b"data")

    def test_refresh_through_file(self):
        """Test a holder persisting its document to the configured file."""
        fetcher = FakeFetcher()
        rates = ExchangeRates(RatesConfig(cache_path=self.path), fetcher=fetcher)
        self.assertTrue(rates.update())
        self.assertEqual(self.path.read_bytes(), ecb_document())

        reloaded = ExchangeRates(RatesConfig(cache_path=self.path), fetcher=fetcher)
        self.assertTrue(reloaded.update())
        self.assertEqual(fetcher.calls, 1)
        self.assertEqual(reloaded.table, rates.table)


if __name__ == '__main__':
    unittest.main()
