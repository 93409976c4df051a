"""Fetching and reading the ECB daily reference-rate feed.

The feed is an XML document in which every ``Cube`` element carrying a
``currency`` attribute gives the number of units of that currency worth one
euro, e.g. ``<Cube currency="USD" rate="1.0842"/>``.
"""

from __future__ import annotations

import logging
from fractions import Fraction
from http.client import HTTPException
from urllib.error import URLError
from urllib.request import Request, urlopen
from xml.etree import ElementTree

from measurekit.errors import ConversionFailure, InvalidValueError
from measurekit.unit import as_rational

logger = logging.getLogger(__name__)


def fetch_document(url: str, timeout: float) -> bytes:
    """Download the feed document.

    Raises:
        ConversionFailure: On any network or HTTP protocol error, or an
            unusable URL.
    """
    try:
        req = Request(url, headers={"Accept": "application/xml"})
        with urlopen(req, timeout=timeout) as resp:
            data = resp.read()
    except (URLError, HTTPException, OSError, ValueError) as exc:
        msg = f"failed to fetch {url}: {exc}"
        raise ConversionFailure(msg) from exc
    logger.debug("fetched %d bytes from %s", len(data), url)
    return data


def parse_rates(document: bytes) -> dict[str, Fraction]:
    """Return the currency -> rate-per-euro mapping of a feed document.

    Rates are exact, read from the decimal strings of the feed.

    Raises:
        ConversionFailure: If the document is not well-formed XML or holds an
            unreadable or non-positive rate.
    """
    try:
        root = ElementTree.fromstring(document)
    except ElementTree.ParseError as exc:
        msg = f"malformed exchange-rate document: {exc}"
        raise ConversionFailure(msg) from exc

    rates = {}
    for element in root.iter():
        if element.tag.rpartition("}")[2] != "Cube":
            continue
        currency, rate = element.get("currency"), element.get("rate")
        if not currency or rate is None:
            continue
        try:
            value = as_rational(rate)
        except InvalidValueError as exc:
            msg = f"unreadable rate for {currency}: {rate!r}"
            raise ConversionFailure(msg) from exc
        if value <= 0:
            msg = f"non-positive rate for {currency}: {rate!r}"
            raise ConversionFailure(msg)
        rates[currency] = value
    return rates
