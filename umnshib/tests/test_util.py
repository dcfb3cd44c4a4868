"""Tests for :mod:`umnshib.util`."""

from unittest import TestCase
from datetime import datetime

from pytz import UTC, timezone

from .. import util


class TestParseInstant(TestCase):
    """Tests for :func:`.util.parse_instant`."""

    def test_shibboleth_format(self):
        """The SP sends UTC instants with a ``Z`` suffix."""
        instant = util.parse_instant('2018-03-01T19:33:12.345Z')
        self.assertEqual(instant,
                         datetime(2018, 3, 1, 19, 33, 12, 345000, tzinfo=UTC))

    def test_offset(self):
        """Instants with an offset keep it."""
        instant = util.parse_instant('2018-03-01T13:33:12-06:00')
        self.assertEqual(util.epoch(instant), util.epoch(
            datetime(2018, 3, 1, 19, 33, 12, tzinfo=UTC)
        ))

    def test_naive(self):
        """Instants without an offset are taken as UTC."""
        instant = util.parse_instant('2018-03-01T19:33:12')
        self.assertEqual(instant.utcoffset().total_seconds(), 0)

    def test_missing(self):
        """Missing instants are ``None``."""
        self.assertIsNone(util.parse_instant(None))
        self.assertIsNone(util.parse_instant(''))

    def test_garbage(self):
        """Unparsable instants are ``None``."""
        self.assertIsNone(util.parse_instant('yesterday-ish'))
        self.assertIsNone(util.parse_instant('2018-13-45T99:99:99Z'))


class TestEpoch(TestCase):
    """Tests for :func:`.util.epoch`."""

    def test_rounds_down(self):
        """Fractional seconds are dropped."""
        t = datetime(2018, 3, 1, 19, 33, 12, 999999, tzinfo=UTC)
        self.assertEqual(util.epoch(t), 1519932792)

    def test_timezone(self):
        """The same instant has the same epoch in any zone."""
        t = datetime(2018, 3, 1, 19, 33, 12, tzinfo=UTC)
        central = t.astimezone(timezone('US/Central'))
        self.assertEqual(util.epoch(t), util.epoch(central))

    def test_now(self):
        """:func:`.util.now` is an integer near the current time."""
        self.assertIsInstance(util.now(), int)
        self.assertLessEqual(
            abs(util.now() - datetime.now(tz=UTC).timestamp()), 2
        )
