"""Time helpers."""

from typing import Optional
from datetime import datetime
import math

import dateutil.parser
from pytz import UTC


def now() -> int:
    """Get the current epoch/unix time, in whole seconds."""
    return epoch(datetime.now(tz=UTC))


def epoch(t: datetime) -> int:
    """Convert a :class:`.datetime` to UNIX time, rounding down."""
    return math.floor(t.timestamp())


def parse_instant(value: Optional[str]) -> Optional[datetime]:
    """
    Parse an ISO-8601 authentication instant.

    Instants without an offset are assumed to be UTC.

    Returns
    -------
    :class:`.datetime` or None
        ``None`` if ``value`` is missing or cannot be parsed.

    """
    if not value:
        return None
    try:
        instant = dateutil.parser.isoparse(value)
    except (ValueError, OverflowError):
        return None
    if instant.tzinfo is None:
        instant = UTC.localize(instant)
    return instant
