"""
Date normalization for upstream job feeds.

Feeds report posting times as ISO strings, RFC 2822 strings, unix seconds or
unix milliseconds. ``parse_date`` folds all of them into an aware UTC
``datetime`` or ``None`` when the value carries no usable date. It never
raises.
"""

import math
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Optional, Union

# Numbers above this are milliseconds since epoch, below it seconds
MILLISECONDS_THRESHOLD = 1e12


def _from_epoch_ms(value: Union[int, float]) -> Optional[datetime]:
    try:
        # JSON integers can exceed the float range
        ms = float(value)
        if not math.isfinite(ms):
            return None
        return datetime.fromtimestamp(ms / 1000.0, tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None


def _from_string(value: str) -> Optional[datetime]:
    text = value.strip()
    if not text:
        return None

    iso_text = text[:-1] + "+00:00" if text[-1] in "Zz" else text
    try:
        parsed = datetime.fromisoformat(iso_text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def parse_date(value: Any) -> Optional[datetime]:
    """
    Normalize a feed date value.

    Args:
        value: ISO/RFC 2822 string, unix seconds, unix milliseconds, or None

    Returns:
        Aware UTC datetime, or None when the value is falsy or unparseable
    """
    if not value or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        ms = value if value > MILLISECONDS_THRESHOLD else value * 1000
        return _from_epoch_ms(ms)

    if isinstance(value, str):
        return _from_string(value)

    return None
