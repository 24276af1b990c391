"""Mini README: Timestamp helpers shared by the registry and ledger.

Both collections stamp ``created_at`` through an injectable clock so tests
can control ordering. The default clock returns timezone-aware UTC times.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current UTC time as an aware datetime."""

    return datetime.now(timezone.utc)
