from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Production clock. Domain code only ever receives it as an argument."""

    return datetime.now(tz=UTC)
