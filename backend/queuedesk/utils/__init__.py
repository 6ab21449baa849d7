"""Utils package initialization."""

from queuedesk.utils.logging import BookingLogger, get_logger, setup_logging
from queuedesk.utils.timeutils import (
    as_utc,
    bounds_for_date,
    day_bounds,
    local_date,
    to_utc_naive,
    utcnow,
)

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    "BookingLogger",
    # Time
    "utcnow",
    "to_utc_naive",
    "as_utc",
    "local_date",
    "bounds_for_date",
    "day_bounds",
]
