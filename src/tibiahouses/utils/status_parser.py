"""
House Status Parsing Utilities

Maps the upstream status phrases onto ``ResidenceStatus`` values.

Known vocabulary (case-insensitive):
- "rented"
- "auctioned (no bid yet)"
- "auctioned (12,345 gold; 3 days left)"
- "auctioned (12,345 gold; 5 hours left)"
- "auctioned (12,345 gold; finished)"

Anything else raises ``UnknownStatus``; there is no default status.
"""

import re
from datetime import datetime, timedelta, timezone
from typing import NamedTuple, Optional

from tibiahouses.core.constants import SERVER_SAVE_HOUR_UTC
from tibiahouses.core.models import HouseStatus, ResidenceStatus
from tibiahouses.exceptions import CountdownFormat, UnknownStatus
from tibiahouses.utils.number_parser import parse_int
from tibiahouses.utils.text_utils import sanitize_text

STATUS_PHRASES = {
    "rented": HouseStatus.RENTED,
    "auctioned (no bid yet)": HouseStatus.AUCTION_NO_BID,
}

_AUCTION_RE = re.compile(r"^auctioned \((?P<bid>[^;()]+?) gold; (?P<countdown>[^()]+)\)$")
_COUNTDOWN_RE = re.compile(r"^(?P<amount>\d+) (?P<unit>days?|hours?) left$")
_FINISHED_WORDS = ("finished", "ended")


class Countdown(NamedTuple):
    """Time remaining on an auction as printed upstream."""

    amount: int
    unit: str  # "days", "hours" or "finished"

    @property
    def finished(self) -> bool:
        return self.unit == "finished"

    @property
    def duration(self) -> timedelta:
        if self.unit == "days":
            return timedelta(days=self.amount)
        if self.unit == "hours":
            return timedelta(hours=self.amount)
        return timedelta(0)

    def expiry_from(self, now: datetime) -> Optional[datetime]:
        """Estimate when the auction ends.

        Day countdowns end at server save on the target day. Hour
        countdowns are rounded up to the next full hour.
        """
        if self.finished:
            return None
        current = now.astimezone(timezone.utc).replace(minute=0, second=0, microsecond=0)
        if self.unit == "days":
            return current.replace(hour=SERVER_SAVE_HOUR_UTC) + self.duration
        return current + timedelta(hours=1) + self.duration


def parse_countdown(text: Optional[str]) -> Countdown:
    """Parse auction countdown text.

    Example:
        >>> parse_countdown("3 days left")
        Countdown(amount=3, unit='days')
        >>> parse_countdown("finished")
        Countdown(amount=0, unit='finished')

    Raises:
        CountdownFormat: If the text is not a known countdown shape.
    """
    cleaned = sanitize_text(text).lower()
    if cleaned in _FINISHED_WORDS:
        return Countdown(0, "finished")

    match = _COUNTDOWN_RE.match(cleaned)
    if not match:
        raise CountdownFormat(f"unknown auction countdown: '{cleaned}'", text=text)

    unit = match.group("unit")
    if not unit.endswith("s"):
        unit += "s"
    return Countdown(int(match.group("amount")), unit)


def parse_status(text: Optional[str], now: Optional[datetime] = None) -> ResidenceStatus:
    """Parse a status cell into a ``ResidenceStatus``.

    Args:
        text: Raw status cell text.
        now: Reference time for auction expiry; defaults to the current UTC time.

    Returns:
        The normalized status.

    Raises:
        UnknownStatus: If the phrase is not in the known vocabulary.
        NumericFormat: If an auction bid is not a valid amount.
        CountdownFormat: If an auction countdown cannot be read.
    """
    cleaned = sanitize_text(text).lower()

    kind = STATUS_PHRASES.get(cleaned)
    if kind is not None:
        return ResidenceStatus(kind)

    match = _AUCTION_RE.match(cleaned)
    if not match:
        raise UnknownStatus(f"unknown status: '{cleaned}'", text=text)

    bid = parse_int(match.group("bid"))
    countdown = parse_countdown(match.group("countdown"))

    if countdown.finished:
        return ResidenceStatus(HouseStatus.AUCTION_FINISHED, bid=bid, time_left=timedelta(0))

    if now is None:
        now = datetime.now(timezone.utc)
    return ResidenceStatus(
        HouseStatus.AUCTION_WITH_BID,
        bid=bid,
        time_left=countdown.duration,
        expiry_time=countdown.expiry_from(now),
    )
