"""
Data Models for the Tibia Houses API

Dataclass definitions for house listings and extraction results.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from tibiahouses.exceptions import FieldInvalid, ValidationError


class ResidenceType(str, Enum):
    """Kind of residence listed on a town page."""

    HOUSE = "house"
    GUILDHALL = "guildhall"

    @classmethod
    def parse(cls, value: Optional[str]) -> "ResidenceType":
        """Parse a user-supplied residence type, case-insensitively."""
        if value is None:
            return cls.HOUSE
        try:
            return cls(value.strip().lower())
        except ValueError:
            allowed = ", ".join(t.value for t in cls)
            raise ValidationError(
                f"Invalid residence type '{value}', expected one of: {allowed}",
                field="type",
                value=value,
            )


class HouseStatus(str, Enum):
    """Listing status, one case per upstream status phrase."""

    RENTED = "rented"
    AUCTION_NO_BID = "auctionNoBid"
    AUCTION_WITH_BID = "auctionWithBid"
    AUCTION_FINISHED = "auctionFinished"


@dataclass(frozen=True)
class ResidenceStatus:
    """Normalized status of a house, with auction details when auctioned."""

    kind: HouseStatus
    bid: Optional[int] = None
    time_left: Optional[timedelta] = None
    expiry_time: Optional[datetime] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, omitting fields that do not apply."""
        data: Dict[str, Any] = {"type": self.kind.value}
        if self.bid is not None:
            data["bid"] = self.bid
        if self.time_left is not None:
            data["timeLeft"] = int(self.time_left.total_seconds())
        if self.expiry_time is not None:
            data["expiryTime"] = self.expiry_time.isoformat()
        return data


@dataclass
class House:
    """One house or guildhall listing."""

    id: int
    name: str
    size: int  # square meters
    rent: int  # gold per month
    status: ResidenceStatus
    town: str
    world: Optional[str] = None
    residence_type: ResidenceType = ResidenceType.HOUSE

    def __post_init__(self):
        if not self.name:
            raise FieldInvalid("name", "empty house name")
        if self.size <= 0:
            raise FieldInvalid("size", f"size must be positive, got {self.size}")
        if self.rent <= 0:
            raise FieldInvalid("rent", f"rent must be positive, got {self.rent}")

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "id": self.id,
            "town": self.town,
            "type": self.residence_type.value,
            "name": self.name,
            "size": self.size,
            "rent": self.rent,
            "status": self.status.to_dict(),
        }
        if self.world is not None:
            data["world"] = self.world
        return data


@dataclass(frozen=True)
class RowFailure:
    """A listing row that could not be turned into a House."""

    row: int
    reason: str
    kind: str  # "row_shape_mismatch" or "field_invalid"
    field: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {"row": self.row, "reason": self.reason, "kind": self.kind}
        if self.field is not None:
            data["field"] = self.field
        return data


@dataclass
class ExtractionResult:
    """Outcome of processing one listing page.

    An empty ``houses`` list means the listing table was found but yielded
    no records; callers decide whether that is "nothing listed" or drift.
    """

    town: str
    world: Optional[str] = None
    residence_type: ResidenceType = ResidenceType.HOUSE
    houses: List[House] = field(default_factory=list)
    failures: List[RowFailure] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.houses

    def to_dict(self, include_failures: bool = True) -> Dict[str, Any]:
        """Convert to dictionary."""
        data: Dict[str, Any] = {
            "town": self.town,
            "world": self.world,
            "type": self.residence_type.value,
            "count": len(self.houses),
            "empty": self.is_empty,
            "houses": [house.to_dict() for house in self.houses],
        }
        if include_failures:
            data["failures"] = [failure.to_dict() for failure in self.failures]
        return data
