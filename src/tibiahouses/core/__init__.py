"""
Core modules for the Tibia Houses API.

Contains data models and shared constants.
"""

from tibiahouses.core.constants import (
    COMMUNITY_URL,
    DEFAULT_USER_AGENT,
    MAINTENANCE_TITLE,
)
from tibiahouses.core.models import (
    ExtractionResult,
    House,
    HouseStatus,
    ResidenceStatus,
    ResidenceType,
    RowFailure,
)

__all__ = [
    "COMMUNITY_URL",
    "DEFAULT_USER_AGENT",
    "MAINTENANCE_TITLE",
    "ExtractionResult",
    "House",
    "HouseStatus",
    "ResidenceStatus",
    "ResidenceType",
    "RowFailure",
]
