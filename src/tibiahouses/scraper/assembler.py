"""
Record Assembler

Turns raw rows into validated ``House`` records. Each row is processed
independently into either a ``House`` or a ``RowFailure``; the outcomes
are then folded into one ``ExtractionResult``. Nothing here raises a
page-level error.
"""

from datetime import datetime
from typing import Callable, Iterable, List, Optional, Tuple, TypeVar, Union

from tibiahouses.core.models import ExtractionResult, House, ResidenceType, RowFailure
from tibiahouses.exceptions import FieldInvalid, NormalizationError, RowShapeMismatch
from tibiahouses.logging_config import get_logger
from tibiahouses.scraper.extractor import RawRow
from tibiahouses.utils.number_parser import parse_int
from tibiahouses.utils.status_parser import parse_status

logger = get_logger(__name__)

T = TypeVar("T")

ROW_SHAPE_MISMATCH = "row_shape_mismatch"
FIELD_INVALID = "field_invalid"


def _normalize(field: str, parser: Callable[..., T], *args) -> T:
    """Run a normalizer, attributing any failure to ``field``."""
    try:
        return parser(*args)
    except NormalizationError as e:
        raise FieldInvalid(field, e.message) from e


def build_house(
    raw: RawRow,
    town: str,
    world: Optional[str] = None,
    residence_type: ResidenceType = ResidenceType.HOUSE,
    now: Optional[datetime] = None,
) -> House:
    """Normalize one raw row into a ``House``.

    Raises:
        RowShapeMismatch: If the row lacks expected columns.
        FieldInvalid: If a located field cannot be normalized.
    """
    if raw.missing:
        raise RowShapeMismatch(
            "missing columns: " + ", ".join(raw.missing),
            missing=list(raw.missing),
        )

    return House(
        id=_normalize("id", parse_int, raw.house_id),
        name=raw.cells["name"],
        size=_normalize("size", parse_int, raw.cells["size"]),
        rent=_normalize("rent", parse_int, raw.cells["rent"]),
        status=_normalize("status", parse_status, raw.cells["status"], now),
        town=town,
        world=world,
        residence_type=residence_type,
    )


def process_row(
    raw: RawRow,
    town: str,
    world: Optional[str] = None,
    residence_type: ResidenceType = ResidenceType.HOUSE,
    now: Optional[datetime] = None,
) -> Union[House, RowFailure]:
    """Process one row, returning a failure value instead of raising."""
    try:
        return build_house(raw, town, world, residence_type, now)
    except RowShapeMismatch as e:
        return RowFailure(row=raw.index, reason=e.message, kind=ROW_SHAPE_MISMATCH)
    except FieldInvalid as e:
        return RowFailure(row=raw.index, reason=e.message, kind=FIELD_INVALID, field=e.field)


def assemble(
    rows: Iterable[RawRow],
    town: str,
    world: Optional[str] = None,
    residence_type: ResidenceType = ResidenceType.HOUSE,
    now: Optional[datetime] = None,
) -> ExtractionResult:
    """Build the extraction result for one page.

    The first row with a given house id wins; later duplicates are
    reported as failures.
    """
    outcomes: List[Tuple[int, Union[House, RowFailure]]] = [
        (raw.index, process_row(raw, town, world, residence_type, now))
        for raw in rows
    ]

    result = ExtractionResult(town=town, world=world, residence_type=residence_type)
    seen = set()

    for index, outcome in outcomes:
        if isinstance(outcome, RowFailure):
            result.failures.append(outcome)
        elif outcome.id in seen:
            result.failures.append(RowFailure(
                row=index,
                reason=f"id: duplicate house id {outcome.id}",
                kind=FIELD_INVALID,
                field="id",
            ))
        else:
            seen.add(outcome.id)
            result.houses.append(outcome)

    for failure in result.failures:
        logger.warning("Skipped row %d in %s: %s", failure.row, town, failure.reason)

    logger.info(
        "Extracted %d %s listings for %s (%d failed rows)",
        len(result.houses), residence_type.value, town, len(result.failures),
    )
    return result
