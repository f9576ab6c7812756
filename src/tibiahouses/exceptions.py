"""
Custom Exceptions for the Tibia Houses API

Provides a hierarchy of exceptions for standardized error handling across all modules.

Page-level errors (``ScraperError`` and below) abort a request. Row-level
errors (``RowError``) and normalizer errors never leave the record assembler;
they are turned into ``RowFailure`` entries of the extraction result.

Exception Hierarchy:
    TibiaHousesError (base)
    ├── ConfigurationError
    ├── ScraperError
    │   ├── FetchError
    │   │   ├── Unreachable
    │   │   ├── UpstreamRejected
    │   │   ├── UnexpectedContentType
    │   │   └── UpstreamMaintenance
    │   ├── MalformedDocument
    │   ├── ContainerNotFound
    │   └── TownNotFound
    ├── RowError
    │   ├── RowShapeMismatch
    │   └── FieldInvalid
    ├── NormalizationError
    │   ├── NumericFormat
    │   ├── UnknownStatus
    │   └── CountdownFormat
    └── ValidationError
"""


class TibiaHousesError(Exception):
    """Base exception for all Tibia Houses errors."""

    def __init__(self, message: str, *args, **kwargs):
        self.message = message
        super().__init__(message, *args, **kwargs)


# Configuration Errors
class ConfigurationError(TibiaHousesError):
    """Raised when there's a configuration problem."""

    pass


# Page-level Errors
class ScraperError(TibiaHousesError):
    """Base exception for errors that invalidate a whole page."""

    pass


class FetchError(ScraperError):
    """Raised when the upstream page could not be retrieved."""

    def __init__(self, message: str, url: str = None):
        self.url = url
        super().__init__(message)


class Unreachable(FetchError):
    """Raised on connection, DNS or timeout failures."""

    pass


class UpstreamRejected(FetchError):
    """Raised when the upstream answers with a non-success status."""

    def __init__(self, message: str, url: str = None, status_code: int = None):
        self.status_code = status_code
        super().__init__(message, url=url)


class UnexpectedContentType(FetchError):
    """Raised when the upstream answers with something other than HTML."""

    def __init__(self, message: str, url: str = None, content_type: str = None):
        self.content_type = content_type
        super().__init__(message, url=url)


class UpstreamMaintenance(FetchError):
    """Raised when the upstream serves its maintenance page."""

    pass


class MalformedDocument(ScraperError):
    """Raised when a byte stream cannot be interpreted as markup at all."""

    pass


class ContainerNotFound(ScraperError):
    """Raised when the page loaded but the listing table is gone.

    This means the upstream markup changed, not that the upstream is down.
    """

    def __init__(self, message: str, anchors: list = None):
        self.anchors = anchors or []
        super().__init__(message)


class TownNotFound(ScraperError):
    """Raised when the page lists a different town or world than requested."""

    def __init__(self, message: str, town: str = None, world: str = None):
        self.town = town
        self.world = world
        super().__init__(message)


# Row-level Errors
class RowError(TibiaHousesError):
    """Base exception for failures confined to one listing row."""

    pass


class RowShapeMismatch(RowError):
    """Raised when a row lacks one of the expected columns."""

    def __init__(self, message: str, missing: list = None):
        self.missing = missing or []
        super().__init__(message)


class FieldInvalid(RowError):
    """Raised when a located field cannot be normalized."""

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        super().__init__(f"{field}: {reason}")


# Normalization Errors
class NormalizationError(TibiaHousesError):
    """Base exception for text-to-value conversion failures."""

    def __init__(self, message: str, text: str = None):
        self.text = text
        super().__init__(message)


class NumericFormat(NormalizationError):
    """Raised when text is not a valid non-negative integer."""

    pass


class UnknownStatus(NormalizationError):
    """Raised when a status phrase is not in the known vocabulary."""

    pass


class CountdownFormat(NormalizationError):
    """Raised when an auction countdown cannot be read."""

    pass


# Validation Errors
class ValidationError(TibiaHousesError):
    """Raised when input validation fails."""

    def __init__(self, message: str, field: str = None, value=None):
        self.field = field
        self.value = value
        super().__init__(message)
