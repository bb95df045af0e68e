"""Core exceptions for the atomfeed package."""


class AtomFeedError(Exception):
    """Base exception for all atomfeed errors."""


class RecordNotFoundError(AtomFeedError, KeyError):
    """Raised when a content store cannot resolve an identifier."""

    def __init__(self, identifier: str) -> None:
        self.identifier = identifier
        super().__init__(f"No content record found for {identifier!r}")

    def __str__(self) -> str:
        return self.args[0]


class InvalidRecordError(AtomFeedError):
    """Raised when a stored record cannot be parsed into a ContentRecord."""


class UnsupportedFormatError(AtomFeedError):
    """Raised when the renderer does not know a markup type."""
