from typing import Protocol, runtime_checkable

from lxml import etree

from atomfeed.core.types import ContentQuery, ContentRecord


@runtime_checkable
class ContentStore(Protocol):
    """Resolves identifiers to content records and answers queries."""

    def get_text(self, key: str) -> str | None:
        """Returns the body text stored under ``key``, or None."""
        ...

    def get_record(self, identifier: str) -> ContentRecord:
        """Returns the record for ``identifier``.

        Raises RecordNotFoundError when the store has no such record.
        """
        ...

    def filter(self, query: ContentQuery) -> list[str]:
        """Returns the identifiers selected by ``query``, in query order."""
        ...


@runtime_checkable
class Renderer(Protocol):
    """Turns record markup into plain text or an embeddable XHTML tree."""

    def render_text(self, text: str, source_type: str = "text/markdown", target_type: str = "text/plain") -> str: ...

    def render_tree(self, text: str, source_type: str = "text/markdown") -> etree._Element:
        """Returns an XHTML ``div`` holding the rendered markup."""
        ...


@runtime_checkable
class Hasher(Protocol):
    """Maps a string to a stable unique identifier."""

    def __call__(self, value: str) -> str: ...


@runtime_checkable
class OutputSink(Protocol):
    """Final destination for a serialized feed."""

    def publish(self, xml: str) -> None: ...
