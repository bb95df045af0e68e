"""In-memory content store."""

from __future__ import annotations

from collections.abc import Iterable, Mapping

from atomfeed.core.exceptions import RecordNotFoundError
from atomfeed.core.types import ContentQuery, ContentRecord


class MemoryContentStore:
    """Content store holding records in a dict keyed by title.

    ``texts`` holds plain configuration texts (e.g. ``$:/SiteTitle``) that
    are not full records; a record's body is used when no text is set.
    """

    def __init__(self, records: Iterable[ContentRecord] = (), texts: Mapping[str, str] | None = None) -> None:
        self._records: dict[str, ContentRecord] = {}
        self._texts: dict[str, str] = dict(texts or {})
        for record in records:
            self.add(record)

    def add(self, record: ContentRecord) -> None:
        self._records[record.title] = record

    def set_text(self, key: str, value: str) -> None:
        self._texts[key] = value

    def get_text(self, key: str) -> str | None:
        if key in self._texts:
            return self._texts[key]
        record = self._records.get(key)
        return record.text if record else None

    def get_record(self, identifier: str) -> ContentRecord:
        try:
            return self._records[identifier]
        except KeyError:
            raise RecordNotFoundError(identifier) from None

    def filter(self, query: ContentQuery) -> list[str]:
        return query.apply(self._records.values())

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self._records
