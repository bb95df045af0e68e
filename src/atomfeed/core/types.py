"""Core data types for atomfeed."""

from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any, Literal

from lxml import etree
from pydantic import BaseModel, ConfigDict, Field, field_validator

from atomfeed.core.utils import parse_timestamp

SYSTEM_PREFIX = "$:/"
DEFAULT_BODY_TYPE = "text/markdown"


# --- Store Domain ---
class ContentRecord(BaseModel):
    """A content item as held by the content store. Read-only."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str = Field(min_length=1)
    text: str = ""
    type: str = DEFAULT_BODY_TYPE
    created: datetime | None = None
    modified: datetime | None = None
    creator: str | None = None
    modifier: str | None = None
    summary: str | None = None
    tags: tuple[str, ...] = ()
    draft_of: str | None = Field(default=None, alias="draft.of")

    @field_validator("created", "modified", mode="before")
    @classmethod
    def _parse_store_timestamp(cls, value: Any) -> Any:
        if isinstance(value, int):
            value = str(value)
        if isinstance(value, str):
            return parse_timestamp(value) if value.strip() else None
        if isinstance(value, datetime) and value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value

    @field_validator("tags", mode="before")
    @classmethod
    def _split_tag_string(cls, value: Any) -> Any:
        if isinstance(value, str):
            return tuple(value.split())
        return value

    @field_validator("type", mode="before")
    @classmethod
    def _default_empty_type(cls, value: Any) -> Any:
        return value or DEFAULT_BODY_TYPE

    @property
    def is_system(self) -> bool:
        return self.title.startswith(SYSTEM_PREFIX)

    @property
    def is_draft(self) -> bool:
        return bool(self.draft_of)


class ContentQuery(BaseModel):
    """Selection of records from a content store.

    The defaults select every record that belongs in a feed: no system
    records, no drafts, at least one tag, nothing tagged ``static`` and no
    record that is itself used as a tag. Newest first.
    """

    model_config = ConfigDict(frozen=True)

    include_system: bool = False
    include_drafts: bool = False
    require_tags: bool = True
    exclude_tags: tuple[str, ...] = ("static",)
    exclude_tag_records: bool = True
    sort_by: Literal["modified", "created", "title"] = "modified"
    descending: bool = True
    limit: int | None = Field(default=None, ge=1)

    def apply(self, records: Iterable[ContentRecord]) -> list[str]:
        """Return the titles of ``records`` matching this query, in order."""
        records = list(records)
        tags_in_use = {tag for record in records for tag in record.tags}
        selected = [record for record in records if self._matches(record, tags_in_use)]
        selected.sort(key=self._sort_key, reverse=self.descending)
        titles = [record.title for record in selected]
        if self.limit is not None:
            titles = titles[: self.limit]
        return titles

    def _matches(self, record: ContentRecord, tags_in_use: set[str]) -> bool:
        if record.is_system and not self.include_system:
            return False
        if record.is_draft and not self.include_drafts:
            return False
        if self.require_tags and not record.tags:
            return False
        if any(tag in self.exclude_tags for tag in record.tags):
            return False
        if self.exclude_tag_records and record.title in tags_in_use:
            return False
        return True

    def _sort_key(self, record: ContentRecord) -> tuple:
        if self.sort_by == "title":
            return (True, record.title)
        value = getattr(record, self.sort_by)
        # Records without a timestamp sort after dated ones when descending
        return (value is not None, value or datetime.min.replace(tzinfo=UTC))


FEED_QUERY = ContentQuery()
LATEST_QUERY = ContentQuery(limit=1)


# --- Feed Domain ---
class MetadataOverrides(BaseModel):
    """Caller-supplied replacements for derived feed metadata."""

    model_config = ConfigDict(frozen=True)

    title: str | None = None
    subtitle: str | None = None
    author: str | None = None
    feed_path: str | None = None


class FeedMetadata(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    subtitle: str
    feed_href: str
    site_href: str
    author: str
    updated: str
    uuid: str


class EntryMetadata(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    title: str
    updated: str
    uuid: str
    permalink_href: str
    static_href: str
    summary: str | None = None
    author: str
    rendered_body: etree._Element
