"""Entry-level metadata resolution."""

from __future__ import annotations

from atomfeed.core.config import FeedSettings
from atomfeed.core.ports import Hasher, Renderer
from atomfeed.core.types import ContentRecord, EntryMetadata, FeedMetadata
from atomfeed.core.utils import format_timestamp, md5_guid, path_join, to_file_name, to_permalink, truncate_words

STATIC_DIR = "static"


class EntryResolver:
    """Derives the metadata of one feed entry from a content record."""

    def __init__(self, renderer: Renderer, feed: FeedSettings | None = None, hasher: Hasher = md5_guid) -> None:
        self.renderer = renderer
        self.feed = feed or FeedSettings()
        self.hasher = hasher

    def resolve(self, record: ContentRecord, feed_metadata: FeedMetadata) -> EntryMetadata:
        title = record.title
        return EntryMetadata(
            title=title,
            updated=format_timestamp(record.modified, self.feed.timestamp_format),
            uuid=self.hasher(title),
            permalink_href=path_join([feed_metadata.site_href, to_permalink(title)]),
            static_href=path_join([feed_metadata.site_href, STATIC_DIR, to_file_name(title)]),
            summary=self._summary(record),
            author=record.modifier or record.creator or feed_metadata.author,
            rendered_body=self.renderer.render_tree(record.text, record.type),
        )

    def _summary(self, record: ContentRecord) -> str | None:
        if record.summary:
            return record.summary
        if self.feed.summary_fallback:
            return truncate_words(record.text, self.feed.summary_words)
        return None
