"""Feed-level metadata resolution."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from atomfeed.core.config import FeedSettings, SiteSettings
from atomfeed.core.ports import ContentStore, Hasher
from atomfeed.core.types import LATEST_QUERY, ContentRecord, FeedMetadata, MetadataOverrides
from atomfeed.core.utils import format_timestamp, md5_guid, path_join

logger = logging.getLogger(__name__)

SITE_TITLE_KEY = "$:/SiteTitle"
SITE_SUBTITLE_KEY = "$:/SiteSubtitle"
SERVER_URL_KEY = "$:/config/atomserver"


def freshest_record(records: Sequence[ContentRecord]) -> ContentRecord | None:
    """Return the record with the latest ``modified`` timestamp.

    Undated records are never chosen; the first record wins a tie.
    """
    freshest: ContentRecord | None = None
    for record in records:
        if record.modified is None:
            continue
        if freshest is None or record.modified > freshest.modified:
            freshest = record
    return freshest


class MetadataResolver:
    """Derives the feed-wide metadata once per build."""

    def __init__(
        self,
        store: ContentStore,
        site: SiteSettings | None = None,
        feed: FeedSettings | None = None,
        hasher: Hasher = md5_guid,
    ) -> None:
        self.store = store
        self.site = site or SiteSettings()
        self.feed = feed or FeedSettings()
        self.hasher = hasher

    def resolve(
        self,
        records: Sequence[ContentRecord] | None,
        overrides: MetadataOverrides | None = None,
    ) -> FeedMetadata:
        """Resolve feed metadata for ``records``.

        When ``records`` is None the store is asked for its most recently
        modified feed-eligible record instead.
        """
        overrides = overrides or MetadataOverrides()
        if records is None:
            records = self._latest_from_store()

        title = overrides.title or self._site_value(self.site.title, SITE_TITLE_KEY)
        subtitle = overrides.subtitle or self._site_value(self.site.subtitle, SITE_SUBTITLE_KEY)
        site_href = self._site_value(self.site.server_url, SERVER_URL_KEY)
        freshest = freshest_record(records)

        metadata = FeedMetadata(
            title=title,
            subtitle=subtitle,
            feed_href=path_join([site_href, overrides.feed_path or self.feed.path]),
            site_href=site_href,
            author=overrides.author or (freshest.creator if freshest else None) or "",
            updated=format_timestamp(freshest.modified if freshest else None, self.feed.timestamp_format),
            uuid=self.hasher(title),
        )
        logger.debug("Resolved feed metadata %s (freshest: %s)", metadata.uuid, freshest.title if freshest else None)
        return metadata

    def _site_value(self, configured: str | None, key: str) -> str:
        # Stored texts usually come from files ending in a newline
        for value in (configured, self.store.get_text(key)):
            if value and value.strip():
                return value.strip()
        return ""

    def _latest_from_store(self) -> list[ContentRecord]:
        return [self.store.get_record(identifier) for identifier in self.store.filter(LATEST_QUERY)]
