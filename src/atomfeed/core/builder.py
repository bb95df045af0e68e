"""Top-level feed generation."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from atomfeed.core.atom import FeedAssembler
from atomfeed.core.config import AtomFeedConfig
from atomfeed.core.entries import EntryResolver
from atomfeed.core.metadata import MetadataResolver
from atomfeed.core.ports import ContentStore, Hasher, Renderer
from atomfeed.core.rendering import MarkdownRenderer
from atomfeed.core.types import FEED_QUERY, MetadataOverrides
from atomfeed.core.utils import md5_guid

logger = logging.getLogger(__name__)


class FeedBuilder:
    """Builds an Atom document from an ordered list of record identifiers.

    Each call to :meth:`build` is independent: metadata is resolved afresh,
    then every identifier is resolved in order and appended as an entry.
    Any store or renderer failure propagates and no document is returned.
    """

    def __init__(
        self,
        store: ContentStore,
        config: AtomFeedConfig | None = None,
        renderer: Renderer | None = None,
        hasher: Hasher = md5_guid,
    ) -> None:
        self.store = store
        self.config = config or AtomFeedConfig()
        self.renderer = renderer or MarkdownRenderer()
        self.metadata_resolver = MetadataResolver(store, self.config.site, self.config.feed, hasher)
        self.entry_resolver = EntryResolver(self.renderer, self.config.feed, hasher)
        self.assembler = FeedAssembler(self.renderer)

    def build(self, identifiers: Sequence[str], overrides: MetadataOverrides | None = None) -> str:
        records = [self.store.get_record(identifier) for identifier in identifiers]
        metadata = self.metadata_resolver.resolve(records, overrides)
        entries = [self.entry_resolver.resolve(record, metadata) for record in records]
        logger.info("Built feed %r with %d entries", metadata.title, len(entries))
        return self.assembler.assemble(metadata, entries)

    def feed_identifiers(self) -> list[str]:
        """Identifiers of every feed-eligible record, newest first."""
        query = FEED_QUERY.model_copy(update={"limit": self.config.feed.max_entries})
        return self.store.filter(query)


def build_feed(
    store: ContentStore,
    identifiers: Sequence[str],
    overrides: MetadataOverrides | None = None,
    config: AtomFeedConfig | None = None,
) -> str:
    """Convenience wrapper around :class:`FeedBuilder`."""
    return FeedBuilder(store, config=config).build(identifiers, overrides)
