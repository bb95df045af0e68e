"""Atom feed generation from content store records."""

from atomfeed.core.builder import FeedBuilder, build_feed
from atomfeed.core.types import ContentRecord, MetadataOverrides

__all__ = ["ContentRecord", "FeedBuilder", "MetadataOverrides", "build_feed"]
