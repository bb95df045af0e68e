"""Atom feed serialization."""

from collections.abc import Iterable
from copy import deepcopy

from lxml import etree
from lxml.builder import ElementMaker

from atomfeed.core.ports import Renderer
from atomfeed.core.types import EntryMetadata, FeedMetadata

ATOM_NS = "http://www.w3.org/2005/Atom"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'

A = ElementMaker(namespace=ATOM_NS, nsmap={None: ATOM_NS})


def atom_entry(entry: EntryMetadata) -> etree._Element:
    """Build the ``entry`` element for one resolved entry."""
    children = [
        A.title(entry.title),
        A.link(href=entry.permalink_href),
        A.link(rel="alternate", type="text/html", href=entry.static_href),
        A.id(entry.uuid),
        A.updated(entry.updated),
    ]
    if entry.summary is not None:
        children.append(A.summary(entry.summary))
    children.append(A.content(deepcopy(entry.rendered_body), type="xhtml"))
    children.append(A.author(A.name(entry.author)))
    return A.entry(*children)


def atom_feed(metadata: FeedMetadata, title: str, subtitle: str, entries: Iterable[etree._Element]) -> etree._Element:
    """Build the ``feed`` element. ``title`` and ``subtitle`` are already plain text."""
    return A.feed(
        A.title(title),
        A.subtitle(subtitle),
        A.link(href=metadata.feed_href, rel="self"),
        A.link(href=metadata.site_href),
        A.author(A.name(metadata.author)),
        A.id(metadata.uuid),
        A.updated(metadata.updated),
        *entries,
    )


def feed_to_xml_string(feed: etree._Element) -> str:
    """Serialize a feed tree with its XML declaration.

    Canonical XML writes every element as a start/end tag pair, so empty
    elements never collapse into ``<link/>`` shorthand.
    """
    body = etree.tostring(feed, method="c14n", with_comments=False)
    return XML_DECLARATION + body.decode("utf-8")


class FeedAssembler:
    """Assembles resolved metadata into a serialized Atom document."""

    def __init__(self, renderer: Renderer) -> None:
        self.renderer = renderer

    def build_tree(self, metadata: FeedMetadata, entries: Iterable[EntryMetadata]) -> etree._Element:
        return atom_feed(
            metadata,
            title=self.renderer.render_text(metadata.title),
            subtitle=self.renderer.render_text(metadata.subtitle),
            entries=[atom_entry(entry) for entry in entries],
        )

    def assemble(self, metadata: FeedMetadata, entries: Iterable[EntryMetadata]) -> str:
        return feed_to_xml_string(self.build_tree(metadata, entries))
