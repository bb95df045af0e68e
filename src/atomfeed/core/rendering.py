"""Rendering of record markup into plain text and XHTML trees."""

import html
import logging

import lxml.html
from lxml import etree
from markdown_it import MarkdownIt

from atomfeed.core.exceptions import UnsupportedFormatError

logger = logging.getLogger(__name__)

XHTML_NS = "http://www.w3.org/1999/xhtml"

MARKDOWN_TYPES = frozenset({"text/markdown", "text/x-markdown"})
HTML_TYPES = frozenset({"text/html"})
PLAIN_TYPES = frozenset({"text/plain"})

# --- Markdown Renderer ---
_md = MarkdownIt("commonmark", {"html": True})
# Titles are text: "<Site>" must survive rather than parse as a tag
_md_inline = MarkdownIt("commonmark", {"html": False})


class MarkdownRenderer:
    """Renders Markdown, HTML and plain-text bodies.

    Block content is rendered with markdown-it, parsed leniently with
    ``lxml.html`` and copied into the XHTML namespace so it can sit inside an
    Atom ``content type="xhtml"`` element.
    """

    def render_text(self, text: str, source_type: str = "text/markdown", target_type: str = "text/plain") -> str:
        """Render ``text`` to ``target_type`` (``text/plain`` or ``text/html``)."""
        if target_type == "text/html":
            return self.render_html(text, source_type).strip()
        if target_type != "text/plain":
            msg = f"Cannot render to {target_type!r}"
            raise UnsupportedFormatError(msg)

        if not text or source_type in PLAIN_TYPES:
            return text
        if source_type in MARKDOWN_TYPES:
            markup = _md_inline.renderInline(text)
        elif source_type in HTML_TYPES:
            markup = text
        else:
            msg = f"Cannot render {source_type!r} markup"
            raise UnsupportedFormatError(msg)
        return _text_content(markup)

    def render_html(self, text: str, source_type: str = "text/markdown") -> str:
        if source_type in MARKDOWN_TYPES:
            return _md.render(text)
        if source_type in HTML_TYPES:
            return text
        if source_type in PLAIN_TYPES:
            return f"<pre>{html.escape(text, quote=False)}</pre>" if text else ""
        msg = f"Cannot render {source_type!r} markup"
        raise UnsupportedFormatError(msg)

    def render_tree(self, text: str, source_type: str = "text/markdown") -> etree._Element:
        """Render ``text`` into a ``div`` element in the XHTML namespace.

        Elements whose names are not valid XML names are unwrapped and such
        attributes (``@click``, ``:class``) are dropped.
        """
        markup = self.render_html(text, source_type)
        body = etree.Element(f"{{{XHTML_NS}}}div", nsmap={None: XHTML_NS})
        if markup.strip():
            _copy_children(lxml.html.fragment_fromstring(markup, create_parent="div"), body)
        return body


def _copy_children(source: etree._Element, target: etree._Element) -> None:
    _append_text(target, source.text)
    for child in source:
        # Comments and processing instructions are skipped, their tail is kept
        if isinstance(child.tag, str):
            element = _xhtml_element(target, child)
            _copy_children(child, target if element is None else element)
        _append_text(target, child.tail)


def _xhtml_element(parent: etree._Element, source: etree._Element) -> etree._Element | None:
    try:
        element = etree.SubElement(parent, f"{{{XHTML_NS}}}{source.tag}")
    except ValueError:
        logger.debug("Unwrapping element with invalid name %r", source.tag)
        return None

    for name, value in source.attrib.items():
        try:
            element.set(name, value)
        except ValueError:
            logger.debug("Dropping attribute %r from <%s>", name, source.tag)
    return element


def _append_text(element: etree._Element, text: str | None) -> None:
    if not text:
        return
    if len(element):
        last = element[-1]
        last.tail = (last.tail or "") + text
    else:
        element.text = (element.text or "") + text


def _text_content(markup: str) -> str:
    if not markup.strip():
        return ""
    fragment = lxml.html.fragment_fromstring(markup, create_parent="div")
    return fragment.text_content()
