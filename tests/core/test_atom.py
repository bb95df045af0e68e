"""Tests for Atom tree construction and serialization."""

import pytest
from lxml import etree

from atomfeed.core.atom import XML_DECLARATION, FeedAssembler, atom_entry, feed_to_xml_string
from atomfeed.core.types import EntryMetadata, FeedMetadata

ATOM_NS = "http://www.w3.org/2005/Atom"
XHTML_NS = "http://www.w3.org/1999/xhtml"


def atom(tag: str) -> str:
    return f"{{{ATOM_NS}}}{tag}"


def local_names(element: etree._Element) -> list[str]:
    return [etree.QName(child).localname for child in element]


@pytest.fixture
def metadata() -> FeedMetadata:
    return FeedMetadata(
        title="My *wiki*",
        subtitle="",
        feed_href="https://site.example/atom.xml",
        site_href="https://site.example/",
        author="alice",
        updated="2024-03-01T09:00:00",
        uuid="feed-uuid",
    )


@pytest.fixture
def make_entry(renderer):
    def _make(title: str, summary: str | None = None, body: str = "Body text") -> EntryMetadata:
        return EntryMetadata(
            title=title,
            updated="2024-01-01T00:00:00",
            uuid=f"uuid-{title}",
            permalink_href=f"https://site.example/#{title}",
            static_href=f"https://site.example/static/{title}.html",
            summary=summary,
            author="bob",
            rendered_body=renderer.render_tree(body),
        )

    return _make


@pytest.fixture
def assembler(renderer) -> FeedAssembler:
    return FeedAssembler(renderer)


def test_feed_children_in_fixed_order(assembler, metadata, make_entry):
    tree = assembler.build_tree(metadata, [make_entry("One")])

    assert tree.tag == atom("feed")
    assert local_names(tree) == ["title", "subtitle", "link", "link", "author", "id", "updated", "entry"]


def test_feed_metadata_values(assembler, metadata):
    tree = assembler.build_tree(metadata, [])

    assert tree.findtext(atom("title")) == "My wiki"
    assert tree.findtext(atom("subtitle")) == ""
    self_link, site_link = tree.findall(atom("link"))
    assert dict(self_link.attrib) == {"href": "https://site.example/atom.xml", "rel": "self"}
    assert dict(site_link.attrib) == {"href": "https://site.example/"}
    assert tree.findtext(f"{atom('author')}/{atom('name')}") == "alice"
    assert tree.findtext(atom("id")) == "feed-uuid"
    assert tree.findtext(atom("updated")) == "2024-03-01T09:00:00"


def test_entry_children_in_fixed_order(make_entry):
    entry = atom_entry(make_entry("One", summary="Short"))

    assert local_names(entry) == ["title", "link", "link", "id", "updated", "summary", "content", "author"]
    primary, alternate = entry.findall(atom("link"))
    assert dict(primary.attrib) == {"href": "https://site.example/#One"}
    assert dict(alternate.attrib) == {
        "rel": "alternate",
        "type": "text/html",
        "href": "https://site.example/static/One.html",
    }
    assert entry.findtext(atom("summary")) == "Short"
    assert entry.findtext(f"{atom('author')}/{atom('name')}") == "bob"


def test_entry_without_summary_has_no_summary_element(make_entry):
    entry = atom_entry(make_entry("One"))

    assert entry.find(atom("summary")) is None
    assert local_names(entry) == ["title", "link", "link", "id", "updated", "content", "author"]


def test_entry_with_empty_summary_keeps_element(make_entry):
    entry = atom_entry(make_entry("One", summary=""))

    assert entry.find(atom("summary")) is not None


def test_entry_content_wraps_xhtml_div(make_entry):
    content = atom_entry(make_entry("One", body="Hello *there*")).find(atom("content"))

    assert content.get("type") == "xhtml"
    (div,) = content
    assert div.tag == f"{{{XHTML_NS}}}div"


def test_entry_body_is_copied_not_moved(make_entry):
    entry = make_entry("One")

    atom_entry(entry)
    atom_entry(entry)

    assert entry.rendered_body.getparent() is None


def test_entries_keep_input_order(assembler, metadata, make_entry):
    titles = ["Zeta", "Alpha", "Mu", "Alpha"]

    tree = assembler.build_tree(metadata, [make_entry(title) for title in titles])

    assert [entry.findtext(atom("title")) for entry in tree.findall(atom("entry"))] == titles


# ========== Serialization ==========


def test_serialized_feed_starts_with_declaration(assembler, metadata):
    xml = assembler.assemble(metadata, [])

    assert xml.startswith('<?xml version="1.0" encoding="utf-8"?>\n<feed xmlns="http://www.w3.org/2005/Atom">')
    assert XML_DECLARATION == '<?xml version="1.0" encoding="utf-8"?>\n'


def test_serialized_feed_never_self_closes(assembler, metadata, make_entry):
    xml = assembler.assemble(metadata, [make_entry("One", body="line<br>next\n\n---")])

    assert "/>" not in xml
    assert "<subtitle></subtitle>" in xml
    assert '<link href="https://site.example/atom.xml" rel="self"></link>' in xml
    assert '<link href="https://site.example/"></link>' in xml
    assert '<link href="https://site.example/static/One.html" rel="alternate" type="text/html"></link>' in xml
    assert "<br></br>" in xml
    assert "<hr></hr>" in xml


def test_serialized_content_declares_xhtml_namespace(assembler, metadata, make_entry):
    xml = assembler.assemble(metadata, [make_entry("One", body="Hi")])

    assert f'<content type="xhtml"><div xmlns="{XHTML_NS}"><p>Hi</p>' in xml


def test_serialized_text_is_escaped(assembler, metadata, make_entry):
    xml = assembler.assemble(metadata, [make_entry("Cats & <Dogs>")])

    assert "<title>Cats &amp; &lt;Dogs&gt;</title>" in xml


def test_serialized_feed_parses_back(assembler, metadata, make_entry):
    xml = assembler.assemble(metadata, [make_entry("One"), make_entry("Two")])

    root = etree.fromstring(xml.encode("utf-8"))
    assert root.tag == atom("feed")
    assert len(root.findall(atom("entry"))) == 2


def test_feed_to_xml_string_of_bare_tree():
    root = etree.Element(atom("feed"), nsmap={None: ATOM_NS})
    etree.SubElement(root, atom("id"))

    assert feed_to_xml_string(root) == f'{XML_DECLARATION}<feed xmlns="{ATOM_NS}"><id></id></feed>'
