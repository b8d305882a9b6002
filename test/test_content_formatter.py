"""
Tests for the content formatter.

Verifies section order, type-dependent branches, truncation limits and
body precedence.
"""

from graphlit_mcp.formatting import format_content
from graphlit_mcp.formatting.content import (
    MAX_CHILDREN,
    MAX_COLLECTIONS,
    MAX_LINKS,
    MAX_OBSERVATIONS,
    pluralize,
)
from graphlit_mcp.models import Content


def render(**record) -> str:
    return format_content(Content.model_validate(record))


class TestIdentity:
    """Header lines that identify the content."""

    def test_file_report(self) -> None:
        text = render(
            id="abc123",
            type="File",
            fileType="Document",
            fileName="report.pdf",
            document={"title": "Q1 Report", "author": "J. Doe"},
            markdown="# Report body",
        )

        assert text == "\n".join([
            "**Content ID:** abc123",
            "**File Type:** [Document]",
            "**File Name:** report.pdf",
            "**Title:** Q1 Report",
            "**Author:** J. Doe",
            "# Report body",
            "\n",
        ])
        assert text.endswith("# Report body\n\n")

    def test_page_name_suppressed(self) -> None:
        text = render(id="p1", type="PAGE", name="Home page")

        assert text.splitlines() == ["**Content ID:** p1", "**Type:** [PAGE]"]

    def test_email_name_suppressed(self) -> None:
        text = render(id="e1", type="EMAIL", name="Re: invoice")

        assert "**Name:**" not in text

    def test_other_types_show_name(self) -> None:
        text = render(id="m1", type="MESSAGE", name="standup")

        assert text.splitlines() == [
            "**Content ID:** m1",
            "**Type:** [MESSAGE]",
            "**Name:** standup",
        ]

    def test_missing_content(self) -> None:
        assert format_content(None) == ""

    def test_deterministic(self) -> None:
        content = Content.model_validate({
            "id": "x",
            "type": "FILE",
            "fileType": "AUDIO",
            "audio": {"title": "Ep 1", "author": "Host"},
            "segments": [{"startTime": "00:00", "endTime": "00:05", "text": "hi"}],
        })

        assert format_content(content) == format_content(content)


class TestMetadata:
    """Dates, downloads and facet sections."""

    def test_downloads_and_dates(self) -> None:
        text = render(
            id="f1",
            type="FILE",
            fileType="IMAGE",
            fileName="cat.png",
            uri="https://source/cat.png",
            masterUri="https://cdn/master.png",
            imageUri="https://cdn/image.png",
            creationDate="2024-01-02T00:00:00Z",
            originalDate="2023-12-31T00:00:00Z",
            image={"description": "A cat", "make": "Canon"},
        )

        assert text.splitlines()[3:] == [
            "**Downloadable Original:** https://cdn/master.png",
            "**Downloadable Image:** https://cdn/image.png",
            "**Ingestion Date:** 2024-01-02T00:00:00Z",
            "**Author Date:** 2023-12-31T00:00:00Z",
            "**Description:** A cat",
            "**Make:** Canon",
        ]
        assert "https://source/cat.png" not in text

    def test_email_facet(self) -> None:
        text = render(
            id="e1",
            type="EMAIL",
            email={
                "subject": "Invoice",
                "labels": ["INBOX", "IMPORTANT"],
                "from": [{"name": "Ann", "email": "ann@example.com"}],
                "to": [
                    {"name": "Bob", "email": "bob@example.com"},
                    {"name": "Cy", "email": "cy@example.com"},
                ],
            },
        )

        assert "**Subject:** Invoice" in text
        assert "**Labels:** INBOX, IMPORTANT" in text
        assert "**To:** Bob <bob@example.com>, Cy <cy@example.com>" in text
        assert "**From:** Ann <ann@example.com>" in text
        assert "**CC:**" not in text

    def test_issue_facet(self) -> None:
        text = render(
            id="i1",
            type="ISSUE",
            name="Crash on save",
            issue={"identifier": "ENG-42", "status": "Open", "labels": ["bug"]},
        )

        assert text.splitlines()[3:] == [
            "**Identifier:** ENG-42",
            "**Status:** Open",
            "**Labels:** bug",
        ]

    def test_audio_author_is_host(self) -> None:
        text = render(id="a1", type="FILE", fileType="AUDIO", audio={"author": "Jane"})

        assert "**Host:** Jane" in text

    def test_numeric_episode(self) -> None:
        text = render(
            id="pod1", type="FILE", fileType="AUDIO", audio={"episode": 3, "series": "Weekly"}
        )

        assert "**Episode:** 3" in text
        assert "**Series:** Weekly" in text

    def test_null_recipients_and_labels(self) -> None:
        text = render(
            id="e1",
            type="EMAIL",
            email={
                "labels": [None, "INBOX"],
                "to": [None, {"name": "Bob", "email": "bob@example.com"}],
                "cc": [None],
            },
            issue={"labels": [None]},
        )

        assert "**Labels:** INBOX" in text
        assert "**To:** Bob <bob@example.com>" in text
        assert "**CC:**" not in text
        assert text.count("**Labels:**") == 1


class TestRelations:
    """Collections, parent, children, links and observations."""

    def test_collections_truncated(self) -> None:
        collections = [{"id": f"c{i}", "name": f"Col {i}"} for i in range(150)]
        text = render(id="x", type="TEXT", name="n", collections=collections)

        lines = [line for line in text.splitlines() if line.startswith("**Collection [")]
        assert len(lines) == MAX_COLLECTIONS
        assert lines[0] == "**Collection [Col 0]:** collections://c0"

    def test_parent_and_children(self) -> None:
        text = render(
            id="x",
            type="FILE",
            fileType="PACKAGE",
            parent={"id": "p1"},
            children=[{"id": "k1"}, {"id": "k2"}],
        )

        assert "**Parent Content:** contents://p1" in text
        assert "**Child Content:** contents://k1\n**Child Content:** contents://k2" in text

    def test_children_truncated(self) -> None:
        children = [{"id": f"k{i}"} for i in range(150)]
        text = render(id="x", type="FILE", fileType="PACKAGE", children=children)

        lines = [line for line in text.splitlines() if line.startswith("**Child Content:**")]
        assert len(lines) == MAX_CHILDREN
        assert lines[-1] == "**Child Content:** contents://k99"

    def test_null_relations_skipped(self) -> None:
        text = render(
            id="p1",
            type="PAGE",
            collections=[None, {"id": "c1", "name": "Inbox"}],
            children=[{"id": "k1"}, None],
            links=[None, {"linkType": "EXTERNAL", "uri": "https://example.com"}],
            observations=[None, {"type": "PERSON", "observable": {"id": "p9"}}],
        )

        assert text.splitlines()[2:] == [
            "**Collection [Inbox]:** collections://c1",
            "**Child Content:** contents://k1",
            "**EXTERNAL Link:** https://example.com",
            "**Observed PERSON:** persons://p9",
        ]

    def test_links_truncated(self) -> None:
        links = [{"linkType": "EXTERNAL", "uri": f"https://example.com/{i}"} for i in range(1500)]
        text = render(id="p1", type="PAGE", links=links)

        lines = [line for line in text.splitlines() if line.startswith("**EXTERNAL Link:**")]
        assert len(lines) == MAX_LINKS

    def test_links_only_for_pages(self) -> None:
        text = render(
            id="m1",
            type="MESSAGE",
            links=[{"linkType": "EXTERNAL", "uri": "https://example.com"}],
        )

        assert "Link:**" not in text

    def test_observations(self) -> None:
        text = render(
            id="x",
            type="TEXT",
            observations=[
                {"type": "PERSON", "observable": {"id": "p1", "name": "Ann"}},
                {"type": "LABEL", "observable": None},
                {"type": "CATEGORY", "observable": {"id": "c1"}},
            ],
        )

        assert "**Observed PERSON:** persons://p1" in text
        assert "**Observed CATEGORY:** categories://c1" in text
        assert "LABEL" not in text

    def test_observations_truncated(self) -> None:
        observations = [
            {"type": "ORGANIZATION", "observable": {"id": f"o{i}"}} for i in range(150)
        ]
        text = render(id="x", type="TEXT", name="n", observations=observations)

        lines = [line for line in text.splitlines() if line.startswith("**Observed ")]
        assert len(lines) == MAX_OBSERVATIONS
        assert lines[0] == "**Observed ORGANIZATION:** organizations://o0"

    def test_pluralize(self) -> None:
        assert pluralize("Organization") == "organizations"
        assert pluralize("Category") == "categories"
        assert pluralize("Day") == "days"
        assert pluralize("Box") == "boxes"
        assert pluralize("PERSON") == "persons"


class TestBody:
    """Exactly one body representation is rendered."""

    def test_pages_take_precedence(self) -> None:
        text = render(
            id="p1",
            type="PAGE",
            pages=[
                {"index": 0, "chunks": [{"text": "first"}, {"text": "second"}]},
                {"index": 1, "chunks": []},
                {"index": 2, "chunks": [{"text": "third"}]},
            ],
            segments=[{"startTime": "0", "endTime": "1", "text": "spoken"}],
            markdown="ignored markdown",
        )

        assert text.splitlines()[2:] == [
            "**Page #1:**",
            "first",
            "second",
            "",
            "---",
            "",
            "**Page #3:**",
            "third",
            "",
            "---",
        ]
        assert "**Page #2:**" not in text
        assert "spoken" not in text
        assert "ignored markdown" not in text

    def test_segments(self) -> None:
        text = render(
            id="v1",
            type="FILE",
            fileType="VIDEO",
            segments=[
                {"startTime": "00:00:00", "endTime": "00:00:05", "text": "Hello"},
                {"startTime": "00:00:05", "endTime": "00:00:09", "text": "World"},
            ],
            markdown="ignored",
        )

        assert "**Transcript Segment [00:00:00-00:00:05]:**\nHello\n\n---\n" in text
        assert "**Transcript Segment [00:00:05-00:00:09]:**\nWorld" in text
        assert "ignored" not in text

    def test_frames(self) -> None:
        text = render(
            id="v1",
            type="FILE",
            fileType="VIDEO",
            frames=[{"index": 0, "text": "slide one"}],
        )

        assert "**Frame #1:**\nslide one" in text

    def test_frames_before_markdown(self) -> None:
        text = render(
            id="v1",
            type="FILE",
            fileType="VIDEO",
            frames=[{"index": 0, "text": "slide one"}, None, {"index": 1, "text": "slide two"}],
            markdown="# Slides",
        )

        assert text.splitlines()[3:] == [
            "**Frame #1:**",
            "slide one",
            "",
            "---",
            "",
            "**Frame #2:**",
            "slide two",
            "",
            "---",
        ]
        assert "# Slides" not in text

    def test_null_pages_fall_through(self) -> None:
        text = render(id="t1", type="TEXT", name="n", pages=[None], markdown="body")

        assert text.endswith("**Name:** n\nbody\n\n")

    def test_no_body(self) -> None:
        text = render(id="t1", type="TEXT", name="empty")

        assert text == "**Content ID:** t1\n**Type:** [TEXT]\n**Name:** empty"
