"""Tests for issue -> markdown rendering."""

from markdown_generator import MarkdownGenerator, format_date


def test_render_title_and_body(make_issue) -> None:
    """Rendered document contains the title, number and body verbatim."""
    issue = make_issue(number=42, title="Bug", body="It crashes")
    md = MarkdownGenerator().render(issue, [])

    assert md.startswith("# #42: Bug\n")
    assert "It crashes" in md


def test_render_metadata_line(make_issue) -> None:
    issue = make_issue(number=3, state="closed", author="octocat")
    md = MarkdownGenerator().render(issue, [])

    assert (
        "> state: **closed** opened by: **octocat** on: **2024-01-15 10:00:00** "
        "link: https://github.com/owner/repo/issues/3"
    ) in md


def test_render_is_deterministic(make_issue, make_comment) -> None:
    issue = make_issue()
    comments = [make_comment("alice", "one"), make_comment("bob", "two", minute=5)]
    generator = MarkdownGenerator()

    assert generator.render(issue, comments) == generator.render(issue, comments)


def test_render_without_comments_has_no_comment_section(make_issue) -> None:
    md = MarkdownGenerator().render(make_issue(), [])
    assert "### Comments" not in md
    assert "---" not in md


def test_render_comments_in_given_order(make_issue, make_comment) -> None:
    comments = [
        make_comment("zed", "Later reply", minute=30, url="https://github.com/o/r/issues/1#issuecomment-2"),
        make_comment("amy", "Earlier reply", minute=1),
    ]
    md = MarkdownGenerator().render(make_issue(), comments)

    assert "### Comments" in md
    assert md.index("Later reply") < md.index("Earlier reply")
    assert "> from: [**zed**](https://github.com/o/r/issues/1#issuecomment-2) on: **2024-01-16 12:30:00**" in md
    assert "> from: **amy** on: **2024-01-16 12:01:00**" in md
    assert md.count("\n---\n") == 2


def test_render_comments_error_note(make_issue, make_comment) -> None:
    md = MarkdownGenerator().render(make_issue(), [], comments_error="GitHub API returned 500")

    assert "### Comments" in md
    assert "_Comments could not be fetched: GitHub API returned 500_" in md


def test_render_empty_body_is_omitted(make_issue) -> None:
    md = MarkdownGenerator().render(make_issue(body=""), [])
    assert md == (
        "# #1: Bug\n"
        "\n"
        "> state: **open** opened by: **octocat** on: **2024-01-15 10:00:00** "
        "link: https://github.com/owner/repo/issues/1\n"
    )


def test_render_labels(make_issue) -> None:
    md = MarkdownGenerator().render(make_issue(labels=["bug", "help wanted"]), [])
    assert "> labels: `bug`, `help wanted`" in md


def test_document_filename_is_issue_number(make_issue) -> None:
    document = MarkdownGenerator().document(make_issue(number=42, title="Bug", body="It crashes"), [])

    assert document.filename == "42.md"
    assert "Bug" in document.content
    assert "It crashes" in document.content


def test_format_date_unknown() -> None:
    assert format_date(None) == "unknown"
