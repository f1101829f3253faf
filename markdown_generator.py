"""
Markdown file generator for GitHub issue exports.

This module turns one issue and its comment thread into a Markdown document.
Output depends only on the input records, so exporting the same issue twice
produces byte-identical files.
"""

from datetime import datetime
from typing import List, Optional

from models import Comment, Issue, RenderedDocument

DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def format_date(value: Optional[datetime]) -> str:
    if value is None:
        return 'unknown'
    return value.strftime(DATE_FORMAT)


class MarkdownGenerator:
    """
    Generator for creating Markdown files from GitHub issues.

    Each document has a heading with the issue number and title, a quoted
    metadata line, the issue body verbatim, and, when the issue has comments,
    a Comments section with one entry per comment in the order given.
    """

    def render(self, issue: Issue, comments: List[Comment], comments_error: Optional[str] = None) -> str:
        """
        Generate the Markdown document for one issue.

        Args:
            issue (Issue): The issue to render.
            comments (List[Comment]): Comments on the issue, already ordered.
            comments_error (Optional[str]): Reason the comments could not be
                fetched. When set, the Comments section holds a note instead
                of comments.

        Returns:
            str: Complete Markdown document as a string.
        """
        lines = []

        # Issue header
        lines.append(f"# #{issue.number}: {issue.title}")
        lines.append("")
        lines.append(
            f"> state: **{issue.state}** opened by: **{issue.author}** "
            f"on: **{format_date(issue.created_at)}** link: {issue.url}"
        )
        if issue.labels:
            lines.append("> labels: " + ", ".join(f"`{label}`" for label in issue.labels))
        lines.append("")

        if issue.body:
            lines.append(issue.body)
            lines.append("")

        if comments_error:
            lines.append("### Comments")
            lines.append("")
            lines.append(f"_Comments could not be fetched: {comments_error}_")
            lines.append("")
        elif comments:
            lines.append("### Comments")
            lines.append("")
            for comment in comments:
                lines.extend(self._format_comment(comment))

        return '\n'.join(lines)

    def document(
            self,
            issue: Issue,
            comments: List[Comment],
            comments_error: Optional[str] = None
    ) -> RenderedDocument:
        """Render an issue together with the name of the file it belongs in."""
        return RenderedDocument(
            filename=f"{issue.number}.md",
            content=self.render(issue, comments, comments_error),
        )

    def _format_comment(self, comment: Comment) -> List[str]:
        author = f"[**{comment.author}**]({comment.url})" if comment.url else f"**{comment.author}**"
        lines = [
            "---",
            f"> from: {author} on: **{format_date(comment.created_at)}**",
            "",
        ]
        if comment.body:
            lines.append(comment.body)
            lines.append("")
        return lines
