"""Inline link resolution for entity descriptions.

Rewrites ``{@link Class#member label}`` references into hyperlinks for
the long description and into their plain labels for the one-line
summary, which is stripped of markup and truncated.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from apidoc.parsers.structure import Description

logger = logging.getLogger(__name__)

LINK_MARKER = "{@link"
MEMBER_SEPARATOR = "#"

_MARKUP_RE = re.compile(r"<[^>]*>")
_LINE_BREAKS = str.maketrans("\r\n\t", "   ")

DEFAULT_SHORT_LENGTH = 117
DEFAULT_ELLIPSIS = "..."


@dataclass(frozen=True)
class LinkTarget:
    """A parsed inline link.

    Attributes:
        class_name: Class the link points to.
        member_name: Member anchor within the class page, if any.
        label: Text displayed for the link.
    """

    class_name: str
    member_name: Optional[str]
    label: str


def strip_markup(text: str) -> str:
    """Remove ``<...>`` markup sequences from text."""
    return _MARKUP_RE.sub("", text)


class LinkResolver:
    """Expands inline links and builds short summaries.

    Args:
        page_extension: Extension of rendered class pages.
        max_short_length: Characters kept before the ellipsis.
        ellipsis: Suffix appended to truncated summaries.
    """

    def __init__(
        self,
        page_extension: str = "html",
        max_short_length: int = DEFAULT_SHORT_LENGTH,
        ellipsis: str = DEFAULT_ELLIPSIS,
    ) -> None:
        self.page_extension = page_extension
        self.max_short_length = max_short_length
        self.ellipsis = ellipsis

    def parse_link(self, content: str, current_class: str) -> Optional[LinkTarget]:
        """Parse the text between ``{@link`` and ``}``.

        Args:
            content: Link body, e.g. ``Ext.Panel#show Open it``.
            current_class: Class being documented, used when the link
                names only a member.

        Returns:
            The link target, or None when the body is empty.
        """
        parts = content.strip().split(None, 1)
        if not parts:
            return None
        target = parts[0]
        label = parts[1].strip() if len(parts) > 1 else ""

        class_part, sep, member = target.partition(MEMBER_SEPARATOR)
        if not sep:
            return LinkTarget(target, None, label or target)

        owner = class_part or current_class
        if not label:
            label = f"{class_part}.{member}" if class_part else member
        return LinkTarget(owner, member, label)

    def render_link(self, link: LinkTarget) -> str:
        """Render a link target as an anchored hyperlink."""
        page = f"{link.class_name}.{self.page_extension}"
        if link.member_name is None:
            return f'<a href="{page}" data-cls="{link.class_name}">{link.label}</a>'
        return (
            f'<a href="{page}#{link.class_name}-{link.member_name}" '
            f'data-cls="{link.class_name}" data-member="{link.member_name}">'
            f"{link.label}</a>"
        )

    def expand(self, text: str, current_class: str) -> tuple[str, str]:
        """Expand every inline link in the text.

        Args:
            text: Raw description text.
            current_class: Class being documented.

        Returns:
            A (long_text, plain_text) tuple where links are replaced by
            hyperlinks and by their labels respectively.
        """
        long_parts: list[str] = []
        plain_parts: list[str] = []
        pos = 0

        while True:
            start = text.find(LINK_MARKER, pos)
            if start < 0:
                break
            end = text.find("}", start + len(LINK_MARKER))
            if end < 0:
                logger.warning("Unterminated inline link in %s", current_class)
                break

            long_parts.append(text[pos:start])
            plain_parts.append(text[pos:start])

            link = self.parse_link(text[start + len(LINK_MARKER) : end], current_class)
            if link is None:
                raw = text[start : end + 1]
                long_parts.append(raw)
                plain_parts.append(raw)
            else:
                long_parts.append(self.render_link(link))
                plain_parts.append(link.label)
            pos = end + 1

        long_parts.append(text[pos:])
        plain_parts.append(text[pos:])
        return "".join(long_parts), "".join(plain_parts)

    def summarize(self, plain_text: str, always: bool = False) -> Optional[str]:
        """Build a one-line summary from link-free text.

        Markup is stripped and line breaks become single spaces, so the
        summary keeps the length of the stripped text. It is truncated
        with the ellipsis when longer than the limit.

        Args:
            plain_text: Text with links already replaced by labels.
            always: Produce a summary even when no truncation is needed.

        Returns:
            The summary, or None when it is neither needed nor requested.
        """
        summary = strip_markup(plain_text).translate(_LINE_BREAKS)
        if len(summary) > self.max_short_length:
            return summary[: self.max_short_length] + self.ellipsis
        if always:
            return summary
        return None

    def resolve(
        self,
        text: Optional[str],
        current_class: str,
        always_short: bool = False,
    ) -> Description:
        """Resolve a raw description into its long and short forms.

        Args:
            text: Raw description, possibly None.
            current_class: Class being documented.
            always_short: Produce a short form regardless of length.

        Returns:
            The resolved description.
        """
        long_text, plain_text = self.expand(text or "", current_class)
        return Description(long_text, self.summarize(plain_text, always_short))
