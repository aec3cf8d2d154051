"""HTML block classification (CommonMark 4.6, block types 1-7)."""

from __future__ import annotations

import re

# Type 1 tags: raw content up to the matching end tag
HTML_BLOCK_TYPE1_TAGS = frozenset({"pre", "script", "style", "textarea"})

# Type 6 tags: block-level tags that end on a blank line
HTML_BLOCK_TYPE6_TAGS = frozenset(
    {
        "address", "article", "aside", "base", "basefont", "blockquote", "body",
        "caption", "center", "col", "colgroup", "dd", "details", "dialog", "dir",
        "div", "dl", "dt", "fieldset", "figcaption", "figure", "footer", "form",
        "frame", "frameset", "h1", "h2", "h3", "h4", "h5", "h6", "head", "header",
        "hr", "html", "iframe", "legend", "li", "link", "main", "menu", "menuitem",
        "nav", "noframes", "ol", "optgroup", "option", "p", "param", "search",
        "section", "summary", "table", "tbody", "td", "tfoot", "th", "thead",
        "title", "tr", "track", "ul",
    }
)

_TAG_NAME = re.compile(r"</?([A-Za-z][A-Za-z0-9-]*)")
_COMPLETE_TAG = re.compile(
    r"""^(?:<[A-Za-z][A-Za-z0-9-]*"""
    r"""(?:\s+[A-Za-z_:][\w.:-]*(?:\s*=\s*(?:[^\s"'=<>`]+|'[^']*'|"[^"]*"))?)*"""
    r"""\s*/?>|</[A-Za-z][A-Za-z0-9-]*\s*>)\s*$"""
)

# End conditions for types 1-5; None means "ends at a blank line"
_END_MARKERS = {2: "-->", 3: "?>", 4: ">", 5: "]]>"}


def classify_html_block(content: str, in_paragraph: bool) -> int:
    """Return the HTML block type (1-7) a line starts, or 0.

    Args:
        content: Line content with leading whitespace stripped
        in_paragraph: Whether a paragraph is open (type 7 cannot interrupt one)
    """
    if not content.startswith("<"):
        return 0
    lower = content.lower()
    for tag in HTML_BLOCK_TYPE1_TAGS:
        if lower.startswith(f"<{tag}") and (len(content) == len(tag) + 1 or content[len(tag) + 1] in " \t>"):
            return 1
    if content.startswith("<!--"):
        return 2
    if content.startswith("<?"):
        return 3
    if content.startswith("<![CDATA["):
        return 5
    if len(content) >= 3 and content[1] == "!" and content[2].isalpha():
        return 4
    name = _TAG_NAME.match(content)
    if name is not None and name.group(1).lower() in HTML_BLOCK_TYPE6_TAGS:
        rest = content[name.end() :]
        if not rest or rest[0] in " \t>" or rest.startswith("/>"):
            return 6
    if in_paragraph:
        return 0
    if _COMPLETE_TAG.match(content) and "://" not in content and "@" not in content:
        tag = name.group(1).lower() if name is not None else ""
        if tag not in HTML_BLOCK_TYPE1_TAGS:
            return 7
    return 0


def html_block_ends(block_type: int, line: str, first_line_content: str | None = None) -> bool:
    """Check if line satisfies the end condition of an HTML block of types 1-5.

    For the first line pass the text after the opening marker as
    first_line_content so that the opener itself does not count.
    """
    text = line if first_line_content is None else first_line_content
    if block_type == 1:
        lower = text.lower()
        return any(f"</{tag}>" in lower for tag in HTML_BLOCK_TYPE1_TAGS)
    marker = _END_MARKERS.get(block_type)
    return marker is not None and marker in text
