"""Textual clean-up of editor HTML before it is rendered to PDF.

This is a best-effort regex filter, not an HTML parser. The content it sees
comes from the application's own rich-text editor, so it is one layer of
defense, not a complete sanitizer for arbitrary untrusted markup. Entity
encoded tricks and malformed markup outside the handled patterns may
survive it.
"""

import re

_FLAGS = re.IGNORECASE | re.DOTALL

# Active elements removed together with everything inside them
_BLOCK_ELEMENTS_RE = re.compile(r"<(script|iframe)\b[^>]*>.*?</\1\s*>", _FLAGS)
# Leftover opening/closing tags of those elements (unterminated blocks)
_STRAY_TAG_RE = re.compile(r"</?(script|iframe)\b[^>]*>?", _FLAGS)
_QUOTED_OR_TEXT = r"""(?:"[^"]*"|'[^']*'|[^'">])*"""
_IMG_RE = re.compile(r"<img\b" + _QUOTED_OR_TEXT + r">?", _FLAGS)

_TAG_RE = re.compile(r"<[a-zA-Z]" + _QUOTED_OR_TEXT + r"(?:>|\Z)")
# Trailing tag whose attribute quote never closes
_OPEN_QUOTE_TAG_RE = re.compile(r"<[a-zA-Z/]" + _QUOTED_OR_TEXT + r"""(?:"[^"]*|'[^']*)\Z""")
_ATTR_VALUE = r"""(?:\s*=\s*(?:"[^"]*"|'[^']*'|[^\s"'>]+))?"""
_EVENT_ATTR_RE = re.compile(r"[\s/]+on[a-z0-9_-]*" + _ATTR_VALUE, re.IGNORECASE)
_PRESENTATION_ATTR_RE = re.compile(r"[\s/]+(?:style|class)" + _ATTR_VALUE, re.IGNORECASE)

_JS_SCHEME_RE = re.compile(r"javascript\s*:", re.IGNORECASE)
_DATA_SCHEME_RE = re.compile(r"""(=\s*["']?\s*)data\s*:""", re.IGNORECASE)

_EMPTY_PARAGRAPH_RE = re.compile(r"<p>(?:\s|&nbsp;|<br\s*/?>)*</p>", re.IGNORECASE)
_REPEATED_BR_RE = re.compile(r"(?:<br\s*/?>\s*){2,}", re.IGNORECASE)


def _clean_tag(match: re.Match) -> str:
    tag = match.group(0)
    tag = _EVENT_ATTR_RE.sub("", tag)
    tag = _PRESENTATION_ATTR_RE.sub("", tag)
    tag = _DATA_SCHEME_RE.sub(r"\1#", tag)
    return tag


def _sanitize_once(html: str) -> str:
    html = _BLOCK_ELEMENTS_RE.sub("", html)
    html = _STRAY_TAG_RE.sub("", html)
    html = _IMG_RE.sub("", html)
    html = _OPEN_QUOTE_TAG_RE.sub("", html)
    html = _TAG_RE.sub(_clean_tag, html)
    html = _JS_SCHEME_RE.sub("", html)
    html = _EMPTY_PARAGRAPH_RE.sub("", html)
    html = _REPEATED_BR_RE.sub("<br>", html)
    return html


def sanitize_html(html: str) -> str:
    """Strip active content and presentation from editor HTML.

    Removes script and iframe elements, images, ``on*`` handler attributes,
    ``style`` and ``class`` attributes, ``javascript:`` and ``data:`` URLs,
    and empty paragraphs or repeated line breaks left by the editor. Passes
    are repeated until the output stops changing, which makes the function
    idempotent and defeats nested payloads such as ``<scr<script></script>ipt>``.
    """
    if not html:
        return ""

    # Every pass only removes text, so this reaches a fixed point
    current = html
    while True:
        cleaned = _sanitize_once(current)
        if cleaned == current:
            return current.strip()
        current = cleaned
