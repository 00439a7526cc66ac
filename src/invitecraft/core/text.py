"""Paragraph splitting and inline ``**bold**`` tokenisation for wording."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

BOLD_DELIMITER = "**"

_BLANK_LINE = re.compile(r"\n\s*\n")


@dataclass(frozen=True)
class Strong:
    """An emphasised span of a paragraph."""

    strong: str


Token = Union[str, Strong]


def sanitize_paragraphs(value: str) -> list[str]:
    """Split wording into trimmed, non-empty paragraphs.

    Paragraphs are separated by one or more blank lines (lines holding only
    whitespace count as blank).  Order is preserved.
    """
    return [block.strip() for block in _BLANK_LINE.split(value or "") if block.strip()]


def emphasise_inline(text: str) -> list[Token]:
    """Tokenise a paragraph into plain strings and :class:`Strong` spans.

    The paragraph is split on ``**``.  Pieces at odd positions become
    :class:`Strong` tokens and non-empty pieces at even positions stay plain.
    Empty emphasised spans (``****``) are dropped.  An unbalanced trailing
    delimiter simply emphasises the rest of the paragraph.  If nothing
    usable remains (e.g. the paragraph is only delimiters) it is returned as
    a single plain token, so the result is never empty and this never
    raises.

    Examples:
        >>> emphasise_inline("Hello **World** Foo")
        ['Hello ', Strong(strong='World'), ' Foo']
        >>> emphasise_inline("no bold here")
        ['no bold here']
    """
    text = text or ""
    if BOLD_DELIMITER not in text:
        return [text]

    parts: list[Token] = []
    for index, piece in enumerate(text.split(BOLD_DELIMITER)):
        if not piece:
            continue
        parts.append(Strong(piece) if index % 2 == 1 else piece)

    return parts or [text]


def format_wording(value: str) -> list[list[Token]]:
    """Split wording into paragraphs and tokenise each one."""
    return [emphasise_inline(paragraph) for paragraph in sanitize_paragraphs(value)]


def token_to_dict(token: Token) -> dict[str, str]:
    """Serialise a token as ``{"text": ...}`` or ``{"strong": ...}``."""
    if isinstance(token, Strong):
        return {"strong": token.strong}
    return {"text": token}
