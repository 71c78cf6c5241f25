#!/usr/bin/env python3
"""
Turn an article extract into a short summary with a "find out more" link.

The body is the first paragraph, plus the second one when the first fits.
Anything over SUMMARY_LIMIT characters is cut, right-trimmed and marked with
an ellipsis. When the first paragraph alone is too long the second paragraph
is never looked at.
"""

from dataclasses import dataclass

from wikipedia_extract import ArticleExtract

SUMMARY_LIMIT = 1024
ELLIPSIS = "..."
FIND_OUT_MORE = "Find out more: {url}"


@dataclass(frozen=True)
class Summary:
    body: str
    source_url: str
    text: str


def _truncate(text: str, limit: int = SUMMARY_LIMIT) -> str:
    if len(text) <= limit:
        return text
    return text[:limit].rstrip() + ELLIPSIS


def summarize_text(plain_text: str) -> str:
    """Return the summary body for plain_text."""
    paragraphs = plain_text.split("\n")
    base = paragraphs[0]

    if len(base) > SUMMARY_LIMIT:
        return _truncate(base)

    if len(paragraphs) > 1:
        return _truncate(base + "\n\n" + paragraphs[1])

    return base


def format_summary(extract: ArticleExtract) -> Summary:
    body = summarize_text(extract.plain_text)
    text = body + "\n\n" + FIND_OUT_MORE.format(url=extract.canonical_url)
    return Summary(body=body, source_url=extract.canonical_url, text=text)
