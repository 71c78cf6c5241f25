#!/usr/bin/env python3
"""
Fetch the plain-text introduction and canonical URL of one Wikipedia page.
"""

import sys
import json
from dataclasses import asdict, dataclass
from typing import Optional

import requests

from wikipedia_api import NoContentError, ParseError, WikiError, api_get, new_session, query_section


@dataclass(frozen=True)
class ArticleExtract:
    page_id: int
    title: str
    plain_text: str
    canonical_url: str


def fetch_extract(page_id: int, session: Optional[requests.Session] = None) -> ArticleExtract:
    """
    Return the introductory extract for page_id.

    Raises NoContentError when the page does not exist or has no intro text.
    """
    params = {
        'action': 'query',
        'prop': 'info|extracts',
        'inprop': 'url',
        'explaintext': 1,
        'exintro': 1,
        'pageids': page_id,
    }
    data = api_get(session, params)
    pages = query_section(data, 'pages')
    if not isinstance(pages, list):
        raise ParseError("query.pages is not a list")

    page = next((p for p in pages if isinstance(p, dict) and p.get('pageid') == page_id), None)
    if page is None or page.get('missing') or page.get('invalid'):
        raise NoContentError(f"no page with id {page_id}")

    extract = page.get('extract') or ''
    if not extract.strip():
        raise NoContentError(f"no extract found for page {page_id}")

    url = page.get('fullurl') or page.get('canonicalurl')
    if not url:
        raise ParseError(f"page {page_id} has no URL")

    return ArticleExtract(
        page_id=page_id,
        title=page.get('title', ''),
        plain_text=extract,
        canonical_url=url,
    )


def main():
    """CLI interface."""
    args = [a for a in sys.argv[1:] if a != '--summary']
    if len(args) != 1 or not args[0].isdigit():
        print("Usage: wikipedia_extract.py <page_id> [--summary]")
        sys.exit(1)

    with new_session() as session:
        try:
            extract = fetch_extract(int(args[0]), session)
        except WikiError as e:
            print(f"Error fetching extract: {e}", file=sys.stderr)
            sys.exit(2)

    if '--summary' in sys.argv[1:]:
        from summary_format import format_summary
        print(json.dumps(asdict(format_summary(extract)), indent=2))
    else:
        print(json.dumps(asdict(extract), indent=2))


if __name__ == '__main__':
    main()
