#!/usr/bin/env python3
"""
Wikipedia article search with disambiguation pages filtered out.
"""

import sys
import json
from dataclasses import asdict, dataclass
from typing import Dict, List, Optional

import requests

from wikipedia_api import ParseError, WikiError, api_get, new_session, query_section

SEARCH_LIMIT = 20
MAX_CANDIDATES = 10


@dataclass(frozen=True)
class SearchResult:
    page_id: int
    title: str
    word_count: int = 0


@dataclass(frozen=True)
class Candidate:
    """A search result the user may pick, numbered from 1."""
    index: int
    result: SearchResult


def search_wikipedia(query: str, session: Optional[requests.Session] = None,
                     limit: int = SEARCH_LIMIT) -> List[SearchResult]:
    """
    Search Wikipedia for articles.

    Returns results in rank order; an empty list means no matches. limit is
    clamped to 1..SEARCH_LIMIT so the follow-up pageprops batch stays small.
    """
    if not query or not query.strip():
        return []
    limit = max(1, min(limit, SEARCH_LIMIT))

    params = {
        'action': 'query',
        'list': 'search',
        'srsearch': query.strip(),
        'srlimit': limit,
        'srprop': 'wordcount',
    }
    data = api_get(session, params)
    hits = query_section(data, 'search')
    if not isinstance(hits, list):
        raise ParseError("query.search is not a list")

    results = []
    for hit in hits:
        try:
            results.append(SearchResult(
                page_id=int(hit['pageid']),
                title=str(hit['title']),
                word_count=int(hit.get('wordcount', 0)),
            ))
        except (KeyError, TypeError, ValueError) as e:
            raise ParseError(f"malformed search hit {hit!r}: {e}") from e

    return results


def _index_pages(pages) -> Dict[int, dict]:
    if not isinstance(pages, list):
        raise ParseError("query.pages is not a list")
    index: Dict[int, dict] = {}
    for page in pages:
        if not isinstance(page, dict) or 'pageid' not in page:
            continue
        try:
            index[int(page['pageid'])] = page
        except (TypeError, ValueError) as e:
            raise ParseError(f"malformed page id {page.get('pageid')!r}") from e
    return index


def filter_disambiguation(
    results: List[SearchResult],
    session: Optional[requests.Session] = None,
    max_candidates: int = MAX_CANDIDATES,
    explain: bool = False,
) -> List[Candidate]:
    """
    Drop disambiguation pages and number what is left.

    All page ids are checked in one pageprops request. A page is dropped when
    its pageprops carry the disambiguation key, or when the API did not
    return it at all. At most max_candidates survive, in rank order.
    """
    if not results:
        return []

    params = {
        'action': 'query',
        'prop': 'pageprops',
        'ppprop': 'disambiguation',
        'pageids': '|'.join(str(r.page_id) for r in results),
    }
    data = api_get(session, params)
    pages = _index_pages(query_section(data, 'pages'))

    candidates: List[Candidate] = []
    rejected_counts: Dict[str, int] = {}
    for r in results:
        page = pages.get(r.page_id)
        if page is None or page.get('missing') or page.get('invalid'):
            rejected_counts["missing"] = rejected_counts.get("missing", 0) + 1
            continue

        props = page.get('pageprops') or {}
        if 'disambiguation' in props:
            rejected_counts["disambiguation"] = rejected_counts.get("disambiguation", 0) + 1
            continue

        candidates.append(Candidate(index=len(candidates) + 1, result=r))
        if len(candidates) >= max_candidates:
            break

    if explain and rejected_counts:
        parts = [f"{k}={v}" for k, v in sorted(rejected_counts.items())]
        print("[wikipedia_search] filtered_out: " + " ".join(parts), file=sys.stderr)

    return candidates


def find_candidates(topic: str, session: Optional[requests.Session] = None,
                    explain: bool = False) -> List[Candidate]:
    """Search for topic and return the numbered, filtered candidates."""
    results = search_wikipedia(topic, session)
    return filter_disambiguation(results, session, explain=explain)


def main():
    """CLI interface."""
    args = [a for a in sys.argv[1:] if a != '--explain']
    explain = '--explain' in sys.argv[1:]
    if not args:
        print("Usage: wikipedia_search.py <query> [limit] [--explain]")
        sys.exit(1)

    query = args[0]
    if len(args) > 1 and not args[1].isdigit():
        print("Usage: wikipedia_search.py <query> [limit] [--explain]")
        sys.exit(1)
    limit = int(args[1]) if len(args) > 1 else SEARCH_LIMIT

    with new_session() as session:
        try:
            results = search_wikipedia(query, session, limit=limit)
            candidates = filter_disambiguation(results, session, explain=explain)
        except WikiError as e:
            print(f"Error searching Wikipedia: {e}", file=sys.stderr)
            sys.exit(2)

    print(json.dumps([
        {'index': c.index, **asdict(c.result)} for c in candidates
    ], indent=2))


if __name__ == '__main__':
    main()
