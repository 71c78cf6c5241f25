#!/usr/bin/env python3
"""
Shared MediaWiki Action API plumbing for the wikibrief scripts.

Every request is a plain GET against WIKIPEDIA_API with JSON output.
Failures are raised as WikiError subclasses; callers decide what to print.
"""

import os
from typing import Any, Dict, Optional

import requests

WIKIPEDIA_API = os.getenv("WIKIBRIEF_API_URL", "https://en.wikipedia.org/w/api.php")
USER_AGENT = os.getenv("WIKIBRIEF_USER_AGENT", "wikibrief/1.0 (command-line summary tool)")
REQUEST_TIMEOUT = float(os.getenv("WIKIBRIEF_TIMEOUT", "10"))


class WikiError(Exception):
    """Base class for everything the pipeline raises."""


class TransportError(WikiError):
    """The HTTP call did not complete (connection, DNS, timeout, bad status)."""


class ParseError(WikiError):
    """The response body was not the payload we expected."""


class NoResultsError(WikiError):
    """Search produced no candidates after filtering."""


class NoContentError(WikiError):
    """The chosen page has no introductory extract."""


class InvalidSelectionError(WikiError):
    """The user's choice was empty, non-numeric or out of range."""


def new_session() -> requests.Session:
    session = requests.Session()
    session.headers.update({'User-Agent': USER_AGENT})
    return session


def api_get(session: Optional[requests.Session], params: Dict[str, Any]) -> Dict[str, Any]:
    """
    GET the Action API with params and return the decoded JSON object.

    format=json and formatversion=2 are always added. If session is None a
    throwaway one is used for this call.
    """
    query = dict(params)
    query['format'] = 'json'
    query['formatversion'] = 2

    owned = session is None
    if owned:
        session = new_session()
    try:
        response = session.get(WIKIPEDIA_API, params=query, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise TransportError(f"request to {WIKIPEDIA_API} failed: {e}") from e
    finally:
        if owned:
            session.close()

    try:
        data = response.json()
    except ValueError as e:
        raise ParseError(f"response is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ParseError("expected a JSON object from the API")
    if 'error' in data:
        err = data['error'] if isinstance(data['error'], dict) else {}
        code = err.get('code', 'unknown')
        info = err.get('info', '')
        raise ParseError(f"API error {code}: {info}")

    return data


def query_section(data: Dict[str, Any], key: str) -> Any:
    """Return data['query'][key], raising ParseError when the shape is wrong."""
    query = data.get('query')
    if not isinstance(query, dict) or key not in query:
        raise ParseError(f"response has no query.{key}")
    return query[key]
