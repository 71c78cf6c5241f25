"""Shared fixtures: a scripted stand-in for requests.Session.

FakeSession answers the three Action API queries the scripts make (search,
pageprops, extracts) from canned data and records every params dict it was
called with, so tests can assert which requests were (not) made.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional, Tuple
from unittest.mock import MagicMock

import pytest


def make_response(payload) -> MagicMock:
    response = MagicMock()
    response.raise_for_status.return_value = None
    response.json.return_value = payload
    return response


def hit(page_id: int, title: str, word_count: int = 100) -> dict:
    return {"ns": 0, "title": title, "pageid": page_id, "wordcount": word_count}


class FakeSession:
    def __init__(
        self,
        hits: Optional[List[dict]] = None,
        disambiguation: Iterable[int] = (),
        absent: Iterable[int] = (),
        extracts: Optional[Dict[int, Tuple[str, str, str]]] = None,
    ) -> None:
        self.hits = hits or []
        self.disambiguation = set(disambiguation)
        self.absent = set(absent)
        self.extracts = extracts or {}
        self.calls: List[dict] = []
        self.headers: dict = {}

    def kinds(self) -> List[str]:
        """Which query each recorded call was: search, pageprops or extracts."""
        out = []
        for params in self.calls:
            if params.get("list") == "search":
                out.append("search")
            elif params.get("prop") == "pageprops":
                out.append("pageprops")
            else:
                out.append("extracts")
        return out

    def get(self, url, params=None, timeout=None):
        params = dict(params or {})
        self.calls.append(params)

        if params.get("list") == "search":
            limit = int(params.get("srlimit", 10))
            return make_response({"query": {"search": self.hits[:limit]}})

        if params.get("prop") == "pageprops":
            pages = []
            for raw in str(params["pageids"]).split("|"):
                page_id = int(raw)
                if page_id in self.absent:
                    continue
                page = {"pageid": page_id, "ns": 0, "title": f"Page {page_id}"}
                if page_id in self.disambiguation:
                    page["pageprops"] = {"disambiguation": ""}
                pages.append(page)
            return make_response({"batchcomplete": True, "query": {"pages": pages}})

        page_id = int(params["pageids"])
        if page_id not in self.extracts:
            return make_response({"query": {"pages": [{"pageid": page_id, "missing": True}]}})
        title, extract, url = self.extracts[page_id]
        page = {"pageid": page_id, "ns": 0, "title": title, "extract": extract, "fullurl": url}
        return make_response({"query": {"pages": [page]}})

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()


@pytest.fixture
def make_session():
    return FakeSession


@pytest.fixture
def golang_session() -> FakeSession:
    return FakeSession(
        hits=[
            hit(25039021, "Go (programming language)", 5120),
            hit(5421, "Go", 60),
            hit(61043541, "Gopher (mascot)", 300),
        ],
        disambiguation={5421},
        extracts={
            25039021: (
                "Go (programming language)",
                "Go is a high-level general purpose programming language that is "
                "statically typed and compiled.\n"
                "It was designed at Google in 2007 by Robert Griesemer, Rob Pike, "
                "and Ken Thompson.",
                "https://en.wikipedia.org/wiki/Go_(programming_language)",
            ),
        },
    )
