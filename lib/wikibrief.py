#!/usr/bin/env python3
"""
Search Wikipedia, pick an article from a numbered list, print its summary.

Library use:

    with new_session() as session:
        get_wiki_article_summary("golang", sys.stdout, input, session)

get_matching_articles raises NoResultsError when nothing survives the
disambiguation filter; callers that want a quiet "no results" notice catch
it (the CLI does, and exits 0).
"""

import argparse
import os
import re
import sys
from typing import Callable, List, Optional, TextIO

import requests

from summary_format import Summary, format_summary
from wikipedia_api import InvalidSelectionError, NoResultsError, WikiError, new_session
from wikipedia_extract import fetch_extract
from wikipedia_search import Candidate, find_candidates

SELECTION_PROMPT = "Enter the number of the article you want to read: "
TOPIC_PROMPT = "Enter the topic you want to search for: "
NO_RESULTS_MESSAGE = "No search results found."

_NUMBER_RE = re.compile(r"[+-]?[0-9]+")


def render_candidates(candidates: List[Candidate]) -> str:
    lines = ["Search results:"]
    lines.extend(f"{c.index}. {c.result.title}" for c in candidates)
    return "\n".join(lines) + "\n"


def get_matching_articles(topic: str, writer: TextIO,
                          session: Optional[requests.Session] = None,
                          explain: bool = False) -> List[Candidate]:
    """Search for topic, write the numbered list to writer and return it."""
    candidates = find_candidates(topic, session, explain=explain)
    if not candidates:
        raise NoResultsError(NO_RESULTS_MESSAGE)

    writer.write(render_candidates(candidates))
    return candidates


def read_selection(candidates: List[Candidate], read_line: Callable[[], str]) -> Candidate:
    """
    Read one line and map it to a candidate.

    There is no re-prompt: anything other than a number between 1 and
    len(candidates) raises InvalidSelectionError.
    """
    choice = (read_line() or "").strip()
    if not choice:
        raise InvalidSelectionError("you must enter a valid number")

    # int() alone would also take "1_0" and non-ASCII digits
    if not _NUMBER_RE.fullmatch(choice):
        raise InvalidSelectionError(f"you must enter a valid number, got {choice!r}")
    number = int(choice)

    if not 1 <= number <= len(candidates):
        raise InvalidSelectionError(
            f"selection {number} is out of range, choose 1-{len(candidates)}"
        )
    return candidates[number - 1]


def get_article_summary(page_id: int, writer: TextIO,
                        session: Optional[requests.Session] = None) -> Summary:
    """Fetch, format and write the summary for page_id."""
    summary = format_summary(fetch_extract(page_id, session))
    writer.write(summary.text)
    return summary


def get_wiki_article_summary(topic: str, writer: TextIO, read_line: Callable[[], str],
                             session: Optional[requests.Session] = None,
                             explain: bool = False) -> Summary:
    """
    Run the whole flow: search, list, read a choice, summarize.

    read_line is called exactly once, after the candidate list is written.
    """
    owned = session is None
    if owned:
        session = new_session()
    try:
        candidates = get_matching_articles(topic, writer, session, explain=explain)
        chosen = read_selection(candidates, read_line)
        return get_article_summary(chosen.result.page_id, writer, session)
    finally:
        if owned:
            session.close()


def _prompt(message: str) -> Callable[[], str]:
    def _read() -> str:
        try:
            return input(message)
        except EOFError:
            return ""
    return _read


def main(argv: Optional[List[str]] = None) -> int:
    p = argparse.ArgumentParser(prog="wikibrief", description="Summarize a Wikipedia article")
    p.add_argument("-t", "-topic", "--topic", "--t", dest="topic", nargs="+",
                   help="Topic to search for (prompted when omitted)")
    args = p.parse_args(argv)

    if args.topic:
        topic = " ".join(args.topic)
    else:
        print("\nWelcome to the Wikipedia search tool!\n")
        topic = _prompt(TOPIC_PROMPT)()
    topic = topic.strip()

    if not topic:
        print("Error: you must enter a topic to search for.", file=sys.stderr)
        return 1

    explain = os.getenv("WIKIBRIEF_EXPLAIN", "") == "1"
    print()
    try:
        with new_session() as session:
            get_wiki_article_summary(topic, sys.stdout, _prompt("\n" + SELECTION_PROMPT),
                                     session, explain=explain)
    except NoResultsError as e:
        print(e)
        return 0
    except WikiError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130

    print("\n")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
