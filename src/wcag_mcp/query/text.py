"""Text helpers: markup stripping, truncation, and W3C URLs."""

from __future__ import annotations

import re
import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

_WS = re.compile(r"\s+")

SPEC_BASE = "https://www.w3.org/TR/WCAG22/"
UNDERSTANDING_BASE = "https://www.w3.org/WAI/WCAG22/Understanding/"
QUICKREF_BASE = "https://www.w3.org/WAI/WCAG22/quickref/"
TECHNIQUES_BASE = "https://www.w3.org/WAI/WCAG22/Techniques/"


def strip_markup(text: str | None) -> str:
    """Drop inline tags, decode entities, collapse whitespace.

    Lossy: block boundaries are not turned into line breaks.
    """
    if not text:
        return ""
    if "<" in text or "&" in text:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
            text = BeautifulSoup(text, "html.parser").get_text()
    return _WS.sub(" ", text).strip()


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else f"{text[:limit]}..."


def spec_url(anchor: str) -> str:
    return f"{SPEC_BASE}#{anchor}"


def understanding_url(sc_id: str) -> str:
    return f"{UNDERSTANDING_BASE}{sc_id}.html"


def quickref_url(sc_id: str) -> str:
    return f"{QUICKREF_BASE}#{sc_id}"


def technique_url(technology: str | None, technique_id: str) -> str:
    return f"{TECHNIQUES_BASE}{technology or 'general'}/{technique_id}"
