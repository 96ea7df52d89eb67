from __future__ import annotations

import re
from typing import Iterable, List, Set

_WS_RE = re.compile(r"\s+")
_CTRL_RE = re.compile(r"[\t\r\n\v\f]+")
_UNSAFE_FILENAME_RE = re.compile(r"[^a-zA-Z0-9_]")


def normalize_query(q: str) -> str:
    q = q.strip()
    q = _CTRL_RE.sub(" ", q)
    q = _WS_RE.sub(" ", q)
    return q


def join_terms(*parts: str) -> str:
    """Join query fragments with single spaces, ignoring blank ones."""
    return normalize_query(" ".join(p for p in parts if p))


def unique_ordered(items: Iterable[str]) -> List[str]:
    seen: Set[str] = set()
    out: List[str] = []
    for it in items:
        if it not in seen:
            seen.add(it)
            out.append(it)
    return out


def safe_filename_part(text: str) -> str:
    # spaces become underscores, anything outside [a-zA-Z0-9_] is dropped
    return _UNSAFE_FILENAME_RE.sub("", _WS_RE.sub("_", text.strip()))
