from __future__ import annotations

import datetime as dt
import string
from typing import Dict, Iterable, List, Optional

from .config import DEFAULT_TEMPORAL_POLICY, TemporalPolicy
from .locales import month_names, question_words
from .models import Category, Variant
from .text_utils import join_terms, unique_ordered

ALPHABET = tuple(string.ascii_lowercase)
NUMBERS = tuple(str(n) for n in range(1, 11))


def append_suffixes(seed: str, suffixes: Iterable[str]) -> List[str]:
    return unique_ordered([join_terms(seed, s) for s in suffixes])


def prepend_prefixes(seed: str, prefixes: Iterable[str]) -> List[str]:
    return unique_ordered([join_terms(p, seed) for p in prefixes])


def temporal_terms(
    language: str,
    today: dt.date,
    policy: TemporalPolicy = DEFAULT_TEMPORAL_POLICY,
) -> List[str]:
    months = month_names(language)
    if policy is TemporalPolicy.FULL:
        years = [today.year, today.year - 1, today.year + 1]
        return list(months) + [str(y) for y in years]
    return [months[today.month - 1], str(today.year)]


def generate(
    keyword: str,
    language: str,
    country: str = "",
    *,
    today: Optional[dt.date] = None,
    policy: TemporalPolicy = DEFAULT_TEMPORAL_POLICY,
) -> Dict[Category, List[str]]:
    """Build every query variant for ``keyword``, grouped by category.

    The mapping is ordered: Base, Month & Year, Alphabet, Numbers, Questions.
    ``country`` is accepted for symmetry with the aggregator; the region remap
    happens when the outbound request is built, not here.
    """
    if not keyword or not keyword.strip():
        raise ValueError("keyword must be non-empty")
    seed = keyword
    today = today or dt.date.today()
    return {
        Category.BASE: [seed],
        Category.TEMPORAL: append_suffixes(seed, temporal_terms(language, today, policy)),
        Category.ALPHABET: append_suffixes(seed, ALPHABET),
        Category.NUMERIC: append_suffixes(seed, NUMBERS),
        Category.QUESTION: prepend_prefixes(seed, question_words(language)),
    }


def iter_variants(expansions: Dict[Category, List[str]]) -> List[Variant]:
    """Flatten ``generate`` output into variants in generation order."""
    out: List[Variant] = []
    for category, queries in expansions.items():
        out.extend(Variant(category, q) for q in queries)
    return out
