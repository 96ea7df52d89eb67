"""Locale tables used to build query variants.

The tables are read-only mappings built once at import time. Lookups go
through :func:`resolve_language`, which folds aliases (``es-419``, ``pr``,
``pt-BR``) onto a base table and falls back to Spanish for anything unknown.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Tuple

FALLBACK_LANGUAGE = "es"

MONTHS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "es": (
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ),
    "en": (
        "january", "february", "march", "april", "may", "june",
        "july", "august", "september", "october", "november", "december",
    ),
    "pt": (
        "janeiro", "fevereiro", "março", "abril", "maio", "junho",
        "julho", "agosto", "setembro", "outubro", "novembro", "dezembro",
    ),
})

QUESTIONS: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "es": ("cómo", "qué", "por qué", "cuándo", "dónde", "quién", "cuál"),
    "en": ("how", "what", "why", "when", "where", "who", "which"),
    "pt": ("como", "o que", "por que", "quando", "onde", "quem", "qual"),
})

LANGUAGE_ALIASES: Mapping[str, str] = MappingProxyType({
    "es": "es",
    "es-419": "es",
    "en": "en",
    "pr": "pt",
    "pt": "pt",
    "pt-br": "pt",
})

# Values offered by the UI; the key is what goes out as ``hl``.
SUPPORTED_LANGUAGES: Mapping[str, str] = MappingProxyType({
    "es": "Español (España)",
    "es-419": "Español (Latinoamérica)",
    "en": "English",
    "pr": "Português",
})

COUNTRIES: Mapping[str, str] = MappingProxyType({
    "ar": "Argentina", "mx": "México", "gt": "Guatemala", "hn": "Honduras",
    "sv": "El Salvador", "ni": "Nicaragua", "cr": "Costa Rica", "pa": "Panamá",
    "do": "República Dominicana", "pr": "Puerto Rico", "co": "Colombia",
    "ve": "Venezuela", "ec": "Ecuador", "pe": "Perú", "bo": "Bolivia",
    "cl": "Chile", "uy": "Uruguay", "py": "Paraguay", "br": "Brasil",
    "es": "España", "us": "United States",
})

# Territories without their own autocomplete region.
REGION_OVERRIDES: Mapping[str, str] = MappingProxyType({"pr": "us"})


def resolve_language(language: str) -> str:
    return LANGUAGE_ALIASES.get((language or "").strip().lower(), FALLBACK_LANGUAGE)


def month_names(language: str) -> Tuple[str, ...]:
    return MONTHS[resolve_language(language)]


def question_words(language: str) -> Tuple[str, ...]:
    return QUESTIONS[resolve_language(language)]


def region_for(country: str) -> str:
    """Region code sent to the suggestion endpoint for ``country``."""
    code = (country or "").strip().lower()
    return REGION_OVERRIDES.get(code, code)


def sorted_countries() -> Tuple[Tuple[str, str], ...]:
    items: Dict[str, str] = dict(COUNTRIES)
    return tuple(sorted(items.items(), key=lambda kv: kv[1]))
