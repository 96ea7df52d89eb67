"""Data models shared by the expansion pipeline."""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class Category(str, Enum):
    """Expansion strategy that produced a query. Order is emission order."""

    BASE = "Base"
    TEMPORAL = "Month & Year"
    ALPHABET = "Alphabet (K + L)"
    NUMERIC = "Numbers (K + N)"
    QUESTION = "Questions (Q + K)"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Variant:
    category: Category
    query: str


@dataclass(frozen=True)
class RawSuggestion:
    category: Category
    query: str
    suggestion: str
    # (variant index, position in the endpoint's list); drives dedup order
    order: Tuple[int, int] = (0, 0)


@dataclass(frozen=True)
class ResultItem:
    category: Category
    suggestion: str
    query: str = ""

    def to_dict(self, with_query: bool = False) -> Dict[str, str]:
        out = {"category": self.category.value, "suggestion": self.suggestion}
        if with_query:
            out["query"] = self.query
        return out


@dataclass(frozen=True)
class CategorySummary:
    category: Category
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"category": self.category.value, "count": self.count}


@dataclass(frozen=True)
class LogRecord:
    keyword: str
    country: str  # as requested, before region remap
    language: str
    results_count: int
    date: str  # ISO 8601

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LogRecord":
        return cls(
            keyword=str(data.get("keyword", "")),
            country=str(data.get("country", "")),
            language=str(data.get("language", "")),
            results_count=int(data.get("results_count") or 0),
            date=str(data.get("date", "")),
        )


@dataclass
class AggregationResult:
    results: List[ResultItem] = field(default_factory=list)
    summary: List[CategorySummary] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "results": [r.to_dict() for r in self.results],
            "summary": [s.to_dict() for s in self.summary],
        }
