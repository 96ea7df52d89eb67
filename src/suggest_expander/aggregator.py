"""Fan a keyword's variants out to the suggestion endpoint and merge the answers.

Lookups run on a bounded thread pool. Completion order is irrelevant: every
suggestion carries the index of the variant that produced it, and
de-duplication walks them in that order, so the first category to produce a
given text keeps it no matter which request finished first.
"""
from __future__ import annotations

import logging
import time
from collections import Counter
from concurrent.futures import Executor, ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from .config import DEFAULT_MAX_WORKERS, DEFAULT_TEMPORAL_POLICY, Settings, TemporalPolicy
from .errors import ValidationError
from .expansion import generate, iter_variants
from .http import HttpClient
from .locales import region_for
from .log_sink import LogKeyFactory, LogSink, build_log_sink
from .models import AggregationResult, CategorySummary, LogRecord, RawSuggestion, ResultItem, Variant
from .providers import GoogleSuggestProvider

logger = logging.getLogger(__name__)

# (query, language, region) -> suggestions; must not raise
Fetcher = Callable[[str, str, str], List[str]]

REQUIRED_FIELDS = ("keyword", "country", "language")


def validate_request(keyword: Optional[str], country: Optional[str], language: Optional[str]) -> None:
    values = {"keyword": keyword, "country": country, "language": language}
    missing = [name for name in REQUIRED_FIELDS if not isinstance(values[name], str) or not values[name].strip()]
    if missing:
        raise ValidationError(missing)


def _lookup(fetch: Fetcher, index: int, variant: Variant, language: str, region: str) -> List[RawSuggestion]:
    try:
        suggestions = fetch(variant.query, language, region)
    except Exception:  # noqa: BLE001
        logger.exception("suggestion lookup crashed for %r", variant.query)
        return []
    return [
        RawSuggestion(variant.category, variant.query, s, order=(index, pos))
        for pos, s in enumerate(suggestions or [])
        if isinstance(s, str)
    ]


def collect(
    variants: Sequence[Variant],
    fetch: Fetcher,
    language: str,
    region: str,
    max_workers: int = DEFAULT_MAX_WORKERS,
    executor: Optional[Executor] = None,
) -> List[RawSuggestion]:
    """Run one lookup per variant and return every suggestion, tagged with its order.

    Uses ``executor`` when given, otherwise a pool that lives for this call only.
    """
    if not variants:
        return []
    if executor is None:
        workers = max(1, min(max_workers, len(variants)))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="suggest") as ex:
            return collect(variants, fetch, language, region, executor=ex)
    futures = [executor.submit(_lookup, fetch, i, v, language, region) for i, v in enumerate(variants)]
    out: List[RawSuggestion] = []
    # single writer: only this thread appends, after each future resolves
    for fut in futures:
        out.extend(fut.result())
    return out


def dedupe(raw: Iterable[RawSuggestion]) -> List[ResultItem]:
    """Keep the first occurrence of each suggestion text in generation order.

    Matching is exact and case-sensitive.
    """
    seen: Dict[str, ResultItem] = {}
    for item in sorted(raw, key=lambda r: r.order):
        if item.suggestion not in seen:
            seen[item.suggestion] = ResultItem(item.category, item.suggestion, item.query)
    return list(seen.values())


def summarize(results: Iterable[ResultItem]) -> List[CategorySummary]:
    counts = Counter(r.category for r in results)
    return [CategorySummary(c, n) for c, n in sorted(counts.items(), key=lambda x: x[1], reverse=True)]


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Aggregator:
    """Runs searches on a worker pool that lives as long as the aggregator.

    Worker threads are reused between searches, so per-thread HTTP sessions
    keep their connections. Call ``close`` (or use it as a context manager)
    to stop the workers.
    """

    def __init__(
        self,
        fetch: Fetcher,
        log_sink: Optional[LogSink] = None,
        max_workers: int = DEFAULT_MAX_WORKERS,
        policy: TemporalPolicy = DEFAULT_TEMPORAL_POLICY,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.fetch = fetch
        self.log_sink = log_sink
        self.max_workers = max_workers
        self.policy = policy
        self.clock = clock
        self._keys = LogKeyFactory()
        self._executor = ThreadPoolExecutor(max_workers=max(1, max_workers), thread_name_prefix="suggest")

    def close(self) -> None:
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "Aggregator":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def aggregate(self, keyword: str, country: str, language: str) -> AggregationResult:
        validate_request(keyword, country, language)
        started = time.time()
        now = self.clock()
        region = region_for(country)

        expansions = generate(keyword, language, country, today=now.date(), policy=self.policy)
        variants = iter_variants(expansions)
        logger.info(
            "aggregating keyword=%r country=%s (gl=%s) language=%s: %d variants",
            keyword, country, region, language, len(variants),
        )

        raw = collect(variants, self.fetch, language, region, executor=self._executor)
        results = dedupe(raw)
        summary = summarize(results)
        logger.info(
            "keyword=%r: %d raw suggestions, %d unique, %.1fs",
            keyword, len(raw), len(results), time.time() - started,
        )

        self._record(LogRecord(
            keyword=keyword,
            country=country,
            language=language,
            results_count=len(results),
            date=self.clock().isoformat(),
        ))
        return AggregationResult(results=results, summary=summary)

    def _record(self, record: LogRecord) -> None:
        if self.log_sink is None:
            return
        key = self._keys()
        try:
            self.log_sink.put(key, record)
        except Exception as e:  # noqa: BLE001
            logger.error("failed to store search log %s: %s", key, e)


def build_aggregator(settings: Settings, log_sink: Optional[LogSink] = None) -> Aggregator:
    provider = GoogleSuggestProvider(HttpClient(timeout=settings.timeout), client=settings.client)
    return Aggregator(
        provider.suggest,
        log_sink=log_sink if log_sink is not None else build_log_sink(settings.log_dir),
        max_workers=settings.max_workers,
        policy=settings.temporal_policy,
    )
