from __future__ import annotations

from typing import Iterable


class SuggestExpanderError(Exception):
    """Base class for errors raised by this package."""


class ValidationError(SuggestExpanderError):
    def __init__(self, missing: Iterable[str]) -> None:
        self.missing = list(missing)
        super().__init__(f"missing required field(s): {', '.join(self.missing)}")


class UpstreamFetchError(SuggestExpanderError):
    """One suggestion lookup failed. Never leaves the fetcher."""

    def __init__(self, query: str, reason: str) -> None:
        self.query = query
        self.reason = reason
        super().__init__(f"suggestion lookup failed for {query!r}: {reason}")


class LogSinkError(SuggestExpanderError):
    pass


class UnauthorizedError(SuggestExpanderError):
    pass
