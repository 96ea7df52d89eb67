from __future__ import annotations

import logging
import re
from typing import Any, List
from xml.etree import ElementTree as ET

import requests

from ..config import DEFAULT_CLIENT, SUGGEST_URL
from ..errors import UpstreamFetchError
from ..http import HttpClient

logger = logging.getLogger(__name__)

JSON_CLIENTS = frozenset({"chrome", "firefox"})
XML_CLIENTS = frozenset({"toolbar"})

# toplevel/CompleteSuggestion/suggestion[@data]
_SUGGESTION_PATH = "./CompleteSuggestion/suggestion"
_XML_DECL_RE = re.compile(r"^\s*<\?xml[^>]*\?>")


def parse_json_suggestions(data: Any) -> List[str]:
    """Suggestions from a structured-list response: ``[query, [s1, s2, ...], ...]``."""
    if not isinstance(data, list) or len(data) < 2 or not isinstance(data[1], list):
        return []
    return [s for s in data[1] if isinstance(s, str) and s]


def parse_xml_suggestions(body: bytes) -> List[str]:
    """Suggestions from a legacy document response.

    The endpoint encodes this format in ISO-8859-1, so the bytes are decoded
    as latin-1 before parsing. The declaration is dropped since the text is
    already decoded.
    """
    text = _XML_DECL_RE.sub("", body.decode("latin-1"), count=1).strip()
    if not text:
        return []
    root = ET.fromstring(text)
    out: List[str] = []
    for node in root.findall(_SUGGESTION_PATH):
        value = node.get("data")
        if value:
            out.append(value)
    return out


class GoogleSuggestProvider:
    BASE_URL = SUGGEST_URL

    def __init__(self, http: HttpClient | None = None, client: str = DEFAULT_CLIENT) -> None:
        client = client.strip().lower()
        if client not in JSON_CLIENTS | XML_CLIENTS:
            raise ValueError(f"unsupported suggest client: {client!r}")
        self.http = http or HttpClient()
        self.client = client

    @property
    def legacy(self) -> bool:
        return self.client in XML_CLIENTS

    def build_params(self, query: str, language: str, region: str) -> dict:
        return {"client": self.client, "hl": language, "gl": region, "q": query}

    def fetch(self, query: str, language: str, region: str) -> List[str]:
        """Single lookup. Raises UpstreamFetchError on any failure."""
        params = self.build_params(query, language, region)
        try:
            if self.legacy:
                return parse_xml_suggestions(self.http.get_bytes(self.BASE_URL, params=params))
            return parse_json_suggestions(self.http.get_json(self.BASE_URL, params=params))
        except (requests.RequestException, ValueError, ET.ParseError) as e:
            raise UpstreamFetchError(query, str(e)) from e

    def suggest(self, query: str, language: str, region: str) -> List[str]:
        try:
            return self.fetch(query, language, region)
        except UpstreamFetchError as e:
            logger.warning("%s (hl=%s, gl=%s)", e, language, region)
            return []
