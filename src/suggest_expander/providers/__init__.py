from __future__ import annotations

from .google_suggest import GoogleSuggestProvider, parse_json_suggestions, parse_xml_suggestions

__all__ = ["GoogleSuggestProvider", "parse_json_suggestions", "parse_xml_suggestions"]
