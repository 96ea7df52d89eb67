from __future__ import annotations

from typing import Tuple

import streamlit as st

from .aggregator import Aggregator, build_aggregator, validate_request
from .api import handle_export
from .config import Settings
from .env import load_env, setup_logging
from .errors import ValidationError
from .export import results_filename, results_to_csv
from .locales import SUPPORTED_LANGUAGES, sorted_countries
from .log_sink import LogSink, build_log_sink


@st.cache_resource(show_spinner=False)
def _services() -> Tuple[Settings, LogSink, Aggregator]:
    load_env()
    settings = Settings.from_env()
    setup_logging(settings.log_level, settings.log_file)
    sink = build_log_sink(settings.log_dir)
    return settings, sink, build_aggregator(settings, log_sink=sink)


def _export_sidebar(settings: Settings, sink: LogSink) -> None:
    st.header("Search log")
    password = st.text_input("Export password", type="password")
    if not st.button("Prepare export"):
        return
    resp = handle_export({"pass": password}, sink, settings.export_password)
    if not resp.ok:
        st.error(resp.payload.get("error", "export failed"))  # type: ignore[union-attr]
    elif isinstance(resp.payload, bytes):
        filename = resp.headers["Content-Disposition"].split('filename="', 1)[1].rstrip('"')
        st.download_button("Download log CSV", data=resp.payload, file_name=filename, mime="text/csv")
    else:
        st.info(resp.payload.get("message", ""))


def main() -> None:
    st.set_page_config(page_title="Suggest Expander", layout="wide")
    st.title("Autocomplete keyword expander")
    settings, sink, aggregator = _services()

    with st.sidebar:
        _export_sidebar(settings, sink)

    countries = sorted_countries()
    languages = list(SUPPORTED_LANGUAGES.items())
    with st.form("search"):
        keyword = st.text_input("Keyword")
        cols = st.columns(2)
        country = cols[0].selectbox(
            "Country", countries,
            index=[c for c, _ in countries].index("ar"),
            format_func=lambda kv: kv[1],
        )[0]
        language = cols[1].selectbox(
            "Question set", languages,
            index=[c for c, _ in languages].index("es-419"),
            format_func=lambda kv: kv[1],
        )[0]
        run = st.form_submit_button("Search")

    if not run:
        st.info("Enter a keyword and click Search.")
        return
    try:
        validate_request(keyword, country, language)
    except ValidationError as e:
        st.warning(str(e))
        return

    with st.spinner("Collecting suggestions..."):
        result = aggregator.aggregate(keyword.strip(), country, language)

    if not result.results:
        st.warning("No suggestions found.")
        return

    st.success(f"{len(result.results)} unique suggestions")
    summary_cols = st.columns(max(1, len(result.summary)))
    for col, s in zip(summary_cols, result.summary):
        col.metric(s.category.value, s.count)
    st.dataframe([r.to_dict() for r in result.results], use_container_width=True, height=500)
    st.download_button(
        "Download CSV",
        data=results_to_csv(result.results),
        file_name=results_filename(keyword),
        mime="text/csv",
    )
