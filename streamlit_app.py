"""Streamlit entrypoint (repo root).

Ensures `src/` is on sys.path so the app also runs from a plain checkout
(e.g. Streamlit Cloud) without `pip install -e .`.
"""
from __future__ import annotations

import os
import sys


def _ensure_src_on_path() -> None:
    src = os.path.join(os.path.dirname(__file__), "src")
    if os.path.isdir(src) and src not in sys.path:
        sys.path.insert(0, src)


_ensure_src_on_path()

from suggest_expander.streamlit_app import main  # noqa: E402

if __name__ == "__main__":
    # Streamlit executes this file as a script; calling main starts the app
    main()
