from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _find_env_file(filename: str, search_from: Optional[str]) -> Optional[Path]:
    start = Path(search_from or os.getcwd()).resolve()
    candidates = [start]
    for _ in range(3):
        if candidates[-1].parent == candidates[-1]:
            break
        candidates.append(candidates[-1].parent)
    for base in candidates:
        env_path = base / filename
        if env_path.exists():
            return env_path
    return None


def _flatten(prefix: str, obj: Any) -> Dict[str, str]:
    flat: Dict[str, str] = {}
    if isinstance(obj, dict):
        for k, v in obj.items():
            flat.update(_flatten(f"{prefix}{k}.", v))
    else:
        flat[prefix[:-1] if prefix.endswith(".") else prefix] = str(obj)
    return flat


def apply_secrets(secrets: Dict[str, Any]) -> None:
    """Copy upper-case entries into os.environ without overriding existing ones.

    Nested tables contribute both ``section.NAME`` and bare ``NAME``.
    """
    for k, v in _flatten("", secrets).items():
        if k.isupper() and k not in os.environ:
            os.environ[k] = v
        if "." in k:
            _, last = k.rsplit(".", 1)
            if last.isupper() and last not in os.environ:
                os.environ[last] = v


def load_env(filename: str = ".env", search_from: Optional[str] = None) -> None:
    """Load environment variables from .env and Streamlit secrets."""
    env_path = _find_env_file(filename, search_from)
    if env_path is not None:
        load_dotenv(dotenv_path=str(env_path), override=False)
        logger.debug("loaded %s", env_path)

    import streamlit as st

    # st.secrets raises when no secrets.toml exists
    try:
        secrets = st.secrets.to_dict() if st.secrets else {}
    except Exception as e:  # noqa: BLE001
        logger.debug("no streamlit secrets: %s", e)
        return
    apply_secrets(secrets)


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> None:
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format=LOG_FORMAT,
        handlers=handlers,
    )
    # per-request connection chatter
    logging.getLogger("urllib3").setLevel(logging.WARNING)
