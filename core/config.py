from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import streamlit as st

CONFIG_FILE_NAME = "settings.json"
DB_FILE_NAME = "sales.db"
ENV_DATA_DIR = "SALES_TRACKER_DATA_DIR"
SESSION_DATA_DIR = "sales_tracker_data_dir"
SESSION_FLASH = "flash_message"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    db_path: Path
    export_dir: Path
    currency: str = "LKR"
    business_name: str = "My Clothing Business"


def _default_data_dir() -> Path:
    return Path.home() / ".sales_tracker"


def _load_persisted_settings(data_dir: Path) -> dict:
    cfg = data_dir / CONFIG_FILE_NAME
    if not cfg.exists():
        return {}
    try:
        return json.loads(cfg.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Ignoring unreadable settings file {cfg}: {e}")
        return {}


def persist_data_dir(data_dir_str: str, *, default_dir: Optional[Path] = None) -> Path:
    """
    Remember a data directory across restarts.

    settings.json is written into the default folder, which is where
    load_settings() looks for it.
    """
    data_dir = Path(data_dir_str).expanduser().resolve()
    data_dir.mkdir(parents=True, exist_ok=True)

    home = default_dir or _default_data_dir()
    home.mkdir(parents=True, exist_ok=True)
    cfg = home / CONFIG_FILE_NAME
    payload = {"data_dir": str(data_dir)}
    cfg.write_text(json.dumps(payload, indent=2), encoding="utf-8")
    logger.info(f"Data directory set to {data_dir}")
    return data_dir


def load_settings(
    *,
    session_dir: Optional[str] = None,
    env: Optional[dict] = None,
    default_dir: Optional[Path] = None,
) -> Settings:
    # Priority order:
    # 1) Session state (set via Data Management page)
    # 2) Environment variable
    # 3) Persisted settings in default folder
    # 4) Default folder
    env = os.environ if env is None else env
    default_dir = default_dir or _default_data_dir()

    if session_dir:
        data_dir = Path(session_dir).expanduser().resolve()
    elif env.get(ENV_DATA_DIR):
        data_dir = Path(env[ENV_DATA_DIR]).expanduser().resolve()
    else:
        persisted = _load_persisted_settings(default_dir)
        data_dir = Path(persisted.get("data_dir", default_dir)).expanduser().resolve()

    data_dir.mkdir(parents=True, exist_ok=True)
    return Settings(
        data_dir=data_dir,
        db_path=data_dir / DB_FILE_NAME,
        export_dir=data_dir / "reports",
    )


@st.cache_resource
def get_settings() -> Settings:
    return load_settings(session_dir=st.session_state.get(SESSION_DATA_DIR))
