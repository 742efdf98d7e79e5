from __future__ import annotations

import os
from pathlib import Path

import orjson
from platformdirs import user_data_dir

APP_NAME = "Prep Planner"
APP_AUTHOR = "PrepPlanner"
DATA_DIR = Path(os.getenv("PREP_PLANNER_DATA_DIR") or user_data_dir(APP_NAME, APP_AUTHOR))
DATABASE_FILE = DATA_DIR / os.getenv("PREP_PLANNER_DATABASE_FILE", "tasks.json")
SCHEMA_VERSION = 1
DEFAULT_DATABASE_CONTENT = {
    "tasks": [],
    "metadata": {"schema_version": SCHEMA_VERSION},
}


def ensure_data_dir(path: Path | None = None) -> None:
    target = path or DATABASE_FILE
    target.parent.mkdir(parents=True, exist_ok=True)
    if not target.exists():
        target.write_bytes(orjson.dumps(DEFAULT_DATABASE_CONTENT, option=orjson.OPT_INDENT_2) + b"\n")
