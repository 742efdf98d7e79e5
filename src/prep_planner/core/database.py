from __future__ import annotations

import logging
from copy import deepcopy
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import orjson

from .config import DATABASE_FILE, DEFAULT_DATABASE_CONTENT, ensure_data_dir
from .models import Slot, Task, existing_slot_pool

logger = logging.getLogger(__name__)


class JsonDatabase:
    """Task collection stored as a single JSON document."""

    def __init__(self, path: Optional[Path] = None) -> None:
        self._path = path or DATABASE_FILE
        ensure_data_dir(self._path)
        self._cache: Dict[str, List[dict] | dict] | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _load_raw(self) -> Dict[str, List[dict] | dict]:
        if self._cache is None:
            if not self._path.exists():
                ensure_data_dir(self._path)
            try:
                data = orjson.loads(self._path.read_bytes() or b"{}")
            except orjson.JSONDecodeError as exc:
                raise ValueError(f"Task database {self._path} is not valid JSON") from exc
            if not isinstance(data, dict):
                raise ValueError(
                    f"Task database {self._path} must hold a JSON object; use import for exported task lists"
                )
            self._cache = {
                "tasks": list(data.get("tasks", [])),
                "metadata": dict(data.get("metadata", deepcopy(DEFAULT_DATABASE_CONTENT["metadata"]))),
            }
            logger.debug("Loaded %s task(s) from %s", len(self._cache["tasks"]), self._path)
        return self._cache

    def _persist(self) -> None:
        if self._cache is None:
            return
        payload = orjson.dumps(self._cache, option=orjson.OPT_INDENT_2)
        self._path.write_bytes(payload + b"\n")

    def reload(self) -> None:
        self._cache = None

    def list_tasks(self) -> List[Task]:
        return [Task.from_dict(item) for item in self._load_raw()["tasks"]]

    def existing_slots(self) -> Tuple[Slot, ...]:
        return existing_slot_pool(self.list_tasks())

    def get_task(self, task_id: str) -> Optional[Task]:
        for task in self.list_tasks():
            if task.id == task_id:
                return task
        return None

    def add_task(self, task: Task) -> None:
        data = self._load_raw()
        items = data["tasks"]
        for idx, existing in enumerate(items):
            if existing["id"] == task.id:
                items[idx] = task.to_dict()
                break
        else:
            items.append(task.to_dict())
        self._persist()

    def replace_tasks(self, tasks: Iterable[Task]) -> None:
        data = self._load_raw()
        data["tasks"] = [task.to_dict() for task in tasks]
        self._persist()

    def delete_task(self, task_id: str) -> bool:
        data = self._load_raw()
        items = data["tasks"]
        for idx, item in enumerate(items):
            if item["id"] == task_id:
                del items[idx]
                self._persist()
                return True
        return False
