from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Optional

from ..config import AppSettings, get_settings
from ..core import JsonDatabase
from ..data import SlotTimeline


@dataclass(slots=True)
class ServiceContext:
    """Aggregate root for services to share settings, storage, and the timeline."""

    settings: AppSettings = field(default_factory=get_settings)
    database: Optional[JsonDatabase] = None
    clock: Callable[[], datetime] = datetime.now
    timeline: SlotTimeline = field(init=False)

    def __post_init__(self) -> None:
        if self.database is None:
            self.database = JsonDatabase(self.settings.storage.database_file)
        self.timeline = SlotTimeline()

    def now(self) -> datetime:
        return self.clock()

    def refresh_timeline(self) -> SlotTimeline:
        self.timeline.hydrate(self.database.list_tasks())
        return self.timeline
