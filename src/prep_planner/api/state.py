from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from ..services import PlanningService, ServiceContext


@dataclass(slots=True)
class ApiState:
    _context: Optional[ServiceContext] = None
    _planning: Optional[PlanningService] = field(default=None, init=False)

    @property
    def context(self) -> ServiceContext:
        if self._context is None:
            self._context = ServiceContext()
        return self._context

    @property
    def planning(self) -> PlanningService:
        if self._planning is None:
            self._planning = PlanningService(self.context)
        return self._planning

    def bind(self, context: ServiceContext) -> None:
        self._context = context
        self._planning = PlanningService(context)


api_state = ApiState()
