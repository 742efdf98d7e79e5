from __future__ import annotations


class TaskValidationError(ValueError):
    """Raised when task input is rejected before planning."""


class TaskNotFoundError(KeyError):
    def __init__(self, task_id: str) -> None:
        super().__init__(task_id)
        self.task_id = task_id

    def __str__(self) -> str:
        return f"Task '{self.task_id}' does not exist."
