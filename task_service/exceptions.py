from typing import Dict


class TaskServiceError(Exception):
    """Base class for errors raised by the task service core"""


class ValidationError(TaskServiceError):
    """Input failed a required/length rule; carries one message per field"""

    def __init__(self, errors: Dict[str, str]):
        self.errors = dict(errors)
        super().__init__("; ".join(f"{field}: {msg}" for field, msg in self.errors.items()))


class NotFoundError(TaskServiceError):
    def __init__(self, task_id: int):
        self.task_id = task_id
        super().__init__(f"Task not found with id: {task_id}")


class StorageFault(TaskServiceError):
    """The underlying datastore failed; callers decide whether to retry"""
