from typing import Any, Mapping, Optional


class StorageError(Exception):
    """Raised by repositories when persisted planner data cannot be read or written.

    Attributes:
        message: human-readable message
        operation: what was attempted ("load", "save_recipes", "save_plan")
        details: optional mapping with extra context (path, user id)
    """

    def __init__(self, message: str = "Storage failure", operation: Optional[str] = None,
                 details: Optional[Mapping[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.operation = operation
        self.details = details

    def to_dict(self) -> dict:
        payload: dict[str, Any] = {"message": self.message}
        if self.operation:
            payload["operation"] = self.operation
        if self.details:
            payload["details"] = dict(self.details)
        return payload

    def __str__(self) -> str:
        return self.message
