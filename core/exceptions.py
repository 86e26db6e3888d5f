# core/exceptions.py
from core.domain.identifiers import sorted_ids


class DomainError(Exception):
    """Base class for domain-level errors."""
    def __init__(self, message: str, *, code: str | None = None):
        super().__init__(message)
        self.code = code or self.__class__.__name__


class ValidationError(DomainError):
    """Raised when boundary data is invalid and cannot be coerced."""


class NotFoundError(DomainError):
    """Raised when a task is not found in the backing store."""


class BusinessRuleError(DomainError):
    """Raised when business rules are violated (e.g., self dependencies)."""


class CycleError(BusinessRuleError):
    """Raised when a dependency cycle prevents scheduling."""
    def __init__(self, task_ids, message: str | None = None):
        self.task_ids = tuple(sorted_ids(set(task_ids)))
        joined = ", ".join(str(task_id) for task_id in self.task_ids)
        super().__init__(
            message or f"Cannot schedule project: circular dependency detected between tasks {joined}.",
            code="SCHEDULE_CYCLE",
        )
