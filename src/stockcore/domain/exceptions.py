"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Bad input: a business rule or invariant was violated.

    ``violations`` lists every problem found when a request is checked
    as a whole; ``code`` is a machine-readable reason where one exists.
    """

    def __init__(
        self,
        message: str,
        violations: list[str] | None = None,
        code: str | None = None,
    ) -> None:
        super().__init__(message)
        self.violations = list(violations) if violations else [message]
        self.code = code


class NotFoundError(DomainException):
    """A requested material, batch or composite does not exist."""


class ConflictError(DomainException):
    """A write conflicts with the current stored state."""


class PartialFailure(DomainException):
    """Some component updates of a composite adjustment failed.

    Validation had already passed; ``outcomes`` holds the per-component
    detail so callers can retry only the failed components.
    """

    def __init__(self, message: str, outcomes: list) -> None:
        super().__init__(message)
        self.outcomes = outcomes

    @property
    def failed(self) -> list:
        return [o for o in self.outcomes if not o.succeeded]
