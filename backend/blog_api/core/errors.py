"""
Domain-specific exception hierarchy for the data-access layer.

All exceptions inherit from BlogApiError so the API layer can render
them with a single handler.  Each exception carries structured context
(entity name, id, caller) for logging.
"""

from __future__ import annotations

from blog_api.core.constants import UNAUTHORIZED_MESSAGE


class BlogApiError(Exception):
    """Base exception for all domain errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        *,
        entity: str | None = None,
        entity_id: int | None = None,
        user_id: int | None = None,
        details: dict | None = None,
    ) -> None:
        self.message = message
        self.entity = entity
        self.entity_id = entity_id
        self.user_id = user_id
        self.details = details or {}
        super().__init__(message)


class EntityNotFoundError(BlogApiError):
    """The addressed row does not exist."""

    status_code = 404

    def __init__(self, entity: str, entity_id: int, **kwargs) -> None:
        super().__init__(
            f"{entity} with ID {entity_id} does not exist in the database",
            entity=entity,
            entity_id=entity_id,
            **kwargs,
        )


class AccessDeniedError(BlogApiError):
    """The access policy rejected the operation for this caller."""

    status_code = 403

    def __init__(
        self,
        action: str,
        entity: str,
        entity_id: int | None = None,
        **kwargs,
    ) -> None:
        self.action = action
        target = entity if entity_id is None else f"{entity} {entity_id}"
        super().__init__(
            f"not allowed to {action} {target}",
            entity=entity,
            entity_id=entity_id,
            **kwargs,
        )


class ConstraintViolationError(BlogApiError):
    """A unique or foreign-key constraint rejected the write."""

    status_code = 409


class UnauthorizedError(BlogApiError):
    """The request carries no usable caller identity."""

    status_code = 403

    def __init__(self, **kwargs) -> None:
        super().__init__(UNAUTHORIZED_MESSAGE, **kwargs)
