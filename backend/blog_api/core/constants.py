"""Shared constants and enums used across the application."""

from enum import StrEnum


class Action(StrEnum):
    """Operations an access policy decides on."""

    CREATE = "create"
    READ = "read"
    UPDATE = "update"
    DELETE = "delete"


class SortOrder(StrEnum):
    """Sort direction accepted by list endpoints."""

    ASC = "asc"
    DESC = "desc"


UNAUTHORIZED_MESSAGE = "unauthorized"

# Paths reachable without a caller identity
PUBLIC_PATHS = ("/health", "/docs", "/redoc", "/openapi.json")

# Largest id an Integer column holds on every supported database
MAX_ID = 2**31 - 1
