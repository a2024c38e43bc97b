"""Custom exception hierarchy for VerseGraph.

Business-logic exceptions that map cleanly to HTTP status codes.
Routes raise these instead of using bare HTTPException everywhere.

Hierarchy:
    VerseGraphError (base)
    +-- NotFoundError           -> 404
    +-- ValidationError         -> 422
    +-- ConflictError           -> 409
    +-- GraphGenerationError    -> 500
    +-- ServiceUnavailableError -> 503
    +-- AuthenticationError     -> 401
    +-- ForbiddenError          -> 403
"""

from __future__ import annotations


class VerseGraphError(Exception):
    """Base exception for all VerseGraph business-logic errors."""

    status_code: int = 500
    detail: str = "Internal server error"

    def __init__(self, detail: str | None = None, *, context: dict[str, object] | None = None):
        self.detail = detail or self.__class__.detail
        self.context = context or {}
        super().__init__(self.detail)


class NotFoundError(VerseGraphError):
    """Resource not found (404)."""

    status_code = 404
    detail = "Resource not found"


class ValidationError(VerseGraphError):
    """Input validation failed (422)."""

    status_code = 422
    detail = "Validation error"


class ConflictError(VerseGraphError):
    """Operation conflicts with current state (409)."""

    status_code = 409
    detail = "Resource conflict"


class GraphGenerationError(VerseGraphError):
    """Knowledge graph generation failed as a whole (500)."""

    status_code = 500
    detail = "Failed to generate graph"


class ServiceUnavailableError(VerseGraphError):
    """External service unavailable (503)."""

    status_code = 503
    detail = "Service unavailable"


class AuthenticationError(VerseGraphError):
    """Missing or invalid authentication (401)."""

    status_code = 401
    detail = "Authentication required"


class ForbiddenError(VerseGraphError):
    """Insufficient permissions (403)."""

    status_code = 403
    detail = "Forbidden"
