"""Domain errors raised by the booking services.

Each error carries the HTTP status it is rendered with and a short kind
tag; the handlers in ``queuedesk.main`` turn them into JSON responses.
"""

from fastapi import status


class AppError(Exception):
    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind: str = "internal"

    def __init__(self, detail: str = "Internal server error"):
        super().__init__(detail)
        self.detail = detail


class UnauthorizedError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    kind = "unauthorized"

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(detail)


class InvalidInputError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    kind = "validation"


class ForbiddenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    kind = "forbidden"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"


class ConflictError(AppError):
    status_code = status.HTTP_409_CONFLICT
    kind = "conflict"


def require_owner(owner_id) -> int:
    """Reject calls that arrive without a resolved caller identity."""
    if owner_id is None:
        raise UnauthorizedError()
    return owner_id
