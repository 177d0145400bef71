# icebreaker/services/errors.py
from fastapi import status


class IcebreakerError(Exception):
    """Base class for errors surfaced to the caller."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(IcebreakerError):
    status_code = status.HTTP_404_NOT_FOUND


class InvalidRoleError(IcebreakerError):
    status_code = status.HTTP_400_BAD_REQUEST


class PreconditionFailedError(IcebreakerError):
    status_code = status.HTTP_409_CONFLICT


class AnswerValidationError(IcebreakerError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY


class ConflictError(IcebreakerError):
    status_code = status.HTTP_409_CONFLICT
