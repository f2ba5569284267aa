"""HTTP error envelope for use case errors"""

from fastapi import status
from libs.result import Error
from src.app.errors import ErrorCode, NOT_FOUND_CODES, CONFLICT_CODES


class ClientError(Exception):
    """
    Raised by routes to return a use case error to the client

    Rendered as {"error": {"code", "message", "details"}}.
    """

    def __init__(self, error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        super().__init__(error.message)
        self.error = error
        self.status_code = status_code

    def to_dict(self) -> dict:
        body = {"code": self.error.code, "message": self.error.message}
        if self.error.details:
            body["details"] = self.error.details
        return {"error": body}


def status_code_for(error: Error) -> int:
    if error.code in NOT_FOUND_CODES:
        return status.HTTP_404_NOT_FOUND
    if error.code == ErrorCode.UNAUTHORIZED:
        return status.HTTP_401_UNAUTHORIZED
    if error.code == ErrorCode.FORBIDDEN:
        return status.HTTP_403_FORBIDDEN
    if error.code in CONFLICT_CODES:
        return status.HTTP_409_CONFLICT
    if error.code == ErrorCode.DATABASE_ERROR:
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_400_BAD_REQUEST


def raise_for_error(error: Error) -> None:
    raise ClientError(error, status_code=status_code_for(error))
