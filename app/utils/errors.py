# app/utils/errors.py
from typing import List, Optional

from fastapi import status


class AgentConnectError(Exception):
    """Base error; rendered as {"error": message} with status_code"""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.message}


# Access control

class AuthError(AgentConnectError):
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class MissingCredential(AuthError):
    default_message = "No token provided"


class InvalidCredential(AuthError):
    default_message = "Invalid token"


class UnknownIdentity(AuthError):
    default_message = "User not found"


class UnauthorizedRole(AgentConnectError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Unauthorized role"


# Referential integrity

class ValidationError(AgentConnectError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"

    def __init__(self, message: Optional[str] = None, required: Optional[List[str]] = None):
        super().__init__(message)
        self.required = required

    def to_dict(self) -> dict:
        body = super().to_dict()
        if self.required:
            body["required"] = list(self.required)
        return body


class NotFoundError(AgentConnectError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AgentConnectError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Operation conflicts with existing records"


class InternalError(AgentConnectError):
    pass
