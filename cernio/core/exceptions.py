"""
core/exceptions.py
------------------
Domain error hierarchy.

Services raise these; the API layer translates them into HTTP responses in a
single exception handler (see main.py), so routes never build error shapes
themselves.

  ConflictError      409  duplicate unique key (e.g. email already registered)
  UnauthorizedError  401  any credential, token or account-state failure
"""

from fastapi import status


class CernioError(Exception):
    status_code: int = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConflictError(CernioError):
    status_code = status.HTTP_409_CONFLICT


class UnauthorizedError(CernioError):
    status_code = status.HTTP_401_UNAUTHORIZED
