from __future__ import annotations


class ChiefOfStaffError(Exception):
    """Base exception for this project."""


class StartupFailure(ChiefOfStaffError):
    """Raised when the bootstrap sequence does not reach READY."""

    def __init__(self, cause: BaseException):
        super().__init__(str(cause) or type(cause).__name__)
        self.cause = cause
        self.__cause__ = cause
