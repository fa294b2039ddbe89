# app/core/errors.py
"""
Domain error taxonomy for the hours engine and its HTTP surface.

Every error carries the HTTP status it is rendered with, so route handlers
can let them propagate and the application-level exception handler turns
them into ``{"error": "<message>"}`` responses.
"""


class HoursError(Exception):
    """Base class for all domain errors. Unclassified failures are internal."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


# === Validation (400) ===


class ValidationFailed(HoursError):
    status_code = 400


class InvalidPeriod(ValidationFailed):
    """Year or month outside the supported range."""


class InvalidYear(InvalidPeriod):
    pass


class InvalidShiftTiming(ValidationFailed):
    """Malformed HH:MM string or a shift whose timing breaks the template rules."""


class InvalidAbsence(ValidationFailed):
    pass


class InvalidNovelty(ValidationFailed):
    pass


# === Not found (404) ===


class NotFoundError(HoursError):
    status_code = 404


class EmployeeNotFound(NotFoundError):
    pass


class ShiftNotFound(NotFoundError):
    pass


class WorkConfigUnavailable(NotFoundError):
    pass


# === Access and conflicts ===


class ForbiddenError(HoursError):
    status_code = 403


class ConflictError(HoursError):
    status_code = 409
