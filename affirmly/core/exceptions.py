"""Domain errors. Each carries the HTTP status it is rendered with."""


class AffirmlyError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AffirmlyError):
    status_code = 404


class NoAffirmationsAvailable(AffirmlyError):
    """The active affirmation set is empty; seed data is missing or misconfigured."""
    status_code = 503

    def __init__(self, message: str = "No active affirmations available"):
        super().__init__(message)


class ConstraintViolation(AffirmlyError):
    status_code = 409


class ValidationError(AffirmlyError):
    status_code = 400


class ResponseAlreadyRecorded(AffirmlyError):
    status_code = 409

    def __init__(self, message: str = "A response was already recorded for today"):
        super().__init__(message)


class InvalidCredentials(AffirmlyError):
    status_code = 401

    def __init__(self, message: str = "Invalid credentials"):
        super().__init__(message)
