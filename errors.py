# errors.py


class StudioError(Exception):
    """Base class for errors raised by the project store."""


class LocalStoreError(StudioError):
    """Local store contents could not be read or written."""


class CloudStoreError(StudioError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


class ProjectValidationError(StudioError):
    status_code = 400


class DuplicateProjectError(StudioError):
    status_code = 400


class ProjectNotFoundError(StudioError):
    status_code = 404
