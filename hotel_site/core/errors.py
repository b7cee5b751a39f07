"""
Failure classes shared by the stores, controllers and routes.

Every one of them is recoverable: controllers turn them into field errors or
notices, routes turn them into HTTP responses.
"""

GENERIC_ERROR_MESSAGE = "Terjadi kesalahan, silakan coba lagi"


class SiteError(Exception):
    def __init__(self, message: str | None = None):
        self.message = message or GENERIC_ERROR_MESSAGE
        super().__init__(self.message)


class ValidationFailed(SiteError):
    """Local form validation failed. Never reaches the backend."""

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__(next(iter(errors.values()), None))


class UploadRejected(SiteError):
    """A file was refused before upload (type, size or unreadable image)."""

    def __init__(self, filename: str, message: str):
        self.filename = filename
        super().__init__(message)


class BackendError(SiteError):
    """The backend refused or failed an operation; message is passed through verbatim."""


class RecordNotFound(BackendError):
    def __init__(self, table: str, record_id):
        self.table = table
        self.record_id = record_id
        super().__init__(f"Data tidak ditemukan ({table}: {record_id})")


class BackendTimeout(BackendError):
    def __init__(self, seconds: float):
        super().__init__(f"Server tidak merespons dalam {seconds:g} detik")


class AuthorizationError(SiteError):
    """No session (401) or a session without the admin role (403)."""

    def __init__(self, message: str, status_code: int = 401):
        self.status_code = status_code
        super().__init__(message)
