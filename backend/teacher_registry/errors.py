"""Exception types shared by the store, service and HTTP layers.

The repository raises `StoreError` subclasses. The service translates
them into `TeacherServiceError` subclasses, each carrying the HTTP status
the API maps it to.
"""


class StoreError(Exception):
    """A query or connectivity failure in the entity store."""
    def __init__(self, message="store operation failed"):
        self.message = message
        super().__init__(self.message)


class DuplicateRecordError(StoreError):
    """A uniqueness constraint rejected an insert or update."""
    def __init__(self, message="duplicate record"):
        super().__init__(message)


class RecordNotFoundError(StoreError):
    """An update or delete matched zero rows."""
    def __init__(self, message="record not found"):
        super().__init__(message)


class TeacherServiceError(Exception):
    """Base class for errors surfaced by `TeacherService`."""
    status_code = 500

    def __init__(self, message="teacher service error"):
        self.message = message
        super().__init__(self.message)


class TeacherValidationError(TeacherServiceError):
    status_code = 400

    def __init__(self, message="invalid teacher payload"):
        super().__init__(message)


class TeacherNotFoundError(TeacherServiceError):
    status_code = 404

    def __init__(self, message="teacher not found"):
        super().__init__(message)


class TeacherConflictError(TeacherServiceError):
    status_code = 409

    def __init__(self, message="email already registered"):
        super().__init__(message)


class InvalidCredentialsError(TeacherServiceError):
    """Wrong password and unknown email both raise this with one message."""
    status_code = 401

    def __init__(self):
        super().__init__("invalid email or password")


class TeacherStoreError(TeacherServiceError):
    status_code = 500

    def __init__(self, message="failed to access teacher records"):
        super().__init__(message)
