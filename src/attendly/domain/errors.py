"""Error taxonomy surfaced to API callers."""


class AttendlyError(Exception):
    """Base class for errors reported to callers with a readable message."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class BadInputError(AttendlyError):
    """A required field is missing or malformed."""

    status_code = 400


class NotFoundError(AttendlyError):
    """A referenced class, profile, or invitation code does not exist."""

    status_code = 404


class ConflictError(AttendlyError):
    """The request conflicts with the current roster state."""

    status_code = 409


class AlreadyEnrolledError(ConflictError):
    """The member is already on the class roster."""

    def __init__(self, class_id: str, member_id: str) -> None:
        self.class_id = class_id
        self.member_id = member_id
        super().__init__("Already enrolled in this class")


class NotEnrolledError(ConflictError):
    """The member is not on the class roster."""

    def __init__(self, class_id: str, member_id: str) -> None:
        self.class_id = class_id
        self.member_id = member_id
        super().__init__("Student is not enrolled in this class")


class InternalError(AttendlyError):
    """The backend failed for an unexpected reason."""

    status_code = 500


class BackendError(InternalError):
    """A database call failed."""


class BackendPermissionError(BackendError):
    """The constrained connection was denied by row-level security."""
