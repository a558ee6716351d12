class PortalError(Exception):
    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class Unauthenticated(PortalError):
    status_code = 401
    default_message = "Unauthorized"


class Unauthorized(PortalError):
    # ownership and role failures answer 401 like missing sessions
    status_code = 401
    default_message = "Unauthorized"


class ValidationFailed(PortalError):
    status_code = 400
    default_message = "Invalid request"


class NotFound(PortalError):
    status_code = 404
    default_message = "Not found"


class ConflictError(PortalError):
    status_code = 409
    default_message = "Conflict"


class UsernameTaken(ConflictError):
    status_code = 400
    default_message = "Username already exists"


class ReportConflict(ConflictError):
    default_message = "Report was submitted concurrently, please retry"


class DeadlinePassed(PortalError):
    status_code = 400
    default_message = (
        "Submission deadline passed. Reports can only be submitted "
        "within 24 hours after the report date."
    )


class NoTasksToSubmit(PortalError):
    status_code = 400
    default_message = "No tasks to submit for this date"
