"""Error taxonomy for checklist operations.

Service functions raise these; ``app.main`` maps each one to an HTTP status
and JSON body. Anything not derived from ``ChecklistError`` is treated as an
internal failure.
"""


class ChecklistError(Exception):
    """Base class for errors the API reports to the caller."""

    status_code = 500
    message = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"message": self.message}


class ChecklistValidationError(ChecklistError):
    """A payload failed field rules.

    Attributes:
        errors: One ``{"field": ..., "message": ...}`` entry per offending
            field, in the order they were detected.
    """

    status_code = 400
    message = "Validation error"

    def __init__(self, errors: list[dict[str, str]]):
        super().__init__()
        self.errors = errors

    @property
    def fields(self) -> list[str]:
        return [e["field"] for e in self.errors]

    def to_dict(self) -> dict:
        return {"message": self.message, "errors": self.errors}


class DuplicateSubmission(ChecklistError):
    """A completed checklist already exists for this vehicle today."""

    status_code = 409
    message = "Duplicate submission not allowed"
    detail = (
        "A checklist for this vehicle has already been submitted today. "
        "Only one checklist per vehicle per day is allowed."
    )

    def __init__(self, vehicle_number: str):
        super().__init__()
        self.vehicle_number = vehicle_number

    def to_dict(self) -> dict:
        return {"message": self.message, "error": self.detail}


class ChecklistNotFound(ChecklistError):
    status_code = 404
    message = "Checklist not found"


class InvalidParameters(ChecklistError):
    """Query parameters for a filter or export were missing or malformed."""

    status_code = 400
    message = "Invalid parameters"
